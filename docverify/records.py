from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, Optional, Protocol

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from .db_models import Employee, EmployeeStatus, VerificationAttempt
from .errors import RecordLookupError

@dataclass(frozen=True)
class AuthoritativeRecord:
    employee_id: str
    first_name: str
    last_name: str
    email: str
    position: str
    status: str
    phone: Optional[str] = None
    passport_number: Optional[str] = None
    department_name: Optional[str] = None
    hire_date: Optional[date] = None
    avatar: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

class RecordLookup(Protocol):
    def find_by_employee_id(self, employee_id: str) -> Optional[AuthoritativeRecord]: ...

def record_from_employee(emp: Employee) -> AuthoritativeRecord:
    dept = emp.department_ref.name if emp.department_ref is not None else None
    status = emp.status.value if isinstance(emp.status, EmployeeStatus) else str(emp.status)
    return AuthoritativeRecord(
        employee_id=emp.employee_id,
        first_name=emp.first_name,
        last_name=emp.last_name,
        email=emp.email,
        position=emp.position,
        status=status,
        phone=emp.phone,
        passport_number=emp.passport_number,
        department_name=dept or emp.department,
        hire_date=emp.hire_date,
        avatar=emp.avatar,
    )

class SqlRecordLookup:
    def __init__(self, db: Session):
        self.db = db

    def find_by_employee_id(self, employee_id: str) -> Optional[AuthoritativeRecord]:
        try:
            emp = (
                self.db.query(Employee)
                .options(joinedload(Employee.department_ref))
                .filter(Employee.employee_id == employee_id)
                .first()
            )
        except SQLAlchemyError as exc:
            raise RecordLookupError(f"employee lookup failed: {exc.__class__.__name__}") from exc
        if emp is None:
            return None
        return record_from_employee(emp)

class StaticRecordLookup:
    """In-memory lookup keyed by employee_id (scripts, tests)."""

    def __init__(self, records: Iterable[AuthoritativeRecord] = ()):
        self.records: Dict[str, AuthoritativeRecord] = {r.employee_id: r for r in records}
        self.calls = 0

    def find_by_employee_id(self, employee_id: str) -> Optional[AuthoritativeRecord]:
        self.calls += 1
        return self.records.get(employee_id)

def employee_counts(db: Session) -> Dict[str, int]:
    try:
        total = db.scalar(select(func.count(Employee.id))) or 0
        active = db.scalar(select(func.count(Employee.id)).where(Employee.status == EmployeeStatus.ACTIVE)) or 0
        attempts = db.scalar(select(func.count(VerificationAttempt.id))) or 0
    except SQLAlchemyError as exc:
        raise RecordLookupError(f"stats query failed: {exc.__class__.__name__}") from exc
    return {
        "totalEmployees": total,
        "activeEmployees": active,
        "inactiveEmployees": total - active,
        "attempts": attempts,
    }
