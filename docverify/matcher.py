from __future__ import annotations
import json
import re
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, List, Optional, Tuple

from .errors import ValidationError
from .logger import logger
from .records import AuthoritativeRecord, RecordLookup

VERIFY_THRESHOLD = 80
ACTIVE = "ACTIVE"
MIN_PHONE_DIGITS = 7

MSG_NOT_FOUND = "Employee not found"
MSG_VERIFIED = "Document verified successfully"

_NON_DIGIT = re.compile(r"\D")

@dataclass
class ClaimedIdentity:
    employee_id: Optional[str]
    full_name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    passport_number: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None

    def provided(self) -> List[Tuple[str, str]]:
        """(wire name, value) for every corroborating field that was supplied, in check order."""
        out = []
        for name, attr in FIELD_ORDER:
            value = getattr(self, attr)
            if value:  # None and "" are both absent
                out.append((name, value))
        return out

@dataclass
class EmployeeInfo:
    name: str
    status: str
    employee_id: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None
    hire_date: Optional[date] = None
    avatar: Optional[str] = None

    @classmethod
    def from_record(cls, rec: AuthoritativeRecord) -> "EmployeeInfo":
        return cls(
            name=rec.full_name,
            status=rec.status,
            employee_id=rec.employee_id,
            position=rec.position,
            department=rec.department_name,
            hire_date=rec.hire_date,
            avatar=rec.avatar,
        )

@dataclass
class MatchResult:
    found: bool
    verified: bool
    message: str
    status_ok: bool = False
    status: Optional[str] = None
    match_details: Dict[str, bool] = field(default_factory=dict)
    match_count: int = 0
    total_provided: int = 0
    match_percentage: int = 0
    employee_info: Optional[EmployeeInfo] = None
    record: Optional[AuthoritativeRecord] = field(default=None, repr=False)

def _norm(s: Optional[str]) -> str:
    return (s or "").strip().lower()

def _exact(claimed: str, actual: Optional[str]) -> bool:
    a = _norm(actual)
    return bool(a) and _norm(claimed) == a

def _substring_either_way(claimed: str, actual: Optional[str]) -> bool:
    c, a = _norm(claimed), _norm(actual)
    if not c or not a:
        return False
    return a in c or c in a

def _digits(s: Optional[str]) -> str:
    return _NON_DIGIT.sub("", s or "")

def match_full_name(claimed: str, rec: AuthoritativeRecord) -> bool:
    return _exact(claimed, rec.full_name)

def match_first_name(claimed: str, rec: AuthoritativeRecord) -> bool:
    return _exact(claimed, rec.first_name)

def match_last_name(claimed: str, rec: AuthoritativeRecord) -> bool:
    return _exact(claimed, rec.last_name)

def match_passport(claimed: str, rec: AuthoritativeRecord) -> bool:
    return _exact(claimed, rec.passport_number)

def match_email(claimed: str, rec: AuthoritativeRecord) -> bool:
    return _exact(claimed, rec.email)

def match_phone(claimed: str, rec: AuthoritativeRecord) -> bool:
    c, a = _digits(claimed), _digits(rec.phone)
    if not c or not a:
        return False
    if c == a:
        return True
    # tolerate a country code on one side only
    short, long_ = sorted((c, a), key=len)
    return len(short) >= MIN_PHONE_DIGITS and long_.endswith(short)

def match_position(claimed: str, rec: AuthoritativeRecord) -> bool:
    return _substring_either_way(claimed, rec.position)

def match_department(claimed: str, rec: AuthoritativeRecord) -> bool:
    return _substring_either_way(claimed, rec.department_name)

# wire name -> ClaimedIdentity attribute
FIELD_ORDER: List[Tuple[str, str]] = [
    ("fullName", "full_name"),
    ("firstName", "first_name"),
    ("lastName", "last_name"),
    ("passportNumber", "passport_number"),
    ("email", "email"),
    ("phone", "phone"),
    ("position", "position"),
    ("department", "department"),
]

COMPARATORS: Dict[str, Callable[[str, AuthoritativeRecord], bool]] = {
    "fullName": match_full_name,
    "firstName": match_first_name,
    "lastName": match_last_name,
    "passportNumber": match_passport,
    "email": match_email,
    "phone": match_phone,
    "position": match_position,
    "department": match_department,
}

def percentage(matched: int, total: int) -> int:
    """round(matched / total * 100), halves rounded up."""
    return (200 * matched + total) // (2 * total)

class Matcher:
    def __init__(self, lookup: RecordLookup, threshold: int = VERIFY_THRESHOLD):
        self.lookup = lookup
        self.threshold = threshold

    def verify(self, claimed: ClaimedIdentity) -> MatchResult:
        employee_id = (claimed.employee_id or "").strip()
        if not employee_id:
            raise ValidationError("employeeId", "Employee ID is required")

        rec = self.lookup.find_by_employee_id(employee_id)
        if rec is None:
            self._log(employee_id, "NOT_FOUND")
            return MatchResult(found=False, verified=False, message=MSG_NOT_FOUND)

        details: Dict[str, bool] = {"employeeId": True}
        match_count = 1
        total_provided = 1

        if rec.status != ACTIVE:
            self._log(employee_id, "INACTIVE", status=rec.status)
            return MatchResult(
                found=True, verified=False, message=f"Employee status: {rec.status}",
                status_ok=False, status=rec.status, match_details=details,
                match_count=match_count, total_provided=total_provided,
                match_percentage=percentage(match_count, total_provided), record=rec,
            )

        for name, value in claimed.provided():
            ok = COMPARATORS[name](value, rec)
            details[name] = ok
            total_provided += 1
            if ok:
                match_count += 1

        pct = percentage(match_count, total_provided)
        verified = pct >= self.threshold
        if verified:
            message = MSG_VERIFIED
        else:
            message = f"Verification failed. Only {match_count} out of {total_provided} fields matched."
        self._log(employee_id, "ACCEPT" if verified else "LOW_MATCH", pct=pct, fields=total_provided)
        return MatchResult(
            found=True, verified=verified, message=message,
            status_ok=True, status=rec.status, match_details=details,
            match_count=match_count, total_provided=total_provided, match_percentage=pct,
            employee_info=EmployeeInfo.from_record(rec) if verified else None, record=rec,
        )

    def verify_by_document_id(self, document_id: Optional[str]) -> MatchResult:
        if not (document_id or "").strip():
            raise ValidationError("documentId", "Document ID is required")
        # same code path as verify with no corroborating fields
        return self.verify(ClaimedIdentity(employee_id=document_id))

    def _log(self, employee_id: str, decision: str, **extra):
        record = {"event": "verify", "employee_id": employee_id, "decision": decision}
        record.update(extra)
        logger.info(json.dumps(record))
