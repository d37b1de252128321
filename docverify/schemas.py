from __future__ import annotations
from datetime import date
from typing import Dict, Optional, Union
from pydantic import BaseModel

from .matcher import ClaimedIdentity, EmployeeInfo

class VerifyRequest(BaseModel):
    employeeId: Optional[str] = None
    fullName: Optional[str] = None
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    passportNumber: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None

    def to_claim(self) -> ClaimedIdentity:
        return ClaimedIdentity(
            employee_id=self.employeeId,
            full_name=self.fullName,
            first_name=self.firstName,
            last_name=self.lastName,
            passport_number=self.passportNumber,
            email=self.email,
            phone=self.phone,
            position=self.position,
            department=self.department,
        )

class EmployeeInfoOut(BaseModel):
    employeeId: Optional[str] = None
    name: str
    position: Optional[str] = None
    department: Optional[str] = None
    hireDate: Optional[date] = None
    status: str
    avatar: Optional[str] = None

    @classmethod
    def from_info(cls, info: EmployeeInfo, with_id: bool = False) -> "EmployeeInfoOut":
        return cls(
            employeeId=info.employee_id if with_id else None,
            name=info.name,
            position=info.position,
            department=info.department,
            hireDate=info.hire_date,
            status=info.status,
            avatar=info.avatar,
        )

class VerifyResponse(BaseModel):
    success: bool
    verified: bool
    matchPercentage: Optional[int] = None
    matchCount: Optional[int] = None
    totalProvided: Optional[int] = None
    message: str
    matchDetails: Optional[Dict[str, Union[bool, str]]] = None
    employeeInfo: Optional[EmployeeInfoOut] = None

class DocumentResponse(BaseModel):
    success: bool
    verified: bool
    message: str
    employeeInfo: Optional[EmployeeInfoOut] = None
