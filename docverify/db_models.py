from __future__ import annotations
import enum
from datetime import datetime
from sqlalchemy import JSON, Boolean, Column, Date, DateTime, Enum, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()

class EmployeeStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    ON_LEAVE = "ON_LEAVE"
    TERMINATED = "TERMINATED"

class Department(Base):
    __tablename__ = "departments"
    id = Column(Integer, primary_key=True)
    name = Column(String(128), unique=True, nullable=False)
    description = Column(Text)
    employees = relationship("Employee", back_populates="department_ref")

class Employee(Base):
    __tablename__ = "employees"
    id = Column(Integer, primary_key=True)
    employee_id = Column(String(64), unique=True, nullable=False, index=True)
    first_name = Column(String(128), nullable=False)
    last_name = Column(String(128), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(64))
    passport_number = Column(String(64))
    position = Column(String(128), nullable=False)
    department = Column(String(128))  # free-text fallback when department_id is unset
    department_id = Column(Integer, ForeignKey("departments.id"), index=True)
    hire_date = Column(Date)
    status = Column(Enum(EmployeeStatus, native_enum=False, length=32), default=EmployeeStatus.ACTIVE, nullable=False)
    avatar = Column(String(512))
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    department_ref = relationship("Department", back_populates="employees")

class VerificationAttempt(Base):
    __tablename__ = "verification_attempts"
    id = Column(Integer, primary_key=True)
    ts = Column(DateTime, default=datetime.utcnow, nullable=False)
    mode = Column(String(16), nullable=False) # claim|document
    employee_hint = Column(String(64))
    found = Column(Boolean, nullable=False, default=False)
    verified = Column(Boolean, nullable=False, default=False)
    match_percentage = Column(Integer)
    reason = Column(String(64))
    latency_ms = Column(Float)
    match_details = Column(JSON)
