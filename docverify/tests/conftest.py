# docverify/tests/conftest.py
import os
from datetime import date
import pytest

# in-memory db shared by the app and the fixtures; must be set before docverify.config is imported
os.environ.setdefault("DB_URL", "sqlite://")
os.environ.setdefault("ADMIN_TOKEN", "test-admin-token")

from docverify.records import AuthoritativeRecord

@pytest.fixture
def jane() -> AuthoritativeRecord:
    return AuthoritativeRecord(
        employee_id="EMP001",
        first_name="Jane",
        last_name="Doe",
        email="jane.doe@tripgo.example",
        phone="+1-555-0101",
        passport_number="X1234567",
        position="Senior Software Engineer",
        department_name="Engineering",
        status="ACTIVE",
        hire_date=date(2021, 3, 15),
    )

@pytest.fixture
def db():
    from docverify.db import SessionLocal
    from docverify.db_models import Base
    engine = SessionLocal.kw["bind"]
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        with engine.begin() as conn:
            for table in reversed(Base.metadata.sorted_tables):
                conn.execute(table.delete())

@pytest.fixture
def seeded(db):
    from docverify.db_models import Department, Employee, EmployeeStatus
    eng = Department(name="Engineering", description="Product engineering")
    db.add(eng)
    db.flush()
    db.add_all([
        Employee(employee_id="EMP001", first_name="Jane", last_name="Doe",
                 email="jane.doe@tripgo.example", phone="+1-555-0101", passport_number="X1234567",
                 position="Senior Software Engineer", department_id=eng.id,
                 hire_date=date(2021, 3, 15), status=EmployeeStatus.ACTIVE),
        Employee(employee_id="EMP002", first_name="Omar", last_name="Haddad",
                 email="omar@tripgo.example", position="Tour Guide", department="Operations",
                 hire_date=date(2019, 6, 1), status=EmployeeStatus.TERMINATED),
    ])
    db.commit()
    return db
