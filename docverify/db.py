from __future__ import annotations
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from .config import settings

# sqlite: ensure directory exists
import os
if settings.db_url.startswith("sqlite:///./data/"):
    os.makedirs("data", exist_ok=True)

def make_engine(url: str):
    if url in ("sqlite://", "sqlite:///:memory:"):
        # one shared connection, otherwise every session sees an empty db
        return create_engine(url, future=True, echo=False,
                             connect_args={"check_same_thread": False}, poolclass=StaticPool)
    return create_engine(url, future=True, echo=False)

engine = make_engine(settings.db_url)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
