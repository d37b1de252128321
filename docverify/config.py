from __future__ import annotations
import os
from typing import Optional
from pydantic import BaseModel

class Settings(BaseModel):
    db_url: str = os.getenv("DB_URL", "sqlite:///./data/docverify.db")
    verify_threshold: int = int(os.getenv("VERIFY_THRESHOLD", "80"))
    allowed_origins: str = os.getenv("ALLOWED_ORIGINS", "http://localhost:5173")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    admin_token: Optional[str] = os.getenv("ADMIN_TOKEN") or None
    record_attempts: bool = os.getenv("RECORD_ATTEMPTS", "true").lower() == "true"
settings = Settings()
