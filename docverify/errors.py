from __future__ import annotations
from typing import Optional

class VerificationError(Exception):
    status_code: int = 500
    public_message: str = "Internal Server Error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.public_message)
        self.message = message or self.public_message

class ValidationError(VerificationError):
    """Required input missing or malformed (client error)."""
    status_code = 400

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.public_message = message

class RecordLookupError(VerificationError):
    """The record store could not be read. Never used for "not found"."""
    status_code = 503
    public_message = "Verification temporarily unavailable"
