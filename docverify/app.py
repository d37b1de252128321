from __future__ import annotations
import time
from typing import Optional
from fastapi import Depends, FastAPI, Header, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from .config import settings
from .db import get_db, SessionLocal
from .db_models import Base, VerificationAttempt
from .errors import RecordLookupError, ValidationError, VerificationError
from .logger import log_middleware, logger
from .matcher import Matcher, MatchResult
from .records import SqlRecordLookup, employee_counts
from .schemas import DocumentResponse, EmployeeInfoOut, VerifyRequest, VerifyResponse

app = FastAPI()

# DB init (SQLite)
Base.metadata.create_all(bind=SessionLocal.kw['bind'])

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.allowed_origins],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)

# Logging
app.middleware("http")(log_middleware)

@app.exception_handler(VerificationError)
async def verification_error_handler(request: Request, exc: VerificationError):
    error = {"message": exc.public_message}
    if isinstance(exc, ValidationError):
        error["field"] = exc.field
    if isinstance(exc, RecordLookupError):
        # detail stays server-side
        logger.error(f"lookup failed on {request.url.path}: {exc.message}")
    request.state.decision = exc.__class__.__name__
    return JSONResponse(status_code=exc.status_code, content={"success": False, "error": error})

def get_matcher(db=Depends(get_db)) -> Matcher:
    return Matcher(SqlRecordLookup(db), threshold=settings.verify_threshold)

def decision_reason(result: MatchResult) -> str:
    if not result.found:
        return "NOT_FOUND"
    if not result.status_ok:
        return f"STATUS_{result.status}"
    return "ACCEPT" if result.verified else "LOW_MATCH"

def record_attempt(db, mode: str, hint: Optional[str], result: MatchResult, t0: float):
    if not settings.record_attempts:
        return
    latency_ms = (time.perf_counter() - t0) * 1000
    try:
        db.add(VerificationAttempt(
            mode=mode,
            employee_hint=hint,
            found=result.found,
            verified=result.verified,
            match_percentage=result.match_percentage if result.found else None,
            reason=decision_reason(result)[:64],
            latency_ms=float(latency_ms),
            match_details=result.match_details or None,
        ))
        db.commit()
    except SQLAlchemyError as exc:
        # the verdict is already computed; a lost audit row does not change it
        db.rollback()
        logger.error(f"attempt not recorded ({mode} {hint}): {exc.__class__.__name__}")

@app.get("/healthz")
def healthz():
    return {"ok": True}

@app.post("/verification/verify", response_model=VerifyResponse)
def verify(body: VerifyRequest, request: Request, db=Depends(get_db), matcher: Matcher = Depends(get_matcher)):
    t0 = time.perf_counter()
    result = matcher.verify(body.to_claim())
    request.state.decision = decision_reason(result)
    record_attempt(db, "claim", body.employeeId, result, t0)

    if not result.found:
        return VerifyResponse(success=False, verified=False, message=result.message, matchDetails=None)
    if not result.status_ok:
        details = dict(result.match_details)
        details["status"] = result.status
        return VerifyResponse(success=True, verified=False, message=result.message, matchDetails=details)
    return VerifyResponse(
        success=True,
        verified=result.verified,
        matchPercentage=result.match_percentage,
        matchCount=result.match_count,
        totalProvided=result.total_provided,
        message=result.message,
        matchDetails=result.match_details,
        employeeInfo=EmployeeInfoOut.from_info(result.employee_info) if result.employee_info else None,
    )

@app.get("/verification/document/{document_id}", response_model=DocumentResponse, response_model_exclude_none=True)
def verify_document(document_id: str, request: Request, db=Depends(get_db), matcher: Matcher = Depends(get_matcher)):
    t0 = time.perf_counter()
    result = matcher.verify_by_document_id(document_id)
    request.state.decision = decision_reason(result)
    record_attempt(db, "document", document_id, result, t0)

    if not result.found:
        return DocumentResponse(success=False, verified=False, message="Document ID not found")
    if not result.status_ok:
        rec = result.record
        return DocumentResponse(
            success=True, verified=False, message=f"Employee is {result.status}",
            employeeInfo=EmployeeInfoOut(name=rec.full_name, status=rec.status),
        )
    return DocumentResponse(
        success=True,
        verified=result.verified,
        message=result.message,
        employeeInfo=EmployeeInfoOut.from_info(result.employee_info, with_id=True) if result.employee_info else None,
    )

@app.get("/verification/stats")
def stats(x_admin_token: Optional[str] = Header(None), db=Depends(get_db)):
    if not settings.admin_token or x_admin_token != settings.admin_token:
        raise HTTPException(status_code=403, detail="Admin token required")
    data = employee_counts(db)
    data["verificationEnabled"] = True
    return {"success": True, "data": data}
