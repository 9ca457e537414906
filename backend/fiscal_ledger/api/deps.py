from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from fiscal_ledger.core.config import settings
from fiscal_ledger.core.errors import InvalidAmount, InvalidDate, LedgerError, StorageFailure, Unauthorized
from fiscal_ledger.core.security import decode_token
from fiscal_ledger.db.session import SessionLocal
from fiscal_ledger.services.calendar import MonthLengthTable
from fiscal_ledger.services.roles import UserRoleOracle
from fiscal_ledger.services.store import SqlDocumentStore

bearer = HTTPBearer()

_STATUS = {
    InvalidAmount: 400,
    InvalidDate: 400,
    Unauthorized: 403,
    StorageFailure: 503,
}

def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()

def current_user(creds: HTTPAuthorizationCredentials = Depends(bearer)):
    try:
        return decode_token(creds.credentials)
    except Exception:
        raise HTTPException(status_code=401, detail="invalid_token")

def require_admin(u=Depends(current_user)):
    if u.get("role") != "admin":
        raise HTTPException(status_code=403, detail="admin_only")
    return u

def store_for(s: Session) -> SqlDocumentStore:
    return SqlDocumentStore(s)

def roles_for(s: Session) -> UserRoleOracle:
    return UserRoleOracle(s)

def month_table() -> MonthLengthTable:
    return MonthLengthTable(settings.month_lengths)

def http_error(e: LedgerError) -> HTTPException:
    return HTTPException(status_code=_STATUS.get(type(e), 400), detail=e.code)
