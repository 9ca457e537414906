from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from fiscal_ledger.api.deps import db, current_user, http_error, store_for
from fiscal_ledger.core.errors import LedgerError
from fiscal_ledger.schemas.dashboard import DashboardOut
from fiscal_ledger.services.dashboard import summarize

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardOut)
def dashboard(s: Session = Depends(db), u=Depends(current_user)):
    try:
        return summarize(store_for(s))
    except LedgerError as e:
        raise http_error(e)
