from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from fiscal_ledger.api.deps import db, current_user, http_error, roles_for, store_for
from fiscal_ledger.core.errors import LedgerError
from fiscal_ledger.schemas.settings import FiscalYearCreate
from fiscal_ledger.services.audit import log_event
from fiscal_ledger.services.editing import require_admin
from fiscal_ledger.services.ledger_settings import list_fiscal_years
from fiscal_ledger.services.store import FISCAL_YEARS

router = APIRouter(prefix="/fiscal-years", tags=["fiscal-years"])


@router.get("", response_model=list[str])
def fiscal_years(s: Session = Depends(db), u=Depends(current_user)):
    try:
        return list_fiscal_years(store_for(s))
    except LedgerError as e:
        raise http_error(e)


@router.post("", response_model=list[str])
def add_fiscal_year(body: FiscalYearCreate, s: Session = Depends(db), u=Depends(current_user)):
    store = store_for(s)
    try:
        require_admin(roles_for(s), u.get("sub"))
        if body.label in list_fiscal_years(store):
            raise HTTPException(status_code=409, detail="fiscal_year_exists")
        row_id = store.add(FISCAL_YEARS, {"label": body.label})
        out = list_fiscal_years(store)
    except LedgerError as e:
        raise http_error(e)
    log_event(s, username=u.get("sub"), action="fiscal_year.create", collection=FISCAL_YEARS, record_id=row_id, details={"label": body.label})
    return out
