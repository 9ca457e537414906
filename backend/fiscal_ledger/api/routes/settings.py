from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from fiscal_ledger.api.deps import db, current_user, http_error, roles_for, store_for
from fiscal_ledger.core.errors import LedgerError
from fiscal_ledger.schemas.settings import SettingsIn, SettingsOut
from fiscal_ledger.services.audit import log_event
from fiscal_ledger.services.editing import require_admin
from fiscal_ledger.services.ledger_settings import get_interest_rates, get_settings_record, save_settings
from fiscal_ledger.services.store import SETTINGS

router = APIRouter(prefix="/settings", tags=["settings"])


def _settings_out(store) -> dict:
    rates = get_interest_rates(store)
    row = get_settings_record(store) or {}
    return {
        "savings_interest_rate": rates.savings_interest_rate,
        "loan_interest_rate": rates.loan_interest_rate,
        "fiscal_year_start": row.get("fiscal_year_start"),
        "currency_symbol": row.get("currency_symbol") or "Rs.",
    }


@router.get("", response_model=SettingsOut)
def read_settings(s: Session = Depends(db), u=Depends(current_user)):
    try:
        return _settings_out(store_for(s))
    except LedgerError as e:
        raise http_error(e)


@router.put("", response_model=SettingsOut)
def write_settings(body: SettingsIn, s: Session = Depends(db), u=Depends(current_user)):
    store = store_for(s)
    try:
        require_admin(roles_for(s), u.get("sub"))
        row_id = save_settings(store, body.model_dump())
        out = _settings_out(store)
    except LedgerError as e:
        raise http_error(e)
    log_event(s, username=u.get("sub"), action="settings.save", collection=SETTINGS, record_id=row_id, details=body.model_dump())
    return out
