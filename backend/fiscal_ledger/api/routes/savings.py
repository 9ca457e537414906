from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from fiscal_ledger.api.deps import db, current_user, http_error, month_table, roles_for, store_for
from fiscal_ledger.core.errors import LedgerError
from fiscal_ledger.schemas.entry import EntryResult, SavingsEntryIn
from fiscal_ledger.schemas.ledger import SavingsLedgerOut
from fiscal_ledger.services.audit import log_event
from fiscal_ledger.services.calendar import generate_fiscal_year_dates
from fiscal_ledger.services.editing import require_admin, upsert_entry
from fiscal_ledger.services.ledger import compute_savings_ledger
from fiscal_ledger.services.ledger_settings import get_interest_rates
from fiscal_ledger.services.store import MEMBERS, SAVINGS

router = APIRouter(prefix="/members/{member_id}/savings", tags=["savings"])

QUARTER_CHOICES = {"all", "1", "2", "3", "4"}


def require_member(store, member_id: int) -> None:
    if not store.list(MEMBERS, id=member_id):
        raise HTTPException(status_code=404, detail="member_not_found")


def check_quarter(quarter: str) -> str:
    q = (quarter or "all").strip().lower()
    if q not in QUARTER_CHOICES:
        raise HTTPException(status_code=400, detail="invalid_quarter")
    return q


@router.get("", response_model=SavingsLedgerOut)
def savings_ledger(
    member_id: int,
    fiscal_year: str = Query(...),
    quarter: str = Query("all"),
    s: Session = Depends(db),
    u=Depends(current_user),
):
    q = check_quarter(quarter)
    store = store_for(s)
    try:
        require_member(store, member_id)
        txs = store.list(SAVINGS, member_id=member_id, fiscal_year=fiscal_year)
        rate = get_interest_rates(store).savings_interest_rate
    except LedgerError as e:
        raise http_error(e)

    days = generate_fiscal_year_dates(fiscal_year, month_table())
    out = compute_savings_ledger(days, txs, rate, member_id=member_id, fiscal_year=fiscal_year, quarter=q)
    return {"member_id": member_id, "fiscal_year": fiscal_year, "interest_rate_percent": rate, **out}


@router.put("/entries", response_model=EntryResult)
def upsert_savings_entry(member_id: int, body: SavingsEntryIn, s: Session = Depends(db), u=Depends(current_user)):
    store = store_for(s)
    try:
        require_admin(roles_for(s), u.get("sub"))
        require_member(store, member_id)
        result = upsert_entry(
            store,
            roles_for(s),
            u.get("sub"),
            SAVINGS,
            fiscal_year=body.fiscal_year,
            date_key=body.date_key,
            kind=body.kind,
            amount=body.amount,
            member_id=member_id,
            note=body.note,
        )
    except LedgerError as e:
        raise http_error(e)

    if result["action"] != "noop":
        log_event(
            s,
            username=u.get("sub"),
            action=f"savings.{result['action']}",
            collection=SAVINGS,
            record_id=result["id"],
            details={"member_id": member_id, "fiscal_year": body.fiscal_year, "date_key": body.date_key, "kind": body.kind, "amount": str(body.amount), "note": body.note},
        )
    return result
