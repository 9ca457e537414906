from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from fiscal_ledger.api.deps import db, current_user, http_error, month_table, roles_for, store_for
from fiscal_ledger.api.routes.savings import check_quarter, require_member
from fiscal_ledger.core.errors import LedgerError
from fiscal_ledger.schemas.entry import EntryResult, LoanEntryIn
from fiscal_ledger.schemas.ledger import LoanLedgerOut
from fiscal_ledger.services.audit import log_event
from fiscal_ledger.services.calendar import generate_fiscal_year_dates
from fiscal_ledger.services.editing import require_admin, upsert_entry
from fiscal_ledger.services.ledger import compute_loan_ledger
from fiscal_ledger.services.ledger_settings import get_interest_rates
from fiscal_ledger.services.store import LOANS

router = APIRouter(prefix="/members/{member_id}/loans", tags=["loans"])


@router.get("", response_model=LoanLedgerOut)
def loan_ledger(
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
        txs = store.list(LOANS, member_id=member_id, fiscal_year=fiscal_year)
        rate = get_interest_rates(store).loan_interest_rate
    except LedgerError as e:
        raise http_error(e)

    days = generate_fiscal_year_dates(fiscal_year, month_table())
    out = compute_loan_ledger(days, txs, rate, member_id=member_id, fiscal_year=fiscal_year, quarter=q)
    return {"member_id": member_id, "fiscal_year": fiscal_year, "interest_rate_percent": rate, **out}


@router.put("/entries", response_model=EntryResult)
def upsert_loan_entry(member_id: int, body: LoanEntryIn, s: Session = Depends(db), u=Depends(current_user)):
    store = store_for(s)
    try:
        require_admin(roles_for(s), u.get("sub"))
        require_member(store, member_id)
        result = upsert_entry(
            store,
            roles_for(s),
            u.get("sub"),
            LOANS,
            fiscal_year=body.fiscal_year,
            date_key=body.date_key,
            kind=body.kind,
            amount=body.amount,
            member_id=member_id,
        )
    except LedgerError as e:
        raise http_error(e)

    if result["action"] != "noop":
        log_event(
            s,
            username=u.get("sub"),
            action=f"loan.{result['action']}",
            collection=LOANS,
            record_id=result["id"],
            details={"member_id": member_id, "fiscal_year": body.fiscal_year, "date_key": body.date_key, "kind": body.kind, "amount": str(body.amount)},
        )
    return result
