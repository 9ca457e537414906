from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from fiscal_ledger.api.deps import db, current_user, http_error, roles_for, store_for
from fiscal_ledger.core.errors import LedgerError
from fiscal_ledger.schemas.entry import EntryResult, GroupEntryIn
from fiscal_ledger.schemas.ledger import GroupLedgerOut
from fiscal_ledger.services.audit import log_event
from fiscal_ledger.services.editing import add_group_entry, delete_entry, upsert_entry
from fiscal_ledger.services.ledger import compute_group_ledger
from fiscal_ledger.services.store import GROUP

router = APIRouter(prefix="/group-transactions", tags=["group-transactions"])


@router.get("", response_model=GroupLedgerOut)
def group_ledger(fiscal_year: str = Query(...), s: Session = Depends(db), u=Depends(current_user)):
    try:
        txs = store_for(s).list(GROUP, fiscal_year=fiscal_year)
    except LedgerError as e:
        raise http_error(e)
    return {"fiscal_year": fiscal_year, **compute_group_ledger(txs, fiscal_year=fiscal_year)}


@router.post("", response_model=EntryResult)
def add_group_tx(body: GroupEntryIn, s: Session = Depends(db), u=Depends(current_user)):
    try:
        tx_id = add_group_entry(
            store_for(s),
            roles_for(s),
            u.get("sub"),
            fiscal_year=body.fiscal_year,
            date_key=body.date_key,
            kind=body.kind,
            amount=body.amount,
            note=body.note,
        )
    except LedgerError as e:
        raise http_error(e)
    log_event(
        s,
        username=u.get("sub"),
        action="group.created",
        collection=GROUP,
        record_id=tx_id,
        details={"fiscal_year": body.fiscal_year, "date_key": body.date_key, "kind": body.kind, "amount": str(body.amount), "note": body.note},
    )
    return {"action": "created", "id": tx_id}


@router.put("/entries", response_model=EntryResult)
def upsert_group_tx(body: GroupEntryIn, s: Session = Depends(db), u=Depends(current_user)):
    try:
        result = upsert_entry(
            store_for(s),
            roles_for(s),
            u.get("sub"),
            GROUP,
            fiscal_year=body.fiscal_year,
            date_key=body.date_key,
            kind=body.kind,
            amount=body.amount,
            note=body.note,
        )
    except LedgerError as e:
        raise http_error(e)
    if result["action"] != "noop":
        log_event(
            s,
            username=u.get("sub"),
            action=f"group.{result['action']}",
            collection=GROUP,
            record_id=result["id"],
            details={"fiscal_year": body.fiscal_year, "date_key": body.date_key, "kind": body.kind, "amount": str(body.amount)},
        )
    return result


@router.delete("/{tx_id}")
def delete_group_tx(tx_id: int, s: Session = Depends(db), u=Depends(current_user)):
    try:
        delete_entry(store_for(s), roles_for(s), u.get("sub"), GROUP, tx_id)
    except LedgerError as e:
        raise http_error(e)
    log_event(s, username=u.get("sub"), action="group.deleted", collection=GROUP, record_id=tx_id)
    return {"ok": True}
