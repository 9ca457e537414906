from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from fiscal_ledger.api.deps import db, current_user, http_error, roles_for, store_for
from fiscal_ledger.core.errors import LedgerError
from fiscal_ledger.schemas.member import MemberCreate, MemberUpdate, MemberOut
from fiscal_ledger.services.audit import log_event
from fiscal_ledger.services.editing import require_admin
from fiscal_ledger.services.store import MEMBERS

router = APIRouter(prefix="/members", tags=["members"])


def _get_member(store, member_id: int) -> dict:
    rows = store.list(MEMBERS, id=member_id)
    if not rows:
        raise HTTPException(status_code=404, detail="member_not_found")
    return rows[0]


@router.get("", response_model=list[MemberOut])
def list_members(s: Session = Depends(db), u=Depends(current_user)):
    try:
        return store_for(s).list(MEMBERS)
    except LedgerError as e:
        raise http_error(e)


@router.post("", response_model=MemberOut)
def create_member(body: MemberCreate, s: Session = Depends(db), u=Depends(current_user)):
    store = store_for(s)
    try:
        require_admin(roles_for(s), u.get("sub"))
        member_id = store.add(MEMBERS, body.model_dump())
    except LedgerError as e:
        raise http_error(e)
    log_event(s, username=u.get("sub"), action="member.create", collection=MEMBERS, record_id=member_id, details=body.model_dump())
    return _get_member(store, member_id)


@router.patch("/{member_id}", response_model=MemberOut)
def update_member(member_id: int, body: MemberUpdate, s: Session = Depends(db), u=Depends(current_user)):
    store = store_for(s)
    changes = body.model_dump(exclude_none=True)
    try:
        require_admin(roles_for(s), u.get("sub"))
        _get_member(store, member_id)
        if changes:
            store.update(MEMBERS, member_id, changes)
    except LedgerError as e:
        raise http_error(e)
    log_event(s, username=u.get("sub"), action="member.update", collection=MEMBERS, record_id=member_id, details=changes)
    return _get_member(store, member_id)


@router.delete("/{member_id}")
def delete_member(member_id: int, s: Session = Depends(db), u=Depends(current_user)):
    store = store_for(s)
    try:
        require_admin(roles_for(s), u.get("sub"))
        member = _get_member(store, member_id)
        store.delete(MEMBERS, member_id)
    except LedgerError as e:
        raise http_error(e)
    log_event(s, username=u.get("sub"), action="member.delete", collection=MEMBERS, record_id=member_id, details={"name": member["name"]})
    return {"ok": True}
