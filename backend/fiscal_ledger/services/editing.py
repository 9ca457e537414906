from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal

from fiscal_ledger.core.errors import InvalidAmount, InvalidDate, Unauthorized
from fiscal_ledger.services.roles import RoleOracle
from fiscal_ledger.services.store import GROUP, LOANS, SAVINGS, DocumentStore
from fiscal_ledger.services.validators import is_valid_date_key, validate_financial_input

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

NOTED_COLLECTIONS = {SAVINGS, GROUP}
MEMBER_SCOPED = {SAVINGS, LOANS}


def require_admin(roles: RoleOracle, user_id: str | None) -> None:
    if not roles.is_admin(user_id):
        raise Unauthorized("only administrators can modify ledger entries")


def _amount(value) -> Decimal:
    if not validate_financial_input(value):
        raise InvalidAmount("amount must be a number between 0 and 100,000,000")
    if value is None or str(value).strip() == "":
        return Decimal("0")
    # Stored at cent precision; round first so sub-cent input counts as zero.
    return Decimal(str(value).strip()).quantize(CENT, rounding=ROUND_HALF_UP)


def upsert_entry(
    store: DocumentStore,
    roles: RoleOracle,
    user_id: str | None,
    collection: str,
    fiscal_year: str,
    date_key: str,
    kind: str,
    amount,
    member_id: int | None = None,
    note: str | None = None,
) -> dict:
    """Create, update or delete the single entry for (member, date, kind, fiscal year).

    A zero or blank amount removes the entry. Returns the action taken and the
    affected record id.
    """
    require_admin(roles, user_id)
    amt = _amount(amount)

    where = {"fiscal_year": fiscal_year, "date_key": date_key, "kind": kind}
    if collection in MEMBER_SCOPED:
        where["member_id"] = member_id
    existing = store.list(collection, **where)

    if amt == 0:
        if not existing:
            return {"action": "noop", "id": None}
        store.delete(collection, existing[0]["id"])
        logger.info("deleted %s/%s (%s %s)", collection, existing[0]["id"], date_key, kind)
        return {"action": "deleted", "id": existing[0]["id"]}

    if existing:
        changes: dict = {"amount": amt}
        if collection in NOTED_COLLECTIONS:
            changes["note"] = note
        store.update(collection, existing[0]["id"], changes)
        logger.info("updated %s/%s (%s %s)", collection, existing[0]["id"], date_key, kind)
        return {"action": "updated", "id": existing[0]["id"]}

    record = dict(where)
    record["amount"] = amt
    if collection in NOTED_COLLECTIONS:
        record["note"] = note
    new_id = store.add(collection, record)
    logger.info("created %s/%s (%s %s)", collection, new_id, date_key, kind)
    return {"action": "created", "id": new_id}


def add_group_entry(
    store: DocumentStore,
    roles: RoleOracle,
    user_id: str | None,
    fiscal_year: str,
    date_key: str,
    kind: str,
    amount,
    note: str | None = None,
) -> int:
    require_admin(roles, user_id)
    if not is_valid_date_key(date_key):
        raise InvalidDate("date must be YYYY-MM-DD")
    amt = _amount(amount)
    if amt == 0:
        raise InvalidAmount("amount is required")
    new_id = store.add(
        GROUP,
        {"fiscal_year": fiscal_year, "date_key": date_key, "kind": kind, "amount": amt, "note": note},
    )
    logger.info("created %s/%s (%s %s)", GROUP, new_id, date_key, kind)
    return new_id


def delete_entry(store: DocumentStore, roles: RoleOracle, user_id: str | None, collection: str, record_id: int) -> None:
    require_admin(roles, user_id)
    store.delete(collection, record_id)
    logger.info("deleted %s/%s", collection, record_id)
