from __future__ import annotations

import logging
from typing import Any, Callable, Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fiscal_ledger.core.errors import StorageFailure
from fiscal_ledger.db.base import Base
from fiscal_ledger.models.fiscal_year import FiscalYearEntry
from fiscal_ledger.models.ledger_settings import LedgerSettings
from fiscal_ledger.models.member import Member
from fiscal_ledger.models.transaction import GroupTransaction, LoanTransaction, SavingsTransaction

logger = logging.getLogger(__name__)

MEMBERS = "members"
SAVINGS = "transactions"
LOANS = "loans"
GROUP = "groupTransactions"
SETTINGS = "settings"
FISCAL_YEARS = "fiscalYears"

COLLECTIONS: dict[str, type[Base]] = {
    MEMBERS: Member,
    SAVINGS: SavingsTransaction,
    LOANS: LoanTransaction,
    GROUP: GroupTransaction,
    SETTINGS: LedgerSettings,
    FISCAL_YEARS: FiscalYearEntry,
}

Record = dict[str, Any]
Listener = Callable[[list[Record]], None]


class DocumentStore(Protocol):
    def list(self, collection: str, **where) -> list[Record]: ...

    def add(self, collection: str, record: Record) -> int: ...

    def update(self, collection: str, record_id: int, changes: Record) -> None: ...

    def delete(self, collection: str, record_id: int) -> None: ...

    def subscribe(self, collection: str, callback: Listener) -> Callable[[], None]: ...


def _model(collection: str) -> type[Base]:
    model = COLLECTIONS.get(collection)
    if model is None:
        raise KeyError(f"unknown collection: {collection}")
    return model


def _as_record(obj: Base) -> Record:
    return {c.key: getattr(obj, c.key) for c in obj.__table__.columns}


class SqlDocumentStore:
    """Document-store capability over a SQLAlchemy session.

    Records are plain dicts; ``list`` returns them in insertion order.
    Subscribers get the current list on subscribe and again after every
    mutation of their collection.
    """

    def __init__(self, s: Session):
        self.s = s
        self._listeners: dict[str, list[Listener]] = {}

    def list(self, collection: str, **where) -> list[Record]:
        model = _model(collection)
        q = select(model)
        for name, value in where.items():
            q = q.where(getattr(model, name) == value)
        q = q.order_by(model.id.asc())
        try:
            rows = self.s.execute(q).scalars().all()
        except SQLAlchemyError as e:
            logger.exception("list %s failed", collection)
            raise StorageFailure(str(e)) from e
        return [_as_record(r) for r in rows]

    def add(self, collection: str, record: Record) -> int:
        model = _model(collection)
        obj = model(**record)
        try:
            self.s.add(obj)
            self.s.commit()
            self.s.refresh(obj)
        except SQLAlchemyError as e:
            self.s.rollback()
            logger.exception("add to %s failed", collection)
            raise StorageFailure(str(e)) from e
        self._notify(collection)
        return obj.id

    def update(self, collection: str, record_id: int, changes: Record) -> None:
        model = _model(collection)
        try:
            obj = self.s.execute(select(model).where(model.id == record_id)).scalar_one_or_none()
            if obj is None:
                raise StorageFailure(f"{collection}/{record_id} not found")
            for name, value in changes.items():
                setattr(obj, name, value)
            self.s.add(obj)
            self.s.commit()
        except SQLAlchemyError as e:
            self.s.rollback()
            logger.exception("update %s/%s failed", collection, record_id)
            raise StorageFailure(str(e)) from e
        self._notify(collection)

    def delete(self, collection: str, record_id: int) -> None:
        model = _model(collection)
        try:
            obj = self.s.execute(select(model).where(model.id == record_id)).scalar_one_or_none()
            if obj is None:
                return
            self.s.delete(obj)
            self.s.commit()
        except SQLAlchemyError as e:
            self.s.rollback()
            logger.exception("delete %s/%s failed", collection, record_id)
            raise StorageFailure(str(e)) from e
        self._notify(collection)

    def subscribe(self, collection: str, callback: Listener) -> Callable[[], None]:
        _model(collection)
        self._listeners.setdefault(collection, []).append(callback)
        callback(self.list(collection))

        def unsubscribe() -> None:
            listeners = self._listeners.get(collection, [])
            if callback in listeners:
                listeners.remove(callback)

        return unsubscribe

    def _notify(self, collection: str) -> None:
        listeners = list(self._listeners.get(collection, []))
        if not listeners:
            return
        records = self.list(collection)
        for cb in listeners:
            cb(records)
