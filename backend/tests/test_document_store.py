from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from fiscal_ledger.core.errors import StorageFailure
from fiscal_ledger.db.base import Base
from fiscal_ledger.services.store import GROUP, MEMBERS, SAVINGS, SqlDocumentStore


@pytest.fixture(scope="session")
def engine():
    eng = create_engine("sqlite+pysqlite:///:memory:", future=True)
    Base.metadata.create_all(eng)
    return eng


@pytest.fixture()
def session(engine):
    connection = engine.connect()
    trans = connection.begin()
    Session = sessionmaker(bind=connection, autoflush=False, autocommit=False, future=True)
    s = Session()
    try:
        yield s
    finally:
        s.close()
        trans.rollback()
        connection.close()


@pytest.fixture()
def store(session):
    return SqlDocumentStore(session)


def _member(store, name="Sita"):
    return store.add(MEMBERS, {"name": name, "phone": "98000", "joined_date": "2081-10-01"})


def test_add_list_update_delete_roundtrip(store):
    member_id = _member(store)
    tx_id = store.add(
        SAVINGS,
        {"member_id": member_id, "fiscal_year": "2081/2082", "date_key": "2081-10-01", "kind": "saving", "amount": Decimal("1000"), "note": None},
    )

    rows = store.list(SAVINGS, member_id=member_id)
    assert [r["id"] for r in rows] == [tx_id]
    assert Decimal(str(rows[0]["amount"])) == Decimal("1000")

    store.update(SAVINGS, tx_id, {"amount": Decimal("250.50"), "note": "edited"})
    row = store.list(SAVINGS, id=tx_id)[0]
    assert Decimal(str(row["amount"])) == Decimal("250.50")
    assert row["note"] == "edited"

    store.delete(SAVINGS, tx_id)
    assert store.list(SAVINGS) == []


def test_list_returns_insertion_order(store):
    for i, kind in enumerate(["in", "out", "in"]):
        store.add(GROUP, {"fiscal_year": "2081/2082", "date_key": f"2082-0{3 - i}-01", "kind": kind, "amount": Decimal("10"), "note": None})

    assert [r["date_key"] for r in store.list(GROUP)] == ["2082-03-01", "2082-02-01", "2082-01-01"]


def test_update_missing_record_is_a_storage_failure(store):
    with pytest.raises(StorageFailure):
        store.update(MEMBERS, 12345, {"name": "nobody"})


def test_delete_missing_record_is_a_noop(store):
    store.delete(MEMBERS, 12345)
    assert store.list(MEMBERS) == []


def test_unknown_collection_is_rejected(store):
    with pytest.raises(KeyError):
        store.list("nope")


def test_database_errors_surface_as_storage_failure(store, session, monkeypatch):
    def _boom():
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(session, "commit", _boom)

    with pytest.raises(StorageFailure) as exc:
        _member(store)
    assert "disk I/O error" in str(exc.value)


def test_subscribers_get_current_list_then_every_change(store):
    seen: list[list[dict]] = []
    unsubscribe = store.subscribe(MEMBERS, seen.append)

    assert seen == [[]]

    member_id = _member(store)
    assert [r["id"] for r in seen[-1]] == [member_id]

    store.update(MEMBERS, member_id, {"name": "Gita"})
    assert seen[-1][0]["name"] == "Gita"

    unsubscribe()
    store.delete(MEMBERS, member_id)
    assert len(seen) == 3


def test_subscribers_only_hear_their_collection(store):
    seen: list[list[dict]] = []
    store.subscribe(GROUP, seen.append)

    _member(store)

    assert seen == [[]]
