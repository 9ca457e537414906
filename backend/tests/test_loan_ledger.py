import pytest

from fiscal_ledger.core.config import MONTH_LENGTHS
from fiscal_ledger.services.calendar import MonthLengthTable, generate_fiscal_year_dates
from fiscal_ledger.services.ledger import compute_loan_ledger, compute_savings_ledger

FY = "2081/2082"


@pytest.fixture(scope="module")
def days():
    return generate_fiscal_year_dates(FY, MonthLengthTable(MONTH_LENGTHS))


def _tx(date_key, kind, amount, member_id=1, fiscal_year=FY):
    return {"member_id": member_id, "fiscal_year": fiscal_year, "date_key": date_key, "kind": kind, "amount": amount}


def test_repayment_on_day_100_reduces_principal_and_interest(days):
    txs = [_tx(days[0].date_key, "taken", 50000), _tx(days[99].date_key, "paid", 10000)]
    rows = compute_loan_ledger(days, txs, 7, member_id=1, fiscal_year=FY)["rows"]

    assert rows[0]["loan_remaining"] == 50000.0
    assert rows[98]["loan_remaining"] == 50000.0
    assert rows[99]["loan_remaining"] == 40000.0
    assert rows[-1]["loan_remaining"] == 40000.0

    assert rows[0]["interest"] == pytest.approx(50000 * 0.07 / 365, rel=1e-12)
    assert rows[98]["interest"] == pytest.approx(50000 * 0.07 / 365, rel=1e-12)
    assert rows[99]["interest"] == pytest.approx(40000 * 0.07 / 365, rel=1e-12)


def test_loan_interest_uses_fixed_365_basis_unlike_savings(days):
    # Known asymmetry: loans divide by 365 while savings divide by the
    # calendar length (368 days in 2081/2082).
    loan = compute_loan_ledger(days, [_tx(days[0].date_key, "taken", 1000)], 10)["rows"][0]
    saving = compute_savings_ledger(
        days,
        [{"member_id": 1, "fiscal_year": FY, "date_key": days[0].date_key, "kind": "saving", "amount": 1000}],
        10,
    )["rows"][0]

    assert loan["interest"] == pytest.approx(1000 * 0.10 / 365, rel=1e-12)
    assert saving["interest"] == pytest.approx(1000 * 0.10 / 368, rel=1e-12)
    assert loan["interest"] != saving["interest"]


def test_interest_remaining_accumulates_and_goes_negative_when_overpaid(days):
    txs = [_tx(days[0].date_key, "taken", 36500), _tx(days[1].date_key, "interestPaid", 1000)]
    rows = compute_loan_ledger(days, txs, 10)["rows"]
    daily = 36500 * 0.10 / 365

    assert rows[0]["interest_remaining"] == pytest.approx(daily, rel=1e-12)
    assert rows[1]["interest_remaining"] == pytest.approx(2 * daily - 1000, rel=1e-12)
    assert rows[1]["interest_remaining"] < 0
    assert rows[2]["interest_remaining"] == pytest.approx(3 * daily - 1000, rel=1e-12)


def test_totals_over_full_year(days):
    txs = [
        _tx(days[0].date_key, "taken", 50000),
        _tx(days[99].date_key, "paid", 10000),
        _tx(days[150].date_key, "interestPaid", 500),
    ]
    out = compute_loan_ledger(days, txs, 7)
    totals = out["totals"]

    expected_interest = (99 * 50000 + (len(days) - 99) * 40000) * 0.07 / 365
    assert totals["total_taken"] == 50000.0
    assert totals["total_paid"] == 10000.0
    assert totals["total_interest_paid"] == 500.0
    assert totals["total_interest"] == pytest.approx(expected_interest, rel=1e-12)
    assert totals["final_loan_remaining"] == 40000.0
    assert totals["final_interest_remaining"] == pytest.approx(expected_interest - 500, rel=1e-12)


def test_quarter_filter_keeps_full_year_state(days):
    txs = [_tx(days[0].date_key, "taken", 50000), _tx(days[99].date_key, "paid", 10000)]
    full = {r["date_key"]: r for r in compute_loan_ledger(days, txs, 7)["rows"]}
    q3 = compute_loan_ledger(days, txs, 7, quarter="3")

    assert q3["rows"]
    assert all(r["quarter"] == 3 for r in q3["rows"])
    for r in q3["rows"]:
        assert r == full[r["date_key"]]
    assert q3["totals"]["final_loan_remaining"] == q3["rows"][-1]["loan_remaining"]


def test_other_members_are_excluded(days):
    txs = [_tx(days[0].date_key, "taken", 1000), _tx(days[0].date_key, "taken", 5000, member_id=2)]
    out = compute_loan_ledger(days, txs, 7, member_id=1, fiscal_year=FY)

    assert out["totals"]["total_taken"] == 1000.0
