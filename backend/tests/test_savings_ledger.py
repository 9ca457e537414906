import pytest

from fiscal_ledger.core.config import MONTH_LENGTHS
from fiscal_ledger.services.calendar import MonthLengthTable, generate_fiscal_year_dates
from fiscal_ledger.services.ledger import compute_savings_ledger, group_rows_by_quarter

FY = "2081/2082"
MEMBER = 1


@pytest.fixture(scope="module")
def days():
    return generate_fiscal_year_dates(FY, MonthLengthTable(MONTH_LENGTHS))


def _tx(date_key, kind, amount, member_id=MEMBER, fiscal_year=FY, note=None):
    return {
        "member_id": member_id,
        "fiscal_year": fiscal_year,
        "date_key": date_key,
        "kind": kind,
        "amount": amount,
        "note": note,
    }


def test_single_saving_and_withdrawal_scenario(days):
    txs = [_tx("2081-10-01", "saving", 1000), _tx("2081-10-05", "withdrawal", 200)]

    out = compute_savings_ledger(days, txs, 5, member_id=MEMBER, fiscal_year=FY)
    rows = out["rows"]
    by_key = {r["date_key"]: r for r in rows}

    assert len(rows) == len(days)
    assert by_key["2081-10-01"]["balance"] == 1000.0
    assert by_key["2081-10-04"]["balance"] == 1000.0
    assert by_key["2081-10-05"]["balance"] == 800.0
    assert rows[-1]["balance"] == 800.0

    n = len(days)
    expected_interest = (4 * 1000 + (n - 4) * 800) * 0.05 / n
    assert out["totals"]["final_balance"] == 800.0
    assert out["totals"]["total_saving"] == 1000.0
    assert out["totals"]["total_withdrawal"] == 200.0
    assert out["totals"]["total_interest"] == pytest.approx(expected_interest, rel=1e-12)
    assert out["totals"]["final_total_with_interest"] == pytest.approx(800 + expected_interest, rel=1e-12)


def test_daily_interest_divides_by_calendar_length_not_365(days):
    # 2081/2082 has 368 days; savings interest uses that, loans use 365.
    assert len(days) == 368
    out = compute_savings_ledger(days, [_tx("2081-10-01", "saving", 36800)], 10)

    assert out["rows"][0]["interest"] == pytest.approx(36800 * 0.10 / 368, rel=1e-12)


def test_running_balance_recurrence(days):
    txs = [
        _tx("2081-10-01", "saving", 500),
        _tx("2081-11-15", "saving", 250.5),
        _tx("2081-11-15", "withdrawal", 100),
        _tx("2082-03-10", "withdrawal", 50.25),
        _tx("2082-08-01", "saving", 1200),
    ]
    rows = compute_savings_ledger(days, txs, 5)["rows"]

    prev = 0.0
    for r in rows:
        assert r["balance"] == pytest.approx(prev + r["saving"] - r["withdrawal"], abs=1e-9)
        prev = r["balance"]


def test_total_with_interest_is_cumulative(days):
    rows = compute_savings_ledger(days, [_tx("2081-10-01", "saving", 1000)], 5)["rows"]

    running = 0.0
    for r in rows[:40]:
        running += r["interest"]
        assert r["total_with_interest"] == pytest.approx(r["balance"] + running, rel=1e-12)


def test_quarter_interest_resets_at_quarter_boundary(days):
    rows = compute_savings_ledger(days, [_tx("2081-10-01", "saving", 1000)], 5)["rows"]
    by_key = {r["date_key"]: r for r in rows}
    daily = by_key["2081-10-01"]["interest"]

    assert by_key["2081-10-01"]["quarter_interest"] == pytest.approx(daily)
    assert by_key["2081-10-02"]["quarter_interest"] == pytest.approx(2 * daily)
    assert by_key["2081-10-03"]["quarter_interest"] == pytest.approx(daily)
    assert by_key["2082-01-02"]["quarter_interest"] > by_key["2082-01-01"]["quarter_interest"]
    assert by_key["2082-01-03"]["quarter_interest"] == pytest.approx(daily)


def test_quarter_filter_does_not_change_running_state(days):
    txs = [
        _tx("2081-10-01", "saving", 1000),
        _tx("2081-12-10", "saving", 400),
        _tx("2082-02-20", "withdrawal", 300),
        _tx("2082-05-05", "saving", 700),
        _tx("2082-08-15", "withdrawal", 100),
    ]
    full = compute_savings_ledger(days, txs, 5)
    full_by_key = {r["date_key"]: r for r in full["rows"]}

    per_quarter_saving = 0.0
    per_quarter_withdrawal = 0.0
    per_quarter_interest = 0.0
    for q in (1, 2, 3, 4):
        part = compute_savings_ledger(days, txs, 5, quarter=q)
        assert all(r["quarter"] == q for r in part["rows"])
        for r in part["rows"]:
            assert r == full_by_key[r["date_key"]]
        per_quarter_saving += part["totals"]["total_saving"]
        per_quarter_withdrawal += part["totals"]["total_withdrawal"]
        per_quarter_interest += part["totals"]["total_interest"]

    assert per_quarter_saving == full["totals"]["total_saving"]
    assert per_quarter_withdrawal == full["totals"]["total_withdrawal"]
    assert per_quarter_interest == pytest.approx(full["totals"]["total_interest"], rel=1e-12)


def test_quarter_filter_accepts_all_and_string_values(days):
    txs = [_tx("2081-10-01", "saving", 1000)]

    assert compute_savings_ledger(days, txs, 5, quarter="all") == compute_savings_ledger(days, txs, 5)
    assert compute_savings_ledger(days, txs, 5, quarter="2") == compute_savings_ledger(days, txs, 5, quarter=2)


def test_quarter_four_rows_include_first_two_days_of_year(days):
    out = compute_savings_ledger(days, [_tx("2081-10-01", "saving", 1000)], 5, quarter=4)

    assert out["rows"][0]["date_key"] == "2081-10-01"
    assert out["rows"][1]["date_key"] == "2081-10-02"
    assert out["rows"][2]["date_key"] == "2082-07-03"
    assert out["totals"]["final_balance"] == 1000.0


def test_only_selected_member_and_fiscal_year_are_folded(days):
    txs = [
        _tx("2081-10-01", "saving", 1000),
        _tx("2081-10-01", "saving", 999, member_id=2),
        _tx("2081-10-01", "saving", 888, fiscal_year="2082/2083"),
    ]
    out = compute_savings_ledger(days, txs, 5, member_id=MEMBER, fiscal_year=FY)

    assert out["totals"]["total_saving"] == 1000.0


def test_same_day_amounts_sum_and_notes_join(days):
    txs = [
        _tx("2081-10-10", "saving", 100, note="monthly"),
        _tx("2081-10-10", "withdrawal", 40, note="fees"),
        _tx("2081-10-10", "saving", 50),
    ]
    row = {r["date_key"]: r for r in compute_savings_ledger(days, txs, 5)["rows"]}["2081-10-10"]

    assert row["saving"] == 150.0
    assert row["withdrawal"] == 40.0
    assert row["note"] == "Saving: monthly; Withdrawal: fees"


def test_transactions_outside_calendar_are_ignored(days):
    out = compute_savings_ledger(days, [_tx("2082-10-01", "saving", 1000)], 5)

    assert out["totals"]["total_saving"] == 0.0
    assert out["totals"]["final_balance"] == 0.0


def test_recomputation_is_deterministic(days):
    txs = [_tx("2081-10-01", "saving", "1000.10"), _tx("2082-01-05", "withdrawal", "12.34", note="x")]

    assert compute_savings_ledger(days, txs, 5.5) == compute_savings_ledger(days, list(txs), 5.5)


def test_empty_calendar_yields_empty_ledger():
    out = compute_savings_ledger([], [_tx("2081-10-01", "saving", 1000)], 5)

    assert out["rows"] == []
    assert out["totals"]["final_balance"] == 0.0
    assert out["totals"]["total_interest"] == 0.0


def test_rows_group_by_quarter(days):
    rows = compute_savings_ledger(days, [], 5)["rows"]
    grouped = group_rows_by_quarter(rows)

    assert sorted(grouped) == [1, 2, 3, 4]
    assert sum(len(v) for v in grouped.values()) == len(days)
