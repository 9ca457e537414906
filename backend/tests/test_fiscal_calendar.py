import pytest

from fiscal_ledger.core.config import MONTH_LENGTHS
from fiscal_ledger.services.calendar import (
    MonthLengthTable,
    QUARTER_LABELS,
    fiscal_year_length,
    generate_fiscal_year_dates,
    quarter_of,
)


@pytest.fixture()
def table():
    return MonthLengthTable(MONTH_LENGTHS)


def _by_key(days):
    return {d.date_key: d for d in days}


def test_2081_2082_starts_in_magh_and_ends_in_poush(table):
    days = generate_fiscal_year_dates("2081/2082", table)

    # Magh..Chaitra of 2081 (30 + 30 + 31) then Baisakh..Poush of 2082.
    assert len(days) == 91 + 277
    assert days[0].date_key == "2081-10-01"
    assert days[0].month_name == "Magh"
    assert days[90].date_key == "2081-12-31"
    assert days[91].date_key == "2082-01-01"
    assert days[-1].date_key == "2082-09-30"
    assert days[-1].month_name == "Poush"


@pytest.mark.parametrize("fy", ["2081/2082", "2084/2085", "2089/2090", "2090/2091", "2095/2096"])
def test_length_matches_resolved_month_lengths_and_ordinals_are_dense(table, fy):
    days = generate_fiscal_year_dates(fy, table)

    assert len(days) == fiscal_year_length(fy, table)
    assert [d.ordinal for d in days] == list(range(1, len(days) + 1))
    assert len({d.date_key for d in days}) == len(days)


def test_years_missing_from_table_use_default_lengths(table):
    days = generate_fiscal_year_dates("2095/2096", table)

    # Default months 10..12 are 30 days; 1..9 are 31 x5 then 30 x4.
    assert len(days) == 90 + 275
    assert days[89].date_key == "2095-12-30"
    assert "2096-01-31" in _by_key(days)
    assert "2096-06-31" not in _by_key(days)


def test_falsy_month_length_falls_back_to_thirty():
    table = MonthLengthTable({2000: [0] * 12})
    days = generate_fiscal_year_dates("2000/2000", table)

    assert len(days) == 12 * 30


def test_quarter_start_months_give_first_two_days_to_previous_quarter(table):
    by_key = _by_key(generate_fiscal_year_dates("2081/2082", table))

    assert by_key["2081-10-01"].quarter == 4
    assert by_key["2081-10-02"].quarter == 4
    assert by_key["2081-10-03"].quarter == 1

    assert by_key["2082-01-02"].quarter == 1
    assert by_key["2082-01-03"].quarter == 2

    assert by_key["2082-04-02"].quarter == 2
    assert by_key["2082-04-03"].quarter == 3

    assert by_key["2082-07-02"].quarter == 3
    assert by_key["2082-07-03"].quarter == 4

    # Non quarter-start months never shift.
    assert by_key["2081-11-01"].quarter == 1
    assert by_key["2082-09-30"].quarter == 4


@pytest.mark.parametrize(
    "month_index,day,expected",
    [(0, 1, 4), (0, 2, 4), (0, 3, 1), (2, 1, 1), (3, 1, 1), (3, 3, 2), (6, 2, 2), (9, 1, 3), (11, 30, 4)],
)
def test_quarter_of(month_index, day, expected):
    assert quarter_of(month_index, day) == expected


def test_generation_is_deterministic(table):
    assert generate_fiscal_year_dates("2083/2084", table) == generate_fiscal_year_dates("2083/2084", table)


@pytest.mark.parametrize("fy", ["", "2081", "abcd/efgh"])
def test_unparseable_fiscal_year_gives_empty_calendar(table, fy):
    assert generate_fiscal_year_dates(fy, table) == []
    assert fiscal_year_length(fy, table) == 0


def test_quarter_labels_cover_all_quarters():
    assert sorted(QUARTER_LABELS) == [1, 2, 3, 4]
    assert QUARTER_LABELS[1] == "Q1: Magh 3 to Baisakh 2"
