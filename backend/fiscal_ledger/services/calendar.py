from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Sequence

logger = logging.getLogger(__name__)

DEFAULT_MONTH_LENGTHS = (31, 31, 31, 31, 31, 30, 30, 30, 30, 30, 30, 30)
FALLBACK_MONTH_LENGTH = 30

# Fiscal-year visit order: (civil month name, month-of-year). The first three
# months fall in the start year, the other nine in the end year.
FISCAL_MONTHS: tuple[tuple[str, int], ...] = (
    ("Magh", 10),
    ("Falgun", 11),
    ("Chaitra", 12),
    ("Baisakh", 1),
    ("Jestha", 2),
    ("Ashad", 3),
    ("Shrawan", 4),
    ("Bhadra", 5),
    ("Ashwin", 6),
    ("Kartik", 7),
    ("Mangsir", 8),
    ("Poush", 9),
)
START_YEAR_MONTHS = 3

QUARTER_LABELS = {
    1: "Q1: Magh 3 to Baisakh 2",
    2: "Q2: Baisakh 3 to Shrawan 2",
    3: "Q3: Shrawan 3 to Kartik 2",
    4: "Q4: Kartik 3 to Magh 2",
}


@dataclass(frozen=True)
class CalendarDay:
    date_key: str
    quarter: int
    ordinal: int
    month_name: str = ""

    def as_dict(self) -> dict:
        return {
            "date_key": self.date_key,
            "quarter": self.quarter,
            "ordinal": self.ordinal,
            "month_name": self.month_name,
        }


class MonthLengthTable:
    """Civil-year -> twelve month lengths, Baisakh first.

    Years missing from the table use ``default``; a falsy entry resolves to
    30 days.
    """

    def __init__(self, lengths: Mapping[int, Sequence[int]] | None = None, default: Sequence[int] = DEFAULT_MONTH_LENGTHS):
        self._lengths = {int(y): list(v) for y, v in (lengths or {}).items()}
        self._default = list(default)

    def __contains__(self, year: int) -> bool:
        return year in self._lengths

    def years(self) -> list[int]:
        return sorted(self._lengths)

    def lengths_for(self, year: int) -> list[int]:
        return self._lengths.get(year, self._default)

    def days_in(self, year: int, month_of_year: int) -> int:
        row = self.lengths_for(year)
        idx = month_of_year - 1
        value = row[idx] if 0 <= idx < len(row) else None
        return value or FALLBACK_MONTH_LENGTH


def parse_fiscal_year(fiscal_year: str) -> tuple[int, int] | None:
    parts = (fiscal_year or "").split("/")
    if len(parts) < 2:
        return None
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None


def quarter_of(month_index: int, day: int) -> int:
    q = month_index // 3 + 1
    # The first two days of a quarter-start month still count toward the prior quarter.
    if month_index % 3 == 0 and day < 3:
        q = 4 if q == 1 else q - 1
    return q


def generate_fiscal_year_dates(fiscal_year: str, table: MonthLengthTable) -> list[CalendarDay]:
    years = parse_fiscal_year(fiscal_year)
    if years is None:
        logger.warning("unparseable fiscal year %r; returning empty calendar", fiscal_year)
        return []
    start_year, end_year = years

    out: list[CalendarDay] = []
    ordinal = 1
    for i, (name, month) in enumerate(FISCAL_MONTHS):
        year = start_year if i < START_YEAR_MONTHS else end_year
        for day in range(1, table.days_in(year, month) + 1):
            out.append(
                CalendarDay(
                    date_key=f"{year:04d}-{month:02d}-{day:02d}",
                    quarter=quarter_of(i, day),
                    ordinal=ordinal,
                    month_name=name,
                )
            )
            ordinal += 1
    return out


def fiscal_year_length(fiscal_year: str, table: MonthLengthTable) -> int:
    years = parse_fiscal_year(fiscal_year)
    if years is None:
        return 0
    start_year, end_year = years
    return sum(
        table.days_in(start_year if i < START_YEAR_MONTHS else end_year, month)
        for i, (_, month) in enumerate(FISCAL_MONTHS)
    )
