from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

MAX_AMOUNT = Decimal("100000000")

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_FISCAL_YEAR_RE = re.compile(r"^\d{4}/\d{4}$")
_PHONE_RE = re.compile(r"^\d+$")


def is_valid_date_key(value: str | None) -> bool:
    # Day is checked against 1..32 only, not the month's real length.
    if not value or not _DATE_RE.match(value):
        return False
    year, month, day = (int(p) for p in value.split("-"))
    if year < 2000 or year > 2100:
        return False
    if month < 1 or month > 12:
        return False
    if day < 1 or day > 32:
        return False
    return True


def validate_financial_input(value) -> bool:
    """Blank input is acceptable; anything else must be a number in 0..100,000,000."""
    if value is None or value == 0 or str(value).strip() == "":
        return True
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        return False
    if not amount.is_finite():
        return False
    if amount < 0 or amount > MAX_AMOUNT:
        return False
    return True


def is_valid_fiscal_year_label(value: str | None) -> bool:
    return bool(value) and _FISCAL_YEAR_RE.match(value) is not None


def is_valid_phone(value: str | None) -> bool:
    return not value or _PHONE_RE.match(value) is not None
