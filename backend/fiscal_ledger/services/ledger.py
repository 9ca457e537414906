from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Mapping, Sequence

from fiscal_ledger.services.calendar import CalendarDay

ZERO = Decimal("0")
HUNDRED = Decimal("100")

# Loans accrue on a fixed 365-day basis whatever the fiscal year length;
# savings accrue over the generated calendar length.
LOAN_DAY_BASIS = Decimal("365")


def _to_dec(v) -> Decimal:
    if v is None or v == "":
        return ZERO
    return Decimal(str(v))


def _rate(percent) -> Decimal:
    return _to_dec(percent) / HUNDRED


def _normalize_quarter(quarter) -> int | None:
    if quarter is None:
        return None
    if isinstance(quarter, str):
        q = quarter.strip().lower()
        if q in ("", "all"):
            return None
        return int(q)
    return int(quarter)


def _matching(
    transactions: Iterable[Mapping],
    member_id=None,
    fiscal_year: str | None = None,
) -> list[Mapping]:
    out = []
    for t in transactions:
        if member_id is not None and t.get("member_id") != member_id:
            continue
        if fiscal_year is not None and t.get("fiscal_year") != fiscal_year:
            continue
        out.append(t)
    return out


def _append_note(existing: str, label: str, note: str | None) -> str:
    if not note:
        return existing
    entry = f"{label}: {note}"
    return f"{existing}; {entry}" if existing else entry


@dataclass
class _SavingsDay:
    day: CalendarDay
    saving: Decimal = ZERO
    withdrawal: Decimal = ZERO
    note: str = ""
    balance: Decimal = ZERO
    interest: Decimal = ZERO
    quarter_interest: Decimal = ZERO
    total_with_interest: Decimal = ZERO

    def as_row(self) -> dict:
        return {
            "date_key": self.day.date_key,
            "quarter": self.day.quarter,
            "ordinal": self.day.ordinal,
            "saving": float(self.saving),
            "withdrawal": float(self.withdrawal),
            "note": self.note,
            "balance": float(self.balance),
            "interest": float(self.interest),
            "quarter_interest": float(self.quarter_interest),
            "total_with_interest": float(self.total_with_interest),
        }


@dataclass
class _LoanDay:
    day: CalendarDay
    loan_taken: Decimal = ZERO
    loan_paid: Decimal = ZERO
    interest: Decimal = ZERO
    interest_paid: Decimal = ZERO
    loan_remaining: Decimal = ZERO
    interest_remaining: Decimal = ZERO

    def as_row(self) -> dict:
        return {
            "date_key": self.day.date_key,
            "quarter": self.day.quarter,
            "ordinal": self.day.ordinal,
            "loan_taken": float(self.loan_taken),
            "loan_paid": float(self.loan_paid),
            "interest": float(self.interest),
            "interest_paid": float(self.interest_paid),
            "loan_remaining": float(self.loan_remaining),
            "interest_remaining": float(self.interest_remaining),
        }


def compute_savings_ledger(
    days: Sequence[CalendarDay],
    transactions: Iterable[Mapping],
    interest_rate_percent,
    member_id=None,
    fiscal_year: str | None = None,
    quarter=None,
) -> dict:
    """Dense per-day savings ledger for one member and fiscal year.

    Running balance and interest are always computed over the whole calendar;
    ``quarter`` only filters which rows (and therefore which totals) come back.
    Transactions dated outside the calendar are ignored.
    """
    daily: dict[str, _SavingsDay] = {d.date_key: _SavingsDay(day=d) for d in days}

    for t in _matching(transactions, member_id, fiscal_year):
        rec = daily.get(t.get("date_key"))
        if rec is None:
            continue
        if t.get("kind") == "saving":
            rec.saving += _to_dec(t.get("amount"))
            rec.note = _append_note(rec.note, "Saving", t.get("note"))
        elif t.get("kind") == "withdrawal":
            rec.withdrawal += _to_dec(t.get("amount"))
            rec.note = _append_note(rec.note, "Withdrawal", t.get("note"))

    rate = _rate(interest_rate_percent)
    days_in_year = Decimal(len(days))

    balance = ZERO
    total_interest = ZERO
    quarter_interest = ZERO
    current_quarter: int | None = None
    ordered = [daily[d.date_key] for d in sorted(days, key=lambda d: d.ordinal)]
    for rec in ordered:
        balance += rec.saving - rec.withdrawal
        rec.balance = balance

        daily_interest = balance * rate / days_in_year
        rec.interest = daily_interest

        if rec.day.quarter != current_quarter:
            current_quarter = rec.day.quarter
            quarter_interest = ZERO
        quarter_interest += daily_interest
        total_interest += daily_interest

        rec.quarter_interest = quarter_interest
        rec.total_with_interest = balance + total_interest

    q = _normalize_quarter(quarter)
    if q is not None:
        ordered = [r for r in ordered if r.day.quarter == q]

    final_balance = ordered[-1].balance if ordered else ZERO
    interest_sum = sum((r.interest for r in ordered), ZERO)
    totals = {
        "total_saving": float(sum((r.saving for r in ordered), ZERO)),
        "total_withdrawal": float(sum((r.withdrawal for r in ordered), ZERO)),
        "final_balance": float(final_balance),
        "total_interest": float(interest_sum),
        "final_total_with_interest": float(final_balance + interest_sum),
    }
    return {"rows": [r.as_row() for r in ordered], "totals": totals}


def compute_loan_ledger(
    days: Sequence[CalendarDay],
    transactions: Iterable[Mapping],
    interest_rate_percent,
    member_id=None,
    fiscal_year: str | None = None,
    quarter=None,
) -> dict:
    daily: dict[str, _LoanDay] = {d.date_key: _LoanDay(day=d) for d in days}

    for t in _matching(transactions, member_id, fiscal_year):
        rec = daily.get(t.get("date_key"))
        if rec is None:
            continue
        amt = _to_dec(t.get("amount"))
        kind = t.get("kind")
        if kind == "taken":
            rec.loan_taken += amt
        elif kind == "paid":
            rec.loan_paid += amt
        elif kind == "interestPaid":
            rec.interest_paid += amt

    rate = _rate(interest_rate_percent)

    principal = ZERO
    interest_due = ZERO
    ordered = [daily[d.date_key] for d in sorted(days, key=lambda d: d.ordinal)]
    for rec in ordered:
        principal += rec.loan_taken - rec.loan_paid
        rec.loan_remaining = principal

        daily_interest = principal * rate / LOAN_DAY_BASIS
        rec.interest = daily_interest

        # Overpaid interest carries forward as a negative balance.
        interest_due += daily_interest - rec.interest_paid
        rec.interest_remaining = interest_due

    q = _normalize_quarter(quarter)
    if q is not None:
        ordered = [r for r in ordered if r.day.quarter == q]

    last = ordered[-1] if ordered else None
    totals = {
        "total_taken": float(sum((r.loan_taken for r in ordered), ZERO)),
        "total_paid": float(sum((r.loan_paid for r in ordered), ZERO)),
        "total_interest": float(sum((r.interest for r in ordered), ZERO)),
        "total_interest_paid": float(sum((r.interest_paid for r in ordered), ZERO)),
        "final_loan_remaining": float(last.loan_remaining) if last else 0.0,
        "final_interest_remaining": float(last.interest_remaining) if last else 0.0,
    }
    return {"rows": [r.as_row() for r in ordered], "totals": totals}


def compute_group_ledger(transactions: Iterable[Mapping], fiscal_year: str | None = None) -> dict:
    """Running group cash balance in storage listing order.

    Rows are not re-sorted by date; the order the store returns them in is the
    order the balance runs in.
    """
    rows: list[dict] = []
    cash_in = ZERO
    cash_out = ZERO
    balance = ZERO
    for t in _matching(transactions, fiscal_year=fiscal_year):
        amt = _to_dec(t.get("amount"))
        if t.get("kind") == "in":
            balance += amt
            cash_in += amt
        else:
            balance -= amt
            if t.get("kind") == "out":
                cash_out += amt
        rows.append(
            {
                "id": t.get("id"),
                "date_key": t.get("date_key"),
                "kind": t.get("kind"),
                "amount": float(amt),
                "note": t.get("note"),
                "balance": float(balance),
            }
        )

    totals = {
        "total_in": float(cash_in),
        "total_out": float(cash_out),
        "final_balance": float(balance),
    }
    return {"rows": rows, "totals": totals}


def group_rows_by_quarter(rows: Iterable[Mapping]) -> dict[int, list[Mapping]]:
    out: dict[int, list[Mapping]] = {}
    for r in rows:
        out.setdefault(int(r["quarter"]), []).append(r)
    return out
