from __future__ import annotations

from decimal import Decimal

from fiscal_ledger.services.store import GROUP, MEMBERS, SAVINGS, DocumentStore


def _sum_kind(records: list[dict], kind: str) -> Decimal:
    return sum((Decimal(str(r["amount"] or 0)) for r in records if r["kind"] == kind), Decimal("0"))


def summarize(store: DocumentStore) -> dict:
    savings = store.list(SAVINGS)
    group = store.list(GROUP)
    return {
        "member_count": len(store.list(MEMBERS)),
        "total_savings": float(_sum_kind(savings, "saving")),
        "total_withdrawals": float(_sum_kind(savings, "withdrawal")),
        "total_cash_in": float(_sum_kind(group, "in")),
        "total_cash_out": float(_sum_kind(group, "out")),
    }
