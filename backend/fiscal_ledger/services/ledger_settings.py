from __future__ import annotations

from dataclasses import dataclass

from fiscal_ledger.core.config import settings as app_settings
from fiscal_ledger.services.store import FISCAL_YEARS, SETTINGS, DocumentStore


@dataclass(frozen=True)
class InterestRates:
    savings_interest_rate: float
    loan_interest_rate: float


def get_settings_record(store: DocumentStore) -> dict | None:
    rows = store.list(SETTINGS)
    return rows[0] if rows else None


def get_interest_rates(store: DocumentStore) -> InterestRates:
    row = get_settings_record(store)
    savings = app_settings.default_savings_interest_rate
    loan = app_settings.default_loan_interest_rate
    if row is not None:
        if row.get("savings_interest_rate") is not None:
            savings = float(row["savings_interest_rate"])
        if row.get("loan_interest_rate") is not None:
            loan = float(row["loan_interest_rate"])
    return InterestRates(savings_interest_rate=savings, loan_interest_rate=loan)


def save_settings(store: DocumentStore, values: dict) -> int:
    row = get_settings_record(store)
    if row is not None:
        store.update(SETTINGS, row["id"], values)
        return row["id"]
    return store.add(SETTINGS, values)


def list_fiscal_years(store: DocumentStore) -> list[str]:
    out = list(app_settings.fiscal_years)
    for r in store.list(FISCAL_YEARS):
        if r["label"] not in out:
            out.append(r["label"])
    return out
