from pydantic import BaseModel, field_validator
from typing import Literal

SavingsKind = Literal["saving", "withdrawal"]
LoanKind = Literal["taken", "paid", "interestPaid"]
GroupKind = Literal["in", "out"]

# Amounts stay loosely typed here so the editing service can reject them
# with invalid_amount rather than a schema error.
Amount = float | str | None


def _trim_note(v: str | None):
    if v is None:
        return None
    v = v.strip()
    return v or None


class SavingsEntryIn(BaseModel):
    fiscal_year: str
    date_key: str
    kind: SavingsKind
    amount: Amount = None
    note: str | None = None

    @field_validator("note")
    @classmethod
    def note_trim(cls, v: str | None):
        return _trim_note(v)


class LoanEntryIn(BaseModel):
    fiscal_year: str
    date_key: str
    kind: LoanKind
    amount: Amount = None


class GroupEntryIn(BaseModel):
    fiscal_year: str
    date_key: str
    kind: GroupKind
    amount: Amount = None
    note: str | None = None

    @field_validator("note")
    @classmethod
    def note_trim(cls, v: str | None):
        return _trim_note(v)


class EntryResult(BaseModel):
    action: Literal["created", "updated", "deleted", "noop"]
    id: int | None = None
