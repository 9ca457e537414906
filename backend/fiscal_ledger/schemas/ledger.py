from pydantic import BaseModel


class CalendarDayOut(BaseModel):
    date_key: str
    quarter: int
    ordinal: int
    month_name: str


class SavingsRow(BaseModel):
    date_key: str
    quarter: int
    ordinal: int
    saving: float
    withdrawal: float
    note: str
    balance: float
    interest: float
    quarter_interest: float
    total_with_interest: float


class SavingsTotals(BaseModel):
    total_saving: float
    total_withdrawal: float
    final_balance: float
    total_interest: float
    final_total_with_interest: float


class SavingsLedgerOut(BaseModel):
    member_id: int
    fiscal_year: str
    interest_rate_percent: float
    rows: list[SavingsRow]
    totals: SavingsTotals


class LoanRow(BaseModel):
    date_key: str
    quarter: int
    ordinal: int
    loan_taken: float
    loan_paid: float
    interest: float
    interest_paid: float
    loan_remaining: float
    interest_remaining: float


class LoanTotals(BaseModel):
    total_taken: float
    total_paid: float
    total_interest: float
    total_interest_paid: float
    final_loan_remaining: float
    final_interest_remaining: float


class LoanLedgerOut(BaseModel):
    member_id: int
    fiscal_year: str
    interest_rate_percent: float
    rows: list[LoanRow]
    totals: LoanTotals


class GroupRow(BaseModel):
    id: int | None
    date_key: str
    kind: str
    amount: float
    note: str | None
    balance: float


class GroupTotals(BaseModel):
    total_in: float
    total_out: float
    final_balance: float


class GroupLedgerOut(BaseModel):
    fiscal_year: str
    rows: list[GroupRow]
    totals: GroupTotals
