from pydantic import BaseModel, field_validator

from fiscal_ledger.services.validators import is_valid_fiscal_year_label


class SettingsIn(BaseModel):
    savings_interest_rate: float
    loan_interest_rate: float
    fiscal_year_start: str | None = None
    currency_symbol: str = "Rs."

    @field_validator("savings_interest_rate", "loan_interest_rate")
    @classmethod
    def rate_non_negative(cls, v: float):
        if v != v or v < 0:
            raise ValueError("interest rate must be a non-negative number")
        return v


class SettingsOut(BaseModel):
    savings_interest_rate: float
    loan_interest_rate: float
    fiscal_year_start: str | None = None
    currency_symbol: str = "Rs."


class FiscalYearCreate(BaseModel):
    label: str

    @field_validator("label")
    @classmethod
    def label_shape(cls, v: str):
        v = (v or "").strip()
        if not is_valid_fiscal_year_label(v):
            raise ValueError("fiscal year must be YYYY/YYYY")
        return v
