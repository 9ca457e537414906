from sqlalchemy import Integer, DateTime, func, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column
from fiscal_ledger.db.base import Base

class LedgerSettings(Base):
    __tablename__ = "ledger_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    savings_interest_rate: Mapped[float] = mapped_column(Numeric(8, 4), default=5.0)
    loan_interest_rate: Mapped[float] = mapped_column(Numeric(8, 4), default=7.0)
    fiscal_year_start: Mapped[str | None] = mapped_column(String(9), nullable=True)
    currency_symbol: Mapped[str] = mapped_column(String(8), default="Rs.")

    created_at: Mapped[DateTime] = mapped_column(DateTime, server_default=func.now())
