from sqlalchemy import Integer, DateTime, func, ForeignKey, Numeric, String, Index
from sqlalchemy.orm import Mapped, mapped_column
from fiscal_ledger.db.base import Base

# date_key columns hold civil-calendar dates (YYYY-MM-DD), which are not
# representable as Gregorian DATE values.


class SavingsTransaction(Base):
    __tablename__ = "savings_transactions"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    member_id: Mapped[int] = mapped_column(ForeignKey("members.id", ondelete="CASCADE"), index=True)
    fiscal_year: Mapped[str] = mapped_column(String(9), index=True)
    date_key: Mapped[str] = mapped_column(String(10))
    kind: Mapped[str] = mapped_column(String(16))
    amount: Mapped[float] = mapped_column(Numeric(14, 2))
    note: Mapped[str | None] = mapped_column(String(256), nullable=True)
    created_at: Mapped[DateTime] = mapped_column(DateTime, server_default=func.now())


class LoanTransaction(Base):
    __tablename__ = "loan_transactions"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    member_id: Mapped[int] = mapped_column(ForeignKey("members.id", ondelete="CASCADE"), index=True)
    fiscal_year: Mapped[str] = mapped_column(String(9), index=True)
    date_key: Mapped[str] = mapped_column(String(10))
    kind: Mapped[str] = mapped_column(String(16))
    amount: Mapped[float] = mapped_column(Numeric(14, 2))
    created_at: Mapped[DateTime] = mapped_column(DateTime, server_default=func.now())


class GroupTransaction(Base):
    __tablename__ = "group_transactions"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    fiscal_year: Mapped[str] = mapped_column(String(9), index=True)
    date_key: Mapped[str] = mapped_column(String(10))
    kind: Mapped[str] = mapped_column(String(16))
    amount: Mapped[float] = mapped_column(Numeric(14, 2))
    note: Mapped[str | None] = mapped_column(String(256), nullable=True)
    created_at: Mapped[DateTime] = mapped_column(DateTime, server_default=func.now())


Index("ix_savings_transactions_identity", SavingsTransaction.member_id, SavingsTransaction.fiscal_year, SavingsTransaction.date_key)
Index("ix_loan_transactions_identity", LoanTransaction.member_id, LoanTransaction.fiscal_year, LoanTransaction.date_key)
