from sqlalchemy import Integer, DateTime, func, String
from sqlalchemy.orm import Mapped, mapped_column
from fiscal_ledger.db.base import Base

class FiscalYearEntry(Base):
    __tablename__ = "fiscal_years"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    label: Mapped[str] = mapped_column(String(9), unique=True, index=True)
    created_at: Mapped[DateTime] = mapped_column(DateTime, server_default=func.now())
