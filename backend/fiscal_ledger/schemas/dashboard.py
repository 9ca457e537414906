from pydantic import BaseModel

class DashboardOut(BaseModel):
    member_count: int
    total_savings: float
    total_withdrawals: float
    total_cash_in: float
    total_cash_out: float
