from fastapi import APIRouter, Depends, Query

from fiscal_ledger.api.deps import current_user, month_table
from fiscal_ledger.schemas.ledger import CalendarDayOut
from fiscal_ledger.services.calendar import generate_fiscal_year_dates

router = APIRouter(prefix="/calendar", tags=["calendar"])


@router.get("", response_model=list[CalendarDayOut])
def fiscal_year_calendar(fiscal_year: str = Query(...), u=Depends(current_user)):
    return [d.as_dict() for d in generate_fiscal_year_dates(fiscal_year, month_table())]
