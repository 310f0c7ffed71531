import calendar
from datetime import date
from typing import List, Sequence

from app.schemas.case import Case, DailyView
from app.services.date_windows import is_on_day


def daily_view(cases: Sequence[Case], day: date) -> DailyView:
    """Cases whose previous or next date falls on `day`."""
    return DailyView(day=day, cases=[case for case in cases if is_on_day(case, day)])


def month_view(cases: Sequence[Case], year: int, month: int) -> List[DailyView]:
    """One daily view per day of the month, empty days included."""
    _, days_in_month = calendar.monthrange(year, month)
    return [daily_view(cases, date(year, month, day)) for day in range(1, days_in_month + 1)]
