"""
Dashboard numbers and lists.

`aggregate` counts a case as upcoming even when it is also on today's list,
while the dashboard's upcoming list leaves today's cases out.
"""

from collections import Counter
from datetime import date
from typing import Optional, Sequence

from app.schemas.case import Case, CaseStats, Dashboard
from app.services.date_windows import (
    DEFAULT_UPCOMING_DAYS,
    is_today,
    is_upcoming,
    is_upcoming_after_today,
)


def aggregate(cases: Sequence[Case], today: Optional[date] = None, window_days: int = DEFAULT_UPCOMING_DAYS) -> CaseStats:
    today = today or date.today()
    by_status = Counter(case.status.value for case in cases)
    return CaseStats(
        total=len(cases),
        by_status=dict(by_status),
        upcoming=sum(1 for case in cases if is_upcoming(case, window_days, today)),
        today=sum(1 for case in cases if is_today(case, today)),
    )


def build_dashboard(cases: Sequence[Case], today: Optional[date] = None, window_days: int = DEFAULT_UPCOMING_DAYS) -> Dashboard:
    today = today or date.today()
    todays_cases = [case for case in cases if is_today(case, today)]
    upcoming_cases = sorted(
        (case for case in cases if is_upcoming_after_today(case, window_days, today)),
        key=lambda case: case.next_date,
    )
    return Dashboard(
        stats=aggregate(cases, today, window_days),
        today_cases=todays_cases,
        upcoming_cases=upcoming_cases,
    )
