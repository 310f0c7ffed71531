"""
Calendar-day and rolling-window membership tests for cases.

Dates are stored with full timestamp precision. Day tests compare only the
date portion of the stored value; window tests compare instants.
"""

from datetime import date, datetime, time, timedelta
from typing import Optional

from app.schemas.case import Case

DEFAULT_UPCOMING_DAYS = 7


def align(moment: datetime, like: datetime) -> datetime:
    """
    Give `moment` the same awareness as `like` so the two can be compared.

    A naive value is read as wall time in the other value's zone.
    """
    if (moment.tzinfo is None) == (like.tzinfo is None):
        return moment
    if like.tzinfo is None:
        return moment.replace(tzinfo=None)
    return moment.replace(tzinfo=like.tzinfo)


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, time.max)


def is_on_day(case: Case, day: date) -> bool:
    return case.previous_date.date() == day or case.next_date.date() == day


def is_today(case: Case, today: Optional[date] = None) -> bool:
    return is_on_day(case, today or date.today())


def upcoming_window(window_days: int = DEFAULT_UPCOMING_DAYS, today: Optional[date] = None):
    """
    Return the inclusive (start, end) bounds of a window of `window_days`
    calendar days beginning today.
    """
    if window_days < 1:
        raise ValueError(f"window_days must be at least 1, got {window_days}")
    today = today or date.today()
    return start_of_day(today), end_of_day(today + timedelta(days=window_days - 1))


def is_upcoming(case: Case, window_days: int = DEFAULT_UPCOMING_DAYS, today: Optional[date] = None) -> bool:
    start, end = upcoming_window(window_days, today)
    next_date = case.next_date
    return align(start, next_date) <= next_date <= align(end, next_date)


def is_past(case: Case, reference: datetime) -> bool:
    return case.next_date < align(reference, case.next_date)


def is_upcoming_after_today(case: Case, window_days: int = DEFAULT_UPCOMING_DAYS, today: Optional[date] = None) -> bool:
    """
    Future-only membership: in the upcoming window but not already on today's list.
    """
    today = today or date.today()
    return is_upcoming(case, window_days, today) and not is_today(case, today)
