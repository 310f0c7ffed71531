from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence

from app.schemas.case import Case, CaseFilter, DateBucket
from app.services.date_windows import align, is_past

CasePredicate = Callable[[Case], bool]


def matches_query(case: Case, query: str) -> bool:
    if not query.strip():
        return True
    return query.lower() in case.case_details.lower()


def matches_status(case: Case, status) -> bool:
    if status == "all":
        return True
    return case.status == status


def matches_date_bucket(case: Case, bucket: DateBucket, now: datetime) -> bool:
    if bucket == DateBucket.upcoming:
        return case.next_date >= align(now, case.next_date)
    if bucket == DateBucket.past:
        return is_past(case, now)
    return True


def build_predicate(case_filter: CaseFilter, now: Optional[datetime] = None) -> CasePredicate:
    """
    Combine the text, status and date-bucket tests of `case_filter` into one predicate.
    """
    now = now or datetime.now(timezone.utc)

    def predicate(case: Case) -> bool:
        return (
            matches_query(case, case_filter.query)
            and matches_status(case, case_filter.status)
            and matches_date_bucket(case, case_filter.date_bucket, now)
        )

    return predicate


def compose(cases: Sequence[Case], case_filter: CaseFilter, now: Optional[datetime] = None) -> List[Case]:
    """
    Return the cases matching every active filter, in their original order.
    """
    if not case_filter.is_active:
        return list(cases)
    predicate = build_predicate(case_filter, now)
    return [case for case in cases if predicate(case)]


def clear_filters() -> CaseFilter:
    return CaseFilter()
