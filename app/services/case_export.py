from datetime import date
from typing import Optional, Sequence

from app.schemas.case import Case

CSV_HEADER = ["ID", "Previous Date", "Next Date", "Status", "Case Details", "Created", "Updated"]
DATE_FORMAT = "%Y-%m-%d"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def quote_field(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def case_to_row(case: Case) -> list:
    return [
        str(case.id),
        case.previous_date.strftime(DATE_FORMAT),
        case.next_date.strftime(DATE_FORMAT),
        case.status.value,
        quote_field(case.case_details),
        case.created_at.strftime(TIMESTAMP_FORMAT),
        case.updated_at.strftime(TIMESTAMP_FORMAT),
    ]


def export_cases_csv(cases: Sequence[Case]) -> str:
    """
    Render cases as the diary's CSV report.

    Only the free-text case details are quoted; every other column is an id,
    an enum value or a formatted date and never contains a comma.
    """
    rows = [CSV_HEADER] + [case_to_row(case) for case in cases]
    return "\n".join(",".join(row) for row in rows)


def export_filename(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"legal-cases-{today.strftime(DATE_FORMAT)}.csv"
