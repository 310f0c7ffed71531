from enum import Enum
from typing import Dict, List, Literal, Optional, Union
from datetime import date, datetime
from uuid import UUID
from pydantic import BaseModel, validator


class CaseStatus(str, Enum):
    summons = "summons"
    hearing = "hearing"
    judgment = "judgment"
    appeal = "appeal"
    pending = "pending"
    active = "active"
    completed = "completed"
    urgent = "urgent"
    dismissed = "dismissed"
    settled = "settled"


# Statuses of the first diary revision. Deprecated: every value maps onto the
# current set, so stored rows only need their spelling normalized.
LEGACY_STATUS_MAP: Dict[str, CaseStatus] = {
    "pending": CaseStatus.pending,
    "active": CaseStatus.active,
    "completed": CaseStatus.completed,
    "urgent": CaseStatus.urgent,
}


def normalize_status(value: Union[str, CaseStatus]) -> CaseStatus:
    """
    Map a stored or submitted status (current or legacy spelling) to CaseStatus.
    """
    if isinstance(value, CaseStatus):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Status must be a string or CaseStatus enum, got {type(value)}")

    key = value.strip().lower()
    if key in LEGACY_STATUS_MAP:
        return LEGACY_STATUS_MAP[key]
    try:
        return CaseStatus(key)
    except ValueError:
        raise ValueError(f"Invalid status value: {value}. Valid values are: {[e.value for e in CaseStatus]}")


class DateBucket(str, Enum):
    all = "all"
    upcoming = "upcoming"
    past = "past"


class CaseBase(BaseModel):
    previous_date: datetime
    next_date: datetime
    status: CaseStatus = CaseStatus.pending
    case_details: str
    team_id: Optional[UUID] = None

    class Config:
        from_attributes = True

    @validator('status', pre=True)
    def validate_status(cls, v):
        return normalize_status(v)

    @validator('case_details')
    def validate_case_details(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Case details must not be empty")
        return v


class CaseCreate(CaseBase):
    pass


class CaseUpdate(CaseBase):
    """Full replacement of the editable fields; partial updates are not supported."""
    pass


class Case(CaseBase):
    id: UUID
    user_id: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CaseFilter(BaseModel):
    query: str = ""
    status: Union[CaseStatus, Literal["all"]] = "all"
    date_bucket: DateBucket = DateBucket.all

    @validator('status', pre=True)
    def validate_status(cls, v):
        if v is None or v == "all":
            return "all"
        return normalize_status(v)

    @property
    def is_active(self) -> bool:
        return bool(self.query.strip()) or self.status != "all" or self.date_bucket != DateBucket.all


class CaseStats(BaseModel):
    total: int
    by_status: Dict[str, int]
    upcoming: int
    today: int


class DailyView(BaseModel):
    day: date
    cases: List[Case]


class Dashboard(BaseModel):
    stats: CaseStats
    today_cases: List[Case]
    upcoming_cases: List[Case]
