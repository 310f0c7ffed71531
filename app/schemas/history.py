from enum import Enum
from typing import Annotated, List, Literal, Optional, Union
from datetime import date, datetime
from uuid import UUID
from pydantic import AnyHttpUrl, BaseModel, Field, TypeAdapter, validator

_http_url = TypeAdapter(AnyHttpUrl)

DATE_FIELD_ACTIONS = {
    "previous_date": "Previous date updated",
    "next_date": "Next date updated",
}


class HistorySource(str, Enum):
    manual = "manual"
    system = "system"
    event = "event"


class HistoryItem(BaseModel):
    """One normalized entry of a case's history feed, whatever its origin."""
    id: UUID
    created_at: datetime
    event_date: Optional[date] = None
    action: str
    stage_change: Optional[str] = None
    notes: Optional[str] = None
    document_links: Optional[List[str]] = None
    document_files: Optional[List[str]] = None
    source: HistorySource


class _HistoryRow(BaseModel):
    id: UUID
    case_id: UUID
    event_date: Optional[date] = None
    action: str
    stage_change: Optional[str] = None
    document_links: Optional[List[str]] = None
    document_files: Optional[List[str]] = None
    notes: Optional[str] = None
    created_by: Optional[UUID] = None
    created_at: datetime

    def to_item(self) -> HistoryItem:
        return HistoryItem(
            id=self.id,
            created_at=self.created_at,
            event_date=self.event_date,
            action=self.action,
            stage_change=self.stage_change,
            notes=self.notes,
            document_links=self.document_links,
            document_files=self.document_files,
            source=HistorySource(self.source),
        )


class ManualEntry(_HistoryRow):
    """A `case_history` row written by a user through the history form."""
    source: Literal["manual"]


class SystemEntry(_HistoryRow):
    """A `case_history` row written by a database trigger."""
    source: Literal["system"]


class LegacyEvent(BaseModel):
    """A `case_events` row: one change of a case date field."""
    source: Literal["event"] = "event"
    id: UUID
    case_id: UUID
    field: Literal["previous_date", "next_date"]
    old_date: Optional[datetime] = None
    new_date: datetime
    changed_at: datetime
    changed_by: Optional[UUID] = None

    def to_item(self) -> HistoryItem:
        return HistoryItem(
            id=self.id,
            created_at=self.changed_at,
            event_date=self.new_date.date(),
            action=DATE_FIELD_ACTIONS[self.field],
            source=HistorySource.event,
        )


HistoryRow = Annotated[Union[ManualEntry, SystemEntry], Field(discriminator="source")]
HistoryEntry = Union[ManualEntry, SystemEntry, LegacyEvent]

history_rows_adapter = TypeAdapter(List[HistoryRow])
legacy_events_adapter = TypeAdapter(List[LegacyEvent])


class HistoryFilter(BaseModel):
    start: Optional[date] = None
    end: Optional[date] = None
    action: str = ""
    keywords: str = ""


def normalize_link(link: str) -> str:
    """
    Validate a document link, assuming https:// when no scheme was typed.
    """
    trimmed = link.strip()
    if not trimmed:
        raise ValueError("Empty link")
    candidate = trimmed if trimmed.startswith("http") else f"https://{trimmed}"
    return str(_http_url.validate_python(candidate))


class HistoryCreate(BaseModel):
    event_date: date
    action: Optional[str] = None
    stage_change: Optional[str] = None
    links: List[str] = []
    notes: Optional[str] = None

    @validator('action', 'stage_change', 'notes', pre=True)
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @validator('links', pre=True)
    def validate_links(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            v = [v]
        normalized = []
        for link in v:
            if not link or not link.strip():
                continue
            try:
                normalized.append(normalize_link(link))
            except ValueError:
                raise ValueError(f"Invalid link: {link}")
        # first-seen order, no duplicates
        return list(dict.fromkeys(normalized))

    def has_content(self, file_count: int = 0) -> bool:
        return bool(self.action or self.notes or self.links or file_count)
