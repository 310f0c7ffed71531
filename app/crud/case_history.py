from typing import List, Optional
import logging
from supabase import Client
from app.crud.base import execute_query, parse_rows
from app.schemas.history import (
    HistoryCreate, LegacyEvent, ManualEntry,
    history_rows_adapter, legacy_events_adapter
)

logger = logging.getLogger(__name__)

HISTORY_COLUMNS = (
    "id, case_id, event_date, action, stage_change, document_links, "
    "document_files, notes, source, created_by, created_at"
)
EVENT_COLUMNS = "id, case_id, field, old_date, new_date, changed_at, changed_by"
DEFAULT_ACTION = "Manual update"


class CaseHistoryRepository:
    """
    Read access to both history tables of a case, and inserts of manual entries.

    `case_events` rows are written by database triggers only.
    """

    def __init__(self, client: Client):
        self.client = client

    async def list_history_rows(self, case_id: str) -> list:
        response = execute_query(
            self.client.table("case_history")
            .select(HISTORY_COLUMNS)
            .eq("case_id", str(case_id))
            .order("created_at", desc=True),
            "list_history_rows",
        )
        return parse_rows(history_rows_adapter.validate_python, response.data or [], "list_history_rows")

    async def list_case_events(self, case_id: str) -> List[LegacyEvent]:
        response = execute_query(
            self.client.table("case_events")
            .select(EVENT_COLUMNS)
            .eq("case_id", str(case_id))
            .order("changed_at", desc=True),
            "list_case_events",
        )
        return parse_rows(legacy_events_adapter.validate_python, response.data or [], "list_case_events")

    async def create_entry(
        self,
        case_id: str,
        entry: HistoryCreate,
        file_paths: List[str],
        user_id: Optional[str],
    ) -> Optional[ManualEntry]:
        """
        Insert a manual history entry referencing already uploaded files.
        """
        if not user_id:
            logger.warning(f"History entry for case {case_id} skipped: no authenticated user")
            return None

        payload = {
            "case_id": str(case_id),
            "event_date": entry.event_date.isoformat(),
            "action": entry.action or DEFAULT_ACTION,
            "stage_change": entry.stage_change,
            "document_links": entry.links or None,
            "document_files": file_paths or None,
            "notes": entry.notes,
            "source": "manual",
            "created_by": str(user_id),
        }
        response = execute_query(self.client.table("case_history").insert(payload), "create_history_entry")
        if not response.data:
            logger.error(f"History insert for case {case_id} returned no row")
            return None

        entry_row = parse_rows(ManualEntry.model_validate, response.data[0], "create_history_entry")
        logger.info(f"History entry added to case {case_id}")
        return entry_row
