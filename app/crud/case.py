from datetime import datetime, timezone
from typing import List, Optional
import logging
from supabase import Client
from app.crud.base import execute_query
from app.schemas.case import Case, CaseCreate, CaseUpdate

logger = logging.getLogger(__name__)

CASE_COLUMNS = "id, previous_date, next_date, status, case_details, user_id, team_id, created_at, updated_at"


class CaseRepository:
    """
    Cases stored in the Supabase `cases` table.

    Every query is scoped to the owning user.
    """

    table_name = "cases"

    def __init__(self, client: Client):
        self.client = client

    @property
    def table(self):
        return self.client.table(self.table_name)

    async def list_cases(self, owner_id: str) -> List[Case]:
        """
        Get all cases of a user, ordered by next date.
        """
        response = execute_query(
            self.table.select(CASE_COLUMNS)
            .eq("user_id", str(owner_id))
            .order("next_date"),
            "list_cases",
        )
        return [Case.model_validate(row) for row in response.data or []]

    async def get_case(self, case_id: str, owner_id: str) -> Optional[Case]:
        """
        Get a case by ID.
        """
        response = execute_query(
            self.table.select(CASE_COLUMNS)
            .eq("id", str(case_id))
            .eq("user_id", str(owner_id))
            .limit(1),
            "get_case",
        )
        if not response.data:
            return None
        return Case.model_validate(response.data[0])

    async def create_case(self, case_in: CaseCreate, owner_id: Optional[str]) -> Optional[Case]:
        """
        Create a new case owned by `owner_id`.
        """
        if not owner_id:
            logger.warning("Case creation skipped: no authenticated user")
            return None

        payload = case_in.model_dump(mode="json")
        payload["user_id"] = str(owner_id)
        response = execute_query(self.table.insert(payload), "create_case")
        if not response.data:
            logger.error("Case insert returned no row")
            return None

        case = Case.model_validate(response.data[0])
        logger.info(f"Case created successfully with ID: {case.id}")
        return case

    async def update_case(self, case_id: str, case_in: CaseUpdate, owner_id: Optional[str]) -> Optional[Case]:
        """
        Replace the editable fields of an existing case.
        """
        if not owner_id:
            logger.warning(f"Case update skipped for {case_id}: no authenticated user")
            return None

        payload = case_in.model_dump(mode="json")
        payload["updated_at"] = datetime.now(timezone.utc).isoformat()
        response = execute_query(
            self.table.update(payload)
            .eq("id", str(case_id))
            .eq("user_id", str(owner_id)),
            "update_case",
        )
        if not response.data:
            logger.warning(f"Case not found for update: {case_id}")
            return None

        logger.info(f"Case updated successfully: {case_id}")
        return Case.model_validate(response.data[0])

    async def delete_case(self, case_id: str, owner_id: Optional[str]) -> bool:
        """
        Delete a case by ID.
        """
        if not owner_id:
            logger.warning(f"Case deletion skipped for {case_id}: no authenticated user")
            return False

        response = execute_query(
            self.table.delete()
            .eq("id", str(case_id))
            .eq("user_id", str(owner_id)),
            "delete_case",
        )
        if not response.data:
            logger.warning(f"Case not found for deletion: {case_id}")
            return False

        logger.info(f"Case deleted successfully: {case_id}")
        return True
