"""
File-backed case store.

All cases live in one JSON array under a single well-known key. Every
mutation rewrites the whole array; there is no partial update on disk.
"""

import asyncio
import json
import logging
import os
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

import aiofiles

from app.schemas.case import Case, CaseCreate, CaseUpdate

logger = logging.getLogger(__name__)

STORAGE_KEY = "legalCases"

# One lock per file, shared by every store instance pointing at it
_path_locks: Dict[str, asyncio.Lock] = {}


class LocalCaseStore:
    """
    Same interface as CaseRepository, for single-machine use without Supabase.
    """

    def __init__(self, path: str):
        self.path = path

    @property
    def lock(self) -> asyncio.Lock:
        return _path_locks.setdefault(os.path.abspath(self.path), asyncio.Lock())

    async def _load(self) -> List[Case]:
        if not os.path.exists(self.path):
            return []
        async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
            raw = await f.read()
        try:
            rows = json.loads(raw).get(STORAGE_KEY, []) if raw.strip() else []
            return [Case.model_validate(row) for row in rows]
        except (ValueError, AttributeError) as e:
            logger.error(f"Error loading cases from {self.path}: {e}")
            return []

    async def _save(self, cases: List[Case]) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        payload = {STORAGE_KEY: [case.model_dump(mode="json") for case in cases]}
        # Readers never see a half-written file
        tmp_path = f"{self.path}.tmp"
        async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
            await f.write(json.dumps(payload, indent=2))
        os.replace(tmp_path, self.path)

    async def list_cases(self, owner_id: str) -> List[Case]:
        return [case for case in await self._load() if str(case.user_id) == str(owner_id)]

    async def get_case(self, case_id: str, owner_id: str) -> Optional[Case]:
        return next(
            (case for case in await self.list_cases(owner_id) if str(case.id) == str(case_id)),
            None,
        )

    async def create_case(self, case_in: CaseCreate, owner_id: Optional[str]) -> Optional[Case]:
        if not owner_id:
            logger.warning("Case creation skipped: no authenticated user")
            return None

        now = datetime.now(timezone.utc)
        case = Case(
            **case_in.model_dump(),
            id=uuid.uuid4(),
            user_id=owner_id,
            created_at=now,
            updated_at=now,
        )
        async with self.lock:
            cases = await self._load()
            cases.append(case)
            await self._save(cases)
        logger.info(f"Case created successfully with ID: {case.id}")
        return case

    async def update_case(self, case_id: str, case_in: CaseUpdate, owner_id: Optional[str]) -> Optional[Case]:
        if not owner_id:
            logger.warning(f"Case update skipped for {case_id}: no authenticated user")
            return None

        async with self.lock:
            cases = await self._load()
            for index, case in enumerate(cases):
                if str(case.id) == str(case_id) and str(case.user_id) == str(owner_id):
                    updated = case.model_copy(update={
                        **case_in.model_dump(),
                        "updated_at": datetime.now(timezone.utc),
                    })
                    cases[index] = updated
                    await self._save(cases)
                    logger.info(f"Case updated successfully: {case_id}")
                    return updated

        logger.warning(f"Case not found for update: {case_id}")
        return None

    async def delete_case(self, case_id: str, owner_id: Optional[str]) -> bool:
        if not owner_id:
            logger.warning(f"Case deletion skipped for {case_id}: no authenticated user")
            return False

        async with self.lock:
            cases = await self._load()
            remaining = [
                case for case in cases
                if not (str(case.id) == str(case_id) and str(case.user_id) == str(owner_id))
            ]
            if len(remaining) == len(cases):
                logger.warning(f"Case not found for deletion: {case_id}")
                return False

            await self._save(remaining)
        logger.info(f"Case deleted successfully: {case_id}")
        return True
