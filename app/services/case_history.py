"""
Case history feed.

A case's history comes from two tables with different shapes: `case_history`
(manual entries and trigger-written system entries) and the older
`case_events` log of date-field changes. Both are converted to `HistoryItem`
and merged into one feed, newest first.
"""

import asyncio
from typing import Iterable, List, Optional, Sequence

from app.core.storage import CaseDocumentStorage
from app.schemas.history import HistoryEntry, HistoryFilter, HistoryItem
from app.utils.logging import log_warning


def merge_history(history_rows: Iterable[HistoryEntry], event_rows: Iterable[HistoryEntry]) -> List[HistoryItem]:
    """
    Normalize both sources and sort newest first.

    Equal timestamps keep their concatenation order (history rows first).
    """
    items = [row.to_item() for row in history_rows]
    items.extend(row.to_item() for row in event_rows)
    return sorted(items, key=lambda item: item.created_at.timestamp(), reverse=True)


async def _sign_one(storage: CaseDocumentStorage, file_key: str, expires_in: Optional[int]) -> str:
    return await asyncio.to_thread(storage.create_signed_url, file_key, expires_in)


async def resolve_item_files(item: HistoryItem, storage: CaseDocumentStorage, expires_in: Optional[int] = None) -> HistoryItem:
    """
    Replace an item's stored file paths with signed URLs.

    Every path is signed independently; paths that fail are left out.
    """
    if not item.document_files:
        return item

    results = await asyncio.gather(
        *(_sign_one(storage, path, expires_in) for path in item.document_files),
        return_exceptions=True,
    )
    signed = []
    for path, result in zip(item.document_files, results):
        if isinstance(result, BaseException):
            log_warning(f"Dropping {path}: {result}", context=f"History item {item.id}")
            continue
        signed.append(result)
    return item.model_copy(update={"document_files": signed})


async def resolve_files(items: Sequence[HistoryItem], storage: CaseDocumentStorage, expires_in: Optional[int] = None) -> List[HistoryItem]:
    return list(await asyncio.gather(*(resolve_item_files(item, storage, expires_in) for item in items)))


def matches_history_filter(item: HistoryItem, history_filter: HistoryFilter) -> bool:
    day = item.event_date or item.created_at.date()
    if history_filter.start and day < history_filter.start:
        return False
    if history_filter.end and day > history_filter.end:
        return False
    if history_filter.action and history_filter.action.lower() not in item.action.lower():
        return False
    keywords = history_filter.keywords.strip().lower()
    if keywords and keywords not in (item.notes or "").lower():
        return False
    return True


def filter_history(items: Sequence[HistoryItem], history_filter: HistoryFilter) -> List[HistoryItem]:
    return [item for item in items if matches_history_filter(item, history_filter)]
