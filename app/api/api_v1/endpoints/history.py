from datetime import date
from typing import List, Any, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, status, UploadFile, File, Form, Query, Path
from pydantic import ValidationError
import logging
from app.api.deps import get_case_repository, get_history_repository, get_storage
from app.core.auth import get_current_user
from app.core.errors import CaseStoreError
from app.core.storage import CaseDocumentStorage
from app.crud.case_history import CaseHistoryRepository
from app.schemas.history import HistoryCreate, HistoryFilter, HistoryItem
from app.schemas.user import User
from app.services.case_history import filter_history, merge_history, resolve_files

logger = logging.getLogger(__name__)
router = APIRouter()


async def ensure_case_access(repository, case_id: UUID, current_user: User) -> None:
    try:
        case = await repository.get_case(case_id, str(current_user.id))
    except CaseStoreError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)
    if not case:
        logger.warning(f"Case not found for history: {case_id}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Case not found"
        )


@router.get("/{case_id}/history", response_model=List[HistoryItem])
async def get_case_history(
    *,
    case_id: UUID = Path(..., description="The case whose history to list"),
    start: Optional[date] = Query(None, description="Earliest event date, inclusive"),
    end: Optional[date] = Query(None, description="Latest event date, inclusive"),
    action: str = Query("", description="Substring of the action"),
    keywords: str = Query("", description="Substring of the notes"),
    repository=Depends(get_case_repository),
    history_repository: CaseHistoryRepository = Depends(get_history_repository),
    storage: CaseDocumentStorage = Depends(get_storage),
    current_user: User = Depends(get_current_user)
) -> Any:
    """
    Get the merged history feed of a case, newest first.

    Stored files are returned as signed URLs valid for one hour.
    """
    await ensure_case_access(repository, case_id, current_user)

    try:
        history_rows = await history_repository.list_history_rows(case_id)
        event_rows = await history_repository.list_case_events(case_id)
    except CaseStoreError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to load history: {e.message}"
        )

    items = merge_history(history_rows, event_rows)
    items = filter_history(items, HistoryFilter(start=start, end=end, action=action, keywords=keywords))
    return await resolve_files(items, storage)


@router.post("/{case_id}/history", response_model=HistoryItem, status_code=status.HTTP_201_CREATED)
async def add_case_history(
    *,
    case_id: UUID = Path(..., description="The case to add history to"),
    event_date: Optional[date] = Form(None),
    action: Optional[str] = Form(None),
    stage_change: Optional[str] = Form(None),
    links: Optional[List[str]] = Form(None),
    notes: Optional[str] = Form(None),
    files: Optional[List[UploadFile]] = File(None),
    repository=Depends(get_case_repository),
    history_repository: CaseHistoryRepository = Depends(get_history_repository),
    storage: CaseDocumentStorage = Depends(get_storage),
    current_user: User = Depends(get_current_user)
) -> Any:
    """
    Add a manual history entry, uploading any attached files first.

    If an upload or the insert fails, files uploaded for this entry are removed.
    """
    files = [upload for upload in files or [] if upload.filename]
    try:
        entry = HistoryCreate(
            event_date=event_date or date.today(),
            action=action,
            stage_change=stage_change,
            links=links,
            notes=notes,
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.errors(include_url=False, include_context=False)
        )

    if not entry.has_content(len(files)):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Provide an action, notes, a link or a file"
        )

    await ensure_case_access(repository, case_id, current_user)

    uploaded: List[str] = []
    try:
        for upload in files:
            file_key = storage.generate_file_key(str(case_id), upload.filename)
            storage.upload_file(file_key, await upload.read(), content_type=upload.content_type)
            uploaded.append(file_key)

        row = await history_repository.create_entry(case_id, entry, uploaded, str(current_user.id))
    except CaseStoreError as e:
        storage.delete_files(uploaded)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to add history: {e.message}"
        )
    except Exception:
        logger.error(f"Unexpected error adding history to case {case_id}, removing {len(uploaded)} upload(s)")
        storage.delete_files(uploaded)
        raise

    if not row:
        storage.delete_files(uploaded)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add history"
        )

    logger.info(f"History entry {row.id} added to case {case_id} with {len(uploaded)} file(s)")
    return (await resolve_files([row.to_item()], storage))[0]
