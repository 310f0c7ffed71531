from datetime import date
from typing import List, Any, Dict, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, status, Query, Path
from fastapi.responses import Response
from pydantic import ValidationError
import logging
from app.api.deps import get_case_repository
from app.core.auth import get_current_user
from app.core.config import settings
from app.core.errors import CaseStoreError
from app.schemas.case import Case, CaseCreate, CaseUpdate, CaseFilter, CaseStats, DailyView, Dashboard
from app.schemas.user import User
from app.services.calendar import daily_view, month_view
from app.services.case_export import export_cases_csv, export_filename
from app.services.case_filters import compose
from app.services.case_stats import aggregate, build_dashboard

logger = logging.getLogger(__name__)
router = APIRouter()


def store_error(e: CaseStoreError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=e.message
    )


def case_filter_params(
    q: str = Query("", description="Case-insensitive search in case details"),
    status_filter: str = Query("all", alias="status", description="Case status or 'all'"),
    date_bucket: str = Query("all", description="'all', 'upcoming' or 'past'"),
) -> CaseFilter:
    try:
        return CaseFilter(query=q, status=status_filter, date_bucket=date_bucket)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.errors(include_url=False, include_context=False)
        )


async def load_cases(repository, current_user: User) -> List[Case]:
    try:
        return await repository.list_cases(str(current_user.id))
    except CaseStoreError as e:
        raise store_error(e)


@router.post("/", response_model=Case, status_code=status.HTTP_201_CREATED)
async def create_case(
    *,
    repository=Depends(get_case_repository),
    case_in: CaseCreate,
    current_user: User = Depends(get_current_user)
) -> Any:
    """
    Create new case owned by the current user.
    """
    logger.info(f"Case creation requested by user: {current_user.id}")

    try:
        new_case = await repository.create_case(case_in, str(current_user.id))
    except CaseStoreError as e:
        raise store_error(e)

    if not new_case:
        logger.error("Failed to create case")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create case"
        )
    return new_case


@router.get("/", response_model=List[Case])
async def get_cases(
    *,
    repository=Depends(get_case_repository),
    current_user: User = Depends(get_current_user),
    case_filter: CaseFilter = Depends(case_filter_params)
) -> Any:
    """
    Retrieve the current user's cases.

    Supports search in case details and filtering by status and date bucket.
    """
    cases = await load_cases(repository, current_user)
    filtered = compose(cases, case_filter)
    logger.info(f"Retrieved {len(filtered)} of {len(cases)} cases")
    return filtered


@router.get("/export")
async def export_cases(
    *,
    repository=Depends(get_case_repository),
    current_user: User = Depends(get_current_user),
    case_filter: CaseFilter = Depends(case_filter_params)
) -> Response:
    """
    Download the filtered cases as CSV.
    """
    cases = compose(await load_cases(repository, current_user), case_filter)
    logger.info(f"Exporting {len(cases)} cases for user: {current_user.id}")
    return Response(
        content=export_cases_csv(cases),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export_filename()}"'},
    )


@router.get("/stats", response_model=CaseStats)
async def get_case_stats(
    *,
    repository=Depends(get_case_repository),
    current_user: User = Depends(get_current_user)
) -> Any:
    cases = await load_cases(repository, current_user)
    return aggregate(cases, window_days=settings.UPCOMING_WINDOW_DAYS)


@router.get("/dashboard", response_model=Dashboard)
async def get_dashboard(
    *,
    repository=Depends(get_case_repository),
    current_user: User = Depends(get_current_user)
) -> Any:
    """
    Stats, today's cases and the cases of the coming days.
    """
    cases = await load_cases(repository, current_user)
    return build_dashboard(cases, window_days=settings.UPCOMING_WINDOW_DAYS)


@router.get("/daily", response_model=DailyView)
async def get_daily_cases(
    *,
    repository=Depends(get_case_repository),
    current_user: User = Depends(get_current_user),
    day: Optional[date] = Query(None, description="Day to show, defaults to today")
) -> Any:
    cases = await load_cases(repository, current_user)
    return daily_view(cases, day or date.today())


@router.get("/calendar", response_model=List[DailyView])
async def get_calendar(
    *,
    repository=Depends(get_case_repository),
    current_user: User = Depends(get_current_user),
    year: int = Query(..., ge=1, le=9999),
    month: int = Query(..., ge=1, le=12)
) -> Any:
    cases = await load_cases(repository, current_user)
    return month_view(cases, year, month)


@router.get("/{case_id}", response_model=Case)
async def read_case(
    *,
    repository=Depends(get_case_repository),
    case_id: UUID = Path(..., description="The ID of the case to retrieve"),
    current_user: User = Depends(get_current_user)
) -> Any:
    """
    Get case by ID.
    """
    try:
        case = await repository.get_case(case_id, str(current_user.id))
    except CaseStoreError as e:
        raise store_error(e)

    if not case:
        logger.warning(f"Case not found: {case_id}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Case not found"
        )
    return case


@router.put("/{case_id}", response_model=Case)
async def update_case(
    *,
    repository=Depends(get_case_repository),
    case_id: UUID = Path(..., description="The ID of the case to update"),
    case_in: CaseUpdate,
    current_user: User = Depends(get_current_user)
) -> Any:
    """
    Update case.

    All editable fields are replaced.
    """
    logger.info(f"Case update requested for {case_id} by user: {current_user.id}")

    try:
        updated_case = await repository.update_case(case_id, case_in, str(current_user.id))
    except CaseStoreError as e:
        raise store_error(e)

    if not updated_case:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Case not found"
        )
    return updated_case


@router.delete("/{case_id}", response_model=Dict[str, bool])
async def delete_case(
    *,
    repository=Depends(get_case_repository),
    case_id: UUID = Path(..., description="The ID of the case to delete"),
    current_user: User = Depends(get_current_user)
) -> Any:
    """
    Delete case.
    """
    logger.info(f"Case deletion requested for {case_id} by user: {current_user.id}")

    try:
        success = await repository.delete_case(case_id, str(current_user.id))
    except CaseStoreError as e:
        raise store_error(e)

    if not success:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Case not found"
        )
    return {"success": True}
