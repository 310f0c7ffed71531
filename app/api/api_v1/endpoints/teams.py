from typing import List, Any
from fastapi import APIRouter, Depends, HTTPException, status
from supabase import Client
from app.core.auth import get_current_user
from app.core.errors import CaseStoreError
from app.core.supabase import get_supabase_client
from app.crud.team import get_teams
from app.schemas.team import Team
from app.schemas.user import User

router = APIRouter()


@router.get("/", response_model=List[Team])
async def list_teams(
    supabase: Client = Depends(get_supabase_client),
    current_user: User = Depends(get_current_user)
) -> Any:
    """
    Teams a case can be assigned to, ordered by name.
    """
    try:
        return await get_teams(supabase)
    except CaseStoreError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=e.message
        )
