import logging
from fastapi import APIRouter, Depends
from supabase import Client
from app.core.config import settings
from app.core.supabase import get_supabase_client

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("")
async def health_check(supabase: Client = Depends(get_supabase_client)):
    """
    Report whether the API is up and the `cases` table can be queried.
    """
    try:
        supabase.table("cases").select("id").limit(1).execute()
        db_status = "connected"
    except Exception as e:
        logger.warning(f"Health check could not reach the cases table: {e}")
        db_status = f"error: {str(e)}"

    return {
        "status": "ok",
        "message": "API is running",
        "version": settings.VERSION,
        "case_store": settings.CASE_STORE,
        "database": db_status
    }
