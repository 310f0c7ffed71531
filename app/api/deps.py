from fastapi import Depends
from supabase import Client
from app.core.config import settings
from app.core.storage import CaseDocumentStorage
from app.core.supabase import get_supabase_client
from app.crud.case import CaseRepository
from app.crud.case_history import CaseHistoryRepository
from app.crud.local_store import LocalCaseStore


def get_case_repository():
    """
    Provide the configured case store.
    """
    if settings.CASE_STORE == "local":
        return LocalCaseStore(settings.LOCAL_STORE_PATH)
    return CaseRepository(get_supabase_client())


def get_history_repository(supabase: Client = Depends(get_supabase_client)) -> CaseHistoryRepository:
    return CaseHistoryRepository(supabase)


def get_storage(supabase: Client = Depends(get_supabase_client)) -> CaseDocumentStorage:
    return CaseDocumentStorage(supabase)
