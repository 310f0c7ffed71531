from app.schemas.user import User
from app.schemas.case import (
    Case, CaseCreate, CaseUpdate, CaseStatus, CaseFilter, CaseStats,
    DateBucket, DailyView, Dashboard
)
from app.schemas.history import (
    HistoryItem, HistorySource, HistoryFilter, HistoryCreate,
    ManualEntry, SystemEntry, LegacyEvent
)
from app.schemas.team import Team
from app.schemas.auth import Token, TokenPayload, RefreshRequest

# Export all schemas
__all__ = [
    'User',
    'Case', 'CaseCreate', 'CaseUpdate', 'CaseStatus', 'CaseFilter', 'CaseStats',
    'DateBucket', 'DailyView', 'Dashboard',
    'HistoryItem', 'HistorySource', 'HistoryFilter', 'HistoryCreate',
    'ManualEntry', 'SystemEntry', 'LegacyEvent',
    'Team',
    'Token', 'TokenPayload', 'RefreshRequest'
]
