from app.db.models.team import Team
from app.db.models.case import Case
from app.db.models.case_history import CaseHistory
from app.db.models.case_event import CaseEvent

# Export all models
__all__ = [
    'Team',
    'Case',
    'CaseHistory',
    'CaseEvent'
]

# This ensures all models are imported in the correct order
