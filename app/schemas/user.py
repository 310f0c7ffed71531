from typing import Optional
from pydantic import BaseModel
from uuid import UUID


class User(BaseModel):
    """The authenticated Supabase user a request acts for."""
    id: UUID
    email: Optional[str] = None

    class Config:
        from_attributes = True
