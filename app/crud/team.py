from typing import List
from supabase import Client
from app.crud.base import execute_query
from app.schemas.team import Team


async def get_teams(client: Client) -> List[Team]:
    """
    Get all teams visible to the user, ordered by name.
    """
    response = execute_query(
        client.table("teams").select("id, name").order("name"),
        "get_teams",
    )
    return [Team.model_validate(row) for row in response.data or []]
