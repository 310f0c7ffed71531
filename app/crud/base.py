import logging
from postgrest.exceptions import APIError
from pydantic import ValidationError
from app.core.errors import CaseStoreError
from app.utils.logging import log_error

logger = logging.getLogger(__name__)


def execute_query(query, operation: str):
    """
    Run a PostgREST query, turning backend failures into CaseStoreError.
    """
    try:
        return query.execute()
    except APIError as e:
        message = e.message or str(e)
        logger.error(f"Database error in {operation}: {message}")
        raise CaseStoreError(message, operation=operation) from e
    except Exception as e:
        log_error(e, context=f"Unexpected error in {operation}")
        raise CaseStoreError(str(e), operation=operation) from e


def parse_rows(parse, data, operation: str):
    """
    Validate rows returned by the backend, turning malformed rows into CaseStoreError.
    """
    try:
        return parse(data)
    except ValidationError as e:
        logger.error(f"Malformed rows in {operation}: {e.error_count()} error(s)")
        raise CaseStoreError(f"Malformed data returned by {operation}", operation=operation) from e
