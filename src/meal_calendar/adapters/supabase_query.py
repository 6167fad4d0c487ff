"""Helpers shared by the Supabase repositories."""

from typing import Any

import httpx
from postgrest.exceptions import APIError

from meal_calendar.domain.errors import PersistenceError


def execute(query: Any, action: str) -> Any:
    """Run a PostgREST query, wrapping backend and transport failures."""
    try:
        return query.execute()
    except APIError as exc:
        raise PersistenceError(f"Failed to {action}: {exc.message}") from exc
    except httpx.HTTPError as exc:
        raise PersistenceError(f"Failed to {action}: {exc}") from exc
