"""Request-scoped dependencies shared by the API routers."""
from typing import Optional

from fastapi import Header, Request

from cookwise.infra.store import JsonStore
from cookwise.utilities.config import DEFAULT_HOUSEHOLD_ID


def get_store(request: Request) -> JsonStore:
    return request.app.state.store


def get_household(x_household_id: Optional[str] = Header(default=None)) -> str:
    """Household scope of the request; auth is handled in front of this service."""
    return (x_household_id or DEFAULT_HOUSEHOLD_ID).strip()
