"""Authentication module."""

from cinedesk.auth.dependencies import get_current_admin, get_optional_admin

__all__ = [
    "get_current_admin",
    "get_optional_admin",
]
