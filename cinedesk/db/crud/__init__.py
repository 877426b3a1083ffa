"""CRUD operations module."""

from cinedesk.db.crud.admins import (
    create_admin,
    get_admin,
    get_admin_by_email,
    record_admin_action,
)
from cinedesk.db.crud.films import (
    DuplicateFilmError,
    create_film,
    find_duplicate_film,
    get_film,
    get_or_create_genre,
    is_unique_violation,
    list_films,
    list_genres,
)
from cinedesk.db.crud.series import get_all_series

__all__ = [
    "DuplicateFilmError",
    "create_admin",
    "create_film",
    "find_duplicate_film",
    "get_admin",
    "get_admin_by_email",
    "get_all_series",
    "get_film",
    "get_or_create_genre",
    "is_unique_violation",
    "list_films",
    "list_genres",
    "record_admin_action",
]
