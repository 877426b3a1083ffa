"""SQLAlchemy models."""

from cinedesk.models.admin import Admin, AdminLog
from cinedesk.models.base import Base
from cinedesk.models.film import Film, HomepageCategory
from cinedesk.models.genre import Genre
from cinedesk.models.series import Series

__all__ = [
    "Base",
    "Admin",
    "AdminLog",
    "Film",
    "HomepageCategory",
    "Genre",
    "Series",
]
