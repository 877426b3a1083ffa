"""External metadata providers."""

from cinedesk.services.metadata.search import MetadataSearch
from cinedesk.services.metadata.tmdb import TMDBError, TMDBService, tmdb_service

__all__ = [
    "MetadataSearch",
    "TMDBError",
    "TMDBService",
    "tmdb_service",
]
