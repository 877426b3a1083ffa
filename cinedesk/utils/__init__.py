"""Utility modules for the CineDesk application."""

from cinedesk.utils.debounce import Debouncer
from cinedesk.utils.images import normalize_backdrop_url, normalize_poster_url, tmdb_image_url
from cinedesk.utils.logging import LogContext, get_logger, setup_logging
from cinedesk.utils.security import generate_secure_key, hash_token, verify_token

__all__ = [
    # Logging
    "get_logger",
    "LogContext",
    "setup_logging",
    # Debounce
    "Debouncer",
    # Images
    "normalize_backdrop_url",
    "normalize_poster_url",
    "tmdb_image_url",
    # Security
    "generate_secure_key",
    "hash_token",
    "verify_token",
]
