"""Image URL helpers for TMDB paths and stored media."""

import re

from cinedesk.constants import (
    IMAGE_SIZE_DETAIL_POSTER,
    IMAGE_SIZE_ORIGINAL,
    PLACEHOLDER_BACKDROP,
    PLACEHOLDER_POSTER,
    TMDB_IMAGE_BASE_URL,
)

_ABSOLUTE_URL = re.compile(r"^https?://")


def tmdb_image_url(path: str | None, size: str) -> str | None:
    """Build a TMDB image URL like `https://image.tmdb.org/t/p/w500/abc.jpg`."""
    if not path:
        return None
    if not path.startswith("/"):
        path = f"/{path}"
    return f"{TMDB_IMAGE_BASE_URL}/{size}{path}"


def is_absolute_url(value: str | None) -> bool:
    return bool(value) and bool(_ABSOLUTE_URL.match(value.strip()))


def normalize_backdrop_url(raw: str | None) -> str:
    """Stored backdrop -> displayable URL.

    Absolute URLs (uploads, TMDB previews) are kept, bare TMDB paths get the
    full-size prefix and anything else falls back to the placeholder.
    """
    if raw and raw.strip():
        if is_absolute_url(raw):
            return raw.strip()
        return tmdb_image_url(raw.strip(), IMAGE_SIZE_ORIGINAL) or PLACEHOLDER_BACKDROP
    return PLACEHOLDER_BACKDROP


def normalize_poster_url(raw: str | None) -> str:
    """Stored poster -> displayable URL (w300 for bare TMDB paths)."""
    if raw and raw.strip():
        if is_absolute_url(raw):
            return raw.strip()
        return tmdb_image_url(raw.strip(), IMAGE_SIZE_DETAIL_POSTER) or PLACEHOLDER_POSTER
    return PLACEHOLDER_POSTER
