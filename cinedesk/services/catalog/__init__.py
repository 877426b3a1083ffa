"""Public catalog browsing."""

from cinedesk.services.catalog.series_browser import (
    BrowseState,
    SeriesBrowser,
    SeriesFilters,
    apply_filters,
)

__all__ = [
    "BrowseState",
    "SeriesBrowser",
    "SeriesFilters",
    "apply_filters",
]
