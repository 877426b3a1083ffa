"""Series catalog browser.

The whole series list is fetched on every filter-change cycle and narrowed
client-side: genre substring, then VIP partition, then a debounced title
search. Filters round-trip through the page URL so a filtered view can be
shared or bookmarked.
"""

import enum
import logging
from collections.abc import Awaitable, Callable, Iterable, Sequence
from dataclasses import dataclass
from urllib.parse import parse_qs, urlencode

from pydantic import TypeAdapter

from cinedesk.config import get_settings
from cinedesk.constants import BROWSE_DEBOUNCE_SECONDS
from cinedesk.models.schemas import SeriesRead
from cinedesk.utils.debounce import Debouncer
from cinedesk.utils.http_client import get_general_client

logger = logging.getLogger(__name__)

SERIES_PATH = "/series"
VIP_VALUES = ("true", "false")
LOAD_ERROR = "Could not load series. Please try again."

SeriesFetcher = Callable[[], Awaitable[Sequence[SeriesRead]]]

_series_list = TypeAdapter(list[SeriesRead])


@dataclass
class SeriesFilters:
    """genre / vip / q, as they appear in the query string."""

    genre: str = ""
    vip: str = ""  # "", "true" or "false"
    q: str = ""

    @classmethod
    def from_query_string(cls, query_string: str) -> "SeriesFilters":
        params = parse_qs(query_string.lstrip("?"))

        def first(name: str) -> str:
            return params.get(name, [""])[0]

        vip = first("vip")
        return cls(genre=first("genre"), vip=vip if vip in VIP_VALUES else "", q=first("q"))

    def to_query_string(self) -> str:
        params = [(k, v) for k, v in (("genre", self.genre), ("q", self.q), ("vip", self.vip)) if v]
        return urlencode(params)

    @property
    def url(self) -> str:
        query = self.to_query_string()
        return f"{SERIES_PATH}?{query}" if query else SERIES_PATH


def apply_filters(
    series: Iterable[SeriesRead],
    genre: str = "",
    vip: str = "",
    term: str = "",
) -> list[SeriesRead]:
    """genre substring -> VIP partition -> title substring, all case-insensitive."""
    results = list(series)
    if genre:
        needle = genre.lower()
        results = [s for s in results if needle in (s.genre or "").lower()]
    if vip == "true":
        results = [s for s in results if s.isvip]
    elif vip == "false":
        results = [s for s in results if not s.isvip]
    if term:
        needle = term.lower()
        results = [s for s in results if needle in s.title.lower()]
    return results


class BrowseState(str, enum.Enum):
    """What the series grid should show."""

    LOADING = "loading"
    ERROR = "error"
    EMPTY = "empty"
    READY = "ready"


async def fetch_series_via_api() -> list[SeriesRead]:
    """GET /api/series from our own API."""
    settings = get_settings()
    client = get_general_client()
    response = await client.get(f"{settings.app_url}/api/series")
    response.raise_for_status()
    return _series_list.validate_python(response.json())


class SeriesBrowser:
    """Headless model of the series catalog page."""

    def __init__(
        self,
        fetch_all: SeriesFetcher | None = None,
        query_string: str = "",
        on_url_change: Callable[[str], None] | None = None,
        debounce_seconds: float = BROWSE_DEBOUNCE_SECONDS,
    ) -> None:
        self._fetch_all = fetch_all or fetch_series_via_api
        self._on_url_change = on_url_change
        self._debouncer = Debouncer(debounce_seconds, self._commit_search_term)
        self._generation = 0

        self.filters = SeriesFilters.from_query_string(query_string)
        self.debounced_term = self.filters.q.strip()
        self.items: list[SeriesRead] = []
        self.state = BrowseState.LOADING
        self.error: str | None = None
        self.searching = False
        self.url = self.filters.url

    async def mount(self) -> None:
        """Initial load with the filters read from the URL."""
        self._write_url()
        await self.refresh()

    async def set_genre(self, genre: str) -> None:
        self.filters.genre = genre
        self._write_url()
        await self.refresh()

    async def set_vip(self, vip: str) -> None:
        self.filters.vip = vip if vip in VIP_VALUES else ""
        self._write_url()
        await self.refresh()

    def set_search_term(self, term: str) -> None:
        """Keystroke handler; the title filter follows after the debounce."""
        self.filters.q = term
        self._write_url()
        self.searching = True
        self._debouncer.trigger()

    async def reset(self) -> None:
        """Clear all three filters."""
        self._debouncer.cancel()
        self.filters = SeriesFilters()
        self.debounced_term = ""
        self.searching = False
        self._write_url()
        await self.refresh()

    async def wait_idle(self) -> None:
        await self._debouncer.wait()

    async def refresh(self) -> None:
        """Refetch everything and re-apply the filter chain."""
        self._generation += 1
        generation = self._generation
        self.state = BrowseState.LOADING
        self.error = None

        try:
            everything = await self._fetch_all()
        except Exception as e:
            if generation != self._generation:
                return
            logger.warning(f"Series list fetch failed: {e}")
            self.items = []
            self.error = LOAD_ERROR
            self.state = BrowseState.ERROR
            return

        if generation != self._generation:
            return
        self.items = apply_filters(
            everything,
            genre=self.filters.genre,
            vip=self.filters.vip,
            term=self.debounced_term,
        )
        self.state = BrowseState.READY if self.items else BrowseState.EMPTY

    async def _commit_search_term(self) -> None:
        self.debounced_term = self.filters.q.strip()
        self.searching = False
        await self.refresh()

    def _write_url(self) -> None:
        self.url = self.filters.url
        if self._on_url_change is not None:
            self._on_url_change(self.url)
