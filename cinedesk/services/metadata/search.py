"""Live TMDB search session backing the add-film form.

Keystrokes arm a 400 ms debounce; only the last one searches. A manual
submit searches right away. Every search gets a generation number and
completions from an older generation are dropped, so a slow response can
never overwrite newer results or a cleared box.
"""

import logging
from collections.abc import Awaitable, Callable, Mapping
from functools import partial

import httpx

from cinedesk.config import get_settings
from cinedesk.constants import SEARCH_DEBOUNCE_SECONDS
from cinedesk.models.tmdb import MovieDetail, MovieSearchResult, SearchResponse
from cinedesk.services.metadata.tmdb import TMDBError, tmdb_service
from cinedesk.utils.debounce import Debouncer
from cinedesk.utils.http_client import get_general_client

logger = logging.getLogger(__name__)

SearchFn = Callable[[str], Awaitable[list[MovieSearchResult]]]
DetailFn = Callable[[int], Awaitable[MovieDetail]]

DEFAULT_SEARCH_ERROR = "TMDB search failed."


def _error_message(response: httpx.Response, data: object) -> str:
    """`error` or `detail` from a failed proxy response, else a generic message."""
    if isinstance(data, dict):
        for key in ("error", "detail"):
            if isinstance(data.get(key), str) and data[key]:
                return data[key]
    return f"{DEFAULT_SEARCH_ERROR} (HTTP {response.status_code})"


async def search_via_api(
    query: str, cookies: Mapping[str, str] | None = None
) -> list[MovieSearchResult]:
    """Query our own /api/tmdb/movie-search endpoint.

    The endpoint is admin-only, so the caller's session cookies are forwarded.
    """
    settings = get_settings()
    client = get_general_client()
    headers = {}
    if cookies:
        headers["Cookie"] = "; ".join(f"{name}={value}" for name, value in cookies.items())

    try:
        response = await client.get(
            f"{settings.app_url}/api/tmdb/movie-search",
            params={"query": query},
            headers=headers,
        )
    except httpx.HTTPError as e:
        raise TMDBError(DEFAULT_SEARCH_ERROR) from e

    try:
        data = response.json()
    except ValueError:
        data = None

    if not response.is_success:
        raise TMDBError(_error_message(response, data))
    if data is None:
        raise TMDBError(DEFAULT_SEARCH_ERROR)
    if isinstance(data, dict) and data.get("error"):
        raise TMDBError(data["error"])
    return SearchResponse.model_validate(data).results


async def fetch_detail_direct(tmdb_id: int) -> MovieDetail:
    """Detail lookups go straight to TMDB."""
    return await tmdb_service.get_movie_details(tmdb_id)


class MetadataSearch:
    """State of the TMDB search box: query, results, loading flag and error.

    `cookies` are the admin's session cookies, used by the default search
    transport to authenticate against the proxy endpoint.
    """

    def __init__(
        self,
        search_fn: SearchFn | None = None,
        detail_fn: DetailFn | None = None,
        debounce_seconds: float = SEARCH_DEBOUNCE_SECONDS,
        cookies: Mapping[str, str] | None = None,
    ) -> None:
        self._search_fn = search_fn or partial(search_via_api, cookies=cookies)
        self._detail_fn = detail_fn or fetch_detail_direct
        self._debouncer = Debouncer(debounce_seconds, self._run_debounced)
        self._generation = 0

        self.query = ""
        self.results: list[MovieSearchResult] = []
        self.loading = False
        self.error: str | None = None

    @property
    def pending(self) -> bool:
        """True while a debounced search is waiting to fire."""
        return self._debouncer.pending

    def set_query(self, text: str) -> None:
        """Keystroke handler."""
        self.query = text
        if not text.strip():
            self._reset()
            return
        self._debouncer.trigger()

    async def submit(self) -> None:
        """Explicit search button: no debounce."""
        self._debouncer.cancel()
        await self.search(self.query)

    def clear(self) -> None:
        """Empty the box and the result list (after a selection)."""
        self.query = ""
        self._reset()

    async def wait_idle(self) -> None:
        """Wait for the pending debounced search, if any, to complete."""
        await self._debouncer.wait()

    async def search(self, query: str) -> None:
        """Run one search now and publish its outcome unless superseded."""
        if not query.strip():
            self._reset()
            return

        self._generation += 1
        generation = self._generation
        self.loading = True
        self.error = None

        try:
            results = await self._search_fn(query)
        except Exception as e:
            if generation == self._generation:
                self.error = str(e) if isinstance(e, TMDBError) and str(e) else DEFAULT_SEARCH_ERROR
            logger.info(f"TMDB search for {query!r} failed: {e}")
            return
        finally:
            if generation == self._generation:
                self.loading = False

        if generation != self._generation:
            logger.debug(f"Dropping stale results for {query!r}")
            return
        self.results = results

    async def fetch_detail(self, result: MovieSearchResult) -> MovieDetail | None:
        """Full record for a picked result; None on any failure."""
        try:
            return await self._detail_fn(result.id)
        except Exception as e:
            logger.info(f"TMDB detail fetch for {result.id} failed, keeping summary only: {e}")
            return None

    async def _run_debounced(self) -> None:
        await self.search(self.query)

    def _reset(self) -> None:
        self._debouncer.cancel()
        # Anything still in flight belongs to an older generation now
        self._generation += 1
        self.results = []
        self.error = None
        self.loading = False
