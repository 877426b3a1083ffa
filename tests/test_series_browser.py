"""Tests for the series catalog browser."""

from unittest.mock import patch

import httpx
import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from cinedesk.main import app
from cinedesk.models.schemas import SeriesRead
from cinedesk.models.series import Series
from cinedesk.services.catalog.series_browser import (
    LOAD_ERROR,
    BrowseState,
    SeriesBrowser,
    SeriesFilters,
    apply_filters,
)

GENERAL_CLIENT = "cinedesk.services.catalog.series_browser.get_general_client"


def make_catalog() -> list[SeriesRead]:
    """20 series, 5 of them VIP (every fourth)."""
    genres = ["Drama, Thriller", "Comedy", "Science-Fiction", "Crime Drama"]
    titles = ["Dark", "The Office", "Black Mirror", "Breaking Bad"]
    return [
        SeriesRead(
            id=i,
            title=f"{titles[i % 4]} {i}",
            genre=genres[i % 4],
            isvip=i % 4 == 0,
        )
        for i in range(20)
    ]


class FakeFetcher:
    def __init__(self, series: list[SeriesRead] | None = None, error: Exception | None = None) -> None:
        self.series = series if series is not None else make_catalog()
        self.error = error
        self.calls = 0

    async def __call__(self) -> list[SeriesRead]:
        self.calls += 1
        if self.error:
            raise self.error
        return self.series


class TestApplyFilters:
    """Tests for the pure filter chain."""

    def test_vip_partition(self):
        """Test vip=true/false split the catalog."""
        catalog = make_catalog()

        assert len(apply_filters(catalog, vip="true")) == 5
        assert len(apply_filters(catalog, vip="false")) == 15
        assert len(apply_filters(catalog)) == 20

    def test_genre_is_case_insensitive_substring(self):
        """Test genre matching is a substring match ignoring case."""
        results = apply_filters(make_catalog(), genre="drama")

        assert {s.genre for s in results} == {"Drama, Thriller", "Crime Drama"}
        assert len(results) == 10

    def test_filters_intersect(self):
        """Test genre, VIP and title filters combine."""
        results = apply_filters(make_catalog(), genre="DRAMA", vip="true", term="dark")

        assert [s.title for s in results] == ["Dark 0", "Dark 4", "Dark 8", "Dark 12", "Dark 16"]

    def test_missing_genre_never_matches(self):
        """Test a series without genre is excluded by any genre filter."""
        catalog = [SeriesRead(id=1, title="Untitled", genre=None)]
        assert apply_filters(catalog, genre="drama") == []


class TestSeriesFilters:
    """Tests for URL round-tripping."""

    def test_round_trip(self):
        """Test filters survive a trip through the query string."""
        filters = SeriesFilters(genre="Science-Fiction", vip="false", q="black mirror")
        again = SeriesFilters.from_query_string(filters.to_query_string())

        assert again == filters

    def test_empty_values_omitted(self):
        """Test unset filters do not appear in the URL."""
        assert SeriesFilters().url == "/series"
        assert SeriesFilters(vip="true").url == "/series?vip=true"

    def test_invalid_vip_ignored(self):
        """Test unknown vip values mean no VIP filter."""
        assert SeriesFilters.from_query_string("?vip=maybe&genre=Comedy").vip == ""


class TestSeriesBrowser:
    """Tests for the browser state machine."""

    @pytest.mark.asyncio
    async def test_mount_reads_url_filters(self):
        """Test the initial load applies filters from the URL."""
        fetch = FakeFetcher()
        browser = SeriesBrowser(fetch_all=fetch, query_string="vip=true")

        await browser.mount()

        assert browser.state == BrowseState.READY
        assert len(browser.items) == 5
        assert all(s.isvip for s in browser.items)

    @pytest.mark.asyncio
    async def test_every_change_refetches(self):
        """Test genre and VIP changes reload the full list."""
        fetch = FakeFetcher()
        urls = []
        browser = SeriesBrowser(fetch_all=fetch, on_url_change=urls.append)
        await browser.mount()

        await browser.set_genre("Comedy")
        await browser.set_vip("false")

        assert fetch.calls == 3
        assert len(browser.items) == 5
        assert urls[-1] == "/series?genre=Comedy&vip=false"

    @pytest.mark.asyncio
    async def test_search_is_debounced(self):
        """Test the title filter applies after the debounce, URL updates at once."""
        fetch = FakeFetcher()
        browser = SeriesBrowser(fetch_all=fetch, debounce_seconds=0.05)
        await browser.mount()

        browser.set_search_term("Dar")
        browser.set_search_term("Dark")

        assert browser.url == "/series?q=Dark"
        assert browser.searching
        assert len(browser.items) == 20

        await browser.wait_idle()

        assert not browser.searching
        assert browser.debounced_term == "Dark"
        assert len(browser.items) == 5
        assert fetch.calls == 2

    @pytest.mark.asyncio
    async def test_reset_clears_everything(self):
        """Test reset drops all filters and the URL query."""
        fetch = FakeFetcher()
        browser = SeriesBrowser(fetch_all=fetch, query_string="genre=Comedy&vip=true&q=office")
        await browser.mount()
        assert browser.state == BrowseState.EMPTY

        await browser.reset()

        assert browser.filters == SeriesFilters()
        assert browser.url == "/series"
        assert len(browser.items) == 20

    @pytest.mark.asyncio
    async def test_fetch_error_state(self):
        """Test a failed fetch shows the error state."""
        browser = SeriesBrowser(fetch_all=FakeFetcher(error=RuntimeError("503")))

        await browser.mount()

        assert browser.state == BrowseState.ERROR
        assert browser.error == LOAD_ERROR
        assert browser.items == []

    @pytest.mark.asyncio
    async def test_empty_state(self):
        """Test no match yields the empty state."""
        browser = SeriesBrowser(fetch_all=FakeFetcher(), query_string="genre=Western")

        await browser.mount()

        assert browser.state == BrowseState.EMPTY


class TestFetchSeriesViaApi:
    """Tests for the default fetcher against the real /api/series endpoint."""

    @pytest.mark.asyncio
    async def test_mount_loads_from_api(self, client: AsyncClient, db_session: AsyncSession):
        """Test the default fetcher reads and filters the published catalog."""
        db_session.add_all(
            [
                Series(title="Dark", genre="Science-Fiction, Drama", start_year=2017, end_year=2020),
                Series(title="Severance", genre="Drama, Thriller", isvip=True, start_year=2022),
                Series(title="Unreleased", genre="Drama", published=False),
            ]
        )
        await db_session.commit()

        async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as asgi:
            with patch(GENERAL_CLIENT, return_value=asgi):
                browser = SeriesBrowser(query_string="genre=drama")
                await browser.mount()

        assert browser.state == BrowseState.READY
        assert [s.title for s in browser.items] == ["Dark", "Severance"]
        assert [s.years for s in browser.items] == ["2017 - 2020", "2022"]

    @pytest.mark.asyncio
    async def test_server_error_shows_load_error(self):
        """Test a non-2xx response puts the page in the error state."""

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/series"
            return httpx.Response(500, json={"detail": "Internal Server Error"})

        failing = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        with patch(GENERAL_CLIENT, return_value=failing):
            browser = SeriesBrowser()
            await browser.mount()

        assert browser.state == BrowseState.ERROR
        assert browser.error == LOAD_ERROR
        assert browser.items == []
