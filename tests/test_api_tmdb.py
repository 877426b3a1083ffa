"""Tests for the TMDB proxy endpoint."""

import httpx
import pytest
from httpx import AsyncClient

from cinedesk.api.tmdb import get_tmdb_service
from cinedesk.main import app
from cinedesk.services.metadata.tmdb import TMDBService


def use_tmdb(handler) -> None:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    service = TMDBService(api_key="v3-key", language="fr-FR", client=client)
    app.dependency_overrides[get_tmdb_service] = lambda: service


class TestMovieSearch:
    """Tests for GET /api/tmdb/movie-search."""

    @pytest.mark.asyncio
    async def test_search_results(self, authenticated_client: AsyncClient):
        """Test TMDB hits are returned under "results"."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json={"results": [{"id": 438631, "title": "Dune", "release_date": "2021-09-15"}]},
            )

        use_tmdb(handler)
        response = await authenticated_client.get("/api/tmdb/movie-search", params={"query": "dune"})

        assert response.status_code == 200
        results = response.json()["results"]
        assert results[0]["id"] == 438631
        assert results[0]["title"] == "Dune"

    @pytest.mark.asyncio
    async def test_blank_query(self, authenticated_client: AsyncClient):
        """Test a blank query returns no results without calling TMDB."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        use_tmdb(handler)
        response = await authenticated_client.get("/api/tmdb/movie-search", params={"query": "  "})

        assert response.status_code == 200
        assert response.json() == {"results": []}

    @pytest.mark.asyncio
    async def test_tmdb_error(self, authenticated_client: AsyncClient):
        """Test TMDB failures come back as {"error": ...}."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"status_message": "Invalid API key: You must be granted a valid key."})

        use_tmdb(handler)
        response = await authenticated_client.get("/api/tmdb/movie-search", params={"query": "dune"})

        assert response.status_code == 502
        assert response.json() == {"error": "Invalid API key: You must be granted a valid key."}
