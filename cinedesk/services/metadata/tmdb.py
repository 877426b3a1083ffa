"""TMDB API integration for movie metadata."""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from cinedesk.config import get_settings
from cinedesk.constants import TMDB_API_BASE_URL
from cinedesk.models.tmdb import MovieDetail, MovieSearchResult, TMDBGenre
from cinedesk.utils.http_client import get_tmdb_client

logger = logging.getLogger(__name__)


class TMDBError(Exception):
    """A TMDB call failed; the message is safe to show to an admin."""


class TMDBService:
    """Service for fetching movie metadata from TMDB."""

    def __init__(
        self,
        api_key: str | None = None,
        language: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        settings = get_settings()
        self.api_key = settings.tmdb_api_key if api_key is None else api_key
        self.language = language or settings.tmdb_language
        self._client = client
        # Support both API key v3 and Bearer token
        if self.api_key and self.api_key.startswith("eyJ"):
            # Bearer token (API Read Access Token)
            self.headers = {
                "Authorization": f"Bearer {self.api_key}",
                "Accept": "application/json",
            }
            self.use_api_key_param = False
        else:
            # API key v3 - pass as query parameter
            self.headers = {"Accept": "application/json"}
            self.use_api_key_param = True

    def _add_api_key(self, params: dict) -> dict:
        """Add API key to params if using v3 key."""
        if self.use_api_key_param:
            params["api_key"] = self.api_key
        return params

    async def _get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        """GET a TMDB endpoint and return its JSON body, or raise TMDBError."""
        if not self.api_key:
            raise TMDBError("TMDB API key is not configured.")

        client = self._client or get_tmdb_client()
        try:
            response = await client.get(
                f"{TMDB_API_BASE_URL}{path}",
                params=self._add_api_key(params),
                headers=self.headers,
            )
        except httpx.HTTPError as e:
            logger.warning(f"TMDB request {path} failed: {e}")
            raise TMDBError("TMDB is unreachable, please try again.") from e

        if response.status_code != 200:
            message = None
            try:
                message = response.json().get("status_message")
            except ValueError:
                pass
            logger.warning(f"TMDB {path} returned {response.status_code}: {message}")
            raise TMDBError(message or f"TMDB error (HTTP {response.status_code}).")

        try:
            return response.json()
        except ValueError as e:
            raise TMDBError("TMDB returned an unreadable response.") from e

    async def search_movies(self, query: str) -> list[MovieSearchResult]:
        """Search for movies by title (first TMDB page)."""
        query = query.strip()
        if not query:
            return []

        data = await self._get(
            "/search/movie",
            {
                "query": query,
                "language": self.language,
                "include_adult": "false",
            },
        )

        results = []
        for raw in data.get("results", []):
            try:
                results.append(MovieSearchResult.model_validate(raw))
            except ValidationError as e:
                logger.debug(f"Skipping malformed TMDB search result: {e}")
        return results

    async def get_movie_details(self, tmdb_id: int) -> MovieDetail:
        """Get runtime, adult flag, genres, credits and videos for one movie."""
        data = await self._get(
            f"/movie/{tmdb_id}",
            {
                "language": self.language,
                "append_to_response": "credits,videos",
            },
        )
        try:
            return MovieDetail.model_validate(data)
        except ValidationError as e:
            raise TMDBError("TMDB returned an incomplete movie record.") from e

    async def get_movie_genres(self) -> list[TMDBGenre]:
        """Get the official TMDB movie genre list in the configured language."""
        data = await self._get("/genre/movie/list", {"language": self.language})
        return [TMDBGenre.model_validate(genre) for genre in data.get("genres", [])]


# Singleton instance
tmdb_service = TMDBService()
