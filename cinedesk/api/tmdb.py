"""TMDB proxy endpoints used by the add-film form."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from cinedesk.auth import get_current_admin
from cinedesk.models.admin import Admin
from cinedesk.services.metadata.tmdb import TMDBError, TMDBService, tmdb_service

router = APIRouter()
logger = logging.getLogger(__name__)


def get_tmdb_service() -> TMDBService:
    """Dependency hook so tests can swap the TMDB client."""
    return tmdb_service


@router.get("/movie-search")
async def movie_search(
    admin: Annotated[Admin, Depends(get_current_admin)],
    service: Annotated[TMDBService, Depends(get_tmdb_service)],
    query: Annotated[str, Query(max_length=200)] = "",
) -> JSONResponse:
    """Search TMDB movies: `{"results": [...]}` or `{"error": "..."}`."""
    if not query.strip():
        return JSONResponse({"results": []})

    try:
        results = await service.search_movies(query)
    except TMDBError as e:
        logger.warning(f"Movie search for {query!r} failed: {e}")
        return JSONResponse({"error": str(e)}, status_code=502)

    return JSONResponse({"results": [result.model_dump(mode="json") for result in results]})
