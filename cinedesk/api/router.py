"""Main API router."""

from fastapi import APIRouter

from cinedesk.api.auth import router as auth_router
from cinedesk.api.films import admin_router as admin_films_router
from cinedesk.api.films import router as films_router
from cinedesk.api.genres import router as genres_router
from cinedesk.api.series import router as series_router
from cinedesk.api.tmdb import router as tmdb_router

api_router = APIRouter(prefix="/api")

api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(admin_films_router, prefix="/admin/films", tags=["admin"])
api_router.include_router(films_router, prefix="/films", tags=["films"])
api_router.include_router(genres_router, prefix="/genres", tags=["genres"])
api_router.include_router(series_router, prefix="/series", tags=["series"])
api_router.include_router(tmdb_router, prefix="/tmdb", tags=["tmdb"])
