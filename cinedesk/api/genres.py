"""Genre reference data endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cinedesk.db import get_db
from cinedesk.db.crud import list_genres
from cinedesk.models.schemas import GenreRead

router = APIRouter()


@router.get("", response_model=list[GenreRead])
async def get_genres(db: Annotated[AsyncSession, Depends(get_db)]) -> list[GenreRead]:
    """All genres, alphabetically."""
    return [GenreRead.model_validate(genre) for genre in await list_genres(db)]
