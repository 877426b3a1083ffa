"""Series catalog endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cinedesk.db import get_db
from cinedesk.db.crud import get_all_series
from cinedesk.models.schemas import SeriesRead

router = APIRouter()


@router.get("", response_model=list[SeriesRead])
async def list_series(db: Annotated[AsyncSession, Depends(get_db)]) -> list[SeriesRead]:
    """Every published series; the catalog page filters client-side."""
    return [SeriesRead.model_validate(series) for series in await get_all_series(db)]
