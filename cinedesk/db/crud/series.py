"""CRUD operations for series."""

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cinedesk.models.series import Series


async def get_all_series(db: AsyncSession, published_only: bool = True) -> Sequence[Series]:
    """Full series list; filtering happens in the browser, not here."""
    query = select(Series)
    if published_only:
        query = query.where(Series.published.is_(True))
    result = await db.execute(query.order_by(Series.title))
    return result.scalars().all()
