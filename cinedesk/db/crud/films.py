"""CRUD operations for films and their reference data."""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cinedesk.models.film import Film
from cinedesk.models.genre import Genre

# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


class DuplicateFilmError(Exception):
    """A film with the same (title, year) already exists."""

    def __init__(self, title: str, year: int) -> None:
        super().__init__(f"Film already exists: {title} ({year})")
        self.title = title
        self.year = year


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when an IntegrityError comes from a uniqueness constraint."""
    orig = getattr(exc, "orig", None)
    for attr in ("sqlstate", "pgcode"):
        if getattr(orig, attr, None) == UNIQUE_VIOLATION:
            return True
    return "unique" in str(orig if orig is not None else exc).lower()


async def find_duplicate_film(db: AsyncSession, title: str, year: int) -> Film | None:
    """Return the film with exactly this title and year, if any."""
    result = await db.execute(
        select(Film).where(Film.title == title, Film.year == year).limit(1)
    )
    return result.scalar_one_or_none()


async def create_film(db: AsyncSession, values: dict[str, Any]) -> Film:
    """Insert and commit a film row.

    Raises:
        DuplicateFilmError: the (title, year) unique constraint fired.
        IntegrityError: any other constraint violation.
    """
    film = Film(**values)
    db.add(film)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        if is_unique_violation(e):
            raise DuplicateFilmError(values["title"], values["year"]) from e
        raise
    await db.refresh(film)
    return film


async def get_film(db: AsyncSession, film_id: int) -> Film | None:
    """Get a film by id."""
    result = await db.execute(select(Film).where(Film.id == film_id))
    return result.scalar_one_or_none()


async def list_films(
    db: AsyncSession,
    published: bool | None = None,
    page: int = 1,
    page_size: int = 20,
) -> tuple[Sequence[Film], int]:
    """List films, newest first, with total count."""
    query = select(Film)
    count_query = select(func.count(Film.id))
    if published is not None:
        query = query.where(Film.published == published)
        count_query = count_query.where(Film.published == published)

    total = (await db.execute(count_query)).scalar_one()

    offset = (page - 1) * page_size
    result = await db.execute(
        query.order_by(Film.created_at.desc(), Film.id.desc()).offset(offset).limit(page_size)
    )
    return result.scalars().all(), total


async def list_genres(db: AsyncSession) -> Sequence[Genre]:
    """All reference genres, alphabetically."""
    result = await db.execute(select(Genre).order_by(Genre.name))
    return result.scalars().all()


async def get_or_create_genre(db: AsyncSession, name: str) -> tuple[Genre, bool]:
    """Get existing genre by exact name or create it. Returns (genre, created)."""
    result = await db.execute(select(Genre).where(Genre.name == name))
    genre = result.scalar_one_or_none()
    if genre:
        return genre, False

    genre = Genre(name=name)
    db.add(genre)
    await db.flush()
    return genre, True
