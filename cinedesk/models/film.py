"""Film catalog model."""

import enum

from sqlalchemy import JSON, Boolean, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from cinedesk.models.base import Base, TimestampMixin


class HomepageCategory(str, enum.Enum):
    """Homepage sections a film can be promoted in."""

    FEATURED = "featured"
    NEW = "new"
    TOP = "top"
    VIP = "vip"


class Film(Base, TimestampMixin):
    """A published (or draft-published) film row.

    Rows are written once by the add-film pipeline; `genre` is the
    comma-joined list of genre names selected at submit time.
    """

    __tablename__ = "films"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    original_title: Mapped[str | None] = mapped_column(String(500), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True)  # minutes
    director: Mapped[str | None] = mapped_column(String(255), nullable=True)
    genre: Mapped[str | None] = mapped_column(String(500), nullable=True)
    trailer_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    video_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    isvip: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    published: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    poster: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    backdrop: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    cast: Mapped[list] = mapped_column(JSON, default=list, nullable=False)  # [{name, role, photo}]
    homepage_categories: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    tmdb_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)

    __table_args__ = (
        UniqueConstraint("title", "year", name="uq_film_title_year"),
        Index("ix_films_published_created", "published", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Film(id={self.id}, title={self.title}, year={self.year})>"
