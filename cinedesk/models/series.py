"""Series catalog model."""

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from cinedesk.models.base import Base, TimestampMixin


class Series(Base, TimestampMixin):
    """A TV series shown in the public catalog."""

    __tablename__ = "series"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    genre: Mapped[str | None] = mapped_column(String(500), nullable=True)  # Free text, e.g. "Drama, Thriller"
    isvip: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    poster: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    backdrop: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    start_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    end_year: Mapped[int | None] = mapped_column(Integer, nullable=True)  # None while still running
    published: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Series(id={self.id}, title={self.title})>"
