"""Genre reference data."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from cinedesk.models.base import Base


class Genre(Base):
    """Genre entity, shared by the whole catalog and read-only for the forms."""

    __tablename__ = "genres"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Genre(id={self.id}, name={self.name})>"
