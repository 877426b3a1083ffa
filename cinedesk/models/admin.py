"""Back-office administrators and their audit trail."""

from datetime import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cinedesk.models.base import Base, TimestampMixin


class Admin(Base, TimestampMixin):
    """An administrator allowed to edit the catalog."""

    __tablename__ = "admins"

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    display_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    token_hash: Mapped[str] = mapped_column(String(64), nullable=False)  # sha256 hex

    logs: Mapped[list["AdminLog"]] = relationship(
        "AdminLog", back_populates="admin", cascade="all, delete-orphan", lazy="select"
    )

    def __repr__(self) -> str:
        return f"<Admin(id={self.id}, email={self.email})>"


class AdminLog(Base):
    """Append-only audit entry, e.g. action=ADD_FILM with {film_id, film_title}."""

    __tablename__ = "admin_logs"

    id: Mapped[int] = mapped_column(primary_key=True)
    admin_id: Mapped[int] = mapped_column(ForeignKey("admins.id", ondelete="CASCADE"), index=True)
    action: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    details: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    admin: Mapped[Admin] = relationship("Admin", back_populates="logs")

    def __repr__(self) -> str:
        return f"<AdminLog(id={self.id}, action={self.action})>"
