"""CRUD operations for admins and the audit log."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cinedesk.models.admin import Admin, AdminLog
from cinedesk.utils.security import hash_token


async def get_admin(db: AsyncSession, admin_id: int) -> Admin | None:
    result = await db.execute(select(Admin).where(Admin.id == admin_id))
    return result.scalar_one_or_none()


async def get_admin_by_email(db: AsyncSession, email: str) -> Admin | None:
    result = await db.execute(select(Admin).where(Admin.email == email.strip().lower()))
    return result.scalar_one_or_none()


async def create_admin(
    db: AsyncSession,
    email: str,
    token: str,
    display_name: str | None = None,
) -> Admin:
    """Create an admin; only the token hash is stored."""
    admin = Admin(
        email=email.strip().lower(),
        display_name=display_name,
        token_hash=hash_token(token),
    )
    db.add(admin)
    await db.commit()
    await db.refresh(admin)
    return admin


async def record_admin_action(
    db: AsyncSession,
    admin_id: int,
    action: str,
    details: dict[str, Any],
) -> AdminLog:
    """Append an audit entry and commit it."""
    entry = AdminLog(admin_id=admin_id, action=action, details=details)
    db.add(entry)
    try:
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    return entry

