"""Authentication dependencies for FastAPI."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from cinedesk.db import get_db
from cinedesk.db.crud.admins import get_admin
from cinedesk.models.admin import Admin


async def get_optional_admin(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Admin | None:
    """Get current admin from session if logged in."""
    admin_id = request.session.get("admin_id")
    if not admin_id:
        return None

    admin = await get_admin(db, admin_id)

    # If admin_id in session but admin doesn't exist in DB, clear stale session
    if not admin:
        request.session.clear()

    return admin


async def get_current_admin(
    admin: Annotated[Admin | None, Depends(get_optional_admin)],
) -> Admin:
    """Get current admin, raising 401 if not authenticated."""
    if not admin:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return admin
