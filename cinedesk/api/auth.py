"""Authentication API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from cinedesk.auth import get_current_admin
from cinedesk.db import get_db
from cinedesk.db.crud.admins import get_admin_by_email
from cinedesk.models.admin import Admin
from cinedesk.models.schemas import AdminRead, LoginRequest
from cinedesk.utils.security import verify_token

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/login", response_model=AdminRead)
async def login(
    data: LoginRequest,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AdminRead:
    """Start an admin session from an email + access token pair."""
    admin = await get_admin_by_email(db, data.email)
    if not admin or not verify_token(data.token, admin.token_hash):
        logger.warning(f"Failed admin login for {data.email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    request.session.clear()
    request.session["admin_id"] = admin.id
    logger.info(f"Admin {admin.id} logged in")
    return AdminRead.model_validate(admin)


@router.post("/logout")
async def logout(request: Request) -> dict:
    """End the admin session."""
    request.session.clear()
    return {"status": "logged_out"}


@router.get("/me", response_model=AdminRead)
async def me(admin: Annotated[Admin, Depends(get_current_admin)]) -> AdminRead:
    """Currently logged-in admin."""
    return AdminRead.model_validate(admin)
