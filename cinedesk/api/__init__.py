"""API routers."""

from cinedesk.api.router import api_router

__all__ = ["api_router"]
