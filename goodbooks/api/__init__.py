"""API routers."""

from goodbooks.api.router import api_router

__all__ = ["api_router"]
