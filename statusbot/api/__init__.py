# statusbot/api/__init__.py
"""API routes package."""

from .routes_status import router as status_router

__all__ = [
    "status_router",
]
