"""Route definitions for public HTTP endpoints."""

from reelhouse_backend.api.routers.studio import router as studio_router

__all__ = ["studio_router"]
