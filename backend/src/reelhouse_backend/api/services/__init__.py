"""Service layer for API-specific business logic."""

from reelhouse_backend.api.services.studio import StudioService

__all__ = ["StudioService"]
