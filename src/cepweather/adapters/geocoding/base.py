from __future__ import annotations

from typing import Protocol

from ...domain.models import Location


class LocationResolutionError(RuntimeError):
    """Raised when a postal code cannot be resolved to a location."""


class LocationNotFoundError(LocationResolutionError):
    """Raised when the geocoding provider reports the postal code as unknown."""


class LocationAdapter(Protocol):
    def get_location(self, cep: str) -> Location:
        """Resolve a validated postal code to its city and state."""
