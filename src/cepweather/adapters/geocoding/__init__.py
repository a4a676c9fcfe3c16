from .base import LocationAdapter, LocationNotFoundError, LocationResolutionError
from .viacep import ViaCepLocationAdapter

__all__ = [
    "LocationAdapter",
    "LocationNotFoundError",
    "LocationResolutionError",
    "ViaCepLocationAdapter",
]
