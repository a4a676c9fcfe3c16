from __future__ import annotations

from typing import Protocol


class WeatherAdapterError(RuntimeError):
    """Raised when a weather provider request cannot be completed."""


class WeatherAdapter(Protocol):
    def get_temperature(self, city: str, state: str) -> float:
        """Fetch the current temperature in Celsius for a city/state pair."""
