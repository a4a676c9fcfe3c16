from .base import WeatherAdapter, WeatherAdapterError
from .weatherapi import FALLBACK_TEMPERATURE_C, WeatherApiAdapter

__all__ = [
    "FALLBACK_TEMPERATURE_C",
    "WeatherAdapter",
    "WeatherAdapterError",
    "WeatherApiAdapter",
]
