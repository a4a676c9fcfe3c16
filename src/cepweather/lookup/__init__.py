from .service import (
    ApiError,
    InvalidZipcodeError,
    WeatherFetchError,
    ZipcodeNotFoundError,
    build_weather_result,
    lookup_weather,
)

__all__ = [
    "ApiError",
    "InvalidZipcodeError",
    "WeatherFetchError",
    "ZipcodeNotFoundError",
    "build_weather_result",
    "lookup_weather",
]
