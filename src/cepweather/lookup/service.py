from __future__ import annotations

import logging

from ..adapters.geocoding import LocationAdapter, LocationResolutionError
from ..adapters.weather import WeatherAdapter, WeatherAdapterError
from ..domain.cep import is_valid_cep
from ..domain.conversion import to_fahrenheit, to_kelvin
from ..domain.models import WeatherResult

LOGGER = logging.getLogger(__name__)


class ApiError(Exception):
    """Client-facing failure carrying the HTTP status and message to return."""

    status_code = 500
    message = "internal error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidZipcodeError(ApiError):
    status_code = 422
    message = "invalid zipcode"


class ZipcodeNotFoundError(ApiError):
    status_code = 404
    message = "can not find zipcode"


class WeatherFetchError(ApiError):
    status_code = 500
    message = "error fetching weather data"


def build_weather_result(celsius: float) -> WeatherResult:
    return WeatherResult(
        temp_c=celsius,
        temp_f=to_fahrenheit(celsius),
        temp_k=to_kelvin(celsius),
    )


def lookup_weather(
    cep: str,
    *,
    location_adapter: LocationAdapter,
    weather_adapter: WeatherAdapter,
) -> WeatherResult:
    """Resolve a CEP to its current temperature in Celsius, Fahrenheit and Kelvin.

    Raises an ``ApiError`` subclass on the first failing step. Geocoding
    transport failures and unknown postal codes both surface as
    ``ZipcodeNotFoundError``.
    """
    if not is_valid_cep(cep):
        LOGGER.info("Rejected malformed CEP %r", cep)
        raise InvalidZipcodeError()

    try:
        location = location_adapter.get_location(cep)
    except LocationResolutionError as exc:
        LOGGER.warning("Could not resolve CEP %s: %s", cep, exc)
        raise ZipcodeNotFoundError() from exc

    try:
        celsius = weather_adapter.get_temperature(location.city, location.state)
    except WeatherAdapterError as exc:
        LOGGER.warning("Weather lookup failed for %s/%s: %s", location.city, location.state, exc)
        raise WeatherFetchError() from exc

    result = build_weather_result(celsius)
    LOGGER.info(
        "Resolved CEP %s to %s/%s at %.1f C",
        cep,
        location.city,
        location.state,
        result.temp_c,
    )
    return result
