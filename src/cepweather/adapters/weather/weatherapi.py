from __future__ import annotations

import json
import logging
import math
from http.client import HTTPException
from typing import Any
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from .base import WeatherAdapterError

WEATHERAPI_BASE_URL = "http://api.weatherapi.com"
CURRENT_WEATHER_PATH = "/v1/current.json"
DEFAULT_TIMEOUT_SECONDS = 10

# Served when no API key is configured.
FALLBACK_TEMPERATURE_C = 25.0

LOGGER = logging.getLogger(__name__)


def _coerce_float(value: Any, *, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise WeatherAdapterError(f"Invalid numeric value for {field_name}")
    result = float(value)
    if not math.isfinite(result):
        raise WeatherAdapterError(f"Non-finite value for {field_name}")
    return result


def _fetch_json(url: str, *, timeout: float) -> dict[str, Any]:
    request = Request(url, headers={"User-Agent": "cep-weather/0.1"})
    try:
        with urlopen(request, timeout=timeout) as response:
            payload = json.loads(response.read().decode("utf-8"))
    except (OSError, HTTPException, ValueError) as exc:
        # The URL carries the API key, so only the exception is logged.
        LOGGER.warning("WeatherAPI request failed: %s", exc)
        raise WeatherAdapterError("Failed to fetch weather data from WeatherAPI") from exc

    if not isinstance(payload, dict):
        raise WeatherAdapterError("Unexpected WeatherAPI response shape")
    return payload


class WeatherApiAdapter:
    def __init__(
        self,
        *,
        api_key: str | None = None,
        base_url: str = WEATHERAPI_BASE_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._api_key = (api_key or "").strip() or None
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds

    @property
    def is_configured(self) -> bool:
        return self._api_key is not None

    def _build_url(self, city: str, state: str) -> str:
        params = {
            "key": self._api_key,
            "q": f"{city},{state}",
            "aqi": "no",
        }
        return f"{self._base_url}{CURRENT_WEATHER_PATH}?{urlencode(params)}"

    def get_temperature(self, city: str, state: str) -> float:
        if not self.is_configured:
            LOGGER.debug("No WeatherAPI key configured, serving fallback temperature")
            return FALLBACK_TEMPERATURE_C

        payload = _fetch_json(self._build_url(city, state), timeout=self._timeout_seconds)
        current = payload.get("current")
        if not isinstance(current, dict):
            raise WeatherAdapterError("WeatherAPI response did not include required fields")

        return _coerce_float(current.get("temp_c"), field_name="current.temp_c")
