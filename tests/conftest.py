"""Shared pytest fixtures and fakes for cep-weather tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from urllib.request import Request

import pytest
from fastapi.testclient import TestClient

from cepweather.adapters.geocoding import LocationNotFoundError, LocationResolutionError
from cepweather.adapters.weather import WeatherAdapterError
from cepweather.domain.models import Location
from cepweather.main import create_app
from cepweather.settings import AppSettings, EnvSettings, build_settings


class FakeResponse:
    def __init__(self, body: bytes, *, read_error: Exception | None = None) -> None:
        self._body = body
        self._read_error = read_error

    def read(self) -> bytes:
        if self._read_error is not None:
            raise self._read_error
        return self._body

    def __enter__(self) -> FakeResponse:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        return None


class FakeUrlopen:
    """Stand-in for ``urlopen`` that records requests and replays one outcome."""

    def __init__(
        self,
        payload: Any = None,
        *,
        body: bytes | None = None,
        error: Exception | None = None,
        read_error: Exception | None = None,
    ) -> None:
        if body is None:
            body = json.dumps(payload).encode("utf-8")
        self.body = body
        self.error = error
        self.read_error = read_error
        self.requests: list[Request] = []
        self.timeouts: list[float] = []

    def __call__(self, request: Request, timeout: float) -> FakeResponse:
        self.requests.append(request)
        self.timeouts.append(timeout)
        if self.error is not None:
            raise self.error
        return FakeResponse(self.body, read_error=self.read_error)


class FakeLocationAdapter:
    def __init__(self, location: Location | None = None, *, error: Exception | None = None) -> None:
        self.location = location or Location(city="São Paulo", state="SP")
        self.error = error
        self.calls: list[str] = []

    def get_location(self, cep: str) -> Location:
        self.calls.append(cep)
        if self.error is not None:
            raise self.error
        return self.location


class FakeWeatherAdapter:
    def __init__(self, celsius: float = 21.5, *, error: Exception | None = None) -> None:
        self.celsius = celsius
        self.error = error
        self.calls: list[tuple[str, str]] = []

    def get_temperature(self, city: str, state: str) -> float:
        self.calls.append((city, state))
        if self.error is not None:
            raise self.error
        return self.celsius


@pytest.fixture
def make_settings(tmp_path: Path):
    """Build isolated settings that ignore the process environment's .env file."""

    def _make(**overrides: Any) -> AppSettings:
        values: dict[str, Any] = {
            "weather_api_key": None,
            "cepweather_env": "test",
            "cepweather_config_path": tmp_path / "missing.yaml",
        }
        values.update(overrides)
        return build_settings(EnvSettings(_env_file=None, **values))

    return _make


@pytest.fixture
def settings(make_settings) -> AppSettings:
    return make_settings()


@pytest.fixture
def not_found_location_adapter() -> FakeLocationAdapter:
    return FakeLocationAdapter(error=LocationNotFoundError("CEP 99999999 not found"))


@pytest.fixture
def failing_location_adapter() -> FakeLocationAdapter:
    return FakeLocationAdapter(error=LocationResolutionError("connection refused"))


@pytest.fixture
def failing_weather_adapter() -> FakeWeatherAdapter:
    return FakeWeatherAdapter(error=WeatherAdapterError("upstream returned 401"))


@pytest.fixture
def client_factory(settings: AppSettings):
    """Start an app with the given adapters and yield a client bound to it."""
    clients: list[TestClient] = []

    def _make(**adapters: Any) -> TestClient:
        client = TestClient(create_app(settings, **adapters))
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(client_factory) -> TestClient:
    return client_factory(location_adapter=FakeLocationAdapter())
