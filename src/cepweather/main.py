from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from . import __version__
from .adapters.geocoding import LocationAdapter, ViaCepLocationAdapter
from .adapters.weather import WeatherAdapter, WeatherApiAdapter
from .domain.models import ErrorResponse
from .lookup import ApiError, lookup_weather
from .settings import AppSettings, load_settings

LOGGER = logging.getLogger(__name__)


def _get_settings(request: Request) -> AppSettings:
    return request.app.state.settings


def _build_location_adapter(settings: AppSettings) -> ViaCepLocationAdapter:
    return ViaCepLocationAdapter(
        base_url=settings.yaml.geocoding.base_url,
        timeout_seconds=settings.yaml.geocoding.timeout_seconds,
    )


def _build_weather_adapter(settings: AppSettings) -> WeatherApiAdapter:
    return WeatherApiAdapter(
        api_key=settings.env.weather_api_key,
        base_url=settings.yaml.weather.base_url,
        timeout_seconds=settings.yaml.weather.timeout_seconds,
    )


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(
        ErrorResponse(message=exc.message).model_dump(),
        status_code=exc.status_code,
    )


def create_app(
    settings: AppSettings | None = None,
    *,
    location_adapter: LocationAdapter | None = None,
    weather_adapter: WeatherAdapter | None = None,
) -> FastAPI:
    @asynccontextmanager
    async def lifespan(application: FastAPI):
        app_settings = settings or load_settings()
        application.state.settings = app_settings
        application.state.location_adapter = location_adapter or _build_location_adapter(app_settings)
        application.state.weather_adapter = weather_adapter or _build_weather_adapter(app_settings)
        application.state.started_at_utc = datetime.now(timezone.utc)

        if app_settings.env.weather_api_key is None:
            LOGGER.warning("WEATHER_API_KEY is not set; serving the fallback temperature")
        LOGGER.info("cep-weather started (environment=%s)", app_settings.env.cepweather_env)
        yield

    application = FastAPI(title="CEP Weather", version=__version__, lifespan=lifespan)
    application.add_exception_handler(ApiError, api_error_handler)

    @application.get("/weather/{cep}", response_class=JSONResponse)
    def weather_by_cep(request: Request, cep: str) -> JSONResponse:
        result = lookup_weather(
            cep,
            location_adapter=request.app.state.location_adapter,
            weather_adapter=request.app.state.weather_adapter,
        )
        return JSONResponse(result.model_dump(by_alias=True))

    @application.get("/health", response_class=JSONResponse)
    async def health(request: Request) -> JSONResponse:
        app_settings = _get_settings(request)
        weather_api_configured = getattr(
            request.app.state.weather_adapter,
            "is_configured",
            app_settings.env.weather_api_key is not None,
        )
        return JSONResponse(
            {
                "status": "ok",
                "service": "cep-weather",
                "environment": app_settings.env.cepweather_env,
                "weather_api_configured": weather_api_configured,
                "timestamp_utc": datetime.now(timezone.utc).isoformat(),
            }
        )

    return application


app = create_app()


def run() -> None:
    settings = load_settings()
    logging.basicConfig(
        level=settings.env.cepweather_log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    LOGGER.info("Server starting on port %s", settings.env.port)
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=settings.env.port,
        log_level=settings.env.cepweather_log_level.lower(),
    )
