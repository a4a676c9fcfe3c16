from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal
from urllib.parse import urlparse

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[2]

LOGGER = logging.getLogger(__name__)

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _validate_base_url(value: str, *, field_name: str) -> str:
    text = value.strip().rstrip("/")
    if not text:
        raise ValueError(f"{field_name} must not be empty")

    parsed = urlparse(text)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"{field_name} must be an absolute http(s) URL")
    return text


class GeocodingSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    base_url: str = "https://viacep.com.br"
    timeout_seconds: float = Field(default=10, gt=0, le=120)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        return _validate_base_url(value, field_name="geocoding.base_url")


class WeatherSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    base_url: str = "http://api.weatherapi.com"
    timeout_seconds: float = Field(default=10, gt=0, le=120)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        return _validate_base_url(value, field_name="weather.base_url")


class ServiceYamlSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    geocoding: GeocodingSettings = Field(default_factory=GeocodingSettings)
    weather: WeatherSettings = Field(default_factory=WeatherSettings)


class EnvSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    port: int = Field(default=8080, ge=1, le=65535)
    weather_api_key: str | None = None
    cepweather_env: Literal["dev", "test", "prod"] = "dev"
    cepweather_log_level: str = "INFO"
    cepweather_config_path: Path = Path("config/cepweather.yaml")

    @field_validator("weather_api_key")
    @classmethod
    def validate_weather_api_key(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip()
        return text or None

    @field_validator("cepweather_log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return level


class AppSettings(BaseModel):
    env: EnvSettings
    yaml: ServiceYamlSettings
    project_root: Path
    config_path: Path


def _resolve_project_path(path: Path) -> Path:
    if path.is_absolute():
        return path
    return (PROJECT_ROOT / path).resolve()


def _load_yaml_settings(path: Path) -> ServiceYamlSettings:
    if not path.exists():
        LOGGER.debug("Service config file %s not found, using defaults", path)
        return ServiceYamlSettings()

    raw_config = yaml.safe_load(path.read_text(encoding="utf-8"))
    if raw_config is None:
        raw_config = {}
    if not isinstance(raw_config, dict):
        raise ValueError("Service config must be a YAML mapping/object at the top level")
    return ServiceYamlSettings.model_validate(raw_config)


def build_settings(env: EnvSettings) -> AppSettings:
    config_path = _resolve_project_path(env.cepweather_config_path)
    return AppSettings(
        env=env,
        yaml=_load_yaml_settings(config_path),
        project_root=PROJECT_ROOT,
        config_path=config_path,
    )


@lru_cache(maxsize=1)
def load_settings() -> AppSettings:
    return build_settings(EnvSettings())
