from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ViaCepAddress(BaseModel):
    """Address payload returned by ViaCEP for a single postal code."""

    model_config = ConfigDict(extra="ignore")

    cep: str | None = None
    logradouro: str | None = None
    complemento: str | None = None
    bairro: str | None = None
    localidade: str | None = None
    uf: str | None = None
    ibge: str | None = None
    gia: str | None = None
    ddd: str | None = None
    siafi: str | None = None
    erro: bool = False


class Location(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    city: str
    state: str

    @field_validator("city", "state")
    @classmethod
    def validate_non_empty_text(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("location city and state must not be empty")
        return text


class WeatherResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    temp_c: float = Field(alias="temp_C")
    temp_f: float = Field(alias="temp_F")
    temp_k: float = Field(alias="temp_K")


class ErrorResponse(BaseModel):
    message: str
