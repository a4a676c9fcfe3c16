from __future__ import annotations

import json
import logging
from http.client import HTTPException
from typing import Any
from urllib.parse import quote
from urllib.request import Request, urlopen

from pydantic import ValidationError

from ...domain.models import Location, ViaCepAddress
from .base import LocationNotFoundError, LocationResolutionError

VIACEP_BASE_URL = "https://viacep.com.br"
DEFAULT_TIMEOUT_SECONDS = 10

LOGGER = logging.getLogger(__name__)


def _fetch_json(url: str, *, timeout: float) -> dict[str, Any]:
    request = Request(url, headers={"User-Agent": "cep-weather/0.1", "Accept": "application/json"})
    try:
        with urlopen(request, timeout=timeout) as response:
            payload = json.loads(response.read().decode("utf-8"))
    except (OSError, HTTPException, ValueError) as exc:
        LOGGER.warning("ViaCEP request to %s failed: %s", url, exc)
        raise LocationResolutionError("Failed to fetch address data from ViaCEP") from exc

    if not isinstance(payload, dict):
        raise LocationResolutionError("Unexpected ViaCEP response shape")
    return payload


class ViaCepLocationAdapter:
    def __init__(
        self,
        *,
        base_url: str = VIACEP_BASE_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds

    def get_location(self, cep: str) -> Location:
        url = f"{self._base_url}/ws/{quote(cep, safe='')}/json/"
        payload = _fetch_json(url, timeout=self._timeout_seconds)

        try:
            address = ViaCepAddress.model_validate(payload)
        except ValidationError as exc:
            raise LocationResolutionError("ViaCEP response did not match the expected schema") from exc

        if address.erro:
            raise LocationNotFoundError(f"CEP {cep} not found")

        try:
            return Location(city=address.localidade or "", state=address.uf or "")
        except ValidationError as exc:
            raise LocationResolutionError("ViaCEP response did not include city and state") from exc
