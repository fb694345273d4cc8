from __future__ import annotations

import logging
from urllib.parse import urlencode

from pydantic import ValidationError

from ...domain.models import WeatherApiPayload, WeatherResult
from ...errors import DecodeError, MissingCredentialError, UpstreamStatusError
from ...transport import HttpRequest, HttpTransport

LOGGER = logging.getLogger(__name__)

WEATHERAPI_BASE_URL = "http://api.weatherapi.com"
CURRENT_WEATHER_PATH = "/v1/current.json"


class WeatherApiAdapter:
    def __init__(
        self,
        transport: HttpTransport,
        *,
        api_key: str | None,
        base_url: str = WEATHERAPI_BASE_URL,
        include_air_quality: bool = False,
    ) -> None:
        self._transport = transport
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._include_air_quality = include_air_quality

    def build_url(self, api_key: str, locality: str) -> str:
        params = {
            "key": api_key,
            "q": locality,
            "aqi": "yes" if self._include_air_quality else "no",
        }
        return f"{self._base_url}{CURRENT_WEATHER_PATH}?{urlencode(params)}"

    def get_current_temperature(self, locality: str) -> WeatherResult:
        api_key = (self._api_key or "").strip()
        if not api_key:
            raise MissingCredentialError()

        response = self._transport.send(HttpRequest(url=self.build_url(api_key, locality)))
        if not response.ok:
            raise UpstreamStatusError(response.status_code)

        payload = response.json()
        if not isinstance(payload, dict):
            raise DecodeError("Unexpected WeatherAPI response shape")

        try:
            weather = WeatherApiPayload.model_validate(payload)
        except ValidationError as exc:
            raise DecodeError("WeatherAPI response did not include current.temp_c") from exc

        LOGGER.debug(
            "WeatherAPI matched %r to %s, %s: %.1f C",
            locality,
            weather.location.name or locality,
            weather.location.country or "unknown country",
            weather.current.temp_c,
        )
        return WeatherResult(temperature_celsius=weather.current.temp_c)
