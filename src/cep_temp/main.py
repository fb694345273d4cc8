from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from .adapters.postal import PostalAdapter, ViaCepPostalAdapter
from .adapters.weather import WeatherAdapter, WeatherApiAdapter
from .domain.models import ErrorResponse, TemperatureResponse
from .domain.postal_code import is_valid_postal_code
from .domain.units import celsius_to_fahrenheit, celsius_to_kelvin
from .errors import CepTempError
from .logging_setup import configure_logging
from .settings import AppSettings, load_settings
from .transport import HttpTransport, UrllibTransport

LOGGER = logging.getLogger(__name__)

TEMPERATURE_PATH = "/temperature"
HEALTH_PATH = "/health"

MESSAGE_CEP_REQUIRED = "CEP parameter is required"
MESSAGE_INVALID_ZIPCODE = "invalid zipcode"
MESSAGE_ZIPCODE_NOT_FOUND = "can not find zipcode"
MESSAGE_TEMPERATURE_FAILED = "failed to get temperature data"

router = APIRouter()


def _get_postal_adapter(request: Request) -> PostalAdapter:
    return request.app.state.postal_adapter


def _get_weather_adapter(request: Request) -> WeatherAdapter:
    return request.app.state.weather_adapter


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(message=message).model_dump())


def _first_query_value(request: Request, name: str) -> str:
    values = request.query_params.getlist(name)
    return values[0] if values else ""


def build_temperature_response(temp_c: float) -> TemperatureResponse:
    return TemperatureResponse(
        temp_C=temp_c,
        temp_F=celsius_to_fahrenheit(temp_c),
        temp_K=celsius_to_kelvin(temp_c),
    )


@router.get(TEMPERATURE_PATH)
def temperature(request: Request) -> Response:
    cep = _first_query_value(request, "cep")
    if not cep:
        return _error_response(400, MESSAGE_CEP_REQUIRED)

    if not is_valid_postal_code(cep):
        return _error_response(422, MESSAGE_INVALID_ZIPCODE)

    try:
        location = _get_postal_adapter(request).lookup(cep)
    except CepTempError as exc:
        LOGGER.warning("Error getting location from CEP %s: %s", cep, exc)
        return _error_response(404, MESSAGE_ZIPCODE_NOT_FOUND)

    try:
        weather = _get_weather_adapter(request).get_current_temperature(location.locality)
    except CepTempError as exc:
        LOGGER.warning("Error getting temperature for %s: %s", location.locality, exc)
        return _error_response(500, MESSAGE_TEMPERATURE_FAILED)

    body = build_temperature_response(weather.temperature_celsius)
    return JSONResponse(status_code=200, content=body.model_dump())


@router.get(HEALTH_PATH)
def health() -> PlainTextResponse:
    return PlainTextResponse("OK")


class MethodGateMiddleware(BaseHTTPMiddleware):
    """Answer every non-GET request to the service routes before routing.

    The routes are registered for GET only, so any other verb, including ones
    the router does not know, is handled here: `/health` still replies OK and
    `/temperature` replies 405 with an empty JSON body.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.method != "GET":
            if request.url.path == HEALTH_PATH:
                return health()
            if request.url.path == TEMPERATURE_PATH:
                return Response(status_code=405, media_type="application/json")
        return await call_next(request)


@asynccontextmanager
async def lifespan(application: FastAPI):
    settings: AppSettings = application.state.settings
    if settings.env.weather_api_key is None:
        LOGGER.warning("WEATHER_API_KEY is not set; temperature lookups will fail")
    LOGGER.info(
        "Serving lookups via %s and %s",
        settings.yaml.postal.base_url,
        settings.yaml.weather.base_url,
    )
    yield


def create_app(
    settings: AppSettings | None = None,
    transport: HttpTransport | None = None,
) -> FastAPI:
    """Build the application with its adapters wired to ``transport``.

    Without an explicit transport a ``UrllibTransport`` configured from
    ``settings.yaml.http`` is used.
    """
    settings = settings or load_settings()
    if transport is None:
        transport = UrllibTransport(
            timeout=settings.yaml.http.timeout_seconds,
            user_agent=settings.yaml.http.user_agent,
        )

    application = FastAPI(title="CEP Temperature", version="0.1.0", lifespan=lifespan)
    application.state.settings = settings
    application.state.postal_adapter = ViaCepPostalAdapter(
        transport,
        base_url=settings.yaml.postal.base_url,
    )
    application.state.weather_adapter = WeatherApiAdapter(
        transport,
        api_key=settings.env.weather_api_key,
        base_url=settings.yaml.weather.base_url,
        include_air_quality=settings.yaml.weather.include_air_quality,
    )
    application.add_middleware(MethodGateMiddleware)
    application.include_router(router)
    return application


def run() -> None:
    settings = load_settings()
    configure_logging(settings.env.log_level)
    LOGGER.info("Server starting on port %s", settings.env.port)
    uvicorn.run(
        create_app(settings),
        host=settings.env.host,
        port=settings.env.port,
        log_config=None,
    )
