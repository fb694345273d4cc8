from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient

from cep_temp.errors import TransportError
from cep_temp.main import create_app
from cep_temp.settings import AppSettings, CepTempYamlSettings, EnvSettings
from cep_temp.transport import HttpRequest, HttpResponse

VIACEP_SE = {
    "cep": "01001-000",
    "logradouro": "Praça da Sé",
    "complemento": "lado ímpar",
    "bairro": "Sé",
    "localidade": "São Paulo",
    "uf": "SP",
    "ibge": "3550308",
    "gia": "1004",
    "ddd": "11",
    "siafi": "7107",
}

WEATHERAPI_SAO_PAULO = {
    "location": {"name": "São Paulo", "region": "Sao Paulo", "country": "Brazil"},
    "current": {"temp_c": 25.0},
}


def json_response(payload: Any, status_code: int = 200) -> HttpResponse:
    return HttpResponse(status_code=status_code, body=json.dumps(payload).encode("utf-8"))


class ScriptedTransport:
    """Answers requests from a table keyed by URL substring."""

    def __init__(self, routes: dict[str, HttpResponse | Exception] | None = None) -> None:
        self.routes = dict(routes or {})
        self.requests: list[HttpRequest] = []

    def send(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        for fragment, outcome in self.routes.items():
            if fragment in request.url:
                if isinstance(outcome, Exception):
                    raise outcome
                return outcome
        return json_response({}, status_code=500)

    def urls(self) -> list[str]:
        return [request.url for request in self.requests]


def make_settings(weather_api_key: str | None = "test-api-key") -> AppSettings:
    return AppSettings(
        env=EnvSettings(_env_file=None, weather_api_key=weather_api_key),
        yaml=CepTempYamlSettings(),
        config_path=Path("config/cep_temp.yaml"),
    )


@pytest.fixture
def transport() -> ScriptedTransport:
    return ScriptedTransport(
        {
            "viacep.com.br": json_response(VIACEP_SE),
            "weatherapi.com": json_response(WEATHERAPI_SAO_PAULO),
        }
    )


@pytest.fixture
def client(transport: ScriptedTransport) -> TestClient:
    return TestClient(create_app(make_settings(), transport))


@pytest.fixture
def unreachable() -> TransportError:
    return TransportError("connection refused")
