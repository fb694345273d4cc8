from __future__ import annotations

import json
from dataclasses import dataclass, field
from http.client import HTTPException
from typing import Any, Protocol
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from .errors import DecodeError, TransportError

DEFAULT_USER_AGENT = "cep-temp/0.1"


@dataclass(slots=True, frozen=True)
class HttpRequest:
    url: str
    method: str = "GET"
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(slots=True, frozen=True)
class HttpResponse:
    status_code: int
    body: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        try:
            return json.loads(self.body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise DecodeError("Response body is not valid JSON") from exc


class HttpTransport(Protocol):
    def send(self, request: HttpRequest) -> HttpResponse:
        """Perform ``request`` and return the response, whatever its status."""


class UrllibTransport:
    """Blocking transport backed by ``urllib``.

    Non-success statuses are returned as responses; only failures to complete
    the exchange raise ``TransportError``. ``timeout`` of None leaves urllib's
    default in place.
    """

    def __init__(
        self,
        *,
        timeout: float | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._timeout = timeout
        self._user_agent = user_agent

    def send(self, request: HttpRequest) -> HttpResponse:
        headers = {"User-Agent": self._user_agent, **request.headers}
        url_request = Request(request.url, headers=headers, method=request.method)
        kwargs: dict[str, Any] = {}
        if self._timeout is not None:
            kwargs["timeout"] = self._timeout

        try:
            with urlopen(url_request, **kwargs) as response:
                return HttpResponse(
                    status_code=response.status,
                    body=response.read(),
                    headers=dict(response.headers.items()),
                )
        except HTTPError as exc:
            body = exc.read() or b""
            headers = dict(exc.headers.items()) if exc.headers is not None else {}
            return HttpResponse(status_code=exc.code, body=body, headers=headers)
        except (URLError, HTTPException, TimeoutError, OSError) as exc:
            raise TransportError(f"Request to {_redact(request.url)} failed: {exc}") from exc


def _redact(url: str) -> str:
    base, _, _ = url.partition("?")
    return base
