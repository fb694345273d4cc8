"""
Errors raised by the outbound lookups.

Resolvers raise these; the HTTP layer maps them to fixed client messages.
No framework imports allowed.
"""

from __future__ import annotations


class CepTempError(Exception):
    """Base error for every lookup failure."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class TransportError(CepTempError):
    """Raised when an outbound HTTP call cannot be completed."""


class DecodeError(CepTempError):
    """Raised when an upstream body does not have the expected shape."""


class PostalCodeNotFoundError(CepTempError):
    """Raised when the postal provider has no locality for a CEP."""

    def __init__(self, cep: str) -> None:
        super().__init__(f"CEP not found: {cep}")
        self.cep = cep


class MissingCredentialError(CepTempError):
    """Raised when the weather API key is not configured."""

    def __init__(self) -> None:
        super().__init__("WEATHER_API_KEY environment variable not set")


class UpstreamStatusError(CepTempError):
    """Raised when the weather provider answers with a non-success status."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"failed to get weather data: status code {status_code}")
        self.status_code = status_code
