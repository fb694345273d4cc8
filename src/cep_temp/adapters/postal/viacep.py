from __future__ import annotations

import logging

from pydantic import ValidationError

from ...domain.models import PostalLookupResult, ViaCepAddress
from ...errors import DecodeError, PostalCodeNotFoundError
from ...transport import HttpRequest, HttpTransport

LOGGER = logging.getLogger(__name__)

VIACEP_BASE_URL = "https://viacep.com.br"


class ViaCepPostalAdapter:
    def __init__(self, transport: HttpTransport, *, base_url: str = VIACEP_BASE_URL) -> None:
        self._transport = transport
        self._base_url = base_url.rstrip("/")

    def build_url(self, cep: str) -> str:
        return f"{self._base_url}/ws/{cep}/json/"

    def lookup_address(self, cep: str) -> ViaCepAddress:
        # ViaCEP reports unknown codes in the payload, so the status is not checked.
        response = self._transport.send(HttpRequest(url=self.build_url(cep)))
        payload = response.json()
        if not isinstance(payload, dict):
            raise DecodeError("Unexpected ViaCEP response shape")

        try:
            return ViaCepAddress.model_validate(payload)
        except ValidationError as exc:
            raise DecodeError("ViaCEP response did not match the address schema") from exc

    def lookup(self, cep: str) -> PostalLookupResult:
        address = self.lookup_address(cep)
        result = PostalLookupResult.from_address(address)
        if not result.found:
            raise PostalCodeNotFoundError(cep)

        LOGGER.debug("Resolved CEP %s to %s/%s", cep, result.locality, address.uf)
        return result
