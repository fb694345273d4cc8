from __future__ import annotations

from typing import Protocol

from ...domain.models import PostalLookupResult


class PostalAdapter(Protocol):
    def lookup(self, cep: str) -> PostalLookupResult:
        """Resolve a postal code to the locality it belongs to."""
