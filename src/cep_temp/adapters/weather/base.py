from __future__ import annotations

from typing import Protocol

from ...domain.models import WeatherResult


class WeatherAdapter(Protocol):
    def get_current_temperature(self, locality: str) -> WeatherResult:
        """Fetch the current temperature, in Celsius, for a locality name."""
