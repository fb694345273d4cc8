from __future__ import annotations

# Whole-number offset; clients compare against this value.
KELVIN_OFFSET = 273


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 1.8 + 32


def celsius_to_kelvin(celsius: float) -> float:
    return celsius + KELVIN_OFFSET
