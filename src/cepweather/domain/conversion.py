from __future__ import annotations

KELVIN_OFFSET = 273


def to_fahrenheit(celsius: float) -> float:
    return celsius * 1.8 + 32


def to_kelvin(celsius: float) -> float:
    # Integer offset; clients compare against c + 273, not c + 273.15.
    return celsius + KELVIN_OFFSET
