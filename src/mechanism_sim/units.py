"""Unit conversion factors used when reading mechanism settings.

Everything downstream of the configuration layer works in SI units
(kg, m, rad, s).
"""

from __future__ import annotations

import math

LBS_TO_KG: float = 0.453592
KG_TO_LBS: float = 2.20462
METER_TO_INCH: float = 39.3701


def mass_to_kg(mass: float, unit: str | None) -> float:
    """Return ``mass`` in kilograms. ``unit`` is ``"kg"`` (default) or ``"lbs"``."""

    if unit == "lbs":
        return mass * LBS_TO_KG
    return mass


def mass_to_lbs(mass: float, unit: str | None) -> float:
    if unit == "kg":
        return mass * KG_TO_LBS
    return mass


def degrees_to_radians(value: float) -> float:
    return (math.pi * value) / 180
