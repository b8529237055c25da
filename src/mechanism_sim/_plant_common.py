"""Shared helpers for the mechanism plant models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Tuple

from .electrical import EffectiveMotorModel
from .errors import ConfigurationError

DEFAULT_DT = 0.02


@dataclass(frozen=True)
class PlantStep:
    """Plant state after one physics step."""

    position: float
    velocity: float
    acceleration: float
    current: float


class Plant(Protocol):
    """Interface shared by :class:`ArmPlant` and :class:`ElevatorPlant`."""

    gravity_cosine: bool

    @property
    def initial_position(self) -> float:  # pragma: no cover - protocol definition
        ...

    @property
    def bounds(self) -> Tuple[float, float]:  # pragma: no cover - protocol definition
        ...

    def physics_step(
        self,
        position: float,
        velocity: float,
        voltage: float,
        motor: EffectiveMotorModel,
        dt: float = DEFAULT_DT,
    ) -> PlantStep:  # pragma: no cover - protocol definition
        ...


def clamp_to_travel(
    position: float, velocity: float, lower: float, upper: float
) -> Tuple[float, float]:
    """Hold ``position`` inside ``[lower, upper]`` with an inelastic stop.

    Only the velocity component pushing further past the violated bound is
    removed.
    """

    if position < lower:
        position = lower
        velocity = max(0.0, velocity)
    if position > upper:
        position = upper
        velocity = min(0.0, velocity)
    return position, velocity


def check_travel(lower: float, upper: float, start: float, what: str) -> None:
    if lower > upper:
        raise ConfigurationError(f"minimum {what} must not exceed maximum {what}")
    if not lower <= start <= upper:
        raise ConfigurationError(
            f"starting {what} must be in [{lower}, {upper}], got {start}"
        )


def check_positive(value: float, name: str) -> None:
    if not value > 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
