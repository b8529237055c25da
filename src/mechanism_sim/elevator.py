"""Drum-and-cable vertical elevator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ._plant_common import (
    DEFAULT_DT,
    PlantStep,
    check_positive,
    check_travel,
    clamp_to_travel,
)
from .electrical import GRAVITY, EffectiveMotorModel

DEFAULT_DRUM_RADIUS = 0.0254  # 1 inch


@dataclass(frozen=True)
class ElevatorParameters:
    """Carriage mass, drum radius and travel range (all SI units).

    ``starting_height`` defaults to ``min_height``.
    """

    mass: float = 5.0
    drum_radius: float = DEFAULT_DRUM_RADIUS
    min_height: float = 0.0
    max_height: float = 1.0
    starting_height: float | None = None

    def __post_init__(self) -> None:
        check_positive(self.mass, "mass")
        check_positive(self.drum_radius, "drum_radius")
        if self.starting_height is None:
            object.__setattr__(self, "starting_height", self.min_height)
        check_travel(self.min_height, self.max_height, self.starting_height, "height")


class ElevatorPlant:
    """Linear carriage lifted by a motor-driven drum.

    The motor side is solved in rotational units (``angle = height / r``) and
    converted back to linear acceleration. Gravity loads the drum with a
    constant ``m*g*r`` regardless of height.
    """

    gravity_cosine = False

    def __init__(self, params: ElevatorParameters) -> None:
        self.params = params

    @property
    def initial_position(self) -> float:
        return self.params.starting_height

    @property
    def bounds(self) -> Tuple[float, float]:
        return self.params.min_height, self.params.max_height

    @property
    def rotational_inertia(self) -> float:
        p = self.params
        return p.mass * p.drum_radius * p.drum_radius

    @property
    def gravity_torque(self) -> float:
        p = self.params
        return p.mass * GRAVITY * p.drum_radius

    def physics_step(
        self,
        position: float,
        velocity: float,
        voltage: float,
        motor: EffectiveMotorModel,
        dt: float = DEFAULT_DT,
    ) -> PlantStep:
        radius = self.params.drum_radius
        drum_velocity = velocity / radius

        current = motor.current(voltage, drum_velocity)
        motor_torque = current * motor.kt

        net_torque = motor_torque - self.gravity_torque
        drum_acceleration = net_torque / self.rotational_inertia
        acceleration = drum_acceleration * radius

        velocity += acceleration * dt
        position += velocity * dt

        position, velocity = clamp_to_travel(position, velocity, *self.bounds)
        return PlantStep(
            position=position,
            velocity=velocity,
            acceleration=acceleration,
            current=current,
        )


__all__ = ["DEFAULT_DRUM_RADIUS", "ElevatorParameters", "ElevatorPlant"]
