"""Single-joint rotating arm driven through a gearbox."""

from __future__ import annotations

import math
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


@dataclass(frozen=True)
class ArmParameters:
    """Physical description of an arm pivoting at one end.

    Parameters
    ----------
    length:
        Link length (m).
    mass:
        Lumped link mass (kg).
    moi:
        Moment of inertia about the pivot (kg*m^2). Defaults to a uniform rod
        pivoting at one end, ``mass * length**2 / 3``.
    min_angle, max_angle:
        Hard travel limits (rad).
    starting_angle:
        Initial angle (rad).
    gravity_cosine:
        Whether the gravity feedforward term is scaled by ``cos(angle)``.
    """

    length: float = 1.0
    mass: float = 5.0
    moi: float | None = None
    min_angle: float = -math.pi / 2
    max_angle: float = math.pi / 2
    starting_angle: float = 0.0
    gravity_cosine: bool = True

    def __post_init__(self) -> None:
        check_positive(self.length, "length")
        check_positive(self.mass, "mass")
        if self.moi is None:
            object.__setattr__(self, "moi", self.mass * self.length * self.length / 3)
        check_positive(self.moi, "moi")
        check_travel(self.min_angle, self.max_angle, self.starting_angle, "angle")


class ArmPlant:
    """Arm dynamics with gravity torque ``m*g*(L/2)*sin(angle)``."""

    def __init__(self, params: ArmParameters) -> None:
        self.params = params
        self.gravity_cosine = params.gravity_cosine

    @property
    def initial_position(self) -> float:
        return self.params.starting_angle

    @property
    def bounds(self) -> Tuple[float, float]:
        return self.params.min_angle, self.params.max_angle

    def gravity_torque(self, angle: float) -> float:
        p = self.params
        return p.mass * GRAVITY * (p.length / 2) * math.sin(angle)

    def physics_step(
        self,
        position: float,
        velocity: float,
        voltage: float,
        motor: EffectiveMotorModel,
        dt: float = DEFAULT_DT,
    ) -> PlantStep:
        current = motor.current(voltage, velocity)
        motor_torque = current * motor.kt

        net_torque = motor_torque - self.gravity_torque(position)
        acceleration = net_torque / self.params.moi

        # Semi-implicit Euler: position uses the updated velocity.
        velocity += acceleration * dt
        position += velocity * dt

        position, velocity = clamp_to_travel(position, velocity, *self.bounds)
        return PlantStep(
            position=position,
            velocity=velocity,
            acceleration=acceleration,
            current=current,
        )


__all__ = ["ArmParameters", "ArmPlant"]
