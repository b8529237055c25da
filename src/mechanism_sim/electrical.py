"""Effective electrical model of a geared motor group."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from .errors import ConfigurationError, UnknownMotorError
from .motor_catalog import (
    DEFAULT_MOTOR_CATALOG,
    DEFAULT_MOTOR_NAME,
    MotorCatalog,
    MotorCatalogEntry,
)

logger = logging.getLogger(__name__)

GRAVITY = 9.81  # m/s^2


def rpm_per_volt_to_rad_per_sec_per_volt(kv_rpm: float) -> float:
    """Convert a speed constant from RPM/V to rad/s/V."""

    return kv_rpm * 2.0 * math.pi / 60.0


def rad_per_sec_per_volt_to_rpm_per_volt(kv_rad: float) -> float:
    """Convert a speed constant from rad/s/V to RPM/V."""

    return kv_rad * 60.0 / (2.0 * math.pi)


@dataclass(frozen=True)
class EffectiveMotorModel:
    """Lumped constants of ``motor_count`` identical motors behind a gearbox.

    ``kv`` stays in RPM/V at the gearbox output, ``kt`` is the combined output
    torque constant and ``resistance`` models the windings wired in parallel.
    """

    kv: float
    kt: float
    resistance: float
    mass: float
    gear_ratio: float
    motor_count: int

    def back_emf(self, angular_velocity: float) -> float:
        """Back-EMF (V) produced at ``angular_velocity`` rad/s at the output."""

        return angular_velocity * (1 / self.kv) * ((2 * math.pi) / 60)

    def current(self, voltage: float, angular_velocity: float) -> float:
        return (voltage - self.back_emf(angular_velocity)) / self.resistance


def build_motor_model(
    entry: MotorCatalogEntry, gear_ratio: float, motor_count: int
) -> EffectiveMotorModel:
    """Scale a single-motor catalog entry by gearing and motor count."""

    if not gear_ratio > 0:
        raise ConfigurationError(f"gear_ratio must be positive, got {gear_ratio}")
    if motor_count < 1 or int(motor_count) != motor_count:
        raise ConfigurationError(f"motor_count must be an integer >= 1, got {motor_count}")
    motor_count = int(motor_count)

    return EffectiveMotorModel(
        kv=entry.kv / gear_ratio,
        kt=entry.kt * gear_ratio * motor_count,
        resistance=entry.resistance / motor_count,
        mass=entry.mass * motor_count,
        gear_ratio=gear_ratio,
        motor_count=motor_count,
    )


def resolve_motor_model(
    motor_name: str,
    gear_ratio: float = 1.0,
    motor_count: int = 1,
    *,
    catalog: MotorCatalog = DEFAULT_MOTOR_CATALOG,
    fallback: str = DEFAULT_MOTOR_NAME,
) -> EffectiveMotorModel:
    """Look up ``motor_name`` and build its model, falling back to ``fallback``.

    Only a missing catalog entry triggers the fallback. Invalid gearing or
    motor counts still raise :class:`ConfigurationError`.
    """

    try:
        entry = catalog.get_motor(motor_name)
    except UnknownMotorError:
        logger.warning(
            "Motor type %s not found in catalog, using %s as fallback", motor_name, fallback
        )
        entry = catalog.get_motor(fallback)

    model = build_motor_model(entry, gear_ratio, motor_count)
    logger.info(
        "Configured %d %s motor(s) with gearing %s:1 (kt=%.4f, R=%.4f, mass=%.3f)",
        model.motor_count,
        entry.name,
        gear_ratio,
        model.kt,
        model.resistance,
        model.mass,
    )
    return model


def arm_gravity_gain(mass: float, length: float, motor: EffectiveMotorModel) -> float:
    """Voltage that holds a horizontal uniform arm against gravity."""

    return (mass * GRAVITY * length) / 2 / (motor.kt / motor.resistance)


def elevator_gravity_gain(mass: float, drum_radius: float, motor: EffectiveMotorModel) -> float:
    """Voltage that holds an elevator carriage against gravity."""

    return (mass * GRAVITY * drum_radius) / (motor.kt / motor.resistance)


__all__ = [
    "GRAVITY",
    "EffectiveMotorModel",
    "arm_gravity_gain",
    "build_motor_model",
    "elevator_gravity_gain",
    "rad_per_sec_per_volt_to_rpm_per_volt",
    "resolve_motor_model",
    "rpm_per_volt_to_rad_per_sec_per_volt",
]
