"""PID + feedforward voltage controller used by the mechanism simulations."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass

from .errors import ConfigurationError

NOMINAL_BATTERY_VOLTAGE = 12.0


class ControlMode(str, enum.Enum):
    """Quantity the PID loop regulates."""

    POSITION = "position"
    VELOCITY = "velocity"

    @classmethod
    def parse(cls, value: ControlMode | str) -> ControlMode:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            valid = ", ".join(mode.value for mode in cls)
            raise ConfigurationError(
                f"Unsupported control mode '{value}'. Choose from: {valid}."
            ) from None


@dataclass(frozen=True)
class ControlGains:
    """Feedback (``kP``, ``kI``, ``kD``) and feedforward gains.

    Feedback gains must be non-negative. Feedforward gains may take any sign.
    """

    kP: float = 0.0
    kI: float = 0.0
    kD: float = 0.0
    kS: float = 0.0
    kV: float = 0.0
    kA: float = 0.0
    kG: float = 0.0

    def __post_init__(self) -> None:
        for name in ("kP", "kI", "kD"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} must be non-negative")


def _sign(value: float) -> float:
    if value > 0:
        return 1.0
    if value < 0:
        return -1.0
    return 0.0


def _clamp_symmetric(value: float, limit: float) -> float:
    if math.isnan(value):
        return value
    return max(-limit, min(limit, value))


class PIDFeedforwardController:
    """Discrete PID controller with static/velocity/acceleration/gravity feedforward.

    The integrator is never clamped. Switching the control mode keeps the
    accumulated integral and previous error.

    Parameters
    ----------
    gains:
        Controller gains.
    control_mode:
        Initial :class:`ControlMode`.
    gravity_cosine:
        When ``True`` the ``kG`` term is scaled by ``cos(position)`` (rotating
        arm). Otherwise ``kG`` is applied as a constant offset (elevator).
    voltage_limit:
        Symmetric saturation applied to the summed output.
    """

    def __init__(
        self,
        gains: ControlGains,
        *,
        control_mode: ControlMode | str = ControlMode.POSITION,
        gravity_cosine: bool = True,
        voltage_limit: float = NOMINAL_BATTERY_VOLTAGE,
    ) -> None:
        self.gains = gains
        self.control_mode = ControlMode.parse(control_mode)
        self.gravity_cosine = gravity_cosine
        self.voltage_limit = voltage_limit

        self.target = 0.0
        self.target_velocity = 0.0
        self.integral = 0.0
        self.prev_error = 0.0

    def set_target(self, value: float) -> None:
        self.target = value

    def set_target_velocity(self, value: float) -> None:
        self.target_velocity = value

    def set_control_mode(self, mode: ControlMode | str) -> None:
        # Integrator and previous error carry over.
        self.control_mode = ControlMode.parse(mode)

    def feedforward(self, position: float, velocity: float, acceleration: float) -> float:
        gains = self.gains
        gravity_scale = math.cos(position) if self.gravity_cosine else 1.0
        return (
            gains.kS * _sign(velocity)
            + gains.kV * velocity
            + gains.kA * acceleration
            + gains.kG * gravity_scale
        )

    def pid(self, error: float, dt: float) -> float:
        gains = self.gains
        self.integral += error * dt
        derivative = (error - self.prev_error) / dt
        self.prev_error = error
        return gains.kP * error + gains.kI * self.integral + gains.kD * derivative

    def compute_voltage(
        self, position: float, velocity: float, acceleration: float, dt: float
    ) -> float:
        """Return the saturated voltage command for the current plant state."""

        if self.control_mode is ControlMode.POSITION:
            error = self.target - position
        else:
            error = self.target_velocity - velocity

        output = self.pid(error, dt) + self.feedforward(position, velocity, acceleration)
        return _clamp_symmetric(output, self.voltage_limit)


__all__ = [
    "NOMINAL_BATTERY_VOLTAGE",
    "ControlGains",
    "ControlMode",
    "PIDFeedforwardController",
]
