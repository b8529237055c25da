"""Links to the ReCalc mechanism calculators (https://www.reca.lc).

ReCalc estimates ``kG``, ``kV`` and ``kA`` for a given arm or linear
mechanism. The helpers below only build URLs; they never perform any I/O.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Mapping
from urllib.parse import quote

from .config import MechanismConfig, as_mechanism_config
from .units import METER_TO_INCH, mass_to_lbs

_URI_SAFE = "-_.!~*'()"

RECALC_ARM_URL = "https://www.reca.lc/arm"
RECALC_LINEAR_URL = "https://www.reca.lc/linear"
DEFAULT_CURRENT_LIMIT = 40.0

RECALC_MOTOR_NAMES: Dict[str, str] = {
    "NEO": "NEO",
    "NEO550": "NEO 550",
    "Krakenx44": "Kraken X44 (FOC)*",
    "Krakenx60": "Kraken X60 (FOC)*",
    "Vortex": "NEO Vortex",
    "Minion": "Minion*",
    "Cu60": "Cu60",
}


@dataclass(frozen=True)
class ReCalcArmParams:
    arm_mass: float
    arm_mass_unit: str
    com_length: float
    current_limit: float
    motor_type: str
    motor_count: int
    gear_ratio: float
    start_angle: float
    end_angle: float


@dataclass(frozen=True)
class ReCalcElevatorParams:
    load: float
    load_unit: str
    travel_distance: float
    spool_diameter: float
    current_limit: float
    motor_type: str
    motor_count: int
    gear_ratio: float


def _js_numbers(value: Any) -> Any:
    """Write whole floats as integers, as ``JSON.stringify`` does."""

    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, dict):
        return {key: _js_numbers(item) for key, item in value.items()}
    return value


def _encode_query(base_url: str, params: Mapping[str, Any]) -> str:
    # JSON with no spaces, escaped the way encodeURIComponent does it.
    query = "&".join(
        f"{key}={quote(json.dumps(_js_numbers(value), separators=(',', ':')), safe=_URI_SAFE)}"
        for key, value in params.items()
    )
    return f"{base_url}?{query}"


def _recalc_motor(motor_type: str) -> str:
    return RECALC_MOTOR_NAMES.get(motor_type, "NEO")


def build_recalc_arm_url(params: ReCalcArmParams) -> str:
    """Return the ReCalc arm calculator URL for ``params``."""

    return _encode_query(
        RECALC_ARM_URL,
        {
            "armMass": {"s": mass_to_lbs(params.arm_mass, params.arm_mass_unit), "u": "lbs"},
            "comLength": {"s": params.com_length * METER_TO_INCH, "u": "in"},
            "currentLimit": {"s": params.current_limit, "u": "A"},
            "efficiency": 100,
            "endAngle": {"s": params.end_angle, "u": "deg"},
            "iterationLimit": 10000,
            "motor": {"quantity": params.motor_count, "name": _recalc_motor(params.motor_type)},
            "ratio": {"magnitude": params.gear_ratio, "ratioType": "Reduction"},
            "startAngle": {"s": params.start_angle, "u": "deg"},
        },
    )


def build_recalc_elevator_url(params: ReCalcElevatorParams) -> str:
    """Return the ReCalc linear calculator URL for a vertical elevator."""

    return _encode_query(
        RECALC_LINEAR_URL,
        {
            "angle": {"s": 90, "u": "deg"},
            "currentLimit": {"s": params.current_limit, "u": "A"},
            "efficiency": 100,
            "limitAcceleration": 0,
            "limitDeceleration": 0,
            "limitVelocity": 0,
            "limitedAcceleration": {"s": 400, "u": "in/s2"},
            "limitedDeceleration": {"s": 50, "u": "in/s2"},
            "limitedVelocity": {"s": 10, "u": "in/s"},
            "load": {"s": mass_to_lbs(params.load, params.load_unit), "u": "lbs"},
            "motor": {"quantity": params.motor_count, "name": _recalc_motor(params.motor_type)},
            "ratio": {"magnitude": params.gear_ratio, "ratioType": "Reduction"},
            "spoolDiameter": {"s": params.spool_diameter * METER_TO_INCH, "u": "in"},
            "travelDistance": {"s": params.travel_distance * METER_TO_INCH, "u": "in"},
        },
    )


def arm_params_from_config(config: MechanismConfig, motor_count: int = 1) -> ReCalcArmParams:
    arm = config.arm
    length = arm.length if arm.length is not None else 1.0
    return ReCalcArmParams(
        arm_mass=arm.mass if arm.mass is not None else 5.0,
        arm_mass_unit=arm.mass_unit or "lbs",
        com_length=arm.center_of_mass if arm.center_of_mass is not None else length / 2,
        current_limit=config.current_limit or DEFAULT_CURRENT_LIMIT,
        motor_type=config.motor_type,
        motor_count=motor_count,
        gear_ratio=config.gear_ratio,
        start_angle=arm.starting_position or 0.0,
        end_angle=arm.hard_limit_max if arm.hard_limit_max is not None else 90.0,
    )


def elevator_params_from_config(
    config: MechanismConfig, motor_count: int = 1
) -> ReCalcElevatorParams:
    elevator = config.elevator
    top = elevator.hard_limit_max if elevator.hard_limit_max is not None else 2.0
    bottom = elevator.hard_limit_min if elevator.hard_limit_min is not None else 0.0
    return ReCalcElevatorParams(
        load=elevator.mass if elevator.mass is not None else 5.0,
        load_unit=elevator.mass_unit or "lbs",
        travel_distance=top - bottom,
        spool_diameter=elevator.effective_drum_radius * 2,
        current_limit=config.current_limit or DEFAULT_CURRENT_LIMIT,
        motor_type=config.motor_type,
        motor_count=motor_count,
        gear_ratio=config.gear_ratio,
    )


def is_recalc_supported(mechanism_type: str) -> bool:
    return mechanism_type in ("Arm", "Elevator")


def recalc_url(config: MechanismConfig | Mapping[str, Any], motor_count: int = 1) -> str | None:
    """Return the calculator URL for ``config`` or ``None`` for pivots."""

    config = as_mechanism_config(config)
    if config.mechanism_type == "Arm":
        return build_recalc_arm_url(arm_params_from_config(config, motor_count))
    if config.mechanism_type == "Elevator":
        return build_recalc_elevator_url(elevator_params_from_config(config, motor_count))
    return None


__all__ = [
    "RECALC_MOTOR_NAMES",
    "ReCalcArmParams",
    "ReCalcElevatorParams",
    "arm_params_from_config",
    "build_recalc_arm_url",
    "build_recalc_elevator_url",
    "elevator_params_from_config",
    "is_recalc_supported",
    "recalc_url",
]
