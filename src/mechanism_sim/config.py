"""Translate mechanism form settings into simulation parameters.

The form payload uses the field names of the mechanism editor
(``mechanismType``, ``armParams.hardLimitMin`` and so on) with masses in
kilograms or pounds, angles in degrees and lengths in metres.
:func:`configure` converts it to the SI-only parameter objects consumed by the
plants and the controller.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .arm import ArmParameters
from .controller import ControlGains, ControlMode
from .electrical import EffectiveMotorModel, resolve_motor_model
from .elevator import DEFAULT_DRUM_RADIUS, ElevatorParameters
from .errors import ConfigurationError, UnknownMechanismError
from .motor_catalog import DEFAULT_MOTOR_CATALOG, DEFAULT_MOTOR_NAME, MotorCatalog
from .plants import PlantKind, PlantParameters, build_plant
from .simulation import MechanismSimulation
from .units import degrees_to_radians, mass_to_kg

logger = logging.getLogger(__name__)

MECHANISM_TYPES = ("Arm", "Elevator", "Pivot")
ANGULAR_MECHANISMS = ("Arm", "Pivot")

# Fixed geometry used to visualise turrets and wrists.
PIVOT_LENGTH = 0.3
PIVOT_MASS = 2.0


def _optional_float(values: Mapping[str, Any], key: str) -> Optional[float]:
    value = values.get(key)
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{key} must be a number, got {value!r}") from None


def _or_default(value: Optional[float], default: float) -> float:
    return default if value is None else value


@dataclass(frozen=True)
class ArmSettings:
    """Arm section of the form. Angles in degrees."""

    length: Optional[float] = None
    hard_limit_min: Optional[float] = None
    hard_limit_max: Optional[float] = None
    starting_position: Optional[float] = None
    mass: Optional[float] = None
    mass_unit: Optional[str] = None
    center_of_mass: Optional[float] = None

    @classmethod
    def from_form(cls, values: Mapping[str, Any]) -> "ArmSettings":
        return cls(
            length=_optional_float(values, "length"),
            hard_limit_min=_optional_float(values, "hardLimitMin"),
            hard_limit_max=_optional_float(values, "hardLimitMax"),
            starting_position=_optional_float(values, "startingPosition"),
            mass=_optional_float(values, "mass"),
            mass_unit=values.get("massUnit"),
            center_of_mass=_optional_float(values, "centerOfMass"),
        )


@dataclass(frozen=True)
class ElevatorSettings:
    """Elevator section of the form. Heights and drum size in metres."""

    starting_height: Optional[float] = None
    hard_limit_min: Optional[float] = None
    hard_limit_max: Optional[float] = None
    mass: Optional[float] = None
    mass_unit: Optional[str] = None
    drum_radius: Optional[float] = None
    drum_diameter: Optional[float] = None

    @classmethod
    def from_form(cls, values: Mapping[str, Any]) -> "ElevatorSettings":
        return cls(
            starting_height=_optional_float(values, "startingHeight"),
            hard_limit_min=_optional_float(values, "hardLimitMin"),
            hard_limit_max=_optional_float(values, "hardLimitMax"),
            mass=_optional_float(values, "mass"),
            mass_unit=values.get("massUnit"),
            drum_radius=_optional_float(values, "drumRadius"),
            drum_diameter=_optional_float(values, "drumDiameter"),
        )

    @property
    def effective_drum_radius(self) -> float:
        if self.drum_radius is not None:
            return self.drum_radius
        if self.drum_diameter is not None:
            return self.drum_diameter / 2
        return DEFAULT_DRUM_RADIUS


@dataclass(frozen=True)
class MechanismConfig:
    """Mechanism settings as entered by the user."""

    mechanism_type: str
    motor_type: str = DEFAULT_MOTOR_NAME
    motor_controller_type: Optional[str] = None
    gear_ratio: float = 1.0
    kP: float = 0.0
    kI: float = 0.0
    kD: float = 0.0
    feedforward: Mapping[str, float] = field(default_factory=dict)
    current_limit: Optional[float] = None
    arm: ArmSettings = field(default_factory=ArmSettings)
    elevator: ElevatorSettings = field(default_factory=ElevatorSettings)

    @classmethod
    def from_form(cls, form: Mapping[str, Any]) -> "MechanismConfig":
        """Build a config from the camelCase form payload."""

        pid = form.get("pidValues") or {}
        ff_values = form.get("feedforward") or {}
        feedforward: Dict[str, float] = {}
        for key in ff_values:
            value = _optional_float(ff_values, key)
            if value is not None:
                feedforward[key] = value
        current_limits = form.get("currentLimits") or {}
        return cls(
            mechanism_type=form.get("mechanismType", ""),
            motor_type=form.get("motorType") or DEFAULT_MOTOR_NAME,
            motor_controller_type=form.get("motorControllerType"),
            gear_ratio=_or_default(_optional_float(form, "gearRatio"), 1.0),
            kP=_or_default(_optional_float(pid, "kP"), 0.0),
            kI=_or_default(_optional_float(pid, "kI"), 0.0),
            kD=_or_default(_optional_float(pid, "kD"), 0.0),
            feedforward=feedforward,
            current_limit=_optional_float(current_limits, "stator"),
            arm=ArmSettings.from_form(form.get("armParams") or {}),
            elevator=ElevatorSettings.from_form(form.get("elevatorParams") or {}),
        )

    def gains(self, **overrides: float) -> ControlGains:
        values: Dict[str, float] = {
            "kP": self.kP,
            "kI": self.kI,
            "kD": self.kD,
            "kS": self.feedforward.get("kS", 0.0),
            "kV": self.feedforward.get("kV", 0.0),
            "kA": self.feedforward.get("kA", 0.0),
            "kG": self.feedforward.get("kG", 0.0),
        }
        values.update(overrides)
        return ControlGains(**values)


@dataclass(frozen=True)
class SimulationSetup:
    """Everything needed to build one :class:`MechanismSimulation`."""

    plant_kind: PlantKind
    params: PlantParameters
    gains: ControlGains
    motor: EffectiveMotorModel


@dataclass(frozen=True)
class SliderRange:
    """Bounds of the target slider, in display units."""

    min: float
    max: float
    step: float
    unit: str
    initial_value: float = 0.0


def as_mechanism_config(config: MechanismConfig | Mapping[str, Any]) -> MechanismConfig:
    if isinstance(config, MechanismConfig):
        return config
    return MechanismConfig.from_form(config)


def _arm_parameters(settings: ArmSettings) -> ArmParameters:
    mass = mass_to_kg(_or_default(settings.mass, 5.0), settings.mass_unit)
    return ArmParameters(
        length=_or_default(settings.length, 1.0),
        mass=mass,
        min_angle=degrees_to_radians(_or_default(settings.hard_limit_min, -90.0)),
        max_angle=degrees_to_radians(_or_default(settings.hard_limit_max, 90.0)),
        starting_angle=degrees_to_radians(_or_default(settings.starting_position, 0.0)),
    )


def _elevator_parameters(settings: ElevatorSettings) -> ElevatorParameters:
    mass = mass_to_kg(_or_default(settings.mass, 5.0), settings.mass_unit)
    return ElevatorParameters(
        mass=mass,
        drum_radius=settings.effective_drum_radius,
        min_height=_or_default(settings.hard_limit_min, 0.0),
        max_height=_or_default(settings.hard_limit_max, 1.0),
        starting_height=settings.starting_height,
    )


def _pivot_parameters() -> ArmParameters:
    return ArmParameters(
        length=PIVOT_LENGTH,
        mass=PIVOT_MASS,
        min_angle=-math.pi / 2,
        max_angle=math.pi / 2,
        starting_angle=0.0,
        gravity_cosine=False,
    )


def configure(
    config: MechanismConfig | Mapping[str, Any],
    motor_count: int = 1,
    *,
    catalog: MotorCatalog = DEFAULT_MOTOR_CATALOG,
) -> SimulationSetup:
    """Map mechanism settings to plant parameters, gains and a motor model.

    Raises
    ------
    UnknownMechanismError
        If ``mechanism_type`` is not ``"Arm"``, ``"Elevator"`` or ``"Pivot"``.
    ConfigurationError
        For invalid gearing, motor count, gains or plant geometry.
    """

    config = as_mechanism_config(config)
    mechanism = config.mechanism_type
    if mechanism not in MECHANISM_TYPES:
        raise UnknownMechanismError(mechanism)

    if mechanism == "Arm":
        kind, params = PlantKind.ARM, _arm_parameters(config.arm)
        gains = config.gains()
    elif mechanism == "Elevator":
        kind, params = PlantKind.ELEVATOR, _elevator_parameters(config.elevator)
        gains = config.gains()
    else:
        # Turrets and wrists get no gravity compensation.
        kind, params = PlantKind.ARM, _pivot_parameters()
        gains = config.gains(kG=0.0)

    controller = config.motor_controller_type
    if controller and not catalog.is_compatible(config.motor_type, controller):
        logger.warning(
            "Motor %s is not supported by the %s controller", config.motor_type, controller
        )

    motor = resolve_motor_model(
        config.motor_type, config.gear_ratio, motor_count, catalog=catalog
    )
    return SimulationSetup(plant_kind=kind, params=params, gains=gains, motor=motor)


def slider_range(
    config: MechanismConfig | Mapping[str, Any], mode: ControlMode | str
) -> SliderRange:
    """Return the target slider bounds for ``config`` in ``mode``."""

    config = as_mechanism_config(config)
    mode = ControlMode.parse(mode)
    mechanism = config.mechanism_type

    if mode is ControlMode.POSITION:
        if mechanism == "Arm":
            arm = config.arm
            return SliderRange(
                min=_or_default(arm.hard_limit_min, -90.0),
                max=_or_default(arm.hard_limit_max, 90.0),
                step=1,
                unit="°",
                initial_value=_or_default(arm.starting_position, 0.0),
            )
        if mechanism == "Elevator":
            elevator = config.elevator
            lowest = _or_default(elevator.hard_limit_min, 0.0)
            return SliderRange(
                min=lowest,
                max=_or_default(elevator.hard_limit_max, 1.0),
                step=0.01,
                unit="m",
                initial_value=_or_default(elevator.starting_height, lowest),
            )
        if mechanism == "Pivot":
            return SliderRange(min=-90, max=90, step=1, unit="°")
    else:
        if mechanism in ANGULAR_MECHANISMS:
            return SliderRange(min=-90, max=90, step=1, unit="°/s")
        if mechanism == "Elevator":
            return SliderRange(min=-1, max=1, step=0.01, unit="m/s")

    return SliderRange(min=-1, max=1, step=0.1, unit="")


def convert_target_value(
    value: float, config: MechanismConfig | Mapping[str, Any], mode: ControlMode | str
) -> float:
    """Convert a slider value to simulation units.

    Angular mechanisms take degrees (or degrees per second) and return
    radians; linear mechanisms pass through unchanged. The result applies to
    the position or the velocity target depending on ``mode``.
    """

    config = as_mechanism_config(config)
    ControlMode.parse(mode)
    if config.mechanism_type in ANGULAR_MECHANISMS:
        return degrees_to_radians(value)
    return value


def create_simulation(
    config: MechanismConfig | Mapping[str, Any],
    motor_count: int = 1,
    *,
    control_mode: ControlMode | str = ControlMode.POSITION,
    catalog: MotorCatalog = DEFAULT_MOTOR_CATALOG,
    **simulation_kwargs: Any,
) -> MechanismSimulation:
    """Build a ready-to-run simulation with its target at the slider's initial value."""

    config = as_mechanism_config(config)
    setup = configure(config, motor_count, catalog=catalog)
    plant = build_plant(setup.plant_kind, setup.params)
    simulation = MechanismSimulation(
        plant,
        setup.motor,
        setup.gains,
        control_mode=control_mode,
        **simulation_kwargs,
    )

    initial = slider_range(config, control_mode).initial_value
    target = convert_target_value(initial, config, control_mode)
    if simulation.control_mode is ControlMode.POSITION:
        simulation.set_target(target)
    else:
        simulation.set_target_velocity(target)

    logger.info(
        "Created %s simulation (%s, %d motor(s), gearing %s:1, mode=%s)",
        config.mechanism_type,
        config.motor_type,
        setup.motor.motor_count,
        config.gear_ratio,
        simulation.control_mode.value,
    )
    return simulation


def build_default_form_values(mechanism_type: str = "Arm", **overrides: Any) -> Dict[str, Any]:
    """Return a form payload useful for tests and examples."""

    form: Dict[str, Any] = {
        "mechanismType": mechanism_type,
        "motorControllerType": "SparkMAX",
        "motorType": "NEO",
        "gearRatio": 15.0,
        "pidValues": {"kP": 1.0, "kI": 0.0, "kD": 0.0},
        "feedforward": {"kS": 0.0, "kV": 0.0, "kA": 0.0, "kG": 0.0},
        "currentLimits": {"stator": 40.0},
        "armParams": {
            "length": 1.0,
            "hardLimitMin": -90.0,
            "hardLimitMax": 90.0,
            "startingPosition": 0.0,
            "mass": 5.0,
            "massUnit": "kg",
        },
        "elevatorParams": {
            "startingHeight": 0.0,
            "hardLimitMin": 0.0,
            "hardLimitMax": 1.0,
            "mass": 5.0,
            "massUnit": "kg",
            "drumRadius": 0.0254,
        },
    }
    form.update(overrides)
    return form


__all__ = [
    "ArmSettings",
    "ElevatorSettings",
    "MECHANISM_TYPES",
    "MechanismConfig",
    "SimulationSetup",
    "SliderRange",
    "as_mechanism_config",
    "build_default_form_values",
    "configure",
    "convert_target_value",
    "create_simulation",
    "slider_range",
]
