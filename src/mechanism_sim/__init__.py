"""Closed-loop simulation of motor-driven arms and elevators."""

from .arm import ArmParameters, ArmPlant
from .config import (
    MechanismConfig,
    SimulationSetup,
    SliderRange,
    build_default_form_values,
    configure,
    convert_target_value,
    create_simulation,
    slider_range,
)
from .controller import (
    NOMINAL_BATTERY_VOLTAGE,
    ControlGains,
    ControlMode,
    PIDFeedforwardController,
)
from .electrical import (
    EffectiveMotorModel,
    arm_gravity_gain,
    build_motor_model,
    elevator_gravity_gain,
    rad_per_sec_per_volt_to_rpm_per_volt,
    resolve_motor_model,
    rpm_per_volt_to_rad_per_sec_per_volt,
)
from .elevator import ElevatorParameters, ElevatorPlant
from .errors import ConfigurationError, UnknownMechanismError, UnknownMotorError
from .motor_catalog import (
    DEFAULT_MOTOR_CATALOG,
    DEFAULT_MOTOR_NAME,
    MotorCatalog,
    MotorCatalogEntry,
    MotorControllerEntry,
)
from .plants import PlantKind, PlantStep, build_plant
from .plotting import plot_simulation
from .recalc import recalc_url
from .simulation import MechanismSimulation, SimulationHistory, SimulationState

__all__ = [
    "ArmParameters",
    "ArmPlant",
    "ConfigurationError",
    "ControlGains",
    "ControlMode",
    "DEFAULT_MOTOR_CATALOG",
    "DEFAULT_MOTOR_NAME",
    "EffectiveMotorModel",
    "ElevatorParameters",
    "ElevatorPlant",
    "MechanismConfig",
    "MechanismSimulation",
    "MotorCatalog",
    "MotorCatalogEntry",
    "MotorControllerEntry",
    "NOMINAL_BATTERY_VOLTAGE",
    "PIDFeedforwardController",
    "PlantKind",
    "PlantStep",
    "SimulationHistory",
    "SimulationSetup",
    "SimulationState",
    "SliderRange",
    "UnknownMechanismError",
    "UnknownMotorError",
    "arm_gravity_gain",
    "build_default_form_values",
    "build_motor_model",
    "build_plant",
    "configure",
    "convert_target_value",
    "create_simulation",
    "elevator_gravity_gain",
    "plot_simulation",
    "rad_per_sec_per_volt_to_rpm_per_volt",
    "recalc_url",
    "resolve_motor_model",
    "rpm_per_volt_to_rad_per_sec_per_volt",
    "slider_range",
]
