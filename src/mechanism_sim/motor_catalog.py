"""Static motor and motor-controller tables."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Tuple

from .errors import UnknownMotorError


@dataclass(frozen=True)
class MotorCatalogEntry:
    """Datasheet constants for a single motor.

    Parameters
    ----------
    name:
        Lookup key, e.g. ``"NEO"``.
    kv:
        Speed constant in RPM per Volt.
    kt:
        Torque constant in N*m per Amp.
    km:
        Motor constant in N*m per sqrt(W).
    resistance:
        Winding resistance of one motor (Ohms).
    mass:
        Mass of one motor (kg).
    """

    name: str
    display_name: str
    kv: float
    kt: float
    km: float
    resistance: float
    mass: float
    compatible_controllers: Tuple[str, ...] = ()
    description: str = ""


@dataclass(frozen=True)
class MotorControllerEntry:
    """Capabilities of a motor controller."""

    name: str
    display_name: str
    supports_current_limit: bool
    supports_supply_current_limit: bool
    supports_brake_mode: bool
    supports_ramp_rate: bool
    supports_soft_limits: bool
    max_current_limit: float
    max_voltage: float = 12.0
    description: str = ""


class MotorCatalog(Mapping[str, MotorCatalogEntry]):
    """Read-only mapping of motor names to :class:`MotorCatalogEntry`.

    The catalog is handed to the electrical model builder explicitly so tests
    and callers can swap in their own motor tables.
    """

    def __init__(
        self,
        motors: Iterable[MotorCatalogEntry],
        controllers: Iterable[MotorControllerEntry] = (),
    ) -> None:
        self._motors: Mapping[str, MotorCatalogEntry] = MappingProxyType(
            {motor.name: motor for motor in motors}
        )
        self._controllers: Mapping[str, MotorControllerEntry] = MappingProxyType(
            {controller.name: controller for controller in controllers}
        )

    def __getitem__(self, name: str) -> MotorCatalogEntry:
        return self._motors[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._motors)

    def __len__(self) -> int:
        return len(self._motors)

    @property
    def controllers(self) -> Mapping[str, MotorControllerEntry]:
        return self._controllers

    def get_motor(self, name: str) -> MotorCatalogEntry:
        """Return the entry for ``name`` or raise :class:`UnknownMotorError`."""

        try:
            return self._motors[name]
        except KeyError:
            raise UnknownMotorError(name) from None

    def is_compatible(self, motor_name: str, controller_name: str) -> bool:
        """Return whether ``motor_name`` can be driven by ``controller_name``.

        Motors missing from the catalog are reported as compatible so that an
        unknown name never blocks a controller choice on its own.
        """

        motor = self._motors.get(motor_name)
        if motor is None:
            return True
        return controller_name in motor.compatible_controllers

    def compatible_motors(self, controller_name: str) -> List[MotorCatalogEntry]:
        return [
            motor
            for motor in self._motors.values()
            if controller_name in motor.compatible_controllers
        ]


_REV_CONTROLLERS = ("SparkMAX", "SparkFlex", "TalonFXS", "ThriftyNova", "ReduxNitrate")

DEFAULT_MOTOR_NAME = "NEO"

_DEFAULT_MOTORS: Tuple[MotorCatalogEntry, ...] = (
    MotorCatalogEntry(
        name="NEO",
        display_name="NEO",
        kv=493.5,
        kt=0.0181,
        km=0.070,
        resistance=0.066,
        mass=0.53977492,
        compatible_controllers=_REV_CONTROLLERS,
        description="REV Robotics NEO Brushless Motor",
    ),
    MotorCatalogEntry(
        name="NEO550",
        display_name="NEO 550",
        kv=985.6,
        kt=0.0097,
        km=0.030,
        resistance=0.108,
        mass=0.2540117,
        compatible_controllers=_REV_CONTROLLERS,
        description="REV Robotics NEO 550 Brushless Motor",
    ),
    MotorCatalogEntry(
        name="Minion",
        display_name="Minion",
        kv=627.6,
        kt=0.0155,
        km=0.063,
        resistance=0.060,
        mass=0.4399846,
        compatible_controllers=_REV_CONTROLLERS,
        description="REV Robotics Minion Brushless Motor",
    ),
    MotorCatalogEntry(
        name="Vortex",
        display_name="NEO Vortex",
        kv=575.1,
        kt=0.0171,
        km=0.072,
        resistance=0.057,
        mass=0.5805982,
        compatible_controllers=("SparkMAX", "SparkFlex", "TalonFXS", "ReduxNitrate"),
        description="REV Robotics NEO Vortex Brushless Motor",
    ),
    MotorCatalogEntry(
        name="Cu60",
        display_name="Redux Cu60",
        kv=567.6,
        kt=0.0166,
        km=0.100,
        resistance=0.027,
        mass=0.635029,
        compatible_controllers=("ReduxNitrate",),
        description="Redux Robotics Cu60 Brushless Motor",
    ),
    MotorCatalogEntry(
        name="Krakenx44",
        display_name="Kraken X44",
        kv=630.7,
        kt=0.0147,
        km=0.071,
        resistance=0.044,
        mass=0.3401943,
        compatible_controllers=("TalonFX",),
        description="CTRE Kraken X44 Brushless Motor",
    ),
    MotorCatalogEntry(
        name="Krakenx60",
        display_name="Kraken X60",
        kv=484.8,
        kt=0.0194,
        km=0.107,
        resistance=0.025,
        mass=0.544311,
        compatible_controllers=("TalonFX",),
        description="CTRE Kraken X60 Brushless Motor",
    ),
)


def _controller(
    name: str,
    display_name: str,
    *,
    supply_limit: bool,
    max_current: float,
    description: str,
) -> MotorControllerEntry:
    return MotorControllerEntry(
        name=name,
        display_name=display_name,
        supports_current_limit=True,
        supports_supply_current_limit=supply_limit,
        supports_brake_mode=True,
        supports_ramp_rate=True,
        supports_soft_limits=True,
        max_current_limit=max_current,
        description=description,
    )


_DEFAULT_CONTROLLERS: Tuple[MotorControllerEntry, ...] = (
    _controller("SparkMAX", "SparkMAX", supply_limit=False, max_current=80.0,
                description="REV Robotics SparkMAX Motor Controller"),
    _controller("SparkFlex", "SparkFlex", supply_limit=False, max_current=80.0,
                description="REV Robotics SparkFlex Motor Controller"),
    _controller("TalonFX", "TalonFX", supply_limit=True, max_current=100.0,
                description="CTRE TalonFX Motor Controller (Phoenix 6)"),
    _controller("TalonFXS", "TalonFXS", supply_limit=True, max_current=100.0,
                description="CTRE TalonFXS Motor Controller (Phoenix 6)"),
    _controller("ThriftyNova", "ThriftyNova", supply_limit=False, max_current=60.0,
                description="Thrifty Robotics Nova Motor Controller"),
    _controller("ReduxNitrate", "Redux Nitrate", supply_limit=True, max_current=80.0,
                description="Redux Robotics Nitrate Motor Controller"),
)

DEFAULT_MOTOR_CATALOG = MotorCatalog(_DEFAULT_MOTORS, _DEFAULT_CONTROLLERS)


def motor_names(catalog: MotorCatalog = DEFAULT_MOTOR_CATALOG) -> Dict[str, str]:
    """Return ``{name: display_name}`` for every motor in ``catalog``."""

    return {name: entry.display_name for name, entry in catalog.items()}


__all__ = [
    "DEFAULT_MOTOR_CATALOG",
    "DEFAULT_MOTOR_NAME",
    "MotorCatalog",
    "MotorCatalogEntry",
    "MotorControllerEntry",
    "motor_names",
]
