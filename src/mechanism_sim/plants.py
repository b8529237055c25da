"""Plant selection by mechanism kind."""

from __future__ import annotations

import enum
from typing import Union

from ._plant_common import DEFAULT_DT, Plant, PlantStep, clamp_to_travel
from .arm import ArmParameters, ArmPlant
from .elevator import ElevatorParameters, ElevatorPlant
from .errors import ConfigurationError

PlantParameters = Union[ArmParameters, ElevatorParameters]


class PlantKind(str, enum.Enum):
    ARM = "arm"
    ELEVATOR = "elevator"


def build_plant(kind: PlantKind | str, params: PlantParameters) -> Plant:
    """Return the plant model for ``kind`` configured with ``params``."""

    try:
        kind = PlantKind(kind)
    except ValueError:
        raise ConfigurationError(f"Unknown plant kind: {kind}") from None
    if kind is PlantKind.ARM:
        if not isinstance(params, ArmParameters):
            raise ConfigurationError("arm plants require ArmParameters")
        return ArmPlant(params)
    if not isinstance(params, ElevatorParameters):
        raise ConfigurationError("elevator plants require ElevatorParameters")
    return ElevatorPlant(params)


__all__ = [
    "DEFAULT_DT",
    "Plant",
    "PlantKind",
    "PlantParameters",
    "PlantStep",
    "build_plant",
    "clamp_to_travel",
]
