"""Shared fixtures for the mechanism simulation tests."""

from __future__ import annotations

import math

import pytest

from mechanism_sim import (
    DEFAULT_MOTOR_CATALOG,
    ArmParameters,
    ArmPlant,
    ControlGains,
    ElevatorParameters,
    ElevatorPlant,
    MechanismSimulation,
    build_motor_model,
)


@pytest.fixture()
def neo_geared():
    """Single NEO behind a 15:1 reduction."""

    return build_motor_model(DEFAULT_MOTOR_CATALOG["NEO"], 15.0, 1)


@pytest.fixture()
def arm_plant():
    return ArmPlant(
        ArmParameters(
            length=1.0,
            mass=5.0,
            min_angle=-math.pi / 2,
            max_angle=math.pi / 2,
            starting_angle=0.0,
        )
    )


@pytest.fixture()
def elevator_plant():
    return ElevatorPlant(
        ElevatorParameters(mass=5.0, drum_radius=0.0254, min_height=0.0, max_height=1.0)
    )


@pytest.fixture()
def make_simulation(neo_geared):
    def factory(plant, **gains):
        return MechanismSimulation(plant, neo_geared, ControlGains(**gains))

    return factory
