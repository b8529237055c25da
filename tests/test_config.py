"""Tests for mapping mechanism form values to simulation parameters."""

from __future__ import annotations

import logging
import math

import pytest

from mechanism_sim import (
    DEFAULT_MOTOR_CATALOG,
    ArmParameters,
    ConfigurationError,
    ControlMode,
    ElevatorParameters,
    MechanismConfig,
    PlantKind,
    UnknownMechanismError,
    build_default_form_values,
    configure,
    convert_target_value,
    create_simulation,
    slider_range,
)


def test_arm_form_is_converted_to_si_units():
    form = build_default_form_values(
        "Arm",
        armParams={
            "length": 0.8,
            "hardLimitMin": -45.0,
            "hardLimitMax": 120.0,
            "startingPosition": 30.0,
            "mass": 10.0,
            "massUnit": "lbs",
        },
    )
    setup = configure(form)

    assert setup.plant_kind is PlantKind.ARM
    params = setup.params
    assert isinstance(params, ArmParameters)
    assert params.length == 0.8
    assert params.mass == pytest.approx(4.53592)
    assert params.min_angle == pytest.approx(-math.pi / 4)
    assert params.max_angle == pytest.approx(2 * math.pi / 3)
    assert params.starting_angle == pytest.approx(math.pi / 6)
    assert params.gravity_cosine is True
    assert setup.gains.kP == 1.0
    assert setup.motor.kv == pytest.approx(493.5 / 15.0)


def test_missing_arm_values_use_defaults():
    setup = configure({"mechanismType": "Arm", "gearRatio": 1.0})
    params = setup.params

    assert params.length == 1.0
    assert params.mass == 5.0
    assert params.min_angle == pytest.approx(-math.pi / 2)
    assert params.max_angle == pytest.approx(math.pi / 2)
    assert params.starting_angle == 0.0
    assert setup.gains.kP == 0.0
    assert setup.gains.kG == 0.0


def test_elevator_form_defaults_drum_radius():
    form = build_default_form_values(
        "Elevator",
        elevatorParams={"mass": 20.0, "massUnit": "lbs", "hardLimitMax": 1.5},
    )
    setup = configure(form, motor_count=2)

    assert setup.plant_kind is PlantKind.ELEVATOR
    params = setup.params
    assert isinstance(params, ElevatorParameters)
    assert params.drum_radius == 0.0254
    assert params.mass == pytest.approx(20.0 * 0.453592)
    assert params.min_height == 0.0
    assert params.max_height == 1.5
    assert params.starting_height == 0.0
    assert setup.motor.motor_count == 2


def test_elevator_drum_diameter_is_halved():
    form = build_default_form_values("Elevator", elevatorParams={"drumDiameter": 0.1})

    assert configure(form).params.drum_radius == pytest.approx(0.05)


def test_pivot_uses_fixed_arm_without_gravity_compensation():
    form = build_default_form_values(
        "Pivot", feedforward={"kS": 0.1, "kV": 0.2, "kA": 0.0, "kG": 0.7}
    )
    setup = configure(form)

    assert setup.plant_kind is PlantKind.ARM
    assert setup.params.length == 0.3
    assert setup.params.mass == 2.0
    assert setup.params.gravity_cosine is False
    assert setup.gains.kG == 0.0
    assert setup.gains.kS == 0.1


def test_unknown_mechanism_fails_fast():
    with pytest.raises(UnknownMechanismError) as excinfo:
        configure(build_default_form_values("Turret"))

    assert "Turret" in str(excinfo.value)


def test_invalid_gear_ratio_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        configure(build_default_form_values("Arm", gearRatio=0.0))


def test_unknown_motor_falls_back_to_neo():
    setup = configure(build_default_form_values("Arm", motorType="Falcon500", gearRatio=1.0))

    assert setup.motor.kt == pytest.approx(0.0181)


def test_config_object_and_form_are_equivalent():
    form = build_default_form_values("Elevator")

    assert configure(MechanismConfig.from_form(form)) == configure(form)


@pytest.mark.parametrize(
    ("mechanism", "mode", "expected"),
    [
        ("Arm", "position", (-90.0, 90.0, 1, "°", 0.0)),
        ("Elevator", "position", (0.0, 1.0, 0.01, "m", 0.0)),
        ("Pivot", "position", (-90, 90, 1, "°", 0.0)),
        ("Arm", "velocity", (-90, 90, 1, "°/s", 0.0)),
        ("Pivot", "velocity", (-90, 90, 1, "°/s", 0.0)),
        ("Elevator", "velocity", (-1, 1, 0.01, "m/s", 0.0)),
        ("Shooter", "position", (-1, 1, 0.1, "", 0.0)),
    ],
)
def test_slider_ranges(mechanism, mode, expected):
    bounds = slider_range(build_default_form_values(mechanism), mode)

    assert (bounds.min, bounds.max, bounds.step, bounds.unit, bounds.initial_value) == expected


def test_arm_slider_follows_hard_limits():
    form = build_default_form_values(
        "Arm", armParams={"hardLimitMin": -10.0, "hardLimitMax": 135.0, "startingPosition": 20.0}
    )
    bounds = slider_range(form, ControlMode.POSITION)

    assert (bounds.min, bounds.max, bounds.initial_value) == (-10.0, 135.0, 20.0)


def test_target_conversion_depends_on_mechanism():
    arm = build_default_form_values("Arm")
    pivot = build_default_form_values("Pivot")
    elevator = build_default_form_values("Elevator")

    assert convert_target_value(45.0, arm, "position") == pytest.approx(math.pi / 4)
    assert convert_target_value(90.0, pivot, "velocity") == pytest.approx(math.pi / 2)
    assert convert_target_value(0.75, elevator, "position") == 0.75
    assert convert_target_value(-0.3, elevator, "velocity") == -0.3


def test_create_simulation_starts_at_slider_initial_value():
    form = build_default_form_values(
        "Arm", armParams={"startingPosition": 30.0, "hardLimitMin": -90.0, "hardLimitMax": 90.0}
    )
    sim = create_simulation(form)
    state = sim.state()

    assert state.position == pytest.approx(math.pi / 6)
    assert state.target == pytest.approx(math.pi / 6)
    assert sim.control_mode is ControlMode.POSITION


def test_create_simulation_in_velocity_mode():
    sim = create_simulation(build_default_form_values("Elevator"), control_mode="velocity", dt=0.01)

    assert sim.control_mode is ControlMode.VELOCITY
    assert sim.state().target_velocity == 0.0
    sim.tick()
    assert sim.state().time == pytest.approx(0.01)


def test_elevator_slider_starts_at_lower_limit_without_starting_height():
    form = build_default_form_values(
        "Elevator", elevatorParams={"hardLimitMin": 0.25, "hardLimitMax": 1.1}
    )
    bounds = slider_range(form, "position")

    assert (bounds.min, bounds.max, bounds.initial_value) == (0.25, 1.1, 0.25)
    assert create_simulation(form).state().target == 0.25


@pytest.mark.parametrize(
    ("overrides", "attribute", "expected"),
    [
        ({"gearRatio": None}, "gear_ratio", 1.0),
        ({"pidValues": {"kP": None, "kI": 0.5, "kD": None}}, "kP", 0.0),
        ({"pidValues": {"kP": 2.0, "kI": None, "kD": 0.1}}, "kI", 0.0),
        ({"pidValues": {"kP": 2.0, "kI": 0.5, "kD": None}}, "kD", 0.0),
        ({"feedforward": {"kS": None, "kG": 0.4}}, "feedforward", {"kG": 0.4}),
        ({"currentLimits": {"stator": None}}, "current_limit", None),
    ],
)
def test_null_form_values_take_defaults(overrides, attribute, expected):
    config = MechanismConfig.from_form(build_default_form_values("Arm", **overrides))

    assert getattr(config, attribute) == expected


def test_null_gear_ratio_builds_direct_drive_motor():
    setup = configure(build_default_form_values("Arm", gearRatio=None))

    assert setup.motor.gear_ratio == 1.0
    assert setup.gains.kP == 1.0


@pytest.mark.parametrize(
    ("overrides", "field_name"),
    [
        ({"gearRatio": "abc"}, "gearRatio"),
        ({"pidValues": {"kP": "fast"}}, "kP"),
        ({"feedforward": {"kG": [1.0]}}, "kG"),
        ({"armParams": {"length": "long"}}, "length"),
        ({"elevatorParams": {"drumDiameter": {}}}, "drumDiameter"),
    ],
)
def test_non_numeric_form_values_are_configuration_errors(overrides, field_name):
    form = build_default_form_values("Elevator", **overrides)

    with pytest.raises(ConfigurationError) as excinfo:
        configure(form)

    assert field_name in str(excinfo.value)


def test_unsupported_controller_pairing_is_logged(caplog):
    form = build_default_form_values("Arm", motorType="Krakenx60", motorControllerType="SparkMAX")

    with caplog.at_level(logging.WARNING, logger="mechanism_sim.config"):
        setup = configure(form)

    assert "Krakenx60" in caplog.text
    assert "SparkMAX" in caplog.text
    assert setup.motor.kt == pytest.approx(DEFAULT_MOTOR_CATALOG["Krakenx60"].kt * 15.0)


def test_supported_controller_pairing_is_quiet(caplog):
    with caplog.at_level(logging.WARNING, logger="mechanism_sim.config"):
        configure(build_default_form_values("Arm"))

    assert caplog.text == ""
