"""Behavioural tests for the closed-loop mechanism simulation."""

from __future__ import annotations

import math
import random

import pytest

from mechanism_sim import (
    ArmParameters,
    ArmPlant,
    ControlGains,
    ControlMode,
    ElevatorParameters,
    ElevatorPlant,
    MechanismSimulation,
    build_default_form_values,
    create_simulation,
)


def _trajectory(sim: MechanismSimulation, ticks: int):
    return [sim.tick(0.02) for _ in range(ticks)]


@pytest.mark.parametrize(
    "plant",
    [
        ArmPlant(ArmParameters(length=1.0, mass=5.0, starting_angle=0.3)),
        ArmPlant(ArmParameters(length=0.4, mass=1.0, min_angle=-0.2, max_angle=2.5)),
        ElevatorPlant(ElevatorParameters(mass=5.0, min_height=0.0, max_height=1.0)),
        ElevatorPlant(ElevatorParameters(mass=20.0, min_height=0.1, max_height=0.6)),
    ],
)
def test_voltage_and_position_stay_bounded_for_random_targets(plant, neo_geared):
    rng = random.Random(7)
    sim = MechanismSimulation(plant, neo_geared, ControlGains(kP=60.0, kI=5.0, kD=2.0, kG=1.0))
    lower, upper = plant.bounds

    for tick in range(1500):
        if tick % 100 == 0:
            sim.set_target(rng.uniform(-50.0, 50.0))
        if tick % 300 == 150:
            sim.set_control_mode(rng.choice(list(ControlMode)))
            sim.set_target_velocity(rng.uniform(-10.0, 10.0))
        state = sim.tick(0.02)
        assert -12.0 <= state.voltage <= 12.0
        assert lower <= state.position <= upper


@pytest.mark.parametrize(
    "plant",
    [
        ArmPlant(ArmParameters(starting_angle=0.0)),
        ElevatorPlant(ElevatorParameters(min_height=0.0, max_height=1.0)),
    ],
)
def test_zero_gains_produce_no_voltage_and_no_motion(plant, make_simulation):
    sim = make_simulation(plant)
    sim.set_target(1.0)
    start = sim.state().position

    for dt in (0.02, 0.01, 0.05, 0.003) * 50:
        state = sim.tick(dt)
        assert state.voltage == 0.0
        assert state.position == start


def test_gravity_feedforward_holds_arm(neo_geared):
    angle = math.radians(30.0)
    plant = ArmPlant(ArmParameters(length=1.0, mass=5.0, starting_angle=angle))
    gravity_torque = 5.0 * 9.81 * 0.5 * math.sin(angle)
    kG = gravity_torque * neo_geared.resistance / (neo_geared.kt * math.cos(angle))

    sim = MechanismSimulation(plant, neo_geared, ControlGains(kG=kG))
    sim.set_target(angle)
    states = _trajectory(sim, 500)

    assert all(abs(state.acceleration) < 1e-6 for state in states)
    assert states[-1].position == pytest.approx(angle, abs=1e-6)


def test_identical_inputs_produce_identical_trajectories():
    form = build_default_form_values("Arm", pidValues={"kP": 4.0, "kI": 0.5, "kD": 0.2})
    targets = [0.2, -0.4, 0.9, 0.0]

    def run():
        sim = create_simulation(form)
        states = []
        for target in targets:
            sim.set_target(target)
            states.extend(_trajectory(sim, 100))
        return states, sim.history()

    first_states, first_history = run()
    second_states, second_history = run()

    assert first_states == second_states
    assert first_history == second_history


def test_arm_step_scenario_approaches_target_without_diverging(arm_plant, make_simulation):
    sim = make_simulation(arm_plant, kP=1.0)
    target = math.radians(45.0)
    sim.set_target(target)
    assert target == pytest.approx(0.785, abs=1e-3)

    states = _trajectory(sim, 500)

    assert states[-1].time == pytest.approx(10.0)
    positions = [state.position for state in states]
    assert all(-math.pi / 2 <= p <= math.pi / 2 for p in positions)
    assert all(p <= target for p in positions)
    # Gravity keeps the arm short of the target; it must settle between.
    tail = positions[-100:]
    mean_tail = sum(tail) / len(tail)
    assert 0.0 < mean_tail < target
    # Oscillation amplitude must not grow over the run.
    assert max(tail) <= max(positions[:100]) + 0.02
    voltages = [state.voltage for state in states]
    assert all(0.0 <= v <= 12.0 for v in voltages)


def test_elevator_never_goes_below_minimum_height(elevator_plant, make_simulation):
    sim = make_simulation(elevator_plant, kP=1.0)
    sim.set_target(-10.0)

    for state in _trajectory(sim, 500):
        assert state.position >= 0.0
        assert state.voltage == pytest.approx(-10.0)


def test_mode_switch_round_trip_keeps_pid_state(arm_plant, make_simulation):
    gains = dict(kP=3.0, kI=2.0, kD=0.3)
    switched = make_simulation(arm_plant, **gains)
    plain = make_simulation(arm_plant, **gains)
    for sim in (switched, plain):
        sim.set_target(0.6)
        sim.set_target_velocity(1.0)
        _trajectory(sim, 60)

    before = switched.state()
    switched.set_control_mode("velocity")
    after = switched.state()
    assert after.integral == before.integral
    assert after.prev_error == before.prev_error

    switched.set_control_mode(ControlMode.POSITION)
    assert _trajectory(switched, 60) == _trajectory(plain, 60)


def test_velocity_mode_continues_from_position_integral(arm_plant, make_simulation):
    sim = make_simulation(arm_plant, kI=1.0)
    sim.set_target(0.5)
    _trajectory(sim, 10)
    integral = sim.state().integral
    assert integral != 0.0

    sim.set_control_mode(ControlMode.VELOCITY)
    sim.set_target_velocity(2.0)
    velocity = sim.state().velocity
    state = sim.tick(0.02)

    assert state.integral == pytest.approx(integral + (2.0 - velocity) * 0.02)


def test_tick_reuses_last_dt_and_run_for_counts_steps(arm_plant, make_simulation):
    sim = make_simulation(arm_plant, kP=1.0)
    sim.tick(0.01)
    sim.tick()
    assert sim.state().time == pytest.approx(0.02)

    sim.run_for(0.5)
    assert sim.state().time == pytest.approx(0.52)

    with pytest.raises(ValueError):
        sim.run_for(0.0)


def test_history_is_trimmed_to_duration(arm_plant, neo_geared):
    sim = MechanismSimulation(arm_plant, neo_geared, ControlGains(kP=1.0), history_duration=1.0)
    sim.set_target(0.4)
    sim.run_for(3.0)
    history = sim.history()

    assert history.time[0] >= sim.time - 1.0 - 1e-9
    assert len(history.time) == len(history.position) == len(history.voltage)
    assert history.setpoint[-1] == 0.4


def test_state_snapshot_reports_targets(arm_plant, make_simulation):
    sim = make_simulation(arm_plant, kP=1.0)
    sim.set_target(0.25)
    sim.set_target_velocity(-1.5)

    state = sim.state()
    assert state.target == 0.25
    assert state.target_velocity == -1.5
    assert state.time == 0.0
    assert state.position == arm_plant.initial_position


def test_step_advances_fixed_number_of_ticks(arm_plant, make_simulation):
    sim = make_simulation(arm_plant, kP=1.0)
    sim.set_target(0.3)
    sim.step(25)

    assert sim.state().time == pytest.approx(0.5)
    assert len(sim.history().time) == 26
