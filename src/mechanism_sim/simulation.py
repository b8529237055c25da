"""Fixed-step closed-loop simulation of a motor-driven mechanism."""

from __future__ import annotations

import logging
import math
from collections import deque
from dataclasses import dataclass
from typing import Deque, Tuple

from ._plant_common import DEFAULT_DT, Plant
from .controller import ControlGains, ControlMode, PIDFeedforwardController
from .electrical import EffectiveMotorModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationState:
    """Snapshot of the plant/controller state for quick inspection."""

    time: float
    position: float
    velocity: float
    acceleration: float
    voltage: float
    current: float
    integral: float
    prev_error: float
    target: float
    target_velocity: float


@dataclass(frozen=True)
class SimulationHistory:
    """Container with the most recent time-series samples."""

    time: Tuple[float, ...]
    position: Tuple[float, ...]
    setpoint: Tuple[float, ...]
    velocity: Tuple[float, ...]
    voltage: Tuple[float, ...]
    current: Tuple[float, ...]


class MechanismSimulation:
    """Closed-loop simulation of one plant driven by a PID + feedforward loop.

    Each :meth:`tick` computes a saturated voltage from the current state and
    then advances the plant by one semi-implicit Euler step. The instance keeps
    a rolling history of the last ``history_duration`` seconds for plotting.

    A simulation is tied to the configuration it was built with. To change the
    plant, motor or gains build a new instance instead of editing this one.
    """

    def __init__(
        self,
        plant: Plant,
        motor: EffectiveMotorModel,
        gains: ControlGains,
        *,
        control_mode: ControlMode | str = ControlMode.POSITION,
        dt: float = DEFAULT_DT,
        history_duration: float = 10.0,
        max_points: int = 8000,
    ) -> None:
        self.plant = plant
        self.motor = motor
        self.controller = PIDFeedforwardController(
            gains,
            control_mode=control_mode,
            gravity_cosine=plant.gravity_cosine,
        )
        self.dt = dt
        self.history_duration = history_duration
        self.max_points = max_points

        self.time = 0.0
        self.position = plant.initial_position
        self.velocity = 0.0
        self.acceleration = 0.0
        self.voltage = 0.0
        self.current = 0.0

        required_points = max(2, int(math.ceil(history_duration / dt)) + 1)
        history_points = max(max_points, required_points)
        self.time_history: Deque[float] = deque([0.0], maxlen=history_points)
        self.position_history: Deque[float] = deque([self.position], maxlen=history_points)
        self.setpoint_history: Deque[float] = deque([self._setpoint()], maxlen=history_points)
        self.velocity_history: Deque[float] = deque([self.velocity], maxlen=history_points)
        self.voltage_history: Deque[float] = deque([self.voltage], maxlen=history_points)
        self.current_history: Deque[float] = deque([self.current], maxlen=history_points)

    # ------------------------------------------------------------------
    # Public API used by drivers and the unit tests
    # ------------------------------------------------------------------
    @property
    def control_mode(self) -> ControlMode:
        return self.controller.control_mode

    @property
    def gains(self) -> ControlGains:
        return self.controller.gains

    def set_target(self, position: float) -> None:
        self.controller.set_target(position)
        self._refresh_setpoint()

    def set_target_velocity(self, velocity: float) -> None:
        self.controller.set_target_velocity(velocity)
        self._refresh_setpoint()

    def set_control_mode(self, mode: ControlMode | str) -> None:
        self.controller.set_control_mode(mode)
        self._refresh_setpoint()

    def tick(self, dt: float | None = None) -> SimulationState:
        """Advance the loop by ``dt`` seconds (the last used step by default)."""

        if dt is not None:
            self.dt = dt
        dt = self.dt
        self.time += dt

        self.voltage = self.controller.compute_voltage(
            self.position, self.velocity, self.acceleration, dt
        )
        result = self.plant.physics_step(
            self.position, self.velocity, self.voltage, self.motor, dt
        )
        self.position = result.position
        self.velocity = result.velocity
        self.acceleration = result.acceleration
        self.current = result.current

        self._record_sample()

        # Roughly once per simulated second at the nominal 50 Hz rate.
        if math.isfinite(self.time) and round(self.time * 50) % 50 == 0:
            logger.debug(
                "t=%.2f mode=%s target=%.4f target_velocity=%.4f position=%.4f "
                "velocity=%.4f voltage=%.3f current=%.3f",
                self.time,
                self.control_mode.value,
                self.controller.target,
                self.controller.target_velocity,
                self.position,
                self.velocity,
                self.voltage,
                self.current,
            )
        return self.state()

    def step(self, steps: int) -> None:
        for _ in range(steps):
            self.tick()

    def run_for(self, duration: float) -> None:
        """Advance the simulation for ``duration`` seconds."""

        if duration <= 0:
            raise ValueError("duration must be positive")
        steps = max(1, int(round(duration / self.dt)))
        self.step(steps)

    def state(self) -> SimulationState:
        return SimulationState(
            time=self.time,
            position=self.position,
            velocity=self.velocity,
            acceleration=self.acceleration,
            voltage=self.voltage,
            current=self.current,
            integral=self.controller.integral,
            prev_error=self.controller.prev_error,
            target=self.controller.target,
            target_velocity=self.controller.target_velocity,
        )

    def history(self) -> SimulationHistory:
        return SimulationHistory(
            time=tuple(self.time_history),
            position=tuple(self.position_history),
            setpoint=tuple(self.setpoint_history),
            velocity=tuple(self.velocity_history),
            voltage=tuple(self.voltage_history),
            current=tuple(self.current_history),
        )

    # ------------------------------------------------------------------
    # Internal bookkeeping
    # ------------------------------------------------------------------
    def _setpoint(self) -> float:
        if self.controller.control_mode is ControlMode.POSITION:
            return self.controller.target
        return self.controller.target_velocity

    def _refresh_setpoint(self) -> None:
        if self.setpoint_history:
            self.setpoint_history[-1] = self._setpoint()

    def _record_sample(self) -> None:
        self.time_history.append(self.time)
        self.position_history.append(self.position)
        self.setpoint_history.append(self._setpoint())
        self.velocity_history.append(self.velocity)
        self.voltage_history.append(self.voltage)
        self.current_history.append(self.current)
        self._trim_history()

    def _trim_history(self) -> None:
        min_time = self.time - self.history_duration
        while self.time_history and self.time_history[0] < min_time:
            self.time_history.popleft()
            self.position_history.popleft()
            self.setpoint_history.popleft()
            self.velocity_history.popleft()
            self.voltage_history.popleft()
            self.current_history.popleft()


__all__ = ["MechanismSimulation", "SimulationHistory", "SimulationState"]
