"""Visualization helpers for simulation histories."""

from __future__ import annotations

from typing import Any, Sequence

from matplotlib.axes import Axes
from matplotlib.figure import Figure

from .simulation import SimulationHistory


def plot_simulation(
    history: SimulationHistory | Any,
    *,
    axes: Sequence[Axes] | None = None,
    position_label: str = "Position [rad]",
    velocity_label: str = "Velocity [rad/s]",
) -> Figure:
    """Plot the time-series stored in a :class:`SimulationHistory`.

    Parameters
    ----------
    history:
        Samples returned by :meth:`MechanismSimulation.history`.
    axes:
        Optional sequence of four Matplotlib axes ordered as position,
        velocity, current and voltage. When omitted a new figure with four
        vertically stacked subplots is created.
    position_label, velocity_label:
        Axis labels. Pass metre-based labels for elevators.

    Returns
    -------
    matplotlib.figure.Figure
        The figure hosting the plots.
    """

    try:
        import matplotlib.pyplot as plt
    except ImportError as exc:  # pragma: no cover - depends on optional dependency
        raise RuntimeError("Plotting requires matplotlib to be installed.") from exc

    if axes is None:
        fig, axes = plt.subplots(4, 1, sharex=True, figsize=(8.0, 8.0))
    else:
        if len(axes) != 4:
            raise ValueError("axes must contain 4 Matplotlib Axes objects")
        fig = axes[0].figure

    position_ax, velocity_ax, current_ax, voltage_ax = list(axes)
    time = history.time

    position_ax.plot(time, history.position, label="Position", color="#1f77b4")
    setpoint = getattr(history, "setpoint", None)
    if setpoint and len(setpoint) == len(time):
        position_ax.plot(time, setpoint, label="Setpoint", color="#7f7f7f", linestyle="--")
    position_ax.set_ylabel(position_label)
    position_ax.grid(True)
    position_ax.legend(loc="upper right")

    velocity_ax.plot(time, history.velocity, label="Velocity", color="#ff7f0e")
    velocity_ax.set_ylabel(velocity_label)
    velocity_ax.grid(True)

    current_ax.plot(time, history.current, label="Current", color="#2ca02c")
    current_ax.set_ylabel("Current [A]")
    current_ax.grid(True)

    voltage_ax.plot(time, history.voltage, label="Voltage", color="#d62728")
    voltage_ax.set_ylabel("Voltage [V]")
    voltage_ax.grid(True)

    voltage_ax.set_xlabel("Time [s]")

    return fig
