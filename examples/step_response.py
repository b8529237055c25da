"""Plot arm and elevator step responses for a sweep of proportional gains.

For each mechanism the script builds a fresh simulation per ``kP`` value,
commands a step and records ten simulated seconds at 50 Hz. It writes one SVG
per run into the ``figures`` directory and prints a short summary.

Run the script directly (e.g. ``PYTHONPATH=src python examples/step_response.py``)
to regenerate the figures.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt

from mechanism_sim import (
    SimulationHistory,
    build_default_form_values,
    convert_target_value,
    create_simulation,
    plot_simulation,
)

KP_VALUES = (1.0, 5.0, 20.0)
SIM_DURATION = 10.0
STEP_TARGETS = {"Arm": 45.0, "Elevator": 0.6}


@dataclass
class ScenarioResult:
    mechanism: str
    kp: float
    final_error: float
    peak_voltage: float
    history: SimulationHistory


def run_scenario(mechanism: str, kp: float) -> ScenarioResult:
    form = build_default_form_values(mechanism, pidValues={"kP": kp, "kI": 0.0, "kD": 0.0})
    sim = create_simulation(form, history_duration=SIM_DURATION)
    target = convert_target_value(STEP_TARGETS[mechanism], form, "position")
    sim.set_target(target)
    sim.run_for(SIM_DURATION)

    history = sim.history()
    return ScenarioResult(
        mechanism=mechanism,
        kp=kp,
        final_error=target - sim.state().position,
        peak_voltage=max(abs(v) for v in history.voltage),
        history=history,
    )


def collect_results() -> Dict[str, List[ScenarioResult]]:
    return {
        mechanism: [run_scenario(mechanism, kp) for kp in KP_VALUES]
        for mechanism in STEP_TARGETS
    }


def plot_scenario(scenario: ScenarioResult, *, output_path: Path) -> None:
    linear = scenario.mechanism == "Elevator"
    fig = plot_simulation(
        scenario.history,
        position_label="Height [m]" if linear else "Angle [rad]",
        velocity_label="Velocity [m/s]" if linear else "Velocity [rad/s]",
    )
    fig.suptitle(f"{scenario.mechanism} step response, kP={scenario.kp:g}")
    fig.savefig(output_path)
    plt.close(fig)


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    output_dir = Path("figures")
    output_dir.mkdir(exist_ok=True)

    data = collect_results()
    print("Generated:")
    for mechanism, results in data.items():
        for scenario in results:
            path = output_dir / f"{mechanism.lower()}_step_kp{scenario.kp:g}.svg"
            plot_scenario(scenario, output_path=path)
            print(f"  {path}")

    print("\nScenario summary:")
    for results in data.values():
        for scenario in results:
            error = scenario.final_error
            if scenario.mechanism == "Arm":
                error = math.degrees(error)
            print(
                f"  {scenario.mechanism} kP={scenario.kp:g}: final error={error:.3f}, "
                f"peak voltage={scenario.peak_voltage:.2f} V"
            )


if __name__ == "__main__":
    main()
