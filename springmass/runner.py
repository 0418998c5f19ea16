"""Generic scenario runner: one function drives every scenario record."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from springmass.errors import DegenerateSpring
from springmass.output import TrajectorySink
from springmass.scenarios import Scenario


@dataclass
class ScenarioResult:
    name: str
    time_s: np.ndarray  # shape (T,)
    positions: np.ndarray  # shape (T, M, 2) for the tracked masses
    velocities: np.ndarray  # shape (T, M, 2)
    energy: np.ndarray  # shape (T,) total mechanical energy of the whole system
    degenerate_events: list[DegenerateSpring] = field(default_factory=list)

    @property
    def n_steps(self) -> int:
        return int(self.time_s.size)


def run_scenario(
    scenario: Scenario,
    sink: TrajectorySink | None = None,
    *,
    steps: int | None = None,
    strict: bool = False,
    echo=print,
) -> ScenarioResult:
    """
    Build a fresh system for `scenario` and advance it `steps` times.

    Tracked masses are recorded before each step, so row i holds the state
    after i steps (row 0 is the initial configuration).
    """
    n_steps = scenario.steps if steps is None else int(steps)
    if n_steps < 0:
        raise ValueError(f'steps must be >= 0, got {n_steps}.')

    events: list[DegenerateSpring] = []

    def on_degenerate(err: DegenerateSpring) -> None:
        events.append(err)
        echo(f'  WARNING [{scenario.name}] step {err.step}: spring {err.spring_index} degenerate, zero force used')

    system = scenario.build_system(strict=strict, on_degenerate=on_degenerate, echo=echo)

    m = len(scenario.tracked)
    time_s = np.zeros(n_steps, dtype=float)
    positions = np.zeros((n_steps, m, 2), dtype=float)
    velocities = np.zeros((n_steps, m, 2), dtype=float)
    energy = np.zeros(n_steps, dtype=float)

    echo(f'{scenario.description}...')
    for k in range(n_steps):
        states = [system.state(i) for i in scenario.tracked]
        if sink is not None:
            sink.record(states)

        time_s[k] = system.time_s
        for j, st in enumerate(states):
            positions[k, j] = st.position
            velocities[k, j] = st.velocity
        energy[k] = system.total_energy()

        system.step(scenario.dt)
    echo(f'{scenario.description}...done ({n_steps} steps, dt={scenario.dt:g})')

    return ScenarioResult(
        name=scenario.name,
        time_s=time_s,
        positions=positions,
        velocities=velocities,
        energy=energy,
        degenerate_events=events,
    )
