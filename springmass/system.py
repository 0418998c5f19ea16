"""
Mass-spring system: connectivity binding and semi-implicit Euler stepping.

A step is three phases run strictly in order:
  1. zero the accumulated force on every mass
  2. accumulate every spring force once (F on B, -F on A)
  3. integrate movable masses: v += dt/m * F, then x += dt * v (new v)

Anchored masses are never integrated, so their position and velocity are
bit-identical across any number of steps.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping, Sequence

import numpy as np

from springmass.errors import DegenerateSpring, InvalidConnectivity
from springmass.mass import Mass, MassState, check_movable_mass
from springmass.spring import Spring


Connectivity = Mapping[int, tuple[int, int]]


def _as_table(connectivity: Connectivity | Sequence[tuple[int, int]]) -> dict[int, tuple[int, int]]:
    if isinstance(connectivity, Mapping):
        items = connectivity.items()
    else:
        items = enumerate(connectivity)

    table: dict[int, tuple[int, int]] = {}
    for key, pair in items:
        try:
            a, b = pair
        except (TypeError, ValueError) as e:
            raise InvalidConnectivity(f'Connectivity entry for spring {key!r} must be a pair of mass indices, got {pair!r}.') from e
        table[key] = (a, b)
    return table


def _check_index(value, n: int, what: str, spring_idx) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidConnectivity(f'Spring {spring_idx!r}: {what} index must be an integer, got {value!r}.')
    idx = int(value)
    if idx < 0 or idx >= n:
        raise InvalidConnectivity(f'Spring {spring_idx!r}: {what} index {idx} out of range [0, {n}).')
    return idx


def bind_springs(n_masses: int, springs: Sequence[Spring], connectivity) -> tuple[Spring, ...]:
    """
    Resolve the connectivity table into bound copies of `springs`.

    Everything is validated before any spring is bound, so a failure leaves
    nothing half-built.
    """
    table = _as_table(connectivity)
    n_springs = len(springs)

    pairs: list[tuple[int, int] | None] = [None] * n_springs
    for s_idx, (a, b) in table.items():
        s = _check_index(s_idx, n_springs, 'spring', s_idx)
        ia = _check_index(a, n_masses, 'endpoint A', s_idx)
        ib = _check_index(b, n_masses, 'endpoint B', s_idx)
        if ia == ib:
            raise InvalidConnectivity(f'Spring {s}: both endpoints refer to mass {ia}.')
        pairs[s] = (ia, ib)

    missing = [i for i, p in enumerate(pairs) if p is None]
    if missing:
        raise InvalidConnectivity(f'No connectivity entry for spring(s) {missing}.')

    return tuple(sp.bound_to(a, b) for sp, (a, b) in zip(springs, pairs))


class SimulationSystem:
    def __init__(
        self,
        masses: Sequence[Mass],
        springs: Sequence[Spring],
        connectivity: Connectivity | Sequence[tuple[int, int]],
        *,
        strict: bool = False,
        on_degenerate: Callable[[DegenerateSpring], None] | None = None,
        echo=print,
    ) -> None:
        for i, m in enumerate(masses):
            if not m.is_fixed:
                check_movable_mass(m.mass, i)

        bound = bind_springs(len(masses), springs, connectivity)

        # Tuples: the collections cannot grow or shrink once springs are bound.
        self.masses: tuple[Mass, ...] = tuple(m.copy() for m in masses)
        self.springs: tuple[Spring, ...] = bound

        self.strict = strict
        self.echo = echo
        self.on_degenerate = on_degenerate if on_degenerate is not None else self._report_degenerate

        self.steps_taken = 0
        self.time_s = 0.0
        self.last_step_degenerate: list[DegenerateSpring] = []

    @property
    def n_masses(self) -> int:
        return len(self.masses)

    @property
    def n_springs(self) -> int:
        return len(self.springs)

    def mass(self, i: int) -> Mass:
        return self.masses[i]

    def state(self, i: int) -> MassState:
        return MassState.of(self.masses[i])

    def _report_degenerate(self, err: DegenerateSpring) -> None:
        self.echo(f'WARNING: step {err.step}: spring {err.spring_index} is degenerate, using zero force ({err})')

    def zero_forces(self) -> None:
        for m in self.masses:
            m.force[:] = 0.0

    def accumulate_forces(self) -> None:
        self.last_step_degenerate = []
        for s_idx, s in enumerate(self.springs):
            try:
                f = s.force(self.masses)
            except DegenerateSpring as e:
                e.spring_index = s_idx
                e.step = self.steps_taken
                if self.strict:
                    raise
                self.last_step_degenerate.append(e)
                self.on_degenerate(e)
                continue
            self.masses[s.b].force += f
            self.masses[s.a].force -= f

    def integrate(self, dt: float) -> None:
        for m in self.masses:
            if m.is_fixed:
                continue
            m.velocity += (dt / m.mass) * m.force
            m.position += dt * m.velocity

    def step(self, dt: float) -> None:
        dt = float(dt)
        if not math.isfinite(dt) or dt <= 0.0:
            raise ValueError(f'Time step must be finite and > 0, got {dt!r}.')

        self.zero_forces()
        self.accumulate_forces()
        self.integrate(dt)

        self.steps_taken += 1
        self.time_s += dt

    def kinetic_energy(self) -> float:
        return float(
            sum(0.5 * m.mass * float(m.velocity @ m.velocity) for m in self.masses if not m.is_fixed)
        )

    def potential_energy(self) -> float:
        return float(sum(s.potential_energy(self.masses) for s in self.springs))

    def total_energy(self) -> float:
        return self.kinetic_energy() + self.potential_energy()
