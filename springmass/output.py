"""Trajectory sinks and file writers for simulation results."""

from __future__ import annotations

import csv
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, TextIO

import numpy as np

from springmass.errors import TrajectoryIOError
from springmass.mass import MassState


class TrajectorySink(Protocol):
    def record(self, states: Sequence[MassState]) -> None: ...


def format_field(x: float) -> str:
    # Six significant digits, shortest form (same as a default C++ ostream).
    return f'{x:g}'


def format_state_line(states: Sequence[MassState]) -> str:
    """One line: `x y vx vy` per tracked mass, concatenated, newline-terminated."""
    fields: list[str] = []
    for st in states:
        fields += [format_field(v) for v in st.fields()]
    return ' '.join(fields) + '\n'


class DatWriter:
    """Sink writing whitespace-separated `.dat` trajectory lines to a text stream."""

    def __init__(self, stream: TextIO, *, name: str | None = None):
        self.stream = stream
        self.name = name if name is not None else getattr(stream, 'name', '<stream>')
        self.lines_written = 0

    def record(self, states: Sequence[MassState]) -> None:
        try:
            self.stream.write(format_state_line(states))
        except OSError as e:
            raise TrajectoryIOError(f'Failed writing trajectory to {self.name}: {e}') from e
        self.lines_written += 1


class MemorySink:
    """Keeps every recorded snapshot; handy for tests and in-process analysis."""

    def __init__(self) -> None:
        self.records: list[tuple[MassState, ...]] = []

    def record(self, states: Sequence[MassState]) -> None:
        self.records.append(tuple(states))

    def __len__(self) -> int:
        return len(self.records)

    def positions(self) -> np.ndarray:
        """Shape (T, M, 2)."""
        return np.array([[st.position for st in row] for row in self.records], dtype=float)

    def velocities(self) -> np.ndarray:
        """Shape (T, M, 2)."""
        return np.array([[st.velocity for st in row] for row in self.records], dtype=float)


def open_trajectory(path: Path) -> TextIO:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return path.open('w', encoding='utf-8')
    except OSError as e:
        raise TrajectoryIOError(f'Cannot open trajectory output {path}: {e}') from e


def write_timeseries_csv(
    path: Path,
    time_s: np.ndarray,
    mass_names: list[str],
    positions: np.ndarray,
    velocities: np.ndarray,
    *,
    energy: np.ndarray | None = None,
) -> None:
    """Write tracked-mass timeseries to CSV.

    positions/velocities: (T, M, 2), one column pair per tracked mass.
    Optional energy: (T,) written as E_total.
    """
    headers = ['time_s']
    for n in mass_names:
        headers += [f'x_{n}', f'y_{n}', f'vx_{n}', f'vy_{n}']
    if energy is not None:
        headers += ['E_total']

    try:
        with path.open('w', newline='', encoding='utf-8') as f:
            w = csv.writer(f)
            w.writerow(headers)
            for i in range(time_s.size):
                row = [f'{time_s[i]:.6f}']
                for j in range(positions.shape[1]):
                    row += [
                        f'{positions[i, j, 0]:.6f}',
                        f'{positions[i, j, 1]:.6f}',
                        f'{velocities[i, j, 0]:.6f}',
                        f'{velocities[i, j, 1]:.6f}',
                    ]
                if energy is not None:
                    row += [f'{energy[i]:.6f}']
                w.writerow(row)
    except OSError as e:
        raise TrajectoryIOError(f'Cannot write CSV {path}: {e}') from e
