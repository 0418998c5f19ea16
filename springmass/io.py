from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import numpy as np


FIELDS_PER_MASS = 4  # x y vx vy


@dataclass
class Trajectory:
    positions: np.ndarray  # shape (T, M, 2)
    velocities: np.ndarray  # shape (T, M, 2)

    @property
    def n_steps(self) -> int:
        return int(self.positions.shape[0])

    @property
    def n_masses(self) -> int:
        return int(self.positions.shape[1])


def _parse_row(line: str, line_no: int, path: Path) -> list[float]:
    parts = line.split()
    try:
        return [float(p) for p in parts]
    except ValueError as e:
        raise ValueError(f'{path.name}:{line_no}: non-numeric field in {line!r}') from e


def read_trajectory(path: Path) -> Trajectory:
    """Read a whitespace-separated `.dat` trajectory written by DatWriter."""
    text = path.read_text(encoding='utf-8')

    rows: list[list[float]] = []
    width = None
    for line_no, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith('#'):
            continue
        row = _parse_row(line, line_no, path)
        if width is None:
            width = len(row)
            if width == 0 or width % FIELDS_PER_MASS != 0:
                raise ValueError(
                    f'{path.name}:{line_no}: expected a multiple of {FIELDS_PER_MASS} fields, got {width}'
                )
        elif len(row) != width:
            raise ValueError(f'{path.name}:{line_no}: expected {width} fields, got {len(row)}')
        rows.append(row)

    if not rows:
        raise ValueError(f'No trajectory rows found in {path.name}')

    data = np.asarray(rows, dtype=float).reshape(len(rows), -1, FIELDS_PER_MASS)
    return Trajectory(positions=data[:, :, 0:2].copy(), velocities=data[:, :, 2:4].copy())
