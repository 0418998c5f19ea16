"""Point masses (movable or anchored) in the plane."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from springmass.errors import InvalidMass


def as_vec2(v) -> np.ndarray:
    a = np.array(v, dtype=float).reshape(-1)
    if a.shape != (2,):
        raise ValueError(f"Expected a 2-vector, got shape {a.shape}.")
    return a


@dataclass
class Mass:
    position: np.ndarray  # shape (2,)
    velocity: np.ndarray  # shape (2,)
    mass: float
    is_fixed: bool = False
    force: np.ndarray = field(default_factory=lambda: np.zeros(2, dtype=float))  # recomputed every step

    def __post_init__(self) -> None:
        self.position = as_vec2(self.position)
        self.velocity = as_vec2(self.velocity)
        self.force = as_vec2(self.force)
        self.mass = float(self.mass)
        if self.is_fixed:
            self.mass = math.inf
            self.velocity = np.zeros(2, dtype=float)
        else:
            check_movable_mass(self.mass)

    @classmethod
    def movable(cls, position, mass: float, velocity=(0.0, 0.0)) -> Mass:
        return cls(position=position, velocity=velocity, mass=mass, is_fixed=False)

    @classmethod
    def anchored(cls, position) -> Mass:
        """Immovable anchor: infinite mass, zero velocity for the whole run."""
        return cls(position=position, velocity=(0.0, 0.0), mass=math.inf, is_fixed=True)

    def copy(self) -> Mass:
        return Mass(
            position=self.position.copy(),
            velocity=self.velocity.copy(),
            mass=self.mass,
            is_fixed=self.is_fixed,
            force=self.force.copy(),
        )


@dataclass(frozen=True)
class MassState:
    """Copied (position, velocity) snapshot handed to trajectory sinks."""

    position: np.ndarray
    velocity: np.ndarray

    @classmethod
    def of(cls, m: Mass) -> MassState:
        return cls(position=m.position.copy(), velocity=m.velocity.copy())

    def fields(self) -> tuple[float, float, float, float]:
        return (
            float(self.position[0]),
            float(self.position[1]),
            float(self.velocity[0]),
            float(self.velocity[1]),
        )


def check_movable_mass(m: float, index: int | None = None) -> None:
    if not math.isfinite(m) or m <= 0.0:
        where = '' if index is None else f' at index {index}'
        raise InvalidMass(f'Movable mass{where} must be finite and > 0, got {m!r}.')
