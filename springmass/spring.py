from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from springmass.errors import DegenerateSpring, InvalidSpring
from springmass.mass import Mass


@dataclass
class Spring:
    stiffness: float  # k (N/m), > 0
    rest_length: float  # l (m), >= 0

    # Stable indices into the owning system's mass collection (None until bound).
    a: int | None = None
    b: int | None = None

    def __post_init__(self) -> None:
        self.stiffness = float(self.stiffness)
        self.rest_length = float(self.rest_length)
        if not math.isfinite(self.stiffness) or self.stiffness <= 0.0:
            raise InvalidSpring(f'Spring stiffness must be finite and > 0, got {self.stiffness!r}.')
        if not math.isfinite(self.rest_length) or self.rest_length < 0.0:
            raise InvalidSpring(f'Spring rest length must be finite and >= 0, got {self.rest_length!r}.')

    @property
    def is_bound(self) -> bool:
        return self.a is not None and self.b is not None

    def bound_to(self, a: int, b: int) -> Spring:
        return Spring(stiffness=self.stiffness, rest_length=self.rest_length, a=int(a), b=int(b))

    def _endpoints(self, masses: Sequence[Mass]) -> tuple[np.ndarray, np.ndarray]:
        if not self.is_bound:
            raise RuntimeError('Spring is not bound to any masses.')
        return masses[self.a].position, masses[self.b].position

    def length(self, masses: Sequence[Mass]) -> float:
        x_a, x_b = self._endpoints(masses)
        return float(np.linalg.norm(x_b - x_a))

    def extension(self, masses: Sequence[Mass]) -> float:
        """Signed extension: > 0 stretched, < 0 compressed."""
        return self.length(masses) - self.rest_length

    def force(self, masses: Sequence[Mass]) -> np.ndarray:
        """
        Force exerted on endpoint B (endpoint A receives the negation).

        Magnitude is k * |len - l|. Stretched springs pull B toward A,
        compressed springs push B away from A:

            F_B = k * (len - l) * (x_A - x_B) / len

        Raises DegenerateSpring when the endpoints coincide (len == 0).
        """
        x_a, x_b = self._endpoints(masses)
        d = x_a - x_b
        length = float(np.linalg.norm(d))
        if length == 0.0:
            raise DegenerateSpring(
                f'Spring endpoints {self.a} and {self.b} coincide at {x_b.tolist()}; force direction is undefined.'
            )
        return (self.stiffness * (length - self.rest_length) / length) * d

    def potential_energy(self, masses: Sequence[Mass]) -> float:
        e = self.extension(masses)
        return 0.5 * self.stiffness * e * e
