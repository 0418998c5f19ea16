"""Exception types raised by the mass-spring kernel and its harness."""

from __future__ import annotations


class SpringMassError(Exception):
    """Base class for every error raised by springmass."""


class InvalidConnectivity(SpringMassError, ValueError):
    """A connectivity entry cannot be bound to the mass collection."""


class InvalidMass(SpringMassError, ValueError):
    """A movable mass has a non-positive or non-finite scalar mass."""


class InvalidSpring(SpringMassError, ValueError):
    """A spring has non-positive stiffness or a negative rest length."""


class DegenerateSpring(SpringMassError, ArithmeticError):
    """
    The two endpoints of a spring coincide, so the force direction is undefined.

    `spring_index` and `step` are filled in when the error comes out of
    SimulationSystem; a bare Spring.force() call leaves them as None.
    """

    def __init__(self, message: str, *, spring_index: int | None = None, step: int | None = None):
        super().__init__(message)
        self.spring_index = spring_index
        self.step = step


class TrajectoryIOError(SpringMassError, OSError):
    """Trajectory output could not be opened or written."""
