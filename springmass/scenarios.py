from __future__ import annotations

from dataclasses import dataclass

from springmass.mass import Mass
from springmass.spring import Spring
from springmass.system import SimulationSystem


@dataclass(frozen=True)
class Scenario:
    name: str
    description: str
    masses: tuple[Mass, ...]
    springs: tuple[Spring, ...]
    connectivity: dict[int, tuple[int, int]]
    dt: float
    steps: int
    tracked: tuple[int, ...]  # mass indices written each step
    output_name: str

    def build_system(self, **kwargs) -> SimulationSystem:
        # SimulationSystem copies the masses, so a scenario can be run any number of times.
        return SimulationSystem(self.masses, self.springs, self.connectivity, **kwargs)


def one_spring_one_mass() -> Scenario:
    return Scenario(
        name="1m1s",
        description="One spring, one moving mass",
        masses=(
            Mass.anchored((0.0, 0.0)),
            Mass.movable((0.0, -3.0), mass=3.0),
        ),
        springs=(Spring(stiffness=3.0, rest_length=2.0),),
        connectivity={0: (0, 1)},
        dt=0.1,
        steps=1000,
        tracked=(1,),
        output_name="1m1s.dat",
    )


def one_mass_four_springs() -> Scenario:
    """Movable mass off-centre inside a unit square of anchors, one spring to each corner."""
    return Scenario(
        name="1m4s",
        description="One mass, four springs attached",
        masses=(
            Mass.anchored((0.0, 0.0)),
            Mass.anchored((1.0, 0.0)),
            Mass.anchored((0.0, 1.0)),
            Mass.anchored((1.0, 1.0)),
            Mass.movable((0.2, 0.6), mass=1.0),
        ),
        springs=tuple(Spring(stiffness=2.0, rest_length=2.0) for _ in range(4)),
        connectivity={i: (i, 4) for i in range(4)},
        dt=0.01,
        steps=10000,
        tracked=(4,),
        output_name="1m4s.dat",
    )


SCENARIOS: dict[str, Scenario] = {
    s.name: s
    for s in (
        one_spring_one_mass(),
        one_mass_four_springs(),
    )
}


def get_scenario(name: str) -> Scenario:
    key = name.strip()
    if key not in SCENARIOS:
        valid = ", ".join(SCENARIOS.keys())
        raise ValueError(f"Unknown scenario '{name}'. Available: {valid}")
    return SCENARIOS[key]
