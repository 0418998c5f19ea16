"""2-D mass-spring simulation with semi-implicit Euler stepping."""

from __future__ import annotations

from springmass.errors import (
    DegenerateSpring,
    InvalidConnectivity,
    InvalidMass,
    InvalidSpring,
    SpringMassError,
    TrajectoryIOError,
)
from springmass.mass import Mass, MassState
from springmass.output import DatWriter, MemorySink, format_state_line
from springmass.runner import ScenarioResult, run_scenario
from springmass.scenarios import SCENARIOS, Scenario, get_scenario
from springmass.spring import Spring
from springmass.system import SimulationSystem


__all__ = [
    # Core
    'Mass',
    'MassState',
    'Spring',
    'SimulationSystem',
    # Errors
    'SpringMassError',
    'InvalidConnectivity',
    'InvalidMass',
    'InvalidSpring',
    'DegenerateSpring',
    'TrajectoryIOError',
    # Output
    'DatWriter',
    'MemorySink',
    'format_state_line',
    # Scenarios
    'Scenario',
    'SCENARIOS',
    'get_scenario',
    'ScenarioResult',
    'run_scenario',
]
