from __future__ import annotations

import numpy as np
import pytest

from springmass.errors import DegenerateSpring, InvalidConnectivity, InvalidMass
from springmass.mass import Mass
from springmass.output import format_state_line
from springmass.scenarios import one_mass_four_springs, one_spring_one_mass
from springmass.spring import Spring
from springmass.system import SimulationSystem


def _scenario1_system(**kwargs) -> SimulationSystem:
    return one_spring_one_mass().build_system(**kwargs)


def _silent(_msg: str) -> None:
    pass


def test_binding_resolves_into_own_mass_collection():
    masses = [Mass.anchored((0.0, 0.0)), Mass.movable((0.0, -3.0), mass=3.0)]
    springs = [Spring(stiffness=3.0, rest_length=2.0)]
    system = SimulationSystem(masses, springs, {0: (0, 1)})

    assert system.springs[0].a == 0
    assert system.springs[0].b == 1
    # The system owns copies; the caller's objects are untouched by stepping.
    assert system.mass(1) is not masses[1]
    system.step(0.1)
    np.testing.assert_array_equal(masses[1].position, [0.0, -3.0])
    # Caller's springs stay unbound.
    assert springs[0].a is None


def test_connectivity_accepts_sequence_of_pairs():
    masses = [Mass.anchored((0.0, 0.0)), Mass.movable((1.0, 0.0), mass=1.0)]
    system = SimulationSystem(masses, [Spring(1.0, 1.0)], [(0, 1)])
    assert (system.springs[0].a, system.springs[0].b) == (0, 1)


@pytest.mark.parametrize(
    "connectivity",
    [
        {0: (0, 2)},  # mass index out of range
        {0: (-1, 1)},  # negative
        {1: (0, 1)},  # spring index out of range, spring 0 unbound
        {0: (1, 1)},  # coincident endpoints
        {0: (0, 1.0)},  # non-integer index
        {0: (0,)},  # not a pair
        {},  # spring 0 unbound
    ],
)
def test_invalid_connectivity_rejected_at_construction(connectivity):
    masses = [Mass.anchored((0.0, 0.0)), Mass.movable((1.0, 0.0), mass=1.0)]
    with pytest.raises(InvalidConnectivity):
        SimulationSystem(masses, [Spring(1.0, 1.0)], connectivity)


def test_invalid_mass_rejected_at_construction():
    bad = Mass.movable((1.0, 0.0), mass=1.0)
    bad.mass = 0.0  # bypass the constructor check
    with pytest.raises(InvalidMass):
        SimulationSystem([Mass.anchored((0.0, 0.0)), bad], [Spring(1.0, 1.0)], {0: (0, 1)})


@pytest.mark.parametrize("dt", [0.0, -0.1, float("nan"), float("inf")])
def test_step_rejects_bad_dt(dt):
    system = _scenario1_system()
    with pytest.raises(ValueError):
        system.step(dt)


def test_scenario1_first_step_matches_hand_computation():
    system = _scenario1_system()
    system.step(0.1)

    m = system.mass(1)
    assert m.velocity[0] == 0.0
    assert m.velocity[1] == pytest.approx(0.1)
    assert m.position[0] == 0.0
    assert m.position[1] == pytest.approx(-2.99)
    assert format_state_line([system.state(1)]) == "0 -2.99 0 0.1\n"


def test_initial_line_format():
    system = _scenario1_system()
    assert format_state_line([system.state(1)]) == "0 -3 0 0\n"


def test_newtons_third_law_per_spring():
    masses = [
        Mass.movable((0.0, 0.0), mass=1.0),
        Mass.movable((1.3, 0.4), mass=2.0),
        Mass.movable((-0.5, 2.0), mass=0.5),
    ]
    springs = [Spring(2.0, 1.0), Spring(5.0, 3.0), Spring(0.7, 0.1)]
    connectivity = {0: (0, 1), 1: (1, 2), 2: (2, 0)}
    system = SimulationSystem(masses, springs, connectivity)

    for _ in range(25):
        for s in system.springs:
            solo = SimulationSystem(system.masses, [s], {0: (s.a, s.b)})
            solo.zero_forces()
            solo.accumulate_forces()
            np.testing.assert_array_equal(solo.mass(s.a).force, -solo.mass(s.b).force)
        system.zero_forces()
        system.accumulate_forces()
        # Internal forces only: the total must cancel.
        total = sum(m.force for m in system.masses)
        np.testing.assert_allclose(total, [0.0, 0.0], atol=1e-12)
        system.step(0.01)


def test_fixed_masses_are_bit_identical_across_steps():
    system = one_mass_four_springs().build_system()
    before = [(m.position.copy(), m.velocity.copy()) for m in system.masses if m.is_fixed]
    for _ in range(500):
        system.step(0.01)
    after = [(m.position, m.velocity) for m in system.masses if m.is_fixed]
    assert len(before) == 4
    for (p0, v0), (p1, v1) in zip(before, after):
        assert p0.tobytes() == p1.tobytes()
        assert v0.tobytes() == v1.tobytes()


def test_two_runs_are_bit_identical():
    dts = [0.01, 0.02, 0.005, 0.01] * 100
    runs = []
    for _ in range(2):
        system = one_mass_four_springs().build_system()
        traj = []
        for dt in dts:
            system.step(dt)
            traj.append(system.mass(4).position.tobytes() + system.mass(4).velocity.tobytes())
        runs.append(traj)
    assert runs[0] == runs[1]


def test_symmetric_square_gives_zero_net_force_at_centroid():
    masses = [
        Mass.anchored((0.0, 0.0)),
        Mass.anchored((1.0, 0.0)),
        Mass.anchored((0.0, 1.0)),
        Mass.anchored((1.0, 1.0)),
        Mass.movable((0.5, 0.5), mass=1.0),
    ]
    springs = [Spring(stiffness=2.0, rest_length=2.0) for _ in range(4)]
    system = SimulationSystem(masses, springs, {i: (i, 4) for i in range(4)})

    system.zero_forces()
    system.accumulate_forces()

    f = system.mass(4).force
    assert f[0] == pytest.approx(0.0, abs=1e-12)
    assert f[1] == pytest.approx(0.0, abs=1e-12)


def test_off_centre_mass_feels_a_net_force():
    system = one_mass_four_springs().build_system()
    system.zero_forces()
    system.accumulate_forces()
    assert float(np.linalg.norm(system.mass(4).force)) > 0.1


def test_scenario1_energy_stays_bounded():
    system = _scenario1_system()
    e0 = system.total_energy()
    assert e0 == pytest.approx(1.5)

    energies = []
    for _ in range(1000):
        system.step(0.1)
        energies.append(system.total_energy())

    energies = np.asarray(energies)
    assert np.all(np.isfinite(energies))
    assert float(np.max(energies)) < 1.5 * e0
    assert float(np.min(energies)) > 0.5 * e0


def test_degenerate_spring_is_reported_and_run_continues():
    masses = [Mass.anchored((0.0, 0.0)), Mass.movable((0.0, 0.0), mass=1.0)]
    seen: list[DegenerateSpring] = []
    system = SimulationSystem(masses, [Spring(1.0, 1.0)], {0: (0, 1)}, on_degenerate=seen.append)

    system.step(0.1)

    assert len(seen) == 1
    assert seen[0].spring_index == 0
    assert seen[0].step == 0
    assert system.last_step_degenerate == seen
    # Zero force substituted: nothing moved, nothing became NaN.
    np.testing.assert_array_equal(system.mass(1).position, [0.0, 0.0])
    np.testing.assert_array_equal(system.mass(1).velocity, [0.0, 0.0])
    assert system.steps_taken == 1


def test_degenerate_spring_default_report_uses_echo():
    lines: list[str] = []
    masses = [Mass.anchored((2.0, 2.0)), Mass.movable((2.0, 2.0), mass=1.0)]
    system = SimulationSystem(masses, [Spring(1.0, 1.0)], {0: (0, 1)}, echo=lines.append)
    system.step(0.1)
    assert len(lines) == 1
    assert "degenerate" in lines[0]


def test_strict_mode_raises_on_degenerate_spring():
    masses = [Mass.anchored((0.0, 0.0)), Mass.movable((0.0, 0.0), mass=1.0)]
    system = SimulationSystem(masses, [Spring(1.0, 1.0)], {0: (0, 1)}, strict=True, echo=_silent)
    with pytest.raises(DegenerateSpring) as exc:
        system.step(0.1)
    assert exc.value.spring_index == 0
    assert system.steps_taken == 0


def test_time_and_step_counters():
    system = _scenario1_system()
    system.step(0.1)
    system.step(0.05)
    assert system.steps_taken == 2
    assert system.time_s == pytest.approx(0.15)
    assert system.n_masses == 2
    assert system.n_springs == 1
