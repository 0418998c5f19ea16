"""Scenario batch command used by simulate.py."""

from __future__ import annotations

import json
from pathlib import Path

import numpy as np

from springmass.output import DatWriter, open_trajectory, write_timeseries_csv
from springmass.plotting import plot_energy, plot_trajectory
from springmass.runner import ScenarioResult, run_scenario
from springmass.scenarios import Scenario, get_scenario
from springmass.settings import (
    DEFAULT_CONFIG_PATH,
    read_config,
    req_bool,
    req_int,
    req_str,
    req_str_list,
    resolve_path,
)


def _summarize(scenario: Scenario, result: ScenarioResult, dat_path: Path) -> dict:
    e = result.energy
    e0 = float(e[0]) if e.size else 0.0
    return {
        'scenario': scenario.name,
        'description': scenario.description,
        'file': dat_path.name,
        'steps': result.n_steps,
        'dt_s': scenario.dt,
        'tracked': list(scenario.tracked),
        'energy_initial': e0,
        'energy_min': float(np.min(e)) if e.size else 0.0,
        'energy_max': float(np.max(e)) if e.size else 0.0,
        'energy_finite': bool(np.all(np.isfinite(e))),
        'degenerate_events': len(result.degenerate_events),
    }


def run_simulate_scenarios(
    *,
    config_path: Path = DEFAULT_CONFIG_PATH,
    scenario_names: list[str] | None = None,
    output_dir: Path | None = None,
    steps: int | None = None,
    plot: bool | None = None,
    strict: bool = False,
    echo=print,
) -> list[dict]:
    """
    Run the configured scenarios and write `.dat`, CSV, plots and summary.json.

    CLI arguments (non-None keyword args) override the config file.
    """
    config = read_config(config_path)

    names = scenario_names if scenario_names else req_str_list(config, ['run', 'scenarios'])
    scenarios = [get_scenario(n) for n in names]

    out_dir = output_dir if output_dir is not None else resolve_path(req_str(config, ['output', 'dir']))
    out_dir.mkdir(parents=True, exist_ok=True)

    write_csv = req_bool(config, ['output', 'write_csv'])
    do_plot = req_bool(config, ['plotting', 'enabled']) if plot is None else plot
    dpi = req_int(config, ['plotting', 'dpi'])

    summary: list[dict] = []
    for scenario in scenarios:
        dat_path = out_dir / scenario.output_name
        with open_trajectory(dat_path) as f:
            sink = DatWriter(f, name=str(dat_path))
            result = run_scenario(scenario, sink, steps=steps, strict=strict, echo=echo)

        mass_names = [f'm{i}' for i in scenario.tracked]
        stem = dat_path.stem

        if write_csv:
            write_timeseries_csv(
                out_dir / f'{stem}.csv',
                result.time_s,
                mass_names,
                result.positions,
                result.velocities,
                energy=result.energy,
            )

        if do_plot and result.n_steps > 0:
            plot_trajectory(
                result.time_s,
                result.positions,
                mass_names,
                out_dir / f'{stem}_trajectory.png',
                title=scenario.description,
                dpi=dpi,
            )
            plot_energy(
                result.time_s,
                result.energy,
                out_dir / f'{stem}_energy.png',
                title=f'{scenario.description}: energy',
                dpi=dpi,
            )

        row = _summarize(scenario, result, dat_path)
        summary.append(row)
        echo(f"  {row['file']}: {row['steps']} rows, E0={row['energy_initial']:.6g}, "
             f"E in [{row['energy_min']:.6g}, {row['energy_max']:.6g}]")
        if row['degenerate_events']:
            echo(f"  WARNING: {row['degenerate_events']} degenerate spring evaluation(s)")

    summary_path = out_dir / 'summary.json'
    summary_path.write_text(json.dumps(summary, indent=2) + '\n', encoding='utf-8')
    echo(f'\nResults written to {out_dir}/')
    return summary
