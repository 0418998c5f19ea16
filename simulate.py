#!/usr/bin/env -S uv run

from __future__ import annotations

import argparse
from pathlib import Path

from springmass.commands import run_simulate_scenarios
from springmass.scenarios import SCENARIOS
from springmass.settings import DEFAULT_CONFIG_PATH


def main() -> None:
    parser = argparse.ArgumentParser(description="2-D mass-spring scenario runner")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Config JSON (default: config.json at the repo root).")
    parser.add_argument("--scenario", action="append", dest="scenarios", metavar="NAME", help="Scenario to run (repeatable). Overrides run.scenarios.")
    parser.add_argument("--output-dir", type=Path, default=None, help="Override output.dir.")
    parser.add_argument("--steps", type=int, default=None, help="Override the step count of every scenario.")
    parser.add_argument("--no-plot", action="store_true", help="Skip PNG output regardless of plotting.enabled.")
    parser.add_argument("--strict", action="store_true", help="Abort on the first degenerate spring instead of reporting it.")
    parser.add_argument("--list", action="store_true", help="List available scenarios, then exit.")
    args = parser.parse_args()

    if args.list:
        for name, s in SCENARIOS.items():
            print(f"{name:6s}  {s.description} (dt={s.dt:g}, steps={s.steps})")
        return

    if args.steps is not None and args.steps < 0:
        raise SystemExit("--steps must be >= 0.")

    run_simulate_scenarios(
        config_path=args.config,
        scenario_names=args.scenarios,
        output_dir=args.output_dir,
        steps=args.steps,
        plot=False if args.no_plot else None,
        strict=args.strict,
    )


if __name__ == "__main__":
    main()
