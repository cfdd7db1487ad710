#!/usr/bin/env python
"""Run one of the canned lander scenarios from the command line.

Examples:
    uv run python scripts/run_scenario.py --scenario 1 --autopilot
    uv run python scripts/run_scenario.py --scenario 5 --autopilot --parachute \\
        --log outputs/trajectories.txt --plot outputs/descent.png
    uv run python scripts/run_scenario.py --scenario 0 --scheme euler \\
        --max-time 6000 --orbit-html outputs/orbit.html
"""

import argparse
import logging
import sys
from pathlib import Path

from lander import LanderConfig, SimConfig, Simulator
from lander.dynamics import IntegrationScheme
from lander.simulation import get_scenario

logger = logging.getLogger("run_scenario")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a Mars lander scenario.")
    parser.add_argument("--scenario", type=int, default=1, help="Scenario slot (0-9)")
    parser.add_argument("--autopilot", action="store_true", help="Enable the descent autopilot")
    parser.add_argument("--parachute", action="store_true",
                        help="Deploy the parachute before the first tick")
    parser.add_argument("--scheme", choices=["euler", "verlet"], default="verlet",
                        help="Integration scheme")
    parser.add_argument("--dt", type=float, default=None, help="Time step [s]")
    parser.add_argument("--max-time", type=float, default=100000.0,
                        help="Stop after this many simulated seconds")
    parser.add_argument("--log", type=Path, default=None,
                        help="Write the autopilot trajectory log to this file")
    parser.add_argument("--config", type=Path, default=None,
                        help="JSON file overriding planet and vehicle constants")
    parser.add_argument("--plot", type=Path, default=None,
                        help="Save a descent profile figure to this file")
    parser.add_argument("--orbit-html", type=Path, default=None,
                        help="Save an interactive 3D trajectory dashboard to this file")
    parser.add_argument("--progress", action="store_true", help="Show a progress bar")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        lander = LanderConfig.from_json(args.config) if args.config else LanderConfig()
        scenario = get_scenario(args.scenario, lander)
        config = SimConfig(
            dt=args.dt if args.dt is not None else scenario.dt,
            integration_scheme=IntegrationScheme[args.scheme.upper()],
            trajectory_log=args.log,
            max_time=args.max_time,
        )
    except (OSError, ValueError) as exc:
        logger.error("Invalid setup: %s", exc)
        return 2

    for path in (args.log, args.plot, args.orbit_html):
        if path is not None:
            path.parent.mkdir(parents=True, exist_ok=True)

    print("=" * 60)
    print(f"SCENARIO {scenario.index}: {scenario.description or '(unused slot)'}")
    print("=" * 60)

    with Simulator.from_scenario(
        args.scenario, config=config, lander=lander,
        autopilot=True if args.autopilot else None,
    ) as sim:
        if args.parachute:
            sim.deploy_parachute()
        result = sim.run(progress=args.progress)
        final = sim.get_state()

    print(f"\n  Elapsed time:     {sim.time:.1f} s")
    print(f"  Final altitude:   {final.altitude(lander.planet_radius):.1f} m")
    print(f"  Radial velocity:  {final.radial_velocity:.2f} m/s")
    print(f"  Fuel remaining:   {final.fuel * 100:.1f} %")
    print(f"  Parachute:        {sim.parachute_status.name}")
    if result.landed:
        print(f"  Outcome:          {'CRASHED' if result.crashed else 'LANDED'}")
    else:
        print("  Outcome:          still flying")

    if args.plot is not None:
        import matplotlib
        matplotlib.use("Agg")
        from lander.plotting import plot_descent_profile

        fig = plot_descent_profile(result, title=f"Scenario {scenario.index}")
        fig.savefig(args.plot, dpi=150, bbox_inches="tight")
        print(f"\n  Saved descent profile to: {args.plot}")

    if args.orbit_html is not None:
        from lander.orbital_plotting import plot_orbit_dashboard

        fig = plot_orbit_dashboard(result, lander, title=f"Scenario {scenario.index}")
        fig.write_html(str(args.orbit_html))
        print(f"  Saved orbit dashboard to: {args.orbit_html}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
