#!/usr/bin/env python
"""Controlled descent from the edge of the exosphere.

This example demonstrates the full descent stack:
1. Start at rest 200 km up (scenario 5) with attitude stabilization
2. Let the autopilot own the throttle
3. Deploy the parachute as soon as it is safe to do so
4. Step until touchdown
5. Save the trajectory, the autopilot log and a descent plot
"""

from pathlib import Path

import matplotlib

matplotlib.use("Agg")

from lander.dynamics import ParachuteStatus
from lander.plotting import plot_descent_phase, plot_descent_profile
from lander.simulation import SimConfig, SimulationResult, Simulator


def main() -> None:
    """Run the controlled descent example."""

    print("=" * 60)
    print("CONTROLLED DESCENT FROM 200 KM")
    print("=" * 60)

    output_dir = Path("outputs/controlled_descent")
    output_dir.mkdir(parents=True, exist_ok=True)
    log_path = output_dir / "trajectories.txt"

    # =========================================================================
    # 1. Set up the simulation
    # =========================================================================
    print("\n1. Setting up scenario 5...")

    config = SimConfig(dt=0.1, trajectory_log=log_path)
    sim = Simulator.from_scenario(5, config=config, autopilot=True)

    print(f"   Start altitude: {sim.altitude/1000:.0f} km")
    print(f"   Integrator:     {config.integration_scheme.name}")
    print(f"   Gains:          Kh={config.gains.kh}, Kp={config.gains.kp}, "
          f"delta={config.gains.delta}")

    # =========================================================================
    # 2. Fly
    # =========================================================================
    print("\n2. Descending...")

    deploy_altitude = None
    with sim:
        while not sim.landed and sim.time < config.max_time:
            if (
                sim.parachute_status is ParachuteStatus.NOT_DEPLOYED
                and sim.altitude < sim.lander.exosphere
                and sim.safe_to_deploy_parachute()
            ):
                sim.deploy_parachute()
                deploy_altitude = sim.altitude
            sim.step()

    result = SimulationResult.from_simulator(sim)

    # =========================================================================
    # 3. Results
    # =========================================================================
    print("\n3. Results:")
    print("-" * 40)

    if deploy_altitude is not None:
        print(f"   Chute deployed:  {deploy_altitude/1000:.1f} km")
    print(f"   Chute status:    {sim.parachute_status.name}")
    print(f"   Flight time:     {sim.time:.1f} s")
    print(f"   Fuel remaining:  {sim.state.fuel*100:.1f} %")
    print(f"   Max descent:     {-result.radial_velocity.min():.0f} m/s")
    print(f"   Outcome:         {'CRASHED' if sim.crashed else 'LANDED'}")

    # =========================================================================
    # 4. Save results
    # =========================================================================
    print("\n4. Saving results...")

    result.to_dataframe().write_csv(output_dir / "trajectory_data.csv")
    print(f"   Data saved: {output_dir}/trajectory_data.csv")

    fig = plot_descent_profile(result, title="Descent from 200 km")
    fig.savefig(output_dir / "descent_profile.png", dpi=150, bbox_inches="tight")
    print(f"   Plot saved: {output_dir}/descent_profile.png")

    fig = plot_descent_phase(log_path, config.gains)
    fig.savefig(output_dir / "descent_phase.png", dpi=150, bbox_inches="tight")
    print(f"   Plot saved: {output_dir}/descent_phase.png")

    print("\n" + "=" * 60)
    print("SIMULATION COMPLETE")
    print("=" * 60)


if __name__ == "__main__":
    main()
