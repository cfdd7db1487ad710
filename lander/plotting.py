"""Visualization module for lander runs.

Provides plotting functions for:
- Descent profiles (altitude, radial velocity, throttle, fuel vs time)
- Descent phase plots from autopilot trajectory logs

All plots use matplotlib with a consistent style.
"""

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from beartype import beartype
from matplotlib.figure import Figure

from lander.gnc.control.autopilot import TOUCHDOWN_DESCENT_RATE, ControllerGains
from lander.output import read_trajectory_log
from lander.simulation.simulator import SimulationResult

# =============================================================================
# Plot Style Configuration
# =============================================================================

COLORS = {
    "primary": "#2E86AB",  # Steel blue
    "secondary": "#A23B72",  # Berry
    "accent": "#F18F01",  # Orange
    "grid": "#CCCCCC",  # Grid lines
    "text": "#333333",  # Text color
}

DEFAULT_FIGSIZE = (12.0, 8.0)


def _setup_style() -> None:
    """Configure matplotlib style for consistent appearance."""
    plt.rcParams.update(
        {
            "font.family": "sans-serif",
            "font.sans-serif": ["Helvetica", "Arial", "DejaVu Sans"],
            "font.size": 11,
            "axes.titlesize": 13,
            "axes.labelsize": 12,
            "axes.linewidth": 1.2,
            "axes.edgecolor": COLORS["text"],
            "axes.labelcolor": COLORS["text"],
            "xtick.color": COLORS["text"],
            "ytick.color": COLORS["text"],
            "legend.fontsize": 10,
            "grid.alpha": 0.5,
        }
    )


# =============================================================================
# Descent Profile
# =============================================================================


@beartype
def plot_descent_profile(
    result: SimulationResult,
    title: str = "Descent Profile",
    figsize: tuple[float, float] = DEFAULT_FIGSIZE,
) -> Figure:
    """Plot altitude, radial velocity, throttle and fuel against time.

    Args:
        result: Completed simulation run
        title: Figure title
        figsize: Figure size

    Returns:
        matplotlib Figure with a 2x2 grid of subplots
    """
    _setup_style()

    t = result.time
    fig, axes = plt.subplots(2, 2, figsize=figsize, sharex=True)
    ax_alt, ax_vr, ax_thr, ax_fuel = axes.flat

    ax_alt.plot(t, result.altitude / 1000.0, color=COLORS["primary"], linewidth=2)
    ax_alt.set_ylabel("Altitude (km)")
    ax_alt.set_title("Altitude")

    ax_vr.plot(t, result.radial_velocity, color=COLORS["secondary"], linewidth=2)
    ax_vr.axhline(y=0.0, color=COLORS["text"], linewidth=0.8, alpha=0.5)
    ax_vr.set_ylabel("Radial velocity (m/s)")
    ax_vr.set_title("Radial Velocity")

    ax_thr.step(t, result.throttle, where="post", color=COLORS["accent"], linewidth=1.5)
    ax_thr.set_ylim(-0.05, 1.05)
    ax_thr.set_ylabel("Throttle")
    ax_thr.set_title("Throttle Command")

    ax_fuel.plot(t, result.fuel * 100.0, color=COLORS["primary"], linewidth=2)
    ax_fuel.set_ylim(0.0, 105.0)
    ax_fuel.set_ylabel("Fuel (%)")
    ax_fuel.set_title("Fuel Remaining")

    for ax in axes.flat:
        ax.grid(True, alpha=0.3)
    for ax in axes[1]:
        ax.set_xlabel("Time (s)")

    if result.landed:
        outcome = "crashed" if result.crashed else "landed"
        title = f"{title} ({outcome})"
    fig.suptitle(title, fontsize=14)

    fig.tight_layout()
    return fig


# =============================================================================
# Descent Phase Plot
# =============================================================================


@beartype
def plot_descent_phase(
    log_path: str | Path,
    gains: ControllerGains | None = None,
    figsize: tuple[float, float] = (10.0, 6.0),
) -> Figure:
    """Plot descent rate against altitude from an autopilot trajectory log.

    The autopilot's target descent rate ``0.5 + Kh*h`` is drawn for
    comparison.

    Args:
        log_path: File written by ``TrajectoryLog``
        gains: Gains used for the run (defaults if omitted)
        figsize: Figure size

    Returns:
        matplotlib Figure
    """
    _setup_style()
    gains = gains or ControllerGains()

    df = read_trajectory_log(log_path)
    altitude = df["altitude"].to_numpy()
    descent_rate = -df["radial_velocity"].to_numpy()

    fig, ax = plt.subplots(figsize=figsize)
    ax.plot(altitude, descent_rate, color=COLORS["primary"], linewidth=2, label="Actual")

    if len(altitude) > 0:
        h = np.linspace(0.0, float(altitude.max()), 200)
        ax.plot(
            h,
            TOUCHDOWN_DESCENT_RATE + gains.kh * h,
            color=COLORS["secondary"],
            linestyle="--",
            alpha=0.7,
            label=f"Target (Kh={gains.kh:g})",
        )

    ax.set_xlabel("Altitude (m)")
    ax.set_ylabel("Descent rate (m/s)")
    ax.set_title("Descent Rate vs Altitude")
    ax.grid(True, alpha=0.3)
    ax.legend()

    fig.tight_layout()
    return fig
