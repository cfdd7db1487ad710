"""Orbital visualization module using Plotly.

Provides an interactive 3D view of a lander run around the planet,
alongside altitude and velocity traces. Useful for the orbit scenarios,
where the matplotlib descent profile says little.
"""

import numpy as np
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from lander.config import DEFAULT_CONFIG, LanderConfig
from lander.simulation.simulator import SimulationResult


def plot_orbit_dashboard(
    result: SimulationResult,
    config: LanderConfig | None = None,
    title: str = "Lander Trajectory",
) -> go.Figure:
    """Create a dashboard for a lander run.

    Args:
        result: Completed simulation run
        config: Planet constants used for the run
        title: Dashboard title

    Returns:
        Plotly Figure object
    """
    config = config or DEFAULT_CONFIG

    times = result.time
    positions = result.position
    velocities = result.velocity
    altitudes = result.altitude / 1000.0  # km

    speeds = np.linalg.norm(velocities, axis=1)
    v_vertical = result.radial_velocity
    r_hat = positions / np.linalg.norm(positions, axis=1)[:, None]
    v_horizontal = np.linalg.norm(velocities - v_vertical[:, None] * r_hat, axis=1)

    fig = make_subplots(
        rows=2, cols=2,
        specs=[
            [{"type": "scene", "rowspan": 2}, {"type": "xy"}],
            [None, {"type": "xy"}],
        ],
        subplot_titles=("3D Trajectory", "Altitude", "Velocity Components"),
        vertical_spacing=0.10,
        horizontal_spacing=0.10,
    )

    # 1. 3D Trajectory (Row 1-2, Col 1)
    pos_km = positions / 1000.0

    hover_text = [
        f"T+{t:.1f}s<br>Alt: {a:.1f} km<br>Speed: {s:.0f} m/s"
        for t, a, s in zip(times, altitudes, speeds, strict=True)
    ]

    fig.add_trace(go.Scatter3d(
        x=pos_km[:, 0], y=pos_km[:, 1], z=pos_km[:, 2],
        mode='lines',
        line=dict(color=speeds, colorscale='Plasma', width=5,
                  colorbar=dict(title="Speed (m/s)", x=0.45, len=0.5, y=0.8)),
        name="Trajectory",
        text=hover_text,
        hovertemplate="%{text}<extra></extra>"
    ), row=1, col=1)

    # Planet sphere
    u = np.linspace(0, 2 * np.pi, 50)
    v = np.linspace(0, np.pi, 30)
    r_km = config.planet_radius / 1000.0
    x_planet = r_km * np.outer(np.cos(u), np.sin(v))
    y_planet = r_km * np.outer(np.sin(u), np.sin(v))
    z_planet = r_km * np.outer(np.ones(50), np.cos(v))

    fig.add_trace(go.Surface(
        x=x_planet, y=y_planet, z=z_planet,
        colorscale=[[0, 'rgb(150,60,30)'], [1, 'rgb(190,90,50)']],
        showscale=False,
        opacity=0.6,
        name="Mars"
    ), row=1, col=1)

    if len(pos_km) > 0:
        fig.add_trace(go.Scatter3d(
            x=[pos_km[0, 0]], y=[pos_km[0, 1]], z=[pos_km[0, 2]],
            mode='markers', marker=dict(size=6, color='lime'),
            name="Start"
        ), row=1, col=1)

        end_color = 'red' if result.crashed else 'white'
        fig.add_trace(go.Scatter3d(
            x=[pos_km[-1, 0]], y=[pos_km[-1, 1]], z=[pos_km[-1, 2]],
            mode='markers', marker=dict(size=6, color=end_color),
            name="End"
        ), row=1, col=1)

    # 2. Altitude (Row 1, Col 2)
    fig.add_trace(go.Scatter(x=times, y=altitudes, name='Altitude (km)',
                             line=dict(color='cyan', width=2)), row=1, col=2)
    if len(times) > 0:
        exosphere_km = config.exosphere / 1000.0
        fig.add_trace(go.Scatter(x=[times[0], times[-1]], y=[exosphere_km, exosphere_km],
                                 mode='lines', name='Exosphere',
                                 line=dict(color='gray', dash='dash')), row=1, col=2)

    # 3. Velocity components (Row 2, Col 2)
    fig.add_trace(go.Scatter(x=times, y=v_vertical, name='V_radial (m/s)',
                             line=dict(color='orange', width=2)), row=2, col=2)
    fig.add_trace(go.Scatter(x=times, y=v_horizontal, name='V_horiz (m/s)',
                             line=dict(color='magenta', width=2)), row=2, col=2)

    fig.update_layout(
        title=dict(text=title, x=0.5),
        template="plotly_dark",
        height=800,
        showlegend=True,
        scene=dict(aspectmode='data'),
    )
    fig.update_xaxes(title_text="Time (s)", row=1, col=2)
    fig.update_xaxes(title_text="Time (s)", row=2, col=2)
    fig.update_yaxes(title_text="Altitude (km)", row=1, col=2)
    fig.update_yaxes(title_text="Velocity (m/s)", row=2, col=2)

    return fig
