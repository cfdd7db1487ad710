"""Smoke tests for the plotting modules."""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import plotly.graph_objects as go
from matplotlib.figure import Figure

from lander.orbital_plotting import plot_orbit_dashboard
from lander.plotting import plot_descent_phase, plot_descent_profile
from lander.simulation import SimConfig, Simulator


class TestDescentPlots:
    """Test matplotlib figures."""

    def test_descent_profile(self):
        sim = Simulator.from_scenario(1, autopilot=True)
        result = sim.run(duration=5.0)

        fig = plot_descent_profile(result)
        assert isinstance(fig, Figure)
        assert len(fig.axes) == 4
        plt.close(fig)

    def test_descent_phase(self, tmp_path):
        path = tmp_path / "trajectories.txt"
        with Simulator.from_scenario(1, SimConfig(trajectory_log=path), autopilot=True) as sim:
            sim.run(duration=5.0)

        fig = plot_descent_phase(path)
        assert isinstance(fig, Figure)
        lines = fig.axes[0].get_lines()
        assert len(lines) == 2
        assert len(lines[0].get_xdata()) == 50
        plt.close(fig)


class TestOrbitDashboard:
    """Test plotly dashboard."""

    def test_dashboard(self):
        sim = Simulator.from_scenario(0)
        result = sim.run(duration=10.0)

        fig = plot_orbit_dashboard(result, title="Circular orbit")
        assert isinstance(fig, go.Figure)
        names = {trace.name for trace in fig.data}
        assert {"Trajectory", "Mars", "Start", "End"} <= names

    def test_exosphere_reference_line(self, tmp_path):
        sim = Simulator.from_scenario(1)
        result = sim.run(duration=5.0)

        fig = plot_orbit_dashboard(result)
        exosphere = [trace for trace in fig.data if trace.name == "Exosphere"]
        assert len(exosphere) == 1
        assert list(exosphere[0].y) == [200.0, 200.0]
        assert list(exosphere[0].x) == [result.time[0], result.time[-1]]

        html = tmp_path / "orbit.html"
        fig.write_html(html)
        assert html.stat().st_size > 0
