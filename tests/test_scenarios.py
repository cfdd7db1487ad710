"""Tests for the canned scenarios."""

import math

import numpy as np
import pytest
from numpy.testing import assert_allclose

from lander.config import DEFAULT_CONFIG, LanderConfig
from lander.dynamics.state import ParachuteStatus
from lander.simulation import N_SCENARIOS, get_scenario, list_scenarios

R = DEFAULT_CONFIG.planet_radius


class TestScenarios:
    """Test scenario table."""

    def test_ten_slots(self):
        scenarios = list_scenarios()
        assert N_SCENARIOS == 10
        assert [s.index for s in scenarios] == list(range(10))

    @pytest.mark.parametrize("index", [-1, 10, 99])
    def test_out_of_range(self, index):
        with pytest.raises(ValueError, match="Scenario index"):
            get_scenario(index)

    def test_circular_orbit_speed(self):
        """Scenario 0 starts at circular speed for its radius."""
        state = get_scenario(0).initial_state()
        assert_allclose(state.radius, 1.2 * R)
        assert_allclose(state.speed, math.sqrt(DEFAULT_CONFIG.mu / (1.2 * R)), rtol=1e-6)
        assert_allclose(np.dot(state.position, state.velocity), 0.0)

    def test_descent_from_10km(self):
        scenario = get_scenario(1)
        state = scenario.initial_state()
        assert_allclose(state.altitude(R), 10000.0)
        assert state.speed == 0.0
        assert scenario.stabilized_attitude
        assert scenario.parachute_status is ParachuteStatus.NOT_DEPLOYED

    def test_launch_from_surface(self):
        """Scenario 3 starts with the base on the surface."""
        state = get_scenario(3).initial_state()
        assert_allclose(state.altitude(R), DEFAULT_CONFIG.lander_size / 2.0)
        assert state.radial_velocity > 0.0

    def test_descent_from_exosphere(self):
        scenario = get_scenario(5)
        assert_allclose(scenario.initial_state().altitude(R), DEFAULT_CONFIG.exosphere)
        assert scenario.stabilized_attitude

    @pytest.mark.parametrize("index", [6, 7, 8, 9])
    def test_unused_slots(self, index):
        """Unused slots carry no description and reuse scenario 0's state."""
        scenario = get_scenario(index)
        assert scenario.description == ""
        assert_allclose(
            scenario.initial_state().to_array(),
            get_scenario(0).initial_state().to_array(),
        )

    def test_all_start_full(self):
        for scenario in list_scenarios():
            assert scenario.initial_state().fuel == 1.0
            assert scenario.dt == 0.1
            assert not scenario.autopilot_enabled

    def test_follows_config(self):
        """Positions scale with the configured planet."""
        config = LanderConfig(planet_radius=1000000.0)
        state = get_scenario(1, config).initial_state()
        assert_allclose(state.radius, 1010000.0)
