"""Tests for the engine thrust and fuel consumption models."""

import math

import numpy as np
import pytest
from numpy.testing import assert_allclose

from lander.config import DEFAULT_CONFIG, LanderConfig
from lander.propulsion import ThrustModel, consume_fuel

MAX_THRUST = DEFAULT_CONFIG.max_thrust


class TestThrustModel:
    """Test throttle to thrust conversion."""

    def test_max_thrust_definition(self):
        """Max thrust is 1.5x the fully-fuelled weight at the surface."""
        g = DEFAULT_CONFIG.mu / DEFAULT_CONFIG.planet_radius**2
        assert_allclose(MAX_THRUST, 1.5 * 200.0 * g, rtol=1e-12)

    def test_body_thrust_along_z(self):
        engine = ThrustModel(dt=0.1)
        assert_allclose(engine.body_thrust(0.5, 1.0), [0.0, 0.0, 0.5 * MAX_THRUST])

    def test_no_fuel_no_thrust(self):
        engine = ThrustModel(dt=0.1)
        assert_allclose(engine.body_thrust(1.0, 0.0), np.zeros(3))
        assert_allclose(engine.world_thrust(1.0, np.zeros(3), 0.0), np.zeros(3))

    def test_world_thrust_rotated(self):
        """Orientation (0, 90, 0) puts the thrust along world +X."""
        engine = ThrustModel(dt=0.1)
        thrust = engine.world_thrust(1.0, np.array([0.0, 90.0, 0.0]), 1.0)
        assert_allclose(thrust, [MAX_THRUST, 0.0, 0.0], atol=1e-9)

    def test_throttle_clamped(self):
        engine = ThrustModel(dt=0.1)
        assert engine.update(1.7) == 1.0
        assert engine.update(-0.3) == 0.0

    def test_no_delay_no_lag_passthrough(self):
        """With default constants the engine follows the command immediately."""
        engine = ThrustModel(dt=0.1)
        for throttle in (0.0, 0.3, 1.0, 0.6):
            assert engine.update(throttle) == throttle
            assert engine.effective_throttle == throttle

    def test_delay(self):
        """A 0.2 s delay at dt=0.1 holds the old command for two ticks."""
        engine = ThrustModel(dt=0.1, config=LanderConfig(engine_delay=0.2))
        assert engine.update(0.0) == 0.0
        assert engine.update(1.0) == 0.0
        assert engine.update(1.0) == 0.0
        assert engine.update(1.0) == 1.0

    def test_lag(self):
        """First-order lag approaches the command exponentially."""
        engine = ThrustModel(dt=0.1, config=LanderConfig(engine_lag=1.0))
        engine.update(0.0)
        response = engine.update(1.0)
        assert_allclose(response, 1.0 - math.exp(-0.1), rtol=1e-12)

    def test_reset(self):
        engine = ThrustModel(dt=0.1, config=LanderConfig(engine_lag=1.0))
        engine.update(1.0)
        engine.reset()
        assert engine.effective_throttle == 0.0

    def test_invalid_dt(self):
        with pytest.raises(ValueError):
            ThrustModel(dt=0.0)


class TestConsumeFuel:
    """Test fuel depletion."""

    def test_full_throttle(self):
        """Fuel drops by dt * rate / capacity at full throttle."""
        assert_allclose(consume_fuel(1.0, 1.0, 0.1), 1.0 - 0.1 * 0.5 / 100.0)

    def test_proportional_to_throttle(self):
        used_half = 1.0 - consume_fuel(1.0, 0.5, 1.0)
        used_full = 1.0 - consume_fuel(1.0, 1.0, 1.0)
        assert_allclose(used_half * 2.0, used_full)

    def test_zero_throttle(self):
        assert consume_fuel(0.4, 0.0, 0.1) == 0.4

    def test_floor_at_zero(self):
        assert consume_fuel(1.0e-6, 1.0, 10.0) == 0.0
        assert consume_fuel(0.0, 1.0, 0.1) == 0.0
