"""Unit tests for dynamics module - state, orientation, forces and integrators.

These tests verify the translational mechanics of the lander simulation.
"""

import logging

import numpy as np
import pytest
from numpy.testing import assert_allclose

from lander.config import DEFAULT_CONFIG, LanderConfig
from lander.dynamics.forces import ForceModel
from lander.dynamics.integrators import (
    EulerIntegrator,
    IntegrationScheme,
    IntegratorPhase,
    VerletIntegrator,
    create_integrator,
)
from lander.dynamics.state import (
    BodyState,
    ParachuteStatus,
    body_axis_to_euler_xyz,
    euler_xyz_to_dcm,
)
from lander.errors import PreconditionError

R = DEFAULT_CONFIG.planet_radius
MU = DEFAULT_CONFIG.mu

# =============================================================================
# Orientation Tests
# =============================================================================


class TestOrientation:
    """Test Euler angle utilities."""

    def test_zero_angles_identity(self):
        """Zero Euler angles should give the identity DCM."""
        dcm = euler_xyz_to_dcm(np.zeros(3))
        assert_allclose(dcm, np.eye(3), atol=1e-12)

    def test_dcm_orthonormal(self):
        """DCM should be a proper rotation."""
        dcm = euler_xyz_to_dcm(np.array([30.0, -45.0, 60.0]))
        assert_allclose(dcm @ dcm.T, np.eye(3), atol=1e-12)
        assert_allclose(np.linalg.det(dcm), 1.0, atol=1e-12)

    def test_pitch_90_points_body_z_along_x(self):
        """Rotating 90 degrees about Y takes body +Z to world +X."""
        dcm = euler_xyz_to_dcm(np.array([0.0, 90.0, 0.0]))
        assert_allclose(dcm @ np.array([0.0, 0.0, 1.0]), [1.0, 0.0, 0.0], atol=1e-12)

    @pytest.mark.parametrize("axis", [
        [0.0, -1.0, 0.0],
        [1.0, 2.0, 3.0],
        [-0.3, 0.2, -0.9],
        [0.0, 0.0, 1.0],
    ])
    def test_body_axis_alignment(self, axis):
        """Angles from body_axis_to_euler_xyz put body +Z along the axis."""
        axis = np.array(axis)
        angles = body_axis_to_euler_xyz(axis)
        body_z = euler_xyz_to_dcm(angles)[:, 2]
        assert_allclose(body_z, axis / np.linalg.norm(axis), atol=1e-12)

    def test_body_axis_zero_vector(self):
        """A zero axis has no direction."""
        with pytest.raises(ValueError):
            body_axis_to_euler_xyz(np.zeros(3))


# =============================================================================
# State Tests
# =============================================================================


class TestBodyState:
    """Test BodyState container."""

    def test_radial_quantities(self):
        """Altitude and radial velocity are measured along the position."""
        state = BodyState(
            position=np.array([0.0, -(R + 1000.0), 0.0]),
            velocity=np.array([3.0, 20.0, 0.0]),
        )
        assert_allclose(state.altitude(R), 1000.0, atol=1e-6)
        assert_allclose(state.radial_unit, [0.0, -1.0, 0.0])
        assert_allclose(state.radial_velocity, -20.0)

    def test_array_roundtrip(self):
        """to_array/from_array should preserve every field."""
        state = BodyState(
            position=np.array([1.0, 2.0, 3.0]),
            velocity=np.array([4.0, 5.0, 6.0]),
            orientation=np.array([7.0, 8.0, 9.0]),
            fuel=0.25,
        )
        restored = BodyState.from_array(state.to_array())
        assert_allclose(restored.to_array(), state.to_array())

    def test_copy_is_independent(self):
        """Mutating a copy should not touch the original."""
        state = BodyState(position=np.array([R, 0.0, 0.0]), velocity=np.zeros(3))
        clone = state.copy()
        clone.position[0] = 0.0
        assert state.position[0] == R

    def test_bad_shape(self):
        """Position must be a 3-vector."""
        with pytest.raises(ValueError, match="Position must be shape"):
            BodyState(position=np.zeros(2), velocity=np.zeros(3))


# =============================================================================
# Force Model Tests
# =============================================================================


class TestForceModel:
    """Test gravity, drag and net acceleration."""

    def test_full_tank_mass(self):
        """Full tank adds fuel_capacity * fuel_density to the dry mass."""
        model = ForceModel()
        assert_allclose(model.effective_mass(1.0), 200.0)
        assert_allclose(model.effective_mass(0.0), 100.0)

    def test_fuel_clamp_warns_once(self, caplog):
        """Out-of-range fuel is clamped with a single warning."""
        model = ForceModel()
        with caplog.at_level(logging.WARNING, logger="lander.dynamics.forces"):
            assert_allclose(model.effective_mass(1.5), 200.0)
            assert_allclose(model.effective_mass(-0.5), 100.0)
        assert len([r for r in caplog.records if "clamping" in r.message]) == 1

    def test_gravity_inverse_square(self):
        """Gravity magnitude should follow G*M*m/r^2 toward the centre."""
        model = ForceModel()
        position = np.array([0.0, 0.0, R])
        force = model.gravity_force(position, 200.0)

        assert_allclose(np.linalg.norm(force), MU * 200.0 / R**2, rtol=1e-12)
        assert force[2] < 0

        far = model.gravity_force(2.0 * position, 200.0)
        assert_allclose(np.linalg.norm(far), np.linalg.norm(force) / 4.0, rtol=1e-12)

    def test_gravity_at_centre(self):
        """Position at the planet centre is singular."""
        model = ForceModel()
        with pytest.raises(PreconditionError):
            model.gravity_force(np.zeros(3), 200.0)

    def test_zero_velocity_zero_drag(self):
        """No motion, no drag, even with the chute out."""
        model = ForceModel()
        drag = model.drag_force(np.zeros(3), 0.017, ParachuteStatus.DEPLOYED)
        assert_allclose(drag, np.zeros(3))

    def test_drag_opposes_velocity(self):
        """Drag points against the velocity."""
        model = ForceModel()
        velocity = np.array([30.0, -40.0, 0.0])
        drag = model.drag_force(velocity, 0.01, ParachuteStatus.NOT_DEPLOYED)
        assert np.dot(drag, velocity) < 0
        assert_allclose(np.cross(drag, velocity), np.zeros(3), atol=1e-9)

    def test_body_drag_quadratic(self):
        """Body drag scales with speed squared."""
        model = ForceModel()
        rho = 0.01
        slow = np.linalg.norm(
            model.drag_force(np.array([10.0, 0.0, 0.0]), rho, ParachuteStatus.NOT_DEPLOYED)
        )
        fast = np.linalg.norm(
            model.drag_force(np.array([20.0, 0.0, 0.0]), rho, ParachuteStatus.NOT_DEPLOYED)
        )
        assert_allclose(fast / slow, 4.0, rtol=1e-12)
        assert_allclose(slow, 0.5 * rho * 1.0 * np.pi * 100.0, rtol=1e-12)

    def test_chute_drag_linear(self):
        """Parachute drag adds a term linear in speed."""
        model = ForceModel()
        rho = 0.01
        for speed in (10.0, 20.0):
            velocity = np.array([0.0, speed, 0.0])
            with_chute = model.drag_force(velocity, rho, ParachuteStatus.DEPLOYED)
            without = model.drag_force(velocity, rho, ParachuteStatus.NOT_DEPLOYED)
            extra = np.linalg.norm(with_chute - without)
            assert_allclose(extra, model.chute_drag_magnitude(rho, speed), rtol=1e-12)

        assert_allclose(
            model.chute_drag_magnitude(rho, 20.0) / model.chute_drag_magnitude(rho, 10.0),
            2.0,
        )
        assert_allclose(
            model.body_drag_magnitude(rho, 20.0) / model.body_drag_magnitude(rho, 10.0),
            4.0,
        )

    def test_lost_chute_no_drag(self):
        """A lost parachute contributes nothing."""
        model = ForceModel()
        velocity = np.array([0.0, 0.0, -50.0])
        lost = model.drag_force(velocity, 0.01, ParachuteStatus.LOST)
        stowed = model.drag_force(velocity, 0.01, ParachuteStatus.NOT_DEPLOYED)
        assert_allclose(lost, stowed)

    def test_free_fall_acceleration(self):
        """Vacuum, no thrust: acceleration is mu/r^2 inward, mass-independent."""
        model = ForceModel()
        r = R + 300000.0
        state = BodyState(position=np.array([r, 0.0, 0.0]), velocity=np.zeros(3), fuel=0.3)
        accel = model.compute_acceleration(
            state, ParachuteStatus.NOT_DEPLOYED, 0.0, np.zeros(3),
        )
        assert_allclose(accel, [-MU / r**2, 0.0, 0.0], rtol=1e-12)

    def test_thrust_divided_by_mass(self):
        """Thrust contribution is F/m with m from the fuel fraction."""
        model = ForceModel()
        state = BodyState(position=np.array([0.0, 0.0, R + 1000.0]), velocity=np.zeros(3))
        thrust = np.array([0.0, 0.0, 500.0])
        base = model.compute_acceleration(state, ParachuteStatus.NOT_DEPLOYED, 0.0, np.zeros(3))
        pushed = model.compute_acceleration(state, ParachuteStatus.NOT_DEPLOYED, 0.0, thrust)
        assert_allclose(pushed - base, thrust / 200.0, atol=1e-12)

    def test_custom_config(self):
        """Vehicle constants flow from LanderConfig."""
        model = ForceModel(LanderConfig(unloaded_mass=150.0))
        assert_allclose(model.effective_mass(1.0), 250.0)


# =============================================================================
# Integrator Tests
# =============================================================================


def _state(position, velocity):
    return BodyState(position=np.array(position), velocity=np.array(velocity))


class TestEulerIntegrator:
    """Test explicit Euler."""

    def test_single_step(self):
        """Position advances with the old velocity, velocity with acceleration."""
        state = _state([1.0, 2.0, 3.0], [10.0, 0.0, -5.0])
        accel = np.array([0.0, -2.0, 1.0])
        new = EulerIntegrator().step(state, accel, 0.5)

        assert_allclose(new.position, [6.0, 2.0, 0.5])
        assert_allclose(new.velocity, [10.0, -1.0, -4.5])

    def test_input_not_mutated(self):
        """The input state is left alone."""
        state = _state([1.0, 0.0, 0.0], [1.0, 0.0, 0.0])
        EulerIntegrator().step(state, np.ones(3), 0.1)
        assert_allclose(state.position, [1.0, 0.0, 0.0])

    def test_rejects_bad_dt(self):
        """Time step must be positive."""
        with pytest.raises(ValueError, match="Time step"):
            EulerIntegrator().step(_state([1.0, 0.0, 0.0], [0.0, 0.0, 0.0]), np.zeros(3), 0.0)


class TestVerletIntegrator:
    """Test position Verlet with its Euler bootstrap."""

    def test_first_step_is_euler(self):
        """The bootstrap step matches forward Euler exactly."""
        state = _state([100.0, 0.0, 0.0], [1.0, 2.0, 0.0])
        accel = np.array([-3.0, 0.0, 0.5])

        verlet = VerletIntegrator()
        assert not verlet.bootstrapped
        assert verlet.memory.phase is IntegratorPhase.UNINITIALIZED

        v_state = verlet.step(state, accel, 0.1)
        e_state = EulerIntegrator().step(state, accel, 0.1)

        assert verlet.bootstrapped
        assert_allclose(v_state.position, e_state.position)
        assert_allclose(v_state.velocity, e_state.velocity)
        assert_allclose(verlet.memory.previous_position, state.position)

    def test_steady_state_recurrence(self):
        """After bootstrap, x' = 2x - x_prev + a dt^2 and v' = (x' - x) / dt."""
        dt = 0.1
        x0 = _state([0.0, 0.0, 0.0], [5.0, 0.0, 0.0])
        a = np.array([0.0, -4.0, 2.0])

        verlet = VerletIntegrator()
        x1 = verlet.step(x0, a, dt)
        x2 = verlet.step(x1, a, dt)

        expected = 2.0 * x1.position - x0.position + a * dt * dt
        assert_allclose(x2.position, expected, atol=1e-12)
        assert_allclose(x2.velocity, (x2.position - x1.position) / dt, atol=1e-12)
        assert_allclose(verlet.memory.previous_position, x1.position)

    def test_velocity_ignores_supplied_velocity(self):
        """Steady-state velocity comes from positions, not the state's velocity."""
        dt = 0.1
        verlet = VerletIntegrator()
        x1 = verlet.step(_state([0.0, 0.0, 0.0], [1.0, 0.0, 0.0]), np.zeros(3), dt)

        tampered = x1.copy()
        tampered.velocity = np.array([999.0, 999.0, 999.0])
        x2 = verlet.step(tampered, np.zeros(3), dt)

        assert_allclose(x2.velocity, [1.0, 0.0, 0.0], atol=1e-9)

    def test_bootstrap_only_once(self):
        """Only the first call takes the bootstrap branch."""
        dt = 0.1
        a = np.array([1.0, 0.0, -2.0])
        verlet = VerletIntegrator()
        euler = EulerIntegrator()
        state = verlet.step(_state([0.0, 0.0, 0.0], [3.0, 0.0, 0.0]), a, dt)
        state = verlet.step(state, a, dt)

        for _ in range(5):
            old_position = state.position.copy()
            new = verlet.step(state, a, dt)
            euler_new = euler.step(state, a, dt)

            assert verlet.memory.phase is IntegratorPhase.BOOTSTRAPPED
            assert_allclose(new.velocity, (new.position - old_position) / dt, atol=1e-12)
            # A repeated Euler bootstrap would land exactly on euler_new.position
            assert_allclose(new.position - euler_new.position, a * dt * dt, atol=1e-12)
            state = new

    def test_reset(self):
        """reset() forces a new bootstrap."""
        verlet = VerletIntegrator()
        verlet.step(_state([0.0, 0.0, 0.0], [1.0, 0.0, 0.0]), np.zeros(3), 0.1)
        verlet.reset()
        assert not verlet.bootstrapped
        assert verlet.memory.previous_position is None


class TestCreateIntegrator:
    """Test integrator factory."""

    def test_schemes(self):
        assert isinstance(create_integrator(IntegrationScheme.EULER), EulerIntegrator)
        assert isinstance(create_integrator(IntegrationScheme.VERLET), VerletIntegrator)

    def test_fresh_memory(self):
        """Each Verlet integrator owns its own history."""
        a = create_integrator(IntegrationScheme.VERLET)
        b = create_integrator(IntegrationScheme.VERLET)
        a.step(_state([0.0, 0.0, 0.0], [1.0, 0.0, 0.0]), np.zeros(3), 0.1)
        assert a.bootstrapped
        assert not b.bootstrapped
