"""
Unit Tests for the Trajectory Integrator
========================================
Tests the equations of motion, the RK4 step and the simulation driver.
Run: python -m pytest tests/ -v
"""

import sys
import os
import logging
import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from orbit_trajectory.dynamics import State, SimulationParameters, derivative
from orbit_trajectory.errors import ConfigurationError
from orbit_trajectory.integrator import (
    SimulationStatus, rk4_step, simulate, validate_parameters,
)
from orbit_trajectory.validation import (
    circular_orbit_parameters, circular_orbit_position, radial_deviation,
    straight_line_deviation, convergence_study, run_all_checks,
)


def free_flight(x=1.0, y=2.0, vx=0.5, vy=-0.25, dt=0.1, steps=100, **kw):
    """No gravity, no drag or thrust."""
    return SimulationParameters(
        initial_state=State(x, y, vx, vy), G=0.0, M=0.0,
        central_body_radius=kw.pop('central_body_radius', 0.0),
        dt=dt, steps=steps, **kw,
    )


class TestDerivative:
    """Verify the equations of motion."""

    def test_position_rate_is_velocity(self):
        p = SimulationParameters(G=1.0, M=1.0)
        d = derivative(np.array([3.0, 4.0, -1.5, 2.5]), p)
        assert d[0] == -1.5
        assert d[1] == 2.5

    def test_origin_has_zero_acceleration(self):
        p = SimulationParameters(G=1.0, M=1.0, thrust_coefficient=2.0)
        d = derivative(np.array([0.0, 0.0, 3.0, 4.0]), p)
        assert np.array_equal(d, [3.0, 4.0, 0.0, 0.0])

    def test_inverse_square_gravity(self):
        """μ = 8 at r = 2: |a| = μ/r² = 2, pointing at the origin."""
        p = SimulationParameters(G=1.0, M=8.0)
        d = derivative(np.array([2.0, 0.0, 0.0, 0.0]), p)
        assert d[2] == pytest.approx(-2.0)
        assert d[3] == pytest.approx(0.0)

    def test_gravity_points_inward_off_axis(self):
        p = SimulationParameters(G=1.0, M=1.0)
        pos = np.array([3.0, -4.0])
        d = derivative(np.array([pos[0], pos[1], 0.0, 0.0]), p)
        assert np.dot(d[2:], pos) < 0
        assert np.linalg.norm(d[2:]) == pytest.approx(1.0 / 25.0)

    def test_net_factor_is_linear_in_velocity(self):
        p = SimulationParameters(G=0.0, M=0.0, thrust_coefficient=0.3,
                                 drag_coefficient=0.1)
        d = derivative(np.array([1.0, 1.0, 10.0, -5.0]), p)
        assert d[2] == pytest.approx(2.0)
        assert d[3] == pytest.approx(-1.0)

    def test_drag_opposes_motion(self):
        p = SimulationParameters(G=0.0, M=0.0, drag_coefficient=0.5)
        v = np.array([100.0, 50.0])
        d = derivative(np.array([1.0, 0.0, v[0], v[1]]), p)
        assert np.dot(d[2:], v) < 0

    def test_input_not_modified(self):
        p = SimulationParameters(G=1.0, M=1.0, drag_coefficient=0.2)
        s = np.array([1.0, 2.0, 3.0, 4.0])
        derivative(s, p)
        assert np.array_equal(s, [1.0, 2.0, 3.0, 4.0])


class TestRK4Step:
    """Verify a single integration step."""

    def test_zero_field_moves_in_straight_line(self):
        p = free_flight()
        s = rk4_step(np.array([1.0, 2.0, 0.5, -0.25]), 0.1, p)
        assert s == pytest.approx([1.05, 1.975, 0.5, -0.25])

    def test_exponential_damping(self):
        """With only drag, v(t) = v0·exp(-c·t), x(t) = x0 + v0·(1 - exp(-c·t))/c."""
        p = SimulationParameters(G=0.0, M=0.0, drag_coefficient=1.0)
        s = rk4_step(np.array([1.0, 0.0, 1.0, 0.0]), 0.1, p)
        assert s[2] == pytest.approx(np.exp(-0.1), abs=1e-6)
        assert s[0] == pytest.approx(1.0 + (1.0 - np.exp(-0.1)), abs=1e-6)
        assert s[1] == 0.0 and s[3] == 0.0

    def test_step_returns_new_state(self):
        p = SimulationParameters(G=1.0, M=1.0)
        s = np.array([1.0, 0.0, 0.0, 1.0])
        out = rk4_step(s, 0.01, p)
        assert out is not s
        assert np.array_equal(s, [1.0, 0.0, 0.0, 1.0])


class TestSimulate:
    """Verify the driver loop, termination and result contract."""

    def test_zero_steps_returns_initial_point(self):
        result = simulate(circular_orbit_parameters(steps=0))
        assert len(result) == 1
        assert result.final_position == (1.0, 0.0)
        assert result.status is SimulationStatus.COMPLETED

    def test_start_inside_body_does_not_step(self, caplog):
        p = free_flight(x=0.1, y=0.0, central_body_radius=0.5, steps=10)
        with caplog.at_level(logging.WARNING, logger='orbit_trajectory.integrator'):
            result = simulate(p)
        assert len(result) == 1
        assert result.status is SimulationStatus.COLLISION
        assert result.collision_step == 0
        assert "inside the central body" in caplog.text

    def test_start_exactly_on_surface_is_allowed(self):
        p = free_flight(x=0.5, y=0.0, vx=1.0, vy=0.0,
                        central_body_radius=0.5, steps=3)
        result = simulate(p)
        assert len(result) == 4

    def test_straight_line_without_forces(self):
        result = simulate(free_flight())
        assert len(result) == 101
        assert straight_line_deviation(result) < 1e-9

    def test_circular_orbit_example(self, caplog):
        p = circular_orbit_parameters(mu=1.0, radius=1.0, dt=0.01, steps=628,
                                      central_body_radius=0.1)
        with caplog.at_level(logging.WARNING):
            result = simulate(p)
        assert len(result) == 629
        assert result.status is SimulationStatus.COMPLETED
        assert np.allclose(result.final_position, (1.0, 0.0), atol=5e-3)
        assert np.allclose(result.final_position,
                           circular_orbit_position(1.0, 1.0, 6.28), atol=1e-6)
        assert caplog.text == ''

    def test_circular_orbit_keeps_radius(self):
        result = simulate(circular_orbit_parameters(dt=0.01, steps=629))
        assert radial_deviation(result, 1.0) < 1e-6

    def test_radius_error_shrinks_with_dt(self):
        coarse = simulate(circular_orbit_parameters(dt=0.1, steps=63))
        fine = simulate(circular_orbit_parameters(dt=0.05, steps=126))
        assert radial_deviation(fine, 1.0) < radial_deviation(coarse, 1.0)

    def test_fourth_order_convergence(self):
        base = circular_orbit_parameters(dt=0.1, steps=20)
        study = convergence_study(base, lambda t: circular_orbit_position(1.0, 1.0, t),
                                  [0.1, 0.05])
        ratio = study[0].error / study[1].error
        assert 12.0 < ratio < 20.0

    def test_boundary_crossing_at_known_step(self, caplog):
        """x = 1 - 0.1k drops below 0.25 at k = 8 (loop index 7)."""
        p = free_flight(x=1.0, y=0.0, vx=-1.0, vy=0.0, dt=0.1, steps=50,
                        central_body_radius=0.25)
        with caplog.at_level(logging.WARNING, logger='orbit_trajectory.integrator'):
            result = simulate(p)
        assert len(result) == 7 + 2
        assert result.collision_step == 8
        assert result.status is SimulationStatus.COLLISION
        assert result.terminated_early
        assert result.final_radius < 0.25
        assert "step 8" in caplog.text

    def test_drag_decays_orbit(self):
        p = circular_orbit_parameters(dt=0.01, steps=628)
        p.drag_coefficient = 0.05
        result = simulate(p)
        assert result.final_radius < 0.9

    def test_thrust_raises_orbit(self):
        p = circular_orbit_parameters(dt=0.01, steps=628)
        p.thrust_coefficient = 0.05
        result = simulate(p)
        assert result.final_radius > 1.1

    def test_repeat_runs_are_identical(self):
        a = simulate(circular_orbit_parameters(dt=0.01, steps=300))
        b = simulate(circular_orbit_parameters(dt=0.01, steps=300))
        assert np.array_equal(a.points, b.points)

    def test_time_axis(self):
        result = simulate(circular_orbit_parameters(dt=0.25, steps=4))
        assert result.time == pytest.approx([0.0, 0.25, 0.5, 0.75, 1.0])
        assert result.elapsed == pytest.approx(1.0)

    def test_numpy_integer_steps_accepted(self):
        result = simulate(circular_orbit_parameters(steps=np.int64(5)))
        assert len(result) == 6


class TestValidation:
    """Invalid parameters are rejected before any stepping."""

    @pytest.mark.parametrize('field, value', [
        ('dt', 0.0), ('dt', -0.1), ('dt', float('nan')), ('dt', float('inf')),
        ('steps', -1), ('steps', 2.5), ('steps', True),
        ('central_body_radius', -1.0), ('M', float('inf')),
    ])
    def test_rejects(self, field, value):
        p = circular_orbit_parameters()
        setattr(p, field, value)
        with pytest.raises(ConfigurationError) as info:
            simulate(p)
        assert info.value.field == field
        assert isinstance(info.value, ValueError)

    def test_rejects_non_finite_initial_state(self):
        p = circular_orbit_parameters()
        p.initial_state = State(1.0, float('nan'), 0.0, 1.0)
        with pytest.raises(ConfigurationError):
            validate_parameters(p)

    def test_accepts_defaults(self):
        validate_parameters(circular_orbit_parameters())


class TestAccuracyChecks:

    def test_run_all_checks(self):
        report = run_all_checks(verbose=False)
        assert report['straight_line_error'] < 1e-9
        assert report['circular_radial_deviation'] < 1e-6
        assert 3.5 < report['convergence'][-1].order < 4.5

    def test_verbose_report(self, capsys):
        run_all_checks(verbose=True)
        out = capsys.readouterr().out
        assert "ACCURACY CHECKS" in out


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
