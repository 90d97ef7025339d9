"""
Numerical Integration Engine
=============================
Advances the body with the classical 4th-order Runge-Kutta method at a fixed
timestep and collects the sampled positions into a trajectory.

Integrates the equations of motion:
    dx/dt = v
    dv/dt = a(x, v)  (from dynamics.derivative)

The run stops early when the body drops below the central-body radius. That is
a normal outcome, reported through the result status and a log warning.

Output: TrajectoryResult dataclass with the sampled positions and a status tag.
"""

import enum
import logging
import math
import numbers
import numpy as np
from dataclasses import dataclass
from typing import Optional

from .dynamics import SimulationParameters, derivative
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


class SimulationStatus(enum.Enum):
    COMPLETED = 'completed'
    COLLISION = 'collision'
    REJECTED = 'rejected'


@dataclass
class TrajectoryResult:
    """Sampled positions of one run plus how the run ended."""
    params: SimulationParameters
    status: SimulationStatus
    points: np.ndarray                   # shape (N, 2): x, y
    collision_step: Optional[int] = None  # step index of the impact sample
    reason: str = ''                      # why a run was rejected

    @classmethod
    def rejected(cls, params, reason: str) -> "TrajectoryResult":
        return cls(params=params, status=SimulationStatus.REJECTED,
                   points=np.empty((0, 2)), reason=reason)

    def __len__(self):
        return len(self.points)

    @property
    def x(self) -> np.ndarray:
        return self.points[:, 0]

    @property
    def y(self) -> np.ndarray:
        return self.points[:, 1]

    @property
    def dt(self) -> float:
        return self.params.dt

    @property
    def time(self) -> np.ndarray:
        """Elapsed time of each sample (s)."""
        return np.arange(len(self.points)) * self.params.dt

    @property
    def radius(self) -> np.ndarray:
        """Distance from the origin of each sample (m)."""
        return np.hypot(self.x, self.y)

    @property
    def final_position(self):
        return tuple(self.points[-1]) if len(self.points) else None

    @property
    def final_radius(self) -> float:
        return float(self.radius[-1]) if len(self.points) else float('nan')

    @property
    def elapsed(self) -> float:
        """Simulated time covered by the trajectory (s)."""
        return max(len(self.points) - 1, 0) * self.params.dt

    @property
    def terminated_early(self) -> bool:
        return self.status is SimulationStatus.COLLISION

    @property
    def message(self) -> str:
        """Human-readable diagnostic derived from the status."""
        if self.status is SimulationStatus.REJECTED:
            return f"Simulation rejected: {self.reason}"
        if self.status is SimulationStatus.COLLISION:
            body_r = self.params.central_body_radius
            if self.collision_step == 0:
                return (f"Initial position is inside the central body "
                        f"(r = {self.final_radius:.6g} m < R = {body_r:.6g} m); "
                        f"no steps simulated")
            return (f"Impact with the central body at step {self.collision_step} "
                    f"(t = {self.elapsed:.6g} s, r = {self.final_radius:.6g} m "
                    f"< R = {body_r:.6g} m)")
        return (f"Simulation completed: {len(self.points)} samples "
                f"over {self.elapsed:.6g} s")

    def summary(self) -> str:
        """Human-readable summary string."""
        if self.status is SimulationStatus.REJECTED:
            return self.message
        r = self.radius
        x_f, y_f = self.final_position
        lines = [
            f"╔══════════════════════════════════════════════════════╗",
            f"║  TRAJECTORY SUMMARY{'':<34s} ║",
            f"╠══════════════════════════════════════════════════════╣",
            f"║  Status       : {self.status.value.upper():<36s} ║",
            f"║  Timestep     : {self.params.dt:<36.4g} ║",
            f"║  Samples      : {len(self.points):<36d} ║",
            f"╠══════════════════════════════════════════════════════╣",
            f"║  Elapsed      : {self.elapsed:>12.1f} s{'':<22s} ║",
            f"║  Min radius   : {r.min() / 1000:>12.2f} km{'':<21s} ║",
            f"║  Max radius   : {r.max() / 1000:>12.2f} km{'':<21s} ║",
            f"║  Final x      : {x_f / 1000:>12.2f} km{'':<21s} ║",
            f"║  Final y      : {y_f / 1000:>12.2f} km{'':<21s} ║",
            f"╚══════════════════════════════════════════════════════╝",
        ]
        return '\n'.join(lines)


def _require_finite(name, value):
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ConfigurationError(name, f"expected a number, got {value!r}")
    if not math.isfinite(value):
        raise ConfigurationError(name, f"must be finite, got {value!r}")


def validate_parameters(params: SimulationParameters) -> None:
    """
    Reject parameter sets that cannot describe a simulation.

    Raises ConfigurationError for a non-positive or non-finite timestep, a
    negative or non-integer step count, non-finite physical constants, a
    negative central-body radius, or a non-finite initial state.
    """
    _require_finite('dt', params.dt)
    if params.dt <= 0:
        raise ConfigurationError('dt', f"must be > 0, got {params.dt!r}")

    if isinstance(params.steps, bool) or not isinstance(params.steps, numbers.Integral):
        raise ConfigurationError('steps', f"expected an integer, got {params.steps!r}")
    if params.steps < 0:
        raise ConfigurationError('steps', f"must be >= 0, got {params.steps!r}")

    for name in ('G', 'M', 'thrust_coefficient', 'drag_coefficient',
                 'central_body_radius'):
        _require_finite(name, getattr(params, name))
    if params.central_body_radius < 0:
        raise ConfigurationError('central_body_radius',
                                 f"must be >= 0, got {params.central_body_radius!r}")

    s = params.initial_state
    for name in ('x', 'y', 'vx', 'vy'):
        _require_finite(f'initial_state.{name}', getattr(s, name))


def rk4_step(state: np.ndarray, dt: float, params: SimulationParameters) -> np.ndarray:
    """
    One classical Runge-Kutta step of size dt.

    k1 = f(s)
    k2 = f(s + dt/2·k1)
    k3 = f(s + dt/2·k2)
    k4 = f(s + dt·k3)
    s' = s + dt/6·(k1 + 2·k2 + 2·k3 + k4)
    """
    k1 = derivative(state, params)
    k2 = derivative(state + 0.5 * dt * k1, params)
    k3 = derivative(state + 0.5 * dt * k2, params)
    k4 = derivative(state + dt * k3, params)
    return state + (dt / 6.0) * (k1 + 2*k2 + 2*k3 + k4)


def simulate(params: SimulationParameters) -> TrajectoryResult:
    """
    Integrate the trajectory for at most params.steps steps.

    The result holds between 1 and steps + 1 positions, starting with the
    initial one. If the body starts inside the central body nothing is
    stepped; if it crosses the central-body radius the colliding sample is
    kept as the last one. Invalid parameters raise ConfigurationError.
    """
    validate_parameters(params)

    state = params.initial_state.to_vector()
    limit_sq = params.central_body_radius ** 2

    points = np.empty((params.steps + 1, 2))
    points[0] = state[:2]
    count = 1

    if state[0] * state[0] + state[1] * state[1] < limit_sq:
        return _finish(params, points, count, SimulationStatus.COLLISION, 0)

    for i in range(params.steps):
        state = rk4_step(state, params.dt, params)
        points[count] = state[:2]
        count += 1

        if state[0] * state[0] + state[1] * state[1] < limit_sq:
            return _finish(params, points, count, SimulationStatus.COLLISION, i + 1)

    return _finish(params, points, count, SimulationStatus.COMPLETED)


def _finish(params, points, count, status, collision_step=None):
    """Trim the reserved storage and report how the run ended."""
    if count < len(points):
        points = points[:count].copy()
    result = TrajectoryResult(params=params, status=status, points=points,
                              collision_step=collision_step)
    if status is SimulationStatus.COLLISION:
        logger.warning(result.message)
    else:
        logger.debug(result.message)
    return result
