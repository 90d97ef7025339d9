"""
State, Parameters & Equations of Motion
=======================================
Defines the simulation state and parameter record and computes the rate of
change of the state under:
  - Inverse-square gravity from a point mass fixed at the origin
  - A net propulsion/drag term linear in velocity

Coordinate system:
  x, y = position in the orbital plane, origin at the central body
  vx, vy = velocity components

The state vector passed between functions is a numpy array
[x, y, vx, vy]. Functions here never modify their inputs.
"""

import numpy as np
from dataclasses import dataclass, field

from .constants import GRAVITATIONAL_CONSTANT, EARTH_MASS, EARTH_RADIUS, DEFAULT_DT


@dataclass(frozen=True)
class State:
    """Position and velocity of the orbiting body."""
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0

    @classmethod
    def from_vector(cls, vector) -> "State":
        x, y, vx, vy = (float(c) for c in vector)
        return cls(x, y, vx, vy)

    def to_vector(self) -> np.ndarray:
        return np.array([self.x, self.y, self.vx, self.vy], dtype=float)

    @property
    def position(self):
        return (self.x, self.y)

    @property
    def radius(self) -> float:
        """Distance from the origin (m)."""
        return float(np.hypot(self.x, self.y))

    @property
    def speed(self) -> float:
        return float(np.hypot(self.vx, self.vy))


@dataclass
class SimulationParameters:
    """
    Everything one simulation run needs.

    The net factor (thrust - drag) multiplies velocity directly, so it acts
    as exponential damping when negative and as a boost when positive.
    """
    initial_state: State = field(default_factory=State)
    G: float = GRAVITATIONAL_CONSTANT        # m³/(kg·s²)
    M: float = EARTH_MASS                    # kg  central-body mass
    thrust_coefficient: float = 0.0          # 1/s
    drag_coefficient: float = 0.0            # 1/s
    central_body_radius: float = EARTH_RADIUS  # m
    dt: float = DEFAULT_DT                   # s
    steps: int = 0

    @property
    def mu(self) -> float:
        """Standard gravitational parameter G·M (m³/s²)."""
        return self.G * self.M

    @property
    def net_factor(self) -> float:
        return self.thrust_coefficient - self.drag_coefficient

    @property
    def total_time(self) -> float:
        return self.steps * self.dt


def derivative(state: np.ndarray, params: SimulationParameters) -> np.ndarray:
    """
    Rate of change of [x, y, vx, vy].

    Returns [vx, vy, ax, ay] with
        a = -G·M / r³ · (x, y) + (thrust - drag) · (vx, vy)

    At exactly r = 0 the acceleration is defined as zero; results there are
    not physically meaningful.
    """
    x, y, vx, vy = state
    r2 = x * x + y * y
    if r2 == 0.0:
        return np.array([vx, vy, 0.0, 0.0])

    r = np.sqrt(r2)
    gravity = -params.G * params.M / (r2 * r)
    net = params.thrust_coefficient - params.drag_coefficient

    ax = gravity * x + net * vx
    ay = gravity * y + net * vy
    return np.array([vx, vy, ax, ay])
