"""
Accuracy Checks
===============
Verifies the integrator against cases with known answers:
  - Straight-line motion when gravity and the net factor are zero
  - A circular orbit, where the radius must stay constant
  - Convergence order: halving dt on a smooth run should cut the
    final-position error by about 2^4 = 16 for a 4th-order method

The circular orbit has an exact solution, so it doubles as the reference
trajectory for the convergence study.
"""

import numpy as np
from dataclasses import dataclass
from typing import Callable, List, Sequence

from .dynamics import SimulationParameters, State
from .integrator import TrajectoryResult, simulate


@dataclass
class ConvergenceRun:
    """One timestep of a convergence study."""
    dt: float
    steps: int
    error: float            # |final position - reference| (m)
    order: float = float('nan')  # observed order vs the previous (larger) dt


def circular_orbit_parameters(mu: float = 1.0, radius: float = 1.0,
                              dt: float = 0.01, steps: int = 628,
                              central_body_radius: float = 0.0) -> SimulationParameters:
    """Pure gravity, starting at (radius, 0) with circular speed along +y."""
    speed = np.sqrt(mu / radius)
    return SimulationParameters(
        initial_state=State(x=radius, y=0.0, vx=0.0, vy=speed),
        G=1.0, M=mu,
        thrust_coefficient=0.0, drag_coefficient=0.0,
        central_body_radius=central_body_radius,
        dt=dt, steps=steps,
    )


def circular_orbit_position(mu: float, radius: float, t: float):
    """Exact position on the counter-clockwise circular orbit at time t."""
    omega = np.sqrt(mu / radius ** 3)
    return np.array([radius * np.cos(omega * t), radius * np.sin(omega * t)])


def radial_deviation(result: TrajectoryResult, radius: float) -> float:
    """Largest relative departure from `radius` along the trajectory."""
    return float(np.max(np.abs(result.radius - radius)) / radius)


def straight_line_deviation(result: TrajectoryResult) -> float:
    """Largest distance from x0 + t·v0 along the trajectory."""
    s = result.params.initial_state
    t = result.time
    expected = np.column_stack([s.x + t * s.vx, s.y + t * s.vy])
    return float(np.max(np.hypot(*(result.points - expected).T)))


def convergence_study(params: SimulationParameters,
                      reference: Callable[[float], np.ndarray],
                      dts: Sequence[float]) -> List[ConvergenceRun]:
    """
    Run the same total time (params.total_time) at each dt and compare the
    final position with reference(t_final). Each dt should divide the total
    time evenly.
    """
    total_time = params.total_time
    runs = []
    for dt in dts:
        steps = int(round(total_time / dt))
        p = SimulationParameters(
            initial_state=params.initial_state, G=params.G, M=params.M,
            thrust_coefficient=params.thrust_coefficient,
            drag_coefficient=params.drag_coefficient,
            central_body_radius=params.central_body_radius,
            dt=dt, steps=steps,
        )
        result = simulate(p)
        error = float(np.linalg.norm(result.points[-1] - reference(steps * dt)))
        run = ConvergenceRun(dt=dt, steps=steps, error=error)
        if runs and runs[-1].error > 0 and error > 0:
            run.order = float(np.log(runs[-1].error / error) / np.log(runs[-1].dt / dt))
        runs.append(run)
    return runs


def run_all_checks(verbose: bool = True) -> dict:
    """Run every accuracy check and return the measured numbers."""
    line = simulate(SimulationParameters(
        initial_state=State(x=1.0, y=2.0, vx=0.5, vy=-0.25),
        G=0.0, M=0.0, central_body_radius=0.0, dt=0.1, steps=100,
    ))
    orbit = simulate(circular_orbit_parameters(dt=0.01, steps=628))
    base = circular_orbit_parameters(dt=0.2, steps=10)
    study = convergence_study(base, lambda t: circular_orbit_position(1.0, 1.0, t),
                              [0.2, 0.1, 0.05])

    report = {
        'straight_line_error': straight_line_deviation(line),
        'circular_radial_deviation': radial_deviation(orbit, 1.0),
        'circular_final_position': orbit.final_position,
        'convergence': study,
    }

    if verbose:
        print(f"\n{'='*60}")
        print(f"  ACCURACY CHECKS")
        print(f"{'='*60}")
        print(f"  Straight line max error     : {report['straight_line_error']:.3e}")
        print(f"  Circular orbit radial drift : {report['circular_radial_deviation']:.3e}")
        xf, yf = report['circular_final_position']
        print(f"  Circular orbit final point  : ({xf:+.6f}, {yf:+.6f})")
        print(f"  {'dt':>8} {'steps':>6} {'error':>12} {'order':>7}")
        for run in study:
            print(f"  {run.dt:>8.3f} {run.steps:>6d} {run.error:>12.3e} {run.order:>7.2f}")
        orders = [r.order for r in study[1:]]
        status = "✓ PASS" if all(3.5 < o < 4.5 for o in orders) else "✗ CHECK"
        print(f"  Status: {status}")
        print(f"{'='*60}\n")

    return report
