"""
Central-Force Trajectory Simulator
==================================
Simulates the planar path of a body around a central mass under:
  - Inverse-square gravity
  - A net propulsion/drag acceleration proportional to velocity

Integration uses the classical 4th-order Runge-Kutta method at a fixed
timestep. A run ends after the requested number of steps or as soon as the
body drops inside the central body's radius.

Results can be plotted, shown as a subsampled table, exported to CSV, and
computed in the background for interactive front ends.
"""

from .errors import TrajectoryError, ConfigurationError, InputError
from .dynamics import State, SimulationParameters, derivative
from .integrator import (
    SimulationStatus, TrajectoryResult,
    validate_parameters, rk4_step, simulate,
)
from .config import SimulationConfig, load_config, save_config
from .inputs import LaunchInputs, parse_inputs, build_parameters, steps_for
from .table import TableRow, sample_rows, format_table, export_csv
from .runner import SimulationRunner, run_checked
from .validation import (
    circular_orbit_parameters, circular_orbit_position,
    radial_deviation, convergence_study, run_all_checks,
)
from .visualization import (
    world_to_screen, plot_trajectory, plot_radius_history, plot_convergence,
)

__version__ = "1.0.0"
__all__ = [
    'State', 'SimulationParameters', 'SimulationStatus', 'TrajectoryResult',
    'derivative', 'rk4_step', 'simulate', 'validate_parameters',
    'TrajectoryError', 'ConfigurationError', 'InputError',
    'SimulationConfig', 'load_config', 'save_config',
    'LaunchInputs', 'parse_inputs', 'build_parameters', 'steps_for',
    'TableRow', 'sample_rows', 'format_table', 'export_csv',
    'SimulationRunner', 'run_checked',
    'circular_orbit_parameters', 'circular_orbit_position',
    'radial_deviation', 'convergence_study', 'run_all_checks',
    'world_to_screen', 'plot_trajectory', 'plot_radius_history',
    'plot_convergence',
]
