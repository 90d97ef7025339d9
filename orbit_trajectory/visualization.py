"""
Visualization
=============
Plots for trajectory analysis:
  1. Trajectory in the orbital plane, with the central body drawn at the origin
  2. Radius vs time
  3. Convergence study (error vs dt, log-log)

Also provides the world-to-screen transform a canvas uses to draw the same
path: pixels grow downwards, so screen_y = origin_y - scale · world_y.
"""

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from matplotlib.patches import Circle
from typing import List, Tuple

from .integrator import TrajectoryResult, SimulationStatus
from .validation import ConvergenceRun


# ── Style Configuration ───────────────────────────────────────────────────
STYLE = {
    'bg_color': '#0a0a0a',
    'text_color': '#e0e0e0',
    'grid_color': '#333333',
    'accent_colors': ['#00d4ff', '#ff6b35', '#00e676', '#ffeb3b',
                      '#e040fb', '#ff5252'],
    'body_color': '#2e5c8a',
}

def _apply_dark_style(fig, axes):
    """Apply consistent dark theme to figure and axes."""
    fig.patch.set_facecolor(STYLE['bg_color'])
    if not isinstance(axes, np.ndarray):
        axes = [axes]
    else:
        axes = axes.flatten()

    for ax in axes:
        ax.set_facecolor(STYLE['bg_color'])
        ax.tick_params(colors=STYLE['text_color'])
        ax.xaxis.label.set_color(STYLE['text_color'])
        ax.yaxis.label.set_color(STYLE['text_color'])
        ax.title.set_color(STYLE['text_color'])
        ax.grid(True, color=STYLE['grid_color'], alpha=0.4, linewidth=0.5)
        for spine in ax.spines.values():
            spine.set_color(STYLE['grid_color'])


def _legend(ax):
    ax.legend(fontsize=10, facecolor='#1a1a1a', edgecolor='#444',
              labelcolor=STYLE['text_color'])


def _finish(fig, save_path, show):
    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight',
                    facecolor=STYLE['bg_color'])
    if show:
        plt.show()
    return fig


def world_to_screen(points: np.ndarray, scale: float,
                    origin: Tuple[float, float] = (0.0, 0.0)) -> np.ndarray:
    """
    Map world coordinates (m) to screen pixels.

    `scale` is pixels per metre and `origin` is the pixel where the world
    origin lands. The y axis is flipped.
    """
    points = np.asarray(points, dtype=float).reshape(-1, 2)
    ox, oy = origin
    return np.column_stack([ox + scale * points[:, 0],
                            oy - scale * points[:, 1]])


# ══════════════════════════════════════════════════════════════════════════
#  1. Trajectory Plot
# ══════════════════════════════════════════════════════════════════════════

def plot_trajectory(result: TrajectoryResult, save_path: str = None,
                    show: bool = False) -> plt.Figure:
    """Path in the orbital plane, positions in km."""
    fig, ax = plt.subplots(figsize=(9, 9))
    _apply_dark_style(fig, ax)

    body_km = result.params.central_body_radius / 1000
    ax.add_patch(Circle((0, 0), body_km, color=STYLE['body_color'],
                        alpha=0.8, label='Central body'))
    ax.plot(0, 0, '+', color=STYLE['text_color'], markersize=8)

    if len(result):
        x_km = result.x / 1000
        y_km = result.y / 1000
        ax.plot(x_km, y_km, color=STYLE['accent_colors'][0], linewidth=1.8,
                label='Trajectory')
        ax.plot(x_km[0], y_km[0], 'o', color='#00e676', markersize=9,
                label='Start', zorder=5)
        end_marker = 'x' if result.status is SimulationStatus.COLLISION else 's'
        ax.plot(x_km[-1], y_km[-1], end_marker, color='#ff5252',
                markersize=10, markeredgewidth=2.5,
                label='Impact' if end_marker == 'x' else 'End', zorder=5)

    ax.set_aspect('equal', adjustable='datalim')
    ax.set_xlabel('x (km)', fontsize=12)
    ax.set_ylabel('y (km)', fontsize=12)
    ax.set_title(f'Trajectory — {result.status.value.upper()}, '
                 f'dt={result.dt:g}s, {len(result)} samples',
                 fontsize=13, fontweight='bold')
    _legend(ax)
    return _finish(fig, save_path, show)


# ══════════════════════════════════════════════════════════════════════════
#  2. Radius History
# ══════════════════════════════════════════════════════════════════════════

def plot_radius_history(result: TrajectoryResult, save_path: str = None,
                        show: bool = False) -> plt.Figure:
    """Distance from the origin vs elapsed time."""
    fig, ax = plt.subplots(figsize=(12, 5))
    _apply_dark_style(fig, ax)

    ax.plot(result.time, result.radius / 1000,
            color=STYLE['accent_colors'][1], linewidth=2, label='Radius')
    ax.axhline(y=result.params.central_body_radius / 1000, color='#ff5252',
               linestyle='--', alpha=0.6, label='Central-body radius')

    ax.set_xlabel('Time (s)', fontsize=12)
    ax.set_ylabel('Radius (km)', fontsize=12)
    ax.set_title('Radius vs Time', fontsize=13, fontweight='bold')
    _legend(ax)
    return _finish(fig, save_path, show)


# ══════════════════════════════════════════════════════════════════════════
#  3. Convergence
# ══════════════════════════════════════════════════════════════════════════

def plot_convergence(study: List[ConvergenceRun], save_path: str = None,
                     show: bool = False) -> plt.Figure:
    """Final-position error vs dt with a 4th-order guide line."""
    fig, ax = plt.subplots(figsize=(9, 6))
    _apply_dark_style(fig, ax)

    dts = np.array([r.dt for r in study])
    errors = np.array([r.error for r in study])
    ax.loglog(dts, errors, 'o-', color=STYLE['accent_colors'][0],
              linewidth=2, markersize=8, label='RK4')
    ax.loglog(dts, errors[0] * (dts / dts[0]) ** 4, '--',
              color=STYLE['accent_colors'][3], alpha=0.7, label='slope 4')

    ax.set_xlabel('dt (s)', fontsize=12)
    ax.set_ylabel('Final position error', fontsize=12)
    ax.set_title('Convergence Study', fontsize=13, fontweight='bold')
    _legend(ax)
    return _finish(fig, save_path, show)
