"""
Trajectory Data Table
=====================
Row view of a trajectory for the console or a table widget. Long runs are
subsampled to at most `max_rows` rows by taking every Nth sample; the last
sample is always shown so an impact point never disappears from the table.
"""

import csv
import math
from dataclasses import dataclass
from typing import List

from .constants import MAX_TABLE_ROWS
from .integrator import TrajectoryResult


@dataclass(frozen=True)
class TableRow:
    index: int      # sample index in the trajectory
    time: float     # s  elapsed = index × dt
    x: float        # m
    y: float        # m


def sample_stride(n_samples: int, max_rows: int = MAX_TABLE_ROWS) -> int:
    if max_rows < 1:
        raise ValueError(f"max_rows must be >= 1, got {max_rows}")
    return max(1, math.ceil(n_samples / max_rows))


def sample_rows(result: TrajectoryResult,
                max_rows: int = MAX_TABLE_ROWS) -> List[TableRow]:
    n = len(result)
    stride = sample_stride(n, max_rows)
    indices = list(range(0, n, stride))
    if indices and indices[-1] != n - 1:
        if len(indices) == max_rows:
            indices[-1] = n - 1
        else:
            indices.append(n - 1)

    dt = result.dt
    return [TableRow(i, i * dt, float(result.points[i, 0]), float(result.points[i, 1]))
            for i in indices]


def format_table(rows: List[TableRow]) -> str:
    """Fixed-width text rendering, positions in km."""
    lines = [f"{'#':>8} {'t (s)':>12} {'x (km)':>14} {'y (km)':>14}",
             "-" * 51]
    for row in rows:
        lines.append(f"{row.index:>8d} {row.time:>12.2f} "
                     f"{row.x / 1000:>14.3f} {row.y / 1000:>14.3f}")
    return '\n'.join(lines)


def export_csv(result: TrajectoryResult, path: str) -> str:
    """Write every sample (not subsampled) as index, time_s, x_m, y_m."""
    with open(path, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow(['index', 'time_s', 'x_m', 'y_m'])
        for i, (t, (x, y)) in enumerate(zip(result.time, result.points)):
            writer.writerow([i, repr(float(t)), repr(float(x)), repr(float(y))])
    return path
