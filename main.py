#!/usr/bin/env python3
"""
═══════════════════════════════════════════════════════════════════════════════
  CENTRAL-FORCE TRAJECTORY SIMULATOR — Main Runner
═══════════════════════════════════════════════════════════════════════════════

  Runs one trajectory from command-line inputs:
    1. Parse the user fields (mass, speed, time, drag, thrust)
    2. Integrate with fixed-step RK4
    3. Print the summary and the subsampled data table
    4. Optionally save plots and a full CSV export
    5. Optionally run the accuracy checks

  Usage:
    python main.py                                  # default low Earth orbit
    python main.py --speed 7000 --time 6000         # decaying orbit
    python main.py --drag 1e-4 --plot outputs       # with plots
    python main.py --check                          # accuracy checks
═══════════════════════════════════════════════════════════════════════════════
"""

import argparse
import logging
import os
import sys
import time

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from orbit_trajectory.config import SimulationConfig, load_config
from orbit_trajectory.errors import ConfigurationError, InputError
from orbit_trajectory.inputs import parse_inputs, build_parameters
from orbit_trajectory.integrator import simulate
from orbit_trajectory.table import sample_rows, format_table, export_csv
from orbit_trajectory.validation import run_all_checks
from orbit_trajectory.visualization import (
    plot_trajectory, plot_radius_history, plot_convergence,
)

logger = logging.getLogger('orbit_trajectory')


def section(title):
    print(f"\n{'─'*60}")
    print(f"  {title}")
    print(f"{'─'*60}")


def build_arg_parser():
    parser = argparse.ArgumentParser(
        description="Planar trajectory under central gravity and linear drag/thrust.")
    parser.add_argument('--mass', help="central-body mass (kg)")
    parser.add_argument('--speed', help="initial tangential speed (m/s)")
    parser.add_argument('--time', dest='total_time', help="total simulated time (s)")
    parser.add_argument('--drag', help="drag coefficient (1/s)")
    parser.add_argument('--thrust', help="thrust coefficient (1/s)")
    parser.add_argument('--dt', type=float, help="integration timestep (s)")
    parser.add_argument('--config', help="JSON configuration file")
    parser.add_argument('--rows', type=int, help="maximum table rows")
    parser.add_argument('--plot', metavar='DIR', help="save plots to DIR")
    parser.add_argument('--csv', metavar='PATH', help="export every sample to PATH")
    parser.add_argument('--check', action='store_true', help="run accuracy checks")
    parser.add_argument('-v', '--verbose', action='store_true')
    return parser


def main(argv=None):
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s %(name)s: %(message)s',
    )
    start_time = time.time()

    try:
        config = load_config(args.config) if args.config else SimulationConfig()
        config = config.with_overrides(dt=args.dt, max_table_rows=args.rows)
        inputs = parse_inputs({
            'mass': args.mass, 'speed': args.speed, 'total_time': args.total_time,
            'drag': args.drag, 'thrust': args.thrust,
        })
        params = build_parameters(inputs, config)
        result = simulate(params)
    except (InputError, ConfigurationError) as e:
        print(f"  ✗ Invalid input — {e}")
        return 2

    section("TRAJECTORY")
    print(f"  Mass {inputs.mass:.4g} kg | Speed {inputs.speed:.1f} m/s | "
          f"Time {inputs.total_time:.1f} s | Drag {inputs.drag:g} | Thrust {inputs.thrust:g}")
    print(result.summary())
    print(f"  {result.message}")

    section(f"DATA TABLE (max {config.max_table_rows} rows)")
    print(format_table(sample_rows(result, config.max_table_rows)))

    if args.csv:
        export_csv(result, args.csv)
        print(f"\n  ✓ Saved: {args.csv}")

    report = run_all_checks(verbose=True) if args.check else None

    if args.plot:
        out = args.plot
        os.makedirs(out, exist_ok=True)
        fig = plot_trajectory(result, save_path=f'{out}/01_trajectory.png')
        plt.close(fig)
        print(f"  ✓ Saved: {out}/01_trajectory.png")
        fig = plot_radius_history(result, save_path=f'{out}/02_radius.png')
        plt.close(fig)
        print(f"  ✓ Saved: {out}/02_radius.png")
        if report is not None:
            fig = plot_convergence(report['convergence'],
                                   save_path=f'{out}/03_convergence.png')
            plt.close(fig)
            print(f"  ✓ Saved: {out}/03_convergence.png")

    print(f"\n  Total runtime: {time.time() - start_time:.2f} seconds")
    return 0


if __name__ == "__main__":
    sys.exit(main())
