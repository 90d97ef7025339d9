"""
Physical Constants & Defaults
=============================
SI units throughout: metres, kilograms, seconds.
"""

# ── Physical constants ─────────────────────────────────────────────────────
GRAVITATIONAL_CONSTANT = 6.674e-11    # m³/(kg·s²)
EARTH_MASS             = 5.972e24     # kg
EARTH_RADIUS           = 6.371e6      # m

# ── Simulation defaults ────────────────────────────────────────────────────
DEFAULT_DT             = 1.0          # s   fixed integration step
DEFAULT_START_ALTITUDE = 400.0e3      # m   above the central-body surface
DEFAULT_SPEED          = 7670.0       # m/s roughly circular at 400 km
DEFAULT_TOTAL_TIME     = 5560.0       # s   about one low orbit
DEFAULT_DRAG           = 0.0          # 1/s
DEFAULT_THRUST         = 0.0          # 1/s

# ── Presentation ───────────────────────────────────────────────────────────
MAX_TABLE_ROWS         = 1000         # rows shown before subsampling kicks in
