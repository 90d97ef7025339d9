"""
User Inputs
===========
Turns the numbers a user types (central mass, initial speed, total time,
drag and thrust coefficients) into a SimulationParameters record.

The body starts on the +x axis at central_body_radius + start_altitude and
moves in +y at the initial speed, i.e. counter-clockwise.
"""

import logging
import math
from dataclasses import dataclass, fields, replace
from typing import Mapping, Optional

from .config import SimulationConfig
from .constants import (
    EARTH_MASS, DEFAULT_SPEED, DEFAULT_TOTAL_TIME, DEFAULT_DRAG, DEFAULT_THRUST,
)
from .dynamics import SimulationParameters, State
from .errors import ConfigurationError, InputError

logger = logging.getLogger(__name__)


@dataclass
class LaunchInputs:
    mass: float = EARTH_MASS               # kg  central body
    speed: float = DEFAULT_SPEED           # m/s initial tangential speed
    total_time: float = DEFAULT_TOTAL_TIME  # s
    drag: float = DEFAULT_DRAG             # 1/s
    thrust: float = DEFAULT_THRUST         # 1/s


def parse_inputs(raw: Mapping[str, str],
                 defaults: Optional[LaunchInputs] = None) -> LaunchInputs:
    """
    Parse text fields into LaunchInputs.

    Missing or blank fields keep the value from `defaults`. A field that is
    not a finite number raises InputError naming that field; nothing is
    partially applied.
    """
    defaults = defaults or LaunchInputs()
    values = {}
    for f in fields(LaunchInputs):
        text = raw.get(f.name)
        if text is None or str(text).strip() == '':
            continue
        try:
            value = float(str(text).strip())
        except ValueError:
            logger.warning("Could not parse %s=%r", f.name, text)
            raise InputError(f.name, text) from None
        if not math.isfinite(value):
            logger.warning("Non-finite value for %s: %r", f.name, text)
            raise InputError(f.name, text, "must be finite")
        values[f.name] = value

    inputs = replace(defaults, **values)
    if inputs.total_time < 0:
        raise InputError('total_time', inputs.total_time, "must be >= 0")
    if inputs.mass < 0:
        raise InputError('mass', inputs.mass, "must be >= 0")
    return inputs


def steps_for(total_time: float, dt: float) -> int:
    """Whole steps covering total_time, never fewer than one."""
    if not math.isfinite(dt) or dt <= 0:
        raise ConfigurationError('dt', f"must be > 0, got {dt!r}")
    steps = int(math.floor(total_time / dt))
    if steps < 1:
        logger.info("total time %.6g s shorter than dt %.6g s; using 1 step",
                    total_time, dt)
        steps = 1
    return steps


def build_parameters(inputs: LaunchInputs,
                     config: Optional[SimulationConfig] = None) -> SimulationParameters:
    config = config or SimulationConfig()
    r0 = config.central_body_radius + config.start_altitude
    return SimulationParameters(
        initial_state=State(x=r0, y=0.0, vx=0.0, vy=inputs.speed),
        G=config.G,
        M=inputs.mass,
        thrust_coefficient=inputs.thrust,
        drag_coefficient=inputs.drag,
        central_body_radius=config.central_body_radius,
        dt=config.dt,
        steps=steps_for(inputs.total_time, config.dt),
    )
