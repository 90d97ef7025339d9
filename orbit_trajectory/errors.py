"""
Error Types
===========
Exceptions raised at the boundaries of the simulator.

Domain conditions (a body at the exact origin, a collision with the central
body) are never errors: they come back as a normal, possibly short, result.
Only input that cannot describe a simulation raises.
"""


class TrajectoryError(Exception):
    """Base class for all simulator errors."""


class ConfigurationError(TrajectoryError, ValueError):
    """Simulation parameters that cannot produce a meaningful trajectory."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"{field}: {message}")


class InputError(TrajectoryError, ValueError):
    """A user-provided text field could not be parsed."""

    def __init__(self, field: str, value, message: str = "not a number"):
        self.field = field
        self.value = value
        super().__init__(f"{field}: {message} ({value!r})")
