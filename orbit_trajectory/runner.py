"""Background execution of simulation runs for interactive front ends."""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional

from .dynamics import SimulationParameters
from .errors import ConfigurationError
from .integrator import TrajectoryResult, simulate

logger = logging.getLogger(__name__)


def run_checked(params: SimulationParameters) -> TrajectoryResult:
    """Run a simulation, turning invalid parameters into a REJECTED result."""
    try:
        return simulate(params)
    except ConfigurationError as e:
        logger.warning("Simulation rejected: %s", e)
        return TrajectoryResult.rejected(params, str(e))


class SimulationRunner:
    """
    Runs simulations off the calling thread.

    Every submission gets a generation number. A result whose generation is
    older than the newest submission is stale and is dropped instead of being
    handed to the callback; the run itself is never interrupted.
    """

    def __init__(self, max_workers: int = 1):
        self._executor = ThreadPoolExecutor(max_workers=max_workers,
                                            thread_name_prefix='simulation')
        self._lock = threading.Lock()
        self._generation = 0

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    def submit(self, params: SimulationParameters,
               callback: Optional[Callable[[TrajectoryResult], None]] = None) -> Future:
        with self._lock:
            self._generation += 1
            generation = self._generation
        future = self._executor.submit(run_checked, params)
        if callback is not None:
            future.add_done_callback(
                lambda f: self._deliver(f, generation, callback))
        return future

    def _deliver(self, future: Future, generation: int, callback) -> None:
        if self.is_stale(generation):
            logger.debug("Discarding stale result of generation %d", generation)
            return
        error = future.exception()
        if error is not None:
            # the Future still carries the error for callers of result()
            logger.error("Simulation of generation %d failed", generation,
                         exc_info=error)
            return
        callback(future.result())

    def is_stale(self, generation: int) -> bool:
        with self._lock:
            return generation < self._generation

    def run(self, params: SimulationParameters) -> TrajectoryResult:
        """Synchronous run with the same rejection policy as submit()."""
        return run_checked(params)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.shutdown()
        return False
