"""Single-flight build scheduling.

At most one build runs at a time. A request that arrives while a build is in
flight is remembered, and exactly one more build runs once the current one
finishes, however many requests arrived in the meantime.
"""

import logging
import threading
from typing import Callable

from spec_distiller.exceptions import SpecDistillerError

logger: logging.Logger = logging.getLogger(__name__)


class BuildScheduler:
    """Coalesce build requests so builds never overlap.

    Attributes:
        build_fn: Callable that performs one complete build
        runs: Number of builds started so far
    """

    def __init__(self, build_fn: Callable[[], object]):
        self.build_fn = build_fn
        self.runs = 0
        self._lock = threading.Lock()
        self._running = False
        self._pending = False

    @property
    def running(self) -> bool:
        return self._running

    @property
    def pending(self) -> bool:
        return self._pending

    def request(self) -> bool:
        """Request a build.

        Runs the build in the calling thread if none is in flight; otherwise
        queues a rerun and returns immediately.

        Returns:
            True if this call ran at least one build, False if it was queued
        """
        with self._lock:
            if self._running:
                self._pending = True
                logger.debug("Build in progress, queued another run")
                return False
            self._running = True

        try:
            while True:
                self._run_once()
                with self._lock:
                    if not self._pending:
                        self._running = False
                        return True
                    self._pending = False
                logger.info("Sources changed during build, rebuilding")
        except BaseException:
            with self._lock:
                self._running = False
                self._pending = False
            raise

    def _run_once(self) -> None:
        self.runs += 1
        try:
            self.build_fn()
        except SpecDistillerError as e:
            logger.error(f"Build aborted: {e.message}")
