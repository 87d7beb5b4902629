"""Polling watcher that rebuilds the corpus when sources change."""

import logging
import signal
from pathlib import Path
from time import sleep

from schemas.config import BuildConfig
from spec_distiller.loaders.spec_writer import remove_spec

from .scheduler import BuildScheduler

logger: logging.Logger = logging.getLogger(__name__)

Fingerprint = dict[Path, tuple[float, int]]


class SourceWatcher:
    """Poll a source directory and request builds on change.

    Watches sources plus the bibliography and person registry. When a
    source disappears its published counterpart is removed as well.

    Attributes:
        config: Build configuration (source directory and file names)
        scheduler: Single-flight scheduler that runs the builds
        poll_interval: Seconds between polls
        shutdown_requested: Flag for graceful shutdown
    """

    def __init__(
        self,
        config: BuildConfig,
        scheduler: BuildScheduler,
        poll_interval: float = 1.0,
        install_signal_handlers: bool = True,
    ):
        self.config = config
        self.scheduler = scheduler
        self.poll_interval = poll_interval
        self.shutdown_requested = False
        self._fingerprint: Fingerprint = {}

        if install_signal_handlers:
            signal.signal(signal.SIGTERM, self._handle_shutdown)
            signal.signal(signal.SIGINT, self._handle_shutdown)

    def _handle_shutdown(self, signum, frame) -> None:
        """Handle shutdown signals (SIGTERM, SIGINT) gracefully."""
        logger.info("Shutdown signal received, will exit after current build")
        self.shutdown_requested = True

    def _is_watched(self, path: Path) -> bool:
        return path.name.endswith(self.config.source_suffix) or path.name in (
            self.config.bibliography_file,
            self.config.persons_file,
        )

    def snapshot(self) -> Fingerprint:
        """Fingerprint watched files by modification time and size."""
        fingerprint: Fingerprint = {}
        for path in self.config.source_dir.iterdir():
            if path.is_file() and self._is_watched(path):
                stat = path.stat()
                fingerprint[path] = (stat.st_mtime, stat.st_size)
        return fingerprint

    def poll(self) -> bool:
        """Check for changes once, removing stale output and rebuilding.

        Returns:
            True if a change was detected
        """
        current = self.snapshot()
        if current == self._fingerprint:
            return False

        for path in self._fingerprint.keys() - current.keys():
            if path.name.endswith(self.config.source_suffix):
                logger.info(f"Source removed: {path.name}")
                remove_spec(path, self.config.resolved_output_dir, self.config.source_suffix)

        changed = sorted(
            p.name for p in current if self._fingerprint.get(p) != current[p]
        )
        if changed:
            logger.debug(f"Changed: {', '.join(changed)}")

        self._fingerprint = current
        self.scheduler.request()
        return True

    def run_forever(self) -> None:
        """Build once, then poll until a shutdown signal is received."""
        logger.info(f"Watching {self.config.source_dir}")
        while not self.shutdown_requested:
            self.poll()
            sleep(self.poll_interval)

        logger.info("Watcher exiting gracefully")
