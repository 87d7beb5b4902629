"""Build pipeline: two-phase corpus build, scheduling and watching."""

from .orchestrator import SpecBuilder, today
from .scheduler import BuildScheduler
from .watcher import SourceWatcher

__all__ = ["BuildScheduler", "SourceWatcher", "SpecBuilder", "today"]
