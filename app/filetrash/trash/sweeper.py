"""Background sweeping of a deletion trash.

Runs DeletionTrash sweeps on a fixed interval in a daemon thread. A tick
that starts while a previous run is still active is skipped, so sweeps
of the same trash never overlap.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from types import TracebackType
from typing import TYPE_CHECKING

from filetrash.trash.trash import DeletionTrash

if TYPE_CHECKING:
    from filetrash.trash.config import TrashConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SweepReport:
    """Outcome of one sweeper run.

    Attributes:
        deleted: Paths deleted by the sweep.
        evicted_deleted: Expired paths deleted by their final attempt.
        remaining: Paths still queued after the run.
    """

    deleted: int
    evicted_deleted: int
    remaining: int


class PeriodicSweeper:
    """Sweeps a DeletionTrash periodically in a background thread.

    Attributes:
        _trash: Trash to sweep.
        _interval: Seconds between two runs.
        _evict_expired: If True, evict expired entries after each sweep.
    """

    def __init__(
        self,
        trash: DeletionTrash,
        interval: float,
        *,
        evict_expired: bool = True,
    ) -> None:
        """Initialize the PeriodicSweeper.

        Args:
            trash: Trash to sweep.
            interval: Seconds between two runs. Must be positive.
            evict_expired: Also evict expired entries after each sweep.

        Raises:
            ValueError: If interval is not positive.
        """
        if interval <= 0:
            msg = f"Sweep interval must be positive, got {interval}"
            raise ValueError(msg)

        self._trash = trash
        self._interval = interval
        self._evict_expired = evict_expired
        self._run_lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @classmethod
    def from_config(
        cls,
        trash: DeletionTrash,
        config: TrashConfig,
        *,
        evict_expired: bool = True,
    ) -> PeriodicSweeper:
        """Create a sweeper running every ``config.sweep_interval_seconds``."""
        return cls(trash, config.sweep_interval_seconds, evict_expired=evict_expired)

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def is_running(self) -> bool:
        """True while the background thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    def run_once(self) -> SweepReport | None:
        """Run a single sweep unless one is already in progress.

        Returns:
            SweepReport for the run, or None if it was skipped.
        """
        if not self._run_lock.acquire(blocking=False):
            logger.debug("Previous sweep still running, skipping")
            return None

        try:
            deleted = self._trash.sweep()
            evicted = self._trash.evict_expired() if self._evict_expired else 0
            report = SweepReport(
                deleted=deleted,
                evicted_deleted=evicted,
                remaining=self._trash.size(),
            )
        finally:
            self._run_lock.release()

        if report.deleted or report.evicted_deleted:
            logger.info(
                "Swept trash: %d deleted, %d expired deleted, %d remaining",
                report.deleted,
                report.evicted_deleted,
                report.remaining,
            )
        return report

    def start(self) -> None:
        """Start the background sweeping thread.

        Raises:
            RuntimeError: If the sweeper is already running.
        """
        if self.is_running:
            msg = "Sweeper is already running"
            raise RuntimeError(msg)

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._loop,
            name="filetrash-sweeper",
            daemon=True,
        )
        self._thread.start()
        logger.debug("Sweeper started (interval %.1fs)", self._interval)

    def stop(self, timeout: float | None = None) -> None:
        """Stop the background thread and wait for it to finish.

        A sweep in progress runs to completion before the thread exits.

        Args:
            timeout: Maximum seconds to wait for the thread.
        """
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            if self._thread.is_alive():
                logger.warning("Sweeper thread did not stop within %s seconds", timeout)
            else:
                self._thread = None
        logger.debug("Sweeper stopped")

    def __enter__(self) -> PeriodicSweeper:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()

    def _loop(self) -> None:
        while not self._stop_event.wait(self._interval):
            try:
                self.run_once()
            except Exception:
                logger.exception("Trash sweep failed")
