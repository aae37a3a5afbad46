"""Deletion trash with deferred retries.

Provides the DeletionTrash class, an in-memory queue of filesystem paths
that could not be removed immediately. Queued paths are retried on every
sweep until they are deleted or expire by miss count or age.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import replace
from datetime import UTC, datetime, timedelta
from os import PathLike
from pathlib import Path
from threading import RLock
from typing import TYPE_CHECKING

from filetrash.trash.models import DeleteResult, TrashEntry, is_expired, to_path

if TYPE_CHECKING:
    from filetrash.trash.config import TrashConfig

logger = logging.getLogger(__name__)

PathArg = str | PathLike[str]


def _utcnow() -> datetime:
    return datetime.now(UTC)


def remove_path(path: Path) -> None:
    """Remove a single filesystem entry.

    Directories are removed with ``os.rmdir`` and must already be empty.
    Files, symlinks and dangling symlinks are unlinked. A path that does
    not exist is treated as already removed.

    Args:
        path: Path to remove.

    Raises:
        OSError: If the entry exists but cannot be removed.
    """
    if not os.path.lexists(path):
        return
    if path.is_dir() and not path.is_symlink():
        os.rmdir(path)
    else:
        os.unlink(path)


class DeletionTrash:
    """Queue of filesystem paths pending deletion.

    A failed deletion does not raise: the path is queued and retried on
    the next sweep. Entries are evicted once they miss more than
    ``max_miss_times`` attempts or stay queued longer than ``max_age``.
    All queue mutations happen under a single re-entrant lock, so the
    trash can be shared between caller threads and a background sweeper.

    Attributes:
        _entries: Queued entries keyed by path, in insertion order.
        _lock: Guards every read-modify-write sequence on ``_entries``.
    """

    def __init__(
        self,
        *,
        empty_threshold: int = 0,
        max_miss_times: int = 0,
        max_age: timedelta | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the DeletionTrash.

        Args:
            empty_threshold: Queue size above which enqueue triggers a sweep.
                0 disables threshold sweeps.
            max_miss_times: Failed attempts tolerated before an entry is
                evicted. 0 disables the limit.
            max_age: Maximum time an entry may stay queued. None disables it.
            clock: Callable returning the current UTC time.
        """
        self._entries: dict[Path, TrashEntry] = {}
        self._lock = RLock()
        self._clock = clock or _utcnow
        self._empty_threshold = 0
        self._max_miss_times = 0
        self._max_age: timedelta | None = None

        self.empty_threshold = empty_threshold
        self.max_miss_times = max_miss_times
        self.max_age = max_age

    @classmethod
    def from_config(cls, config: TrashConfig) -> DeletionTrash:
        """Create a trash from a validated TrashConfig."""
        return cls(
            empty_threshold=config.empty_threshold,
            max_miss_times=config.max_miss_times,
            max_age=config.max_age,
        )

    # -------------------------------------------------------------------------
    # Policy
    # -------------------------------------------------------------------------

    @property
    def empty_threshold(self) -> int:
        """Queue size above which enqueue triggers a sweep (0 = never)."""
        return self._empty_threshold

    @empty_threshold.setter
    def empty_threshold(self, value: int) -> None:
        if value < 0:
            msg = f"empty_threshold must be >= 0, got {value}"
            raise ValueError(msg)
        self._empty_threshold = value

    @property
    def max_miss_times(self) -> int:
        """Failed attempts tolerated before eviction (0 = unlimited)."""
        return self._max_miss_times

    @max_miss_times.setter
    def max_miss_times(self, value: int) -> None:
        if value < 0:
            msg = f"max_miss_times must be >= 0, got {value}"
            raise ValueError(msg)
        self._max_miss_times = value

    @property
    def max_age(self) -> timedelta | None:
        """Maximum time an entry may stay queued (None = unlimited)."""
        return self._max_age

    @max_age.setter
    def max_age(self, value: timedelta | None) -> None:
        if value is not None and value < timedelta(0):
            msg = f"max_age must not be negative, got {value}"
            raise ValueError(msg)
        self._max_age = value

    def with_empty_threshold(self, value: int) -> DeletionTrash:
        self.empty_threshold = value
        return self

    def with_max_miss_times(self, value: int) -> DeletionTrash:
        self.max_miss_times = value
        return self

    def with_max_age(self, value: timedelta | None) -> DeletionTrash:
        self.max_age = value
        return self

    # -------------------------------------------------------------------------
    # Queue operations
    # -------------------------------------------------------------------------

    def delete(self, path: PathArg) -> DeleteResult:
        """Delete a path now, queueing it for a retry on failure.

        If the path is already queued, the existing entry is reused so its
        miss count carries over.

        Args:
            path: Filesystem path to delete. Directories must be empty.

        Returns:
            DELETED if the path is gone, QUEUED if it waits for a retry,
            FAILED if the attempt failed and the entry expired.
        """
        key = to_path(path)
        with self._lock:
            entry = self._entries.get(key)
            queued = entry is not None
            if entry is None:
                entry = TrashEntry(key, enqueued_at=self._clock())
            return self._try_delete(entry, queued=queued)

    def enqueue(self, path: PathArg) -> bool:
        """Queue a path for a later deletion without trying it now.

        Adding a path that is already queued is a no-op. A new entry may
        trigger a threshold sweep.

        Args:
            path: Filesystem path to queue.

        Returns:
            True if a new entry was added, False if the path was already queued.
        """
        key = to_path(path)
        with self._lock:
            if key in self._entries:
                return False
            self._entries[key] = TrashEntry(key, enqueued_at=self._clock())
            logger.debug("Queued %s for deletion", key)
            self.sweep_if_over_threshold()
            return True

    def sweep(self) -> int:
        """Retry deletion of every queued path.

        Failed entries stay queued with an incremented miss count unless
        they expire, in which case they are evicted.

        Returns:
            Number of paths deleted during this sweep.
        """
        deleted = 0
        with self._lock:
            snapshot = list(self._entries.values())
            for entry in snapshot:
                if self._try_delete(entry, queued=True) is DeleteResult.DELETED:
                    deleted += 1
            if snapshot:
                logger.debug(
                    "Sweep deleted %d of %d queued path(s), %d remaining",
                    deleted,
                    len(snapshot),
                    len(self._entries),
                )
        return deleted

    def sweep_if_over_threshold(self) -> int:
        """Sweep the trash if its size exceeds ``empty_threshold``.

        Returns:
            Number of paths deleted, 0 if no sweep was triggered.
        """
        with self._lock:
            if self._empty_threshold > 0 and len(self._entries) > self._empty_threshold:
                logger.debug(
                    "Trash size %d exceeds threshold %d, sweeping",
                    len(self._entries),
                    self._empty_threshold,
                )
                return self.sweep()
            return 0

    def evict_expired(self) -> int:
        """Make a last deletion attempt on expired entries and evict them.

        Expired entries leave the queue whether or not the final attempt
        succeeds. Paths that still cannot be deleted are logged as
        abandoned and must be cleaned up manually.

        Returns:
            Number of expired paths deleted by the final attempt.
        """
        deleted = 0
        with self._lock:
            now = self._clock()
            expired = [e for e in self._entries.values() if self._is_expired(e, now)]
            for entry in expired:
                try:
                    remove_path(entry.path)
                except OSError as e:
                    logger.warning(
                        "Abandoned %s after %d failed attempt(s), remove it manually: %s",
                        entry.path,
                        entry.miss_count,
                        e,
                    )
                else:
                    deleted += 1
                self._entries.pop(entry.path, None)
        return deleted

    def delete_tree(self, root: PathArg) -> DeleteResult:
        """Recursively delete a directory tree, children before parents.

        Every file and directory is deleted with :meth:`delete`, so an
        entry that fails is queued on its own and retried by later sweeps
        while its siblings are still processed. Symlinks are removed as
        links and never followed.

        Args:
            root: Root of the tree to delete. May also be a file.

        Returns:
            Result of deleting the root itself.
        """
        root_path = to_path(root)

        if root_path.is_dir() and not root_path.is_symlink():
            for dirpath, dirnames, filenames in os.walk(
                root_path, topdown=False, onerror=self._log_walk_error
            ):
                base = Path(dirpath)
                for name in filenames:
                    self.delete(base / name)
                # Bottom-up: subdirectory contents were handled in earlier iterations
                for name in dirnames:
                    self.delete(base / name)

        result = self.delete(root_path)
        logger.debug("Tree deletion of %s finished: %s", root_path, result.value)
        return result

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    def size(self) -> int:
        """Return the number of queued paths."""
        with self._lock:
            return len(self._entries)

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, str | PathLike):
            return False
        with self._lock:
            return Path(path) in self._entries

    def entries(self) -> list[TrashEntry]:
        """Return copies of the queued entries in insertion order."""
        with self._lock:
            return [replace(e) for e in self._entries.values()]

    def clear(self) -> int:
        """Drop every queued entry without touching the filesystem.

        Returns:
            Number of entries dropped.
        """
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            return count

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _is_expired(self, entry: TrashEntry, now: datetime | None = None) -> bool:
        return is_expired(
            entry,
            max_miss_times=self._max_miss_times,
            max_age=self._max_age,
            now=now or self._clock(),
        )

    def _try_delete(self, entry: TrashEntry, *, queued: bool) -> DeleteResult:
        """Attempt one deletion and update the queue accordingly.

        Must be called with ``_lock`` held.

        Args:
            entry: Entry to delete.
            queued: True if the entry is already in the queue.

        Returns:
            DeleteResult of the attempt.
        """
        logger.debug("Trying to delete %s", entry.path)
        try:
            remove_path(entry.path)
        except OSError as e:
            entry.add_miss()
            if self._is_expired(entry):
                logger.warning(
                    "Finally failed to delete %s after %d attempt(s), "
                    "entry removed, remove it manually: %s",
                    entry.path,
                    entry.miss_count,
                    e,
                )
                self._entries.pop(entry.path, None)
                return DeleteResult.FAILED

            logger.debug("Error deleting %s, queued for next sweep: %s", entry.path, e)
            if not queued:
                self._entries[entry.path] = entry
            return DeleteResult.QUEUED

        self._entries.pop(entry.path, None)
        return DeleteResult.DELETED

    @staticmethod
    def _log_walk_error(error: OSError) -> None:
        logger.warning("Cannot list directory %s: %s", error.filename, error)
