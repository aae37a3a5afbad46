"""Trash domain models.

This module defines the data structures tracked by the deletion trash:
the three-way outcome of a delete attempt, the queued entry record, and
the expiry predicate that decides when an entry is abandoned.
"""

import os
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import Enum
from os import PathLike
from pathlib import Path


class DeleteResult(str, Enum):
    """Outcome of a single deletion attempt.

    Attributes:
        DELETED: Path is gone (deleted now, or did not exist).
        QUEUED: Deletion failed and the path waits in the trash for a retry.
        FAILED: Deletion failed and the entry expired; it was evicted.
    """

    DELETED = "deleted"
    QUEUED = "queued"
    FAILED = "failed"


def to_path(path: str | PathLike[str]) -> Path:
    """Normalize a caller-supplied path into a Path key.

    Args:
        path: Path as string or path-like object.

    Returns:
        Path instance used as the queue key.

    Raises:
        TypeError: If path is None.
        ValueError: If path is empty. ``Path("")`` collapses to ``Path(".")``,
            so the current directory is rejected as well.
    """
    if path is None:
        msg = "Path cannot be None"
        raise TypeError(msg)
    raw = os.fspath(path)
    if not raw or Path(raw) == Path(""):
        msg = f"Path cannot be empty, got {raw!r}"
        raise ValueError(msg)
    return Path(raw)


@dataclass(slots=True, eq=False)
class TrashEntry:
    """A path waiting in the trash for deletion.

    Entries compare and hash by path only, so a queue can never hold two
    records for the same filesystem object. Only ``miss_count`` changes
    after construction; ``enqueued_at`` cannot be reassigned.

    Attributes:
        path: Filesystem path to delete.
        miss_count: Number of failed deletion attempts so far.
        enqueued_at: UTC time the entry was first queued.
    """

    path: Path
    miss_count: int = 0
    enqueued_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        self.path = to_path(self.path)
        if self.miss_count < 0:
            msg = f"Miss count cannot be negative, got {self.miss_count}"
            raise ValueError(msg)

    def __setattr__(self, name: str, value: object) -> None:
        if name == "enqueued_at" and hasattr(self, name):
            msg = "enqueued_at cannot be changed once the entry is queued"
            raise AttributeError(msg)
        object.__setattr__(self, name, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TrashEntry):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)

    def add_miss(self) -> int:
        """Record a failed deletion attempt.

        Returns:
            The updated miss count.
        """
        self.miss_count += 1
        return self.miss_count

    def age(self, now: datetime | None = None) -> timedelta:
        """Time elapsed since the entry was queued."""
        return (now or datetime.now(UTC)) - self.enqueued_at


def is_expired(
    entry: TrashEntry,
    *,
    max_miss_times: int = 0,
    max_age: timedelta | None = None,
    now: datetime | None = None,
) -> bool:
    """Check whether an entry should be evicted from the trash.

    An entry expires when it has missed more than ``max_miss_times``
    deletions (0 disables the count limit) or when it has been queued for
    longer than ``max_age`` (None disables the age limit).

    Args:
        entry: Entry to check.
        max_miss_times: Maximum tolerated failed attempts.
        max_age: Maximum time an entry may stay queued.
        now: Reference time for the age check. Defaults to the current UTC time.

    Returns:
        True if the entry is expired.
    """
    if max_miss_times != 0 and entry.miss_count > max_miss_times:
        return True
    return max_age is not None and entry.age(now) > max_age
