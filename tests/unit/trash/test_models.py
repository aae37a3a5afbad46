"""Unit tests for trash domain models.

Tests for DeleteResult, TrashEntry and the is_expired predicate.
"""

from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from filetrash.trash.models import DeleteResult, TrashEntry, is_expired, to_path

NOW = datetime(2026, 1, 15, 10, 0, tzinfo=UTC)


class TestDeleteResult:
    """Tests for DeleteResult enum."""

    def test_values(self) -> None:
        """DeleteResult has the three outcomes."""
        assert DeleteResult.DELETED.value == "deleted"
        assert DeleteResult.QUEUED.value == "queued"
        assert DeleteResult.FAILED.value == "failed"

    def test_is_string_enum(self) -> None:
        """DeleteResult members compare equal to their values."""
        assert DeleteResult.QUEUED == "queued"


class TestToPath:
    """Tests for to_path normalization."""

    def test_string_becomes_path(self) -> None:
        assert to_path("/tmp/a") == Path("/tmp/a")

    def test_none_rejected(self) -> None:
        with pytest.raises(TypeError):
            to_path(None)  # type: ignore[arg-type]

    @pytest.mark.parametrize("path", ["", Path(""), Path(".")])
    def test_empty_rejected(self, path: str | Path) -> None:
        """Empty paths are rejected, including Path("") which reads as '.'."""
        with pytest.raises(ValueError, match="empty"):
            to_path(path)


class TestTrashEntry:
    """Tests for TrashEntry dataclass."""

    def test_defaults(self) -> None:
        """A new entry has no misses and a UTC enqueue time."""
        entry = TrashEntry(Path("/tmp/a"))

        assert entry.miss_count == 0
        assert entry.enqueued_at.tzinfo is not None

    def test_string_path_is_converted(self) -> None:
        """String paths are stored as Path."""
        entry = TrashEntry("/tmp/a")  # type: ignore[arg-type]

        assert entry.path == Path("/tmp/a")

    def test_equality_by_path_only(self) -> None:
        """Entries with the same path are equal whatever their state."""
        first = TrashEntry(Path("/tmp/a"), miss_count=0, enqueued_at=NOW)
        second = TrashEntry(Path("/tmp/a"), miss_count=5, enqueued_at=NOW + timedelta(hours=1))

        assert first == second
        assert hash(first) == hash(second)
        assert len({first, second}) == 1

    def test_different_paths_not_equal(self) -> None:
        assert TrashEntry(Path("/tmp/a")) != TrashEntry(Path("/tmp/b"))

    def test_add_miss(self) -> None:
        """add_miss increments and returns the miss count."""
        entry = TrashEntry(Path("/tmp/a"))

        assert entry.add_miss() == 1
        assert entry.add_miss() == 2
        assert entry.miss_count == 2

    def test_negative_miss_count_rejected(self) -> None:
        with pytest.raises(ValueError, match="negative"):
            TrashEntry(Path("/tmp/a"), miss_count=-1)

    def test_empty_path_rejected(self) -> None:
        with pytest.raises(ValueError, match="empty"):
            TrashEntry(Path(""))

    def test_enqueued_at_is_fixed(self) -> None:
        """enqueued_at cannot be reassigned while miss_count can change."""
        entry = TrashEntry(Path("/tmp/a"), enqueued_at=NOW)

        with pytest.raises(AttributeError, match="enqueued_at"):
            entry.enqueued_at = NOW + timedelta(hours=1)

        entry.miss_count = 3
        assert entry.enqueued_at == NOW
        assert entry.miss_count == 3

    def test_age(self) -> None:
        entry = TrashEntry(Path("/tmp/a"), enqueued_at=NOW)

        assert entry.age(NOW + timedelta(seconds=30)) == timedelta(seconds=30)


class TestIsExpired:
    """Tests for the is_expired predicate."""

    def test_no_limits_never_expires(self) -> None:
        """With both limits disabled an entry never expires."""
        entry = TrashEntry(Path("/tmp/a"), miss_count=1000, enqueued_at=NOW)

        assert not is_expired(entry, now=NOW + timedelta(days=365))

    def test_miss_count_limit_is_exclusive(self) -> None:
        """An entry expires only once misses exceed max_miss_times."""
        entry = TrashEntry(Path("/tmp/a"), miss_count=3, enqueued_at=NOW)

        assert not is_expired(entry, max_miss_times=3, now=NOW)
        entry.add_miss()
        assert is_expired(entry, max_miss_times=3, now=NOW)

    def test_age_limit_is_exclusive(self) -> None:
        """An entry expires only once its age exceeds max_age."""
        entry = TrashEntry(Path("/tmp/a"), enqueued_at=NOW)
        max_age = timedelta(seconds=10)

        assert not is_expired(entry, max_age=max_age, now=NOW + max_age)
        assert is_expired(entry, max_age=max_age, now=NOW + max_age + timedelta(seconds=1))

    def test_either_limit_expires(self) -> None:
        """Age expiry applies even when the miss count is within limits."""
        entry = TrashEntry(Path("/tmp/a"), miss_count=0, enqueued_at=NOW)

        assert is_expired(
            entry,
            max_miss_times=5,
            max_age=timedelta(seconds=1),
            now=NOW + timedelta(seconds=2),
        )
