"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest


class FakeClock:
    """Manually advanced UTC clock for age-based expiry tests."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock() -> FakeClock:
    """Clock frozen at a fixed instant until advanced."""
    return FakeClock(datetime(2026, 1, 15, 10, 0, tzinfo=UTC))


@pytest.fixture
def non_empty_dir(tmp_path: Path) -> Path:
    """Directory holding one file, so os.rmdir fails on it."""
    directory = tmp_path / "busy_dir"
    directory.mkdir()
    (directory / "blocker.txt").write_text("content")
    return directory


@pytest.fixture
def tree_root(tmp_path: Path) -> Path:
    """Nested directory tree with files at several depths."""
    root = tmp_path / "tree"
    root.mkdir()
    for directory in ("dir001", "dir002", "dir003", "dir003/dir0031", "dir003/dir0032"):
        (root / directory).mkdir()
    for file in ("dir001/file001.txt", "dir001/file002.txt", "dir003/dir0032/file003.txt"):
        (root / file).write_text("content")
    return root
