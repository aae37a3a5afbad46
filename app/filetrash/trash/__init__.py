"""Deletion trash module.

This module provides the deferred-deletion queue, its entry model and
expiry policy, the background sweeper, the trash configuration, and the
path-extraction helper.
"""

from filetrash.trash.config import (
    TrashConfig,
    TrashConfigError,
    TrashConfigNotFoundError,
    TrashConfigParseError,
    load_trash_config,
    save_trash_config,
)
from filetrash.trash.finder import paths_in_text
from filetrash.trash.models import DeleteResult, TrashEntry, is_expired
from filetrash.trash.sweeper import PeriodicSweeper, SweepReport
from filetrash.trash.trash import DeletionTrash

__all__ = [
    "DeleteResult",
    "DeletionTrash",
    "PeriodicSweeper",
    "SweepReport",
    "TrashConfig",
    "TrashConfigError",
    "TrashConfigNotFoundError",
    "TrashConfigParseError",
    "TrashEntry",
    "is_expired",
    "load_trash_config",
    "paths_in_text",
    "save_trash_config",
]
