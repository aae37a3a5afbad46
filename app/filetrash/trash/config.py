"""Trash configuration and settings.

This module provides the configuration model and I/O functions for the
deletion trash policy: threshold sweeps, miss-count and age expiry, and
the background sweep interval.

Configuration is stored in ~/.config/filetrash/trash.toml
"""

import os
import tomllib
from datetime import timedelta
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from filetrash.core.paths import get_trash_config_path

DEFAULT_SWEEP_INTERVAL_SECONDS = 60.0


class TrashConfig(BaseModel):
    """Configuration for a DeletionTrash.

    Attributes:
        empty_threshold: Queue size above which enqueue triggers a sweep (0 = never).
        max_miss_times: Failed attempts tolerated before eviction (0 = unlimited).
        max_age_seconds: Seconds an entry may stay queued (None = unlimited).
        sweep_interval_seconds: Seconds between background sweeps.
    """

    model_config = ConfigDict(extra="forbid")

    empty_threshold: Annotated[
        int,
        Field(ge=0, description="Queue size that triggers a sweep (0 = never)"),
    ] = 0
    max_miss_times: Annotated[
        int,
        Field(ge=0, description="Failed attempts before eviction (0 = unlimited)"),
    ] = 0
    max_age_seconds: Annotated[
        float | None,
        Field(gt=0, description="Maximum queued age in seconds (None = unlimited)"),
    ] = None
    sweep_interval_seconds: Annotated[
        float,
        Field(gt=0, description="Seconds between background sweeps"),
    ] = DEFAULT_SWEEP_INTERVAL_SECONDS

    @property
    def max_age(self) -> timedelta | None:
        """Maximum queued age as a timedelta, None if unlimited."""
        if self.max_age_seconds is None:
            return None
        return timedelta(seconds=self.max_age_seconds)


class TrashConfigError(Exception):
    """Base exception for trash configuration errors."""


class TrashConfigNotFoundError(TrashConfigError):
    """Raised when the trash config file is not found."""


class TrashConfigParseError(TrashConfigError):
    """Raised when the trash config file cannot be parsed."""


def load_trash_config(path: Path | None = None) -> TrashConfig:
    """Load trash configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated TrashConfig object.

    Raises:
        TrashConfigNotFoundError: If the config file doesn't exist.
        TrashConfigParseError: If the TOML syntax is invalid.
        TrashConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_trash_config_path()

    if not config_path.exists():
        raise TrashConfigNotFoundError(f"Trash config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise TrashConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise TrashConfigError(f"Failed to read trash config: {e}") from e

    try:
        return TrashConfig.model_validate(data)
    except ValidationError as e:
        raise TrashConfigError(f"Invalid trash config content: {e}") from e


def save_trash_config(config: TrashConfig, path: Path | None = None) -> Path:
    """Save trash configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The TrashConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        TrashConfigError: If the file cannot be written.
    """
    config_path = path or get_trash_config_path()

    # TOML has no null, so unset fields are left out
    data = config.model_dump(exclude_none=True)

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise TrashConfigError(f"Failed to write trash config: {e}") from e

    return config_path


def get_default_config() -> TrashConfig:
    """Create a default TrashConfig.

    Returns:
        TrashConfig with default settings.
    """
    return TrashConfig()
