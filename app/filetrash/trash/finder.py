"""Extraction of filesystem paths from free text.

Splits text on spaces and keeps the tokens that look like a path for
the current platform. Useful to pull paths out of error messages before
handing them to the trash.
"""

import re
import sys

# A POSIX path is absolute, or holds at least two separators
POSIX_PATH_PATTERN = re.compile(r"(/.+)|(.*/.*/.*)")

# A Windows path has a drive letter, is a UNC share, or holds at least two separators
WINDOWS_PATH_PATTERN = re.compile(r"([a-zA-Z]:[\\].*)|([\\][\\].+)|(.*[\\].*[\\].*)")

_WINDOWS_PLATFORMS: tuple[str, ...] = ("win32", "cygwin")


def is_posix_path(token: str) -> bool:
    """Check if a whole token looks like a POSIX path."""
    return POSIX_PATH_PATTERN.fullmatch(token) is not None


def is_windows_path(token: str) -> bool:
    """Check if a whole token looks like a Windows path."""
    return WINDOWS_PATH_PATTERN.fullmatch(token) is not None


def paths_in_text(text: str | None, *, platform: str | None = None) -> list[str]:
    """Find the tokens of a text that look like filesystem paths.

    Tokens are separated by single spaces and kept verbatim, including any
    surrounding punctuation.

    Args:
        text: Free text to scan.
        platform: Platform identifier as in ``sys.platform``. Defaults to
            the running platform.

    Returns:
        Path-like tokens in order of appearance. Empty for blank text.
    """
    if text is None or not text.strip():
        return []

    platform = platform or sys.platform
    matches = is_windows_path if platform.startswith(_WINDOWS_PLATFORMS) else is_posix_path

    return [token for token in text.split(" ") if token and matches(token)]
