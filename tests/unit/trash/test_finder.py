"""Unit tests for path extraction from free text.

Tests POSIX and Windows path classification and token splitting.
"""

import sys

import pytest
from filetrash.trash.finder import is_posix_path, is_windows_path, paths_in_text


class TestPathsInTextPosix:
    """Tests for paths_in_text with POSIX path syntax."""

    def test_finds_paths_in_messages(self) -> None:
        """Absolute paths and paths with two separators are found verbatim."""
        texts = [
            "My personal directory is /root anyway",
            "No Files found in: /root/documents",
            "Error: root/documents not found",
            "File [root/docum_123/aa!!/aaa.txt] does not exists",
            "Failed replace /root/${name} with aaa/bbb",
        ]

        found = [p for t in texts for p in paths_in_text(t, platform="linux")]

        assert found == [
            "/root",
            "/root/documents",
            "[root/docum_123/aa!!/aaa.txt]",
            "/root/${name}",
        ]

    def test_darwin_uses_posix_syntax(self) -> None:
        assert paths_in_text("see /Users/me", platform="darwin") == ["/Users/me"]

    def test_windows_paths_ignored(self) -> None:
        assert paths_in_text(r"open c:\main\documents", platform="linux") == []

    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_blank_text(self, text: str | None) -> None:
        """Blank text yields no paths."""
        assert paths_in_text(text, platform="linux") == []

    def test_repeated_spaces_are_skipped(self) -> None:
        """Empty tokens between consecutive spaces are dropped."""
        assert paths_in_text("a  /tmp/x   b", platform="linux") == ["/tmp/x"]

    def test_defaults_to_running_platform(self) -> None:
        """Without a platform argument sys.platform decides the syntax."""
        expected = paths_in_text("x /tmp/y", platform=sys.platform)

        assert paths_in_text("x /tmp/y") == expected


class TestPathsInTextWindows:
    """Tests for paths_in_text with Windows path syntax."""

    def test_finds_windows_paths(self) -> None:
        """Drive, UNC and multi-separator paths are found."""
        texts = [
            "My personal directory is c:\\ anyway",
            "No Files found in: e:\\main\\documents",
            "Error: main\\documents not found",
            "File [c:\\main\\docum_123\\aa!!\\aaa.txt] does not exists",
            "Failed replace \\\\root\\${name} with aaa\\bbb",
        ]

        found = [p for t in texts for p in paths_in_text(t, platform="win32")]

        assert found == [
            "c:\\",
            "e:\\main\\documents",
            "[c:\\main\\docum_123\\aa!!\\aaa.txt]",
            "\\\\root\\${name}",
        ]

    def test_cygwin_uses_windows_syntax(self) -> None:
        assert paths_in_text("at d:\\data", platform="cygwin") == ["d:\\data"]


class TestClassifiers:
    """Tests for the token classifiers."""

    @pytest.mark.parametrize(
        ("token", "expected"),
        [
            ("/", False),
            ("/a", True),
            ("a/b", False),
            ("a/b/c", True),
            ("plain", False),
        ],
    )
    def test_is_posix_path(self, token: str, expected: bool) -> None:
        assert is_posix_path(token) is expected

    @pytest.mark.parametrize(
        ("token", "expected"),
        [
            ("c:\\", True),
            ("\\\\server", True),
            ("a\\b", False),
            ("a\\b\\c", True),
            ("c:/x", False),
        ],
    )
    def test_is_windows_path(self, token: str, expected: bool) -> None:
        assert is_windows_path(token) is expected
