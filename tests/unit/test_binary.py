"""Tests for the GitBinary locator."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

from gitshell.binary import GitBinary, default_git_binary
from gitshell.config import GitShellConfig


class TestDefaultRule:
    """Tests for the default location rule."""

    def test_prefers_usr_bin_git(self) -> None:
        """Test /usr/bin/git is used when present."""
        with patch.object(Path, "exists", return_value=True):
            assert default_git_binary() == "/usr/bin/git"

    def test_falls_back_to_path_lookup(self) -> None:
        """Test the bare name is used when /usr/bin/git is missing."""
        with patch.object(Path, "exists", return_value=False):
            assert default_git_binary() == "git"


class TestGitBinary:
    """Tests for GitBinary accessors."""

    def test_explicit_path(self) -> None:
        """Test an explicit path is kept as given."""
        assert GitBinary("/opt/git/bin/git").resolve() == "/opt/git/bin/git"

    def test_override(self) -> None:
        """Test override replaces the resolved value."""
        binary = GitBinary("/usr/bin/git")

        binary.override("/usr/local/bin/git")

        assert binary.resolve() == "/usr/local/bin/git"

    def test_windows_mode(self) -> None:
        """Test windows_mode switches to the bare name."""
        binary = GitBinary("/usr/bin/git")

        binary.windows_mode()

        assert binary.resolve() == "git"

    def test_locators_are_independent(self) -> None:
        """Test overriding one locator leaves others untouched."""
        first = GitBinary("git")
        second = GitBinary("git")

        first.override("/opt/git")

        assert second.resolve() == "git"
        assert first != second

    def test_from_config(self, clean_env: None) -> None:
        """Test the config override is honoured."""
        assert GitBinary.from_config(GitShellConfig(binary="/opt/git")) == GitBinary("/opt/git")


class TestIsRunnable:
    """Tests for the spawn check."""

    def test_real_git_is_runnable(self) -> None:
        """Test the default binary can be spawned."""
        assert GitBinary().is_runnable() is True

    def test_missing_binary_is_not_runnable(self, tmp_path: Path) -> None:
        """Test a nonexistent executable reports False."""
        assert GitBinary(str(tmp_path / "no-git")).is_runnable() is False

    def test_non_zero_exit_still_runnable(self) -> None:
        """Test any status except 127 counts as runnable."""
        assert GitBinary("false").is_runnable() is True
