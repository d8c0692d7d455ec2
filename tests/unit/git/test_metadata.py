"""Tests for on-disk repository layout helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from gitshell.exceptions import GitDirNotFoundError
from gitshell.git.metadata import (
    has_worktree_metadata,
    is_bare_repository,
    read_description,
    read_gitdir_pointer,
    resolve_git_dir,
    write_description,
)


class TestBareDetection:
    """Tests for is_bare_repository."""

    def test_real_bare_repository(self, bare_repo: Path) -> None:
        """Test a repository created with --bare is detected."""
        assert is_bare_repository(bare_repo) is True

    def test_worktree_metadata_is_not_bare(self, worktree_repo: Path) -> None:
        """Test a worktree's .git directory config has bare = false."""
        assert is_bare_repository(worktree_repo / ".git") is False
        assert has_worktree_metadata(worktree_repo) is True

    @pytest.mark.parametrize(
        ("content", "expected"),
        [
            ("[core]\n\tbare = true\n", True),
            ("[core]\n\tbare = false\n", False),
            ("[core]\n\tbare = 1\n", True),
            ("[core]\n\tbare = yes\n", True),
            ("[core]\n\tbare = on\n", True),
            ("[core]\n\tbare = 0\n", False),
            ("[core]\n\tbare = off\n", False),
            ("[core]\n\trepositoryformatversion = 0\n", False),
            ("", False),
        ],
    )
    def test_config_flag(self, tmp_path: Path, content: str, expected: bool) -> None:
        """Test every spelling git reads as true marks a repository bare."""
        (tmp_path / "config").write_text(content)

        assert is_bare_repository(tmp_path) is expected

    def test_missing_config(self, tmp_path: Path) -> None:
        """Test a directory without config is not bare."""
        assert is_bare_repository(tmp_path) is False
        assert has_worktree_metadata(tmp_path) is False


class TestGitDirResolution:
    """Tests for resolve_git_dir and the pointer file."""

    def test_bare_resolves_to_root(self, tmp_path: Path) -> None:
        """Test bare repositories keep metadata at the root."""
        assert resolve_git_dir(tmp_path, bare=True) == tmp_path

    def test_dot_git_directory(self, worktree_repo: Path) -> None:
        """Test a .git directory is returned directly."""
        assert resolve_git_dir(worktree_repo, bare=False) == worktree_repo / ".git"

    def test_pointer_file_relative(self, tmp_path: Path) -> None:
        """Test a relative pointer resolves against the repository root."""
        (tmp_path / "real-git").mkdir()
        (tmp_path / ".git").write_text("gitdir: real-git\n")

        assert read_gitdir_pointer(tmp_path / ".git") == "real-git"
        assert resolve_git_dir(tmp_path, bare=False) == tmp_path / "real-git"

    def test_pointer_file_absolute(self, tmp_path: Path) -> None:
        """Test an absolute pointer is used as is."""
        target = tmp_path / "elsewhere" / "worktrees" / "wt"
        (tmp_path / "wt").mkdir()
        (tmp_path / "wt" / ".git").write_text(f"gitdir: {target}\n")

        assert resolve_git_dir(tmp_path / "wt", bare=False) == target

    def test_pointer_file_without_prefix(self, tmp_path: Path) -> None:
        """Test a .git file without a gitdir line is rejected."""
        (tmp_path / ".git").write_text("garbage\n")

        assert read_gitdir_pointer(tmp_path / ".git") is None
        with pytest.raises(GitDirNotFoundError, match="Could not find git dir"):
            resolve_git_dir(tmp_path, bare=False)

    def test_no_metadata(self, tmp_path: Path) -> None:
        """Test a directory without .git raises."""
        with pytest.raises(GitDirNotFoundError) as exc_info:
            resolve_git_dir(tmp_path, bare=False)

        assert exc_info.value.path == tmp_path


class TestDescription:
    """Tests for description file access."""

    def test_missing_description_reads_empty(self, tmp_path: Path) -> None:
        """Test an absent description file reads as ""."""
        assert read_description(tmp_path) == ""

    def test_round_trip_preserves_line_endings(self, tmp_path: Path) -> None:
        """Test text is written and read back byte for byte."""
        text = "first\r\nsecond\nthird"

        write_description(tmp_path, text)

        assert read_description(tmp_path) == text
        assert (tmp_path / "description").read_bytes() == text.encode()
