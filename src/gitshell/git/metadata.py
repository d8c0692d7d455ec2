"""On-disk repository layout helpers.

These functions only inspect or touch files; none of them spawns git.
"""

from __future__ import annotations

import configparser
from pathlib import Path

from git.config import GitConfigParser

from gitshell.constants import (
    BARE_CONFIG_NAME,
    DESCRIPTION_FILE_NAME,
    GIT_DIR_NAME,
    GIT_TRUE_VALUES,
    GITDIR_POINTER_PREFIX,
)
from gitshell.exceptions import GitDirNotFoundError
from gitshell.logging import get_logger

__all__ = [
    "has_worktree_metadata",
    "is_bare_repository",
    "read_gitdir_pointer",
    "resolve_git_dir",
    "read_description",
    "write_description",
]

logger = get_logger(__name__)


def has_worktree_metadata(path: Path) -> bool:
    """Check for a ``.git`` entry (directory or pointer file) under ``path``."""
    return (path / GIT_DIR_NAME).exists()


def _is_git_true(value: object) -> bool:
    """Interpret a config value the way git reads booleans.

    GitConfigParser converts `true` to a bool and `1` to an int, and leaves other
    spellings as strings.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    return str(value).strip().lower() in GIT_TRUE_VALUES


def is_bare_repository(path: Path) -> bool:
    """Check whether ``path`` is a bare repository.

    A bare repository keeps its ``config`` file at the root and sets
    ``core.bare`` to true in it.

    Args:
        path: Directory to inspect.

    Returns:
        True if the config file exists and marks the repository bare.
    """
    config_path = path / BARE_CONFIG_NAME
    if not config_path.is_file():
        return False

    try:
        with GitConfigParser(str(config_path), read_only=True) as reader:
            bare = reader.get_value("core", "bare", default=False)
    except (configparser.Error, OSError) as e:
        logger.debug("bare_config_unreadable", path=str(config_path), error=str(e))
        return False

    return _is_git_true(bare)


def read_gitdir_pointer(pointer_file: Path) -> str | None:
    """Read the target of a linked worktree's ``.git`` file.

    Args:
        pointer_file: The ``.git`` file holding ``gitdir: <path>``.

    Returns:
        The path after the prefix, or None if the file holds no pointer.
    """
    content = pointer_file.read_text(encoding="utf-8")
    for line in content.splitlines():
        if line.startswith(GITDIR_POINTER_PREFIX):
            target = line[len(GITDIR_POINTER_PREFIX) :].strip()
            return target or None
    return None


def resolve_git_dir(repo_path: Path, *, bare: bool) -> Path:
    """Locate the metadata directory of a repository.

    Bare repositories keep their metadata at the root. Worktrees use their
    ``.git`` directory, or for linked worktrees follow the pointer in the
    ``.git`` file, relative to the repository root.

    Args:
        repo_path: Repository root.
        bare: Whether the repository is bare.

    Returns:
        Path to the metadata directory.

    Raises:
        GitDirNotFoundError: If neither layout is found.
    """
    if bare:
        return repo_path

    dot_git = repo_path / GIT_DIR_NAME
    if dot_git.is_dir():
        return dot_git

    if dot_git.is_file():
        target = read_gitdir_pointer(dot_git)
        if target:
            return repo_path / target

    raise GitDirNotFoundError(f"Could not find git dir for {repo_path}.", path=repo_path)


def read_description(git_dir: Path) -> str:
    """Return the description file verbatim, or "" if it is absent."""
    description_file = git_dir / DESCRIPTION_FILE_NAME
    if not description_file.is_file():
        return ""
    # newline="" keeps line endings untouched in both directions
    with open(description_file, encoding="utf-8", newline="") as f:
        return f.read()


def write_description(git_dir: Path, text: str) -> None:
    """Replace the description file with ``text`` verbatim."""
    with open(git_dir / DESCRIPTION_FILE_NAME, "w", encoding="utf-8", newline="") as f:
        f.write(text)
