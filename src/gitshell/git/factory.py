"""Module-level shortcuts for opening and creating repositories.

Each function builds a ``GitRepository``; they exist so callers can write
``open_repo(path)`` without touching constructor flags.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from gitshell.binary import GitBinary
from gitshell.config import GitShellConfig
from gitshell.git.repository import GitRepository

__all__ = [
    "clone_remote_repo",
    "create_repo",
    "is_repo",
    "open_repo",
]


def open_repo(
    path: Path | str,
    *,
    binary: GitBinary | None = None,
    config: GitShellConfig | None = None,
) -> GitRepository:
    """Open an existing repository.

    Raises:
        InvalidPathError: If the path does not exist or is not a directory.
        NotARepositoryError: If the directory holds no repository.
    """
    return GitRepository(path, binary=binary, config=config)


def create_repo(
    path: Path | str,
    source: Path | str | None = None,
    *,
    binary: GitBinary | None = None,
    config: GitShellConfig | None = None,
) -> GitRepository:
    """Create a repository with ``git init``, or by cloning a local ``source``."""
    return GitRepository.create_new(path, source, binary=binary, config=config)


def clone_remote_repo(
    path: Path | str,
    remote: str,
    reference: Path | str | None = None,
    *,
    binary: GitBinary | None = None,
    config: GitShellConfig | None = None,
) -> GitRepository:
    """Clone a remote repository into ``path``.

    Args:
        path: Location of the new repository.
        remote: URL of the remote.
        reference: Local repository to borrow objects from.

    Raises:
        InvalidReferenceError: If ``reference`` is not a repository.
        GitCommandError: If the clone fails.
    """
    return GitRepository.create_new(
        path,
        remote,
        remote_source=True,
        reference=reference,
        binary=binary,
        config=config,
    )


def is_repo(obj: Any) -> bool:
    """Check whether ``obj`` is a repository handle."""
    return isinstance(obj, GitRepository)
