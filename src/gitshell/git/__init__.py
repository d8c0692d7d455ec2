"""Git operations package driving the git executable.

Usage:
    ```python
    # Sync usage
    from gitshell.git import GitRepository, open_repo

    repo = open_repo("/path/to/repo")
    print(repo.status())
    repo.commit("feat: add feature")
    repo.push()

    # Async usage
    from gitshell.git import AsyncGitRepository

    repo = AsyncGitRepository("/path/to/repo")
    await repo.commit("feat: add feature")
    await repo.push()
    ```
"""

from __future__ import annotations

from gitshell.git.factory import clone_remote_repo, create_repo, is_repo, open_repo
from gitshell.git.repository import (
    AsyncGitRepository,
    GitRepository,
    is_recoverable_error,
)

__all__ = [
    "AsyncGitRepository",
    "GitRepository",
    "clone_remote_repo",
    "create_repo",
    "is_recoverable_error",
    "is_repo",
    "open_repo",
]
