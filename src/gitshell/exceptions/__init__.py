"""gitshell exception hierarchy.

All exceptions can be imported from this package:
    from gitshell.exceptions import GitError, GitCommandError, ConfigError
"""

from __future__ import annotations

# Base exception
from gitshell.exceptions.base import GitShellError

# Configuration exceptions
from gitshell.exceptions.config import ConfigError

# Git-related exceptions
from gitshell.exceptions.git import (
    AlreadyARepositoryError,
    BranchExistsError,
    CheckoutConflictError,
    GitCommandError,
    GitDirNotFoundError,
    GitError,
    GitNotFoundError,
    GitTimeoutError,
    InvalidPathError,
    InvalidReferenceError,
    MergeConflictError,
    NotARepositoryError,
    NothingToCommitError,
    PushRejectedError,
)

# Runner exceptions
from gitshell.exceptions.runner import RunnerError, WorkingDirectoryError

__all__ = [
    # Base
    "GitShellError",
    # Config
    "ConfigError",
    # Git
    "AlreadyARepositoryError",
    "BranchExistsError",
    "CheckoutConflictError",
    "GitCommandError",
    "GitDirNotFoundError",
    "GitError",
    "GitNotFoundError",
    "GitTimeoutError",
    "InvalidPathError",
    "InvalidReferenceError",
    "MergeConflictError",
    "NotARepositoryError",
    "NothingToCommitError",
    "PushRejectedError",
    # Runner
    "RunnerError",
    "WorkingDirectoryError",
]
