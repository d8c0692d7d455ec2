"""Subprocess execution module.

For git operations, use gitshell.git instead:
    - gitshell.git.GitRepository (sync) or gitshell.git.AsyncGitRepository (async)
"""

from __future__ import annotations

from gitshell.runners.command import CommandRunner, RetryableCommandError
from gitshell.runners.models import CommandResult

__all__ = [
    "CommandResult",
    "CommandRunner",
    "RetryableCommandError",
]
