"""Location of the git executable.

A ``GitBinary`` is a small mutable value handed to each repository handle,
so two handles can point at different executables without interfering.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from gitshell.constants import (
    COMMAND_NOT_FOUND_EXIT_CODE,
    DEFAULT_GIT_PATH,
    FALLBACK_GIT_COMMAND,
    RUNNABLE_CHECK_TIMEOUT,
)
from gitshell.logging import get_logger
from gitshell.runners.command import CommandRunner

if TYPE_CHECKING:
    from gitshell.config import GitShellConfig

__all__ = ["GitBinary", "default_git_binary"]

logger = get_logger(__name__)


def default_git_binary() -> str:
    """Apply the default location rule.

    Returns:
        DEFAULT_GIT_PATH if it exists on disk, otherwise the bare command
        name, left for PATH lookup.
    """
    if Path(DEFAULT_GIT_PATH).exists():
        return DEFAULT_GIT_PATH
    return FALLBACK_GIT_COMMAND


class GitBinary:
    """Path or name of the git executable.

    The default rule is applied once, when the locator is created. Nothing
    checks that the resolved value can actually be run until
    ``is_runnable()`` is called.

    Example:
        ```python
        binary = GitBinary()
        binary.override("/opt/git/bin/git")
        repo = GitRepository("/srv/project", binary=binary)
        ```
    """

    def __init__(self, path: str | None = None) -> None:
        """Initialize the GitBinary.

        Args:
            path: Explicit executable. If None, applies the default rule.
        """
        self._path = path if path is not None else default_git_binary()

    @classmethod
    def from_config(cls, config: GitShellConfig) -> GitBinary:
        """Build a locator honouring ``GitShellConfig.binary``."""
        return cls(config.binary)

    def resolve(self) -> str:
        """Return the executable path or name."""
        return self._path

    def override(self, path: str) -> None:
        """Point the locator at another executable."""
        logger.debug("git_binary_overridden", old=self._path, new=path)
        self._path = path

    def windows_mode(self) -> None:
        """Use the bare ``git`` name, as on Windows where /usr/bin is absent."""
        self.override(FALLBACK_GIT_COMMAND)

    def is_runnable(self, timeout: float = RUNNABLE_CHECK_TIMEOUT) -> bool:
        """Check whether the executable can be spawned.

        Runs the binary with no arguments. git itself exits non-zero when
        called bare, so only the "command not found" status counts as
        failure.

        Args:
            timeout: Seconds to wait for the spawned process.

        Returns:
            False if the exit status is 127, True otherwise.
        """
        result = CommandRunner(timeout=timeout).run([self._path])
        return result.returncode != COMMAND_NOT_FOUND_EXIT_CODE

    def __repr__(self) -> str:
        return f"GitBinary({self._path!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GitBinary):
            return NotImplemented
        return self._path == other._path

    __hash__ = None  # type: ignore[assignment]
