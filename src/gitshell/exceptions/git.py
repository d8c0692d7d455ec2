from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from gitshell.exceptions.base import GitShellError


class GitError(GitShellError):
    """Exception for git operation failures.

    Attributes:
        message: Human-readable error message.
        operation: Git operation that failed (e.g., "commit", "clone").
        recoverable: True if error might be recoverable.
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        recoverable: bool = False,
    ) -> None:
        """Initialize the GitError.

        Args:
            message: Human-readable error message.
            operation: Git operation that failed.
            recoverable: True if error might be recoverable.
        """
        self.operation = operation
        self.recoverable = recoverable
        super().__init__(message)


class GitNotFoundError(GitError):
    """Exception raised when the git executable cannot be spawned.

    Attributes:
        message: Human-readable error message.
        binary: The executable path or name that was tried.
    """

    def __init__(
        self,
        message: str = "Git CLI not found",
        binary: str | None = None,
    ) -> None:
        """Initialize the GitNotFoundError.

        Args:
            message: Human-readable error message.
            binary: The executable path or name that was tried.
        """
        self.binary = binary
        super().__init__(message, operation="git_check", recoverable=False)


class InvalidPathError(GitError):
    """Exception raised when a repository path neither exists nor is creatable.

    Attributes:
        message: Human-readable error message.
        path: The offending path.
    """

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        """Initialize the InvalidPathError.

        Args:
            message: Human-readable error message.
            path: The offending path.
        """
        self.path = path
        super().__init__(message, operation="repo_check", recoverable=False)


class NotARepositoryError(GitError):
    """Exception raised when a directory holds no recognizable repository.

    Attributes:
        message: Human-readable error message.
        path: Directory that is not a repo.
    """

    def __init__(
        self,
        message: str,
        path: Path | str | None = None,
    ) -> None:
        """Initialize the NotARepositoryError.

        Args:
            message: Human-readable error message.
            path: Directory that is not a repo.
        """
        self.path = path
        super().__init__(message, operation="repo_check", recoverable=False)


class AlreadyARepositoryError(GitError):
    """Exception raised when creating a repository on top of an existing one.

    Attributes:
        message: Human-readable error message.
        path: Directory that already holds a repository.
    """

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        """Initialize the AlreadyARepositoryError.

        Args:
            message: Human-readable error message.
            path: Directory that already holds a repository.
        """
        self.path = path
        super().__init__(message, operation="create", recoverable=False)


class InvalidReferenceError(GitError):
    """Exception raised when a clone reference is not itself a repository.

    Attributes:
        message: Human-readable error message.
        reference: The rejected reference path.
    """

    def __init__(self, message: str, reference: Path | str | None = None) -> None:
        """Initialize the InvalidReferenceError.

        Args:
            message: Human-readable error message.
            reference: The rejected reference path.
        """
        self.reference = reference
        super().__init__(message, operation="clone", recoverable=False)


class GitDirNotFoundError(GitError):
    """Exception raised when the metadata directory of a worktree is missing.

    Attributes:
        message: Human-readable error message.
        path: Repository root that was inspected.
    """

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        """Initialize the GitDirNotFoundError.

        Args:
            message: Human-readable error message.
            path: Repository root that was inspected.
        """
        self.path = path
        super().__init__(message, operation="git_dir", recoverable=False)


class GitCommandError(GitError):
    """Exception raised when a git subprocess exits with a non-zero status.

    The message is the captured standard error followed by the captured
    standard output, separated by a newline.

    Attributes:
        message: Human-readable error message.
        command: The argument list that was executed.
        returncode: Process exit status.
        stdout: Captured standard output.
        stderr: Captured standard error.
    """

    def __init__(
        self,
        message: str,
        command: Sequence[str] = (),
        returncode: int | None = None,
        stdout: str = "",
        stderr: str = "",
        operation: str | None = None,
        recoverable: bool = False,
    ) -> None:
        """Initialize the GitCommandError.

        Args:
            message: Human-readable error message.
            command: The argument list that was executed.
            returncode: Process exit status.
            stdout: Captured standard output.
            stderr: Captured standard error.
            operation: Git subcommand that failed.
            recoverable: True if error might be recoverable.
        """
        self.command = tuple(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(message, operation=operation, recoverable=recoverable)


class GitTimeoutError(GitCommandError):
    """Exception raised when a git subprocess exceeds its timeout.

    Attributes:
        timeout_seconds: The timeout that was exceeded.
    """

    def __init__(
        self,
        message: str,
        command: Sequence[str] = (),
        timeout_seconds: float | None = None,
        operation: str | None = None,
    ) -> None:
        """Initialize the GitTimeoutError.

        Args:
            message: Human-readable error message.
            command: The argument list that timed out.
            timeout_seconds: The timeout value that was exceeded.
            operation: Git subcommand that timed out.
        """
        self.timeout_seconds = timeout_seconds
        super().__init__(
            message,
            command=command,
            returncode=-1,
            operation=operation,
            recoverable=True,
        )


class NothingToCommitError(GitCommandError):
    """Exception raised when a commit finds no changes to record."""


class BranchExistsError(GitCommandError):
    """Exception raised when creating a branch that already exists."""


class CheckoutConflictError(GitCommandError):
    """Exception raised when checkout would overwrite uncommitted changes."""


class PushRejectedError(GitCommandError):
    """Exception raised when the remote rejects a push."""


class MergeConflictError(GitCommandError):
    """Exception raised when a merge or pull stops on conflicts."""
