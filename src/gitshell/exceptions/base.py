from __future__ import annotations


class GitShellError(Exception):
    """Base exception class for all gitshell errors.

    This is the root of the gitshell exception hierarchy. Every error raised
    by the library inherits from this class, so callers can catch library
    failures in one place while letting system exceptions propagate.

    Attributes:
        message: Human-readable error message describing what went wrong.

    Example:
        ```python
        try:
            repo = GitRepository("/srv/project")
            repo.commit("Update docs")
        except GitShellError as e:
            logger.error("git_failed", error=e.message)
        ```
    """

    def __init__(self, message: str) -> None:
        """Initialize the GitShellError.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)
