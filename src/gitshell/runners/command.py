"""Command runner for blocking subprocess execution.

This module provides the CommandRunner class for executing external commands
with timeout handling, environment merging, optional retries, and proper
error management. Commands are always argument lists; nothing is ever handed
to a shell.
"""

from __future__ import annotations

import os
import subprocess
import time
from pathlib import Path
from typing import TYPE_CHECKING

from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from gitshell.constants import COMMAND_NOT_FOUND_EXIT_CODE, PERMISSION_DENIED_EXIT_CODE
from gitshell.exceptions import WorkingDirectoryError
from gitshell.runners.models import CommandResult

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

__all__ = ["CommandRunner", "RetryableCommandError"]

#: Fragments of stderr that mark a failure as transient
RETRYABLE_ERROR_PATTERNS: tuple[str, ...] = (
    "connection reset",
    "connection refused",
    "connection timed out",
    "could not resolve host",
    "temporary failure",
    "network is unreachable",
    "rate limit",
)


class RetryableCommandError(Exception):
    """Exception raised when a command fails with a retryable error.

    Used internally by CommandRunner to signal that a command execution
    failed but should be retried. It wraps the CommandResult for access
    after retry exhaustion.
    """

    def __init__(self, result: CommandResult, message: str = "Command failed") -> None:
        """Initialize the RetryableCommandError.

        Args:
            result: The CommandResult from the failed command execution.
            message: Human-readable error message.
        """
        super().__init__(message)
        self.result = result


def _decode(data: bytes | str | None) -> str:
    if data is None:
        return ""
    if isinstance(data, str):
        return data
    return data.decode("utf-8", errors="replace")


class CommandRunner:
    """Execute commands safely with timeout and environment control.

    Provides blocking command execution with:
    - Timeout handling (the child is killed when the timeout expires)
    - Working directory validation
    - Environment variable inheritance and override
    - Duration measurement
    - Optional retries with exponential backoff for transient failures

    Attributes:
        cwd: Working directory for command execution.
        timeout: Default timeout in seconds (None for no timeout).
        env: Additional environment variables to merge with parent env.

    Example:
        ```python
        runner = CommandRunner(cwd=Path("/project"), timeout=30.0)
        result = runner.run(["git", "status"])
        if result.success:
            print(result.stdout)
        ```
    """

    def __init__(
        self,
        cwd: Path | None = None,
        timeout: float | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the CommandRunner.

        Args:
            cwd: Working directory for commands. If None, uses current directory.
            timeout: Default timeout in seconds. Use None for no timeout.
            env: Additional environment variables to merge with os.environ.
        """
        self._cwd = cwd
        self._timeout = timeout
        self._extra_env = dict(env or {})

    @property
    def cwd(self) -> Path | None:
        """Working directory for command execution."""
        return self._cwd

    @property
    def timeout(self) -> float | None:
        """Default timeout in seconds."""
        return self._timeout

    def _validate_cwd(self, cwd: Path | None) -> None:
        """Validate working directory exists.

        Raises:
            WorkingDirectoryError: If directory does not exist.
        """
        if cwd is not None and not cwd.is_dir():
            raise WorkingDirectoryError(
                f"Working directory does not exist: {cwd}",
                path=cwd,
            )

    def _build_env(self, extra_env: Mapping[str, str] | None = None) -> dict[str, str]:
        """Build environment by merging parent env with overrides."""
        env = os.environ.copy()
        env.update(self._extra_env)
        if extra_env:
            env.update(extra_env)
        return env

    def is_retryable(self, result: CommandResult) -> bool:
        """Determine if a command failure should be retried.

        Args:
            result: The result of a command execution.

        Returns:
            True if the command should be retried, False otherwise.
        """
        if result.timed_out:
            return True
        stderr_lower = result.stderr.lower()
        return any(pattern in stderr_lower for pattern in RETRYABLE_ERROR_PATTERNS)

    def run(
        self,
        command: Sequence[str],
        *,
        cwd: Path | None = None,
        timeout: float | None = None,
        env: Mapping[str, str] | None = None,
        max_retries: int = 0,
        retry_delay: float = 1.0,
    ) -> CommandResult:
        """Execute a command and return the result.

        A non-zero exit status is not an error at this level; callers
        inspect ``CommandResult.success``.

        Args:
            command: Command and arguments as a sequence (no shell expansion).
            cwd: Override working directory for this command.
            timeout: Override timeout. Use 0 or negative for no timeout.
            env: Additional environment variables for this command.
            max_retries: Maximum number of retry attempts (default 0 = no retries).
            retry_delay: Initial delay between retries in seconds (default 1.0).
                Delay doubles on each retry (exponential backoff).

        Returns:
            CommandResult with returncode, stdout, stderr, duration_ms, timed_out.

        Raises:
            WorkingDirectoryError: If working directory does not exist.
            ValueError: If the command is empty.
        """
        if not command:
            raise ValueError("Command must not be empty")

        effective_cwd = cwd if cwd is not None else self._cwd
        self._validate_cwd(effective_cwd)

        effective_timeout = timeout if timeout is not None else self._timeout
        if effective_timeout is not None and effective_timeout <= 0:
            effective_timeout = None

        effective_env = self._build_env(env)

        # stop_after_attempt(1) = no retries, (2) = 1 retry, etc.
        last_result: CommandResult | None = None

        try:
            for attempt in Retrying(
                stop=stop_after_attempt(max_retries + 1),
                wait=wait_exponential(multiplier=retry_delay, min=retry_delay, max=10),
                retry=retry_if_exception_type(RetryableCommandError),
                reraise=True,
            ):
                with attempt:
                    result = self._execute_once(
                        command, effective_cwd, effective_timeout, effective_env
                    )
                    last_result = result

                    if result.success or not self.is_retryable(result):
                        return result

                    raise RetryableCommandError(result, "Command failed, retrying...")
        except RetryableCommandError as e:
            # Retries exhausted; hand back the final failed attempt
            return e.result

        assert last_result is not None
        return last_result

    def _execute_once(
        self,
        command: Sequence[str],
        cwd: Path | None,
        timeout: float | None,
        env: dict[str, str],
    ) -> CommandResult:
        """Execute a command once without retries."""
        start_time = time.monotonic()
        timed_out = False
        returncode = 0
        stdout_str = ""
        stderr_str = ""

        try:
            completed = subprocess.run(  # noqa: S603
                list(command),
                cwd=cwd,
                env=env,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                timeout=timeout,
                check=False,
            )
            returncode = completed.returncode
            stdout_str = _decode(completed.stdout)
            stderr_str = _decode(completed.stderr)
        except subprocess.TimeoutExpired as e:
            # subprocess.run has already killed and reaped the child
            timed_out = True
            returncode = -1
            stdout_str = _decode(e.stdout)
            stderr_str = _decode(e.stderr)
        except FileNotFoundError:
            returncode = COMMAND_NOT_FOUND_EXIT_CODE
            stderr_str = f"Command not found: {command[0]}"
        except PermissionError:
            returncode = PERMISSION_DENIED_EXIT_CODE
            stderr_str = f"Permission denied: {command[0]}"

        duration_ms = int((time.monotonic() - start_time) * 1000)

        return CommandResult(
            command=tuple(command),
            returncode=returncode,
            stdout=stdout_str,
            stderr=stderr_str,
            duration_ms=duration_ms,
            timed_out=timed_out,
        )
