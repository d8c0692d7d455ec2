"""Data models for subprocess runners.

All models use frozen dataclasses with slots for memory efficiency and
immutability.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "CommandResult",
]


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result of executing a single command.

    Attributes:
        command: The argument list that was executed.
        returncode: Exit code from the command (0 = success).
        stdout: Standard output captured from the command.
        stderr: Standard error captured from the command.
        duration_ms: Execution time in milliseconds.
        timed_out: True if the command exceeded its timeout limit.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str
    duration_ms: int
    timed_out: bool = False

    @property
    def success(self) -> bool:
        """True if command completed successfully (returncode 0, no timeout)."""
        return self.returncode == 0 and not self.timed_out

    @property
    def output(self) -> str:
        """Combined stderr and stdout, stderr first."""
        if self.stderr:
            return f"{self.stderr}\n{self.stdout}" if self.stdout else self.stderr
        return self.stdout
