"""Exception hierarchy for buildlib.

Every error raised by the library derives from ``BuildLibError`` and carries
a short ``message`` plus optional ``details`` for display in the CLI.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class BuildLibError(Exception):
    """Base class for all buildlib failures."""

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(message)


class CommandError(BuildLibError):
    """Raised when an external command cannot be spawned or exits non-zero.

    Attributes:
        cmd: The command line that was executed
        returncode: Exit status, or None if the process never started
        stderr: Captured standard error (or the spawn failure text)
        operation: Short name of the operation that ran the command
    """

    def __init__(
        self,
        cmd: Sequence[str],
        returncode: int | None,
        stderr: str = "",
        operation: str | None = None,
    ):
        self.cmd = list(cmd)
        self.returncode = returncode
        self.stderr = stderr
        self.operation = operation or " ".join(self.cmd)

        if returncode is None:
            message = f"{self.operation}: failed to start"
        else:
            message = f"{self.operation}: exit status {returncode}"
        stderr_text = stderr.strip()
        if stderr_text:
            message = f"{message} err: [{stderr_text}]"
        super().__init__(message, details=stderr_text or None)


class GitError(BuildLibError):
    """Raised when git produces output buildlib cannot interpret."""


class NotAGitRepositoryError(GitError):
    """Raised when a directory is not inside a git work tree."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        super().__init__(f"not a git repo: {self.path}")


class StatusDecodeError(GitError, ValueError):
    """Raised when porcelain status output contains a malformed counter."""


class StatusCheckFailed(BuildLibError):
    """Raised when a checkout is not clean or not in sync with its upstream."""

    def __init__(self, path: str | Path, reason: str, details: str | None = None):
        self.path = path
        self.reason = reason
        super().__init__(f"{reason}: [{path}]", details=details)


class PromptAborted(BuildLibError):
    """Raised when the user cancels an interactive prompt."""
