"""Data types shared by the shell command modules."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

__all__ = [
    "CommandResult",
    "EnvMap",
    "Step",
]

# Extra environment variables layered over os.environ for one command.
EnvMap = Mapping[str, str]

# A deferred unit of work in a chain. A returned CommandResult is checked.
Step = Callable[[], object]


@dataclass
class CommandResult:
    """Result of a command execution."""

    success: bool
    stdout: str = ""
    stderr: str = ""
    returncode: int = 0
    cmd: list[str] = field(default_factory=list)
    # Undecoded stdout, only filled by CommandRunner.run_bytes.
    raw_stdout: bytes = b""
