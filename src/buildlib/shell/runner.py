"""Command runner for executing shell commands.

This module provides the base command execution functionality used by
all specialized command modules.
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Callable, Sequence
from pathlib import Path

from loguru import logger

from buildlib.errors import CommandError

from .types import CommandResult, EnvMap


class CommandRunner:
    """Low-level command executor with consistent result handling.

    This class provides the foundation for executing shell commands with
    proper output capture, error handling, and streaming support.

    All specialized command modules (git, Docker, Rancher, Go) use
    this runner for actual command execution.
    """

    def __init__(self, project_root: Path | None = None) -> None:
        """Initialize the command runner.

        Args:
            project_root: Default working directory for commands. When None,
                         commands run in the current process directory.
        """
        self.project_root = project_root

    def _env(self, env: EnvMap | None) -> dict[str, str] | None:
        if not env:
            return None
        merged = os.environ.copy()
        merged.update(env)
        return merged

    def run(
        self,
        cmd: Sequence[str],
        *,
        cwd: Path | None = None,
        env: EnvMap | None = None,
        capture_output: bool = True,
        check: bool = False,
    ) -> CommandResult:
        """Execute a command and return a structured result.

        Args:
            cmd: Command and arguments as a sequence
            cwd: Working directory (defaults to project_root)
            env: Extra environment variables for this command
            capture_output: Whether to capture stdout/stderr
            check: Whether to raise on non-zero exit code

        Returns:
            CommandResult with success status, output, and return code

        Raises:
            CommandError: If the command cannot be started, or if check=True
                          and it exits non-zero
        """
        args = list(cmd)
        workdir = cwd or self.project_root
        logger.debug(f"run: {' '.join(args)} (cwd={workdir or os.getcwd()})")

        try:
            result = subprocess.run(
                args,
                cwd=workdir,
                env=self._env(env),
                capture_output=capture_output,
                text=True,
                errors="replace",
                check=False,
            )
        except OSError as e:
            raise CommandError(args, None, stderr=str(e)) from e

        command_result = CommandResult(
            success=result.returncode == 0,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
            returncode=result.returncode,
            cmd=args,
        )
        if check:
            raise_for_result(command_result)
        return command_result

    def run_checked(
        self,
        cmd: Sequence[str],
        *,
        cwd: Path | None = None,
        env: EnvMap | None = None,
        capture_output: bool = True,
    ) -> str:
        """Execute a command and return stdout, raising on failure.

        Raises:
            CommandError: If the command exits with non-zero code
        """
        result = self.run(
            cmd, cwd=cwd, env=env, capture_output=capture_output, check=True
        )
        return result.stdout

    def output(
        self,
        cmd: Sequence[str],
        *,
        cwd: Path | None = None,
        env: EnvMap | None = None,
    ) -> str:
        """Execute a command and return its stripped stdout."""
        return self.run_checked(cmd, cwd=cwd, env=env).strip()

    def run_bytes(
        self,
        cmd: Sequence[str],
        *,
        cwd: Path | None = None,
        env: EnvMap | None = None,
    ) -> CommandResult:
        """Execute a command and keep its stdout undecoded.

        Used for output that may carry raw path bytes, such as
        ``git status`` with ``core.quotePath=false``. ``raw_stdout`` holds
        the exact bytes; ``stdout`` and ``stderr`` are decoded as UTF-8
        with replacement for messages.

        Raises:
            CommandError: If the command cannot be started
        """
        args = list(cmd)
        workdir = cwd or self.project_root
        logger.debug(f"run: {' '.join(args)} (cwd={workdir or os.getcwd()})")

        try:
            result = subprocess.run(
                args,
                cwd=workdir,
                env=self._env(env),
                capture_output=True,
                check=False,
            )
        except OSError as e:
            raise CommandError(args, None, stderr=str(e)) from e

        raw = result.stdout or b""
        return CommandResult(
            success=result.returncode == 0,
            stdout=raw.decode("utf-8", errors="replace"),
            stderr=(result.stderr or b"").decode("utf-8", errors="replace"),
            returncode=result.returncode,
            cmd=args,
            raw_stdout=raw,
        )

    def run_verbose(
        self,
        cmd: Sequence[str],
        *,
        cwd: Path | None = None,
        env: EnvMap | None = None,
    ) -> CommandResult:
        """Execute a command with its output going straight to the terminal.

        Raises:
            CommandError: If the command exits with non-zero code
        """
        return self.run(cmd, cwd=cwd, env=env, capture_output=False, check=True)

    def run_streaming(
        self,
        cmd: Sequence[str],
        *,
        cwd: Path | None = None,
        env: EnvMap | None = None,
        on_output: Callable[[str], None] | None = None,
    ) -> CommandResult:
        """Execute a command with real-time output streaming.

        Args:
            cmd: Command and arguments as a sequence
            cwd: Working directory (defaults to project_root)
            env: Extra environment variables for this command
            on_output: Callback function called with each line of output.
                      If None, output is collected but not streamed.

        Returns:
            CommandResult with success status, collected output, and return code
        """
        args = list(cmd)
        merged_env = self._env(env) or os.environ.copy()
        merged_env["PYTHONUNBUFFERED"] = "1"
        logger.debug(f"stream: {' '.join(args)}")

        try:
            process = subprocess.Popen(
                args,
                cwd=cwd or self.project_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,  # Merge stderr into stdout
                text=True,
                bufsize=1,
                env=merged_env,
            )
        except OSError as e:
            raise CommandError(args, None, stderr=str(e)) from e

        stdout_lines: list[str] = []
        if process.stdout:
            for line in iter(process.stdout.readline, ""):
                line = line.rstrip("\n")
                if line:
                    stdout_lines.append(line)
                    if on_output:
                        on_output(line)

        process.wait()

        return CommandResult(
            success=process.returncode == 0,
            stdout="\n".join(stdout_lines),
            stderr="",  # stderr is merged into stdout
            returncode=process.returncode or 0,
            cmd=args,
        )

    def run_shell(self, script: str, *, cwd: Path | None = None) -> CommandResult:
        """Execute a bash pipeline with pipefail, capturing its output.

        Used where a command line needs pipes (``curl ... | tar ...``).
        """
        return self.run(["bash", "-o", "pipefail", "-c", script], cwd=cwd)


def raise_for_result(result: CommandResult, operation: str | None = None) -> None:
    """Raise CommandError if ``result`` reports a failure."""
    if not result.success:
        raise CommandError(
            result.cmd, result.returncode, stderr=result.stderr, operation=operation
        )
