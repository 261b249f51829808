"""CLI context and dependency container."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import click
import typer

from buildlib.cli.console import CLIConsole, console
from buildlib.config import BuildConfig, load_config
from buildlib.shell import ShellCommands


@dataclass(frozen=True)
class CLIContext:
    """Runtime dependencies for CLI commands."""

    console: CLIConsole
    config: BuildConfig
    commands: ShellCommands


def build_cli_context(config_file: Path | None = None) -> CLIContext:
    """Build a fresh CLIContext."""
    config = load_config(config_file)
    return CLIContext(
        console=console,
        config=config,
        commands=ShellCommands(config=config),
    )


def get_cli_context(ctx: typer.Context | None = None) -> CLIContext:
    """Return the CLIContext from Typer, falling back to a new instance."""
    context = ctx or click.get_current_context(silent=True)
    if context:
        obj = context.find_object(CLIContext)
        if obj is not None:
            return obj
    return build_cli_context()
