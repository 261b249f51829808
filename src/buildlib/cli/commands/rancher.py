"""Rancher CLI commands."""

from pathlib import Path
from typing import Annotated

import typer

from buildlib.cli.console import with_error_handling
from buildlib.cli.context import get_cli_context

rancher_app = typer.Typer(
    name="rancher",
    help="Rancher stack deployment.",
    no_args_is_help=True,
)

ModuleDir = Annotated[Path, typer.Argument(help="Directory with the compose files")]
Stack = Annotated[str, typer.Argument(help="Rancher stack name")]


@rancher_app.command()
@with_error_handling
def up(module_dir: ModuleDir, stack: Stack) -> None:
    """Deploy a stack with ``rancher up``."""
    ctx = get_cli_context()
    ctx.commands.rancher.up(module_dir, stack)
    ctx.console.ok(f"stack {stack} is up")


@rancher_app.command()
@with_error_handling
def compose(module_dir: ModuleDir, stack: Stack) -> None:
    """Deploy a stack with ``rancher-compose up``."""
    ctx = get_cli_context()
    ctx.commands.rancher.compose(module_dir, stack)
    ctx.console.ok(f"stack {stack} is up")


@rancher_app.command()
@with_error_handling
def ensure() -> None:
    """Install rancher and rancher-compose if they are missing."""
    ctx = get_cli_context()
    ctx.commands.rancher.ensure_rancher()
    ctx.commands.rancher.ensure_compose()
    ctx.console.ok("rancher tools are installed")
