"""Docker CLI commands."""

from pathlib import Path
from typing import Annotated

import typer

from buildlib.cli.console import with_error_handling
from buildlib.cli.context import get_cli_context

docker_app = typer.Typer(
    name="docker",
    help="Docker image helpers.",
    no_args_is_help=True,
)


@docker_app.command()
@with_error_handling
def build(
    module_dir: Annotated[Path, typer.Argument(help="Directory with the Dockerfile")],
    tag: Annotated[str, typer.Argument(help="Image tag")],
) -> None:
    """Build and tag the image in a directory."""
    ctx = get_cli_context()
    ctx.commands.docker.build(module_dir, tag)
    ctx.console.ok(f"built {tag}")


@docker_app.command()
@with_error_handling
def push(tag: Annotated[str, typer.Argument(help="Image tag")]) -> None:
    """Push an image to its registry."""
    ctx = get_cli_context()
    ctx.commands.docker.push(tag)
    ctx.console.ok(f"pushed {tag}")
