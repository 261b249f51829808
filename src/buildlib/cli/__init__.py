"""Main CLI application module.

Command Groups:
- git: repository status and clean/sync checks
- go: go env, package checks, module updates
- docker: image build and push
- rancher: stack deployment
"""

import sys
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from .commands import docker_app, git_app, go_app, rancher_app
from .console import console
from .context import build_cli_context

app = typer.Typer(
    help="🛠️  buildlib - helpers for build scripts",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(git_app, name="git")
app.add_typer(go_app, name="go")
app.add_typer(docker_app, name="docker")
app.add_typer(rancher_app, name="rancher")


def configure_logging(verbose: bool) -> None:
    """Route loguru output to stderr at INFO, or DEBUG when verbose."""
    logger.remove()
    # Resolve sys.stderr per message so redirected streams are honoured.
    logger.add(
        lambda message: sys.stderr.write(message),
        level="DEBUG" if verbose else "INFO",
        format="{level: <8} {message}",
    )


@app.callback()
def root(
    ctx: typer.Context,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log every executed command")
    ] = False,
    config_file: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="YAML config file (default: $BUILDLIB_CONFIG or ./buildlib.yaml)",
        ),
    ] = None,
) -> None:
    configure_logging(verbose)
    try:
        ctx.obj = build_cli_context(config_file)
    except ValueError as e:
        console.handle_error("Invalid configuration", str(e))


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
