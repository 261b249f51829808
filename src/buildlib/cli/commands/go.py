"""Go toolchain CLI commands."""

from pathlib import Path
from typing import Annotated

import typer

from buildlib.cli.console import with_error_handling
from buildlib.cli.context import get_cli_context

go_app = typer.Typer(
    name="go",
    help="Go toolchain helpers.",
    no_args_is_help=True,
)


@go_app.command()
@with_error_handling
def env(name: Annotated[str, typer.Argument(help="go env variable")]) -> None:
    """Print a ``go env`` value, failing if it is empty."""
    ctx = get_cli_context()
    ctx.console.print(ctx.commands.go.env(name))


@go_app.command()
@with_error_handling
def clean(
    package: Annotated[str, typer.Argument(help="Package path under GOPATH/src")],
) -> None:
    """Exit non-zero if a GOPATH package checkout is dirty or out of sync.

    Examples:
        buildlib go clean github.com/example/tool
    """
    ctx = get_cli_context()
    ctx.commands.go.is_package_clean(package)
    ctx.console.ok(f"{package} is clean and in sync")


@go_app.command()
@with_error_handling
def update(
    path: Annotated[Path, typer.Argument(help="Module directory")] = Path("."),
    vendor: Annotated[
        bool, typer.Option("--vendor", help="Also run go mod vendor")
    ] = False,
) -> None:
    """Run go get -d and go mod tidy (and optionally go mod vendor)."""
    ctx = get_cli_context()
    ctx.commands.go.update_module(path, vendor=vendor)
    ctx.console.ok(f"updated module in {path}")
