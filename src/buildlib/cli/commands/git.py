"""Git CLI commands.

Commands:
    status - Show the decoded porcelain status of a repository
    check  - Fail unless the repository is clean and in sync
    dir    - Print the absolute git directory
    branch - Print the checked out branch
"""

from pathlib import Path
from typing import Annotated

import typer

from buildlib.cli.console import with_error_handling
from buildlib.cli.context import get_cli_context

git_app = typer.Typer(
    name="git",
    help="Git repository status and checks.",
    no_args_is_help=True,
)

PathArgument = Annotated[
    Path,
    typer.Argument(help="Repository directory", show_default=True),
]


@git_app.command()
@with_error_handling
def status(path: PathArgument = Path(".")) -> None:
    """Show branch, sync and change counts for a repository.

    Examples:
        buildlib git status
        buildlib git status ../service
    """
    ctx = get_cli_context()
    ctx.console.print_status(ctx.commands.git.status(path))


@git_app.command()
@with_error_handling
def check(path: PathArgument = Path(".")) -> None:
    """Exit non-zero if the repository has changes or is out of sync.

    Checks, in order: staged changes, unstaged changes, ahead/behind upstream.
    Untracked files do not fail the check.
    """
    ctx = get_cli_context()
    status = ctx.commands.git.check_clean(path)
    ctx.console.ok(f"{path} is clean and in sync ({status.branch})")


@git_app.command(name="dir")
@with_error_handling
def git_dir(path: PathArgument = Path(".")) -> None:
    """Print the absolute path of the git directory."""
    ctx = get_cli_context()
    ctx.console.print(str(ctx.commands.git.git_dir(path)))


@git_app.command()
@with_error_handling
def branch(path: PathArgument = Path(".")) -> None:
    """Print the checked out branch ("HEAD" when detached)."""
    ctx = get_cli_context()
    ctx.console.print(ctx.commands.git.current_branch(path))
