"""Shared console utilities for CLI commands.

This module provides console output, interactive prompts, status rendering
and the error handling decorator used by every command.
"""

from collections.abc import Callable, Sequence
from functools import wraps

import typer
from rich.console import Console, ConsoleRenderable
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from buildlib.errors import BuildLibError, PromptAborted
from buildlib.git import ChangeArea, StatusInfo


class CLIConsole:
    """Rich console wrapper for consistent CLI output."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize the CLI console."""
        self.console = console or Console()

    def print(self, msg: ConsoleRenderable | str | None = None) -> None:
        self.console.print(msg)

    def info(self, msg: str) -> None:
        self.console.print(f"[cyan]ℹ[/cyan]  {msg}")

    def ok(self, msg: str) -> None:
        self.console.print(f"[green]✅[/green] {msg}")

    def error(self, msg: str) -> None:
        self.console.print(f"[red]❌[/red] {msg}")

    def warn(self, msg: str) -> None:
        self.console.print(f"[yellow]⚠️[/yellow]  {msg}")

    def handle_error(
        self, message: str, details: str | None = None, exit_code: int = 1
    ) -> None:
        """Handle an error by printing a message and exiting.

        Args:
            message: Error message to display
            details: Optional additional details
            exit_code: Exit code to use
        """
        # Messages carry paths and stderr in brackets; keep rich from parsing them.
        self.error(f"[bold red]{escape(message)}[/bold red]")
        if details:
            self.console.print(
                Panel(escape(details), title="Details", border_style="red")
            )
        raise typer.Exit(exit_code)

    # =========================================================================
    # Prompts
    # =========================================================================

    def prompt_input(
        self, label: str, validate: Callable[[str], None] | None = None
    ) -> str:
        """Ask for free-form input until ``validate`` accepts it.

        Args:
            label: Prompt text
            validate: Callable raising ValueError for unacceptable input

        Returns:
            The accepted input

        Raises:
            PromptAborted: On Ctrl-C or end of input
        """
        while True:
            response = self._input(f"[bold]{label}[/bold]: ")
            if validate is None:
                return response
            try:
                validate(response)
            except ValueError as e:
                self.console.print(f"[red]{e}[/red]")
                continue
            return response

    def yes_no(self, label: str) -> bool:
        """Ask a yes/no question; anything but y/yes counts as no."""
        response = self._input(f"[bold]{label}[/bold] \\[y/N]: ")
        return response.strip().lower() in ("y", "yes")

    def select(self, label: str, choices: Sequence[str]) -> str:
        """Ask the user to pick one of ``choices`` by number.

        Returns:
            The selected choice

        Raises:
            PromptAborted: On Ctrl-C or end of input
        """
        if not choices:
            raise ValueError("select requires at least one choice")

        self.console.print(f"\n[yellow]{label}[/yellow]\n")
        for i, choice in enumerate(choices, 1):
            self.console.print(f"  [bold]{i}.[/bold] {choice}")

        while True:
            response = self._input("\nEnter choice [1]: ").strip()
            if not response:
                return choices[0]
            try:
                index = int(response)
            except ValueError:
                self.console.print("[red]Please enter a valid number[/red]")
                continue
            if 1 <= index <= len(choices):
                return choices[index - 1]
            self.console.print(
                f"[red]Please enter a number between 1 and {len(choices)}[/red]"
            )

    def _input(self, prompt: str) -> str:
        try:
            return self.console.input(prompt)
        except (KeyboardInterrupt, EOFError) as e:
            self.console.print("\n[dim]Cancelled.[/dim]")
            raise PromptAborted("prompt failed") from e

    # =========================================================================
    # Rendering
    # =========================================================================

    def print_status(self, status: StatusInfo) -> None:
        """Render a decoded git status as a table."""
        table = Table(title=escape(str(status.working_dir)), show_header=False)
        table.add_column("field", style="bold")
        table.add_column("value")

        table.add_row("branch", escape(status.branch) or "[dim]-[/dim]")
        table.add_row("commit", status.commit or "[dim]-[/dim]")
        table.add_row("upstream", escape(status.upstream) or "[dim]none[/dim]")
        table.add_row("ahead / behind", f"{status.ahead} / {status.behind}")
        table.add_row("staged", _area_summary(status.staged))
        table.add_row("unstaged", _area_summary(status.unstaged))
        table.add_row("untracked", str(status.untracked))
        table.add_row("unmerged", str(status.unmerged))
        self.console.print(table)


def _area_summary(area: ChangeArea) -> str:
    counts = {name: count for name, count in vars(area).items() if count}
    if not counts:
        return "[green]clean[/green]"
    return ", ".join(f"{name} {count}" for name, count in counts.items())


def with_error_handling(func: Callable[..., None]) -> Callable[..., None]:
    """Decorator to wrap command functions with standard error handling.

    Catches buildlib errors and Ctrl-C and turns them into exit codes.

    Args:
        func: The command function to wrap

    Returns:
        Wrapped function with error handling
    """

    @wraps(func)
    def wrapper(*args: object, **kwargs: object) -> None:
        try:
            func(*args, **kwargs)
        except BuildLibError as e:
            console.handle_error(e.message, e.details)
        except KeyboardInterrupt:
            console.print("\n[dim]Operation cancelled by user.[/dim]")
            raise typer.Exit(130) from None

    return wrapper


# Shared console instance for consistent output
console = CLIConsole()
