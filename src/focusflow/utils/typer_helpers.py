"""Typer helper utilities."""

from difflib import get_close_matches

import click
import typer
from typer.core import TyperGroup

from focusflow.ui.console import get_console
from focusflow.utils.exit_codes import ERROR_INVALID_ARGS


def suggest_commands(attempted: str, choices: list[str]) -> list[str]:
    """Close matches for a mistyped command name, best first."""
    return get_close_matches(attempted, choices, n=3, cutoff=0.6)


class SuggestingGroup(TyperGroup):
    """Typer group that suggests commands on typos.

    A typo with close matches exits with ERROR_INVALID_ARGS after listing
    them; anything else falls through to click's usage error.
    """

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            if not args:
                raise
            attempted = args[0]
            suggestions = suggest_commands(attempted, self.list_commands(ctx))
            if not suggestions:
                raise

            console = get_console()
            console.print(
                f'[red]Error:[/red] unknown command "{attempted}" for "{ctx.command_path}"'
            )
            console.print()
            if len(suggestions) == 1:
                console.print("[yellow]Did you mean this?[/yellow]")
            else:
                console.print("[yellow]Did you mean one of these?[/yellow]")
            for suggestion in suggestions:
                console.print(f"        {ctx.command_path} {suggestion}")
            console.print(f"\n[dim]Run '{ctx.command_path} --help' for usage.[/dim]")
            raise typer.Exit(ERROR_INVALID_ARGS) from e
