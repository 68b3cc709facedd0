"""Main entry point for FocusFlow CLI."""

import typer

from focusflow import __version__
from focusflow.commands import auth, config, habits, tasks, timer
from focusflow.services.config_service import get_config_service
from focusflow.ui.console import get_console
from focusflow.utils.typer_helpers import SuggestingGroup

app = typer.Typer(
    name="focusflow",
    cls=SuggestingGroup,
    help="Pomodoro focus timer, task linking and habit streaks for FocusFlow",
    no_args_is_help=True,
)

app.add_typer(timer.app, name="timer", help="Pomodoro timer for focus sessions")
app.add_typer(tasks.app, name="tasks", help="Task commands")
app.add_typer(habits.app, name="habits", help="Habit commands")
app.add_typer(auth.app, name="auth", help="Authentication commands")
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information and the configured backend."""
    console = get_console()
    console.print(f"[bold]FocusFlow CLI[/bold] version [cyan]{__version__}[/cyan]")
    console.print(f"[dim]Backend: {get_config_service().config.backend.url}[/dim]")


def main() -> None:
    """Entry point for the console script."""
    app()


if __name__ == "__main__":
    main()
