"""Pomodoro timer commands for FocusFlow CLI."""

from datetime import datetime

import typer
from rich.table import Table

from focusflow.api.client import get_client
from focusflow.api.focus_sessions import FocusSessionsAPI
from focusflow.commands.decorators import command_wrapper
from focusflow.commands.tasks import get_task_source
from focusflow.errors import BackendError, ValidationError
from focusflow.models.focus.notifier import SessionNotifier
from focusflow.models.focus.settings import DurationSettingsStore, TimerMode
from focusflow.models.focus.timer import FocusTimer
from focusflow.services.config_service import get_config_service
from focusflow.storage import JsonKeyValueStore
from focusflow.ui.console import get_console
from focusflow.ui.formatters import format_error, format_success, format_warning
from focusflow.ui.keyboard import get_keyboard_handler
from focusflow.ui.notifications import ConsoleSink
from focusflow.ui.timer_display import TimerDisplay
from focusflow.utils.exit_codes import ERROR_INVALID_ARGS
from focusflow.utils.typer_helpers import SuggestingGroup

app = typer.Typer(cls=SuggestingGroup, help="Pomodoro timer for focus sessions")
settings_app = typer.Typer(cls=SuggestingGroup, help="Timer duration settings")
app.add_typer(settings_app, name="settings")


def get_settings_store() -> DurationSettingsStore:
    """Settings store backed by the user's config directory."""
    return DurationSettingsStore(JsonKeyValueStore(get_config_service().settings_path))


@app.command("start")
@command_wrapper
async def start_timer(
    task_id: int | None = typer.Option(None, "--task-id", help="Task to link to focus sessions"),
    offline: bool = typer.Option(False, "--offline", help="Do not log completed sessions"),
) -> None:
    """Open the fullscreen focus timer."""
    console = get_console()
    config_service = get_config_service()
    settings = get_settings_store().load()
    display = TimerDisplay(console)

    signed_in = config_service.load_credentials() is not None
    client = get_client() if signed_in and not offline else None
    notifier = None
    try:
        if client is not None:
            try:
                display.tasks = await get_task_source(client).pending_tasks()
            except BackendError as e:
                display.error(f"Could not load tasks: {e}")
            notifier = SessionNotifier(FocusSessionsAPI(client).log_session, display)
        elif not offline:
            display.info("Not signed in: completed sessions will not be logged.")

        pending_ids = {task.id for task in display.tasks}
        if task_id is not None and pending_ids and task_id not in pending_ids:
            format_error(f"Task #{task_id} is not a pending task")
            raise typer.Exit(ERROR_INVALID_ARGS)

        def ring_bell(mode: TimerMode) -> None:
            console.bell()

        timer = FocusTimer(
            settings,
            notifier=notifier,
            sink=display,
            on_complete=ring_bell if config_service.config.output.bell else None,
        )
        timer.select_task(task_id)
        with timer:
            await display.run(timer, get_keyboard_handler())
    finally:
        if notifier is not None:
            if notifier.pending:
                # The fullscreen view is gone; late outcomes print inline
                notifier.sink = ConsoleSink()
            await notifier.drain()
        if client is not None:
            await client.close()

    completed = timer.completed_focus_count
    if completed:
        format_success(f"{completed} focus session{'s' if completed != 1 else ''} completed")
    else:
        console.print("[dim]Timer closed[/dim]")


@app.command("history")
@command_wrapper(auth_required=True)
async def timer_history(
    limit: int = typer.Option(20, help="Number of sessions to show"),
) -> None:
    """Show recently logged focus sessions."""
    async with get_client() as client:
        sessions = await FocusSessionsAPI(client).list_sessions(limit=limit)

    console = get_console()
    if not sessions:
        console.print("[yellow]No focus sessions found[/yellow]")
        return

    table = Table(title=f"Recent Focus Sessions ({len(sessions)})", show_header=True)
    table.add_column("Date", style="cyan")
    table.add_column("Type")
    table.add_column("Task")
    table.add_column("Duration", justify="right")

    for session in sessions:
        completed_at: datetime | None = session.completed_at
        date_str = completed_at.strftime("%Y-%m-%d %H:%M") if completed_at else "-"
        table.add_row(
            date_str,
            session.session_type.replace("_", " ").title(),
            str(session.task_id) if session.task_id is not None else "-",
            f"{session.duration_minutes}m",
        )

    console.print(table)


@settings_app.command("show")
@command_wrapper
def show_settings() -> None:
    """Show the configured interval durations."""
    settings = get_settings_store().load()
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Interval")
    table.add_column("Minutes", justify="right")
    for mode in TimerMode:
        table.add_row(mode.label, str(settings.minutes_for(mode)))
    get_console().print(table)


@settings_app.command("set")
@command_wrapper
def set_settings(
    focus: int | None = typer.Option(None, "--focus", help="Focus minutes (1-120)"),
    short_break: int | None = typer.Option(None, "--short-break", help="Short break minutes (1-30)"),
    long_break: int | None = typer.Option(None, "--long-break", help="Long break minutes (1-60)"),
) -> None:
    """Change one or more interval durations."""
    if focus is None and short_break is None and long_break is None:
        format_warning("Nothing to change. Pass --focus, --short-break or --long-break.")
        raise typer.Exit(ERROR_INVALID_ARGS)

    store = get_settings_store()
    values = store.load().model_dump()
    if focus is not None:
        values["focus_minutes"] = focus
    if short_break is not None:
        values["short_break_minutes"] = short_break
    if long_break is not None:
        values["long_break_minutes"] = long_break

    try:
        saved = store.save(values)
    except ValidationError as e:
        for field, message in e.fields.items():
            format_error(f"{field}: {message}")
        raise typer.Exit(ERROR_INVALID_ARGS) from e

    format_success(
        "Timer settings saved: "
        f"focus {saved.focus_minutes}m, short break {saved.short_break_minutes}m, "
        f"long break {saved.long_break_minutes}m"
    )


@settings_app.command("reset")
@command_wrapper
def reset_settings() -> None:
    """Restore the default 25/5/15 durations."""
    get_settings_store().reset()
    format_success("Timer settings reset to defaults")
