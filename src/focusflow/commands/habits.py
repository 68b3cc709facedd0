"""Habit commands."""

from datetime import date

import typer

from focusflow.api.client import get_client
from focusflow.api.habits import HabitsAPI
from focusflow.commands.decorators import command_wrapper
from focusflow.models.habits import calculate_streak
from focusflow.ui.formatters import format_dict_table
from focusflow.utils.typer_helpers import SuggestingGroup

app = typer.Typer(cls=SuggestingGroup, help="Habit commands")


@app.command("streak")
@command_wrapper(auth_required=True)
async def show_streaks() -> None:
    """Show the current streak of every habit."""
    async with get_client() as client:
        api = HabitsAPI(client)
        habits = await api.list_habits()
        logs = await api.list_logs()

    today = date.today()
    rows = []
    for habit in habits:
        streak = calculate_streak(habit.id, logs, today)
        rows.append(
            {
                "habit": habit.name,
                "streak": f"{streak} day{'s' if streak != 1 else ''}",
                "done_today": any(
                    log.habit_id == habit.id and log.completed_at == today for log in logs
                ),
            }
        )
    format_dict_table(rows, title="Habit streaks")
