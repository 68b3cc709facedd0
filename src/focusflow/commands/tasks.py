"""Task commands."""

import typer

from focusflow.api.client import get_client
from focusflow.api.tasks import TasksAPI
from focusflow.commands.decorators import command_wrapper
from focusflow.services.config_service import get_config_service
from focusflow.services.task_source import TaskSource
from focusflow.ui.formatters import format_dict_table, format_output, format_success
from focusflow.utils.typer_helpers import SuggestingGroup

app = typer.Typer(cls=SuggestingGroup, help="Task commands")


def get_task_source(client) -> TaskSource:
    """Build a TaskSource honouring the cache settings."""
    cache = get_config_service().config.cache
    return TaskSource(TasksAPI(client), ttl=cache.ttl, enabled=cache.enabled)


@app.command("list")
@command_wrapper(auth_required=True)
async def list_tasks(
    show_all: bool = typer.Option(False, "--all", "-a", help="Include completed tasks"),
    output: str | None = typer.Option(
        None, "--output", "-o", help="Output format: table, json, yaml"
    ),
) -> None:
    """List tasks available for linking to a focus session."""
    output = output or get_config_service().config.output.format
    async with get_client() as client:
        source = get_task_source(client)
        if show_all:
            tasks = await source.all_tasks()
        else:
            tasks = await source.pending_tasks()

    rows = [
        {"id": task.id, "content": task.content, "done": task.is_completed} for task in tasks
    ]
    if output == "table":
        title = "Tasks" if show_all else "Pending tasks"
        format_dict_table(rows, title=f"{title} ({len(rows)})")
    else:
        format_output(rows, output)


@app.command("complete")
@command_wrapper(auth_required=True)
async def complete_task(
    task_id: int = typer.Argument(..., help="Task ID"),
    undo: bool = typer.Option(False, "--undo", help="Mark the task as not done"),
) -> None:
    """Mark a task as done (or not done with --undo)."""
    async with get_client() as client:
        task = await get_task_source(client).set_completed(task_id, not undo)

    state = "reopened" if undo else "completed"
    format_success(f"Task #{task.id} {state}: {task.content}")
