"""Full-screen timer UI for focus mode."""

from __future__ import annotations

import asyncio

from rich.align import Align
from rich.console import Console, Group
from rich.layout import Layout
from rich.live import Live
from rich.text import Text

from focusflow.models.focus.settings import TimerMode
from focusflow.models.focus.timer import SESSIONS_BEFORE_LONG_BREAK, FocusTimer
from focusflow.models.task import Task

_MODE_KEYS = {"f": TimerMode.FOCUS, "s": TimerMode.SHORT_BREAK, "l": TimerMode.LONG_BREAK}


class TimerDisplay:
    """Renders a FocusTimer fullscreen and shows notifications as a toast line."""

    def __init__(self, console: Console | None = None, tasks: list[Task] | None = None):
        self.console = console or Console()
        self.tasks = list(tasks or [])
        self.toast: tuple[str, str] | None = None

    # -- notification sink ------------------------------------------------

    def success(self, message: str) -> None:
        self.toast = ("green", message)

    def info(self, message: str) -> None:
        self.toast = ("blue", message)

    def error(self, message: str) -> None:
        self.toast = ("red", message)

    # -- rendering --------------------------------------------------------

    def task_title(self, task_id: int | None) -> str | None:
        """Content of the linked task, if known."""
        if task_id is None:
            return None
        for task in self.tasks:
            if task.id == task_id:
                return task.content
        return f"Task #{task_id}"

    def create_layout(self, timer: FocusTimer) -> Layout:
        """Create the timer layout with all components."""
        layout = Layout()
        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=3),
        )

        if timer.mode == TimerMode.FOCUS:
            title, color = "FocusFlow - Focus", "cyan"
        else:
            title, color = f"Respite - {timer.mode.label}", "green"
        if not timer.is_running:
            title += " (paused)"
            color = "yellow"

        header_text = Text(title, style=f"bold {color}", justify="center")
        layout["header"].update(Align.center(header_text, vertical="middle"))
        layout["body"].update(Align.center(self._create_body_content(timer), vertical="middle"))
        layout["footer"].update(Align.center(self._create_footer_text(timer), vertical="middle"))
        return layout

    def _create_body_content(self, timer: FocusTimer) -> Group:
        components = []

        title = self.task_title(timer.linked_task_id)
        if title and timer.mode == TimerMode.FOCUS:
            components.append(Text(title[:50], style="bold white", justify="center"))
            components.append(Text(""))

        remaining = timer.remaining_seconds
        if not timer.is_running:
            timer_color = "yellow"
        elif remaining < 60:
            timer_color = "red"
        else:
            timer_color = "cyan"
        components.append(Text(timer.display_time, style=f"bold {timer_color}", justify="center"))
        components.append(Text(""))

        progress_pct = min(100, int(timer.progress))
        bar_width = 40
        filled = int(bar_width * progress_pct / 100)
        progress_bar = "▓" * filled + "░" * (bar_width - filled)
        components.append(Text(f"{progress_bar}  {progress_pct}%", style="dim", justify="center"))

        done_in_cycle = timer.completed_focus_count % SESSIONS_BEFORE_LONG_BREAK
        dots = " ".join(
            "●" if i < done_in_cycle else "○" for i in range(SESSIONS_BEFORE_LONG_BREAK)
        )
        components.append(
            Text(f"{dots}   {timer.completed_focus_count} completed", style="dim", justify="center")
        )

        if self.toast is not None:
            color, message = self.toast
            components.append(Text(""))
            components.append(Text(message, style=color, justify="center"))

        return Group(*components)

    def _create_footer_text(self, timer: FocusTimer) -> Text:
        action = "pause" if timer.is_running else "start"
        hints = f"space {action}  •  r reset  •  f/s/l mode"
        if not timer.is_running and timer.mode == TimerMode.FOCUS and self.tasks:
            hints += "  •  t link task"
        hints += "  •  q quit"
        return Text(hints, style="dim", justify="center")

    # -- interaction ------------------------------------------------------

    def handle_key(self, timer: FocusTimer, key: str | None) -> bool:
        """Apply a keypress to the timer. Returns False when the user quits."""
        if key is None:
            return True
        if key == "q":
            return False
        if key in (" ", "p"):
            timer.toggle()
        elif key == "r":
            timer.reset()
        elif key in _MODE_KEYS:
            timer.switch_mode(_MODE_KEYS[key])
        elif key == "t":
            self.cycle_task(timer)
        return True

    def cycle_task(self, timer: FocusTimer) -> None:
        """Link the next pending task, wrapping around to no task."""
        choices: list[int | None] = [None] + [task.id for task in self.tasks]
        try:
            index = choices.index(timer.linked_task_id)
        except ValueError:
            index = 0
        timer.select_task(choices[(index + 1) % len(choices)])

    async def run(self, timer: FocusTimer, keyboard, refresh: float = 0.25) -> None:
        """Drive the display until the user quits."""
        try:
            with Live(
                self.create_layout(timer),
                console=self.console,
                refresh_per_second=4,
                screen=True,
            ) as live:
                while self.handle_key(timer, keyboard.get_key()):
                    live.update(self.create_layout(timer))
                    await asyncio.sleep(refresh)
        finally:
            keyboard.stop()
