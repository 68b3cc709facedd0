"""FocusFlow CLI - pomodoro focus timer backed by the FocusFlow cloud."""

__version__ = "0.4.0"
