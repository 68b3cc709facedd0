"""Configuration management commands."""

import typer
from pydantic import ValidationError as PydanticValidationError

from focusflow.commands.decorators import command_wrapper
from focusflow.services.config_service import get_config_service
from focusflow.ui.console import get_console
from focusflow.ui.formatters import format_error, format_output, format_success
from focusflow.utils.exit_codes import ERROR_INVALID_ARGS
from focusflow.utils.typer_helpers import SuggestingGroup

app = typer.Typer(cls=SuggestingGroup, help="Configuration management commands")


def _parse_value(value: str) -> str | int | bool:
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    try:
        return int(value)
    except ValueError:
        return value


@app.command("view")
@command_wrapper
def view_config(
    output: str | None = typer.Option(
        None, "--output", "-o", help="Output format: table, json, yaml"
    ),
) -> None:
    """View current configuration."""
    config = get_config_service().config
    output = output or config.output.format
    config_dict = config.model_dump()
    # Never echo the API key in full
    anon_key = config_dict["backend"].get("anon_key")
    if anon_key:
        config_dict["backend"]["anon_key"] = anon_key[:6] + "…"
    format_output(config_dict, output)


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., backend.url)"),
) -> None:
    """Get a configuration value."""
    value = get_config_service().get(key)
    if value is None:
        format_error(f"Configuration key '{key}' not found")
        raise typer.Exit(ERROR_INVALID_ARGS)
    get_console().print(value)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., backend.url)"),
    value: str = typer.Argument(..., help="Configuration value"),
) -> None:
    """Set a configuration value."""
    parsed_value = _parse_value(value)
    try:
        get_config_service().set(key, parsed_value)
    except KeyError:
        format_error(f"Configuration key '{key}' not found")
        raise typer.Exit(ERROR_INVALID_ARGS)
    except PydanticValidationError as e:
        format_error(f"Invalid value for '{key}': {e.errors()[0]['msg']}")
        raise typer.Exit(ERROR_INVALID_ARGS)
    format_success(f"Configuration '{key}' set to '{parsed_value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: str | None = typer.Argument(None, help="Configuration key to reset"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        msg = "entire configuration" if not key else f"'{key}'"
        if not typer.confirm(f"Are you sure you want to reset {msg}?"):
            format_error("Cancelled")
            raise typer.Exit(0)

    try:
        get_config_service().reset(key)
    except KeyError:
        format_error(f"Configuration key '{key}' not found")
        raise typer.Exit(ERROR_INVALID_ARGS)

    if key:
        format_success(f"Configuration '{key}' reset to default")
    else:
        format_success("Configuration reset to defaults")
