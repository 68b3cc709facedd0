"""Authentication commands."""

import typer
from rich.prompt import Prompt

from focusflow.api.auth import AuthAPI
from focusflow.api.client import get_client
from focusflow.commands.decorators import command_wrapper
from focusflow.errors import BackendError
from focusflow.services.config_service import get_config_service
from focusflow.ui.console import get_console
from focusflow.ui.formatters import format_error, format_success, format_warning
from focusflow.utils.exit_codes import ERROR_INVALID_ARGS
from focusflow.utils.logger import get_logger
from focusflow.utils.typer_helpers import SuggestingGroup

app = typer.Typer(cls=SuggestingGroup, help="Authentication commands")


@app.command()
@command_wrapper
async def login(
    email: str | None = typer.Option(None, "--email", help="Email address"),
    password: str | None = typer.Option(None, "--password", help="Password"),
) -> None:
    """Sign in to FocusFlow."""
    if not email:
        email = Prompt.ask("Email")
    if not password:
        password = Prompt.ask("Password", password=True)

    if not email or not password:
        format_error("Email and password are required")
        raise typer.Exit(ERROR_INVALID_ARGS)

    async with get_client() as client:
        session = await AuthAPI(client).sign_in(email, password)

    get_config_service().save_credentials(
        session["access_token"],
        session["user_id"],
        refresh_token=session.get("refresh_token"),
        email=session.get("email"),
    )
    get_logger().info("Signed in as %s", session.get("email"))
    format_success(f"Signed in as {session.get('email')}")


@app.command()
@command_wrapper
async def logout() -> None:
    """Sign out and forget the stored session."""
    config_service = get_config_service()
    if not config_service.load_credentials():
        format_warning("Not logged in")
        return

    try:
        async with get_client() as client:
            await AuthAPI(client).sign_out()
    except BackendError as e:
        # The local session is dropped even if the server call fails
        get_logger().warning("Server sign-out failed: %s", e)

    config_service.clear_credentials()
    format_success("Signed out")


@app.command()
@command_wrapper
def status() -> None:
    """Show who is signed in."""
    credentials = get_config_service().load_credentials()
    if not credentials:
        get_console().print("[yellow]Not logged in[/yellow]")
        return
    who = credentials.get("email") or credentials.get("user_id")
    get_console().print(f"Signed in as [cyan]{who}[/cyan]")
