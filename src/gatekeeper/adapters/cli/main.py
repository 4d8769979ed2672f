"""Main CLI application entry point."""

import sys
from typing import Optional
import typer
from rich.console import Console

from ...domain.models.admission import LiveCounts
from .commands import (
    limits_command,
    check_command,
    config_command,
)

# Create Typer app
app = typer.Typer(
    name="gatekeeper",
    help="Gatekeeper - Connection concurrency limits for the gateway",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Rich console for output
console = Console()


@app.command(name="limits")
def limits(
    config: Optional[str] = typer.Option(
        None,
        "--config", "-c",
        help="Path to configuration file",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable verbose output with technical details",
    ),
):
    """
    Show the effective concurrency limits.

    Loads the limits exactly as the gateway would at startup.
    """
    limits_command(config_path=config, verbose=verbose, console=console)


@app.command(name="check")
def check(
    connection: str = typer.Option(
        ...,
        "--connection",
        help="Connection id being opened",
    ),
    user: str = typer.Option(
        ...,
        "--user", "-u",
        help="User id opening the connection",
    ),
    group: Optional[str] = typer.Option(
        None,
        "--group", "-g",
        help="Connection group id, if opened through a group",
    ),
    active_total: int = typer.Option(
        0, "--active-total", min=0,
        help="Active connections overall",
    ),
    active_connection: int = typer.Option(
        0, "--active-connection", min=0,
        help="Active connections to this connection",
    ),
    active_group: int = typer.Option(
        0, "--active-group", min=0,
        help="Active connections through this group",
    ),
    active_user_connection: int = typer.Option(
        0, "--active-user-connection", min=0,
        help="Active connections this user holds to this connection",
    ),
    active_user_group: int = typer.Option(
        0, "--active-user-group", min=0,
        help="Active connections this user holds through this group",
    ),
    config: Optional[str] = typer.Option(
        None,
        "--config", "-c",
        help="Path to configuration file",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable verbose output",
    ),
):
    """
    Decide whether a connection attempt would be admitted.

    Exits 0 when admitted and 2 when denied.
    """
    check_command(
        connection_id=connection,
        user_id=user,
        group_id=group,
        live_counts=LiveCounts(
            total=active_total,
            connection=active_connection,
            group=active_group,
            user_connection=active_user_connection,
            user_group=active_user_group,
        ),
        config_path=config,
        verbose=verbose,
        console=console,
    )


@app.command(name="config")
def config_cmd(
    init: bool = typer.Option(
        False,
        "--init",
        help="Create default configuration file",
    ),
    path: Optional[str] = typer.Option(
        None,
        "--path",
        help="Configuration file path",
    ),
    show: bool = typer.Option(
        False,
        "--show",
        help="Show current configuration",
    ),
):
    """
    Manage configuration.

    Create or view configuration files.
    """
    config_command(
        init=init,
        path=path,
        show=show,
        console=console,
    )


def main():
    """Main entry point."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    main()
