"""CLI command implementations."""

from typing import Optional
from rich.console import Console
from rich.panel import Panel

from ...domain.models.admission import LiveCounts
from ...infrastructure.di.container import DIContainer
from ...infrastructure.config.config_loader import ConfigLoader
from ...infrastructure.presentation.error_presenter import ErrorPresenter
from ...application.commands.admit_connection import AdmitConnectionCommand

EXIT_ADMITTED = 0
EXIT_ERROR = 1
EXIT_DENIED = 2


def _create_container(config_path: Optional[str], verbose: bool, console: Console) -> DIContainer:
    try:
        return DIContainer.create(config_path)
    except Exception as e:
        console.print(f"\n{ErrorPresenter.present(e, verbose=verbose)}")
        raise SystemExit(EXIT_ERROR)


def _format_limit(limit: int) -> str:
    return "unlimited" if limit == 0 else str(limit)


def limits_command(config_path: Optional[str], verbose: bool, console: Console):
    """
    Execute limits command.

    Args:
        config_path: Config file path
        verbose: Verbose error output
        console: Rich console
    """
    console.print(Panel.fit(
        "[bold]Gatekeeper Concurrency Limits[/bold]",
        border_style="blue"
    ))

    container = _create_container(config_path, verbose, console)
    limits = container.environment.limits

    console.print(f"\n[bold]Source:[/bold] {container.configuration_source!r}")
    if container.config.source.property_prefix:
        console.print(f"[bold]Property prefix:[/bold] {container.config.source.property_prefix}")

    console.print("\n[bold]Limits:[/bold]")
    for name, value in limits.to_dict().items():
        console.print(f"  {name}: {_format_limit(value)}")

    console.print("\n[bold]Authentication:[/bold]")
    console.print(f"  user_required: {str(container.environment.user_required).lower()}")


def check_command(
    connection_id: str,
    user_id: str,
    group_id: Optional[str],
    live_counts: LiveCounts,
    config_path: Optional[str],
    verbose: bool,
    console: Console,
):
    """
    Execute check command.

    Args:
        connection_id: Connection being opened
        user_id: User opening it
        group_id: Group the connection is opened through, if any
        live_counts: Active connection counts per scope
        config_path: Config file path
        verbose: Verbose error output
        console: Rich console
    """
    container = _create_container(config_path, verbose, console)

    command = AdmitConnectionCommand(
        connection_id=connection_id,
        user_id=user_id,
        group_id=group_id,
        live_counts=live_counts,
    )
    request = command.to_request()

    try:
        console.print("\n[bold]Scopes:[/bold]")
        for scope in request.applicable_scopes():
            limit = container.resolver.effective_limit(scope, request)
            console.print(
                f"  {scope.value}: {live_counts.for_scope(scope)} active / {_format_limit(limit)}"
            )

        decision = container.admit_handler.handle(command)
    except Exception as e:
        console.print(f"\n{ErrorPresenter.present(e, verbose=verbose)}")
        raise SystemExit(EXIT_ERROR)

    if decision.admitted:
        console.print("\n[green]ADMITTED[/green]")
        raise SystemExit(EXIT_ADMITTED)

    console.print(f"\n[red]DENIED[/red] ({decision.reason})")
    raise SystemExit(EXIT_DENIED)


def config_command(
    init: bool,
    path: Optional[str],
    show: bool,
    console: Console,
):
    """
    Execute config command.

    Args:
        init: Create default config
        path: Config file path
        show: Show current config
        console: Rich console
    """
    console.print(Panel.fit(
        "[bold]Gatekeeper Configuration[/bold]",
        border_style="blue"
    ))

    if init:
        config_path = ConfigLoader.create_default_config(path)
        console.print(f"\n[green]Configuration file created: {config_path}[/green]")

    elif show:
        try:
            config = ConfigLoader.load(path)
        except Exception as e:
            console.print(f"\n{ErrorPresenter.present(e)}")
            raise SystemExit(EXIT_ERROR)
        console.print("\n[bold]Current Configuration:[/bold]")
        console.print(config.to_yaml(), markup=False)

    else:
        config_info = ConfigLoader.get_config_info()

        console.print("\n[bold]Configuration Files:[/bold]")
        if config_info["existing_configs"]:
            for cfg in config_info["existing_configs"]:
                console.print(f"  [green]{cfg}[/green]")
        else:
            console.print("  No configuration files found")

        console.print("\n[bold]Environment Overrides:[/bold]")
        if config_info["env_overrides"]:
            for env_var in config_info["env_overrides"]:
                console.print(f"  {env_var}")
        else:
            console.print("  None")

        console.print("\n[bold]Default Locations:[/bold]")
        for default_path in config_info["default_paths"]:
            console.print(f"  {default_path}")
