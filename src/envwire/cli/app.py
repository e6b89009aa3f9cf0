"""CLI application factory."""

from typing import Optional

import typer
from pydantic import ValidationError

from ..config import LogLevel, Settings, build_settings
from ..demo.services import ServiceName
from ..demo.wiring import build_registry
from ..errors import DependencyError
from .state import CLIState


def create_cli_app(settings: Settings | None = None) -> typer.Typer:
    """Create CLI application with optional settings override.

    Args:
        settings: Optional Settings override for testing

    Returns:
        Configured Typer application with commands registered
    """
    app = typer.Typer(
        name="envwire",
        help="envwire - environment-scoped service resolution",
        no_args_is_help=True,
    )

    @app.callback()
    def setup(
        ctx: typer.Context,
        profiles: Optional[str] = typer.Option(
            None,
            "--profiles",
            "-p",
            help="Comma-separated active profiles, e.g. 'dev,default'",
        ),
        verbose: bool = typer.Option(
            False,
            "--verbose",
            "-v",
            help="Enable verbose output (DEBUG logging)",
        ),
    ) -> None:
        """Global options available to all commands."""
        if settings is not None:
            resolved_settings = settings
        else:
            try:
                resolved_settings = build_settings(
                    profiles=profiles,
                    log_level=LogLevel.DEBUG if verbose else None,
                )
            except ValidationError as e:
                raise typer.BadParameter(str(e), param_hint="--profiles")

        ctx.obj = CLIState(resolved_settings)

    @app.command()
    def datasource(ctx: typer.Context) -> None:
        """Print the datasource settings for the active profiles."""
        controller = _resolved(ctx.obj, ServiceName.DATASOURCE_CONTROLLER)
        typer.echo(controller.get_datasource())

    @app.command()
    def environment(ctx: typer.Context) -> None:
        """Print the environment the active profiles select."""
        controller = _resolved(ctx.obj, ServiceName.ENVIRONMENT_CONTROLLER)
        typer.echo(controller.get_environment())

    @app.command()
    def greet(ctx: typer.Context) -> None:
        """Print the greeting."""
        controller = _resolved(ctx.obj, ServiceName.GREETING_CONTROLLER)
        typer.echo(controller.say_hello())

    @app.command()
    def candidates(ctx: typer.Context) -> None:
        """List every registered candidate, marking those eligible for the active profiles."""
        registry = build_registry()
        eligible = set(registry.registered_candidates(ctx.obj.settings.active_profiles))
        for candidate in registry.candidates():
            marker = "*" if candidate in eligible else " "
            typer.echo(
                f"{marker} {candidate.name.name:<24} {candidate.qualifier:<20} "
                f"{candidate.factory.__name__:<28} "
                f"{','.join(sorted(candidate.labels))}"
            )

    return app


def _resolved(state: CLIState, name: ServiceName):
    try:
        return state.app.context[name]
    except DependencyError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
