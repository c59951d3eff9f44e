"""Command line entry point: `dm`."""

import json
import time
from typing import Optional

import typer

from service import dice_service
from service import logging_service as log
from service.component_service import new_system
from service.reference_service import seed_reference_data
from service.settings import VERSION, get_settings

app = typer.Typer(
    name="dm",
    help="dm - tabletop RPG records",
    no_args_is_help=True,
)

logger = log.get_logger(__name__)


def version_callback(value: bool):
    if value:
        typer.echo(f"dm {VERSION}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None, "--version", callback=version_callback, is_eager=True, help="Show the version and exit",
    ),
):
    settings = get_settings()
    log.configure_logging(settings.log_level, settings.log_format == "json")


@app.command("serve")
def serve():
    """Start the database, apply migrations and serve HTTP until interrupted."""
    settings = get_settings()
    system = new_system(settings)

    with system:
        typer.echo(f"Serving on http://{settings.http_host}:{settings.http_port}")
        try:
            while True:
                time.sleep(1)
        except KeyboardInterrupt:
            typer.echo("Shutting down")


# =============================================================================
# Database Commands
# =============================================================================

db_app = typer.Typer(help="Database operations")
app.add_typer(db_app, name="db")


@db_app.command("migrate")
def db_migrate():
    """Apply pending migrations."""
    settings = get_settings()

    if not settings.migrations_dir.exists():
        typer.echo(f"Migrations directory not found: {settings.migrations_dir}")
        raise typer.Exit(1)

    with new_system(settings, with_http=False) as system:
        applied = system["migrations"].applied

    if not applied:
        typer.echo("Database is up to date")
        return

    for migration_id in applied:
        typer.echo(f"  [apply] {migration_id}")
    typer.echo("Migrations complete")


@db_app.command("seed")
def db_seed():
    """Insert the canonical species, classes, attributes and skills."""
    settings = get_settings()

    with new_system(settings, with_http=False) as system:
        with system["database"].session() as session:
            inserted = seed_reference_data(session)

    for table_name, count in inserted.items():
        typer.echo(f"  {table_name}: {count} inserted")


# =============================================================================
# Tools
# =============================================================================

@app.command("roll")
def roll(
    sides: int = typer.Argument(20, help="Faces per die"),
    count: int = typer.Option(1, "--count", "-n", help="Number of dice"),
    as_json: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Roll dice."""
    try:
        rolls = dice_service.roll(sides, count)
    except ValueError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps({"sides": sides, "rolls": rolls, "total": sum(rolls)}))
        return

    typer.echo(f"{count}d{sides}: {' '.join(str(r) for r in rolls)} = {sum(rolls)}")


@app.command("mcp")
def mcp():
    """Run the MCP tool server on stdio."""
    import server

    server.main()


if __name__ == "__main__":
    app()
