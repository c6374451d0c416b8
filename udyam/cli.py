"""Command line entry point: run the service, fill the form, inspect records."""

import asyncio
import logging

import typer
from rich.console import Console
from rich.table import Table

from .config import load_settings
from .engine import HttpActionRunner, SchemaLoader, WizardEngine
from .errors import NotFoundError

app = typer.Typer(help="Udyam MSME registration wizard")
console = Console()


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _store():
    from .services.registration import RegistrationStore, get_engine

    settings = load_settings()
    _configure_logging(settings.log_level)
    store = RegistrationStore(get_engine(settings.database_url))
    store.create_tables()
    return store


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Interface to bind"),
    port: int = typer.Option(8000, help="Port to listen on"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
):
    """Run the registration service."""
    import uvicorn

    settings = load_settings()
    _configure_logging(settings.log_level)
    uvicorn.run(
        "udyam.services.registration.api:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@app.command()
def fill():
    """Fill in the registration form interactively against the running service."""
    settings = load_settings()
    _configure_logging(settings.log_level)
    schema = SchemaLoader().load_schema(settings.schema_name)

    async def _run():
        runner = HttpActionRunner(settings)
        try:
            await WizardEngine(runner, schema).run()
        finally:
            await runner.aclose()

    asyncio.run(_run())


@app.command("init-db")
def init_db():
    """Create the registration tables."""
    _store()
    console.print("Registration tables ready.")


@app.command()
def show(registration_id: str):
    """Print one registration."""
    try:
        record = _store().get(registration_id).to_api()
    except NotFoundError:
        console.print(f"[red]Registration not found: {registration_id}[/red]")
        raise typer.Exit(code=1)

    table = Table(title=f"Registration {registration_id}")
    table.add_column("Field")
    table.add_column("Value")
    for key, value in record.items():
        table.add_row(key, "" if value is None else str(value))
    console.print(table)


@app.command()
def delete(registration_id: str):
    """Delete one registration."""
    try:
        _store().delete(registration_id)
    except NotFoundError:
        console.print(f"[red]Registration not found: {registration_id}[/red]")
        raise typer.Exit(code=1)
    console.print(f"Deleted {registration_id}")


if __name__ == "__main__":
    app()
