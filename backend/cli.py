"""
Sales API CLI.

Command-line interface for common operations:
database setup, demo data, running the server and inspecting settings.
"""

import sys
import time
from pathlib import Path

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent))

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="sales",
    help="Sales REST API CLI",
    add_completion=False,
)
console = Console()


# =============================================================================
# Database Commands
# =============================================================================

@app.command()
def db_init(
    drop: bool = typer.Option(False, "--drop", help="Drop all tables first"),
):
    """Create the database tables."""
    from sqlalchemy.exc import SQLAlchemyError

    from sales_api.models import Base
    from shared.infrastructure.db import engine

    console.print(f"[blue]Initializing database: {engine.url.render_as_string(hide_password=True)}[/blue]")

    try:
        if drop:
            Base.metadata.drop_all(bind=engine)
            console.print("[yellow]Dropped existing tables[/yellow]")
        Base.metadata.create_all(bind=engine)
        console.print("[green]✓ Tables created[/green]")
    except SQLAlchemyError as e:
        console.print(f"[red]✗ Database initialization failed: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def db_seed(
    force: bool = typer.Option(False, "--force", "-f", help="Allow seeding in production"),
):
    """Seed database with demo customers, products and a sale."""
    from sqlalchemy.exc import SQLAlchemyError

    from sales_api.seed import seed
    from shared.config.settings import settings
    from shared.infrastructure.db import get_db_context

    console.print(f"[blue]Seeding database for: {settings.environment}[/blue]")

    if settings.environment == "production" and not force:
        console.print("[red]Cannot seed production without --force[/red]")
        raise typer.Exit(1)

    try:
        with get_db_context() as db:
            inserted = seed(db)
    except SQLAlchemyError as e:
        console.print(f"[red]✗ Seeding failed: {e}[/red]")
        raise typer.Exit(1)

    if inserted:
        console.print("[green]✓ Seed data created[/green]")
    else:
        console.print("[yellow]Database already seeded, nothing to do[/yellow]")


# =============================================================================
# Server Commands
# =============================================================================

@app.command()
def serve(
    host: str = typer.Option(None, help="Bind address (default: REST_API_HOST)"),
    port: int = typer.Option(None, help="Port (default: REST_API_PORT)"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on code changes"),
):
    """Run the REST API with uvicorn."""
    import uvicorn

    from shared.config.settings import settings

    host = host or settings.rest_api_host
    port = port or settings.rest_api_port
    console.print(f"[blue]Starting Sales API on {host}:{port}[/blue]")

    uvicorn.run("sales_api.main:app", host=host, port=port, reload=reload)


@app.command()
def show_config():
    """Show the effective settings."""
    from shared.config.settings import settings

    table = Table(title="Settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    for name, value in settings.model_dump().items():
        if name == "database_url":
            from sqlalchemy.engine import make_url
            value = make_url(value).render_as_string(hide_password=True)
        table.add_row(name, str(value))

    console.print(table)

    errors = settings.validate_production_settings()
    for error in errors:
        console.print(f"[red]✗ {error}[/red]")
    if errors:
        raise typer.Exit(1)


# =============================================================================
# Health Commands
# =============================================================================

@app.command()
def health(
    url: str = typer.Option("http://localhost:8000/api/health/detailed", help="Health endpoint"),
):
    """Check a running server's health."""
    import httpx

    table = Table(title="Service Health")
    table.add_column("Service", style="cyan")
    table.add_column("Status", style="green")
    table.add_column("Response Time", style="yellow")

    try:
        start = time.time()
        response = httpx.get(url, timeout=5.0)
        elapsed = (time.time() - start) * 1000
    except httpx.HTTPError as e:
        table.add_row("REST API", f"✗ {type(e).__name__}", "-")
        console.print(table)
        raise typer.Exit(1)

    if response.status_code == 200:
        table.add_row("REST API", "✓ Healthy", f"{elapsed:.0f}ms")
    else:
        table.add_row("REST API", f"✗ Status {response.status_code}", f"{elapsed:.0f}ms")

    for name, info in response.json().get("dependencies", {}).items():
        table.add_row(f"  {name}", str(info.get("status", info)), "-")

    console.print(table)
    if response.status_code != 200:
        raise typer.Exit(1)


@app.command()
def version():
    """Show version information."""
    table = Table(title="Sales API Version")
    table.add_column("Component", style="cyan")
    table.add_column("Version", style="green")

    table.add_row("API", "0.1.0")
    table.add_row("Python", sys.version.split()[0])

    console.print(table)


if __name__ == "__main__":
    app()
