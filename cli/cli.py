"""Developer CLI for the gym coach backend.

Runs plan normalization, AI plan generation and the stored-plan migration
against the configured database without going through any HTTP layer.
"""

import asyncio
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.json import JSON
from rich.markup import escape
from rich.panel import Panel

# Handle both direct execution (python cli/cli.py) and module execution (python -m cli.cli)
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from app.clients.repository import ClientNotFoundError
from app.config.settings import settings
from app.core.logger import setup_logger_from_settings
from app.db.session import check_database_connection, init_db
from app.plans.errors import NormalizationError
from app.plans.generation import PlanRequestError, generate_workout_plan
from app.plans.migration import migrate_raw_plans
from app.plans.normalizer import normalize_or_raise
from app.plans.types import dumps_plan

console = Console()

app = typer.Typer(
    name="gym-coach",
    help="Gym coach CLI - plan normalization, generation and maintenance",
    add_completion=False,
)


@app.callback()
def main(
    log_level: str = typer.Option(settings.log_level, "--log-level", help="Logging level"),
) -> None:
    setup_logger_from_settings(settings, level=log_level)


@app.command()
def normalize(
    path: str = typer.Argument(..., help="File holding raw model output, or '-' for stdin"),
) -> None:
    """Normalize raw model output and print the canonical plan."""
    try:
        raw_text = sys.stdin.read() if path == "-" else Path(path).read_text(encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Cannot read {escape(path)}:[/red] {escape(e.strerror or str(e))}")
        raise typer.Exit(code=1) from e
    try:
        days = normalize_or_raise(raw_text)
    except NormalizationError as e:
        console.print(f"[red]Normalization failed ({e.code}):[/red] {escape('; '.join(e.details))}")
        raise typer.Exit(code=1) from e
    console.print(JSON(dumps_plan(days)))


@app.command()
def generate(
    client_id: int = typer.Option(..., "--client-id", help="Client to generate the plan for"),
    duration: str = typer.Option("1_week", "--duration", help="1_week, 2_weeks or 4_weeks"),
    focus: str = typer.Option("balanced", "--focus", help="balanced, strength, cardio or flexibility"),
) -> None:
    """Generate a workout plan with the AI model and store it."""
    try:
        result = asyncio.run(generate_workout_plan(client_id, duration, focus))
    except ClientNotFoundError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    except PlanRequestError as e:
        console.print(f"[red]Plan generation failed ({e.code}):[/red] {escape(e.message)}")
        raise typer.Exit(code=1) from e

    if result.plan is None:
        console.print(Panel(escape(result.raw_text), title="Unparseable model output", border_style="yellow"))
        console.print("[yellow]The plan could not be read. Run the command again to regenerate.[/yellow]")
        raise typer.Exit(code=2)

    console.print(f"[green]Stored plan {result.plan.id}:[/green] {result.plan.name}")
    console.print(JSON(result.plan.model_dump_json(include={"days"}, by_alias=True)))


@app.command("migrate-plans")
def migrate_plans(
    no_dry_run: bool = typer.Option(False, "--no-dry-run", help="Write normalized documents back"),
) -> None:
    """Normalize stored plan documents that are not canonical yet."""
    report = migrate_raw_plans(dry_run=not no_dry_run)
    console.print(
        f"scanned={report.scanned} migrated={report.migrated} "
        f"already_normalized={report.already_normalized} failed={report.failed}"
    )
    if report.failed_plan_ids:
        console.print(f"[yellow]Failed plan IDs: {report.failed_plan_ids}[/yellow]")


@app.command("init-db")
def init_db_command() -> None:
    """Create database tables."""
    check_database_connection()
    init_db()
    console.print("[green]Database tables created[/green]")


if __name__ == "__main__":
    app()
