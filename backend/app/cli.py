"""Air defense console CLI — setup and administration.

Commands:
  start          — create tables and seed radars, rules and missiles
  add-operator   — create an operator account (password prompted)
  status         — database health and threat breakdown
  rules          — show the classification rule table
  open           — run the API server
"""
from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table


app = typer.Typer(
    name="airdefense",
    help="Air defense record-keeping console.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command("start")
def start(
    config: str = typer.Option(None, "--config", help="Path to defaults YAML (default: settings.DEFAULTS_CONFIG)"),
):
    """Create the database and load seed data."""
    if _is_first_run() is False:
        console.print(
            "[yellow]The console is already set up.[/yellow]\n"
            "Run [cyan]airdefense status[/cyan] to inspect it."
        )
        raise typer.Exit(0)

    try:
        from app.database import init_db, SessionLocal

        with console.status("[bold]Creating database..."):
            init_db()

        db = SessionLocal()
        try:
            from scripts.seed_defaults import load_defaults, seed_defaults

            with console.status("[bold]Seeding radars, rules and missiles..."):
                counts = seed_defaults(db, load_defaults(config))
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

        console.print("[green]Setup complete![/green]")
        console.print(
            f"  Radar stations: {counts['radar_stations']}  |  "
            f"Rules: {counts['classification_rules']}  |  "
            f"Missiles: {counts['missiles']}"
        )
        _print_next_steps(console)

    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[red]Setup failed: {e}[/red]")
        raise typer.Exit(1)


@app.command("add-operator")
def add_operator(
    username: str = typer.Argument(..., help="Login name"),
    role: str = typer.Option("Operator", "--role", help="Admin or Operator"),
    password: str = typer.Option(
        ..., prompt=True, hide_input=True, confirmation_prompt=True, help="Operator password"
    ),
):
    """Create an operator account with a bcrypt-hashed password."""
    from app.models.base import OperatorRoleEnum

    valid_roles = [r.value for r in OperatorRoleEnum]
    if role not in valid_roles:
        console.print(f"[red]Invalid role '{role}'. Must be one of: {', '.join(valid_roles)}[/red]")
        raise typer.Exit(1)

    from app.database import SessionLocal
    from app.models.operator import Operator
    from app.modules.auth import create_operator

    db = SessionLocal()
    try:
        if db.query(Operator).filter(Operator.username == username).first():
            console.print(f"[red]Operator '{username}' already exists.[/red]")
            raise typer.Exit(1)
        operator = create_operator(db, username, password, role)
        db.commit()
        console.print(f"[green]Operator '{username}' created (id {operator.operator_id}, {role}).[/green]")
    finally:
        db.close()


@app.command("status")
def status():
    """Show database health and current threat picture."""
    from app.database import SessionLocal
    from sqlalchemy import func

    db = SessionLocal()
    try:
        from app.models.automated_alert import AutomatedAlert
        from app.models.base import MissileStatusEnum, enum_value
        from app.models.classified_threat import ClassifiedThreat
        from app.models.missile import Missile
        from app.models.operator import Operator
        from app.models.radar_station import RadarStation

        console.print("[bold]System[/bold]")
        console.print("  Database: [green]OK[/green]")
        radar_count = db.query(RadarStation).count()
        operator_count = db.query(Operator).count()
        console.print(
            f"  Radar stations: {'[green]' + str(radar_count) + '[/green]' if radar_count else '[yellow]none[/yellow]'}"
        )
        console.print(
            f"  Operators: {'[green]' + str(operator_count) + '[/green]' if operator_count else '[yellow]none — run airdefense add-operator[/yellow]'}"
        )

        console.print("\n[bold]Inventory[/bold]")
        total = db.query(Missile).count()
        available = db.query(Missile).filter(Missile.status == MissileStatusEnum.AVAILABLE).count()
        colour = "green" if available else "red"
        console.print(f"  Missiles: [{colour}]{available} available[/{colour}] of {total}")

        console.print("\n[bold]Threats[/bold]")
        by_level = dict(
            db.query(ClassifiedThreat.threat_level, func.count(ClassifiedThreat.threat_id))
            .group_by(ClassifiedThreat.threat_level)
            .all()
        )
        counts = {enum_value(k): v for k, v in by_level.items()}
        console.print(
            f"    [red]{counts.get('Critical', 0)} critical[/red]  "
            f"[yellow]{counts.get('High', 0)} high[/yellow]  "
            f"{counts.get('Moderate', 0)} moderate  "
            f"[dim]{counts.get('Low', 0)} low  {counts.get('Unknown', 0)} unknown[/dim]"
        )
        open_alerts = db.query(AutomatedAlert).filter(AutomatedAlert.is_acknowledged == False).count()  # noqa: E712
        console.print(f"  Unacknowledged alerts: {open_alerts}")

        if radar_count == 0:
            console.print(
                "\n[yellow]Not set up yet. Run [cyan]airdefense start[/cyan] to begin.[/yellow]"
            )
    except Exception as e:
        console.print(f"  Database: [red]error: {e}[/red]")
        raise typer.Exit(1)
    finally:
        db.close()


@app.command("rules")
def rules():
    """Print classification rules in evaluation order."""
    from app.database import SessionLocal
    from app.models.classification_rule import ClassificationRule

    db = SessionLocal()
    try:
        rows = db.query(ClassificationRule).order_by(ClassificationRule.rule_id).all()
        _print_rules_table(console, rows)
    finally:
        db.close()


@app.command("open")
def open_server(
    host: str = typer.Option("127.0.0.1", "--host"),
    port: int = typer.Option(5000, "--port"),
):
    """Run the API server."""
    import uvicorn

    console.print(f"API running at [cyan]http://{host}:{port}/api[/cyan] — press Ctrl+C to stop")
    uvicorn.run("app.main:app", host=host, port=port)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _is_first_run() -> bool:
    """Check whether setup has run (any radar station exists)."""
    try:
        from app.database import SessionLocal
        from app.models.radar_station import RadarStation
        db = SessionLocal()
        try:
            return db.query(RadarStation).count() == 0
        finally:
            db.close()
    except Exception:
        # Tables missing, not set up yet
        return True


def _print_next_steps(con: Console) -> None:
    con.print("\n[bold]What to do next:[/bold]")
    con.print("  [cyan]airdefense add-operator admin --role Admin[/cyan]  — create a login")
    con.print("  [cyan]airdefense open[/cyan]                              — start the API")
    con.print("  [cyan]airdefense status[/cyan]                            — check system health")


def _print_rules_table(con: Console, rows) -> None:
    from app.models.base import enum_value

    table = Table(title=f"Classification Rules ({len(rows)})")
    table.add_column("ID", style="cyan")
    table.add_column("Parameter")
    table.add_column("Op")
    table.add_column("Value")
    table.add_column("Level")
    table.add_column("Enabled")
    for r in rows:
        table.add_row(
            str(r.rule_id),
            r.parameter_name,
            enum_value(r.operator),
            r.value,
            enum_value(r.assigned_threat_level),
            "yes" if r.is_enabled else "[dim]no[/dim]",
        )
    con.print(table)


if __name__ == "__main__":
    app()
