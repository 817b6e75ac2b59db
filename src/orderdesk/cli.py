"""Command line interface for the packaged service."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Optional

import typer
import uvicorn

from . import engine
from .config import Settings, configure_logging, get_settings
from .crud import DuplicateRecordError, RecordNotFoundError
from .database import init_database, session_scope
from .schemas.snapshot import PreviewFile, SnapshotFile
from .snapshot import SnapshotError, load_into_database, preview_from_file, read_snapshot

app = typer.Typer(help="Preview distributor orders and manage the reference-data snapshot.")


def _print_header(title: str) -> None:
    typer.secho(title, bold=True, fg=typer.colors.CYAN)


def _resolve_settings() -> Settings:
    settings = get_settings()
    configure_logging(settings.log_level)
    init_database()
    return settings


@app.command()
def run(
    host: Optional[str] = typer.Option(None, help="Hostname to bind"),
    port: Optional[int] = typer.Option(None, help="Port to expose"),
    reload: Optional[bool] = typer.Option(None, help="Enable auto-reload"),
    log_level: Optional[str] = typer.Option(None, help="Uvicorn log level"),
) -> None:
    """Start the FastAPI service using Uvicorn."""

    settings = _resolve_settings()

    uvicorn.run(
        "orderdesk.app:create_app",
        host=host or settings.host,
        port=port or settings.port,
        reload=settings.reload if reload is None else reload,
        log_level=log_level or settings.log_level,
        factory=True,
    )


@app.command()
def init_db() -> None:
    """Create the SQLite database and tables."""

    settings = _resolve_settings()
    typer.echo(f"Database initialised at {settings.database_path}")


@app.command()
def show_paths() -> None:
    """Print out important filesystem paths."""

    settings = _resolve_settings()
    typer.echo(f"Database: {settings.database_path}")
    typer.echo(f"Config directory: {settings.database_path.parent}")


@app.command("load-snapshot")
def load_snapshot(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON snapshot exported from the backend"),
) -> None:
    """Import reference data (SKUs, tiers, stores, distributors, schemes, stock, orders)."""

    _resolve_settings()
    try:
        snapshot = read_snapshot(path, SnapshotFile)
        with session_scope() as session:
            counts = load_into_database(session, snapshot)
    except (SnapshotError, DuplicateRecordError, RecordNotFoundError, engine.InvalidSchemeError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED)
        raise typer.Exit(code=1) from exc

    _print_header("Snapshot loaded")
    for kind, count in counts.items():
        typer.echo(f"- {kind}: {count}")


@app.command()
def preview(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON snapshot with a draft to price"),
) -> None:
    """Price a draft order from a self-contained snapshot file, without the database."""

    settings = get_settings()
    configure_logging(settings.log_level)
    try:
        result = preview_from_file(read_snapshot(path, PreviewFile), today=date.today())
    except (SnapshotError, engine.InvalidSchemeError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED)
        raise typer.Exit(code=1) from exc

    currency = settings.currency
    _print_header("Lines")
    for line in result.lines:
        marks = []
        if line.has_tier_price:
            marks.append("tier price")
        if line.is_freebie:
            marks.append(f"free, {line.scheme_source}")
        suffix = f" ({', '.join(marks)})" if marks else ""
        typer.echo(f"- {line.quantity} x {line.sku_name} @ {line.unit_price} {currency}{suffix}")

    if result.applied_schemes:
        _print_header("Schemes applied")
        for applied in result.applied_schemes:
            typer.echo(f"- {applied.scheme.description}: {applied.times_applied}x, {applied.free_quantity} free")

    _print_header("Totals")
    typer.echo(f"Subtotal: {result.totals.subtotal} {currency}")
    typer.echo(f"GST: {result.totals.gst_amount} {currency}")
    typer.echo(f"Grand total: {result.totals.grand_total} {currency}")
    if isinstance(result, engine.EditPreview):
        typer.echo(f"Change from original: {result.delta.amount} {currency}")

    for issue in result.stock_check.issues:
        typer.secho(f"Stock: {issue}", fg=typer.colors.YELLOW)
    if result.funds_check.message:
        color = typer.colors.RED if not result.funds_check.passes else typer.colors.YELLOW
        typer.secho(result.funds_check.message, fg=color)

    if result.can_submit:
        typer.secho("Ready to submit", fg=typer.colors.GREEN)
    else:
        typer.secho("Submission blocked", fg=typer.colors.RED)
        raise typer.Exit(code=2)


def main() -> None:
    """Entry-point for console scripts."""

    app()


if __name__ == "__main__":  # pragma: no cover
    main()
