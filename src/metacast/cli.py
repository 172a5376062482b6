"""CLI entry point for Metacast."""

import logging
import re
import sys
from datetime import date
from pathlib import Path

import requests
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from metacast.config.logging import setup_logging
from metacast.config.manager import ConfigManager
from metacast.config.schema import GlobalConfig
from metacast.feeds.conference import ConferenceFeedBuilder
from metacast.feeds.index import update_available_feeds
from metacast.feeds.people import build_people_feeds
from metacast.ingest.client import ContentClient
from metacast.ingest.durations import fill_durations, probe_duration
from metacast.ingest.pipeline import ConferencePipeline
from metacast.store.records import RecordStore
from metacast.utils.errors import ConfigError, MetacastError

app = typer.Typer(
    name="metacast",
    help="Turn published conference talks into podcast feeds",
    no_args_is_help=True,
)
console = Console()
logger = logging.getLogger(__name__)

PERIOD_PATTERN = re.compile(r"^(\d{4})-(\d{1,2})$")


def parse_period(value: str) -> tuple[int, int]:
    """Parse ``YYYY-MM`` into (year, month).

    Raises:
        typer.BadParameter: If the value is not a valid period
    """
    match = PERIOD_PATTERN.match(value.strip())
    if not match or not 1 <= int(match.group(2)) <= 12:
        raise typer.BadParameter(f"Expected YYYY-MM, got {value!r}")
    return int(match.group(1)), int(match.group(2))


def _config(ctx: typer.Context) -> GlobalConfig:
    return ctx.obj


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose (DEBUG) logging"
    ),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Write logs to file"
    ),
    config_file: Path | None = typer.Option(
        None, "--config", "-c", help="Config file (default: ./metacast.yaml)"
    ),
) -> None:
    """Metacast - podcast feeds for General Conference talks."""
    manager = ConfigManager(config_file)
    ctx.obj = manager
    if ctx.invoked_subcommand in ("init", "version"):
        setup_logging(verbose=verbose, log_file=log_file)
        return

    try:
        config = manager.load_config()
    except ConfigError as e:
        console.print(f"[red]✗[/red] {escape(str(e))}")
        sys.exit(1)

    setup_logging(verbose=verbose, log_file=log_file, level=config.log_level)
    ctx.obj = config


@app.command("version")
def show_version() -> None:
    """Show version information."""
    from metacast import __version__

    console.print(f"[bold cyan]Metacast[/bold cyan] v{__version__}")


@app.command("init")
def init_config(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing config"),
) -> None:
    """Write a commented default config file."""
    manager: ConfigManager = ctx.obj
    if manager.create_default_config(overwrite=force):
        console.print(f"[green]✓[/green] Wrote {manager.config_file}")
    else:
        console.print(
            f"[yellow]⚠[/yellow] Config already exists: {manager.config_file} (use --force to replace it)"
        )


@app.command("ingest")
def ingest_command(
    ctx: typer.Context,
    periods: list[str] = typer.Argument(..., help="Conferences to ingest, e.g. 2025-04"),
    start_date: str | None = typer.Option(
        None, "--start-date", help="Opening day (YYYY-MM-DD), default: first Saturday"
    ),
) -> None:
    """Ingest one or more conferences into the record store.

    Examples:
        metacast ingest 2025-04

        metacast ingest 2024-04 2024-10
    """
    config = _config(ctx)

    try:
        parsed = [parse_period(p) for p in periods]
        opening = date.fromisoformat(start_date) if start_date else None
    except (typer.BadParameter, ValueError) as e:
        console.print(f"[red]✗[/red] {escape(str(e))}")
        sys.exit(1)

    store = RecordStore.open(config.data_dir)
    failed = []

    with ContentClient(
        config.ingest.base_url,
        timeout=config.ingest.timeout_seconds,
        user_agent=config.ingest.user_agent,
    ) as client:
        pipeline = ConferencePipeline(store, client, config.ingest)

        for year, month in parsed:
            label = f"{year}-{month:02d}"
            try:
                report = pipeline.run(year, month, start_date=opening)
            except MetacastError as e:
                logger.error(f"Ingestion of {label} aborted: {e}")
                console.print(f"[red]✗[/red] {label}: {escape(str(e))}")
                failed.append(label)
                continue

            console.print(
                f"[green]✓[/green] {report.period}: {len(report.talks)} talks "
                f"({report.written} written, {report.unchanged} unchanged, "
                f"{report.markers} session markers)"
            )
            for uri in report.skipped:
                console.print(f"[yellow]  skipped[/yellow] {uri}")

    if failed:
        console.print(f"\n[red]{len(failed)} period(s) failed:[/red] {', '.join(failed)}")
        sys.exit(1)


@app.command("durations")
def durations_command(
    ctx: typer.Context,
    collection: str | None = typer.Option(
        None, "--collection", help="Limit to one collection"
    ),
) -> None:
    """Probe audio files and record missing talk durations."""
    config = _config(ctx)

    try:
        store = RecordStore.open(config.data_dir)
        with requests.Session() as session:
            report = fill_durations(
                store,
                probe=lambda url: probe_duration(
                    url,
                    timeout=config.probe.timeout_seconds,
                    max_attempts=config.probe.max_attempts,
                    session=session,
                ),
                collection=collection,
            )
    except MetacastError as e:
        console.print(f"[red]✗[/red] Error: {escape(str(e))}")
        sys.exit(1)

    table = Table(title="Durations", show_header=True, header_style="bold")
    table.add_column("Result", style="cyan")
    table.add_column("Talks", justify="right")
    table.add_row("filled", str(report.filled))
    table.add_row("already set", str(report.already_set))
    table.add_row("no audio", str(report.no_audio))
    table.add_row("failed", str(report.failed))
    console.print(table)


@app.command("build")
def build_command(
    ctx: typer.Context,
    no_people: bool = typer.Option(False, "--no-people", help="Skip per-speaker feeds"),
) -> None:
    """Generate all feeds and the discovery index."""
    config = _config(ctx)

    try:
        store = RecordStore.open(config.data_dir)
        speakers = {s.id: s for s in store.iter_speakers()}
        talks = list(store.iter_talks())

        collections = sorted({config.ingest.collection} | {t.source for t in talks if t.source})
        builder = ConferenceFeedBuilder(store, config.feeds, config.out_dir)
        written = []
        for collection in collections:
            collection_talks = [t for t in talks if t.source == collection]
            written += builder.build(collection, speakers=speakers, talks=collection_talks)

        if not no_people:
            written += build_people_feeds(store, config.feeds, config.out_dir, talks=talks)

        entries = update_available_feeds(config.out_dir)
    except MetacastError as e:
        console.print(f"[red]✗[/red] Error: {escape(str(e))}")
        sys.exit(1)

    console.print(
        f"[green]✓[/green] {len(talks)} talks, {len(written)} feeds written to "
        f"{config.out_dir} ({len(entries)} indexed)"
    )


@app.command("index")
def index_command(ctx: typer.Context) -> None:
    """Rebuild the discovery index from the feeds on disk."""
    config = _config(ctx)
    entries = update_available_feeds(config.out_dir)
    console.print(f"[green]✓[/green] {len(entries)} feeds indexed")


if __name__ == "__main__":
    app()
