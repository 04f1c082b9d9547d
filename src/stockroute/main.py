"""
Stockroute - CLI Entry Point.

Usage:
    stockroute run WORLD         Run the sorting loop against a world file
    stockroute check WORLD       Resolve inventories and show what was found
    stockroute config            Show effective settings
    stockroute --help            Show help
"""

import asyncio
import logging
import sys
from collections import Counter
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from stockroute.errors import StockRouteError

app = typer.Typer(
    name="stockroute",
    help="Stockroute - route staged items into the inventories that already hold them.",
    add_completion=False,
)
console = Console()


def setup_logging(level: str = "INFO", verbose: bool = False) -> None:
    """Setup logging with visible output."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level),
        format="%(asctime)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


def _load_settings(**overrides):
    from stockroute.config import RouterSettings

    overrides = {k: v for k, v in overrides.items() if v is not None}
    try:
        return RouterSettings(**overrides)
    except ValidationError as e:
        console.print(f"\n[red]❌ Configuration error:[/red]\n{e}")
        raise typer.Exit(1)


def _load_world(path: Path):
    from stockroute.backends.memory import load_world

    try:
        return load_world(path)
    except StockRouteError as e:
        console.print(f"\n[red]❌ {e}[/red]")
        raise typer.Exit(1)


def _summary_table(counts: Counter, cycles: int) -> Table:
    from stockroute.core.events import OutcomeKind

    table = Table(title=f"Outcomes over {cycles} cycle(s)")
    table.add_column("Outcome")
    table.add_column("Count", justify="right")
    for kind in OutcomeKind:
        table.add_row(kind.value, str(counts.get(kind, 0)))
    return table


@app.command()
def run(
    world: Path = typer.Argument(..., exists=True, dir_okay=False, help="YAML world file"),
    cycles: int | None = typer.Option(None, "--cycles", "-n", min=1, help="Stop after N cycles (default: run forever)"),
    delay: float | None = typer.Option(None, "--delay", "-d", min=0.0, help="Seconds to pause between cycles"),
    batch_size: int | None = typer.Option(None, "--batch-size", "-b", min=1, help="Max concurrent snapshot queries"),
    source: str | None = typer.Option(None, "--source", "-s", help="Source inventory name"),
    fallback: str | None = typer.Option(None, "--fallback", "-f", help="Fallback inventory name"),
    event_log: Path | None = typer.Option(None, "--event-log", help="Directory for the JSONL event log"),
    save: Path | None = typer.Option(None, "--save", help="Write the final world state to this file"),
    bell: bool = typer.Option(False, "--bell", help="Ring the terminal bell on fallback/failure outcomes"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Log events instead of printing them"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Run the sorting loop."""
    from stockroute.backends.memory import save_world
    from stockroute.core.cycle import run_forever
    from stockroute.observability import CompositeSink, ConsoleSink, EventLog, LoggingSink
    from stockroute.registry import InventoryRegistry

    loaded = _load_world(world)
    settings = _load_settings(
        source_name=source or loaded.source,
        fallback_name=fallback,
        batch_size=batch_size,
        loop_delay=delay,
        event_log_dir=event_log,
    )
    setup_logging(settings.log_level, verbose)

    try:
        registry = InventoryRegistry.from_settings(settings, loaded.get)
    except StockRouteError as e:
        console.print(f"\n[red]❌ {e}[/red]")
        raise typer.Exit(1)
    registry.report()

    sink = CompositeSink(LoggingSink() if quiet else ConsoleSink(console, bell=bell or settings.bell))
    log = EventLog(settings.event_log_dir, enabled=settings.event_log_dir is not None)
    sink.add(log)
    log.run_start(registry.source().name, len(registry.list_destinations()), registry.fallback_name)

    ctx = registry.build_context(sink, settings.batch_size)
    totals: Counter = Counter()

    def on_cycle(report) -> None:
        totals.update(report.counts())
        log.cycle_end(report)

    try:
        completed = asyncio.run(run_forever(ctx, settings.loop_delay, cycles, on_cycle))
    except KeyboardInterrupt:
        completed = ctx.cycle
        console.print("\n[dim]Stopped.[/dim]")
    finally:
        log.run_end(ctx.cycle)
        log.close()

    console.print(_summary_table(totals, completed))
    if log.log_path:
        console.print(f"[dim]📝 Events logged to: {log.log_path}[/dim]")
    if save:
        save_world(loaded, save)
        console.print(f"[dim]World state written to {save}[/dim]")


@app.command()
def check(
    world: Path = typer.Argument(..., exists=True, dir_okay=False, help="YAML world file"),
    source: str | None = typer.Option(None, "--source", "-s", help="Source inventory name"),
) -> None:
    """Resolve the configured inventories against a world file."""
    from stockroute.registry import InventoryRegistry

    loaded = _load_world(world)
    settings = _load_settings(source_name=source or loaded.source)

    console.print("\n[bold]Stockroute Inventory Check[/bold]\n")
    try:
        registry = InventoryRegistry.from_settings(settings, loaded.get)
    except StockRouteError as e:
        console.print(f"❌ {e}")
        raise typer.Exit(1)

    console.print(f"✅ Source: {registry.source().name}")
    destinations = registry.list_destinations()
    if destinations:
        console.print(f"✅ Destinations: {len(destinations)}")
        for inv in destinations:
            console.print(f"   • {inv.name}")
    else:
        console.print("⚠️  No destination inventories found")

    if registry.fallback() is not None:
        console.print(f"✅ Fallback: {registry.fallback().name}")
    elif registry.fallback_name:
        console.print(f"⚠️  Fallback not found: {registry.fallback_name}")
    else:
        console.print("ℹ️  No fallback configured")


@app.command()
def config() -> None:
    """Show effective settings."""
    settings = _load_settings()

    table = Table(title="Stockroute settings")
    table.add_column("Option")
    table.add_column("Value")
    for key, value in settings.model_dump().items():
        table.add_row(key, str(value))
    console.print(table)


@app.command()
def version() -> None:
    """Show version information."""
    from stockroute import __version__

    console.print(f"Stockroute version {__version__}")


if __name__ == "__main__":
    app()
