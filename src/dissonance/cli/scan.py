"""Scan subcommand: run (one cycle), watch (repeat on the refresh interval)."""

from __future__ import annotations

import asyncio
import signal
import sys

import typer

from dissonance.config.settings import Settings
from dissonance.ingestion.manager import build_connectors
from dissonance.models import CycleResult
from dissonance.pipeline import refresh
from dissonance.views import (
    CATEGORY_FILTERS,
    describe_opportunity,
    filter_questions,
    format_edge,
    format_probability,
)

app = typer.Typer(help="Fetch providers, aggregate questions and detect arbitrage")


def _echo_result(
    result: CycleResult,
    search: str | None = None,
    category: str | None = None,
    top: int = 10,
    show_markets: bool = True,
) -> None:
    summary = result.summary
    typer.echo(
        f"Markets: {summary.market_count}  Opportunities: {summary.opportunity_count}  "
        f"Best edge: {format_edge(summary.best_edge)}"
    )
    if result.state == "no_data":
        typer.echo("No markets found. Try refreshing.")
        return
    if show_markets:
        questions = filter_questions(result.questions, search=search, category=category)
        for q in questions:
            quotes = "  ".join(
                f"{name} Y:{format_probability(s.yes_odds)} N:{format_probability(s.no_odds)}"
                for name, s in q.sources.items()
            )
            typer.echo(f"  [{q.category}] {q.question[:60]}  {quotes}")
        typer.echo(f"Showing {len(questions)} of {len(result.questions)} questions")
    if result.state == "efficient":
        typer.echo("No arbitrage opportunities detected right now. Markets look efficient.")
        return
    typer.echo("Arbitrage:")
    for opp in result.top_opportunities(top):
        typer.echo(f"  {format_edge(opp.edge)}  {opp.question[:60]}")
        typer.echo(f"    {describe_opportunity(opp)}")


def _check_providers(settings: Settings, providers: list[str] | None) -> None:
    try:
        build_connectors(settings, providers)
    except ValueError as e:
        typer.echo(str(e))
        raise typer.Exit(1)


@app.command("run")
def run_scan(
    ctx: typer.Context,
    provider: list[str] | None = typer.Option(
        None, "--provider", "-P", help="Provider to fetch (repeatable; default: all enabled)"
    ),
    search: str | None = typer.Option(None, "--search", "-s", help="Filter questions by text"),
    category: str | None = typer.Option(None, "--category", "-c", help="Filter questions by category"),
    top: int = typer.Option(10, "--top", "-n", help="Number of opportunities to show"),
    as_json: bool = typer.Option(False, "--json", help="Print the full cycle result as JSON"),
) -> None:
    """Run one refresh cycle and print questions and opportunities."""
    if category is not None and category not in CATEGORY_FILTERS:
        typer.echo(f"Unknown category: {category}. Choose from: {list(CATEGORY_FILTERS)}")
        raise typer.Exit(1)
    settings = ctx.obj["settings"]
    _check_providers(settings, provider or None)
    result = asyncio.run(refresh(settings, provider or None))
    if as_json:
        typer.echo(result.model_dump_json(indent=2))
        return
    _echo_result(result, search=search, category=category, top=top)


async def _watch(
    settings: Settings,
    providers: list[str] | None,
    stop_event: asyncio.Event,
    top: int,
) -> int:
    cycles = 0
    interval = settings.refresh_interval_ms / 1000
    while not stop_event.is_set():
        result = await refresh(settings, providers)
        cycles += 1
        _echo_result(result, top=top, show_markets=False)
        try:
            await asyncio.wait_for(stop_event.wait(), timeout=interval)
        except asyncio.TimeoutError:
            pass
    return cycles


@app.command("watch")
def watch(
    ctx: typer.Context,
    provider: list[str] | None = typer.Option(
        None, "--provider", "-P", help="Provider to fetch (repeatable; default: all enabled)"
    ),
    top: int = typer.Option(10, "--top", "-n", help="Number of opportunities to show"),
) -> None:
    """Re-run the cycle every refresh_interval_ms until Ctrl+C."""
    settings = ctx.obj["settings"]
    _check_providers(settings, provider or None)
    stop_event = asyncio.Event()

    def shutdown() -> None:
        stop_event.set()

    loop = asyncio.new_event_loop()
    if sys.platform != "win32":
        loop.add_signal_handler(signal.SIGINT, shutdown)
        loop.add_signal_handler(signal.SIGTERM, shutdown)
    cycles = 0
    try:
        typer.echo(f"Refreshing every {settings.refresh_interval_ms} ms (Ctrl+C to stop)...")
        cycles = loop.run_until_complete(_watch(settings, provider or None, stop_event, top))
    except KeyboardInterrupt:
        pass
    finally:
        loop.close()
    typer.echo(f"Stopped after {cycles} cycle(s).")
