"""CLI tests with the refresh call stubbed out."""

import asyncio

import pytest
from typer.testing import CliRunner

from dissonance.arbitrage import detect_arbitrage
from dissonance.cli import scan
from dissonance.cli.app import app
from dissonance.config.settings import Settings
from dissonance.models import AggregatedQuestion, CycleResult, SourceQuote

runner = CliRunner()


def _result_with_opportunity() -> CycleResult:
    questions = [
        AggregatedQuestion(
            question="Will Bitcoin hit $100k by 2025?",
            category="crypto",
            sources={
                "Polymarket": SourceQuote(yes_odds=0.55, no_odds=0.30),
                "Manifold": SourceQuote(yes_odds=0.45, no_odds=0.40),
            },
        ),
        AggregatedQuestion(
            question="Will the Lakers win?",
            category="sports",
            sources={"Manifold": SourceQuote(yes_odds=0.3, no_odds=0.7)},
        ),
    ]
    return CycleResult(questions=questions, opportunities=detect_arbitrage(questions), raw_market_count=3)


@pytest.fixture
def stub_refresh(monkeypatch):
    calls = []

    def install(result):
        async def fake_refresh(settings, providers=None, transport=None):
            calls.append(providers)
            return result

        monkeypatch.setattr(scan, "refresh", fake_refresh)
        return calls

    return install


def test_scan_run_prints_summary_and_opportunities(stub_refresh):
    stub_refresh(_result_with_opportunity())
    result = runner.invoke(app, ["scan", "run"])
    assert result.exit_code == 0, result.output
    assert "Markets: 2  Opportunities: 1  Best edge: +5.0%" in result.output
    assert "Bet $55 on YES (Polymarket)" in result.output
    assert "Showing 2 of 2 questions" in result.output


def test_scan_run_category_filter(stub_refresh):
    stub_refresh(_result_with_opportunity())
    result = runner.invoke(app, ["scan", "run", "--category", "sports"])
    assert "Showing 1 of 2 questions" in result.output
    assert "[sports] Will the Lakers win?" in result.output


def test_scan_run_states(stub_refresh):
    stub_refresh(CycleResult())
    result = runner.invoke(app, ["scan", "run"])
    assert "No markets found" in result.output

    question = AggregatedQuestion(
        question="Q?", sources={"Manifold": SourceQuote(yes_odds=0.5, no_odds=0.5)}
    )
    stub_refresh(CycleResult(questions=[question]))
    result = runner.invoke(app, ["scan", "run"])
    assert "Markets look efficient" in result.output
    assert "Best edge: —" in result.output


def test_scan_run_json_and_provider_option(stub_refresh):
    calls = stub_refresh(_result_with_opportunity())
    result = runner.invoke(app, ["scan", "run", "--json", "--provider", "manifold"])
    assert result.exit_code == 0, result.output
    assert '"yes_source": "Polymarket"' in result.output
    assert calls == [["manifold"]]


def test_scan_run_unknown_provider(stub_refresh):
    stub_refresh(CycleResult())
    result = runner.invoke(app, ["scan", "run", "--provider", "kalshi"])
    assert result.exit_code == 1
    assert "Unknown provider: kalshi" in result.output


def test_scan_run_unknown_category(stub_refresh):
    calls = stub_refresh(CycleResult())
    result = runner.invoke(app, ["scan", "run", "--category", "weather"])
    assert result.exit_code == 1
    assert "Unknown category: weather" in result.output
    assert calls == []


def test_watch_repeats_until_stopped(monkeypatch, capsys):
    settings = Settings.from_dict({"pipeline": {"refresh_interval_ms": 1}})
    stop_event = asyncio.Event()
    calls = []

    async def fake_refresh(settings, providers=None, transport=None):
        calls.append(providers)
        if len(calls) == 3:
            stop_event.set()
        return _result_with_opportunity()

    monkeypatch.setattr(scan, "refresh", fake_refresh)
    cycles = asyncio.run(scan._watch(settings, ["manifold"], stop_event, top=5))
    assert cycles == 3
    assert calls == [["manifold"]] * 3
    out = capsys.readouterr().out
    assert out.count("Markets: 2  Opportunities: 1  Best edge: +5.0%") == 3
    # watch output skips the per-question listing
    assert "Showing" not in out


def test_watch_command_reports_cycles(monkeypatch):
    seen = {}

    async def fake_watch(settings, providers, stop_event, top):
        seen.update(providers=providers, top=top, interval=settings.refresh_interval_ms)
        return 2

    monkeypatch.setattr(scan, "_watch", fake_watch)
    result = runner.invoke(app, ["scan", "watch", "--provider", "polymarket", "--top", "3"])
    assert result.exit_code == 0, result.output
    assert "Refreshing every" in result.output
    assert "Stopped after 2 cycle(s)." in result.output
    assert seen["providers"] == ["polymarket"]
    assert seen["top"] == 3
