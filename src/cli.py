"""
Command-line interface for mention-trends.

Scores subjects from an exported file of mention events and prints
their trend score, velocity and momentum phase.

Usage:
    mention-trends trending mentions.json            # Ranked top-K listing
    mention-trends trending mentions.json --json     # Same, as JSON
    mention-trends score mentions.json isco-alarcon  # One subject in detail
"""

import asyncio
import json
from datetime import date, timedelta
from typing import Any

import click

from src.config.settings import get_settings
from src.observability.logging import bind_context, clear_context, get_logger, setup_logging
from src.observability.metrics import get_metrics
from src.trending.config import DecayConfig
from src.trending.errors import TrendingError
from src.trending.schemas import utc_today
from src.trending.service import TrendingService
from src.trending.sources import JsonMentionSource

logger = get_logger(__name__)

PHASE_LABELS: dict[str, str] = {
    "hot": "HOT",
    "rising": "rising",
    "stable": "stable",
    "cooling": "cooling",
    "dormant": "dormant",
}

DIRECTION_ARROWS: dict[str, str] = {"up": "↑", "down": "↓", "stable": "→"}

SPARK_CHARS = " ▁▂▃▄▅▆▇█"


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool) -> None:
    """Mention Trends - trend scores and momentum for mentioned subjects."""
    setup_logging(level="DEBUG" if debug else None)


def _build_config(legacy: bool) -> DecayConfig:
    try:
        return DecayConfig.legacy() if legacy else DecayConfig()
    except TrendingError as e:
        raise click.ClickException(str(e)) from e


def _sparkline(timeline: list[int]) -> str:
    """Render per-day counts as a block-character sparkline."""
    peak = max(timeline, default=0)
    if peak == 0:
        return SPARK_CHARS[0] * len(timeline)
    top = len(SPARK_CHARS) - 1
    return "".join(SPARK_CHARS[round(count / peak * top)] for count in timeline)


@main.command()
@click.argument("mentions_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--today", "today", default=None, type=click.DateTime(formats=["%Y-%m-%d"]),
              help="Reference day (YYYY-MM-DD). Defaults to today (UTC).")
@click.option("--limit", default=None, type=int, help="Maximum subjects to list")
@click.option("--legacy", is_flag=True, help="Use near-uniform weighting and legacy thresholds")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@click.option("--metrics/--no-metrics", default=False, help="Expose Prometheus metrics while running")
@click.option("--metrics-port", default=None, type=int, help="Metrics server port (default from settings)")
def trending(
    mentions_file: str,
    today: Any,
    limit: int | None,
    legacy: bool,
    as_json: bool,
    metrics: bool,
    metrics_port: int | None,
) -> None:
    """List the top trending subjects in a mentions file.

    Example:
        mention-trends trending mentions.json --today 2025-12-29 --limit 5
    """
    config = _build_config(legacy)
    limit = limit or get_settings().trending_default_limit
    reference_day = today.date() if today else None

    collector = get_metrics()
    if metrics:
        collector.start_server(port=metrics_port)

    service = TrendingService(
        config=config,
        mention_source=JsonMentionSource(mentions_file),
        metrics=collector,
    )

    try:
        ranked = asyncio.run(service.get_trending(limit=limit, today=reference_day))
    except (TrendingError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        click.echo(json.dumps([entry.to_dict() for entry in ranked], indent=2))
        return

    if not ranked:
        click.echo("No subjects found.")
        return

    click.echo("\nTrending Subjects")
    click.echo("=" * 78)
    click.echo(f"  {'#':>3}  {'Subject':24s} {'Score':>7} {'Vel':>6}  {'Phase':8s} {'Days':>4}  Timeline")
    for entry in ranked:
        result = entry.result
        days = "-" if result.days_since_last_mention is None else str(result.days_since_last_mention)
        arrow = DIRECTION_ARROWS.get(entry.direction, " ")
        click.echo(
            f"  {entry.rank:>3}  {entry.name[:24]:24s} {result.trend_score:>7.2f} "
            f"{result.velocity:>5d}{arrow}  {PHASE_LABELS[result.phase]:8s} {days:>4}  "
            f"{_sparkline(result.timeline)}"
        )


@main.command()
@click.argument("mentions_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("subject_id")
@click.option("--today", "today", default=None, type=click.DateTime(formats=["%Y-%m-%d"]),
              help="Reference day (YYYY-MM-DD). Defaults to today (UTC).")
@click.option("--legacy", is_flag=True, help="Use near-uniform weighting and legacy thresholds")
def score(mentions_file: str, subject_id: str, today: Any, legacy: bool) -> None:
    """Show the full trend breakdown for one subject.

    Example:
        mention-trends score mentions.json isco-alarcon --today 2025-12-29
    """
    config = _build_config(legacy)
    service = TrendingService(config=config)
    source = JsonMentionSource(mentions_file)

    reference_day: date = today.date() if today else utc_today()
    window_start = reference_day - timedelta(days=config.window_days - 1)

    bind_context(subject_id=subject_id)
    try:
        histories = asyncio.run(source.get_subject_histories(window_start, reference_day))
        history = next((h for h in histories if h.subject_id == subject_id), None)
        if history is None:
            raise click.ClickException(f"Subject {subject_id!r} not found in {mentions_file}")

        entry = service.score_subject(history, reference_day)
        logger.debug("Scored subject", phase=entry.result.phase)
    except (TrendingError, ValueError) as e:
        raise click.ClickException(str(e)) from e
    finally:
        clear_context()

    result = entry.result
    click.echo(f"\n{entry.name}")
    click.echo("=" * 40)
    click.echo(f"  Trend score:      {result.trend_score:.4f}")
    click.echo(f"  Velocity:         {result.velocity:+d}% {DIRECTION_ARROWS[entry.direction]}")
    click.echo(f"  Phase:            {result.phase}")
    days = "never mentioned" if result.days_since_last_mention is None else result.days_since_last_mention
    click.echo(f"  Days since last:  {days}")
    click.echo(f"  Active:           {'yes' if entry.is_active else 'no'}")
    click.echo(f"  Total mentions:   {entry.total_mentions}")

    click.echo(f"\n  Last {len(result.timeline)} days (oldest first):")
    for offset, count in enumerate(result.timeline):
        day = reference_day - timedelta(days=len(result.timeline) - 1 - offset)
        click.echo(f"    {day.isoformat()}  {count:>3}  {'#' * count}")


if __name__ == "__main__":
    main()
