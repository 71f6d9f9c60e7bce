"""Single-subject trend computation.

``compute_trend`` runs the whole pipeline for one subject:
timeline builder -> decay scorer -> velocity calculator -> phase classifier.
It is a pure function of the mentions, the reference day and the config.
"""

import logging
from collections.abc import Iterable
from datetime import date

from src.trending.config import DecayConfig
from src.trending.decay import compute_trend_score
from src.trending.phases import MomentumClassifier
from src.trending.schemas import Mention, TrendResult, to_day
from src.trending.timeline import build_timeline, days_since_last_mention
from src.trending.velocity import compute_velocity

logger = logging.getLogger(__name__)


def compute_trend(
    mentions: Iterable[Mention],
    today: date,
    config: DecayConfig | None = None,
    last_mentioned: date | None = None,
) -> TrendResult:
    """Compute score, velocity and phase for one subject.

    Args:
        mentions: Sparse per-day mentions (typically bounded to the
            timeline window by the caller).
        today: Reference day.
        config: Decay and threshold parameters.
        last_mentioned: Most recent mention day known to the data
            source. Lets a subject whose last mention lies outside the
            supplied window still report how long it has been silent.
            Future values are ignored.

    Returns:
        A fresh TrendResult including the filled timeline.
    """
    config = config or DecayConfig()
    today = to_day(today)
    mentions = list(mentions)

    timeline = build_timeline(mentions, config.window_days, today)
    trend_score = compute_trend_score(mentions, today, config)
    velocity = compute_velocity(timeline, config.half_life_days)
    days_since = _resolve_days_since(mentions, today, last_mentioned)

    phase = MomentumClassifier(config).classify(trend_score, velocity, days_since)

    logger.debug(
        "Computed trend score=%.4f velocity=%d days_since=%s phase=%s",
        trend_score,
        velocity,
        days_since,
        phase,
    )

    return TrendResult(
        trend_score=trend_score,
        velocity=velocity,
        phase=phase,
        days_since_last_mention=days_since,
        timeline=timeline,
    )


def _resolve_days_since(
    mentions: list[Mention],
    today: date,
    last_mentioned: date | None,
) -> int | None:
    """Freshest of the mention-derived and source-supplied last mention."""
    candidates = []

    from_mentions = days_since_last_mention(mentions, today)
    if from_mentions is not None:
        candidates.append(from_mentions)

    if last_mentioned is not None:
        gap = today.toordinal() - to_day(last_mentioned).toordinal()
        if gap >= 0:
            candidates.append(gap)

    return min(candidates) if candidates else None
