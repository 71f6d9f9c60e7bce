"""Momentum velocity over a filled timeline.

Velocity compares a decay-weighted recent sub-window (the last 3 days)
against the decay-weighted 4 days before it and reports the signed
percentage change. Positive means mentions are picking up, negative
means they are dying down. Values are not clamped.
"""

import math
from collections.abc import Sequence

from src.trending.config import DecayConfig
from src.trending.decay import decay_weight

# Sub-window sizes. Together they need a timeline of at least 7 days.
RECENT_WINDOW_DAYS = 3
PREVIOUS_WINDOW_DAYS = 4
MIN_TIMELINE_DAYS = RECENT_WINDOW_DAYS + PREVIOUS_WINDOW_DAYS

# Velocity reported when there was no previous activity but there is now.
NEW_ACTIVITY_VELOCITY = 100


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3).

    Python's ``round`` uses banker's rounding, which would move
    classification boundaries on exact .5 values.
    """
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def compute_velocity(
    filled_timeline: Sequence[int],
    half_life_days: float | None = None,
) -> int:
    """Signed percentage change between the recent and previous sub-windows.

    Args:
        filled_timeline: Per-day counts, oldest first, last entry = today.
        half_life_days: Decay half-life. Defaults to ``DecayConfig()``'s.

    Returns:
        Integer percentage. 0 for timelines shorter than 7 days or with
        no activity in either sub-window; 100 when only the recent
        sub-window has activity.
    """
    if len(filled_timeline) < MIN_TIMELINE_DAYS:
        return 0

    if half_life_days is None:
        half_life_days = DecayConfig().half_life_days

    recent = filled_timeline[-RECENT_WINDOW_DAYS:]
    previous = filled_timeline[-MIN_TIMELINE_DAYS:-RECENT_WINDOW_DAYS]

    # Ages run oldest to newest: recent = 2, 1, 0; previous = 6, 5, 4, 3.
    recent_score = sum(
        count * decay_weight(RECENT_WINDOW_DAYS - 1 - i, half_life_days)
        for i, count in enumerate(recent)
    )
    previous_score = sum(
        count * decay_weight(MIN_TIMELINE_DAYS - 1 - i, half_life_days)
        for i, count in enumerate(previous)
    )

    if previous_score == 0:
        return NEW_ACTIVITY_VELOCITY if recent_score > 0 else 0

    return round_half_away_from_zero(
        (recent_score - previous_score) / previous_score * 100
    )


def trend_direction(velocity: float, threshold: float | None = None) -> str:
    """Map a velocity to a sparkline indicator: "up", "down" or "stable".

    Args:
        velocity: Velocity percentage.
        threshold: Symmetric threshold. Defaults to
            ``DecayConfig().trend_direction_threshold``.
    """
    if threshold is None:
        threshold = DecayConfig().trend_direction_threshold
    if velocity > threshold:
        return "up"
    if velocity < -threshold:
        return "down"
    return "stable"
