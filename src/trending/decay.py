"""Half-life decay scoring for mention timelines.

Each mention contributes ``count * exp(-age * ln2 / half_life)``, with an
extra multiplier for very recent mentions. The score values aggregate
volume, weights recent activity more heavily, and cools smoothly: a
missing day barely moves it and there are no hard cutoffs.

With a 3-day half-life:
  - 0 days ago: 1.0
  - 1 day ago: ~0.79
  - 3 days ago: 0.5
  - 7 days ago: ~0.20
  - 14 days ago: ~0.05
"""

import logging
import math
from collections.abc import Iterable
from datetime import date

from src.trending.config import DecayConfig
from src.trending.schemas import Mention, to_day

logger = logging.getLogger(__name__)


def decay_weight(age_days: float, half_life_days: float) -> float:
    """Exponential decay weight for a mention ``age_days`` old.

    Args:
        age_days: Age of the mention in days. Negative ages (future
            mentions) never contribute.
        half_life_days: Days until the weight halves. Must be > 0.

    Returns:
        Weight in (0, 1], or 0.0 for negative ages.
    """
    if age_days < 0:
        return 0.0
    decay_rate = math.log(2) / half_life_days
    return math.exp(-age_days * decay_rate)


def compute_trend_score(
    mentions: Iterable[Mention],
    today: date,
    config: DecayConfig | None = None,
) -> float:
    """Sum the decayed, recency-boosted contribution of every mention.

    Works on the sparse form directly, so it is not limited to the
    filled-timeline window; callers may pass any length of history.

    Args:
        mentions: Sparse per-day mentions.
        today: Reference day (age 0).
        config: Decay parameters. Defaults to ``DecayConfig()``.

    Returns:
        Non-negative score. 0.0 for an empty or all-future history.
    """
    config = config or DecayConfig()
    today_number = to_day(today).toordinal()

    score = 0.0
    for mention in mentions:
        age = today_number - mention.day_number
        weight = decay_weight(age, config.half_life_days)
        if weight == 0.0:
            continue

        bonus = (
            config.recency_bonus_multiplier
            if age <= config.recency_bonus_days
            else 1.0
        )
        score += mention.count * weight * bonus

    return score
