"""Momentum phase classifier.

Classifies a subject into one of five momentum phases from its trend
score, velocity, and days since its last mention:
- DORMANT: No history, or long silence with a near-zero score
- HOT: High score, strong positive velocity, mentioned very recently
- RISING: Positive velocity with a decent score
- COOLING: Negative velocity, or quiet for a few days with a low score
- STABLE: Everything else

The rules overlap, so they are evaluated as an ordered cascade and the
first match wins.
"""

import logging

from src.trending.config import DecayConfig

logger = logging.getLogger(__name__)

# Days of silence after which a low-score subject counts as cooling.
QUIET_DAYS = 3


class MomentumClassifier:
    """Stateless classifier for momentum phases.

    Every call is a pure function of its arguments and the config; no
    phase history is kept between calls.
    """

    def __init__(self, config: DecayConfig | None = None) -> None:
        self._config = config or DecayConfig()

    @property
    def config(self) -> DecayConfig:
        return self._config

    def classify(
        self,
        trend_score: float,
        velocity: float,
        days_since_last_mention: int | None,
    ) -> str:
        """Classify a subject into a momentum phase.

        Args:
            trend_score: Decay-weighted trend score.
            velocity: Velocity percentage.
            days_since_last_mention: Days since the latest mention, or
                None if the subject has never been mentioned.

        Returns:
            One of "hot", "rising", "stable", "cooling", "dormant".
        """
        cfg = self._config

        # Rule cascade: first match wins
        if days_since_last_mention is None:
            return "dormant"

        if (
            days_since_last_mention >= cfg.cold_threshold_days
            and trend_score < cfg.cold_score_threshold
        ):
            return "dormant"

        if (
            trend_score >= cfg.hot_score_threshold
            and velocity >= cfg.hot_velocity_threshold
            and days_since_last_mention <= cfg.recency_bonus_days
        ):
            return "hot"

        if (
            velocity >= cfg.rising_velocity_threshold
            and trend_score >= cfg.min_active_score
        ):
            return "rising"

        if velocity <= cfg.cooling_velocity_threshold or (
            days_since_last_mention > QUIET_DAYS
            and trend_score < cfg.min_active_score
        ):
            return "cooling"

        return "stable"
