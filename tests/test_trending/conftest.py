"""Pytest fixtures for trending engine tests."""

import pytest

from src.trending.config import DecayConfig
from src.trending.schemas import TrendResult


@pytest.fixture
def config() -> DecayConfig:
    """Default decay configuration."""
    return DecayConfig()


@pytest.fixture
def no_bonus_config() -> DecayConfig:
    """3-day half-life with the recency bonus switched off."""
    return DecayConfig(half_life_days=3.0, recency_bonus_multiplier=1.0)


@pytest.fixture
def make_result():
    """Factory building a TrendResult with only the fields ranking cares about."""

    def _make(
        trend_score: float,
        days_since_last_mention: int | None = 0,
        velocity: int = 0,
        phase: str = "stable",
    ) -> TrendResult:
        return TrendResult(
            trend_score=trend_score,
            velocity=velocity,
            phase=phase,
            days_since_last_mention=days_since_last_mention,
            timeline=[0] * 14,
        )

    return _make
