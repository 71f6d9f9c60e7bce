"""Pytest fixtures for mention-trends tests."""

from datetime import date, timedelta

import pytest

from src.config.settings import Settings
from src.trending.schemas import Mention


@pytest.fixture
def test_settings() -> Settings:
    """Settings configured for testing."""
    return Settings(
        environment="development",
        log_level="DEBUG",
    )


@pytest.fixture
def today() -> date:
    """Fixed reference day so every computation is reproducible."""
    return date(2025, 12, 29)


@pytest.fixture
def mentions_ago(today: date):
    """Factory: ``mentions_ago({0: 2, 3: 1})`` -> Mentions N days before today."""

    def _make(counts_by_age: dict[int, int]) -> list[Mention]:
        return [
            Mention(date=today - timedelta(days=age), count=count)
            for age, count in counts_by_age.items()
        ]

    return _make
