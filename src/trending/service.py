"""Trending subjects service.

Scores every candidate subject, ranks them, and returns a top-K listing
with the filled timeline each subject needs for a sparkline.

Pure computation methods (no I/O, stateless):
  - ``score_subject`` — TrendResult + listing fields for one subject
  - ``rank_subjects`` — score all subjects, sort, assign rank positions

Async orchestrator:
  - ``get_trending`` — fetches subject histories from a mention source,
    ranks them, and truncates to the requested limit
"""

import time
from datetime import date, timedelta
from typing import Any

import structlog

from src.observability.metrics import MetricsCollector
from src.trending.config import DecayConfig
from src.trending.engine import compute_trend
from src.trending.ranking import rank_key
from src.trending.schemas import SubjectHistory, TrendingSubject, to_day, utc_today
from src.trending.velocity import trend_direction

logger = structlog.get_logger(__name__)


class TrendingService:
    """Builds ranked trending listings from subject mention histories.

    The mention source is duck-typed: any object with an async
    ``get_subject_histories(start, end)`` returning a list of
    ``SubjectHistory`` works (a database repository, a file reader, or a
    test double).
    """

    def __init__(
        self,
        config: DecayConfig | None = None,
        mention_source: Any = None,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self._config = config or DecayConfig()
        self._mention_source = mention_source
        self._metrics = metrics

    @property
    def config(self) -> DecayConfig:
        return self._config

    # ── Pure computation methods ─────────────────────────

    def score_subject(self, history: SubjectHistory, today: date) -> TrendingSubject:
        """Compute the trend result and listing fields for one subject.

        The returned entry carries ``rank=0``; ranks are assigned by
        ``rank_subjects``.
        """
        today = to_day(today)
        result = compute_trend(
            history.mentions,
            today,
            self._config,
            last_mentioned=history.last_seen,
        )

        days_since = result.days_since_last_mention
        is_active = days_since is not None and days_since <= self._config.active_days

        return TrendingSubject(
            subject_id=history.subject_id,
            name=history.display_name,
            rank=0,
            result=result,
            direction=trend_direction(
                result.velocity, self._config.trend_direction_threshold
            ),
            is_active=is_active,
            total_mentions=history.total_mentions
            or sum(m.count for m in history.mentions),
            first_seen=history.first_seen,
            last_seen=history.last_seen,
        )

    def rank_subjects(
        self,
        histories: list[SubjectHistory],
        today: date,
    ) -> list[TrendingSubject]:
        """Score all subjects, sort into ranked order, and number them.

        Args:
            histories: Candidate subjects.
            today: Reference day.

        Returns:
            TrendingSubject list, highest trend score first, ranks 1..n.
        """
        if not histories:
            return []

        scored = [self.score_subject(history, today) for history in histories]
        scored.sort(key=lambda entry: rank_key(entry.result))

        for position, entry in enumerate(scored, start=1):
            entry.rank = position

        return scored

    # ── Async orchestrator ───────────────────────────────

    async def get_trending(
        self,
        limit: int = 10,
        today: date | None = None,
    ) -> list[TrendingSubject]:
        """Fetch subject histories, rank them, and return the top entries.

        Args:
            limit: Maximum number of subjects to return.
            today: Reference day. Defaults to the current UTC day.

        Returns:
            Top ``limit`` TrendingSubject entries in ranked order.

        Raises:
            ValueError: If ``limit`` is less than 1.
            RuntimeError: If no mention source is configured.
        """
        if limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")
        if self._mention_source is None:
            raise RuntimeError("mention_source is required for get_trending")

        today = to_day(today) if today is not None else utc_today()
        window_start = today - timedelta(days=self._config.window_days - 1)

        start = time.perf_counter()
        try:
            histories = await self._mention_source.get_subject_histories(
                window_start, today
            )
            ranked = self.rank_subjects(histories, today)
        except Exception as e:
            logger.error("Trending listing failed", error=str(e))
            if self._metrics is not None:
                self._metrics.record_error(type(e).__name__)
            raise

        if self._metrics is not None:
            self._metrics.record_ranking(
                phases=[entry.result.phase for entry in ranked],
                latency=time.perf_counter() - start,
            )

        logger.info(
            "Ranked trending subjects",
            today=today.isoformat(),
            candidates=len(histories),
            returned=min(limit, len(ranked)),
        )

        return ranked[:limit]
