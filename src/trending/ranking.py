"""Ranking of subjects by trend score.

Ordering keys:
  1. trend_score, descending
  2. days_since_last_mention, ascending (fresher subjects win score ties)

Subjects without any history sort after every subject with history on a
score tie. Python's ``sorted`` is stable, so subjects with identical
keys keep their input order.
"""

import math
from collections.abc import Sequence
from typing import TypeVar

from src.trending.schemas import TrendResult

T = TypeVar("T")


def rank_key(result: TrendResult) -> tuple[float, float]:
    """Sort key for a TrendResult (ascending sort gives ranked order)."""
    days = result.days_since_last_mention
    return (
        -result.trend_score,
        math.inf if days is None else days,
    )


def rank_results(results: Sequence[tuple[T, TrendResult]]) -> list[tuple[T, TrendResult]]:
    """Sort (subject, result) pairs into ranked order, keeping the pairs."""
    return sorted(results, key=lambda pair: rank_key(pair[1]))


def rank(results: Sequence[tuple[T, TrendResult]]) -> list[T]:
    """Order subject ids by trend score with a recency tie-break.

    Args:
        results: (subject_id, TrendResult) pairs in any order.

    Returns:
        Subject ids, highest trend score first.
    """
    return [subject_id for subject_id, _ in rank_results(results)]
