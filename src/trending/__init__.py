"""
Trend and momentum detection for mentioned subjects.

Turns a sparse history of daily mentions of a subject (e.g. a player
named in transfer-rumor articles) into a comparable trend score, a
directional velocity, a momentum phase, and a stable ranking across
subjects. Every computation is a pure function of the mentions, the
reference day and the configuration.

Components:
- build_timeline: Sparse mentions -> fixed-length per-day counts
- decay_weight / compute_trend_score: Half-life decay scoring
- compute_velocity: Recent vs previous sub-window momentum
- MomentumClassifier: Ordered rule cascade over score/velocity/recency
- rank: Score-descending ranking with a recency tie-break
- compute_trend: Full single-subject pipeline
- TrendingService: Top-K listing over a mention source
"""

from src.trending.config import DecayConfig
from src.trending.decay import compute_trend_score, decay_weight
from src.trending.engine import compute_trend
from src.trending.errors import ConfigurationError, TrendingError, ValidationError
from src.trending.phases import MomentumClassifier
from src.trending.ranking import rank, rank_results
from src.trending.schemas import (
    VALID_PHASES,
    Mention,
    SubjectHistory,
    TrendingSubject,
    TrendResult,
)
from src.trending.service import TrendingService
from src.trending.sources import JsonMentionSource
from src.trending.timeline import (
    aggregate_mentions,
    build_timeline,
    days_since_last_mention,
)
from src.trending.velocity import compute_velocity, trend_direction

__all__ = [
    "ConfigurationError",
    "DecayConfig",
    "JsonMentionSource",
    "Mention",
    "MomentumClassifier",
    "SubjectHistory",
    "TrendResult",
    "TrendingError",
    "TrendingService",
    "TrendingSubject",
    "VALID_PHASES",
    "ValidationError",
    "aggregate_mentions",
    "build_timeline",
    "compute_trend",
    "compute_trend_score",
    "compute_velocity",
    "days_since_last_mention",
    "decay_weight",
    "rank",
    "rank_results",
    "trend_direction",
]
