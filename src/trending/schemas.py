"""Schema definitions for mention timelines and trend results.

Dates are calendar days. Anything time-of-day aware is collapsed to its
UTC calendar day on the way in so that age and window arithmetic are
exact integer operations over ``date.toordinal()``.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Literal

from src.trending.errors import ValidationError

MomentumPhase = Literal["hot", "rising", "stable", "cooling", "dormant"]
TrendDirection = Literal["up", "down", "stable"]

VALID_PHASES = frozenset({"hot", "rising", "stable", "cooling", "dormant"})


def utc_today() -> date:
    """Current calendar day in UTC."""
    return datetime.now(timezone.utc).date()


def to_day(value: Any) -> date:
    """Normalize a date-like value to a UTC calendar day.

    Accepts ``date``, ``datetime`` (naive values are treated as UTC) and
    ISO-8601 strings (``2025-12-28`` or ``2025-12-28T10:00:00Z``).

    Raises:
        ValidationError: If the value cannot be interpreted as a date.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValidationError("Empty date string", value=value)
        try:
            if "T" in text or " " in text:
                return to_day(datetime.fromisoformat(text.replace("Z", "+00:00")))
            return date.fromisoformat(text)
        except ValueError as e:
            raise ValidationError(f"Unparseable date {value!r}: {e}", value=value) from e
    raise ValidationError(
        f"Expected a date, datetime or ISO string, got {type(value).__name__}",
        value=value,
    )


@dataclass(frozen=True)
class Mention:
    """Mentions of one subject on one calendar day.

    Attributes:
        date: Calendar day of the mentions.
        count: Number of mentions that day (>= 1).
    """

    date: date
    count: int = 1

    def __post_init__(self) -> None:
        object.__setattr__(self, "date", to_day(self.date))
        if isinstance(self.count, bool) or not isinstance(self.count, int):
            raise ValidationError(
                f"Mention count must be an integer, got {self.count!r}",
                value=self.count,
            )
        if self.count < 1:
            raise ValidationError(
                f"Mention count must be >= 1, got {self.count}",
                value=self.count,
            )

    @property
    def day_number(self) -> int:
        """Integer day ordinal used for all age arithmetic."""
        return self.date.toordinal()

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {"date": self.date.isoformat(), "count": self.count}


@dataclass
class TrendResult:
    """Derived trend state of one subject, recomputed on every call.

    Attributes:
        trend_score: Decay-weighted mention score (>= 0).
        velocity: Signed percentage change recent vs previous sub-window.
        phase: One of hot, rising, stable, cooling, dormant.
        days_since_last_mention: Days since the latest mention, or None
            when the subject has no history at all.
        timeline: Filled per-day counts, oldest first, last entry = today.
    """

    trend_score: float
    velocity: int
    phase: str
    days_since_last_mention: int | None
    timeline: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.phase not in VALID_PHASES:
            raise ValueError(
                f"Invalid phase {self.phase!r}. "
                f"Must be one of: {sorted(VALID_PHASES)}"
            )

    @property
    def has_history(self) -> bool:
        return self.days_since_last_mention is not None

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            "trend_score": round(self.trend_score, 6),
            "velocity": self.velocity,
            "phase": self.phase,
            "days_since_last_mention": self.days_since_last_mention,
            "timeline": list(self.timeline),
        }


@dataclass
class SubjectHistory:
    """Mention history for one subject as supplied by a data source.

    ``mentions`` is bounded to the lookback window requested from the
    source. The lifetime fields cover the subject's whole history so
    that a last mention outside the window is still known.

    Attributes:
        subject_id: Stable subject identifier (e.g. normalized name).
        mentions: Per-day mentions inside the lookback window.
        name: Display name.
        total_mentions: Lifetime mention count.
        first_seen: Day of the earliest known mention.
        last_seen: Day of the latest known mention, None if no history.
    """

    subject_id: str
    mentions: list[Mention] = field(default_factory=list)
    name: str | None = None
    total_mentions: int = 0
    first_seen: date | None = None
    last_seen: date | None = None

    @property
    def display_name(self) -> str:
        return self.name or self.subject_id


@dataclass
class TrendingSubject:
    """A subject with its trend result and position in a ranked listing.

    Attributes:
        subject_id: Stable subject identifier.
        name: Display name.
        rank: 1-indexed position in the listing.
        result: Computed TrendResult (includes the filled timeline).
        direction: Sparkline indicator derived from velocity.
        is_active: Whether the subject was mentioned recently.
        total_mentions: Lifetime mention count.
        first_seen: Day of the earliest known mention.
        last_seen: Day of the latest known mention.
    """

    subject_id: str
    name: str
    rank: int
    result: TrendResult
    direction: str = "stable"
    is_active: bool = False
    total_mentions: int = 0
    first_seen: date | None = None
    last_seen: date | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            "subject_id": self.subject_id,
            "name": self.name,
            "rank": self.rank,
            "direction": self.direction,
            "is_active": self.is_active,
            "total_mentions": self.total_mentions,
            "first_seen": self.first_seen.isoformat() if self.first_seen else None,
            "last_seen": self.last_seen.isoformat() if self.last_seen else None,
            **self.result.to_dict(),
        }
