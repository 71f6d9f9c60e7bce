"""Timeline construction from sparse mention records.

Converts a sparse set of per-day mentions into the dense, fixed-length
per-day array used for velocity computation and sparklines. Also holds
the small helpers that prepare mention data for the engine: per-day
aggregation of raw events and days-since-last-mention.

All functions are stateless and side-effect free.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable
from datetime import date
from typing import Any

from src.trending.errors import ValidationError
from src.trending.schemas import Mention, to_day, utc_today

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_DAYS = 14


def build_timeline(
    mentions: Iterable[Mention],
    window_days: int = DEFAULT_WINDOW_DAYS,
    today: date | None = None,
) -> list[int]:
    """Build a filled per-day count array anchored to ``today``.

    Index 0 is ``window_days - 1`` days before today, the last index is
    today. Mentions outside the window are left out; mentions dated after
    today are treated as clock skew and dropped. Counts that land on the
    same day are summed.

    Args:
        mentions: Sparse mentions in any order.
        window_days: Number of days in the output (N).
        today: Anchor day. Defaults to the current UTC day.

    Returns:
        List of exactly ``window_days`` non-negative integers.

    Raises:
        ValidationError: If ``window_days`` is less than 1.
    """
    if window_days < 1:
        raise ValidationError(
            f"window_days must be >= 1, got {window_days}", value=window_days
        )

    today_number = to_day(today if today is not None else utc_today()).toordinal()
    start_number = today_number - (window_days - 1)

    filled = [0] * window_days
    dropped_future = 0
    for mention in mentions:
        day_number = mention.day_number
        if day_number > today_number:
            dropped_future += 1
            continue
        if day_number < start_number:
            continue
        filled[day_number - start_number] += mention.count

    if dropped_future:
        logger.debug("Dropped %d future-dated mentions", dropped_future)

    return filled


def aggregate_mentions(events: Iterable[Any]) -> list[Mention]:
    """Sum raw mention events into one Mention per calendar day.

    Each event is either a date-like value (counted once) or a
    ``(date_like, count)`` pair. Timestamps collapse to their UTC day.

    Args:
        events: Raw mention events, e.g. article publication timestamps.

    Returns:
        Mentions sorted by date ascending, at most one per day.

    Raises:
        ValidationError: If an event carries an unparseable date or an
            invalid count.
    """
    per_day: dict[date, int] = defaultdict(int)
    for event in events:
        if isinstance(event, Mention):
            per_day[event.date] += event.count
            continue
        if isinstance(event, tuple):
            if len(event) != 2:
                raise ValidationError(
                    f"Expected (date, count) pair, got {event!r}", value=event
                )
            raw_date, count = event
            # Validates the count the same way a single record would.
            mention = Mention(date=to_day(raw_date), count=count)
            per_day[mention.date] += mention.count
            continue
        per_day[to_day(event)] += 1

    return [Mention(date=day, count=count) for day, count in sorted(per_day.items())]


def days_since_last_mention(
    mentions: Iterable[Mention],
    today: date | None = None,
) -> int | None:
    """Whole days between the latest non-future mention and ``today``.

    Returns:
        Non-negative day count, or None when there is no mention on or
        before today.
    """
    today_number = to_day(today if today is not None else utc_today()).toordinal()
    latest = max(
        (m.day_number for m in mentions if m.day_number <= today_number),
        default=None,
    )
    if latest is None:
        return None
    return today_number - latest
