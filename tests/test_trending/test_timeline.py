"""Tests for timeline construction, mention aggregation and recency helpers."""

from datetime import date, datetime, timedelta, timezone

import pytest

from src.trending.errors import ValidationError
from src.trending.schemas import Mention, to_day
from src.trending.timeline import (
    DEFAULT_WINDOW_DAYS,
    aggregate_mentions,
    build_timeline,
    days_since_last_mention,
)


# ── Mention / to_day ────────────────────────────────────────


class TestMention:
    """Validation of Mention records and date normalization."""

    def test_accepts_date(self) -> None:
        mention = Mention(date=date(2025, 12, 28), count=2)
        assert mention.date == date(2025, 12, 28)
        assert mention.count == 2

    def test_parses_iso_string(self) -> None:
        assert Mention(date="2025-12-28").date == date(2025, 12, 28)

    def test_timestamp_collapses_to_utc_day(self) -> None:
        """23:30 at UTC-2 is already the next day in UTC."""
        mention = Mention(date="2025-12-28T23:30:00-02:00")
        assert mention.date == date(2025, 12, 29)

    def test_z_suffix_timestamp(self) -> None:
        assert to_day("2025-12-28T10:00:00Z") == date(2025, 12, 28)

    def test_naive_datetime_treated_as_utc(self) -> None:
        assert to_day(datetime(2025, 12, 28, 23, 59)) == date(2025, 12, 28)

    def test_aware_datetime_converted(self) -> None:
        ts = datetime(2025, 12, 29, 0, 30, tzinfo=timezone(timedelta(hours=2)))
        assert to_day(ts) == date(2025, 12, 28)

    @pytest.mark.parametrize("bad", ["not-a-date", "2025-13-45", "", None, 20251228])
    def test_malformed_date_fails_fast(self, bad: object) -> None:
        with pytest.raises(ValidationError):
            Mention(date=bad)  # type: ignore[arg-type]

    @pytest.mark.parametrize("bad", [0, -3, 1.5, "2", True])
    def test_invalid_count_rejected(self, bad: object) -> None:
        with pytest.raises(ValidationError):
            Mention(date=date(2025, 12, 28), count=bad)  # type: ignore[arg-type]

    def test_day_number_is_ordinal(self) -> None:
        mention = Mention(date=date(2025, 12, 28))
        assert mention.day_number == date(2025, 12, 28).toordinal()

    def test_to_dict(self) -> None:
        assert Mention(date=date(2025, 12, 28), count=3).to_dict() == {
            "date": "2025-12-28",
            "count": 3,
        }


# ── build_timeline ──────────────────────────────────────────


class TestBuildTimeline:
    """Tests for the sparse -> filled timeline conversion."""

    def test_empty_input_all_zeros(self, today: date) -> None:
        assert build_timeline([], 14, today) == [0] * 14

    def test_default_window(self, today: date) -> None:
        assert len(build_timeline([], today=today)) == DEFAULT_WINDOW_DAYS

    def test_today_is_last_index(self, today: date, mentions_ago) -> None:
        filled = build_timeline(mentions_ago({0: 5}), 14, today)
        assert filled[-1] == 5
        assert sum(filled) == 5

    def test_oldest_day_is_first_index(self, today: date, mentions_ago) -> None:
        filled = build_timeline(mentions_ago({13: 4}), 14, today)
        assert filled[0] == 4

    def test_day_before_window_excluded(self, today: date, mentions_ago) -> None:
        filled = build_timeline(mentions_ago({14: 4, 30: 9}), 14, today)
        assert filled == [0] * 14

    def test_future_mentions_dropped(self, today: date, mentions_ago) -> None:
        """Clock-skew mentions are silently dropped, not rejected."""
        mentions = mentions_ago({-1: 3, -5: 2, 0: 1})
        filled = build_timeline(mentions, 14, today)
        assert filled[-1] == 1
        assert sum(filled) == 1

    def test_duplicate_days_summed(self, today: date) -> None:
        mentions = [Mention(date=today, count=2), Mention(date=today, count=3)]
        assert build_timeline(mentions, 7, today)[-1] == 5

    def test_order_independent(self, today: date, mentions_ago) -> None:
        mentions = mentions_ago({0: 1, 5: 2, 9: 3})
        assert build_timeline(mentions, 14, today) == build_timeline(
            list(reversed(mentions)), 14, today
        )

    def test_positions(self, today: date, mentions_ago) -> None:
        filled = build_timeline(mentions_ago({0: 2, 1: 2, 2: 1, 7: 2, 8: 1, 9: 2}), 14, today)
        assert filled == [0, 0, 0, 0, 2, 1, 2, 0, 0, 0, 0, 1, 2, 2]

    @pytest.mark.parametrize("window", [1, 7, 14, 30])
    def test_length_always_window(self, today: date, mentions_ago, window: int) -> None:
        filled = build_timeline(mentions_ago({0: 1, 3: 2, 20: 5, -2: 1}), window, today)
        assert len(filled) == window

    def test_sum_never_exceeds_input(self, today: date, mentions_ago) -> None:
        mentions = mentions_ago({0: 1, 4: 2, 13: 3, 14: 4, -1: 5})
        filled = build_timeline(mentions, 14, today)
        assert sum(filled) <= sum(m.count for m in mentions)
        assert sum(filled) == 6

    def test_today_accepts_timestamp(self, today: date, mentions_ago) -> None:
        now = datetime(today.year, today.month, today.day, 18, 0, tzinfo=timezone.utc)
        assert build_timeline(mentions_ago({0: 1}), 3, now) == [0, 0, 1]

    def test_zero_window_rejected(self, today: date) -> None:
        with pytest.raises(ValidationError):
            build_timeline([], 0, today)


# ── aggregate_mentions ──────────────────────────────────────


class TestAggregateMentions:
    """Tests for per-day aggregation of raw mention events."""

    def test_timestamps_grouped_by_day(self) -> None:
        events = [
            "2025-12-28T10:00:00Z",
            "2025-12-28T18:30:00Z",
            "2025-12-27T09:00:00Z",
        ]
        mentions = aggregate_mentions(events)
        assert mentions == [
            Mention(date=date(2025, 12, 27), count=1),
            Mention(date=date(2025, 12, 28), count=2),
        ]

    def test_pairs_with_counts(self) -> None:
        mentions = aggregate_mentions([("2025-12-28", 2), (date(2025, 12, 28), 3)])
        assert mentions == [Mention(date=date(2025, 12, 28), count=5)]

    def test_mentions_passed_through_and_merged(self) -> None:
        mentions = aggregate_mentions(
            [Mention(date=date(2025, 12, 28), count=1), date(2025, 12, 28)]
        )
        assert mentions == [Mention(date=date(2025, 12, 28), count=2)]

    def test_empty(self) -> None:
        assert aggregate_mentions([]) == []

    def test_unparseable_date_raises(self) -> None:
        with pytest.raises(ValidationError):
            aggregate_mentions(["2025-12-28", "yesterday"])

    def test_bad_pair_count_raises(self) -> None:
        with pytest.raises(ValidationError):
            aggregate_mentions([("2025-12-28", 0)])

    def test_wrong_tuple_shape_raises(self) -> None:
        with pytest.raises(ValidationError):
            aggregate_mentions([("2025-12-28", 1, "extra")])


# ── days_since_last_mention ─────────────────────────────────


class TestDaysSinceLastMention:
    def test_no_mentions_is_none(self, today: date) -> None:
        assert days_since_last_mention([], today) is None

    def test_latest_mention_wins(self, today: date, mentions_ago) -> None:
        assert days_since_last_mention(mentions_ago({9: 1, 4: 1, 6: 2}), today) == 4

    def test_mention_today_is_zero(self, today: date, mentions_ago) -> None:
        assert days_since_last_mention(mentions_ago({0: 1}), today) == 0

    def test_future_mentions_ignored(self, today: date, mentions_ago) -> None:
        assert days_since_last_mention(mentions_ago({-2: 1, 5: 1}), today) == 5
        assert days_since_last_mention(mentions_ago({-2: 1}), today) is None
