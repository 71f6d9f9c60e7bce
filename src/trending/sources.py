"""File-backed mention source.

Serves ``SubjectHistory`` records from a JSON export of raw mention
events, for offline scoring and the CLI. Accepted layouts::

    [{"subject_id": "isco", "name": "Isco", "date": "2025-12-28", "count": 2}, ...]

    {
      "subjects": [{"subject_id": "fekir", "name": "Nabil Fekir"}],
      "mentions": [{"subject_id": "isco", "date": "2025-12-28T10:00:00Z"}, ...]
    }

``count`` defaults to 1, so one record per article works as-is. Records
for the same subject and day are summed. Listed subjects without any
mention are returned with an empty history.
"""

import asyncio
import json
from collections import defaultdict
from datetime import date
from pathlib import Path
from typing import Any

from src.trending.errors import ValidationError
from src.trending.schemas import Mention, SubjectHistory, to_day
from src.trending.timeline import aggregate_mentions


class JsonMentionSource:
    """Mention source reading raw mention events from a JSON file."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    async def get_subject_histories(
        self,
        start: date,
        end: date,
    ) -> list[SubjectHistory]:
        """Return one history per subject, mentions bounded to [start, end].

        Lifetime fields (total, first and last seen) cover every mention
        up to ``end``; mentions after ``end`` are ignored entirely.
        """
        payload = await asyncio.to_thread(self._read)
        return self.build_histories(payload, to_day(start), to_day(end))

    def _read(self) -> Any:
        with self._path.open(encoding="utf-8") as fh:
            return json.load(fh)

    @staticmethod
    def build_histories(
        payload: Any,
        start: date,
        end: date,
    ) -> list[SubjectHistory]:
        """Group raw records into SubjectHistory objects.

        Subjects keep the order in which they first appear in the payload.

        Raises:
            ValidationError: On malformed records (missing subject id,
                bad date, bad count).
        """
        if isinstance(payload, list):
            subjects: list[Any] = []
            records = payload
        elif isinstance(payload, dict):
            subjects = payload.get("subjects", [])
            records = payload.get("mentions", [])
        else:
            raise ValidationError(
                "Expected a list of mentions or an object with 'mentions'",
                value=type(payload).__name__,
            )

        names: dict[str, str | None] = {}
        events: dict[str, list[tuple[date, int]]] = defaultdict(list)

        for subject in subjects:
            subject_id = _subject_id(subject)
            names.setdefault(subject_id, subject.get("name"))

        for record in records:
            subject_id = _subject_id(record)
            if names.get(subject_id) is None:
                names[subject_id] = record.get("name")
            if "date" not in record:
                raise ValidationError(
                    f"Mention for {subject_id!r} has no date", value=record
                )
            day = to_day(record["date"])
            if day > end:
                continue
            events[subject_id].append((day, record.get("count", 1)))

        histories = []
        for subject_id, name in names.items():
            daily = aggregate_mentions(events.get(subject_id, []))
            histories.append(_to_history(subject_id, name, daily, start))

        return histories


def _subject_id(record: Any) -> str:
    if not isinstance(record, dict):
        raise ValidationError(f"Expected an object, got {record!r}", value=record)
    subject_id = record.get("subject_id")
    if not subject_id or not isinstance(subject_id, str):
        raise ValidationError(
            f"Record is missing a subject_id: {record!r}", value=record
        )
    return subject_id


def _to_history(
    subject_id: str,
    name: str | None,
    daily: list[Mention],
    start: date,
) -> SubjectHistory:
    return SubjectHistory(
        subject_id=subject_id,
        name=name,
        mentions=[m for m in daily if m.date >= start],
        total_mentions=sum(m.count for m in daily),
        first_seen=daily[0].date if daily else None,
        last_seen=daily[-1].date if daily else None,
    )
