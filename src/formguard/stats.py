"""Submission statistics for the admin dashboard."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass
from datetime import datetime, timedelta
from typing import Any

from .types import SubmissionStatus

LOGGER = logging.getLogger(__name__)


@dataclass
class SubmissionStats:
    """Counters over stored submissions."""

    total: int = 0
    new: int = 0
    read: int = 0
    replied: int = 0
    archived: int = 0
    spam: int = 0
    today: int = 0
    this_week: int = 0
    this_month: int = 0

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


def summarize(rows: Iterable[Mapping[str, Any]], now: datetime | None = None) -> SubmissionStats:
    """Count submissions by status, spam flag, and recency.

    ``now`` defaults to the current local time. Date windows are: since local
    midnight, the last seven days, and since the first of the month.
    """

    current = now or datetime.now().astimezone()
    today = current.replace(hour=0, minute=0, second=0, microsecond=0)
    this_week = current - timedelta(days=7)
    this_month = today.replace(day=1)

    stats = SubmissionStats()
    for row in rows:
        stats.total += 1
        status = row.get("status")
        if status == SubmissionStatus.NEW.value:
            stats.new += 1
        elif status == SubmissionStatus.READ.value:
            stats.read += 1
        elif status == SubmissionStatus.REPLIED.value:
            stats.replied += 1
        elif status == SubmissionStatus.ARCHIVED.value:
            stats.archived += 1

        if row.get("is_spam"):
            stats.spam += 1

        created = _parse_timestamp(row.get("created_at"), current)
        if created is None:
            continue
        if created >= today:
            stats.today += 1
        if created >= this_week:
            stats.this_week += 1
        if created >= this_month:
            stats.this_month += 1
    return stats


def _parse_timestamp(value: Any, reference: datetime) -> datetime | None:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = f"{text[:-1]}+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            LOGGER.debug("Ignoring unparseable created_at value: %r", value)
            return None
    else:
        return None

    # Align naive/aware values with the reference so comparisons are valid.
    if reference.tzinfo is None:
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone().replace(tzinfo=None)
    elif parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=reference.tzinfo)
    return parsed


__all__ = ["SubmissionStats", "summarize"]
