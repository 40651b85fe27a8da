"""Admin moderation actions over stored submissions."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

from .types import SubmissionStatus


class ModerationError(ValueError):
    """Raised for unknown actions or malformed selections."""


class ModerationAction(str, Enum):
    MARK_READ = "mark_read"
    MARK_UNREAD = "mark_unread"
    MARK_REPLIED = "mark_replied"
    ARCHIVE = "archive"
    MARK_SPAM = "mark_spam"
    MARK_NOT_SPAM = "mark_not_spam"


_UPDATES: Mapping[ModerationAction, Mapping[str, Any]] = {
    ModerationAction.MARK_READ: {"status": SubmissionStatus.READ.value},
    ModerationAction.MARK_UNREAD: {"status": SubmissionStatus.NEW.value},
    ModerationAction.MARK_REPLIED: {"status": SubmissionStatus.REPLIED.value},
    ModerationAction.ARCHIVE: {"status": SubmissionStatus.ARCHIVED.value},
    ModerationAction.MARK_SPAM: {"is_spam": True, "status": SubmissionStatus.ARCHIVED.value},
    ModerationAction.MARK_NOT_SPAM: {"is_spam": False, "status": SubmissionStatus.NEW.value},
}


def update_fields(action: ModerationAction | str) -> dict[str, Any]:
    """Return the column updates an action applies."""

    try:
        resolved = ModerationAction(action)
    except ValueError as exc:
        raise ModerationError(f"Invalid action: {action}") from exc
    return dict(_UPDATES[resolved])


def apply_action(
    records: Iterable[Mapping[str, Any]],
    submission_ids: Iterable[Any],
    action: ModerationAction | str,
) -> list[dict[str, Any]]:
    """Return updated copies of the records whose ``id`` is selected."""

    if isinstance(submission_ids, (str, bytes)):
        raise ModerationError("submission_ids must be a list of ids.")
    selected = set(submission_ids)
    if not selected:
        raise ModerationError("No submissions selected.")
    updates = update_fields(action)
    return [{**record, **updates} for record in records if record.get("id") in selected]


__all__ = ["ModerationAction", "ModerationError", "apply_action", "update_fields"]
