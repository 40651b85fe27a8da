"""Core immutable data structures used throughout formguard."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class FormType(str, Enum):
    """Public forms that feed submissions into the site."""

    CONTACT = "contact"
    EVENT = "event"


class SubmissionStatus(str, Enum):
    """Lifecycle states of a stored submission."""

    NEW = "new"
    READ = "read"
    REPLIED = "replied"
    ARCHIVED = "archived"
    SPAM = "spam"


@dataclass(frozen=True)
class FormSubmission:
    """Validated form submission ready for scoring."""

    name: str
    email: str
    message: str
    company_name: str | None = None
    exhibition_name: str | None = None
    phone: str | None = None
    budget: str | None = None


@dataclass(frozen=True)
class SpamVerdict:
    """Outcome of the spam heuristic."""

    is_spam: bool
    score: float
    reasons: tuple[str, ...] = ()

    def as_dict(self) -> dict[str, Any]:
        return {"is_spam": self.is_spam, "score": self.score, "reasons": list(self.reasons)}


@dataclass(frozen=True)
class ClientMetadata:
    """Request metadata stored next to a submission."""

    ip_address: str = "unknown"
    user_agent: str = "unknown"
    referrer: str = "direct"


__all__ = [
    "ClientMetadata",
    "FormSubmission",
    "FormType",
    "SpamVerdict",
    "SubmissionStatus",
]
