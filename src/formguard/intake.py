"""Form intake: validate, score, and prepare a submission for storage."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .presets import CONTACT_KEYWORDS, EVENT_KEYWORDS
from .scoring import SpamScorer
from .types import ClientMetadata, FormSubmission, FormType, SpamVerdict, SubmissionStatus
from .validation import SubmissionError, parse_submission

if TYPE_CHECKING:
    from .config import Config

LOGGER = logging.getLogger(__name__)

DEFAULT_KEYWORDS: Mapping[FormType, tuple[str, ...]] = {
    FormType.CONTACT: CONTACT_KEYWORDS,
    FormType.EVENT: EVENT_KEYWORDS,
}

SPAM_STATUS: Mapping[FormType, SubmissionStatus] = {
    FormType.CONTACT: SubmissionStatus.SPAM,
    FormType.EVENT: SubmissionStatus.ARCHIVED,
}


@dataclass(frozen=True)
class IntakeResult:
    """Everything a form handler needs after scoring a submission."""

    form_type: FormType
    submission: FormSubmission
    verdict: SpamVerdict
    record: dict[str, Any]
    notify: bool


def client_metadata(headers: Mapping[str, str] | None) -> ClientMetadata:
    """Derive request metadata from HTTP headers (case-insensitive)."""

    if not headers:
        return ClientMetadata()
    lowered = {str(key).lower(): value for key, value in headers.items()}
    ip_address = lowered.get("x-forwarded-for") or lowered.get("x-real-ip") or "unknown"
    return ClientMetadata(
        ip_address=ip_address,
        user_agent=lowered.get("user-agent") or "unknown",
        referrer=lowered.get("referer") or "direct",
    )


class FormIntake:
    """Runs the spam heuristic ahead of persistence and notification."""

    def __init__(self, scorers: Mapping[FormType, SpamScorer] | None = None) -> None:
        self._scorers: dict[FormType, SpamScorer] = dict(scorers or {})
        for form_type in FormType:
            self._scorers.setdefault(form_type, SpamScorer(DEFAULT_KEYWORDS[form_type]))

    @classmethod
    def from_config(cls, config: Config) -> FormIntake:
        return cls(config.build_scorers())

    def scorer(self, form_type: FormType) -> SpamScorer:
        return self._scorers[form_type]

    def process(
        self,
        raw: Any,
        headers: Mapping[str, str] | None = None,
        *,
        form_type: FormType = FormType.CONTACT,
    ) -> IntakeResult:
        """Validate and score ``raw``; raises SubmissionError on bad input."""

        submission = parse_submission(raw, form_type)
        verdict = self._scorers[form_type].score(submission)
        metadata = client_metadata(headers)
        record = build_record(submission, verdict, metadata, form_type, raw)

        if verdict.is_spam:
            LOGGER.info(
                "Spam %s submission detected from %s (score=%.2f): %s",
                form_type.value,
                submission.email,
                verdict.score,
                "; ".join(verdict.reasons),
            )
        else:
            LOGGER.debug(
                "Accepted %s submission from %s (score=%.2f)",
                form_type.value,
                submission.email,
                verdict.score,
            )
        return IntakeResult(
            form_type=form_type,
            submission=submission,
            verdict=verdict,
            record=record,
            notify=not verdict.is_spam,
        )


def build_record(
    submission: FormSubmission,
    verdict: SpamVerdict,
    metadata: ClientMetadata,
    form_type: FormType,
    raw: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Return the row written to the submissions table."""

    raw = raw or {}
    status = SPAM_STATUS[form_type] if verdict.is_spam else SubmissionStatus.NEW
    record: dict[str, Any] = {
        "form_type": form_type.value,
        "name": submission.name,
        "email": submission.email.lower(),
        "message": submission.message,
        "company_name": submission.company_name,
        "exhibition_name": submission.exhibition_name,
        "phone": submission.phone,
        "budget": submission.budget,
        "status": status.value,
        "is_spam": verdict.is_spam,
        "spam_score": verdict.score,
        "ip_address": metadata.ip_address,
        "user_agent": metadata.user_agent,
        "referrer": metadata.referrer,
    }
    if form_type is FormType.CONTACT:
        agreed = raw.get("agreed_to_terms")
        if agreed is None:
            agreed = False
        if not isinstance(agreed, bool):
            raise SubmissionError("agreed_to_terms must be a boolean", field="agreed_to_terms")
        record["agreed_to_terms"] = agreed
    else:
        event_id = raw.get("event_id")
        if event_id is not None and not isinstance(event_id, (str, int)):
            raise SubmissionError("event_id must be a string or integer", field="event_id")
        record["event_id"] = event_id
    return record


__all__ = ["FormIntake", "IntakeResult", "build_record", "client_metadata"]
