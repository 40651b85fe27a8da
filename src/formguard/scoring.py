"""Rule-based spam heuristic for public form submissions.

Every signal is checked independently and adds a fixed weight to the running
total. The total is clamped to ``1.0`` and a submission is spam once it
reaches :data:`SPAM_THRESHOLD`. Each contribution leaves a human-readable
reason behind so moderators can see why a submission was flagged.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from enum import Enum

from .extractor import (
    caps_ratio,
    combined_text,
    email_domain,
    has_repeated_chars,
    matching_keywords,
    url_count,
)
from .presets import CONTACT_KEYWORDS
from .types import FormSubmission, SpamVerdict

SPAM_THRESHOLD = 0.5
MAX_SCORE = 1.0

CAPS_RATIO_LIMIT = 0.5
CAPS_MIN_LENGTH = 20
SHORT_MESSAGE_LENGTH = 10
LONG_MESSAGE_LENGTH = 2000
URL_COUNT_LIMIT = 3

SUSPICIOUS_EMAIL_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\d{5,}@"),
    re.compile(r"@[^.]+\.(tk|ml|ga|cf)$"),
)

DISPOSABLE_DOMAINS: tuple[str, ...] = (
    "tempmail",
    "guerrillamail",
    "10minutemail",
    "mailinator",
)


class Signal(str, Enum):
    """Independent checks contributing to the spam score."""

    KEYWORD = "keyword"
    EXCESSIVE_CAPS = "excessive_caps"
    SUSPICIOUS_EMAIL = "suspicious_email"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    REPEATED_CHARS = "repeated_chars"
    MULTIPLE_URLS = "multiple_urls"
    DISPOSABLE_DOMAIN = "disposable_domain"


DEFAULT_WEIGHTS: Mapping[Signal, float] = {
    Signal.KEYWORD: 0.3,
    Signal.EXCESSIVE_CAPS: 0.2,
    Signal.SUSPICIOUS_EMAIL: 0.3,
    Signal.TOO_SHORT: 0.2,
    Signal.TOO_LONG: 0.1,
    Signal.REPEATED_CHARS: 0.2,
    Signal.MULTIPLE_URLS: 0.3,
    Signal.DISPOSABLE_DOMAIN: 0.3,
}


class SpamScorer:
    """Table-driven scorer parameterised by keyword list and weights."""

    def __init__(
        self,
        keywords: Iterable[str] = CONTACT_KEYWORDS,
        *,
        weights: Mapping[Signal, float] | None = None,
        disposable_domains: Iterable[str] = DISPOSABLE_DOMAINS,
    ) -> None:
        self.keywords = tuple(keyword.lower() for keyword in keywords)
        table = dict(DEFAULT_WEIGHTS)
        for signal, weight in (weights or {}).items():
            if weight < 0:
                raise ValueError(f"Weight for '{Signal(signal).value}' cannot be negative.")
            table[Signal(signal)] = float(weight)
        self.weights: Mapping[Signal, float] = table
        self.disposable_domains = tuple(marker.lower() for marker in disposable_domains)

    def score(self, submission: FormSubmission) -> SpamVerdict:
        """Score a submission and explain every contribution."""

        _require_strings(submission)
        total = 0.0
        reasons: list[str] = []

        def hit(signal: Signal, reason: str) -> None:
            nonlocal total
            total += self.weights[signal]
            reasons.append(reason)

        text = combined_text(submission)
        message = submission.message
        email = submission.email.strip().lower()

        for keyword in matching_keywords(text, self.keywords):
            hit(Signal.KEYWORD, f"Contains spam keyword: {keyword}")

        if len(message) > CAPS_MIN_LENGTH and caps_ratio(message) > CAPS_RATIO_LIMIT:
            hit(Signal.EXCESSIVE_CAPS, "Excessive use of capital letters")

        for pattern in SUSPICIOUS_EMAIL_PATTERNS:
            if pattern.search(email):
                hit(Signal.SUSPICIOUS_EMAIL, "Suspicious email pattern")

        if len(message) < SHORT_MESSAGE_LENGTH:
            hit(Signal.TOO_SHORT, "Message too short")
        elif len(message) > LONG_MESSAGE_LENGTH:
            hit(Signal.TOO_LONG, "Message unusually long")

        if has_repeated_chars(message):
            hit(Signal.REPEATED_CHARS, "Contains repeated characters")

        urls = url_count(text)
        if urls >= URL_COUNT_LIMIT:
            hit(Signal.MULTIPLE_URLS, f"Contains multiple URLs ({urls})")

        domain = email_domain(email) or ""
        for marker in self.disposable_domains:
            if marker in domain:
                hit(Signal.DISPOSABLE_DOMAIN, f"Disposable email domain: {marker}")
                break

        # Rounded so sums like 0.2 + 0.1 + 0.2 compare equal to the threshold.
        final = round(min(total, MAX_SCORE), 4)
        return SpamVerdict(is_spam=final >= SPAM_THRESHOLD, score=final, reasons=tuple(reasons))


DEFAULT_SCORER = SpamScorer()


def score(
    submission: FormSubmission,
    *,
    keywords: Iterable[str] | None = None,
) -> SpamVerdict:
    """Score ``submission`` with the default weights.

    ``keywords`` swaps the contact-form keyword list for another one.
    """

    if keywords is None:
        return DEFAULT_SCORER.score(submission)
    return SpamScorer(keywords).score(submission)


def _require_strings(submission: FormSubmission) -> None:
    for field_name in ("name", "email", "message"):
        value = getattr(submission, field_name)
        if not isinstance(value, str):
            raise TypeError(
                f"FormSubmission.{field_name} must be a string, got {type(value).__name__}."
            )
    for field_name in ("company_name", "exhibition_name"):
        value = getattr(submission, field_name)
        if value is not None and not isinstance(value, str):
            raise TypeError(f"FormSubmission.{field_name} must be a string or None.")


__all__ = [
    "DEFAULT_SCORER",
    "DEFAULT_WEIGHTS",
    "DISPOSABLE_DOMAINS",
    "SPAM_THRESHOLD",
    "Signal",
    "SpamScorer",
    "score",
]
