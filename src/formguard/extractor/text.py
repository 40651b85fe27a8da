"""Text measurements over submitted form fields."""

from __future__ import annotations

import re

from ..types import FormSubmission

UPPER_RE = re.compile(r"[A-Z]")
URL_SCHEME_RE = re.compile(r"https?://")
REPEATED_CHAR_RE = re.compile(r"(.)\1{4,}")


def combined_text(submission: FormSubmission) -> str:
    """Join the free-text fields that keyword and URL checks look at."""

    parts = [
        submission.name,
        submission.message,
        submission.company_name or "",
        submission.exhibition_name or "",
    ]
    return " ".join(parts)


def caps_ratio(text: str) -> float:
    """Share of ASCII capitals over the whole string length."""

    if not text:
        return 0.0
    return len(UPPER_RE.findall(text)) / len(text)


def url_count(text: str) -> int:
    return len(URL_SCHEME_RE.findall(text.lower()))


def has_repeated_chars(text: str) -> bool:
    """True when any character repeats five or more times in a row."""

    return REPEATED_CHAR_RE.search(text) is not None


def matching_keywords(text: str, keywords: tuple[str, ...]) -> list[str]:
    """Return every keyword found in ``text``, case-insensitively, in keyword order."""

    lowered = text.lower()
    return [keyword for keyword in keywords if keyword in lowered]


__all__ = [
    "caps_ratio",
    "combined_text",
    "has_repeated_chars",
    "matching_keywords",
    "url_count",
]
