"""Signal extraction utilities for form submissions."""

from .domain import email_domain
from .text import caps_ratio, combined_text, has_repeated_chars, matching_keywords, url_count

__all__ = [
    "caps_ratio",
    "combined_text",
    "email_domain",
    "has_repeated_chars",
    "matching_keywords",
    "url_count",
]
