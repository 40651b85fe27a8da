"""Boundary validation for loosely-typed form request bodies."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from .types import FormSubmission, FormType

EMAIL_RE = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
OPTIONAL_FIELDS = ("company_name", "exhibition_name", "phone", "budget")


class SubmissionError(ValueError):
    """Raised when a request body cannot become a FormSubmission."""

    status = 400

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


def parse_submission(
    raw: Any,
    form_type: FormType = FormType.CONTACT,
) -> FormSubmission:
    """Validate ``raw`` and return a trimmed FormSubmission."""

    if not isinstance(raw, Mapping):
        raise SubmissionError("Submission body must be an object.")

    name = _required_text(raw, "name", "Name is required")
    email = _required_text(raw, "email", "Email is required")
    if form_type is FormType.CONTACT:
        message = _required_text(raw, "message", "Message is required")
    else:
        message = _optional_text(raw, "message") or ""

    if not EMAIL_RE.match(email):
        raise SubmissionError("Invalid email format", field="email")

    optional = {field_name: _optional_text(raw, field_name) for field_name in OPTIONAL_FIELDS}
    return FormSubmission(name=name, email=email, message=message, **optional)


def _required_text(raw: Mapping[str, Any], field_name: str, error: str) -> str:
    value = raw.get(field_name)
    if value is None:
        raise SubmissionError(error, field=field_name)
    if not isinstance(value, str):
        raise SubmissionError(f"{field_name} must be a string", field=field_name)
    text = value.strip()
    if not text:
        raise SubmissionError(error, field=field_name)
    return text


def _optional_text(raw: Mapping[str, Any], field_name: str) -> str | None:
    value = raw.get(field_name)
    if value is None:
        return None
    if not isinstance(value, str):
        raise SubmissionError(f"{field_name} must be a string", field=field_name)
    return value.strip() or None


__all__ = ["EMAIL_RE", "SubmissionError", "parse_submission"]
