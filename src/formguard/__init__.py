"""formguard package initialisation."""

from importlib import metadata

from .intake import FormIntake, IntakeResult
from .scoring import SPAM_THRESHOLD, Signal, SpamScorer, score
from .types import FormSubmission, FormType, SpamVerdict, SubmissionStatus
from .validation import SubmissionError, parse_submission


def _discover_version() -> str:
    """Return the installed package version, falling back to dev marker."""
    try:
        return metadata.version("formguard")
    except metadata.PackageNotFoundError:  # pragma: no cover - occurs in source checkouts
        return "0.0.0"


__all__ = [
    "FormIntake",
    "FormSubmission",
    "FormType",
    "IntakeResult",
    "SPAM_THRESHOLD",
    "Signal",
    "SpamScorer",
    "SpamVerdict",
    "SubmissionError",
    "SubmissionStatus",
    "__version__",
    "parse_submission",
    "score",
]
__version__ = _discover_version()
