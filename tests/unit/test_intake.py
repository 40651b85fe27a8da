from __future__ import annotations

import logging

import pytest

from formguard.intake import FormIntake, client_metadata
from formguard.presets import EVENT_KEYWORDS
from formguard.scoring import SpamScorer
from formguard.types import ClientMetadata, FormType
from formguard.validation import SubmissionError

GENUINE = {
    "name": "John Smith",
    "email": "John@Example.com",
    "message": "I would like a quote for a 6x6 booth at GITEX next year, budget around $10k.",
    "company_name": "Smith Trading",
    "agreed_to_terms": True,
}

SPAM = {
    "name": "WINNER",
    "email": "x12345678@spam.tk",
    "message": "CLICK HERE FREE MONEY GUARANTEED NO RISK!!!",
}


def test_client_metadata_prefers_forwarded_for() -> None:
    metadata = client_metadata(
        {
            "X-Forwarded-For": "203.0.113.9",
            "X-Real-IP": "10.0.0.1",
            "User-Agent": "pytest",
            "Referer": "https://example.com/contact",
        }
    )

    assert metadata == ClientMetadata(
        ip_address="203.0.113.9",
        user_agent="pytest",
        referrer="https://example.com/contact",
    )


def test_client_metadata_defaults_when_headers_missing() -> None:
    assert client_metadata(None) == ClientMetadata()
    assert client_metadata({"x-real-ip": "10.0.0.1"}).ip_address == "10.0.0.1"


def test_genuine_contact_submission_is_stored_as_new_and_notifies() -> None:
    result = FormIntake().process(GENUINE, {"user-agent": "pytest"})

    assert result.notify is True
    assert result.verdict.is_spam is False
    assert result.record["status"] == "new"
    assert result.record["email"] == "john@example.com"
    assert result.record["is_spam"] is False
    assert result.record["spam_score"] == 0.0
    assert result.record["agreed_to_terms"] is True
    assert result.record["user_agent"] == "pytest"
    assert result.record["referrer"] == "direct"
    assert result.record["form_type"] == "contact"


def test_spam_contact_submission_is_marked_spam_without_notification(
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.INFO, logger="formguard.intake"):
        result = FormIntake().process(SPAM)

    assert result.notify is False
    assert result.record["status"] == "spam"
    assert result.record["is_spam"] is True
    assert result.record["spam_score"] == 1.0
    assert "Spam contact submission detected" in caplog.text


def test_spam_event_submission_is_archived() -> None:
    raw = {**SPAM, "event_id": "evt-42"}

    result = FormIntake().process(raw, form_type=FormType.EVENT)

    assert result.record["status"] == "archived"
    assert result.record["event_id"] == "evt-42"
    assert "agreed_to_terms" not in result.record
    assert result.notify is False


def test_intake_uses_scorer_for_form_type() -> None:
    intake = FormIntake({FormType.EVENT: SpamScorer(EVENT_KEYWORDS)})
    raw = {"name": "Ana", "email": "ana@example.com", "message": "Do you accept bitcoin payments?"}

    contact = intake.process(raw, form_type=FormType.CONTACT)
    event = intake.process(raw, form_type=FormType.EVENT)

    assert contact.verdict.reasons == ()
    assert event.verdict.reasons == ("Contains spam keyword: bitcoin",)


def test_invalid_body_raises_before_scoring() -> None:
    with pytest.raises(SubmissionError) as excinfo:
        FormIntake().process({"name": "Jane", "email": "nope", "message": "Hello there"})

    assert excinfo.value.field == "email"


def test_event_id_must_be_scalar() -> None:
    raw = {"name": "Jane", "email": "jane@example.com", "event_id": {"id": 1}}

    with pytest.raises(SubmissionError):
        FormIntake().process(raw, form_type=FormType.EVENT)


def test_default_intake_scores_event_forms_with_event_keywords() -> None:
    raw = {
        "name": "Sam",
        "email": "sam@example.com",
        "message": "Can we pay the booth deposit in bitcoin?",
    }
    intake = FormIntake()

    event = intake.process(raw, form_type=FormType.EVENT)
    contact = intake.process(raw, form_type=FormType.CONTACT)

    assert "Contains spam keyword: bitcoin" in event.verdict.reasons
    assert contact.verdict.reasons == ()


@pytest.mark.parametrize("value", ["false", 1, "yes"])
def test_agreed_to_terms_must_be_boolean(value: object) -> None:
    raw = {**GENUINE, "agreed_to_terms": value}

    with pytest.raises(SubmissionError) as excinfo:
        FormIntake().process(raw)

    assert excinfo.value.field == "agreed_to_terms"


def test_missing_agreed_to_terms_defaults_to_false() -> None:
    raw = {key: value for key, value in GENUINE.items() if key != "agreed_to_terms"}

    assert FormIntake().process(raw).record["agreed_to_terms"] is False
