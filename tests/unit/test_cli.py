from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from formguard.cli import app

runner = CliRunner()

SPAM_LINE = json.dumps(
    {
        "name": "WINNER",
        "email": "x12345678@spam.tk",
        "message": "CLICK HERE FREE MONEY GUARANTEED NO RISK!!!",
    }
)
CLEAN_LINE = json.dumps(
    {
        "name": "John Smith",
        "email": "john@example.com",
        "message": "I would like a quote for a 6x6 booth at GITEX next year.",
    }
)
INVALID_LINE = json.dumps({"name": "Nobody", "email": "broken", "message": "Hello there"})


def _write_config(tmp_path: Path, extra: str = "") -> Path:
    config = tmp_path / "config.yaml"
    config.write_text(
        "\n".join(
            [
                "logging:",
                "  level: warning",
                extra,
                "",
            ]
        ),
        encoding="utf-8",
    )
    return config


def _write(path: Path, content: str) -> Path:
    path.write_text(content, encoding="utf-8")
    return path


def test_score_reports_clean_submission(tmp_path):
    config_path = _write_config(tmp_path)
    payload = _write(
        tmp_path / "submission.yaml",
        "name: John Smith\n"
        "email: john@example.com\n"
        "message: I would like a quote for a 6x6 booth at GITEX next year.\n",
    )

    result = runner.invoke(app, ["-c", str(config_path), "score", str(payload)])

    assert result.exit_code == 0
    assert "Verdict: clean" in result.stdout
    assert "Score: 0.00" in result.stdout
    assert "Notify: yes" in result.stdout


def test_score_json_output_for_spam(tmp_path):
    config_path = _write_config(tmp_path)
    payload = _write(tmp_path / "spam.json", SPAM_LINE)

    result = runner.invoke(app, ["-c", str(config_path), "score", "--json", str(payload)])

    assert result.exit_code == 0
    document = json.loads(result.stdout)
    assert document["is_spam"] is True
    assert document["score"] == 1.0
    assert document["notify"] is False
    assert document["record"]["status"] == "spam"
    assert "Suspicious email pattern" in document["reasons"]


def test_score_event_form_archives_spam(tmp_path):
    config_path = _write_config(tmp_path)
    payload = _write(tmp_path / "spam.json", SPAM_LINE)

    result = runner.invoke(
        app, ["-c", str(config_path), "score", "--form", "event", "--json", str(payload)]
    )

    assert result.exit_code == 0
    assert json.loads(result.stdout)["record"]["status"] == "archived"


def test_score_rejects_invalid_submission(tmp_path):
    config_path = _write_config(tmp_path)
    payload = _write(tmp_path / "invalid.json", INVALID_LINE)

    result = runner.invoke(app, ["-c", str(config_path), "score", str(payload)])

    assert result.exit_code == 1


def test_scan_prints_one_line_per_submission_and_totals(tmp_path):
    config_path = _write_config(tmp_path)
    batch = _write(tmp_path / "batch.jsonl", "\n".join([SPAM_LINE, CLEAN_LINE, INVALID_LINE]))

    result = runner.invoke(app, ["-c", str(config_path), "scan", str(batch)])

    assert result.exit_code == 0
    assert "SPAM" in result.stdout
    assert "CLEAN" in result.stdout
    assert "INVALID email" in result.stdout
    assert "Scanned 3 submission(s): 1 spam, 1 clean, 1 invalid." in result.stdout


def test_scan_spam_only_hides_clean_rows(tmp_path):
    config_path = _write_config(tmp_path)
    batch = _write(tmp_path / "batch.jsonl", "\n".join([SPAM_LINE, CLEAN_LINE]))

    result = runner.invoke(app, ["-c", str(config_path), "scan", "--spam-only", str(batch)])

    assert result.exit_code == 0
    assert "x12345678@spam.tk" in result.stdout
    assert "john@example.com" not in result.stdout


def test_stats_summarises_rows(tmp_path):
    config_path = _write_config(tmp_path)
    rows = _write(
        tmp_path / "rows.json",
        json.dumps(
            [
                {"status": "new", "is_spam": False, "created_at": "2020-01-01T00:00:00Z"},
                {"status": "archived", "is_spam": True, "created_at": "2020-01-02T00:00:00Z"},
            ]
        ),
    )

    result = runner.invoke(app, ["-c", str(config_path), "stats", str(rows)])

    assert result.exit_code == 0
    assert "Total: 2" in result.stdout
    assert "Spam: 1" in result.stdout
    assert "This week: 0" in result.stdout


def test_presets_lists_forms_and_extra_keywords(tmp_path):
    config_path = _write_config(
        tmp_path,
        "scoring:\n  presets:\n    contact: event\n  extra_keywords:\n    - seo services",
    )

    result = runner.invoke(app, ["-c", str(config_path), "presets"])

    assert result.exit_code == 0
    assert "contact (unused):" in result.stdout
    assert "event (contact, event):" in result.stdout
    assert "seo services" in result.stdout


def test_invalid_config_exits_with_code_two(tmp_path):
    config_path = _write_config(tmp_path, "scoring:\n  weights:\n    keyword: -1")
    payload = _write(tmp_path / "spam.json", SPAM_LINE)

    result = runner.invoke(app, ["-c", str(config_path), "score", str(payload)])

    assert result.exit_code == 2
