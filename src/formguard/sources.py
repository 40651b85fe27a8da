"""Readers for submission payloads stored as JSON, YAML, or JSON lines."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import yaml

JSON_SUFFIXES = {".json"}
JSONL_SUFFIXES = {".jsonl", ".ndjson"}
STDIN_MARKER = "-"


class SourceError(ValueError):
    """Raised when a payload file is missing or cannot be parsed."""


def read_payload(source: Path | str) -> dict[str, Any]:
    """Load a single submission mapping."""

    payloads = read_payloads(source)
    if len(payloads) != 1:
        raise SourceError(f"Expected exactly one submission in {source}, found {len(payloads)}.")
    return payloads[0]


def read_payloads(source: Path | str) -> list[dict[str, Any]]:
    """Load every submission mapping from a list, single object, or JSON lines."""

    text, suffix = _read_text(source)
    if suffix in JSONL_SUFFIXES:
        document: Any = _parse_lines(text, source)
    elif suffix in JSON_SUFFIXES:
        try:
            document = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SourceError(f"Invalid JSON in {source}: {exc}") from exc
    else:
        try:
            document = yaml.safe_load(text)
        except yaml.YAMLError:
            # Streams of JSON objects are not a single YAML document.
            document = _parse_lines(text, source)

    if document is None:
        return []
    if isinstance(document, dict):
        return [document]
    if not isinstance(document, list):
        raise SourceError(f"{source} must contain an object or a list of objects.")
    for idx, entry in enumerate(document, start=1):
        if not isinstance(entry, dict):
            raise SourceError(f"Entry {idx} in {source} is not an object.")
    return document


def _read_text(source: Path | str) -> tuple[str, str]:
    if str(source) == STDIN_MARKER:
        return sys.stdin.read(), ""
    path = Path(source).expanduser()
    if not path.is_file():
        raise SourceError(f"Payload file not found: {path}")
    try:
        return path.read_text(encoding="utf-8"), path.suffix.lower()
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceError(f"Failed to read {path}: {exc}") from exc


def _parse_lines(text: str, source: Path | str) -> list[Any]:
    entries: list[Any] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped:
            continue
        try:
            entries.append(json.loads(stripped))
        except json.JSONDecodeError as exc:
            raise SourceError(f"Invalid JSON on line {lineno} of {source}: {exc.msg}") from exc
    return entries


__all__ = ["SourceError", "read_payload", "read_payloads"]
