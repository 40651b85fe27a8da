"""formguard command-line interface."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, NoReturn

import typer

from . import __version__
from .config import Config, ConfigError, load_config, resolved_config_path
from .intake import FormIntake
from .logging import configure_logging
from .presets import default_registry
from .sources import SourceError, read_payload, read_payloads
from .stats import summarize
from .types import FormType
from .validation import SubmissionError

app = typer.Typer(help="Spam scoring for website form submissions.")
LOGGER = logging.getLogger(__name__)

FormOption = Annotated[
    FormType,
    typer.Option("-f", "--form", help="Form the payload came from (selects keyword preset)."),
]


@dataclass
class CLIState:
    """Stores shared CLI options."""

    config_path: Path | None


@app.callback()
def _formguard(
    ctx: typer.Context,
    config: Annotated[
        Path | None,
        typer.Option(
            "-c",
            "--config",
            help="Path to config (env FORMGUARD_CONFIG or ~/.config/formguard/config.yaml).",
        ),
    ] = None,
) -> None:
    """Capture global CLI options."""

    resolved = config.expanduser() if config else None
    ctx.obj = CLIState(config_path=resolved)


@app.command()
def score(
    ctx: typer.Context,
    payload: Annotated[str, typer.Argument(help="JSON/YAML submission file, or '-' for stdin.")],
    form: FormOption = FormType.CONTACT,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the verdict and stored record as JSON."),
    ] = False,
) -> None:
    """Score a single form submission."""

    config = _load_environment(_state(ctx))
    intake = FormIntake.from_config(config)
    try:
        raw = read_payload(payload)
        result = intake.process(raw, form_type=form)
    except SourceError as exc:
        _fail(str(exc))
    except SubmissionError as exc:
        _fail(f"Invalid submission: {exc}")

    if as_json:
        document = {**result.verdict.as_dict(), "notify": result.notify, "record": result.record}
        typer.echo(json.dumps(document, indent=2))
        return

    verdict = result.verdict
    typer.echo(f"Form: {form.value}")
    typer.echo(f"From: {result.submission.name} <{result.submission.email}>")
    typer.echo(f"Verdict: {'spam' if verdict.is_spam else 'clean'}")
    typer.echo(f"Score: {verdict.score:.2f}")
    typer.echo(f"Status: {result.record['status']}")
    typer.echo(f"Notify: {'yes' if result.notify else 'no'}")
    if verdict.reasons:
        typer.echo("Reasons:")
        for reason in verdict.reasons:
            typer.echo(f"  - {reason}")


@app.command()
def scan(
    ctx: typer.Context,
    payloads: Annotated[
        str,
        typer.Argument(help="JSON list, YAML list or JSON-lines file, or '-' for stdin."),
    ],
    form: FormOption = FormType.CONTACT,
    spam_only: Annotated[
        bool,
        typer.Option("--spam-only", help="Only print submissions flagged as spam."),
    ] = False,
) -> None:
    """Score every submission in a batch file."""

    config = _load_environment(_state(ctx))
    intake = FormIntake.from_config(config)
    try:
        entries = read_payloads(payloads)
    except SourceError as exc:
        _fail(str(exc))

    spam = clean = invalid = 0
    for idx, raw in enumerate(entries, start=1):
        try:
            result = intake.process(raw, form_type=form)
        except SubmissionError as exc:
            invalid += 1
            LOGGER.debug("Entry %s rejected: %s", idx, exc)
            if not spam_only:
                typer.echo(f"#{idx:<4} INVALID {exc.field or '-'}: {exc}")
            continue
        if result.verdict.is_spam:
            spam += 1
        else:
            clean += 1
            if spam_only:
                continue
        label = "SPAM " if result.verdict.is_spam else "CLEAN"
        typer.echo(f"#{idx:<4} {label}   {result.verdict.score:.2f} {result.submission.email}")

    typer.echo(
        f"Scanned {len(entries)} submission(s): {spam} spam, {clean} clean, {invalid} invalid."
    )


@app.command()
def stats(
    ctx: typer.Context,
    rows: Annotated[str, typer.Argument(help="Stored submission rows (JSON/YAML/JSON lines).")],
) -> None:
    """Summarise stored submissions by status, spam flag and recency."""

    _load_environment(_state(ctx))
    try:
        entries = read_payloads(rows)
    except SourceError as exc:
        _fail(str(exc))

    summary = summarize(entries)
    typer.echo("→ Submission Statistics")
    for key, value in summary.as_dict().items():
        typer.echo(f"{key.replace('_', ' ').capitalize()}: {value}")


@app.command()
def presets(ctx: typer.Context) -> None:
    """List keyword presets and the forms using them."""

    state = _state(ctx)
    config = _load_environment(state)
    typer.echo(f"formguard {__version__}")
    typer.echo(f"Config path: {resolved_config_path(state.config_path)}")
    for preset in default_registry().entries():
        forms = [
            form_type.value
            for form_type, name in config.scoring.presets.items()
            if name == preset.name
        ]
        used_by = ", ".join(forms) if forms else "unused"
        typer.echo("")
        typer.echo(f"{preset.name} ({used_by}):")
        for keyword in preset.keywords:
            typer.echo(f"  - {keyword}")
    if config.scoring.extra_keywords:
        typer.echo("")
        typer.echo("extra keywords:")
        for keyword in config.scoring.extra_keywords:
            typer.echo(f"  - {keyword}")


def _state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise RuntimeError("CLI state missing from context.")
    return state


def _load_environment(state: CLIState) -> Config:
    try:
        config = load_config(state.config_path)
        configure_logging(config.logging)
    except ConfigError as exc:
        _config_failure(exc)
    return config


def _config_failure(exc: ConfigError) -> NoReturn:
    typer.secho(f"Configuration error: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(2) from exc


def _fail(message: str) -> NoReturn:
    typer.secho(message, fg=typer.colors.RED, err=True)
    raise typer.Exit(1)


def main() -> None:  # pragma: no cover - delegated to Typer
    app()


__all__ = ["app", "main"]
