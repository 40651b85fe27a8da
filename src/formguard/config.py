"""Configuration loading and validation."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .presets import PresetRegistry, default_registry
from .scoring import DISPOSABLE_DOMAINS, Signal, SpamScorer
from .types import FormType

LOGGER = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("~/.config/formguard/config.yaml")
DEFAULT_LOG_LEVEL = "info"
CONFIG_ENV_VAR = "FORMGUARD_CONFIG"


class ConfigError(ValueError):
    """Raised when configuration is invalid or missing."""


@dataclass(frozen=True)
class LoggingConfig:
    """Logging-related configuration."""

    level: str = DEFAULT_LOG_LEVEL
    debug_file: bool = False
    log_dir: Path | None = None


@dataclass(frozen=True)
class ScoringConfig:
    """Spam heuristic tuning."""

    presets: Mapping[FormType, str] = field(
        default_factory=lambda: {FormType.CONTACT: "contact", FormType.EVENT: "event"}
    )
    weights: Mapping[Signal, float] = field(default_factory=dict)
    extra_keywords: tuple[str, ...] = ()
    disposable_domains: tuple[str, ...] = DISPOSABLE_DOMAINS


@dataclass(frozen=True)
class Config:
    """Fully parsed configuration."""

    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def build_scorers(
        self,
        registry: PresetRegistry | None = None,
    ) -> dict[FormType, SpamScorer]:
        """Return one scorer per form type using the configured presets."""

        registry = registry or default_registry()
        scorers: dict[FormType, SpamScorer] = {}
        for form_type in FormType:
            preset_name = self.scoring.presets[form_type]
            preset = registry.get(preset_name).extended(self.scoring.extra_keywords)
            scorers[form_type] = SpamScorer(
                preset.keywords,
                weights=self.scoring.weights,
                disposable_domains=self.scoring.disposable_domains,
            )
        return scorers


def load_config(path: Path | str | None = None) -> Config:
    """Load and validate configuration from YAML.

    An explicit path or ``$FORMGUARD_CONFIG`` must exist; the default
    location is optional and yields built-in defaults when absent.
    """

    config_path, explicit = _resolve_config_path(path)
    if not config_path.exists():
        if explicit:
            raise ConfigError(f"Config file not found: {config_path}")
        LOGGER.debug("No config at %s; using defaults.", config_path)
        return Config()

    with config_path.open("r", encoding="utf-8") as handle:
        try:
            raw = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError("Configuration root must be a mapping.")

    return _parse_config(raw)


def resolved_config_path(path: Path | str | None = None) -> Path:
    return _resolve_config_path(path)[0]


def _resolve_config_path(explicit: Path | str | None) -> tuple[Path, bool]:
    if explicit:
        return Path(explicit).expanduser(), True
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser(), True
    return DEFAULT_CONFIG_PATH.expanduser(), False


def _parse_config(raw: dict[str, Any]) -> Config:
    scoring = _parse_scoring(raw.get("scoring"))
    logging_config = _parse_logging(raw.get("logging"))
    return Config(scoring=scoring, logging=logging_config)


def _parse_scoring(value: Any) -> ScoringConfig:
    if value is None:
        return ScoringConfig()
    if not isinstance(value, dict):
        raise ConfigError("scoring must be a mapping.")

    defaults = ScoringConfig()
    presets = _parse_presets(value.get("presets"), defaults.presets)
    weights = _parse_weights(value.get("weights"))
    extra_keywords = _parse_string_list(value.get("extra_keywords"), "scoring.extra_keywords")
    domains_value = value.get("disposable_domains")
    if domains_value is None:
        disposable_domains = defaults.disposable_domains
    else:
        disposable_domains = _parse_string_list(domains_value, "scoring.disposable_domains")
    return ScoringConfig(
        presets=presets,
        weights=weights,
        extra_keywords=extra_keywords,
        disposable_domains=disposable_domains,
    )


def _parse_presets(value: Any, defaults: Mapping[FormType, str]) -> dict[FormType, str]:
    presets = dict(defaults)
    if value is None:
        return presets
    if not isinstance(value, dict):
        raise ConfigError("scoring.presets must be a mapping of form type to preset name.")

    known = default_registry()
    for form_name, preset_name in value.items():
        try:
            form_type = FormType(str(form_name).lower())
        except ValueError as exc:
            raise ConfigError(f"Unknown form type in scoring.presets: {form_name}") from exc
        if not isinstance(preset_name, str) or preset_name not in known:
            raise ConfigError(
                f"scoring.presets.{form_name} must be one of: {', '.join(known.names())}."
            )
        presets[form_type] = preset_name
    return presets


def _parse_weights(value: Any) -> dict[Signal, float]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError("scoring.weights must be a mapping of signal name to weight.")

    weights: dict[Signal, float] = {}
    for name, raw_weight in value.items():
        try:
            signal = Signal(str(name).lower())
        except ValueError as exc:
            raise ConfigError(f"Unknown signal in scoring.weights: {name}") from exc
        if isinstance(raw_weight, bool) or not isinstance(raw_weight, (int, float)):
            raise ConfigError(f"scoring.weights.{name} must be a number.")
        if raw_weight < 0:
            raise ConfigError(f"scoring.weights.{name} cannot be negative.")
        weights[signal] = float(raw_weight)
    return weights


def _parse_string_list(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise ConfigError(f"{field_name} must be a list.")

    items: list[str] = []
    for idx, entry in enumerate(value, start=1):
        if not isinstance(entry, str) or not entry.strip():
            raise ConfigError(f"{field_name}[{idx}] must be a non-empty string.")
        items.append(entry.strip().lower())
    return tuple(items)


def _parse_logging(value: Any) -> LoggingConfig:
    if value is None:
        return LoggingConfig()
    if not isinstance(value, dict):
        raise ConfigError("logging must be a mapping.")
    level = str(value.get("level", DEFAULT_LOG_LEVEL)).lower()
    debug_file = bool(value.get("debug_file", False))
    raw_dir = value.get("log_dir")
    if raw_dir is not None and not isinstance(raw_dir, str):
        raise ConfigError("logging.log_dir must be a string path.")
    log_dir = Path(raw_dir).expanduser() if raw_dir else None
    if debug_file and log_dir is None:
        LOGGER.warning("logging.debug_file has no effect without logging.log_dir.")
    return LoggingConfig(level=level, debug_file=debug_file, log_dir=log_dir)


__all__ = [
    "Config",
    "ConfigError",
    "LoggingConfig",
    "ScoringConfig",
    "load_config",
    "resolved_config_path",
]
