"""Keyword presets used by the spam keyword signal."""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Iterable
from dataclasses import dataclass

CONTACT_KEYWORDS: tuple[str, ...] = (
    "viagra",
    "casino",
    "lottery",
    "winner",
    "congratulations",
    "click here",
    "free money",
    "make money fast",
    "work from home",
    "guaranteed",
    "no risk",
    "limited time",
    "act now",
)

EVENT_KEYWORDS: tuple[str, ...] = (
    "viagra",
    "casino",
    "lottery",
    "winner",
    "congratulations",
    "click here",
    "free money",
    "make money fast",
    "work from home",
    "weight loss",
    "lose weight",
    "diet pills",
    "crypto",
    "bitcoin",
)


@dataclass(frozen=True)
class KeywordPreset:
    """Named, ordered list of lower-case spam keywords."""

    name: str
    keywords: tuple[str, ...]

    def extended(self, extra: Iterable[str]) -> KeywordPreset:
        """Return a copy with additional keywords appended, skipping duplicates."""

        merged = list(self.keywords)
        for keyword in extra:
            normalized = keyword.strip().lower()
            if normalized and normalized not in merged:
                merged.append(normalized)
        return KeywordPreset(name=self.name, keywords=tuple(merged))


class PresetRegistry:
    """Registry of keyword presets addressable by name."""

    def __init__(self) -> None:
        self._entries: OrderedDict[str, KeywordPreset] = OrderedDict()

    def register(self, preset: KeywordPreset) -> None:
        if preset.name in self._entries:
            raise ValueError(f"Preset '{preset.name}' is already registered.")
        self._entries[preset.name] = preset

    def get(self, name: str) -> KeywordPreset:
        try:
            return self._entries[name]
        except KeyError as exc:
            raise KeyError(f"Preset '{name}' is not registered.") from exc

    def names(self) -> list[str]:
        return list(self._entries)

    def entries(self) -> list[KeywordPreset]:
        return list(self._entries.values())

    def __contains__(self, name: object) -> bool:
        return name in self._entries


CONTACT_PRESET = KeywordPreset(name="contact", keywords=CONTACT_KEYWORDS)
EVENT_PRESET = KeywordPreset(name="event", keywords=EVENT_KEYWORDS)


def default_registry() -> PresetRegistry:
    """Return a fresh registry holding the built-in presets."""

    registry = PresetRegistry()
    registry.register(CONTACT_PRESET)
    registry.register(EVENT_PRESET)
    return registry


__all__ = [
    "CONTACT_KEYWORDS",
    "CONTACT_PRESET",
    "EVENT_KEYWORDS",
    "EVENT_PRESET",
    "KeywordPreset",
    "PresetRegistry",
    "default_registry",
]
