"""Hygiene rules for the root-word list.

Rules come from ``filters/global.json`` and ``filters/<archetype>.json``
(``en-GB`` uses ``en``). Either file may be missing. Recognized keys:

``min_length``
    Shortest usable root word. The stricter of the two files wins.
``blacklist``
    Words never offered as a root word.
``blacklist_files``
    Extra newline-separated blacklists next to the JSON file.

Profane words are always dropped, using better_profanity.
"""

from __future__ import annotations

import json
from pathlib import Path
from dataclasses import dataclass, field
from functools import lru_cache
from collections.abc import Iterable

from better_profanity import profanity as _profanity

_profanity.load_censor_words()

__all__ = [
    "LanguageFilter",
    "RootWordRules",
    "apply_language_filters",
    "filter_candidates",
    "load_filter_config",
]

DEFAULT_MIN_ROOT_LENGTH = 4


@dataclass(slots=True)
class FilterConfig:
    """Settings read from a single filter JSON file."""

    min_length: int = DEFAULT_MIN_ROOT_LENGTH
    blacklist: tuple[str, ...] = field(default_factory=tuple)


def _config_root() -> str:
    return str(Path(__file__).resolve().parent / "filters")


def _read_blacklist_file(path: Path) -> list[str]:
    if not path.is_file():
        return []
    lines = path.read_text(encoding="utf-8").splitlines()
    return [entry for entry in (line.strip().lower() for line in lines) if entry]


@lru_cache(maxsize=None)
def load_filter_config(archetype: str) -> FilterConfig:
    """Load the filter JSON of an archetype; defaults when there is none."""

    root = Path(_config_root())
    path = root / f"{archetype}.json"
    if not path.is_file():
        return FilterConfig()
    data = json.loads(path.read_text(encoding="utf-8"))

    words = [w.lower() for w in data.get("blacklist", []) if w]
    files = tuple(name for name in data.get("blacklist_files", []) if name)
    for name in files:
        words.extend(_read_blacklist_file(root / name))
    return FilterConfig(
        min_length=int(data.get("min_length", DEFAULT_MIN_ROOT_LENGTH)),
        blacklist=tuple(dict.fromkeys(words)),
    )


def _archetype(lang: str) -> str | None:
    """Map a language code to its filter file name (``en-GB`` -> ``en``)."""

    code = (lang or "").strip().lower()
    return code.split("-", 1)[0] or None


@dataclass(frozen=True, slots=True)
class RootWordRules:
    """Global and language settings combined into one rule set."""

    min_length: int
    blacklist: frozenset[str]

    @classmethod
    def for_language(cls, lang: str) -> "RootWordRules":
        configs = [load_filter_config("global")]
        if (archetype := _archetype(lang)) and archetype != "global":
            configs.append(load_filter_config(archetype))
        return cls(
            min_length=max(c.min_length for c in configs),
            blacklist=frozenset(w for c in configs for w in c.blacklist),
        )

    def rejects(self, word: str) -> bool:
        """Return True if ``word`` must not be used as a root word."""

        lower = word.lower()
        return (
            not lower.isalpha()
            or len(lower) < self.min_length
            or lower in self.blacklist
            or _profanity.contains_profanity(lower)
        )


class LanguageFilter:
    """Applies the root-word rules of one language to a word list."""

    def __init__(self, lang: str) -> None:
        self.lang = lang
        self._rules = RootWordRules.for_language(lang)

    @property
    def rules(self) -> RootWordRules:
        return self._rules

    def apply(self, words: Iterable[str]) -> list[str]:
        """Drop unusable root words and repeats; survivors keep their order."""

        seen: set[str] = set()
        kept: list[str] = []
        for word in words:
            key = word.lower()
            if key in seen or self._rules.rejects(word):
                continue
            seen.add(key)
            kept.append(word)
        return kept


@lru_cache(maxsize=None)
def _filter_for(lang: str) -> LanguageFilter:
    """Return a cached filter for the language code."""

    return LanguageFilter(lang)


def filter_candidates(
    words: Iterable[str],
    lang: str,
    *,
    enable_filters: bool = True,
) -> list[str]:
    """Filter root words for ``lang``; a copy of ``words`` when disabled."""

    if not enable_filters:
        return list(words)
    return _filter_for(lang).apply(words)


def apply_language_filters(
    lang: str,
    words: Iterable[str],
    *,
    enable_filters: bool = True,
) -> list[str]:
    """Public entry used by the word-list loader."""

    return filter_candidates(words, lang, enable_filters=enable_filters)
