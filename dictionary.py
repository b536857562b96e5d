"""Dictionary recognition for WordScramble.

Builds a word set from Hunspell-style `.dic` and `.aff` files (single prefix
or suffix expansion only) and answers "is this a real word" for submissions.
Expanded word sets are cached per language under ``cache/``.
"""

from __future__ import annotations

import hashlib
import logging
import re
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import NamedTuple

from game import MIN_WORD_LENGTH, normalize_word as _normalize_word

_LETTERS_RE = re.compile(r"^[^\W\d_]+$")

logger = logging.getLogger("wordscramble")


class DictionaryRecognizer:
    """Answers whether a word belongs to a language's word set.

    Args:
        allowed_words: Words considered real; normalized on construction.
        lang: Language code this word set belongs to.
        backend: Short description of where the words came from, for logs.
    """

    def __init__(
        self,
        allowed_words: Iterable[str],
        *,
        lang: str = "en",
        backend: str = "word-set",
    ) -> None:
        self.lang = (lang or "").strip().lower()
        self.backend = backend
        self.allowed_words = frozenset(
            w for w in (_normalize_word(word) for word in allowed_words) if w
        )

    def __len__(self) -> int:
        return len(self.allowed_words)

    def is_recognized(self, word: str, lang: str = "en") -> bool:
        """Return True if ``word`` is a known word of ``lang``."""
        if (lang or "").strip().lower() != self.lang:
            logger.info(
                "No word set for language '%s' (have '%s'); rejecting '%s'.",
                lang,
                self.lang,
                word,
            )
            return False
        if _normalize_word(word) in self.allowed_words:
            return True
        logger.info("Dictionary rejected: %s", word)
        return False


def find_dictionary_pairs(directory: str | Path) -> list[tuple[Path, Path]]:
    """Return (aff, dic) paths that share a base name inside ``directory``.

    Raises:
        FileNotFoundError: If the directory does not exist.
    """
    folder = Path(directory)
    if not folder.is_dir():
        raise FileNotFoundError(f"Dictionary directory '{directory}' does not exist.")

    by_suffix: dict[str, dict[str, Path]] = {".aff": {}, ".dic": {}}
    for path in sorted(folder.iterdir()):
        bucket = by_suffix.get(path.suffix.lower())
        if bucket is not None and path.is_file():
            bucket[path.stem] = path
    return [
        (aff, by_suffix[".dic"][stem])
        for stem, aff in by_suffix[".aff"].items()
        if stem in by_suffix[".dic"]
    ]


def parse_dic_entries(dic_path: str | Path) -> list[tuple[str, str]]:
    """Parse .dic entries into (normalized_word, flags) tuples.

    The optional word count on the first line is skipped, as are
    morphological fields after the word.

    Raises:
        UnicodeDecodeError: If file is not valid UTF-8.
        OSError: If file cannot be read.
    """
    lines = Path(dic_path).read_text(encoding="utf-8").splitlines()
    entries: list[tuple[str, str]] = []
    for index, line in enumerate(lines):
        fields = line.split()
        if not fields or (index == 0 and fields[0].isdigit()):
            continue
        word, _, flags = fields[0].partition("/")
        entries.append((_normalize_word(word), flags))
    return entries


class AffixRule(NamedTuple):
    """One SFX/PFX rule line, e.g. ``SFX S y ies [^aeiou]y``."""

    strip: str
    add: str
    condition: str

    def apply(self, base: str, is_suffix: bool) -> str | None:
        """Return the affixed form of ``base``, or None if the rule does not fit."""
        if self.condition and self.condition != ".":
            pattern = self.condition + "$" if is_suffix else "^" + self.condition
            try:
                if not re.search(pattern, base):
                    return None
            except re.error:
                logger.debug("Ignoring bad affix condition %r", self.condition)
        if is_suffix:
            if not base.endswith(self.strip):
                return None
            stem = base[: len(base) - len(self.strip)]
            return stem + self.add
        if not base.startswith(self.strip):
            return None
        return self.add + base[len(self.strip) :]


class AffRules:
    """Suffix (SFX) and prefix (PFX) rules keyed by flag characters."""

    def __init__(self) -> None:
        self.sfx: dict[str, list[AffixRule]] = {}
        self.pfx: dict[str, list[AffixRule]] = {}

    def add_rule(
        self, is_suffix: bool, flag: str, strip: str, add: str, cond: str
    ) -> None:
        """Add an affix rule.

        Args:
            is_suffix: True for suffix (SFX), False for prefix (PFX).
            flag: Flag character identifying this rule group.
            strip: Characters to remove from base word.
            add: Characters to add after stripping.
            cond: Condition the base word must match.
        """
        store = self.sfx if is_suffix else self.pfx
        store.setdefault(flag, []).append(AffixRule(strip, add, cond))

    def merge(self, other: "AffRules") -> None:
        """Append all rules of ``other`` to this rule set."""
        for mine, theirs in ((self.sfx, other.sfx), (self.pfx, other.pfx)):
            for flag, rules in theirs.items():
                mine.setdefault(flag, []).extend(rules)

    def forms(self, base: str, flags: str) -> Iterator[str]:
        """Yield every single-affix form of ``base`` allowed by ``flags``."""
        for flag in flags:
            for is_suffix, store in ((True, self.sfx), (False, self.pfx)):
                for rule in store.get(flag, ()):
                    if (form := rule.apply(base, is_suffix)) is not None:
                        yield form


def parse_aff_rules(aff_path: str | Path) -> AffRules:
    """Parse SFX/PFX rules from an .aff file.

    Header lines (``SFX A Y 2``) are skipped; rule lines look like
    ``SFX A 0 en .`` where ``0`` means nothing to strip or add. Continuation
    flags on the added part (``ed/XY``) are dropped.

    Raises:
        UnicodeDecodeError: If file is not valid UTF-8.
        OSError: If file cannot be read.
    """
    rules = AffRules()
    path = Path(aff_path)
    if not path.is_file():
        return rules

    for line in path.read_text(encoding="utf-8").splitlines():
        parts = line.split()
        if len(parts) < 5 or parts[0] not in ("SFX", "PFX"):
            continue
        kind, flag, strip, add, cond = parts[:5]
        if strip in ("Y", "N") and add.isdigit():
            continue
        add = add.split("/", 1)[0]
        rules.add_rule(
            kind == "SFX",
            flag,
            "" if strip == "0" else strip,
            "" if add == "0" else add,
            cond,
        )
    return rules


def expand_with_affixes(
    entries: Iterable[tuple[str, str]],
    rules: AffRules,
    *,
    min_length: int = MIN_WORD_LENGTH,
    max_length: int | None = None,
) -> set[str]:
    """Return base words plus their single-affix forms.

    Prefix and suffix rules are never combined. Only alphabetic words with
    ``min_length <= len <= max_length`` are kept.
    """

    def usable(word: str) -> bool:
        if len(word) < min_length:
            return False
        if max_length is not None and len(word) > max_length:
            return False
        return bool(_LETTERS_RE.match(word))

    result: set[str] = set()
    for base, flags in entries:
        result.update(w for w in (base, *rules.forms(base, flags)) if usable(w))
    return result


def collect_dictionary_words(
    dict_folder: str | Path, *, max_length: int | None = None
) -> set[str]:
    """Combine every .aff/.dic pair in ``dict_folder`` into one word set.

    Raises:
        FileNotFoundError: If the folder does not exist.
        ValueError: If no dictionary entries were found.
    """
    rules = AffRules()
    entries: list[tuple[str, str]] = []
    for aff_path, dic_path in find_dictionary_pairs(dict_folder):
        rules.merge(parse_aff_rules(aff_path))
        pair_entries = parse_dic_entries(dic_path)
        entries.extend(pair_entries)
        logger.info(
            "Loaded dictionary pair: %s/%s (%d entries)",
            aff_path.name,
            dic_path.name,
            len(pair_entries),
        )
    if not entries:
        raise ValueError(
            f"Dictionary files in '{dict_folder}' do not contain any entries."
        )
    return expand_with_affixes(entries, rules, max_length=max_length)


# Created in the user's working directory, never bundled
CACHE_DIR = Path("cache")


def cache_path(
    lang: str, max_length: int | None, dict_folder: str | Path | None = None
) -> Path:
    """Return the cache file for a language and maximum word length.

    When ``dict_folder`` is given its resolved path is hashed into the name,
    so two dictionary folders for one language never share a cache file.
    """
    size = "all" if max_length is None else str(max_length)
    if dict_folder is None:
        return CACHE_DIR / f"{lang}_{size}_utf-8.txt"
    source = str(Path(dict_folder).resolve()).encode("utf-8")
    digest = hashlib.sha256(source).hexdigest()[:12]
    return CACHE_DIR / f"{lang}_{size}_{digest}_utf-8.txt"


def load_cache(
    lang: str, max_length: int | None, dict_folder: str | Path | None = None
) -> set[str]:
    """Load a cached word set, or an empty set when there is none."""
    path = cache_path(lang, max_length, dict_folder)
    if not path.is_file():
        return set()
    return {w for line in path.read_text(encoding="utf-8").splitlines() if (w := line.strip())}


def save_cache(
    lang: str,
    max_length: int | None,
    words: Iterable[str],
    dict_folder: str | Path | None = None,
) -> Path:
    """Write a word set to the cache and return the path written.

    Raises:
        OSError: If the cache file cannot be written.
    """
    path = cache_path(lang, max_length, dict_folder)
    path.parent.mkdir(parents=True, exist_ok=True)
    ordered = sorted(set(words))
    path.write_text("".join(w + "\n" for w in ordered), encoding="utf-8")
    logger.info("Cache written: %s (%d words)", path, len(ordered))
    return path


def clear_cache(lang: str | None = None) -> int:
    """Delete cached word sets, optionally only those of one language.

    Returns:
        Number of files removed.
    """
    if not CACHE_DIR.is_dir():
        return 0

    prefix = f"{lang.strip().lower()}_" if lang and lang.strip() else ""
    removed = 0
    for path in CACHE_DIR.glob("*.txt"):
        if not path.name.lower().startswith(prefix):
            continue
        try:
            path.unlink()
        except OSError as exc:
            logger.warning("Could not remove cache file %s: %s", path, exc)
            continue
        removed += 1

    if not prefix and not any(CACHE_DIR.iterdir()):
        CACHE_DIR.rmdir()
    return removed


def build_recognizer(
    dict_folder: str | Path,
    lang: str,
    *,
    max_length: int | None = None,
    extra_words: Iterable[str] = (),
) -> DictionaryRecognizer:
    """Create a recognizer for ``lang`` backed by the dictionaries in ``dict_folder``.

    Uses the per-(lang, max_length, dict_folder) cache when present; otherwise parses the
    dictionaries and writes the cache.

    Args:
        dict_folder: Directory containing .dic and .aff files.
        lang: Language code (e.g., 'en').
        max_length: Longest word worth keeping, usually the longest root word.
        extra_words: Additional words to accept.

    Returns:
        A DictionaryRecognizer for the language.
    """
    logger.info("Using dictionary folder: %s", dict_folder)
    lang = (lang or "").strip().lower()

    words = load_cache(lang, max_length, dict_folder)
    if words:
        backend = "cache"
        logger.info("Loaded cache for %s/%s: %d words", lang, max_length, len(words))
    else:
        words = collect_dictionary_words(dict_folder, max_length=max_length)
        save_cache(lang, max_length, words, dict_folder)
        backend = ".dic/.aff"
        logger.info("Built word set for %s/%s: %d words", lang, max_length, len(words))

    words |= {_normalize_word(w) for w in extra_words}
    return DictionaryRecognizer(words, lang=lang, backend=backend)
