"""Session state and word validation for WordScramble.

A round shows a root word; the player submits shorter words spelled from its
letters. Everything here is free of Tk so the window in ``main`` only has to
apply the results.
"""

from __future__ import annotations

import enum
import logging
import os
import random
import unicodedata
from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from typing import Protocol, Union

from filter import apply_language_filters

MIN_WORD_LENGTH = 3
DEFAULT_ROOT_WORD = "silkworm"

logger = logging.getLogger("wordscramble")


class WordListError(Exception):
    """Raised when the root-word list cannot be loaded at startup."""


class WordRecognizer(Protocol):
    """Anything that can tell whether a word is a real word of a language."""

    def is_recognized(self, word: str, lang: str) -> bool:
        ...


class RejectionReason(enum.Enum):
    """Why a submission was refused, in the order the checks run."""

    TOO_SHORT_OR_SAME = "too_short_or_same"
    ALREADY_USED = "already_used"
    NOT_SPELLABLE = "not_spellable"
    NOT_RECOGNIZED = "not_recognized"


_REJECTION_TEXT: dict[RejectionReason, tuple[str, str]] = {
    RejectionReason.TOO_SHORT_OR_SAME: (
        "Word not valid",
        "Too short or the same as the given word!",
    ),
    RejectionReason.ALREADY_USED: ("Word used already", "Be more original!"),
    RejectionReason.NOT_SPELLABLE: (
        "Word not possible",
        "You can't spell that word from '{root}'",
    ),
    RejectionReason.NOT_RECOGNIZED: (
        "Word not recognized",
        "You can't just make them up, ya know!",
    ),
}


@dataclass(frozen=True, slots=True)
class Accepted:
    """The word was added to the round."""

    word: str


@dataclass(frozen=True, slots=True)
class Rejected:
    """The word was refused; the session is unchanged."""

    reason: RejectionReason

    @property
    def title(self) -> str:
        return _REJECTION_TEXT[self.reason][0]

    def message(self, root_word: str) -> str:
        """Return the alert text, naming the root word where relevant."""
        return _REJECTION_TEXT[self.reason][1].format(root=root_word)


ValidationOutcome = Union[Accepted, Rejected]


@dataclass(frozen=True, slots=True)
class Session:
    """State of the running game.

    ``used_words`` is ordered most recent first. ``round_score`` is the sum of
    their lengths; ``total_score`` holds the scores of finished rounds.
    """

    root_word: str = ""
    used_words: tuple[str, ...] = field(default_factory=tuple)
    round_score: int = 0
    total_score: int = 0


def normalize_word(word: str) -> str:
    """Normalize to NFC, lowercase and strip surrounding whitespace.

    Args:
        word: Raw text as typed by the player or read from a file.

    Returns:
        The normalized word.
    """
    return unicodedata.normalize("NFC", word).lower().strip()


def is_long_enough(word: str, root_word: str) -> bool:
    """Return True if the word has at least three letters and is not the root."""
    return len(word) >= MIN_WORD_LENGTH and word != root_word


def is_original(word: str, used_words: Sequence[str]) -> bool:
    """Return True if the word has not been accepted yet this round."""
    return word not in used_words


def is_possible(word: str, root_word: str) -> bool:
    """Check whether ``word`` can be spelled from the letters of ``root_word``.

    Each letter of the root may be used at most as often as it occurs there.

    Args:
        word: Normalized candidate word.
        root_word: Normalized root word.

    Returns:
        True if every letter of the candidate could be taken from the root.
    """
    remaining = list(root_word)
    for letter in word:
        try:
            remaining.remove(letter)
        except ValueError:
            return False
    return True


def submit_word(
    candidate: str,
    session: Session,
    recognizer: WordRecognizer,
    *,
    lang: str = "en",
) -> tuple[ValidationOutcome, Session]:
    """Validate a submission and return the outcome with the resulting session.

    Checks run in a fixed order and stop at the first failure: length/self,
    originality, spellability, then dictionary recognition. The recognizer is
    only asked about words that passed the cheaper checks.

    Args:
        candidate: Raw text from the input field.
        session: Current session.
        recognizer: Dictionary collaborator.
        lang: Language code handed to the recognizer.

    Returns:
        ``(Accepted(word), new_session)`` on success, otherwise
        ``(Rejected(reason), session)`` with the session untouched.
    """
    answer = normalize_word(candidate)
    root = session.root_word

    if not is_long_enough(answer, root):
        reason = RejectionReason.TOO_SHORT_OR_SAME
    elif not is_original(answer, session.used_words):
        reason = RejectionReason.ALREADY_USED
    elif not is_possible(answer, root):
        reason = RejectionReason.NOT_SPELLABLE
    elif not recognizer.is_recognized(answer, lang):
        reason = RejectionReason.NOT_RECOGNIZED
    else:
        updated = replace(
            session,
            used_words=(answer, *session.used_words),
            round_score=session.round_score + len(answer),
        )
        logger.debug(
            "Accepted '%s' for '%s' (round score %d)",
            answer,
            root,
            updated.round_score,
        )
        return Accepted(answer), updated

    logger.info("Rejected '%s' for '%s': %s", answer, root, reason.value)
    return Rejected(reason), session


def start_round(
    word_list: Sequence[str],
    session: Session | None = None,
    *,
    rng: random.Random | None = None,
) -> Session:
    """Begin a new round with a random root word.

    The previous round's score is added to the total before it is reset.

    Args:
        word_list: Candidate root words.
        session: The session being replaced, or None for the first round.
        rng: Random source; the module-level generator when omitted.

    Returns:
        A fresh session for the new round.
    """
    chooser = rng if rng is not None else random
    if word_list:
        root_word = chooser.choice(word_list)
    else:
        logger.warning(
            "Word list is empty; using default root word '%s'.", DEFAULT_ROOT_WORD
        )
        root_word = DEFAULT_ROOT_WORD

    previous = session if session is not None else Session()
    logger.info("New root word '%s' selected.", root_word)
    return Session(
        root_word=root_word,
        used_words=(),
        round_score=0,
        total_score=previous.total_score + previous.round_score,
    )


def read_word_list(path: str) -> list[str]:
    """Read non-empty, normalized lines from a UTF-8 word list.

    Raises:
        WordListError: If the file is missing, unreadable or not UTF-8.
    """
    if not os.path.isfile(path):
        raise WordListError(f"Could not load word list '{path}': file not found.")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return [w for w in (normalize_word(line) for line in f) if w]
    except (OSError, UnicodeDecodeError) as exc:
        raise WordListError(f"Could not load word list '{path}': {exc}") from exc


def load_word_list(
    path: str,
    *,
    lang: str = "en",
    enable_filters: bool = True,
) -> tuple[str, ...]:
    """Load the root-word list once at startup.

    Args:
        path: Path of the word list resource.
        lang: Language code selecting the filter configuration.
        enable_filters: Whether to run the language filters over the list.

    Returns:
        The words in file order.

    Raises:
        WordListError: If the resource cannot be read.
    """
    words = read_word_list(path)
    raw_count = len(words)
    words = apply_language_filters(lang, words, enable_filters=enable_filters)
    if enable_filters and raw_count and not words:
        logger.warning(
            "Filters removed every word from '%s'.", os.path.basename(path)
        )
    result = tuple(words)
    logger.info(
        "Loaded %d root words from '%s' (%d lines read).",
        len(result),
        path,
        raw_count,
    )
    return result
