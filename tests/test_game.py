import logging
import random
from pathlib import Path

import pytest

from dictionary import DictionaryRecognizer
from game import (
    DEFAULT_ROOT_WORD,
    Accepted,
    Rejected,
    RejectionReason,
    Session,
    WordListError,
    is_long_enough,
    is_original,
    is_possible,
    load_word_list,
    normalize_word,
    start_round,
    submit_word,
)

WORDS = {"silk", "work", "worm", "milk", "sill", "wilk", "slim", "mors"}


class CountingRecognizer:
    """Recognizer stub that records which words it was asked about."""

    def __init__(self, known):
        self.known = set(known)
        self.calls = []

    def is_recognized(self, word, lang):
        self.calls.append((word, lang))
        return word in self.known


def _session(root="silkworm", used=(), round_score=0, total=0):
    return Session(root_word=root, used_words=tuple(used), round_score=round_score, total_score=total)


@pytest.fixture
def recognizer():
    return DictionaryRecognizer(WORDS, lang="en")


# --- individual checks ---

@pytest.mark.parametrize("word,root,expected", [
    ("silk", "silkworm", True),
    ("worm", "silkworm", True),
    ("milks", "silkworm", True),
    ("sillk", "silkworm", False),   # only one 'l'
    ("silky", "silkworm", False),   # no 'y'
    ("", "silkworm", True),
    ("oo", "book", True),
    ("ooo", "book", False),
])
def test_is_possible(word, root, expected):
    assert is_possible(word, root) is expected


@pytest.mark.parametrize("word,expected", [
    ("si", False),
    ("sil", True),
    ("silkworm", False),
    ("silkwor", True),
])
def test_is_long_enough(word, expected):
    assert is_long_enough(word, "silkworm") is expected


def test_is_original():
    assert is_original("silk", ("worm",)) is True
    assert is_original("worm", ("silk", "worm")) is False


def test_normalize_word_trims_and_lowercases():
    assert normalize_word("  SiLk \n") == "silk"


# --- submission orchestrator ---

def test_accepts_spellable_recognized_word(recognizer):
    outcome, session = submit_word("silk", _session(), recognizer)
    assert outcome == Accepted("silk")
    assert session.used_words == ("silk",)
    assert session.round_score == 4


def test_accepted_words_are_prepended(recognizer):
    session = _session()
    for word in ("silk", "worm", "milk"):
        _, session = submit_word(word, session, recognizer)
    assert session.used_words == ("milk", "worm", "silk")
    assert session.round_score == sum(len(w) for w in session.used_words)


def test_input_is_normalized_before_checks(recognizer):
    outcome, session = submit_word("  SILK  ", _session(), recognizer)
    assert outcome == Accepted("silk")
    assert session.used_words == ("silk",)


@pytest.mark.parametrize("candidate", ["si", "", "  ab  ", "silkworm", " SilkWorm "])
def test_too_short_or_same(candidate, recognizer):
    outcome, _ = submit_word(candidate, _session(), recognizer)
    assert outcome == Rejected(RejectionReason.TOO_SHORT_OR_SAME)


def test_resubmission_is_already_used(recognizer):
    _, session = submit_word("silk", _session(), recognizer)
    outcome, after = submit_word("Silk", session, recognizer)
    assert outcome == Rejected(RejectionReason.ALREADY_USED)
    assert after is session


@pytest.mark.parametrize("candidate", ["sillk", "silky", "words"])
def test_not_spellable(candidate, recognizer):
    outcome, _ = submit_word(candidate, _session(), recognizer)
    assert outcome == Rejected(RejectionReason.NOT_SPELLABLE)


def test_not_recognized(recognizer):
    outcome, session = submit_word("kwos", _session(), recognizer)
    assert outcome == Rejected(RejectionReason.NOT_RECOGNIZED)
    assert session.used_words == ()
    assert session.round_score == 0


def test_checks_short_circuit_before_dictionary():
    stub = CountingRecognizer(WORDS)
    session = _session(used=("silk",), round_score=4)
    for candidate in ("si", "silkworm", "silk", "sillk"):
        outcome, after = submit_word(candidate, session, stub)
        assert isinstance(outcome, Rejected)
        assert after is session
    assert stub.calls == []

    submit_word("worm", session, stub, lang="en")
    assert stub.calls == [("worm", "en")]


def test_length_check_runs_before_originality():
    # root word itself is reported as too short/same even if "used"
    session = _session(used=("silkworm",))
    outcome, _ = submit_word("silkworm", session, CountingRecognizer(WORDS))
    assert outcome.reason is RejectionReason.TOO_SHORT_OR_SAME


def test_originality_runs_before_spellability():
    session = _session(root="silkworm", used=("zzz",))
    outcome, _ = submit_word("zzz", session, CountingRecognizer({"zzz"}))
    assert outcome.reason is RejectionReason.ALREADY_USED


def test_failure_leaves_session_unchanged(recognizer):
    session = _session(used=("worm",), round_score=4, total=10)
    for candidate in ("si", "worm", "sillk", "kwos"):
        _, after = submit_word(candidate, session, recognizer)
        assert after == session


def test_rejection_texts():
    assert Rejected(RejectionReason.TOO_SHORT_OR_SAME).title == "Word not valid"
    assert Rejected(RejectionReason.ALREADY_USED).title == "Word used already"
    assert Rejected(RejectionReason.NOT_RECOGNIZED).title == "Word not recognized"
    not_possible = Rejected(RejectionReason.NOT_SPELLABLE)
    assert not_possible.title == "Word not possible"
    assert not_possible.message("silkworm") == "You can't spell that word from 'silkworm'"


# --- round lifecycle ---

def test_start_round_picks_from_list():
    words = ("silkworm", "lemonade", "triangle")
    session = start_round(words, rng=random.Random(3))
    assert session.root_word in words
    assert session.used_words == ()
    assert session.round_score == 0
    assert session.total_score == 0


def test_start_round_is_reproducible_with_seed():
    words = tuple(f"word{i:04d}" for i in range(50))
    first = start_round(words, rng=random.Random(42))
    second = start_round(words, rng=random.Random(42))
    assert first.root_word == second.root_word


def test_start_round_banks_round_score(recognizer):
    session = start_round(("silkworm",))
    _, session = submit_word("silk", session, recognizer)
    _, session = submit_word("worm", session, recognizer)
    assert session.round_score == 8

    session = start_round(("silkworm",), session)
    assert session.total_score == 8
    assert session.round_score == 0
    assert session.used_words == ()

    _, session = submit_word("milk", session, recognizer)
    session = start_round(("silkworm",), session)
    assert session.total_score == 12


def test_start_round_repeated_calls_never_decrease_total():
    session = _session(round_score=0, total=5)
    for _ in range(3):
        session = start_round(("silkworm",), session)
        assert session.total_score == 5


def test_start_round_empty_list_falls_back_to_default():
    session = start_round(())
    assert session.root_word == DEFAULT_ROOT_WORD


def test_start_round_empty_list_logs_fallback(caplog):
    with caplog.at_level(logging.WARNING, logger="wordscramble"):
        start_round(())
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert any(DEFAULT_ROOT_WORD in r.getMessage() for r in warnings)


def test_load_word_list_keeps_unfiltered_words_when_disabled(tmp_path: Path):
    p = tmp_path / "start.txt"
    p.write_text("ab\nlemon4de\nab\n", encoding="utf-8")
    assert load_word_list(str(p), enable_filters=False) == ("ab", "lemon4de", "ab")


# --- word list bootstrap ---

def test_load_word_list_reads_lines_in_order(tmp_path: Path):
    p = tmp_path / "start.txt"
    p.write_text("Silkworm\n\nlemonade\r\ntriangle\n", encoding="utf-8")
    assert load_word_list(str(p), enable_filters=False) == ("silkworm", "lemonade", "triangle")


def test_load_word_list_applies_filters(tmp_path: Path):
    p = tmp_path / "start.txt"
    p.write_text("silkworm\nab\nsilkworm\nlemon4de\ntriangle\n", encoding="utf-8")
    assert load_word_list(str(p)) == ("silkworm", "triangle")


def test_load_word_list_empty_file_is_not_fatal(tmp_path: Path):
    p = tmp_path / "start.txt"
    p.write_text("", encoding="utf-8")
    assert load_word_list(str(p)) == ()


def test_load_word_list_missing_file(tmp_path: Path):
    with pytest.raises(WordListError):
        load_word_list(str(tmp_path / "missing.txt"))


def test_load_word_list_not_utf8(tmp_path: Path):
    p = tmp_path / "start.txt"
    p.write_bytes(b"\xff\xfe\xfa\n")
    with pytest.raises(WordListError):
        load_word_list(str(p))
