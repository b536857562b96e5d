"""WordScramble – make shorter words from the letters of a root word.

Each round shows a random root word. Words spelled from its letters score
their length; submissions are checked against a Hunspell `.dic`/`.aff`
dictionary. "Play again" starts a new round and banks the score.
"""

__version__ = "1.0.0"

import argparse
import logging
import os
import random
import sys
import tkinter as tk
from tkinter import messagebox

from dictionary import DictionaryRecognizer, build_recognizer, clear_cache
from game import (
    DEFAULT_ROOT_WORD,
    Accepted,
    WordListError,
    WordRecognizer,
    load_word_list,
    start_round,
    submit_word,
)
from style import COLORS, LAYOUT, load_fonts, title_banner

DEFAULT_WORDS_PATH = os.path.join("words", "start.txt")

def _resource_path(relative_path: str) -> str:
    """Get absolute path to resource, works for dev and PyInstaller.

    Args:
        relative_path: Relative path from script directory.

    Returns:
        Absolute path to the resource.
    """
    try:
        # PyInstaller creates a temp folder and stores path in _MEIPASS
        # pylint: disable=protected-access
        base_path = sys._MEIPASS
    except AttributeError:
        # Running as script, use directory of main.py
        base_path = os.path.dirname(os.path.abspath(__file__))
    return os.path.join(base_path, relative_path)

def _dictionaries_root() -> str:
    """Return the absolute path to the dictionaries submodule root."""
    return os.path.normpath(
        _resource_path(os.path.join("external", "dictionaries", "dictionaries"))
    )

def _available_dictionary_codes() -> dict[str, str]:
    """Return mapping of normalized language codes to canonical directory names."""
    root = _dictionaries_root()
    if not os.path.isdir(root):
        return {}

    mapping: dict[str, str] = {}
    for entry in sorted(os.listdir(root)):
        entry_path = os.path.join(root, entry)
        if not os.path.isdir(entry_path):
            continue
        aff_path = os.path.join(entry_path, "index.aff")
        dic_path = os.path.join(entry_path, "index.dic")
        if os.path.isfile(aff_path) and os.path.isfile(dic_path):
            mapping[entry.lower()] = entry
    return mapping

def _print_available_languages() -> int:
    """Print available language codes from the dictionaries submodule."""
    mapping = _available_dictionary_codes()
    if not mapping:
        print(
            "No dictionaries found. Ensure the dictionaries submodule is initialized "
            "with 'git submodule update --init --recursive'.",
            file=sys.stderr,
        )
        return 1

    print("Available dictionaries:")
    for canonical in sorted(mapping.values(), key=str.lower):
        print(f"  {canonical}")
    return 0

def _make_word_row(
    parent: tk.Widget, word: str, badge_font, body_font
) -> tk.Frame:
    """Create one used-word row: a length badge and the word in capitals."""
    row = tk.Frame(parent, bg=COLORS.section_background)
    badge = tk.Label(
        row,
        text=str(len(word)),
        width=2,
        bg=COLORS.badge_background,
        fg=COLORS.badge_text,
        font=badge_font,
    )
    badge.pack(side=tk.LEFT, padx=(0, LAYOUT.badge_padx))
    text = tk.Label(
        row,
        text=word.upper(),
        bg=COLORS.section_background,
        fg=COLORS.primary_text,
        font=body_font,
        anchor="w",
    )
    text.pack(side=tk.LEFT, fill=tk.X, expand=True)
    return row

def play_gui(
    word_list: tuple[str, ...],
    recognizer: WordRecognizer,
    lang: str,
    rng: random.Random | None = None,
) -> None:
    """Run the game in a Tkinter window.

    The window holds the only Session reference and replaces it with whatever
    ``start_round`` and ``submit_word`` return.

    Args:
        word_list: Candidate root words.
        recognizer: Dictionary used to accept or reject submissions.
        lang: Language code handed to the recognizer.
        rng: Random source for root-word selection.
    """
    logger = logging.getLogger("wordscramble")
    session = start_round(word_list, rng=rng)

    root = tk.Tk()
    root.title("WordScramble")
    root.configure(bg=COLORS.background)
    fonts = load_fonts(root)

    container = tk.Frame(root, bg=COLORS.background)
    container.pack(
        fill=tk.BOTH,
        expand=True,
        padx=LAYOUT.outer_padding,
        pady=LAYOUT.outer_padding,
    )

    # Toolbar with the heading (root word) and "Play again"
    toolbar = tk.Frame(container, bg=COLORS.background)
    toolbar.pack(fill=tk.X, pady=(0, LAYOUT.section_gap))
    heading_var = tk.StringVar()
    tk.Label(
        toolbar,
        textvariable=heading_var,
        font=fonts.heading,
        fg=COLORS.primary_text,
        bg=COLORS.background,
    ).pack(side=tk.LEFT)

    # Input section
    tk.Label(
        container,
        text="Make a different word from the above word".upper(),
        font=fonts.header,
        fg=COLORS.secondary_text,
        bg=COLORS.background,
        anchor="w",
    ).pack(fill=tk.X)
    input_section = tk.Frame(
        container,
        bg=COLORS.section_background,
        padx=LAYOUT.section_padding,
        pady=LAYOUT.section_padding,
    )
    input_section.pack(fill=tk.X, pady=(0, LAYOUT.section_gap))
    new_word = tk.StringVar()
    entry = tk.Entry(
        input_section,
        textvariable=new_word,
        font=fonts.body,
        bg=COLORS.entry_background,
        fg=COLORS.primary_text,
        relief=tk.FLAT,
    )
    entry.pack(fill=tk.X)
    placeholder = "Enter your word"

    # Used words and round score
    words_section = tk.Frame(
        container,
        bg=COLORS.section_background,
        padx=LAYOUT.section_padding,
        pady=LAYOUT.section_padding,
    )
    words_section.pack(fill=tk.BOTH, expand=True, pady=(0, LAYOUT.section_gap))
    words_frame = tk.Frame(words_section, bg=COLORS.section_background)
    words_frame.pack(fill=tk.BOTH, expand=True)
    round_score_var = tk.StringVar()
    tk.Label(
        words_section,
        textvariable=round_score_var,
        font=fonts.body,
        fg=COLORS.primary_text,
        bg=COLORS.section_background,
        anchor="w",
    ).pack(fill=tk.X, pady=(LAYOUT.row_pady, 0))

    # Total score banner
    total_score_var = tk.StringVar()
    title_banner(container, total_score_var, fonts.title).pack(pady=LAYOUT.row_pady)

    def hide_placeholder(_event=None) -> None:
        """Remove the hint text when the entry gains focus."""
        if entry.cget("fg") == COLORS.secondary_text:
            new_word.set("")
            entry.configure(fg=COLORS.primary_text)

    def restore_placeholder(_event=None) -> None:
        if not new_word.get():
            entry.configure(fg=COLORS.secondary_text)
            new_word.set(placeholder)

    def render() -> None:
        """Redraw every widget that shows session state."""
        heading_var.set(session.root_word)
        root.title(f"WordScramble – {session.root_word}")
        for child in words_frame.winfo_children():
            child.destroy()
        for word in session.used_words:
            _make_word_row(words_frame, word, fonts.badge, fonts.body).pack(
                fill=tk.X, pady=LAYOUT.row_pady
            )
        round_score_var.set(
            f"Your score for {session.root_word} is {session.round_score}"
        )
        total_score_var.set(f"Your total score is {session.total_score}")

    def word_error(title: str, message: str) -> None:
        """Present a rejection as a modal alert."""
        messagebox.showerror(title, message, parent=root)

    def add_new_word(_event=None) -> None:
        """Submit the entry text and apply the result."""
        nonlocal session
        if entry.cget("fg") == COLORS.secondary_text:
            return
        outcome, session = submit_word(new_word.get(), session, recognizer, lang=lang)
        if isinstance(outcome, Accepted):
            new_word.set("")
            render()
            return
        word_error(outcome.title, outcome.message(session.root_word))
        entry.focus_set()

    def start_game() -> None:
        """Start a new round, banking the current round score."""
        nonlocal session
        session = start_round(word_list, session, rng=rng)
        new_word.set("")
        render()
        entry.focus_set()

    def dismiss_keyboard(_event=None) -> None:
        """Take focus away from the entry (the "Done" action)."""
        container.focus_set()
        restore_placeholder()

    play_again = tk.Button(
        toolbar,
        text="Play again",
        command=start_game,
        bg=COLORS.toolbar_button_bg,
        activebackground=COLORS.toolbar_button_active_bg,
        fg=COLORS.primary_text,
        font=fonts.body,
        relief=tk.FLAT,
        padx=LAYOUT.toolbar_padx,
        pady=LAYOUT.toolbar_pady // 2,
    )
    play_again.pack(side=tk.RIGHT)

    entry.bind("<Return>", add_new_word)
    entry.bind("<Escape>", dismiss_keyboard)
    entry.bind("<FocusIn>", hide_placeholder)
    entry.bind("<FocusOut>", restore_placeholder)

    backend = getattr(recognizer, "backend", "custom")
    logger.info(
        "Starting with %d root words. Recognizer backend: %s",
        len(word_list),
        backend,
    )

    render()
    restore_placeholder()
    root.minsize(360, 560)
    root.mainloop()

def main() -> None:
    """Parse arguments, load the word list and dictionary, then start the GUI."""
    parser = argparse.ArgumentParser(
        description="WordScramble: spell words from the letters of a root word"
    )
    parser.add_argument(
        "--lang",
        type=str,
        default="en",
        help="Language code for dictionaries (default: en)",
    )
    parser.add_argument(
        "--words",
        type=str,
        default=None,
        help=f"Root-word list, one word per line (default: {DEFAULT_WORDS_PATH})",
    )
    parser.add_argument(
        "--dict-folder",
        type=str,
        default=None,
        help="Folder with .aff/.dic pairs; overrides the dictionaries submodule",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List available dictionaries and exit",
    )
    parser.add_argument(
        "--disable-word-filters",
        action="store_true",
        help="Use the root-word list as is, without language filters.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for root-word selection",
    )
    parser.add_argument(
        "--clear-cache",
        nargs="?",
        const="*",
        metavar="LANG",
        help=(
            "Delete cached dictionary word sets and exit. Provide a language "
            "code to only remove that language's cache."
        ),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args()

    # Configure logging (console)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )
    logger = logging.getLogger("wordscramble")

    if args.clear_cache is not None:
        raw_lang = args.clear_cache
        lang_code = None
        if raw_lang != "*":
            lang_code = (raw_lang or "").strip().lower() or None
        removed = clear_cache(lang_code)
        if lang_code:
            logger.info("Cleared %d cache file(s) for language '%s'.", removed, lang_code)
        else:
            logger.info("Cleared %d cache file(s) for all languages.", removed)
        return

    if args.list:
        raise SystemExit(_print_available_languages())

    lang = (args.lang or "").strip().lower() or "en"
    if args.dict_folder:
        dict_folder = args.dict_folder
    else:
        available_codes = _available_dictionary_codes()
        if not available_codes:
            parser.error(
                "No dictionaries available. Initialize the dictionaries submodule with "
                "'git submodule update --init --recursive' or pass --dict-folder."
            )
        if lang not in available_codes:
            parser.error(
                f"Unknown language '{args.lang}'. Run with --list to see available options."
            )
        dict_folder = os.path.join(_dictionaries_root(), available_codes[lang])

    words_path = args.words or _resource_path(DEFAULT_WORDS_PATH)
    rng = random.Random(args.seed) if args.seed is not None else None

    try:
        word_list = load_word_list(
            words_path, lang=lang, enable_filters=not args.disable_word_filters
        )
        max_length = max((len(w) for w in word_list), default=len(DEFAULT_ROOT_WORD))
        recognizer: DictionaryRecognizer = build_recognizer(
            dict_folder, lang, max_length=max_length
        )
        play_gui(word_list, recognizer, lang, rng=rng)
    except (WordListError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
