"""Centralized styling constants and helpers for the WordScramble window."""

from __future__ import annotations

from dataclasses import dataclass

import tkinter as tk
from tkinter import font as tkfont


@dataclass(frozen=True)
class Colors:
    """Color palette used across the WordScramble UI."""

    background: str = "#f2f2f7"
    section_background: str = "#ffffff"
    primary_text: str = "#1c1c1e"
    secondary_text: str = "#6e6e73"
    badge_background: str = "#1c1c1e"
    badge_text: str = "#ffffff"
    entry_background: str = "#ffffff"
    toolbar_button_bg: str = "#e5e5ea"
    toolbar_button_active_bg: str = "#d1d1d6"
    title_text: str = "#800080"
    title_shadow: str = "#008080"
    title_banner: str = "#ffa500"
    title_banner_inner: str = "#fbe7c6"


@dataclass(frozen=True)
class Layout:
    """Spacing used by WordScramble widgets."""

    outer_padding: int = 16
    section_padding: int = 10
    section_gap: int = 12
    row_pady: int = 3
    badge_padx: int = 8
    banner_pady: int = 20
    banner_width: int = 300
    banner_shadow_offset: int = 2
    toolbar_padx: int = 8
    toolbar_pady: int = 8


COLORS = Colors()
LAYOUT = Layout()

FONT_FAMILY = "Helvetica"

HEADING_FONT_SIZE = 28
BODY_FONT_SIZE = 13
HEADER_FONT_SIZE = 10
BADGE_FONT_SIZE = 11
TITLE_FONT_SIZE = 22


@dataclass(frozen=True)
class Fonts:
    """Container for Tk font instances used throughout the UI."""

    heading: tkfont.Font
    body: tkfont.Font
    header: tkfont.Font
    badge: tkfont.Font
    title: tkfont.Font


def _make_font(root: tk.Misc, size: int, weight: str = "normal") -> tkfont.Font:
    """Return a font in the preferred family, or Tk's default family if missing."""

    try:
        return tkfont.Font(root=root, family=FONT_FAMILY, size=size, weight=weight)
    except tk.TclError:
        return tkfont.Font(root=root, size=size, weight=weight)


def load_fonts(root: tk.Misc) -> Fonts:
    """Create and return all fonts used by the UI."""

    return Fonts(
        heading=_make_font(root, HEADING_FONT_SIZE, "bold"),
        body=_make_font(root, BODY_FONT_SIZE),
        header=_make_font(root, HEADER_FONT_SIZE),
        badge=_make_font(root, BADGE_FONT_SIZE, "bold"),
        title=_make_font(root, TITLE_FONT_SIZE, "bold"),
    )


def title_banner(
    parent: tk.Misc, textvariable: tk.StringVar, font: tkfont.Font
) -> tk.Frame:
    """Build the banner used for headline numbers such as the total score.

    Purple text with a teal drop shadow on a pale panel inside an orange
    frame, at most ``LAYOUT.banner_width`` pixels wide.
    """

    outer = tk.Frame(parent, bg=COLORS.title_banner, padx=6, pady=6)
    inner = tk.Frame(
        outer,
        bg=COLORS.title_banner_inner,
        width=LAYOUT.banner_width,
        height=font.metrics("linespace") + 2 * LAYOUT.banner_pady,
    )
    inner.pack()
    inner.pack_propagate(False)

    offset = LAYOUT.banner_shadow_offset
    shadow = tk.Label(
        inner,
        textvariable=textvariable,
        font=font,
        fg=COLORS.title_shadow,
        bg=COLORS.title_banner_inner,
    )
    shadow.place(relx=0.5, rely=0.5, x=offset, y=offset, anchor="center")
    label = tk.Label(
        inner,
        textvariable=textvariable,
        font=font,
        fg=COLORS.title_text,
        bg=COLORS.title_banner_inner,
    )
    label.place(relx=0.5, rely=0.5, anchor="center")
    return outer
