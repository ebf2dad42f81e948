"""
Terminal colours for annotation reports.

Each report part (ordinal, location, keyword, status line) has a palette
entry, and keywords are coloured by annotation class so TODO and FIXME stand
apart in a long listing. Colour is off under NO_COLOR or when stdout is not a
TTY.

Usage:
    from src.cli.style import styler
    print(styler.paint("location", "src/app.py:12:5"), styler.paint("keyword", "FIXME"))
"""
from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from typing import Dict

import colorama
from colorama import Fore, Style

colorama.init()


def is_color_enabled() -> bool:
    if os.getenv("NO_COLOR"):
        return False
    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


def class_name(keyword: str) -> str:
    """Palette lookup key for a keyword: upper-cased, trailing colon dropped."""
    return keyword.strip().rstrip(":").upper()


@dataclass(frozen=True)
class ReportPalette:
    ordinal: str
    location: str
    keyword: str
    status: str
    warn: str
    error: str
    dim: str
    reset: str
    # class_name(keyword) -> colour; other keywords use ``keyword``
    classes: Dict[str, str] = field(default_factory=dict)


DEFAULT_PALETTE = ReportPalette(
    ordinal=Fore.WHITE + Style.DIM,
    location=Fore.CYAN,
    keyword=Fore.YELLOW + Style.BRIGHT,
    status=Fore.GREEN + Style.BRIGHT,
    warn=Fore.YELLOW,
    error=Fore.RED + Style.BRIGHT,
    dim=Fore.WHITE + Style.DIM,
    reset=Style.RESET_ALL,
    classes={
        "TODO": Fore.YELLOW + Style.BRIGHT,
        "FIXME": Fore.MAGENTA + Style.BRIGHT,
        "BUG": Fore.RED + Style.BRIGHT,
        "XXX": Fore.RED,
        "HACK": Fore.MAGENTA,
        "NOTE": Fore.CYAN + Style.BRIGHT,
    },
)


class ReportStyler:
    def __init__(self, palette: ReportPalette = DEFAULT_PALETTE, enabled: bool | None = None) -> None:
        self.palette = palette
        self.enabled = is_color_enabled() if enabled is None else enabled

    def apply(self, color_code: str, text: str) -> str:
        if self.enabled and color_code and text:
            return f"{color_code}{text}{self.palette.reset}"
        return text

    def keyword_color(self, keyword: str) -> str:
        return self.palette.classes.get(class_name(keyword), self.palette.keyword)

    def paint(self, kind: str, text: str) -> str:
        """Colour one report part; ``kind`` is a palette field ("keyword" goes by class)."""
        if kind == "keyword":
            return self.apply(self.keyword_color(text), text)
        return self.apply(getattr(self.palette, kind, ""), text)

    def tag(self, name: str, kind: str | None = None) -> str:
        """``[name]`` prefix for stderr notices, coloured like ``kind`` (default: ``name``)."""
        color = getattr(self.palette, kind or name, self.palette.warn)
        return f"{self.apply(self.palette.dim, '[')}{self.apply(color, name)}{self.apply(self.palette.dim, ']')}"

    def header(self, title: str, ch: str = "-") -> str:
        t = title.strip()
        return f"{self.apply(self.palette.status, t)}\n{self.apply(self.palette.dim, ch * max(len(t), 20))}"


# Shared singleton
styler = ReportStyler()
