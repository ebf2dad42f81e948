from __future__ import annotations

import re
from bisect import bisect_right
from dataclasses import dataclass
from typing import Iterator, Sequence

from .patterns import CompiledMatcher
from .styles import normalize_key

__all__ = ["MatchRange", "LineRange", "LineIndex", "iter_matches", "scan", "empty_result"]


@dataclass(frozen=True)
class MatchRange:
    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class LineRange:
    """A MatchRange translated to 0-based line/column coordinates."""

    start_line: int
    start_col: int
    end_line: int
    end_col: int


class LineIndex:
    """Offset -> (line, column) translation for one text snapshot.

    Line starts are computed once; each lookup is a binary search.
    """

    def __init__(self, text: str):
        self.text = text
        self._starts = [0]
        pos = text.find("\n")
        while pos != -1:
            self._starts.append(pos + 1)
            pos = text.find("\n", pos + 1)

    @property
    def line_count(self) -> int:
        return len(self._starts)

    def position(self, offset: int) -> tuple[int, int]:
        offset = max(0, min(offset, len(self.text)))
        line = bisect_right(self._starts, offset) - 1
        return line, offset - self._starts[line]

    def line_range(self, rng: MatchRange) -> LineRange:
        sl, sc = self.position(rng.start)
        el, ec = self.position(rng.end)
        return LineRange(sl, sc, el, ec)

    def line_text(self, line: int) -> str:
        start = self._starts[line]
        end = self._starts[line + 1] - 1 if line + 1 < len(self._starts) else len(self.text)
        return self.text[start:end].rstrip("\r")


def iter_matches(regex: re.Pattern, text: str) -> Iterator[re.Match]:
    """Yield successive non-overlapping, non-empty matches.

    Each search resumes at the end of the previous match. An empty match is
    never reported; the search steps one character past it instead.
    """
    pos = 0
    n = len(text)
    while pos <= n:
        m = regex.search(text, pos)
        if m is None:
            return
        if m.end() == m.start():
            pos = m.end() + 1
            continue
        yield m
        pos = m.end()


def scan(text: str, matchers: Sequence[CompiledMatcher], case_sensitive: bool) -> dict[str, list[MatchRange]]:
    """Run every matcher over ``text``; return class key -> ranges in discovery order."""
    result: dict[str, list[MatchRange]] = {}
    for matcher in matchers:
        for m in iter_matches(matcher.regex, text):
            if matcher.is_freeform:
                key = normalize_key(m.group(0), case_sensitive)
            else:
                key = matcher.class_key
            result.setdefault(key, []).append(MatchRange(m.start(), m.end()))
    return result


def empty_result(keys) -> dict[str, list[MatchRange]]:
    """Empty range sets for the given classes (clears their highlighting)."""
    return {k: [] for k in keys}
