#!/usr/bin/env python3
"""
Report layout helpers for the command line:
- Section headers
- Aligned ASCII tables (used for the per-keyword summary)

Usage:
    from src.cli.ui import print_section, print_table

    print_section("Summary")
    print_table(["Keyword", "Count"], [["TODO", 3], ["FIXME", 1]])
"""
from __future__ import annotations

from typing import Iterable, List, Sequence

from src.cli.style import styler


# ---------- Section headers ----------

def section(title: str, ch: str = "-") -> str:
    """Return a styled section header string."""
    return styler.header(title, ch=ch)


def print_section(title: str, ch: str = "-") -> None:
    print(section(title, ch=ch))


# ---------- Tables (ASCII, aligned) ----------

def _to_str_grid(rows: Iterable[Sequence[object]]) -> List[List[str]]:
    return [["" if x is None else str(x) for x in r] for r in rows]


def table(columns: Sequence[str], rows: Iterable[Sequence[object]]) -> str:
    """Build an aligned ASCII table with a dashed separator after the header."""
    cols = list(columns)
    data = _to_str_grid(rows)

    widths = [len(str(c)) for c in cols]
    for r in data:
        for i, cell in enumerate(r):
            if i < len(widths):
                widths[i] = max(widths[i], len(cell))
            else:
                widths.append(len(cell))

    def fmt_row(items: Sequence[str]) -> str:
        return " | ".join(val.ljust(widths[i]) for i, val in enumerate(items)).rstrip()

    head = fmt_row([str(c) for c in cols])
    sep = styler.apply(styler.palette.dim, "-+-".join("-" * w for w in widths))
    body = "\n".join(fmt_row(r) for r in data)
    return f"{head}\n{sep}\n{body}" if body else f"{head}\n{sep}"


def print_table(columns: Sequence[str], rows: Iterable[Sequence[object]]) -> None:
    print(table(columns, rows))
