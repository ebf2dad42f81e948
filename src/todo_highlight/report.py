from __future__ import annotations

from typing import Callable, Iterable, Optional, Sequence

from src.utils.text import truncate_middle

from .annotations import AnnotationRecord

__all__ = ["format_record", "format_report", "status_text"]

MAX_LINE_TEXT = 160


def status_text(count: int) -> str:
    return f"Found {count} annotation" + ("" if count == 1 else "s")


def format_record(
    rec: AnnotationRecord,
    number: Optional[int] = None,
    paint: Optional[Callable[[str, str], str]] = None,
) -> str:
    """One report line: ``#n source:line:col KEYWORD  line text``.

    ``paint(kind, text)`` lets a terminal front end colour the parts; kinds are
    "ordinal", "location" and "keyword".
    """
    paint = paint or (lambda _kind, text: text)
    prefix = f"#{number} " if number is not None else ""
    location = f"{rec.source}:{rec.line}:{rec.column}"
    body = truncate_middle(rec.line_text.strip(), MAX_LINE_TEXT)
    return f"{paint('ordinal', prefix)}{paint('location', location)} {paint('keyword', rec.keyword)}  {body}"


def format_report(
    records: Sequence[AnnotationRecord] | Iterable[AnnotationRecord],
    paint: Optional[Callable[[str, str], str]] = None,
) -> str:
    """Numbered report of annotations followed by the status line."""
    records = list(records)
    lines = [format_record(r, i, paint) for i, r in enumerate(records, start=1)]
    status = status_text(len(records))
    lines.append(paint('status', status) if paint else status)
    return "\n".join(lines)
