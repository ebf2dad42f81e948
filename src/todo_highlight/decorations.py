from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Sequence

from PySide6.QtGui import QColor, QFont, QTextCharFormat, QTextCursor, QTextFormat
from PySide6.QtWidgets import QPlainTextEdit, QTextEdit

from src.logging_config import setup_logger

from .config import StyleSpec
from .matching import LineIndex, MatchRange

__all__ = [
    "Renderer",
    "DecorationState",
    "DecorationHandle",
    "EditorRenderer",
    "parse_color",
    "char_format",
]

logger = setup_logger(__name__)

_RGBA_RE = re.compile(r"^\s*rgba?\(\s*([\d.]+)\s*,\s*([\d.]+)\s*,\s*([\d.]+)\s*(?:,\s*([\d.]+)\s*)?\)\s*$", re.I)


class Renderer(Protocol):
    """Output boundary: turns styles into handles and paints ranges with them."""

    def create(self, class_key: str, style: StyleSpec) -> Any: ...

    def apply(self, handle: Any, ranges: Sequence[MatchRange], index: LineIndex) -> None: ...

    def release(self, handle: Any) -> None: ...


class DecorationState:
    """Lazily created rendering handles, one per keyword class.

    A state lives as long as one configuration; release_all() hands every
    handle back to the renderer when the configuration is replaced.
    """

    def __init__(self, renderer: Renderer) -> None:
        self.renderer = renderer
        self._handles: Dict[str, Any] = {}

    def handle_for(self, class_key: str, style: StyleSpec) -> Any:
        handle = self._handles.get(class_key)
        if handle is None:
            handle = self.renderer.create(class_key, style)
            self._handles[class_key] = handle
        return handle

    def keys(self) -> List[str]:
        return list(self._handles)

    def release_all(self) -> None:
        handles, self._handles = self._handles, {}
        for handle in handles.values():
            self.renderer.release(handle)

    def __contains__(self, class_key: str) -> bool:
        return class_key in self._handles

    def __len__(self) -> int:
        return len(self._handles)


# ------------------------------
# Qt editor renderer
# ------------------------------
def parse_color(value: Optional[str]) -> Optional[QColor]:
    """Parse '#hex', named colours and css rgb()/rgba() into a QColor."""
    if not value:
        return None
    m = _RGBA_RE.match(value)
    if m:
        r, g, b = (int(float(x)) for x in m.group(1, 2, 3))
        c = QColor(r, g, b)
        if m.group(4) is not None:
            c.setAlphaF(max(0.0, min(1.0, float(m.group(4)))))
        return c
    c = QColor(value)
    return c if c.isValid() else None


def char_format(style: StyleSpec) -> QTextCharFormat:
    f = QTextCharFormat()
    fg = parse_color(style.color)
    if fg is not None:
        f.setForeground(fg)
    bg = parse_color(style.background_color)
    if bg is not None:
        f.setBackground(bg)
    if (style.font_weight or "").lower() in ("bold", "bolder", "600", "700", "800", "900"):
        f.setFontWeight(QFont.Weight.Bold)
    if (style.font_style or "").lower() in ("italic", "oblique"):
        f.setFontItalic(True)
    deco = (style.text_decoration or "").lower()
    if "underline" in deco:
        f.setFontUnderline(True)
    if "line-through" in deco:
        f.setFontStrikeOut(True)
    if style.is_whole_line:
        f.setProperty(QTextFormat.Property.FullWidthSelection, True)
    return f


@dataclass(eq=False)
class DecorationHandle:
    class_key: str
    style: StyleSpec
    fmt: QTextCharFormat
    selections: List[QTextEdit.ExtraSelection] = field(default_factory=list)


class EditorRenderer:
    """Paints keyword ranges on a QPlainTextEdit as extra selections.

    Each handle owns the selections for one class; the editor always shows
    the union of all live handles in creation order.
    """

    def __init__(self, editor: QPlainTextEdit) -> None:
        self.editor = editor
        self._handles: List[DecorationHandle] = []

    def create(self, class_key: str, style: StyleSpec) -> DecorationHandle:
        handle = DecorationHandle(class_key, style, char_format(style))
        self._handles.append(handle)
        return handle

    def apply(self, handle: DecorationHandle, ranges: Sequence[MatchRange], index: LineIndex) -> None:
        doc = self.editor.document()
        sels: List[QTextEdit.ExtraSelection] = []
        for rng in ranges:
            cur = QTextCursor(doc)
            cur.setPosition(self._qt_position(doc, index, rng.start))
            cur.setPosition(self._qt_position(doc, index, rng.end), QTextCursor.MoveMode.KeepAnchor)
            sel = QTextEdit.ExtraSelection()
            sel.cursor = cur
            sel.format = handle.fmt
            sels.append(sel)
        handle.selections = sels
        self._publish()

    def release(self, handle: DecorationHandle) -> None:
        if handle in self._handles:
            self._handles.remove(handle)
            self._publish()

    def selections_for(self, class_key: str) -> List[QTextEdit.ExtraSelection]:
        for h in self._handles:
            if h.class_key == class_key:
                return list(h.selections)
        return []

    @staticmethod
    def _qt_position(doc, index: LineIndex, offset: int) -> int:
        # Qt counts UTF-16 code units, Python counts code points
        line, col = index.position(offset)
        block = doc.findBlockByNumber(line)
        if not block.isValid():
            return max(0, doc.characterCount() - 1)
        prefix = index.line_text(line)[:col]
        return block.position() + len(prefix.encode("utf-16-le")) // 2

    def _publish(self) -> None:
        sels: List[QTextEdit.ExtraSelection] = []
        for h in self._handles:
            sels.extend(h.selections)
        try:
            self.editor.setExtraSelections(sels)
        except RuntimeError as e:
            # Editor widget already deleted on the C++ side
            logger.warning(f"Could not update editor decorations: {e}")
