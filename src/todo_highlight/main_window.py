from __future__ import annotations

from pathlib import Path
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QFont, QKeySequence
from PySide6.QtWidgets import (
    QDockWidget, QFileDialog, QInputDialog, QMainWindow, QPlainTextEdit, QWidget
)

from src.logging_config import setup_logger

from .config import HighlightConfig
from .controller import HighlightController
from .report import format_report, status_text
from .settings import HighlightSettings

logger = setup_logger(__name__)


class HighlightWindow(QMainWindow):
    """Single-document editor with live annotation highlighting.

    The output dock plays the role of the report sink; the status bar shows
    the annotation count after each listing.
    """

    def __init__(
        self,
        config: Optional[HighlightConfig] = None,
        settings: Optional[HighlightSettings] = None,
        parent: QWidget | None = None,
    ):
        super().__init__(parent)
        self.setWindowTitle("TODO Highlight")
        self.resize(900, 640)
        self._path: Path | None = None

        self.editor = QPlainTextEdit(self)
        font = QFont("Monospace")
        font.setStyleHint(QFont.StyleHint.TypeWriter)
        self.editor.setFont(font)
        self.setCentralWidget(self.editor)

        self.output = QPlainTextEdit(self)
        self.output.setReadOnly(True)
        self._output_dock = QDockWidget("Annotations", self)
        self._output_dock.setWidget(self.output)
        self.addDockWidget(Qt.DockWidgetArea.BottomDockWidgetArea, self._output_dock)
        self._output_dock.hide()

        if settings is None and config is None:
            settings = HighlightSettings(parent=self)
        self.settings = settings
        self.controller = HighlightController(settings=settings, config=config, parent=self)
        self.controller.annotationsFound.connect(self._on_annotations_found)
        self.controller.configurationFailed.connect(self._on_configuration_failed)
        self.controller.set_active_editor(self.editor)

        self._build_menus()

    def _build_menus(self) -> None:
        file_menu = self.menuBar().addMenu("&File")
        open_act = QAction("&Open…", self)
        open_act.setShortcut(QKeySequence.StandardKey.Open)
        open_act.triggered.connect(self._on_open)
        file_menu.addAction(open_act)

        ann_menu = self.menuBar().addMenu("&Annotations")
        toggle_act = QAction("&Toggle Highlight", self)
        toggle_act.triggered.connect(self.controller.toggle_highlight)
        ann_menu.addAction(toggle_act)
        list_act = QAction("&List Annotations", self)
        list_act.triggered.connect(self.list_annotations)
        ann_menu.addAction(list_act)
        show_act = QAction("Show &Output", self)
        show_act.triggered.connect(self.show_output)
        ann_menu.addAction(show_act)

    # -------- Public API --------
    def open_file(self, path: Path) -> None:
        text = Path(path).read_text(encoding="utf-8", errors="ignore")
        self._path = Path(path)
        self.editor.setPlainText(text)
        self.setWindowTitle(f"TODO Highlight - {self._path.name}")
        self.controller.set_active_editor(self.editor, str(self._path))

    def list_annotations(self, keyword: Optional[str] = None) -> None:
        if keyword is None:
            choices = self.controller.available_annotation_types()
            if choices:
                keyword, ok = QInputDialog.getItem(self, "List Annotations", "Annotation type:", choices, 0, False)
                if not ok:
                    return
            else:
                keyword = "ALL"
        root = self._path.parent if self._path is not None else None
        self.controller.list_annotations(keyword, root=root)

    def show_output(self) -> None:
        self.output.setPlainText(self.controller.show_report())
        self._output_dock.show()

    # -------- Internals --------
    def _on_open(self) -> None:
        fn, _ = QFileDialog.getOpenFileName(self, "Open File")
        if fn:
            self.open_file(Path(fn))

    def _on_annotations_found(self, records: list) -> None:
        self.statusBar().showMessage(status_text(len(records)))
        self.output.setPlainText(format_report(records))
        self._output_dock.show()

    def _on_configuration_failed(self, message: str) -> None:
        self.statusBar().showMessage(message)

    def closeEvent(self, event):  # noqa: N802 (Qt signature)
        self.controller.shutdown()
        super().closeEvent(event)
