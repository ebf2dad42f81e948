from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Optional

from PySide6.QtCore import QObject, Signal

from src.logging_config import setup_logger

from .annotations import AnnotationRecord, find_annotations, iter_workspace_documents
from .config import HighlightConfig
from .cooldown import CooldownGate
from .decorations import DecorationState, EditorRenderer, Renderer
from .errors import PatternError
from .matching import LineIndex, MatchRange
from .report import format_report, status_text
from .scheduler import UpdateScheduler
from .session import HighlightSession, build_session
from .settings import HighlightSettings
from .subscriptions import Subscription, SubscriptionSet

__all__ = ["HighlightController"]

logger = setup_logger(__name__)


class HighlightController(QObject):
    """Owns the highlight session for the active editor and keeps it painted.

    Every change event (buffer edit, editor switch, settings change) only asks
    the scheduler for an update; the update itself scans the active buffer
    with the current session and hands the ranges to the renderer.
    """

    # class key -> list[MatchRange] as published to the renderer
    decorationsUpdated = Signal(dict)
    annotationsFound = Signal(list)
    configurationFailed = Signal(str)

    def __init__(
        self,
        settings: Optional[HighlightSettings] = None,
        config: Optional[HighlightConfig] = None,
        renderer_factory: Callable[[Any], Renderer] = EditorRenderer,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._settings = settings
        self._renderer_factory = renderer_factory
        self._subs = SubscriptionSet()
        self._editor_sub: Optional[Subscription] = None
        self._editor: Any = None
        self._source: str = "<buffer>"
        self._decorations: Optional[DecorationState] = None
        self._last_result: Dict[str, List[MatchRange]] = {}
        self._last_index: Optional[LineIndex] = None
        self._published: Dict[str, List[MatchRange]] = {}
        self._scan_errors = CooldownGate(seconds=5.0)
        self.last_error: Optional[str] = None
        self.last_annotations: List[AnnotationRecord] = []

        if config is None:
            config = settings.config() if settings is not None else HighlightConfig()
        self._config = config
        self._enabled = config.is_enable
        self._session = self._initial_session(config)
        self._scheduler = UpdateScheduler(config.debounce_ms, self)

        if settings is not None:
            self._subs.add(Subscription.connect(
                settings.configurationChanged, self.on_configuration_changed, "configurationChanged"))

    def _initial_session(self, config: HighlightConfig) -> HighlightSession:
        try:
            return build_session(config)
        except PatternError as e:
            # Nothing to fall back to yet: run with no matchers until the config is fixed
            self.last_error = str(e)
            logger.error(f"Highlighting disabled, {e}")
            return HighlightSession(config=config, matchers=(), styles=MappingProxyType({}))

    # ----- Properties -----
    @property
    def session(self) -> HighlightSession:
        return self._session

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def scheduler(self) -> UpdateScheduler:
        return self._scheduler

    @property
    def active_editor(self) -> Any:
        return self._editor

    def ranges(self) -> Dict[str, List[MatchRange]]:
        """Ranges last handed to the renderer, per class (empty lists when disabled)."""
        return {k: list(v) for k, v in self._published.items()}

    def scanned_ranges(self) -> Dict[str, List[MatchRange]]:
        """Result of the last scan, regardless of the enabled flag."""
        return {k: list(v) for k, v in self._last_result.items()}

    # ----- Events -----
    def set_active_editor(self, editor: Any, source: str = "<buffer>") -> None:
        """Follow a new active document. ``editor`` needs toPlainText() and textChanged."""
        if self._editor_sub is not None:
            self._editor_sub.dispose()
            self._editor_sub = None
        self._editor = editor
        self._source = source
        # Handles belong to the previous editor's renderer
        if self._decorations is not None:
            self._decorations.release_all()
        self._decorations = None
        self._last_result = {}
        self._last_index = None
        self._published = {}
        if editor is None:
            self._scheduler.cancel()
            return
        self._decorations = DecorationState(self._renderer_factory(editor))
        self._editor_sub = Subscription.connect(editor.textChanged, self.request_update, "textChanged")
        self.request_update()

    def request_update(self) -> None:
        self._scheduler.schedule(self._update_decorations)

    def on_configuration_changed(self, config: HighlightConfig) -> None:
        """Swap in a session for ``config``, keeping the old one if a pattern fails."""
        was_enabled = self._enabled
        self._config = config
        self._enabled = config.is_enable
        if not config.is_enable:
            # Keep the compiled session so switching back on is instant
            self._publish()
            return
        if not was_enabled and self._same_apart_from_toggle(config):
            self._publish()
            return
        try:
            session = build_session(config)
        except PatternError as e:
            self.last_error = str(e)
            logger.error(f"Keeping previous highlight configuration, {e}")
            self.configurationFailed.emit(str(e))
            self._publish()
            return
        self.last_error = None
        if self._decorations is not None:
            self._decorations.release_all()
            self._decorations = DecorationState(self._decorations.renderer)
        self._session = session
        self._last_result = {}
        self._published = {}
        self._scheduler.set_delay(config.debounce_ms)
        logger.info(f"Highlight configuration applied: {len(session.matchers)} matcher(s)")
        self.request_update()

    def _same_apart_from_toggle(self, config: HighlightConfig) -> bool:
        current = self._session.config
        return config.with_changes(is_enable=True) == current.with_changes(is_enable=True)

    def set_enabled(self, enabled: bool) -> None:
        if self._settings is not None:
            # Round-trips through configurationChanged
            self._settings.set_enabled(enabled)
        else:
            self.on_configuration_changed(self._config.with_changes(is_enable=bool(enabled)))

    def toggle_highlight(self) -> None:
        self.set_enabled(not self._enabled)

    # ----- Update tick -----
    def _update_decorations(self) -> None:
        editor = self._editor
        if editor is None or self._decorations is None:
            return
        text = editor.toPlainText()
        try:
            result = self._session.scan(text)
        except Exception as e:
            # Prior ranges stay on screen; the next event retries
            if self._scan_errors.should_report(str(e)):
                logger.error(f"Annotation scan failed: {e}")
            return
        self._last_result = result
        self._last_index = LineIndex(text)
        self._publish()

    def _publish(self) -> None:
        state = self._decorations
        if state is None or self._last_index is None:
            return
        published: Dict[str, List[MatchRange]] = {}
        keys = list(state.keys())
        if self._enabled:
            for key in list(self._session.styles) + list(self._last_result):
                if key not in keys:
                    keys.append(key)
        for key in keys:
            style = self._session.style_for(key)
            if style is None:
                continue
            ranges = self._last_result.get(key, []) if self._enabled else []
            handle = state.handle_for(key, style)
            state.renderer.apply(handle, ranges, self._last_index)
            published[key] = list(ranges)
        self._published = published
        self.decorationsUpdated.emit(self.ranges())

    # ----- Annotation listing -----
    def available_annotation_types(self) -> List[str]:
        """Choices for list_annotations: "ALL" plus every keyword class.

        Empty in free-form pattern mode, where there are no classes to pick.
        """
        if self._session.freeform_style is not None:
            return []
        return ["ALL"] + self._session.class_keys

    def list_annotations(
        self,
        keyword: str = "ALL",
        root: str | Path | None = None,
        documents: Optional[Iterable[tuple[str, str]]] = None,
    ) -> List[AnnotationRecord]:
        """Collect annotations from ``documents``, files under ``root``, or the active buffer."""
        config = self._session.config
        if documents is None:
            if root is not None:
                documents = iter_workspace_documents(
                    root, config.include, config.exclude, config.max_files_for_search)
            elif self._editor is not None:
                documents = [(self._source, self._editor.toPlainText())]
            else:
                documents = []
        records = find_annotations(documents, self._session.matchers, self._session.case_sensitive, keyword)
        self.last_annotations = records
        logger.info(status_text(len(records)))
        self.annotationsFound.emit(list(records))
        return records

    def show_report(self) -> str:
        return format_report(self.last_annotations)

    # ----- Teardown -----
    def shutdown(self) -> None:
        self._scheduler.cancel()
        if self._editor_sub is not None:
            self._editor_sub.dispose()
            self._editor_sub = None
        self._subs.dispose_all()
        if self._decorations is not None:
            self._decorations.release_all()
            self._decorations = None
        self._editor = None
