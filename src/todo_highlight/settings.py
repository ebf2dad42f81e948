from __future__ import annotations

import json
from typing import Any, Optional

from PySide6.QtCore import QObject, QSettings, Signal

from src.logging_config import setup_logger

from .config import HighlightConfig, dump_config, load_config
from .errors import ConfigurationError

ORG = 'TodoHighlight'
APP = 'TodoHighlight'
GROUP = 'todohighlight'

# Settings stored as JSON text rather than native QSettings values
_JSON_KEYS = ('keywords', 'defaultStyle', 'include', 'exclude')

logger = setup_logger(__name__)


class HighlightSettings(QObject):
    """QSettings-backed store for the highlight configuration.

    Emits configurationChanged(HighlightConfig) after every successful update.
    """

    configurationChanged = Signal(object)

    def __init__(self, store: Optional[QSettings] = None, parent: QObject | None = None):
        super().__init__(parent)
        self.s = store if store is not None else QSettings(ORG, APP)
        self.errors: list[ConfigurationError] = []

    def _key(self, name: str) -> str:
        return f'{GROUP}/{name}'

    def _raw(self) -> dict[str, Any]:
        raw: dict[str, Any] = {}
        self.s.beginGroup(GROUP)
        try:
            names = self.s.childKeys()
        finally:
            self.s.endGroup()
        for name in names:
            value = self.s.value(self._key(name))
            if value is None:
                continue
            if name in _JSON_KEYS and isinstance(value, str):
                try:
                    value = json.loads(value)
                except ValueError:
                    logger.warning(f"Ignoring unreadable setting {name!r}")
                    continue
            raw[name] = value
        return raw

    # ----- Configuration -----
    def config(self) -> HighlightConfig:
        """Load the stored configuration; invalid keyword rules are dropped and logged."""
        raw = self._raw()
        # QSettings' INI backend hands booleans and ints back as strings
        for name in ('isEnable', 'isCaseSensitive'):
            if isinstance(raw.get(name), str):
                raw[name] = raw[name].strip().lower() in ('true', '1', 'yes')
        result = load_config(raw)
        self.errors = result.errors
        for err in result.errors:
            logger.warning(f"Dropped keyword rule: {err}")
        return result.config

    def set_config(self, config: HighlightConfig) -> None:
        for name, value in dump_config(config).items():
            if name in _JSON_KEYS:
                value = json.dumps(value)
            self.s.setValue(self._key(name), value)
        self.s.sync()
        self.configurationChanged.emit(config)

    def update(self, **changes: Any) -> HighlightConfig:
        config = self.config().with_changes(**changes)
        self.set_config(config)
        return config

    # ----- Convenience -----
    def is_enabled(self) -> bool:
        return self.config().is_enable

    def set_enabled(self, enabled: bool) -> HighlightConfig:
        return self.update(is_enable=bool(enabled))

    def toggle_enabled(self) -> HighlightConfig:
        return self.set_enabled(not self.is_enabled())

    def clear(self) -> None:
        self.s.remove(GROUP)
        self.s.sync()
        self.configurationChanged.emit(self.config())
