from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from .config import DEFAULT_STYLE, HighlightConfig, StyleSpec
from .matching import MatchRange, scan
from .patterns import CompiledMatcher, compile_matchers
from .styles import resolve_styles, shared_style

__all__ = ["HighlightSession", "build_session"]


@dataclass(frozen=True)
class HighlightSession:
    """Everything derived from one configuration snapshot.

    Sessions are immutable. A configuration change builds a new one and the
    owner swaps the reference, so a scan never sees a half-updated matcher set.
    ``styles`` is keyed by class in multi-keyword mode; in free-form mode it is
    empty and ``freeform_style`` applies to every class.
    """

    config: HighlightConfig
    matchers: tuple[CompiledMatcher, ...]
    styles: Mapping[str, StyleSpec]
    freeform_style: StyleSpec | None = None

    @property
    def case_sensitive(self) -> bool:
        return self.config.is_case_sensitive

    @property
    def enabled(self) -> bool:
        return self.config.is_enable

    @property
    def class_keys(self) -> list[str]:
        return list(self.styles)

    def style_for(self, class_key: str) -> StyleSpec | None:
        if self.freeform_style is not None:
            return self.freeform_style
        return self.styles.get(class_key)

    def scan(self, text: str) -> dict[str, list[MatchRange]]:
        return scan(text, self.matchers, self.case_sensitive)


def build_session(config: HighlightConfig, builtin_default: StyleSpec = DEFAULT_STYLE) -> HighlightSession:
    """Resolve styles and compile matchers for ``config``.

    Raises PatternError if any pattern is malformed; nothing partial is returned.
    """
    case_sensitive = config.is_case_sensitive
    if config.single_pattern_mode:
        matchers = compile_matchers(config.keywords_pattern, case_sensitive)
        return HighlightSession(
            config=config,
            matchers=tuple(matchers),
            styles=MappingProxyType({}),
            freeform_style=shared_style(builtin_default, config.default_style),
        )
    styles = resolve_styles(builtin_default, config.default_style, config.keywords, case_sensitive)
    matchers = compile_matchers(config.keywords, case_sensitive)
    return HighlightSession(config=config, matchers=tuple(matchers), styles=MappingProxyType(styles))
