"""Configuration models for annotation highlighting.

The models mirror the JSON settings shape of the editor extension this engine
serves (``isEnable``, ``keywordsPattern``, ``backgroundColor`` ...) through
camelCase aliases, while Python code uses the snake_case field names.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from .errors import ConfigurationError

__all__ = [
    "StyleSpec",
    "KeywordRule",
    "HighlightConfig",
    "ConfigLoadResult",
    "DEFAULT_STYLE",
    "BUILTIN_KEYWORD_STYLES",
    "DEFAULT_KEYWORDS",
    "DEFAULT_INCLUDE",
    "DEFAULT_EXCLUDE",
    "load_config",
    "dump_config",
]


class StyleSpec(BaseModel):
    """Rendering attributes for one keyword class.

    Every field is optional so the same model describes partial overrides and
    fully resolved styles. Unknown rendering attributes are kept as extras and
    passed through to the renderer untouched.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow", frozen=True)

    color: Optional[str] = None
    background_color: Optional[str] = None
    overview_ruler_color: Optional[str] = None
    overview_ruler_lane: Optional[str] = None
    is_whole_line: Optional[bool] = None
    font_weight: Optional[str] = None
    font_style: Optional[str] = None
    text_decoration: Optional[str] = None
    border: Optional[str] = None
    border_radius: Optional[str] = None

    def attributes(self) -> dict[str, Any]:
        """Return only the attributes that carry a value (extras included)."""
        return self.model_dump(exclude_none=True)


DEFAULT_STYLE = StyleSpec(color="#2196f3", background_color="#ffeb3b")

BUILTIN_KEYWORD_STYLES: dict[str, StyleSpec] = {
    "TODO:": StyleSpec(
        color="#fff",
        background_color="#ffbd2a",
        overview_ruler_color="rgba(255,189,42,0.8)",
    ),
    "FIXME:": StyleSpec(
        color="#fff",
        background_color="#f06292",
        overview_ruler_color="rgba(240,98,146,0.8)",
    ),
}

DEFAULT_INCLUDE: list[str] = ["**/*"]
DEFAULT_EXCLUDE: list[str] = [
    "**/node_modules/**",
    "**/bower_components/**",
    "**/dist/**",
    "**/build/**",
    "**/.vscode/**",
    "**/.github/**",
    "**/_output/**",
    "**/*.min.*",
    "**/*.map",
    "**/.next/**",
]

# Keys of a flat keyword entry that are not style attributes
_RULE_KEYS = {"text", "keyword", "literal", "style", "styleOverrides"}


class KeywordRule(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    keyword: str
    style: StyleSpec = Field(default_factory=StyleSpec)
    literal: bool = False

    @field_validator("keyword")
    @classmethod
    def _strip_keyword(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("keyword text is empty")
        return value

    @classmethod
    def from_entry(cls, entry: Any, index: int | None = None) -> "KeywordRule":
        """Build a rule from a settings entry.

        Accepts a bare string, an already built rule, or a mapping holding
        ``text``/``keyword`` plus style attributes, either flat or nested
        under ``style``/``styleOverrides``.
        """
        if isinstance(entry, KeywordRule):
            return entry
        if isinstance(entry, str):
            data: dict[str, Any] = {"keyword": entry}
        elif isinstance(entry, Mapping):
            text = entry.get("keyword", entry.get("text"))
            if text is None:
                raise ConfigurationError("keyword rule has no 'text' or 'keyword'", entry, index)
            if not isinstance(text, str):
                raise ConfigurationError(f"keyword text must be a string, got {type(text).__name__}", entry, index)
            style: dict[str, Any] = {k: v for k, v in entry.items() if k not in _RULE_KEYS}
            nested = entry.get("style", entry.get("styleOverrides"))
            if nested is not None:
                if isinstance(nested, StyleSpec):
                    nested = nested.attributes()
                if not isinstance(nested, Mapping):
                    raise ConfigurationError("keyword style must be a mapping", entry, index)
                style.update(nested)
            data = {"keyword": text, "style": style, "literal": bool(entry.get("literal", False))}
        else:
            raise ConfigurationError(f"unsupported keyword entry of type {type(entry).__name__}", entry, index)
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            first = e.errors()[0]
            raise ConfigurationError(first.get("msg", str(e)), entry, index) from e


DEFAULT_KEYWORDS: tuple[KeywordRule, ...] = tuple(
    KeywordRule(keyword=k, style=s) for k, s in BUILTIN_KEYWORD_STYLES.items()
)


class HighlightConfig(BaseModel):
    """Read-only snapshot of the highlighting settings."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    is_enable: bool = True
    is_case_sensitive: bool = True
    default_style: StyleSpec = Field(default_factory=StyleSpec)
    keywords: tuple[KeywordRule, ...] = DEFAULT_KEYWORDS
    keywords_pattern: str = ""
    include: tuple[str, ...] = tuple(DEFAULT_INCLUDE)
    exclude: tuple[str, ...] = tuple(DEFAULT_EXCLUDE)
    max_files_for_search: int = Field(default=5120, ge=0)
    debounce_ms: int = Field(default=0, ge=0)

    @field_validator("keywords", mode="before")
    @classmethod
    def _coerce_keywords(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return tuple(KeywordRule.from_entry(v, i) for i, v in enumerate(value))
        return value

    @property
    def single_pattern_mode(self) -> bool:
        return bool(self.keywords_pattern.strip())

    def with_changes(self, **changes: Any) -> "HighlightConfig":
        """Return a copy with some fields replaced (validated)."""
        data = self.model_dump()
        data.update(changes)
        return HighlightConfig.model_validate(data)


@dataclass
class ConfigLoadResult:
    config: HighlightConfig
    errors: list[ConfigurationError] = field(default_factory=list)


def load_config(data: Mapping[str, Any] | None) -> ConfigLoadResult:
    """Validate a raw settings mapping, dropping invalid keyword rules.

    Each malformed keyword entry is reported as a ConfigurationError in the
    result and left out; the rest of the configuration still loads. Errors in
    the top-level fields (e.g. a non-boolean ``isEnable``) raise
    ConfigurationError since there is nothing sensible to fall back to.
    """
    raw = dict(data or {})
    errors: list[ConfigurationError] = []
    entries: Optional[Iterable[Any]] = raw.pop("keywords", None)
    if entries is not None:
        if isinstance(entries, (str, Mapping)) or not isinstance(entries, Iterable):
            errors.append(ConfigurationError("'keywords' must be a list", entries))
            entries = None
        else:
            rules = []
            for i, entry in enumerate(entries):
                try:
                    rules.append(KeywordRule.from_entry(entry, i))
                except ConfigurationError as e:
                    errors.append(e)
            raw["keywords"] = rules
    try:
        config = HighlightConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigurationError(f"invalid highlight configuration: {e}") from e
    return ConfigLoadResult(config=config, errors=errors)


def dump_config(config: HighlightConfig) -> dict[str, Any]:
    """Serialize to the camelCase settings shape accepted by load_config."""
    return config.model_dump(mode="json", by_alias=True, exclude_none=True)
