from __future__ import annotations

from typing import Iterable

from .config import KeywordRule, StyleSpec

__all__ = [
    "normalize_key",
    "dedupe_rules",
    "merge_styles",
    "resolve_styles",
    "shared_style",
]

DEFAULT_RULER_LANE = "right"


def normalize_key(keyword: str, case_sensitive: bool) -> str:
    """Return the class key for a keyword: itself, or upper-cased when case folding."""
    return keyword if case_sensitive else keyword.upper()


def dedupe_rules(rules: Iterable[KeywordRule], case_sensitive: bool) -> dict[str, KeywordRule]:
    """Map class key -> rule. A later rule for the same class replaces an earlier one."""
    result: dict[str, KeywordRule] = {}
    for rule in rules:
        result[normalize_key(rule.keyword, case_sensitive)] = rule
    return result


def merge_styles(*layers: StyleSpec | None) -> StyleSpec:
    """Shallow-merge style layers, right-most wins, then apply the ruler fallbacks."""
    merged: dict = {"overview_ruler_lane": DEFAULT_RULER_LANE}
    for layer in layers:
        if layer is not None:
            merged.update(layer.attributes())
    if not merged.get("overview_ruler_color"):
        merged["overview_ruler_color"] = merged.get("background_color")
    return StyleSpec.model_validate(merged)


def resolve_styles(
    builtin_default: StyleSpec,
    user_default: StyleSpec | None,
    rules: Iterable[KeywordRule],
    case_sensitive: bool,
) -> dict[str, StyleSpec]:
    """Resolve one complete style per keyword class.

    Layering per class: ``builtin_default`` < ``user_default`` < the rule's own
    overrides. The stock TODO:/FIXME: colours arrive as the overrides of the
    default keyword rules, not as a separate layer.
    """
    styles: dict[str, StyleSpec] = {}
    for key, rule in dedupe_rules(rules, case_sensitive).items():
        styles[key] = merge_styles(builtin_default, user_default, rule.style)
    return styles


def shared_style(builtin_default: StyleSpec, user_default: StyleSpec | None) -> StyleSpec:
    """The single style every match receives in free-form pattern mode."""
    return merge_styles(builtin_default, user_default)
