from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Sequence

from src.logging_config import setup_logger

from .config import KeywordRule
from .errors import PatternError
from .styles import dedupe_rules, normalize_key

__all__ = ["CompiledMatcher", "compile_pattern", "compile_matchers", "filter_matchers"]

logger = setup_logger(__name__)


@dataclass(frozen=True)
class CompiledMatcher:
    """A compiled keyword regex.

    ``class_key`` is the keyword class owning every match in multi-keyword
    mode. It is None for the free-form matcher, whose matches are classed by
    the matched text itself.
    """

    source_pattern: str
    regex: re.Pattern
    case_sensitive: bool
    class_key: str | None = None

    @property
    def is_freeform(self) -> bool:
        return self.class_key is None


def compile_pattern(pattern: str, case_sensitive: bool, multiline: bool = True) -> re.Pattern:
    flags = re.MULTILINE if multiline else 0
    if not case_sensitive:
        flags |= re.IGNORECASE
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        raise PatternError(pattern, str(e)) from e


def compile_matchers(
    rules_or_pattern: str | Iterable[KeywordRule],
    case_sensitive: bool,
    skip_invalid: bool = False,
) -> list[CompiledMatcher]:
    """Compile keyword rules, or a single free-form pattern, into matchers.

    A string argument that is non-empty after trimming selects free-form mode
    and yields exactly one matcher. Anything else is treated as keyword rules
    and yields one matcher per keyword class, in rule order.

    Raises PatternError on the first malformed pattern unless ``skip_invalid``
    is set, in which case the class is logged and left out.
    """
    if isinstance(rules_or_pattern, str):
        if not rules_or_pattern.strip():
            return []
        regex = compile_pattern(rules_or_pattern, case_sensitive, multiline=False)
        return [CompiledMatcher(rules_or_pattern, regex, case_sensitive)]

    matchers: list[CompiledMatcher] = []
    for key, rule in dedupe_rules(rules_or_pattern, case_sensitive).items():
        # The class key may be upper-cased; the regex is always the keyword as written
        source = re.escape(rule.keyword) if rule.literal else rule.keyword
        try:
            regex = compile_pattern(source, case_sensitive)
        except PatternError as e:
            if not skip_invalid:
                raise
            logger.warning(f"Skipping keyword class {key!r}: {e}")
            continue
        matchers.append(CompiledMatcher(source, regex, case_sensitive, class_key=key))
    return matchers


def filter_matchers(matchers: Sequence[CompiledMatcher], keyword: str | None) -> list[CompiledMatcher]:
    """Restrict matchers to one keyword class; ``None`` or ``"ALL"`` keeps them all.

    The free-form matcher has no classes to choose from and is always kept.
    """
    if keyword is None or keyword == "ALL":
        return list(matchers)
    return [m for m in matchers if m.is_freeform or m.class_key == normalize_key(keyword, m.case_sensitive)]
