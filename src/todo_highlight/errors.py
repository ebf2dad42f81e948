from __future__ import annotations

from typing import Any

__all__ = ["HighlightError", "PatternError", "ConfigurationError"]


class HighlightError(Exception):
    pass


class PatternError(HighlightError):
    """A keyword or free-form pattern failed to compile as a regular expression."""

    def __init__(self, pattern: str, reason: str = "") -> None:
        self.pattern = pattern
        self.reason = reason
        msg = f"Invalid pattern {pattern!r}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class ConfigurationError(HighlightError):
    """A single configuration entry is structurally invalid and was dropped."""

    def __init__(self, message: str, entry: Any = None, index: int | None = None) -> None:
        self.entry = entry
        self.index = index
        if index is not None:
            message = f"keywords[{index}]: {message}"
        super().__init__(message)
