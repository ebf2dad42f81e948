import pytest

from src.todo_highlight.config import DEFAULT_STYLE, HighlightConfig, StyleSpec
from src.todo_highlight.errors import PatternError
from src.todo_highlight.matching import MatchRange
from src.todo_highlight.session import build_session


def test_keyword_session_has_one_style_per_class():
    cfg = HighlightConfig(keywords=["TODO", {"text": "BUG", "color": "red"}])
    session = build_session(cfg)
    assert session.class_keys == ["TODO", "BUG"]
    assert session.style_for("BUG").color == "red"
    assert session.style_for("TODO").color == DEFAULT_STYLE.color
    assert session.style_for("NOPE") is None
    assert session.freeform_style is None


def test_freeform_session_shares_one_style():
    cfg = HighlightConfig(keywords_pattern=r"\bNOTE\b", default_style=StyleSpec(color="green"))
    session = build_session(cfg)
    assert session.class_keys == []
    assert len(session.matchers) == 1
    assert session.style_for("NOTE") is session.style_for("anything")
    assert session.style_for("NOTE").color == "green"
    assert session.style_for("NOTE").background_color == DEFAULT_STYLE.background_color


def test_session_scan_uses_case_setting():
    session = build_session(HighlightConfig(keywords=["todo"], is_case_sensitive=False))
    assert session.scan("Todo and TODO") == {"TODO": [MatchRange(0, 4), MatchRange(9, 13)]}


def test_malformed_keyword_fails_whole_session():
    with pytest.raises(PatternError) as exc:
        build_session(HighlightConfig(keywords=["TODO", "(oops"]))
    assert exc.value.pattern == "(oops"


def test_session_is_immutable():
    session = build_session(HighlightConfig())
    with pytest.raises(Exception):
        session.matchers = ()
    with pytest.raises(TypeError):
        session.styles["X"] = StyleSpec()
