import re

from src.todo_highlight.config import KeywordRule
from src.todo_highlight.matching import LineIndex, MatchRange, iter_matches, scan
from src.todo_highlight.patterns import compile_matchers


def _scan(text, keywords, case_sensitive=True):
    rules = [KeywordRule(keyword=k) for k in keywords]
    return scan(text, compile_matchers(rules, case_sensitive), case_sensitive)


def test_non_overlapping_greedy_match():
    result = _scan("aaab", ["a+"])
    assert result == {"a+": [MatchRange(0, 3)]}


def test_zero_length_matches_terminate_and_are_dropped():
    assert _scan("bbb", ["a*"]) == {}


def test_zero_length_guard_still_finds_real_matches():
    assert _scan("baab", ["a*"]) == {"a*": [MatchRange(1, 3)]}


def test_iter_matches_resumes_after_previous_match():
    spans = [m.span() for m in iter_matches(re.compile("ab"), "abab_ab")]
    assert spans == [(0, 2), (2, 4), (5, 7)]


def test_case_folding_unifies_occurrences_under_one_class():
    result = _scan("todo TODO ToDo", ["TODO"], case_sensitive=False)
    assert list(result) == ["TODO"]
    assert result["TODO"] == [MatchRange(0, 4), MatchRange(5, 9), MatchRange(10, 14)]


def test_case_insensitive_regex_keywords_find_their_annotations():
    result = _scan("TODO here\nFIXME(bob) there", [r"todo\b", r"fixme\(\w+\)"], case_sensitive=False)
    assert list(result.values()) == [[MatchRange(0, 4)], [MatchRange(10, 20)]]


def test_case_sensitive_scan_only_matches_exact_text():
    result = _scan("todo TODO ToDo", ["TODO"], case_sensitive=True)
    assert result == {"TODO": [MatchRange(5, 9)]}


def test_ordering_is_matcher_order_then_discovery_order():
    result = _scan("FIXME a TODO b FIXME", ["TODO", "FIXME"])
    assert list(result) == ["TODO", "FIXME"]
    assert result["FIXME"] == [MatchRange(0, 5), MatchRange(15, 20)]


def test_freeform_mode_classes_by_matched_text():
    text = "todo: a\nFIXME: b\nTODO: c"
    matchers = compile_matchers(r"(TODO|FIXME):", case_sensitive=False)
    result = scan(text, matchers, case_sensitive=False)
    assert set(result) == {"TODO:", "FIXME:"}
    assert result["TODO:"] == [MatchRange(0, 5), MatchRange(17, 22)]


def test_freeform_mode_case_sensitive_keeps_text():
    matchers = compile_matchers(r"(?i)todo", case_sensitive=True)
    result = scan("todo TODO", matchers, case_sensitive=True)
    assert set(result) == {"todo", "TODO"}


def test_multiline_anchor_matches_each_line():
    result = _scan("TODO a\n  x\nTODO b", ["^TODO"])
    assert result["^TODO"] == [MatchRange(0, 4), MatchRange(11, 15)]


def test_line_index_positions():
    text = "ab\ncde\n\nf"
    idx = LineIndex(text)
    assert idx.line_count == 4
    assert idx.position(0) == (0, 0)
    assert idx.position(2) == (0, 2)
    assert idx.position(3) == (1, 0)
    assert idx.position(5) == (1, 2)
    assert idx.position(7) == (2, 0)
    assert idx.position(8) == (3, 0)
    assert idx.position(9) == (3, 1)


def test_line_index_range_and_line_text():
    text = "x\r\n// TODO: y\nlast"
    idx = LineIndex(text)
    start = text.index("TODO")
    rng = idx.line_range(MatchRange(start, start + 4))
    assert (rng.start_line, rng.start_col, rng.end_line, rng.end_col) == (1, 3, 1, 7)
    assert idx.line_text(0) == "x"
    assert idx.line_text(1) == "// TODO: y"
    assert idx.line_text(2) == "last"


def test_line_index_clamps_out_of_range_offsets():
    idx = LineIndex("abc")
    assert idx.position(-5) == (0, 0)
    assert idx.position(99) == (0, 3)
