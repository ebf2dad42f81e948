from src.todo_highlight.annotations import AnnotationRecord
from src.todo_highlight.report import format_record, format_report, status_text


def _rec(**kw):
    data = dict(source="a.py", line=3, column=5, keyword="TODO", line_text="    TODO: tidy up   ")
    data.update(kw)
    return AnnotationRecord(**data)


def test_status_text_pluralises():
    assert status_text(0) == "Found 0 annotations"
    assert status_text(1) == "Found 1 annotation"
    assert status_text(7) == "Found 7 annotations"


def test_format_record_plain():
    assert format_record(_rec(), 2) == "#2 a.py:3:5 TODO  TODO: tidy up"


def test_format_record_uses_paint_callback():
    seen = []

    def paint(kind, text):
        seen.append(kind)
        return f"<{kind}>{text}"

    line = format_record(_rec(), 1, paint)
    assert seen == ["ordinal", "location", "keyword"]
    assert "<keyword>TODO" in line


def test_format_record_truncates_long_lines():
    line = format_record(_rec(line_text="TODO " + "x" * 500))
    assert "…" in line
    assert len(line) < 250


def test_format_report_numbers_and_counts():
    out = format_report([_rec(), _rec(line=9, keyword="FIXME", line_text="FIXME")])
    assert out.splitlines() == [
        "#1 a.py:3:5 TODO  TODO: tidy up",
        "#2 a.py:9:5 FIXME  FIXME",
        "Found 2 annotations",
    ]


def test_format_report_empty():
    assert format_report([]) == "Found 0 annotations"
