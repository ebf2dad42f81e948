import json
import logging
from pathlib import Path

from src.todo_highlight import cli
from src.logging_config import set_log_level
from src.utils.text import strip_ansi


def _run(capsys, *argv):
    code = cli.main(list(argv))
    out, err = capsys.readouterr()
    return code, strip_ansi(out), strip_ansi(err)


def test_list_defaults_report_builtin_keywords(capsys, workspace: Path):
    code, out, _ = _run(capsys, "list", str(workspace))
    assert code == 0
    lines = out.strip().splitlines()
    assert lines[-1] == "Found 2 annotations"
    assert "app.py:2:3 TODO:" in lines[0]
    assert "app.py:3:10 FIXME:" in lines[1]
    assert "dep.js" not in out


def test_list_ignore_case_keywords_and_type(capsys, workspace: Path):
    code, out, _ = _run(capsys, "list", str(workspace), "-k", "TODO", "-k", "FIXME", "-i", "--type", "TODO")
    assert code == 0
    assert "util.js:1:4 TODO" in out
    assert "FIXME" not in out
    assert out.strip().splitlines()[-1] == "Found 2 annotations"


def test_list_summary_table(capsys, workspace: Path):
    code, out, _ = _run(capsys, "list", str(workspace), "--summary")
    assert code == 0
    assert "Summary" in out
    assert "Keyword" in out and "Count" in out


def test_list_reads_settings_file(capsys, workspace: Path, tmp_path_factory):
    settings = tmp_path_factory.mktemp("cfg") / "settings.json"
    settings.write_text(json.dumps({"todohighlight": {
        "keywords": ["magic", {"color": "red"}],
        "include": ["**/*.py"],
    }}), encoding="utf-8")
    code, out, err = _run(capsys, "list", str(workspace), "--config", str(settings))
    assert code == 0
    assert "app.py:3:17 magic" in out
    assert "dropped keyword rule" in err


def test_list_bad_pattern_exits_with_error(capsys, workspace: Path):
    code, out, err = _run(capsys, "list", str(workspace), "--pattern", "(unclosed")
    assert code == cli.EXIT_PATTERN_ERROR
    assert "Invalid pattern" in err
    assert out == ""


def test_get_log_level_from_env():
    assert cli.get_log_level_from_env("prod") == "WARNING"
    assert cli.get_log_level_from_env("dev") == "DEBUG"
    assert cli.get_log_level_from_env("whatever") == "INFO"


def test_list_warns_about_missing_path(capsys, workspace: Path):
    missing = workspace / "nope"
    code, out, err = _run(capsys, "list", str(missing), str(workspace / "pkg"))
    assert code == 0
    assert f"[warn] no such file or directory: {missing}" in err
    assert out.strip().splitlines()[-1] == "Found 2 annotations"


def test_env_flag_reaches_loggers_created_at_import(capsys, monkeypatch, workspace: Path):
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    try:
        code, _, _ = _run(capsys, "-env", "debug", "list", str(workspace))
        assert code == 0
        assert logging.getLogger("src.todo_highlight.cli").level == logging.DEBUG
        assert logging.getLogger("src.todo_highlight.patterns").level == logging.DEBUG
    finally:
        set_log_level("INFO")
