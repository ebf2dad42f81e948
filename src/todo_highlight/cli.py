"""Command line front end: list annotations in files, or open the highlight editor."""
from __future__ import annotations

import argparse
import json
import os
import sys
from collections import Counter
from pathlib import Path
from typing import Any, List, Optional, Sequence

from src.cli.style import styler
from src.cli.ui import print_section, print_table
from src.logging_config import set_log_level, setup_logger

from .annotations import AnnotationRecord, find_annotations, iter_workspace_documents
from .config import HighlightConfig, load_config
from .errors import ConfigurationError, PatternError
from .report import format_report
from .session import build_session

EXIT_OK = 0
EXIT_PATTERN_ERROR = 2

logger = setup_logger(__name__)


def get_log_level_from_env(env_str: Optional[str]) -> str:
    if env_str is None:
        return os.getenv("LOG_LEVEL", "INFO")
    env_str = env_str.strip().lower()
    if env_str in ["prod", "production"]:
        return "WARNING"
    if env_str in ["debug", "dev", "development"]:
        return "DEBUG"
    return "INFO"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="todo-highlight", description="Find and highlight TODO/FIXME style annotations.")
    parser.add_argument("-env", type=str, default=None, help="Set environment mode: prod or debug (sets logger level)")
    sub = parser.add_subparsers(dest="command", required=True)

    ls = sub.add_parser("list", help="List annotations found in files or directories")
    ls.add_argument("paths", nargs="*", default=["."], help="Files or directories to scan (default: .)")
    ls.add_argument("--config", type=str, default=None, help="JSON settings file (todohighlight settings shape)")
    ls.add_argument("-k", "--keyword", action="append", default=None, help="Keyword to look for; repeatable")
    ls.add_argument("--pattern", type=str, default=None, help="Free-form regex used instead of keywords")
    ls.add_argument("-i", "--ignore-case", action="store_true", help="Match keywords case-insensitively")
    ls.add_argument("--type", dest="annotation_type", default="ALL", help="Only list this keyword class (default: ALL)")
    ls.add_argument("--include", action="append", default=None, help="Glob of files to include; repeatable")
    ls.add_argument("--exclude", action="append", default=None, help="Glob of files to exclude; repeatable")
    ls.add_argument("--max-files", type=int, default=None, help="Stop after this many files")
    ls.add_argument("--summary", action="store_true", help="Print a per-keyword count table")

    ide = sub.add_parser("ide", help="Open files in a minimal editor with live highlighting")
    ide.add_argument("file", nargs="?", default=None)
    ide.add_argument("--config", type=str, default=None)
    return parser


def _read_settings_file(path: Optional[str]) -> dict[str, Any]:
    if not path:
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    # Accept both {"todohighlight": {...}} and the bare settings object
    if isinstance(data, dict) and isinstance(data.get("todohighlight"), dict):
        data = data["todohighlight"]
    return data


def config_from_args(args: argparse.Namespace) -> HighlightConfig:
    raw = _read_settings_file(getattr(args, "config", None))
    if getattr(args, "keyword", None):
        raw["keywords"] = list(args.keyword)
    if getattr(args, "pattern", None):
        raw["keywordsPattern"] = args.pattern
    if getattr(args, "ignore_case", False):
        raw["isCaseSensitive"] = False
    if getattr(args, "include", None):
        raw["include"] = list(args.include)
    if getattr(args, "exclude", None):
        raw["exclude"] = list(args.exclude)
    if getattr(args, "max_files", None) is not None:
        raw["maxFilesForSearch"] = args.max_files
    result = load_config(raw)
    for err in result.errors:
        print(styler.tag("warn"), f"dropped keyword rule: {err}", file=sys.stderr)
    return result.config


def run_list(args: argparse.Namespace) -> int:
    config = config_from_args(args)
    try:
        session = build_session(config)
    except PatternError as e:
        print(styler.tag("error"), str(e), file=sys.stderr)
        return EXIT_PATTERN_ERROR

    records: List[AnnotationRecord] = []
    remaining = config.max_files_for_search
    for p in args.paths:
        if not Path(p).exists():
            print(styler.tag("warn"), f"no such file or directory: {p}", file=sys.stderr)
            continue
        docs = list(iter_workspace_documents(p, config.include, config.exclude, remaining))
        remaining = max(0, remaining - len(docs))
        records.extend(find_annotations(docs, session.matchers, session.case_sensitive, args.annotation_type))

    logger.info(f"Listed {len(records)} annotation(s) under {', '.join(args.paths)}")
    print(format_report(records, paint=styler.paint))
    if args.summary:
        print_section("Summary")
        counts = Counter(r.keyword for r in records)
        print_table(["Keyword", "Count"], sorted(counts.items()))
    return EXIT_OK


def run_ide(args: argparse.Namespace) -> int:
    from PySide6.QtWidgets import QApplication
    from .main_window import HighlightWindow

    config = config_from_args(args) if args.config else None
    app = QApplication.instance() or QApplication([])
    win = HighlightWindow(config=config)
    if args.file:
        win.open_file(Path(args.file))
    win.show()
    return app.exec()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = get_log_level_from_env(args.env)
    os.environ["LOG_LEVEL"] = level
    set_log_level(level)
    try:
        if args.command == "list":
            return run_list(args)
        return run_ide(args)
    except ConfigurationError as e:
        print(styler.tag("error"), str(e), file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
