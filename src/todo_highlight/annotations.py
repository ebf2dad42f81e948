from __future__ import annotations

from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, Iterator, Sequence

from src.logging_config import setup_logger

from .config import DEFAULT_EXCLUDE, DEFAULT_INCLUDE
from .matching import LineIndex, scan
from .patterns import CompiledMatcher, filter_matchers

__all__ = ["AnnotationRecord", "find_annotations", "iter_workspace_documents"]

logger = setup_logger(__name__)

_BINARY_SUFFIXES = {".jpg", ".jpeg", ".png", ".gif", ".ico", ".pdf", ".zip", ".gz", ".exe", ".dll", ".so", ".dylib", ".pyc"}
_SKIP_DIRS = {".git", ".hg", ".svn", "__pycache__"}


@dataclass(frozen=True)
class AnnotationRecord:
    """One annotation found in a document. ``line`` and ``column`` are 1-based."""

    source: str
    line: int
    column: int
    keyword: str
    line_text: str


def find_annotations(
    documents: Iterable[tuple[str, str]],
    matchers: Sequence[CompiledMatcher],
    case_sensitive: bool,
    keyword: str | None = "ALL",
) -> list[AnnotationRecord]:
    """Scan ``(source, text)`` documents and return every annotation found.

    ``keyword`` limits the scan to one keyword class; ``"ALL"`` runs every
    matcher. Records follow document order, then the scan order within each
    document.
    """
    selected = filter_matchers(matchers, keyword)
    records: list[AnnotationRecord] = []
    if not selected:
        return records
    for source, text in documents:
        index = LineIndex(text)
        for key, ranges in scan(text, selected, case_sensitive).items():
            for rng in ranges:
                line, col = index.position(rng.start)
                records.append(AnnotationRecord(
                    source=str(source),
                    line=line + 1,
                    column=col + 1,
                    keyword=key,
                    line_text=index.line_text(line),
                ))
    return records


def _glob_match(rel: str, patterns: Iterable[str]) -> bool:
    # '**/x' should also match 'x' at the root, hence the leading-slash variant
    return any(fnmatchcase(rel, p) or fnmatchcase("/" + rel, p) for p in patterns)


def iter_workspace_documents(
    root: str | Path,
    include: Sequence[str] = tuple(DEFAULT_INCLUDE),
    exclude: Sequence[str] = tuple(DEFAULT_EXCLUDE),
    max_files: int = 5120,
) -> Iterator[tuple[str, str]]:
    """Yield ``(path, text)`` for the text files under ``root``.

    Files are visited in sorted path order. Paths are matched as POSIX paths
    relative to ``root`` against the include/exclude globs; at most
    ``max_files`` files are yielded. Binary files are skipped.
    """
    root = Path(root)
    if not root.exists():
        logger.warning(f"Workspace root does not exist: {root}")
        return
    if root.is_file():
        candidates = [root]
        root = root.parent
    else:
        candidates = sorted(root.rglob("*"))
    count = 0
    for p in candidates:
        if count >= max_files:
            logger.info(f"Stopped after {max_files} files under {root}")
            return
        if not p.is_file() or p.suffix.lower() in _BINARY_SUFFIXES:
            continue
        rel = p.relative_to(root).as_posix()
        if _SKIP_DIRS & set(p.relative_to(root).parts):
            continue
        if not _glob_match(rel, include) or _glob_match(rel, exclude):
            continue
        try:
            data = p.read_bytes()
        except OSError as e:
            logger.warning(f"Could not read {p}: {e}")
            continue
        if b"\0" in data:
            continue
        count += 1
        yield str(p), data.decode("utf-8", errors="ignore")
