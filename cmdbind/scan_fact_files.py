"""Logic for discovering fact documents on disk."""

from collections.abc import Iterable
from pathlib import Path

FACT_SUFFIXES = {".yml", ".yaml"}


def scan_fact_files(root: Path, exclude: Iterable[str] = ()) -> list[Path]:
    """Return every fact document under `root`, sorted.

    A path is skipped when an exclude pattern occurs anywhere in its relative
    path or equals one of its file or directory names.
    """
    patterns = [p for p in exclude if p]
    found = []
    for path in root.rglob("*"):
        if not path.is_file() or path.suffix not in FACT_SUFFIXES:
            continue
        relative = path.relative_to(root)
        if _is_excluded(relative, patterns):
            continue
        found.append(path)
    return sorted(found)


def _is_excluded(relative: Path, patterns: list[str]) -> bool:
    text = relative.as_posix()
    for pattern in patterns:
        if pattern in relative.parts or pattern in text:
            return True
    return False
