"""Discovery — collect the source files under a target path."""

from __future__ import annotations

import fnmatch
import os
from pathlib import Path

from prosescope.formats import FORMAT_BY_EXT

# VCS metadata, dependency trees and the output directories of common
# documentation generators (Sphinx, MkDocs, Jekyll).
DEFAULT_EXCLUDE_DIRS: frozenset[str] = frozenset({
    ".git",
    ".hg",
    "node_modules",
    ".venv",
    "venv",
    "__pycache__",
    "_build",
    "site",
    "_site",
})


def _excluded(rel: str, name: str, globs: list[str]) -> bool:
    return any(fnmatch.fnmatch(rel, g) or fnmatch.fnmatch(name, g) for g in globs)


def _has_nul_byte(file_path: Path, head_size: int = 512) -> bool:
    """Treat a file as binary when its head contains a NUL byte."""
    try:
        with file_path.open("rb") as f:
            return b"\x00" in f.read(head_size)
    except OSError:
        return True


def collect_files(
    target: str | Path,
    exclude_globs: list[str] | None = None,
    max_file_size_kb: int = 512,
) -> list[Path]:
    """Return supported source files under *target*, sorted.

    A file *target* is returned as-is when its extension is supported.
    Directory walks only pick Markdown and HTML by extension; rst and
    AsciiDoc output is HTML too and is selected with an explicit format.
    """
    target = Path(target)
    if target.is_file():
        return [target] if target.suffix.lower() in FORMAT_BY_EXT else []
    if not target.is_dir():
        return []

    excludes = list(exclude_globs or [])
    max_bytes = max_file_size_kb * 1024
    collected: list[Path] = []

    for dirpath, dirnames, filenames in os.walk(target):
        base = Path(dirpath)
        dirnames[:] = sorted(
            d for d in dirnames
            if d not in DEFAULT_EXCLUDE_DIRS
            and not _excluded((base / d).relative_to(target).as_posix(), d, excludes)
        )

        for fname in filenames:
            fpath = base / fname
            if fpath.suffix.lower() not in FORMAT_BY_EXT:
                continue
            if _excluded(fpath.relative_to(target).as_posix(), fname, excludes):
                continue
            try:
                too_big = fpath.stat().st_size > max_bytes
            except OSError:
                continue
            if too_big or _has_nul_byte(fpath):
                continue
            collected.append(fpath)

    collected.sort()
    return collected
