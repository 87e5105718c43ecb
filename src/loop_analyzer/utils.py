"""Shared utilities for loop-analyzer."""

from __future__ import annotations

import re
from bisect import bisect_right
from pathlib import Path
from typing import Iterable

# JS LineTerminatorSequence: CRLF, CR, LF, LS (U+2028), PS (U+2029)
_LINE_TERMINATOR = "\r\n?|\n|" + chr(0x2028) + "|" + chr(0x2029)
LINE_TERMINATOR_RE = re.compile(_LINE_TERMINATOR)
_LINE_TERMINATOR_BYTES_RE = re.compile(_LINE_TERMINATOR.encode("utf-8"))


def snippet(source: str, lineno: int, max_len: int = 160) -> str:
    """Return the source line at lineno (1-based), stripped and truncated."""
    lines = LINE_TERMINATOR_RE.split(source)
    if 0 < lineno <= len(lines):
        return lines[lineno - 1].strip()[:max_len]
    return ""


def line_starts(data: bytes) -> list[int]:
    """Byte offset of the start of every line in UTF-8 encoded source."""
    return [0] + [m.end() for m in _LINE_TERMINATOR_BYTES_RE.finditer(data)]


def line_at(starts: list[int], offset: int) -> int:
    """1-based line containing byte ``offset``."""
    return bisect_right(starts, offset)


# Plain, JSX, TypeScript and TSX sources
SOURCE_EXTENSIONS = (".js", ".jsx", ".ts", ".tsx")


def discover_files(
    workspace: Path,
    skip_dirs: Iterable[str] = (),
) -> list[Path]:
    """Walk workspace for source files, sorted by path.

    Every directory is descended into unless its name is in ``skip_dirs``.
    """
    skip = set(skip_dirs)
    files: list[Path] = []
    for item in workspace.rglob("*"):
        if not item.name.endswith(SOURCE_EXTENSIONS):
            continue
        if skip and any(part in skip for part in item.relative_to(workspace).parts[:-1]):
            continue
        try:
            if not item.is_file():
                continue
        except OSError:
            continue
        files.append(item)
    return sorted(files)
