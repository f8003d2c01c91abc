# Copyright (C) 2025 Francesca Falcone and Mattia Tagliente
# All Rights Reserved

# copyright_notice/patterns.py
"""
Include/exclude glob filtering for resolved file paths.

Rules:
- Exclude patterns are checked first and always win.
- A pattern ending in "/" is directory-style: it matches when its segments
  appear as whole directory components of the path ("vendor/" excludes
  "vendor/x.go" and "pkg/vendor/x.go" but not "myvendor/x.go").
- Any other exclude pattern is matched against the base name, and against
  the full path (right-anchored) when it contains a "/".
- Include patterns are matched against the base name only. A path with no
  include match is rejected.

Matching is case-sensitive.
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from fnmatch import fnmatchcase
from pathlib import Path, PurePosixPath


@dataclass(frozen=True)
class PatternSet:
    include_globs: tuple[str, ...] = field(default_factory=tuple)
    exclude_globs: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_lists(cls, include: Iterable[str], exclude: Iterable[str]) -> PatternSet:
        return cls(include_globs=tuple(include), exclude_globs=tuple(exclude))


def _as_posix(path: str | Path) -> PurePosixPath:
    return PurePosixPath(str(path).replace("\\", "/"))


def _matches_directory(parts: tuple[str, ...], pattern: str) -> bool:
    segments = [s for s in pattern.strip("/").split("/") if s]
    if not segments:
        return False
    # Directory components only; the final part is the file name.
    dirs = parts[:-1]
    width = len(segments)
    for start in range(len(dirs) - width + 1):
        window = dirs[start : start + width]
        if all(fnmatchcase(part, seg) for part, seg in zip(window, segments)):
            return True
    return False


def is_excluded(path: str | Path, exclude_globs: Iterable[str]) -> bool:
    posix = _as_posix(path)
    for pattern in exclude_globs:
        if not pattern:
            continue
        if pattern.endswith("/"):
            if _matches_directory(posix.parts, pattern):
                return True
            continue
        if fnmatchcase(posix.name, pattern):
            return True
        if "/" in pattern and posix.match(pattern):
            return True
    return False


def is_included(path: str | Path, include_globs: Iterable[str]) -> bool:
    name = _as_posix(path).name
    return any(fnmatchcase(name, pattern) for pattern in include_globs if pattern)


def should_process(path: str | Path, patterns: PatternSet) -> bool:
    """True iff `path` matches no exclude pattern and at least one include pattern."""
    if is_excluded(path, patterns.exclude_globs):
        return False
    return is_included(path, patterns.include_globs)
