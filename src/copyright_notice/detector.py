# Copyright (C) 2025 Francesca Falcone and Mattia Tagliente
# All Rights Reserved

# copyright_notice/detector.py
"""
Copyright notice detection over a bounded leading window.

Only the first WINDOW_LINES lines of a file are examined. A notice further
down is treated as missing. Blank lines are skipped but still count toward
the line index and the window.

Each non-blank line has its comment markers stripped and is matched against
the whole word "copyright" (case-insensitive), optionally followed by "(C)"
and a 4-digit year. The first matching line wins. Its year is the LAST
19xx/20xx token on the line, so "Copyright 1999 Acme, updated 2021" records
2021.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from copyright_notice.filetypes import CommentSyntax, lookup
from copyright_notice.generator import current_year
from copyright_notice.utils.io import read_source

logger = logging.getLogger(__name__)

WINDOW_LINES = 20
BOM = "\ufeff"

COPYRIGHT_RE = re.compile(r"\bcopyright\b(?:\s*\(c\))?(?:\s*(\d{4}))?", re.IGNORECASE)
YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")


@dataclass(frozen=True)
class ScanResult:
    """Outcome of scanning one file. Outdated/needs-repair are derived on demand."""

    path: str
    syntax: CommentSyntax
    has_notice: bool = False
    notice_line_index: int = -1
    notice_raw_text: str = ""
    notice_year: int = 0
    scanned_line_count: int = 0

    def is_outdated(self, year: int | None = None) -> bool:
        if not self.has_notice or self.notice_year == 0:
            return False
        return self.notice_year < (year if year is not None else current_year())

    def needs_repair(self, year: int | None = None) -> bool:
        return not self.has_notice or self.is_outdated(year)


def strip_comment_markers(line: str, syntax: CommentSyntax) -> str:
    """Remove the comment markers of `syntax` from an already-trimmed line."""
    cleaned = line
    if syntax.line_token and cleaned.startswith(syntax.line_token):
        cleaned = cleaned[len(syntax.line_token) :].strip()
    if syntax.has_block:
        if cleaned.startswith(syntax.block_start):
            cleaned = cleaned[len(syntax.block_start) :]
        elif cleaned.startswith("*"):
            # continuation line inside a block comment: " * Copyright ..."
            cleaned = cleaned[1:]
        if cleaned.endswith(syntax.block_end):
            cleaned = cleaned[: -len(syntax.block_end)]
    return cleaned.strip()


def extract_year(text: str) -> int:
    """Last 19xx/20xx token in `text`, or 0."""
    years = YEAR_RE.findall(text)
    return int(years[-1]) if years else 0


def scan(content: str, syntax: CommentSyntax, path: str | Path = "") -> ScanResult:
    """Classify `content` as carrying a copyright notice or not."""
    lines = content.removeprefix(BOM).splitlines()[:WINDOW_LINES]
    for index, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line:
            continue

        cleaned = strip_comment_markers(line, syntax)
        if "copyright" in cleaned.lower():
            logger.debug("line %d: %r -> cleaned %r", index, line, cleaned)

        if COPYRIGHT_RE.search(cleaned):
            return ScanResult(
                path=str(path),
                syntax=syntax,
                has_notice=True,
                notice_line_index=index,
                notice_raw_text=line,
                notice_year=extract_year(cleaned),
                scanned_line_count=len(lines),
            )

    return ScanResult(path=str(path), syntax=syntax, scanned_line_count=len(lines))


def scan_file(path: str | Path, syntax: CommentSyntax | None = None) -> ScanResult:
    """
    Read and scan a file on disk.

    Raises:
        UnsupportedFileType: if `syntax` is not given and the extension is unknown.
        ReadFailure: if the file cannot be read.
    """
    if syntax is None:
        syntax = lookup(path)
    return scan(read_source(Path(path)), syntax, path)
