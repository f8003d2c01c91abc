# Copyright (C) 2025 Francesca Falcone and Mattia Tagliente
# All Rights Reserved

# copyright_notice/repair.py
"""
In-place notice repair.

Two modes:
- INSERT: the file has no notice in the detection window. The wrapped notice
  becomes line 1, or follows line 1 (with one blank line between them) when
  line 1 is a shebang or a leading construct of the file type such as a Go
  package clause.
- UPDATE: the file has a notice with a stale year. Only the last year token
  on the notice line is rewritten; everything else on the line is kept, so
  "2019-2022" becomes "2019-<year>".

`apply` never touches storage. Re-applying it to its own output with the
same year returns the content unchanged with `changed=False`.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from copyright_notice.detector import BOM, YEAR_RE, ScanResult, scan
from copyright_notice.errors import UnsupportedFileType
from copyright_notice.filetypes import CommentSyntax, FileType, lookup_file_type
from copyright_notice.generator import current_year, wrap

logger = logging.getLogger(__name__)


class RepairMode(str, Enum):
    INSERT = "insert"
    UPDATE = "update"

    @classmethod
    def for_scan(cls, result: ScanResult, year: int | None = None) -> RepairMode | None:
        """Mode needed to make `result` compliant, or None if it already is."""
        if not result.has_notice:
            return cls.INSERT
        if result.is_outdated(year):
            return cls.UPDATE
        return None


@dataclass(frozen=True)
class RepairResult:
    new_content: str
    changed: bool
    mode: RepairMode | None = None


def _newline_of(content: str) -> str:
    return "\r\n" if "\r\n" in content else "\n"


def _split_ending(line: str) -> tuple[str, str]:
    body = line.rstrip("\r\n")
    return body, line[len(body) :]


def _resolve_file_type(result: ScanResult) -> FileType | None:
    if not result.path:
        return None
    try:
        return lookup_file_type(result.path)
    except UnsupportedFileType:
        return None


def _keeps_first_line(first_line: str, file_type: FileType | None) -> bool:
    if first_line.startswith("#!"):
        return True
    return file_type is not None and file_type.is_leading_construct(first_line)


def insert_notice(
    content: str,
    syntax: CommentSyntax,
    rendered_notice: str,
    file_type: FileType | None = None,
) -> str:
    """
    Return `content` with the wrapped notice inserted at the top.

    A UTF-8 byte order mark stays the very first character of the file.
    """
    bom = BOM if content.startswith(BOM) else ""
    content = content[len(bom) :]
    newline = _newline_of(content)
    notice_line = wrap(rendered_notice, syntax)
    lines = content.splitlines(keepends=True)

    if lines and _keeps_first_line(lines[0], file_type):
        first, ending = _split_ending(lines[0])
        rest = "".join(lines[1:])
        return bom + first + (ending or newline) + newline + notice_line + newline + rest

    return bom + notice_line + newline + content


def update_year(content: str, line_index: int, year: int) -> str:
    """
    Rewrite the last year token on the 1-based `line_index` to `year`.

    Tokens already at or past `year` are left alone, as is every other
    character of the file.
    """
    lines = content.splitlines(keepends=True)
    if not 1 <= line_index <= len(lines):
        return content

    body, ending = _split_ending(lines[line_index - 1])
    matches = list(YEAR_RE.finditer(body))
    if not matches:
        return content
    last = matches[-1]
    if int(last.group(0)) >= year:
        return content

    lines[line_index - 1] = body[: last.start()] + str(year) + body[last.end() :] + ending
    return "".join(lines)


def apply(
    content: str,
    result: ScanResult,
    syntax: CommentSyntax,
    rendered_notice: str,
    mode: RepairMode,
    year: int | None = None,
    file_type: FileType | None = None,
) -> RepairResult:
    """
    Produce repaired content for one file.

    Args:
        content: Current file text.
        result: Scan of `content`.
        syntax: Comment syntax of the file type.
        rendered_notice: Output of `generator.render`.
        mode: INSERT or UPDATE.
        year: Target year (defaults to the current calendar year).
        file_type: File type for leading-construct handling; resolved from
            `result.path` when omitted.

    Returns:
        RepairResult with the new content and whether it differs from `content`.
    """
    year = year if year is not None else current_year()

    if mode is RepairMode.INSERT:
        # Guard against a stale result: never insert a second notice.
        if result.has_notice or scan(content, syntax).has_notice:
            return RepairResult(content, False, mode)
        if file_type is None:
            file_type = _resolve_file_type(result)
        new_content = insert_notice(content, syntax, rendered_notice, file_type)
    elif mode is RepairMode.UPDATE:
        if not result.is_outdated(year):
            return RepairResult(content, False, mode)
        new_content = update_year(content, result.notice_line_index, year)
    else:
        raise ValueError(f"unknown repair mode: {mode!r}")

    changed = new_content != content
    if changed:
        logger.debug("%s: %s applied", result.path or "<content>", mode.value)
    return RepairResult(new_content, changed, mode)
