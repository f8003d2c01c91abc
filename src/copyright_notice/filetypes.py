# Copyright (C) 2025 Francesca Falcone and Mattia Tagliente
# All Rights Reserved

# copyright_notice/filetypes.py
"""
Static registry of supported file types and their comment syntax.

Each entry maps a set of lowercase extensions to a CommentSyntax. The table is
a closed set: supporting a new language means adding an entry here, and an
extension must never appear in two entries (first match wins on lookup).

Some languages require a leading construct on line 1 (a Go or Java package
declaration, an XML declaration). Those entries carry a `leading_pattern` so
the repairer can insert the notice after that line instead of before it.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from copyright_notice.errors import UnsupportedFileType


class SyntaxShape(str, Enum):
    LINE = "line"
    BLOCK = "block"
    BOTH = "both"


@dataclass(frozen=True)
class CommentSyntax:
    """Comment markers used to wrap or strip a notice."""

    line_token: str | None = None
    block_start: str | None = None
    block_end: str | None = None

    def __post_init__(self) -> None:
        if bool(self.block_start) != bool(self.block_end):
            raise ValueError("block_start and block_end must be set together")
        if not self.line_token and not self.block_start:
            raise ValueError("CommentSyntax needs a line token or a block pair")

    @property
    def has_block(self) -> bool:
        return bool(self.block_start and self.block_end)

    @property
    def shape(self) -> SyntaxShape:
        if self.line_token and self.has_block:
            return SyntaxShape.BOTH
        if self.line_token:
            return SyntaxShape.LINE
        return SyntaxShape.BLOCK


@dataclass(frozen=True)
class FileType:
    name: str
    extensions: frozenset[str]
    syntax: CommentSyntax
    leading_pattern: re.Pattern[str] | None = None

    def is_leading_construct(self, line: str) -> bool:
        """True if `line` is a first-statement construct that must stay on line 1."""
        if self.leading_pattern is None:
            return False
        return self.leading_pattern.match(line.strip()) is not None


_SLASH = CommentSyntax(line_token="//")
_HASH = CommentSyntax(line_token="#")
_C_STYLE = CommentSyntax(line_token="//", block_start="/*", block_end="*/")

FILE_TYPES: tuple[FileType, ...] = (
    FileType(
        name="Go",
        extensions=frozenset({".go"}),
        syntax=_SLASH,
        leading_pattern=re.compile(r"^package\s+\w+"),
    ),
    FileType(name="Python", extensions=frozenset({".py"}), syntax=_HASH),
    FileType(
        name="JavaScript/TypeScript",
        extensions=frozenset({".js", ".ts", ".jsx", ".tsx", ".mjs", ".cjs"}),
        syntax=_SLASH,
    ),
    FileType(
        name="Java",
        extensions=frozenset({".java"}),
        syntax=_SLASH,
        leading_pattern=re.compile(r"^package\s+[\w.]+\s*;"),
    ),
    FileType(
        name="C/C++",
        extensions=frozenset({".c", ".cpp", ".cc", ".cxx", ".h", ".hpp"}),
        syntax=_C_STYLE,
    ),
    FileType(name="Shell", extensions=frozenset({".sh", ".bash"}), syntax=_HASH),
    FileType(
        name="CSS",
        extensions=frozenset({".css"}),
        syntax=CommentSyntax(block_start="/*", block_end="*/"),
    ),
    FileType(
        name="HTML/XML",
        extensions=frozenset({".html", ".htm", ".xml"}),
        syntax=CommentSyntax(block_start="<!--", block_end="-->"),
        leading_pattern=re.compile(r"^<\?xml\b"),
    ),
)


def _extension(path: str | Path) -> str:
    return Path(path).suffix.lower()


def lookup_file_type(path: str | Path) -> FileType:
    """
    Resolve the FileType for `path` by its lowercased extension.

    Raises:
        UnsupportedFileType: if no registered entry lists the extension.
    """
    ext = _extension(path)
    if ext:
        for file_type in FILE_TYPES:
            if ext in file_type.extensions:
                return file_type
    raise UnsupportedFileType(path)


def lookup(path: str | Path) -> CommentSyntax:
    """Comment syntax for `path`; raises UnsupportedFileType for unknown extensions."""
    return lookup_file_type(path).syntax


def is_supported(path: str | Path) -> bool:
    try:
        lookup_file_type(path)
    except UnsupportedFileType:
        return False
    return True


def supported_extensions() -> list[str]:
    return sorted(ext for file_type in FILE_TYPES for ext in file_type.extensions)
