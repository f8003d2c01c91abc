# Copyright (C) 2025 Francesca Falcone and Mattia Tagliente
# All Rights Reserved

# copyright_notice/errors.py
from __future__ import annotations

from pathlib import Path


class CopyrightNoticeError(Exception):
    """Base class for all errors raised by copyright_notice."""


class UnsupportedFileType(CopyrightNoticeError):
    """Extension not in the file type registry. Callers skip the file silently."""

    def __init__(self, path: str | Path):
        self.path = str(path)
        super().__init__(f"unsupported file type: {self.path}")


class ReadFailure(CopyrightNoticeError):
    """File could not be read (permissions, deleted, not a regular file)."""

    def __init__(self, path: str | Path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"failed to read file {self.path}: {reason}")


class WriteFailure(CopyrightNoticeError):
    """Repaired content could not be written back."""

    def __init__(self, path: str | Path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"failed to write file {self.path}: {reason}")


class ConfigLoadFailure(CopyrightNoticeError):
    """Configuration file is unreadable or invalid. Fatal before scanning."""
