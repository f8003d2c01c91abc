# Copyright (C) 2025 Francesca Falcone and Mattia Tagliente
# All Rights Reserved

# src/copyright_notice/utils/io.py
from __future__ import annotations

import json
import os
import tempfile
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import yaml
from filelock import FileLock

from copyright_notice.errors import ReadFailure, WriteFailure


# Source files are read and written with surrogateescape so bytes that are
# not valid UTF-8 survive a scan/repair round trip unchanged.
SOURCE_ERRORS = "surrogateescape"


def read_source(path: Path) -> str:
    """
    Read a whole source file as UTF-8 text, keeping its newline style.

    Undecodable bytes are carried through as surrogate escapes.

    Raises:
        ReadFailure: if the path is not a regular file or cannot be opened.
    """
    try:
        if not path.is_file():
            raise ReadFailure(path, "not a regular file")
        with path.open("r", encoding="utf-8", errors=SOURCE_ERRORS, newline="") as f:
            return f.read()
    except OSError as e:
        raise ReadFailure(path, str(e)) from e


def read_yaml(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def write_text_atomic(path: Path, text: str) -> None:
    """
    Write text to a file atomically using temp file + rename.

    Args:
        path: Target file path; a symlink is followed and its target rewritten
        text: Text content to write, newlines written as given

    The write is atomic on both POSIX and Windows via os.replace().
    The existing file mode is kept when the target already exists.
    """
    path = path.resolve()
    mode = path.stat().st_mode if path.exists() else None

    with tempfile.NamedTemporaryFile(
        "w",
        encoding="utf-8",
        errors=SOURCE_ERRORS,
        newline="",
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
    ) as f:
        tmp_path = Path(f.name)
        try:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        except Exception:
            f.close()
            tmp_path.unlink(missing_ok=True)
            raise

    try:
        if mode is not None:
            os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except Exception:
        tmp_path.unlink(missing_ok=True)
        raise


def write_source(path: Path, text: str) -> None:
    """write_text_atomic, with OS errors mapped to WriteFailure."""
    try:
        write_text_atomic(path, text)
    except OSError as e:
        raise WriteFailure(path, str(e)) from e


def append_log_record(path: Path, record: str | dict) -> None:
    """
    Append a log record to a file with ISO8601 timestamp prefix.
    Thread-safe via file locking.

    Args:
        path: Log file path
        record: String message or dict to serialize as JSON

    Dict records are serialized as single-line JSON.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    lock_path = path.with_suffix(path.suffix + ".lock")

    if isinstance(record, dict):
        record_text = json.dumps(record, ensure_ascii=False)
    else:
        record_text = str(record)

    timestamp = datetime.now(UTC).isoformat()
    line = f"{timestamp} {record_text}\n"

    with FileLock(lock_path, timeout=10):
        with path.open("a", encoding="utf-8") as f:
            f.write(line)
