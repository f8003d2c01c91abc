# Copyright (C) 2025 Francesca Falcone and Mattia Tagliente
# All Rights Reserved

# copyright_notice/engine.py
"""
Batch pipeline behind `copyright check` and `copyright fix`.

For every candidate path:
  filter (include/exclude patterns) -> registry lookup -> read -> scan
  -> [render + repair -> write]

Files of unsupported types are dropped silently. Read and write failures are
recorded per file and never stop the batch; earlier successful writes are
not rolled back. The per-file pipeline shares no state, so it runs on a
thread pool and results are ordered by input position after the join.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from copyright_notice.config.schema import Config
from copyright_notice.detector import COPYRIGHT_RE, ScanResult, scan
from copyright_notice.errors import CopyrightNoticeError, UnsupportedFileType
from copyright_notice.filetypes import lookup_file_type
from copyright_notice.generator import current_year, render
from copyright_notice.patterns import PatternSet, should_process
from copyright_notice.repair import RepairMode, apply
from copyright_notice.utils.io import append_log_record, read_source, write_source

logger = logging.getLogger(__name__)


class FileStatus(str, Enum):
    OK = "OK"
    MISSING = "MISSING"
    OUTDATED = "OUTDATED"


@dataclass(frozen=True)
class FileReport:
    path: str
    status: FileStatus
    scan: ScanResult
    mode: RepairMode | None = None
    changed: bool = False
    fixed: bool = False

    @property
    def year(self) -> int:
        return self.scan.notice_year

    def line(self) -> str:
        """Report line as printed by `check`."""
        if self.status is FileStatus.OUTDATED:
            return f"OUTDATED: {self.path} (year: {self.year})"
        return f"{self.status.value}: {self.path}"


@dataclass(frozen=True)
class FileError:
    path: str
    message: str


@dataclass
class BatchReport:
    files: list[FileReport] = field(default_factory=list)
    errors: list[FileError] = field(default_factory=list)
    dry_run: bool = False

    @property
    def scanned(self) -> int:
        return len(self.files)

    @property
    def missing(self) -> int:
        return sum(1 for f in self.files if f.status is FileStatus.MISSING)

    @property
    def outdated(self) -> int:
        return sum(1 for f in self.files if f.status is FileStatus.OUTDATED)

    @property
    def fixed(self) -> int:
        return sum(1 for f in self.files if f.fixed)

    @property
    def unresolved(self) -> int:
        return sum(1 for f in self.files if f.status is not FileStatus.OK and not f.fixed)

    @property
    def ok(self) -> bool:
        return self.unresolved == 0 and not self.errors

    def summary(self) -> str:
        return (
            f"Scanned {self.scanned} files: {self.missing} missing copyright, "
            f"{self.outdated} outdated"
        )


def expand_paths(paths: Iterable[str | Path]) -> list[Path]:
    """
    Flatten command-line paths: directories are walked recursively (sorted,
    files only), anything else is passed through unchanged. A path that
    cannot be stat'ed is passed through too; reading it later records a
    per-file error.
    """
    resolved: list[Path] = []
    for raw in paths:
        p = Path(raw)
        try:
            is_dir = p.is_dir()
        except OSError as e:
            logger.debug("cannot stat %s: %s", p, e)
            is_dir = False
        if is_dir:
            resolved.extend(sorted(child for child in p.rglob("*") if child.is_file()))
        else:
            resolved.append(p)
    return resolved


def select_files(paths: Iterable[str | Path], patterns: PatternSet) -> list[Path]:
    """Paths that pass the pattern filter and have a registered file type."""
    selected: list[Path] = []
    for p in paths:
        path = Path(p)
        if not should_process(path, patterns):
            logger.debug("skipping %s (patterns)", path)
            continue
        try:
            lookup_file_type(path)
        except UnsupportedFileType:
            logger.debug("skipping %s (unsupported type)", path)
            continue
        selected.append(path)
    return selected


def _status_of(result: ScanResult, year: int) -> FileStatus:
    if not result.has_notice:
        return FileStatus.MISSING
    if result.is_outdated(year):
        return FileStatus.OUTDATED
    return FileStatus.OK


def _process_file(
    path: Path,
    year: int,
    rendered_notice: str | None,
    dry_run: bool,
) -> FileReport:
    file_type = lookup_file_type(path)
    content = read_source(path)
    result = scan(content, file_type.syntax, path)
    status = _status_of(result, year)

    mode = RepairMode.for_scan(result, year)
    if rendered_notice is None or mode is None:
        return FileReport(str(path), status, result)

    repaired = apply(
        content, result, file_type.syntax, rendered_notice, mode, year=year, file_type=file_type
    )
    if not repaired.changed:
        return FileReport(str(path), status, result, mode=mode)
    if not dry_run:
        write_source(path, repaired.new_content)
    return FileReport(str(path), status, result, mode=mode, changed=True, fixed=not dry_run)


def _run(
    paths: list[Path],
    year: int,
    rendered_notice: str | None,
    dry_run: bool,
    max_parallel: int,
) -> BatchReport:
    outcomes: dict[int, FileReport | FileError] = {}

    with ThreadPoolExecutor(max_workers=max(1, max_parallel)) as executor:
        futures = {
            executor.submit(_process_file, path, year, rendered_notice, dry_run): (i, path)
            for i, path in enumerate(paths)
        }
        for future in as_completed(futures):
            i, path = futures[future]
            try:
                outcomes[i] = future.result()
            except UnsupportedFileType:
                continue
            except CopyrightNoticeError as e:
                logger.warning("%s", e)
                outcomes[i] = FileError(str(path), str(e))

    report = BatchReport(dry_run=dry_run)
    for i in sorted(outcomes):
        outcome = outcomes[i]
        if isinstance(outcome, FileError):
            report.errors.append(outcome)
        else:
            report.files.append(outcome)
    return report


def check_files(
    paths: Iterable[str | Path],
    config: Config,
    year: int | None = None,
    max_parallel: int = 1,
) -> BatchReport:
    """Classify every eligible file as OK, MISSING or OUTDATED."""
    year = year if year is not None else current_year()
    selected = select_files(paths, config.pattern_set())
    return _run(selected, year, None, dry_run=False, max_parallel=max_parallel)


def fix_files(
    paths: Iterable[str | Path],
    config: Config,
    year: int | None = None,
    dry_run: bool = False,
    max_parallel: int = 1,
    log_path: Path | None = None,
) -> BatchReport:
    """
    Insert missing notices and update stale years.

    Args:
        paths: Candidate files.
        config: Effective configuration (template, company, patterns).
        year: Target year (defaults to the current calendar year).
        dry_run: Compute repairs without writing anything.
        max_parallel: Thread pool size for the per-file pipeline.
        log_path: Optional JSON-lines audit log of applied repairs.

    Returns:
        BatchReport; entries with `fixed=True` were written back.
    """
    year = year if year is not None else current_year()
    rendered = render(config.template(), year)
    if not COPYRIGHT_RE.search(rendered):
        logger.warning(
            "rendered notice %r does not contain the word 'copyright'; "
            "inserted notices will not be detected on the next run",
            rendered,
        )

    selected = select_files(paths, config.pattern_set())
    report = _run(selected, year, rendered, dry_run=dry_run, max_parallel=max_parallel)

    if log_path is not None and not dry_run:
        for entry in report.files:
            if entry.fixed:
                append_log_record(
                    log_path,
                    {
                        "event": "notice_repaired",
                        "path": entry.path,
                        "mode": entry.mode.value if entry.mode else None,
                        "previous_year": entry.year,
                        "year": year,
                    },
                )
    return report
