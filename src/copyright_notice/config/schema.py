# Copyright (C) 2025 Francesca Falcone and Mattia Tagliente
# All Rights Reserved

# copyright_notice/config/schema.py
from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from copyright_notice.generator import (
    DEFAULT_COMPANY_NAME,
    DEFAULT_NOTICE_FORMAT,
    NoticeTemplate,
)
from copyright_notice.patterns import PatternSet

DEFAULT_FILE_PATTERNS = ["*.go", "*.py", "*.js", "*.ts", "*.java", "*.cpp", "*.c", "*.h"]
DEFAULT_EXCLUDE_PATTERNS = ["vendor/", "node_modules/", ".git/", "*.pb.go", "*_generated.go"]


class Config(BaseModel):
    """Copyright notice configuration (.copyright.yaml)."""
    model_config = ConfigDict(extra="forbid")

    company_name: str = Field(
        default=DEFAULT_COMPANY_NAME,
        description="Copyright holder substituted for $company_name."
    )
    notice_format: str = Field(
        default=DEFAULT_NOTICE_FORMAT,
        description="Notice template; supports $year, $current_year and $company_name."
    )
    auto_fix: bool = Field(
        default=False,
        description="Let `fix` write changes without passing --auto-fix."
    )
    file_patterns: List[str] = Field(
        default_factory=lambda: list(DEFAULT_FILE_PATTERNS),
        description="Include globs, matched against the file name."
    )
    exclude_patterns: List[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDE_PATTERNS),
        description="Exclude globs; a trailing '/' marks a directory pattern."
    )

    def template(self) -> NoticeTemplate:
        return NoticeTemplate(format_string=self.notice_format, company_name=self.company_name)

    def pattern_set(self) -> PatternSet:
        return PatternSet.from_lists(self.file_patterns, self.exclude_patterns)

    def with_overrides(
        self,
        company: str | None = None,
        notice_format: str | None = None,
        auto_fix: bool = False,
    ) -> Config:
        """Copy with CLI flag overrides applied; empty values keep the current setting."""
        updates: dict = {}
        if company:
            updates["company_name"] = company
        if notice_format:
            updates["notice_format"] = notice_format
        if auto_fix:
            updates["auto_fix"] = True
        return self.model_copy(update=updates)
