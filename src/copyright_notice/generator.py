# Copyright (C) 2025 Francesca Falcone and Mattia Tagliente
# All Rights Reserved

# copyright_notice/generator.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from copyright_notice.filetypes import CommentSyntax

DEFAULT_NOTICE_FORMAT = "Copyright (C) $year $company_name. All rights reserved."
DEFAULT_COMPANY_NAME = "Your Company"


def current_year() -> int:
    return datetime.now().year


@dataclass(frozen=True)
class NoticeTemplate:
    format_string: str = DEFAULT_NOTICE_FORMAT
    company_name: str = DEFAULT_COMPANY_NAME


def render(template: NoticeTemplate, year: int | None = None) -> str:
    """
    Substitute the template placeholders.

    `$company_name` is replaced first, then `$year` and its alias
    `$current_year`. The company name is not escaped, so a literal `$year`
    inside it is substituted too. Unknown placeholders are left verbatim.
    """
    year_text = str(year if year is not None else current_year())
    notice = template.format_string.replace("$company_name", template.company_name)
    notice = notice.replace("$year", year_text)
    notice = notice.replace("$current_year", year_text)
    return notice


def wrap(notice: str, syntax: CommentSyntax) -> str:
    """Turn a rendered notice into a single comment line for `syntax`."""
    if syntax.line_token:
        return f"{syntax.line_token} {notice}"
    return f"{syntax.block_start} {notice} {syntax.block_end}"
