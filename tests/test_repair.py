"""
Notice repair tests: insertion position, minimal year updates, idempotence.
"""
from __future__ import annotations

import pytest

from copyright_notice.detector import scan
from copyright_notice.filetypes import lookup, lookup_file_type
from copyright_notice.generator import NoticeTemplate, render
from copyright_notice.repair import RepairMode, apply, insert_notice, update_year

YEAR = 2025
NOTICE = render(NoticeTemplate("Copyright (C) $year $company_name. All rights reserved.", "Acme Inc"), YEAR)


def _repair(content: str, path: str, year: int = YEAR):
    syntax = lookup(path)
    result = scan(content, syntax, path)
    mode = RepairMode.for_scan(result, year)
    if mode is None:
        return content, False
    repaired = apply(content, result, syntax, NOTICE, mode, year=year)
    return repaired.new_content, repaired.changed


class TestRepairMode:
    def test_mode_selection(self):
        go = lookup("a.go")
        assert RepairMode.for_scan(scan("package main\n", go), YEAR) is RepairMode.INSERT
        assert RepairMode.for_scan(scan("// Copyright 2022 A\n", go), YEAR) is RepairMode.UPDATE
        assert RepairMode.for_scan(scan("// Copyright 2025 A\n", go), YEAR) is None


class TestInsert:
    """Test insertion of a missing notice."""

    def test_plain_file_gets_notice_on_line_one(self):
        new, changed = _repair("import os\n", "tool.py")

        assert changed is True
        assert new == f"# {NOTICE}\nimport os\n"

    def test_shebang_is_preserved(self):
        """The shebang stays first; one blank line separates it from the notice."""
        new, changed = _repair("#!/bin/sh\necho hi\n", "run.sh")

        lines = new.splitlines()
        assert changed is True
        assert lines[0] == "#!/bin/sh"
        assert lines[1] == ""
        assert lines[2] == f"# {NOTICE}"
        assert lines[3] == "echo hi"

    def test_go_package_clause_stays_first(self):
        new, _ = _repair("package main\n\nfunc main() {}\n", "main.go")

        assert new == f"package main\n\n// {NOTICE}\n\nfunc main() {{}}\n"

    def test_xml_declaration_stays_first(self):
        new, _ = _repair('<?xml version="1.0"?>\n<root/>\n', "pom.xml")

        assert new.splitlines()[0] == '<?xml version="1.0"?>'
        assert new.splitlines()[2] == f"<!-- {NOTICE} -->"

    def test_block_only_syntax_wraps_notice(self):
        new, _ = _repair("body { margin: 0; }\n", "site.css")
        assert new.splitlines()[0] == f"/* {NOTICE} */"

    def test_empty_file(self):
        new, changed = _repair("", "empty.go")
        assert changed is True
        assert new == f"// {NOTICE}\n"

    def test_shebang_without_trailing_newline(self):
        new, _ = _repair("#!/usr/bin/env python3", "script.py")
        assert new == f"#!/usr/bin/env python3\n\n# {NOTICE}\n"

    def test_crlf_newlines_are_kept(self):
        new, _ = _repair("#!/bin/sh\r\necho hi\r\n", "run.sh")
        assert new == f"#!/bin/sh\r\n\r\n# {NOTICE}\r\necho hi\r\n"

    def test_insert_with_stale_result_does_not_duplicate(self):
        """A second INSERT with an outdated scan still sees the existing notice."""
        syntax = lookup("a.go")
        original = "package main\n"
        stale = scan(original, syntax, "a.go")
        first = apply(original, stale, syntax, NOTICE, RepairMode.INSERT, year=YEAR)
        second = apply(first.new_content, stale, syntax, NOTICE, RepairMode.INSERT, year=YEAR)

        assert first.changed is True
        assert second.changed is False
        assert second.new_content == first.new_content

    def test_insert_notice_without_file_type_only_keeps_shebang(self):
        syntax = lookup("a.go")
        assert insert_notice("package main\n", syntax, NOTICE).startswith(f"// {NOTICE}\n")
        go = lookup_file_type("a.go")
        assert insert_notice("package main\n", syntax, NOTICE, go).startswith("package main\n\n")

    def test_byte_order_mark_stays_first(self):
        new, changed = _repair("\ufeffpackage main\n", "main.go")

        assert changed is True
        assert new == f"\ufeffpackage main\n\n// {NOTICE}\n"

    def test_byte_order_mark_precedes_notice_on_line_one(self):
        new, _ = _repair("\ufeffimport os\n", "tool.py")
        assert new == f"\ufeff# {NOTICE}\nimport os\n"

    def test_byte_order_mark_file_is_idempotent(self):
        once, _ = _repair("\ufeffpackage main\n", "main.go")
        twice, changed = _repair(once, "main.go")
        assert changed is False
        assert twice == once


class TestUpdate:
    """Test minimal-diff year updates."""

    def test_only_year_changes(self):
        content = "// Copyright 2022 Acme Inc\npackage main\n"
        new, changed = _repair(content, "main.go")

        assert changed is True
        assert new == "// Copyright 2025 Acme Inc\npackage main\n"

    def test_customized_text_is_untouched(self):
        content = "#!/usr/bin/env python3\n#  Copyright (c) 2020, ACME Corp & Friends -- see LICENSE\n"
        new, _ = _repair(content, "tool.py")

        assert new.splitlines()[1] == "#  Copyright (c) 2020, ACME Corp & Friends -- see LICENSE".replace(
            "2020", "2025"
        )

    def test_range_end_is_extended(self):
        new, _ = _repair("# Copyright 2019-2022 Acme\n", "a.py")
        assert new == "# Copyright 2019-2025 Acme\n"

    def test_last_year_is_the_one_rewritten(self):
        new, _ = _repair("// Copyright 1999 Acme, updated 2021\n", "a.js")
        assert new == "// Copyright 1999 Acme, updated 2025\n"

    def test_block_comment_markers_are_kept(self):
        new, _ = _repair("/* Copyright 2020 Acme */\n", "a.css")
        assert new == "/* Copyright 2025 Acme */\n"

    def test_crlf_line_ending_is_kept(self):
        new, _ = _repair("// Copyright 2022 Acme\r\nint x;\r\n", "a.c")
        assert new == "// Copyright 2025 Acme\r\nint x;\r\n"

    def test_update_year_out_of_range_index(self):
        assert update_year("// Copyright 2020\n", 5, YEAR) == "// Copyright 2020\n"

    def test_update_on_current_notice_is_noop(self):
        syntax = lookup("a.go")
        content = "// Copyright 2025 Acme\n"
        result = scan(content, syntax)
        repaired = apply(content, result, syntax, NOTICE, RepairMode.UPDATE, year=YEAR)
        assert repaired.changed is False
        assert repaired.new_content == content


class TestIdempotence:
    """apply(apply(x)) == apply(x), with changed=False the second time."""

    @pytest.mark.parametrize(
        "content,path",
        [
            ("import os\n", "a.py"),
            ("#!/bin/sh\necho hi\n", "run.sh"),
            ("package main\n", "main.go"),
            ("body {}\n", "a.css"),
            ("// Copyright 2022 Acme Inc\n", "a.go"),
            ("# Copyright 2019-2021 Acme\nx = 1\n", "a.py"),
        ],
    )
    def test_second_pass_is_noop(self, content, path):
        once, changed_once = _repair(content, path)
        twice, changed_twice = _repair(once, path)

        assert changed_once is True
        assert changed_twice is False
        assert twice == once

        rescan = scan(once, lookup(path))
        assert rescan.has_notice is True
        assert rescan.needs_repair(YEAR) is False

    def test_repeated_apply_with_same_update_result(self):
        """Re-using the original UPDATE scan on repaired content changes nothing."""
        syntax = lookup("a.py")
        content = "# Copyright 2022, updated 2022 Acme\n"
        result = scan(content, syntax)
        first = apply(content, result, syntax, NOTICE, RepairMode.UPDATE, year=YEAR)
        second = apply(first.new_content, result, syntax, NOTICE, RepairMode.UPDATE, year=YEAR)

        assert first.new_content == "# Copyright 2022, updated 2025 Acme\n"
        assert second.changed is False
