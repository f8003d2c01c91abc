"""
File type registry tests: extension lookup and comment syntax shapes.
"""
from __future__ import annotations

import pytest

from copyright_notice.errors import UnsupportedFileType
from copyright_notice.filetypes import (
    FILE_TYPES,
    CommentSyntax,
    SyntaxShape,
    is_supported,
    lookup,
    lookup_file_type,
    supported_extensions,
)


class TestLookup:
    """Test extension based lookup."""

    @pytest.mark.parametrize("ext", supported_extensions())
    def test_every_supported_extension_has_a_marker(self, ext):
        """Every registered extension resolves to a usable comment marker."""
        syntax = lookup(f"src/file{ext}")
        assert syntax.line_token or (syntax.block_start and syntax.block_end)

    @pytest.mark.parametrize("path", ["README.md", "data.json", "Makefile", "image.png", "x.rs"])
    def test_unsupported_extension_raises(self, path):
        """Unknown extensions signal UnsupportedFileType."""
        with pytest.raises(UnsupportedFileType):
            lookup(path)
        assert not is_supported(path)

    def test_extension_is_case_insensitive(self):
        """Extensions are lowercased before comparison."""
        assert lookup("Main.GO") == lookup("main.go")
        assert lookup_file_type("HEADER.H").name == "C/C++"

    def test_known_markers(self):
        """Spot check the comment tokens of common languages."""
        assert lookup("a.go").line_token == "//"
        assert lookup("a.py").line_token == "#"
        assert lookup("a.sh").line_token == "#"
        assert lookup("a.css").block_start == "/*"
        assert lookup("a.html").block_end == "-->"

    def test_no_extension_overlap(self):
        """An extension belongs to exactly one entry."""
        seen: set[str] = set()
        for file_type in FILE_TYPES:
            assert not (seen & file_type.extensions), file_type.name
            seen |= file_type.extensions


class TestCommentSyntax:
    """Test CommentSyntax invariants."""

    def test_shapes(self):
        assert lookup("a.py").shape is SyntaxShape.LINE
        assert lookup("a.c").shape is SyntaxShape.BOTH
        assert lookup("a.css").shape is SyntaxShape.BLOCK

    def test_requires_some_marker(self):
        with pytest.raises(ValueError):
            CommentSyntax()

    def test_block_pair_must_be_complete(self):
        with pytest.raises(ValueError):
            CommentSyntax(block_start="/*")


class TestLeadingConstructs:
    """Test first-line constructs that must stay on line 1."""

    def test_go_package_clause(self):
        go = lookup_file_type("main.go")
        assert go.is_leading_construct("package main\n")
        assert not go.is_leading_construct("import \"fmt\"")

    def test_java_package_declaration(self):
        java = lookup_file_type("App.java")
        assert java.is_leading_construct("package com.acme.app;")

    def test_xml_declaration(self):
        xml = lookup_file_type("pom.xml")
        assert xml.is_leading_construct('<?xml version="1.0" encoding="UTF-8"?>')

    def test_python_has_none(self):
        assert not lookup_file_type("a.py").is_leading_construct("import os")
