# Copyright (C) 2025 Francesca Falcone and Mattia Tagliente
# All Rights Reserved

# copyright_notice/__init__.py
"""
copyright-notice: pre-commit gate for source file copyright notices.

This package exposes a Typer-based CLI and a small set of modules for:
- file type registry (extension -> comment syntax)
- pattern matching (include/exclude globs)
- notice detection (bounded leading window scan)
- notice generation (templated notice text)
- notice repair (insert a missing notice, update a stale year)

Versioning policy: semantic (MAJOR.MINOR.PATCH)
"""

__all__ = ["__version__"]

# Keep in sync with pyproject.toml [project].version
__version__ = "0.1.0"
