# Copyright (C) 2025 Francesca Falcone and Mattia Tagliente
# All Rights Reserved

# src/copyright_notice/config/loader.py
"""
Configuration loading with file discovery, .env support and env overrides.

Configuration Precedence (highest to lowest):
1. CLI flags (applied by the caller via Config.with_overrides)
2. Environment variables COPYRIGHT_COMPANY_NAME / COPYRIGHT_NOTICE_FORMAT
3. .env file in the working directory (auto-loaded, never overrides the environment)
4. Config file: --config path, else the first of .copyright.yaml, .copyright.yml,
   copyright.yaml, copyright.yml in the working directory, else the user config at
   the platform-specific location:
   - Windows: %LOCALAPPDATA%/copyright-notice/copyright-notice/config.yaml
   - Linux: ~/.config/copyright-notice/config.yaml
   - macOS: ~/Library/Application Support/copyright-notice/config.yaml
5. Built-in defaults (see schema.Config)

Any problem with a config file is fatal: it raises ConfigLoadFailure before
a single file is scanned.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from platformdirs import user_config_path
from pydantic import ValidationError

from copyright_notice.config.schema import Config
from copyright_notice.errors import ConfigLoadFailure
from copyright_notice.utils.io import read_yaml

logger = logging.getLogger(__name__)

APP_NAME = "copyright-notice"
CONFIG_CANDIDATES = (".copyright.yaml", ".copyright.yml", "copyright.yaml", "copyright.yml")
DOTENV_FILENAME = ".env"
ENV_COMPANY_NAME = "COPYRIGHT_COMPANY_NAME"
ENV_NOTICE_FORMAT = "COPYRIGHT_NOTICE_FORMAT"


def _read_yaml(path: Path) -> dict[str, Any]:
    """
    Reads and parses a YAML config file.

    Raises:
        ConfigLoadFailure: If the file is missing, unparsable, or its root
            is not a mapping.
    """
    if not path.is_file():
        raise ConfigLoadFailure(f"Config file not found: {path}")
    try:
        data = read_yaml(path)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigLoadFailure(f"Failed to read config {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigLoadFailure(f"YAML root must be a mapping: {path}")
    return data


def _load_dotenv(start: Path) -> bool:
    dotenv_path = start / DOTENV_FILENAME
    if dotenv_path.exists():
        # override=False: real environment variables win over .env
        load_dotenv(dotenv_path, override=False)
        return True
    return False


def _user_config_file() -> Path:
    return user_config_path(appname=APP_NAME) / "config.yaml"


def find_config_file(start: Path | None = None) -> Path | None:
    """First existing candidate in `start` (cwd if None), then the user config file."""
    base = start or Path.cwd()
    for name in CONFIG_CANDIDATES:
        candidate = base / name
        if candidate.is_file():
            return candidate
    user_file = _user_config_file()
    if user_file.is_file():
        return user_file
    return None


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    company = os.environ.get(ENV_COMPANY_NAME, "").strip()
    if company:
        data["company_name"] = company
    notice_format = os.environ.get(ENV_NOTICE_FORMAT, "").strip()
    if notice_format:
        data["notice_format"] = notice_format
    return data


def load_config(config_path: Path | None = None, start: Path | None = None) -> Config:
    """
    Public entry point used by the CLI.

    Args:
        config_path: Explicit config file; must exist when given.
        start: Directory searched for config candidates and .env (cwd if None).

    Returns:
        The effective Config.

    Raises:
        ConfigLoadFailure: If the config file is missing, malformed or invalid.
    """
    base = (start or Path.cwd()).resolve()
    _load_dotenv(base)

    path = Path(config_path) if config_path else find_config_file(base)
    data: dict[str, Any] = {}
    if path is not None:
        logger.debug("loading config from %s", path)
        data = _read_yaml(path)

    data = _apply_env_overrides(data)
    try:
        return Config.model_validate(data)
    except ValidationError as e:
        source = path if path is not None else "environment"
        raise ConfigLoadFailure(f"Invalid config at {source}: {e}") from e
