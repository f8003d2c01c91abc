from __future__ import annotations

import pytest

from copyright_notice.config import loader


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the real user config and COPYRIGHT_* variables out of every test."""
    user_file = tmp_path / "user-config" / "config.yaml"
    monkeypatch.setattr(loader, "_user_config_file", lambda: user_file)
    for name in (loader.ENV_COMPANY_NAME, loader.ENV_NOTICE_FORMAT):
        # setenv first so the undo also removes values loaded from a .env file
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return user_file
