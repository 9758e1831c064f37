from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _set_required_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BLOCK_TOOLKIT_LOCALE", "en")
    monkeypatch.setenv("BLOCK_TOOLKIT_LOG_LEVEL", "INFO")
    monkeypatch.setenv("BLOCK_TOOLKIT_ISOLATE_ERRORS", "true")
    monkeypatch.delenv("BLOCK_TOOLKIT_TRANSLATIONS_FILE", raising=False)
