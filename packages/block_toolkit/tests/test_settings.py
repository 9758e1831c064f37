import pytest
from block_toolkit.config import Settings, load_settings
from pydantic import ValidationError


def test_load_settings_defaults() -> None:
    settings = load_settings()
    assert settings.locale == "en"
    assert settings.log_level == "INFO"
    assert settings.translations_file is None
    assert settings.isolate_block_errors is True


def test_load_settings_overrides(monkeypatch, tmp_path) -> None:
    translations = tmp_path / "messages.json"
    translations.write_text("{}", encoding="utf-8")
    monkeypatch.setenv("BLOCK_TOOLKIT_LOCALE", "de")
    monkeypatch.setenv("BLOCK_TOOLKIT_LOG_LEVEL", "debug")
    monkeypatch.setenv("BLOCK_TOOLKIT_TRANSLATIONS_FILE", str(translations))
    monkeypatch.setenv("BLOCK_TOOLKIT_ISOLATE_ERRORS", "false")

    settings = load_settings()
    assert settings.locale == "de"
    assert settings.log_level == "DEBUG"
    assert settings.translations_file == str(translations)
    assert settings.isolate_block_errors is False


def test_load_settings_rejects_unknown_log_level(monkeypatch) -> None:
    monkeypatch.setenv("BLOCK_TOOLKIT_LOG_LEVEL", "LOUD")
    with pytest.raises(ValueError, match="BLOCK_TOOLKIT_LOG_LEVEL"):
        load_settings()


def test_load_settings_rejects_empty_locale(monkeypatch) -> None:
    monkeypatch.setenv("BLOCK_TOOLKIT_LOCALE", " ")
    with pytest.raises(ValueError, match="BLOCK_TOOLKIT_LOCALE"):
        load_settings()


def test_missing_translations_file_is_ignored(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("BLOCK_TOOLKIT_TRANSLATIONS_FILE", str(tmp_path / "missing.json"))
    assert load_settings().translations_file is None


def test_settings_are_frozen() -> None:
    settings = Settings()
    with pytest.raises(ValidationError):
        settings.locale = "fr"
