import pytest

from sheetui.errors import FatalError
from sheetui.runtime import EngineConfig
from sheetui.runtime.telemetry import LogSettings, configure


def test_defaults_without_environment() -> None:
    config = EngineConfig.from_env({})

    assert config.locale == "en"
    assert config.timezone == "America/New_York"
    assert config.input_log is None
    assert (config.sheet_rows, config.sheet_cols) == (100, 26)
    assert config.system_clipboard is True


def test_values_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SHEETUI_LOCALE", "de")
    monkeypatch.setenv("SHEETUI_TIMEZONE", "Europe/Berlin")
    monkeypatch.setenv("SHEETUI_SHEET_ROWS", "500")
    monkeypatch.setenv("SHEETUI_SYSTEM_CLIPBOARD", "off")
    monkeypatch.setenv("SHEETUI_INPUT_LOG", " keys.jsonl ")

    config = EngineConfig.from_env()

    assert config.locale == "de"
    assert config.timezone == "Europe/Berlin"
    assert config.sheet_rows == 500
    assert config.system_clipboard is False
    assert config.input_log == "keys.jsonl"


def test_blank_values_fall_back() -> None:
    config = EngineConfig.from_env({"SHEETUI_LOCALE": "  "})

    assert config.locale == "en"


@pytest.mark.parametrize("value", ["many", "0", "-3"])
def test_bad_sizes_are_fatal(value: str) -> None:
    with pytest.raises(FatalError):
        EngineConfig.from_env({"SHEETUI_SHEET_COLS": value})


def test_override_ignores_missing_options() -> None:
    config = EngineConfig(locale="fr").override(locale=None, timezone="UTC")

    assert config.locale == "fr"
    assert config.timezone == "UTC"


def test_log_settings_from_environment() -> None:
    settings = LogSettings.from_env(
        {
            "SHEETUI_LOG_LEVEL": "debug",
            "SHEETUI_LOG_CONSOLE": "yes",
            "SHEETUI_LOG_FILE": "engine.log",
            "SHEETUI_LOG_BUFFER_SIZE": "many",
        }
    )

    assert settings.level == "DEBUG"
    assert settings.console is True
    assert settings.file == "engine.log"
    assert settings.buffer_size == 2048


def test_unknown_telemetry_preset() -> None:
    with pytest.raises(ValueError):
        configure(preset="verbose")


def test_settings_and_preset_are_exclusive() -> None:
    with pytest.raises(ValueError):
        configure(settings=LogSettings(), preset="development")
