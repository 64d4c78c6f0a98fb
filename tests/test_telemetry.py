from __future__ import annotations

import pytest

from gap_editor.runtime import telemetry


def test_load_settings_defaults() -> None:
    settings = telemetry.load_settings({})

    assert settings == telemetry.TelemetrySettings()


def test_load_settings_reads_prefixed_variables() -> None:
    settings = telemetry.load_settings(
        {
            "GAP_EDITOR_LOG_LEVEL": "debug",
            "GAP_EDITOR_NO_COLOR": "1",
            "GAP_EDITOR_LOG_JSON": "yes",
            "GAP_EDITOR_LOG_BUFFER_SIZE": "not-a-number",
            "GAP_EDITOR_LOGGER": "editor",
        }
    )

    assert settings.level == "DEBUG"
    assert settings.colored is False
    assert settings.json_format is True
    assert settings.buffer_size == telemetry.DEFAULT_BUFFER_SIZE
    assert settings.logger_name == "editor"


def test_configure_rejects_unknown_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="verbose")


def test_span_reraises_and_records_failure() -> None:
    with pytest.raises(KeyError):
        with telemetry.span("test::span", metadata={"case": "failure"}):
            raise KeyError("boom")
