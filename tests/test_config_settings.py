"""Regression tests for runtime settings loading and logging configuration."""

from __future__ import annotations

import io
import logging

import pytest

from balanzia.config import (
    DEFAULT_INGESTION_DATE_FORMATS,
    AppSettings,
    SettingsLoadError,
    config_configure_logging,
    config_load_database_url,
    config_load_settings,
)
from balanzia.config import logging_setup


def test_config_load_settings_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Environment variables override defaults with case-insensitive names.

    Returns:
        None: Assertions validate settings values.

    Raises:
        AssertionError: Raised when loaded values diverge.
    """

    monkeypatch.setenv("DEFAULT_ACCOUNT_LABEL", "  Main Card ")
    monkeypatch.setenv("INGESTION_DATE_FORMATS", '["%d/%m/%Y", " "]')
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = config_load_settings()

    assert settings.default_account_label == "Main Card"
    assert settings.ingestion_date_formats == ("%d/%m/%Y",)
    assert settings.log_level == "DEBUG"


def test_config_defaults_cover_ingestion_and_paging() -> None:
    settings = AppSettings()

    assert settings.default_account_label == "Default"
    assert settings.ingestion_date_formats == DEFAULT_INGESTION_DATE_FORMATS
    assert settings.ingestion_max_upload_bytes == 10 * 1024 * 1024
    assert (settings.api_default_limit, settings.api_max_limit) == (50, 200)


@pytest.mark.parametrize(
    ("variable_name", "variable_value"),
    [
        ("API_MAX_LIMIT", "10"),
        ("LOG_LEVEL", "chatty"),
        ("APPLICATION_PORT", "70000"),
        ("DEFAULT_ACCOUNT_LABEL", "   "),
    ],
)
def test_config_load_settings_wraps_validation_errors(
    monkeypatch: pytest.MonkeyPatch,
    variable_name: str,
    variable_value: str,
) -> None:
    monkeypatch.setenv(variable_name, variable_value)

    with pytest.raises(SettingsLoadError):
        config_load_settings()


def test_config_load_database_url_rejects_blank_value(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "   ")

    with pytest.raises(SettingsLoadError):
        config_load_database_url()


def test_config_configure_logging_attaches_one_handler(monkeypatch: pytest.MonkeyPatch) -> None:
    """Repeated configuration keeps a single stream handler on the package logger."""

    package_logger = logging.getLogger("balanzia")
    original_handlers = list(package_logger.handlers)
    original_level = package_logger.level
    original_propagate = package_logger.propagate
    monkeypatch.setattr(logging_setup, "_configured", False)
    stream = io.StringIO()

    try:
        config_configure_logging(level="info", stream=stream)
        config_configure_logging(level="debug", stream=io.StringIO())
        logging.getLogger("balanzia.jobs.ingestion_orchestrator").info("ingestion completed new_count=%s", 3)

        stream_handlers = [handler for handler in package_logger.handlers if isinstance(handler, logging.StreamHandler)]
        assert len(stream_handlers) == 1
        assert package_logger.level == logging.INFO
        assert "ingestion completed new_count=3" in stream.getvalue()
    finally:
        package_logger.handlers = original_handlers
        package_logger.setLevel(original_level)
        package_logger.propagate = original_propagate


def test_config_configure_logging_rejects_unknown_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(logging_setup, "_configured", False)

    with pytest.raises(ValueError):
        config_configure_logging(level="chatty")
