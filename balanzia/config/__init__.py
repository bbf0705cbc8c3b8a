"""Configuration package for runtime settings, logging and startup validation."""

from .logging_setup import config_configure_logging
from .settings import (
    DEFAULT_INGESTION_DATE_FORMATS,
    AppSettings,
    SettingsLoadError,
    config_load_database_url,
    config_load_settings,
)

__all__ = [
    "AppSettings",
    "DEFAULT_INGESTION_DATE_FORMATS",
    "SettingsLoadError",
    "config_configure_logging",
    "config_load_settings",
    "config_load_database_url",
]
