"""Application settings."""

from .settings import (
    CatalogSettings,
    ExecutionSettings,
    LoggingSettings,
    Settings,
    StorageSettings,
    load_settings,
)

__all__ = [
    "CatalogSettings",
    "ExecutionSettings",
    "LoggingSettings",
    "Settings",
    "StorageSettings",
    "load_settings",
]
