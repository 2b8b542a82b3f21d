"""Configuration module."""

from config.settings import (
    DatabaseType,
    LedgerSettings,
    Settings,
    settings,
)

__all__ = [
    "DatabaseType",
    "LedgerSettings",
    "Settings",
    "settings",
]
