"""Configuration module."""

from src.config.logging import bound_market_key, configure_logging, get_logger
from src.config.settings import (
    HistorySettings,
    Settings,
    StorageSettings,
    get_settings,
    reset_settings,
)

__all__ = [
    "Settings",
    "StorageSettings",
    "HistorySettings",
    "get_settings",
    "reset_settings",
    "configure_logging",
    "get_logger",
    "bound_market_key",
]
