"""
Configuration module for scrutinbase.

設定は settings.py に集約し、DB接続とロギングはここから公開する。
"""

from src.infrastructure.config.async_database import AsyncDatabase, to_async_url
from src.infrastructure.config.logging_config import configure_logging
from src.infrastructure.config.settings import (
    Settings,
    find_env_file,
    get_settings,
    reload_settings,
    settings,
)


__all__ = [
    "Settings",
    "settings",
    "get_settings",
    "reload_settings",
    "find_env_file",
    "AsyncDatabase",
    "to_async_url",
    "configure_logging",
]
