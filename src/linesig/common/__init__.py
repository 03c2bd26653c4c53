"""Common utilities for linesig."""

from linesig.common.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
