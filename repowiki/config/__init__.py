"""Configuration package."""

from repowiki.config.settings import Settings, settings

__all__ = [
    "Settings",
    "settings",
]
