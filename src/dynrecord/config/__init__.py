"""
Configuration module for dynrecord.

Uses pydantic-settings for environment variable loading.
"""

from dynrecord.config.settings import (
    Settings,
    get_settings,
    reload_settings,
)

__all__ = ["Settings", "get_settings", "reload_settings"]
