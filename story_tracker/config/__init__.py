"""Configuration loading for the story tracker.

Configuration is loaded from TOML files with environment variable overrides.

Usage:
    from story_tracker.config import get_settings

    settings = get_settings()
    depth = settings.tracker.update_depth
"""

from functools import lru_cache

from story_tracker.config.loader import load_config
from story_tracker.config.settings import Settings, set_toml_config


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the singleton settings instance.

    The result is cached for the lifetime of the process.
    Call `get_settings.cache_clear()` to reload configuration.
    """
    set_toml_config(load_config())
    return Settings()


def reload_settings() -> Settings:
    """Clear the settings cache and reload configuration."""
    get_settings.cache_clear()
    return get_settings()


__all__ = ["get_settings", "reload_settings", "Settings"]
