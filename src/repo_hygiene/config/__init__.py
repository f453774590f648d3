"""Settings and logging configuration."""

from repo_hygiene.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
