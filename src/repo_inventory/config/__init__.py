"""Configuration module for repo-inventory."""

from repo_inventory.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
