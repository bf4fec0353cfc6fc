# Core modules

from .config import Settings, get_settings, settings

__all__ = ["Settings", "get_settings", "settings"]
