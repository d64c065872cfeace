"""
Configuration management package for Lyrics Finder

Settings are loaded once into a module-level singleton from YAML files and
environment variables:

    from lyrics_finder.config import get_settings

    settings = get_settings()
    timeout = settings.lrclib.timeout

Configuration Sources (highest precedence first):
1. Environment variables (including a local `.env` file)
2. YAML configuration file
3. Dataclass defaults
"""

from .settings import get_settings, reload_settings, Settings

__all__ = [
    'get_settings',      # Factory function for singleton settings access
    'reload_settings',   # Function to reload settings from files
    'Settings',          # Settings class for direct instantiation
]
