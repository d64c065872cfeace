"""
Configuration management for Lyrics Finder

This module handles loading, validation, and management of application settings
from YAML files and environment variables. Settings are grouped into dataclass
sections:
- LRCLIB remote service settings (endpoint, client identifier, timeout)
- Library scan settings (root directory, audio extensions, sidecar extension)
- Logging settings (level, file output, rotation, colors)

Values are applied in order of precedence: environment variables override the
YAML file, which overrides the dataclass defaults.
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass, field
from dotenv import load_dotenv

from .. import __user_agent__

# Load environment variables from .env file if present
load_dotenv()


@dataclass
class LrcLibConfig:
    """
    LRCLIB remote service configuration

    The user agent identifies this client to LRCLIB on every request, as the
    service asks of its API consumers. The timeout applies to each request as
    a whole; the resolver itself imposes none.
    """
    base_url: str = "https://lrclib.net"
    user_agent: str = __user_agent__
    timeout: int = 30


@dataclass
class ScanConfig:
    """
    Library scan configuration

    Controls where the library walk starts, which files count as audio
    tracks (matched case-insensitively on extension) and which extension the
    lyrics sidecar files use.
    """
    directory: str = "."
    audio_extensions: list = field(default_factory=lambda: [".flac"])
    lyrics_extension: str = ".lrc"


@dataclass
class LoggingConfig:
    """
    Logging configuration and output settings

    Console output is kept short during normal runs; the `--debug` flag
    switches the console to full diagnostic output. A log file, when set,
    always receives everything.
    """
    level: str = "INFO"
    file: str = ""
    max_size: str = "10MB"
    backup_count: int = 3
    colored_output: bool = True


class Settings:
    """
    Main settings class that manages all configuration

    Loads settings from the first YAML file found, then applies environment
    variable overrides. Sections are exposed as attributes:

        settings = get_settings()
        settings.lrclib.base_url
        settings.scan.audio_extensions
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize settings from config file and environment variables

        Args:
            config_path: Path to custom config file, if None uses default locations
        """
        self.config_path = config_path
        self.config_dir = Path.home() / ".lyrics-finder"

        # Initialize all configuration objects with default values
        self.lrclib = LrcLibConfig()
        self.scan = ScanConfig()
        self.logging = LoggingConfig()

        # Load configuration from various sources in order of precedence
        self._load_config()
        self._load_environment_variables()

    def _load_config(self) -> None:
        """
        Load configuration from YAML file

        Searches for configuration files in multiple locations in order of
        precedence. The first file found is used.
        """
        config_paths = [
            self.config_path,
            self.config_dir / "config.yaml",
            Path("config/config.yaml"),
            Path("config.yaml")
        ]

        config_data = {}
        for path in config_paths:
            if path and Path(path).exists():
                try:
                    with open(path, 'r', encoding='utf-8') as f:
                        config_data = yaml.safe_load(f) or {}
                    break
                except Exception as e:
                    print(f"Warning: Failed to load config from {path}: {e}")

        self._apply_config(config_data)

    def _apply_config(self, config_data: Dict[str, Any]) -> None:
        """
        Apply configuration data to dataclass instances

        Only attributes that exist on the target dataclass are updated, so
        unknown keys in the YAML file are ignored.

        Args:
            config_data: Dictionary containing configuration sections
        """
        config_mapping = {
            'lrclib': self.lrclib,
            'scan': self.scan,
            'logging': self.logging,
        }

        for section_name, section_data in config_data.items():
            if section_name in config_mapping and isinstance(section_data, dict):
                config_obj = config_mapping[section_name]
                for key, value in section_data.items():
                    if hasattr(config_obj, key):
                        setattr(config_obj, key, value)

    def _load_environment_variables(self) -> None:
        """Apply environment variable overrides on top of file configuration"""
        env_mappings = {
            'LRCLIB_BASE_URL': lambda v: setattr(self.lrclib, 'base_url', v),
            'LRCLIB_USER_AGENT': lambda v: setattr(self.lrclib, 'user_agent', v),
            'LYRICS_FINDER_DIR': lambda v: setattr(self.scan, 'directory', v),
            'LYRICS_FINDER_LOG_FILE': lambda v: setattr(self.logging, 'file', v),
        }

        for env_var, setter in env_mappings.items():
            value = os.getenv(env_var)
            if value:
                setter(value)

    def get_scan_directory(self) -> Path:
        """
        Get the expanded scan root directory

        Returns:
            Path object for the library root
        """
        return Path(self.scan.directory).expanduser()

    def get_config_directory(self) -> Path:
        """Get the expanded config directory path"""
        return self.config_dir

    def validate(self) -> bool:
        """
        Validate current configuration

        Returns:
            True if configuration is valid, False otherwise
        """
        errors = []

        # Validate remote endpoint
        if not str(self.lrclib.base_url).startswith(('http://', 'https://')):
            errors.append(f"Invalid LRCLIB base URL: {self.lrclib.base_url}")

        if not isinstance(self.lrclib.timeout, (int, float)) or self.lrclib.timeout <= 0:
            errors.append(f"Invalid request timeout: {self.lrclib.timeout}")

        # Validate scan extensions
        if not self.scan.audio_extensions:
            errors.append("At least one audio extension is required")
        for extension in self.scan.audio_extensions:
            if not str(extension).startswith('.'):
                errors.append(f"Audio extension must start with a dot: {extension}")

        if not str(self.scan.lyrics_extension).startswith('.'):
            errors.append(f"Lyrics extension must start with a dot: {self.scan.lyrics_extension}")

        if errors:
            print("Configuration validation errors:")
            for error in errors:
                print(f"  - {error}")
            return False

        return True

    def __str__(self) -> str:
        sections = [
            f"LRCLIB: {self.lrclib.base_url}",
            f"Directory: {self.scan.directory}",
            f"Extensions: {', '.join(self.scan.audio_extensions)}",
        ]
        return f"Settings({', '.join(sections)})"


# Global settings instance for singleton pattern
settings = Settings()


def get_settings() -> Settings:
    """
    Get the global settings instance

    Returns:
        The global Settings instance
    """
    return settings


def reload_settings(config_path: Optional[str] = None) -> Settings:
    """
    Reload settings from configuration files

    Creates a new settings instance with updated configuration from files
    and environment variables.

    Args:
        config_path: Optional path to specific config file

    Returns:
        New Settings instance with reloaded configuration
    """
    global settings
    settings = Settings(config_path)
    return settings
