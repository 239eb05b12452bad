"""
Configuration management system for chakrabeats.

This module provides configuration file management and default settings
for the synthesis engine and the audio output device.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union
from dataclasses import dataclass, asdict
from datetime import datetime

from .frequency import Convention, FrequencyLimits


@dataclass
class EngineConfig:
    """Frequency bounds, convention and defaults for the synthesis engine."""

    convention: str = Convention.BASE_OFFSET.value
    floor_hz: float = 20.0
    ceiling_hz: float = 2000.0
    min_offset_hz: float = 0.1
    max_offset_hz: float = 50.0
    default_gain: float = 0.3
    default_base_hz: float = 440.0
    default_offset_hz: float = 4.0

    def limits(self) -> FrequencyLimits:
        return FrequencyLimits(
            floor=self.floor_hz,
            ceiling=self.ceiling_hz,
            min_offset=self.min_offset_hz,
            max_offset=self.max_offset_hz,
        )


@dataclass
class OutputConfig:
    """Configuration for the audio output device."""

    sample_rate: int = 48000
    block_size: int = 512
    device: Optional[Union[int, str]] = None
    fft_size: int = 256


@dataclass
class AppConfig:
    """Main application configuration."""

    engine: EngineConfig
    output: OutputConfig
    version: str = "0.1.0"
    last_updated: str = ""

    def __post_init__(self) -> None:
        if not self.last_updated:
            self.last_updated = datetime.now().isoformat()


def default_config() -> AppConfig:
    return AppConfig(engine=EngineConfig(), output=OutputConfig())


def validate_app_config(config: AppConfig) -> tuple[bool, list[str]]:
    """
    Check a configuration for values the engine cannot run with.

    Returns:
        Tuple of (is_valid, list_of_issues)
    """
    issues = []
    engine = config.engine
    output = config.output

    if engine.convention not in [c.value for c in Convention]:
        issues.append(
            f"Invalid convention: must be one of {', '.join(c.value for c in Convention)}"
        )

    try:
        if engine.floor_hz <= 0:
            issues.append("Invalid floor_hz: must be positive")

        if engine.ceiling_hz <= engine.floor_hz:
            issues.append("Invalid ceiling_hz: must be greater than floor_hz")

        if not 0 < engine.min_offset_hz <= engine.max_offset_hz:
            issues.append("Invalid offset range: need 0 < min_offset_hz <= max_offset_hz")

        if not 0.0 <= engine.default_gain <= 1.0:
            issues.append("Invalid default_gain: must be between 0.0 and 1.0")

        if output.sample_rate <= 0:
            issues.append("Invalid sample_rate: must be positive")

        if output.block_size <= 0:
            issues.append("Invalid block_size: must be positive")

        if output.fft_size < 2 or output.fft_size & (output.fft_size - 1):
            issues.append("Invalid fft_size: must be a power of two")
    except TypeError as e:
        issues.append(f"Invalid value type: {e}")

    return len(issues) == 0, issues


class ConfigManager:
    """Manages application configuration."""

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Initialize the configuration manager.

        Args:
            config_dir: Directory to store configuration files (defaults to user config)
        """
        if config_dir is None:
            # Use standard user config directory
            if os.name == "nt":  # Windows
                base_dir = Path(os.environ.get("APPDATA", ""))
            else:  # Unix-like systems
                base_dir = Path.home() / ".config"

            config_dir = base_dir / "chakrabeats"

        self.config_dir = Path(config_dir)
        self.config_file = self.config_dir / "config.json"

        # Ensure config directory exists
        self.config_dir.mkdir(parents=True, exist_ok=True)

        # Load or create default configuration
        self._config = self._load_or_create_config()

    def _load_or_create_config(self) -> AppConfig:
        """Load existing configuration or create default configuration."""
        if self.config_file.exists():
            try:
                with open(self.config_file, "r") as f:
                    data = json.load(f)
                return self._dict_to_config(data)
            except (json.JSONDecodeError, KeyError, TypeError, AttributeError) as e:
                logging.warning(f"Invalid configuration file, creating default: {e}")

        config = default_config()
        self.save_config(config)
        return config

    def _dict_to_config(self, data: Dict[str, Any]) -> AppConfig:
        """Convert dictionary to AppConfig object."""
        return AppConfig(
            engine=EngineConfig(**data.get("engine", {})),
            output=OutputConfig(**data.get("output", {})),
            version=data.get("version", "0.1.0"),
            last_updated=data.get("last_updated", ""),
        )

    def _config_to_dict(self, config: AppConfig) -> Dict[str, Any]:
        """Convert AppConfig object to dictionary."""
        return {
            "engine": asdict(config.engine),
            "output": asdict(config.output),
            "version": config.version,
            "last_updated": config.last_updated,
        }

    def get_config(self) -> AppConfig:
        """Get the current configuration."""
        return self._config

    def save_config(self, config: Optional[AppConfig] = None) -> None:
        """
        Save configuration to file.

        Args:
            config: Configuration to save (uses current config if None)
        """
        if config is None:
            config = self._config

        config.last_updated = datetime.now().isoformat()

        with open(self.config_file, "w") as f:
            json.dump(self._config_to_dict(config), f, indent=2)

        self._config = config

    def get_value(self, key: str) -> Any:
        """
        Look up a dotted configuration key such as 'engine.floor_hz'.

        Raises:
            KeyError: If the key does not exist
        """
        current: Any = self._config_to_dict(self._config)
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                raise KeyError(key)
            current = current[part]
        return current

    def update_config(self, **kwargs: Any) -> None:
        """
        Update configuration with new values.

        Args:
            **kwargs: Configuration updates, dotted keys allowed ('output.sample_rate')
        """
        config_dict = self._config_to_dict(self._config)

        for key, value in kwargs.items():
            if "." in key:
                parts = key.split(".")
                current = config_dict
                for part in parts[:-1]:
                    if part not in current:
                        current[part] = {}
                    current = current[part]
                current[parts[-1]] = value
            else:
                config_dict[key] = value

        self._config = self._dict_to_config(config_dict)
        self.save_config()

    def reset_config(self) -> None:
        """Reset configuration to defaults."""
        self.save_config(default_config())

    def validate_config(self) -> tuple[bool, list[str]]:
        """
        Validate the current configuration.

        Returns:
            Tuple of (is_valid, list_of_issues)
        """
        return validate_app_config(self._config)

    def get_config_path(self) -> Path:
        """Get the path to the configuration file."""
        return self.config_file

    def get_config_dir(self) -> Path:
        """Get the configuration directory path."""
        return self.config_dir


def get_config_manager() -> ConfigManager:
    """Get a configuration manager for the user config directory."""
    return ConfigManager()
