"""Configuration management for mayactl"""

import os
from pathlib import Path
from typing import Any, Dict

import yaml


class ConfigError(Exception):
    """Configuration file could not be used"""

    pass


class ConfigManager:
    """Manage mayactl configuration"""

    def __init__(self, config_path: Path):
        self.config_path = config_path

    def load(self) -> Dict[str, Any]:
        """Load configuration from file and environment"""
        config = self._load_defaults()

        if self.config_path.exists():
            try:
                with open(self.config_path) as f:
                    file_config = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                raise ConfigError(f"Cannot read config {self.config_path}: {e}") from e

            if not isinstance(file_config, dict):
                raise ConfigError(f"Config {self.config_path} must be a mapping")
            config = self._merge(config, file_config)

            if not isinstance(config["logging"], dict):
                raise ConfigError(f"Config {self.config_path}: logging must be a mapping")

        config = self._apply_env_overrides(config)

        return config

    def save(self, config: Dict[str, Any]) -> None:
        """Save configuration to file"""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.config_path, "w") as f:
            yaml.dump(config, f, default_flow_style=False)

    def _load_defaults(self) -> Dict[str, Any]:
        return {
            "logging": {
                "level": "info",
                "file": "",
            },
        }

    def _merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Merge two configuration dictionaries"""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge(result[key], value)
            else:
                result[key] = value

        return result

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        if level := os.getenv("MAYA_LOG_LEVEL"):
            config["logging"]["level"] = level

        if log_file := os.getenv("MAYA_LOG_FILE"):
            config["logging"]["file"] = log_file

        return config
