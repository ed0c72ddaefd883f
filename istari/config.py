#!/usr/bin/env python3
"""
Istari Configuration Management System
Handles configuration files, environment variables, and defaults
"""

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict
from .exceptions import ConfigurationError
from .logger import logger


class ConfigManager:
    """Manage Istari configuration"""

    _instance = None
    _initialized = False

    # Default configuration
    DEFAULT_CONFIG = {
        "tool": {
            "name": "Istari"
        },
        "session": {
            "history_size": 100,
            "async_timeout": 0,
            "tick_rate_ms": 100
        },
        "ui": {
            "scroll_page_size": 10,
            "output_height": 15
        },
        "logging": {
            "level": "INFO",
            "directory": ".istari/logs",
            "max_size_mb": 10,
            "backup_count": 5
        }
    }

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if ConfigManager._initialized:
            return

        self.config_dir = Path.home() / ".istari"
        self.config_file = self.config_dir / "config.json"

        # Load configuration
        self.config = self._load_config()

        ConfigManager._initialized = True

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from files and environment"""
        config = copy.deepcopy(self.DEFAULT_CONFIG)

        # Load from config file if exists
        if self.config_file.exists():
            try:
                with open(self.config_file, 'r') as f:
                    file_config = json.load(f)
                    self._deep_merge(config, file_config)
                    logger.info(f"Loaded configuration from {self.config_file}")
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Failed to load config file: {e}")

        # Load from environment variables
        self._load_from_env(config)

        return config

    def _deep_merge(self, base: Dict, overlay: Dict):
        """Deep merge overlay config into base"""
        for key, value in overlay.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _load_from_env(self, config: Dict):
        """Load configuration from environment variables"""
        # Pattern: ISTARI_SECTION_KEY=value, e.g. ISTARI_SESSION_HISTORY_SIZE=50
        for env_key, env_value in os.environ.items():
            if env_key.startswith("ISTARI_"):
                parts = env_key[7:].lower().split("_", 1)
                if len(parts) == 2:
                    section, key = parts
                    if section in config:
                        config[section][key] = self._parse_env_value(env_value)

    @staticmethod
    def _parse_env_value(value: str) -> Any:
        """Parse environment variable value to appropriate type"""
        if value.lower() in ('true', 'yes'):
            return True
        elif value.lower() in ('false', 'no'):
            return False
        elif value.isdigit():
            return int(value)
        else:
            try:
                return float(value)
            except ValueError:
                return value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value with dot notation

        Args:
            key: Configuration key (e.g., "session.history_size")
            default: Default value if key not found

        Returns:
            Configuration value
        """
        parts = key.split(".")
        value = self.config

        for part in parts:
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return default

        return value

    def set(self, key: str, value: Any):
        """
        Set configuration value with dot notation

        Args:
            key: Configuration key (e.g., "ui.scroll_page_size")
            value: Value to set
        """
        parts = key.split(".")
        config = self.config

        # Navigate to parent dict
        for part in parts[:-1]:
            if part not in config:
                config[part] = {}
            config = config[part]

        config[parts[-1]] = value
        logger.debug(f"Configuration updated: {key} = {value}")

    def save(self) -> Path:
        """
        Save configuration to file

        Returns:
            Path to saved configuration file
        """
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, 'w') as f:
                json.dump(self.config, f, indent=2)
            logger.info(f"Configuration saved to {self.config_file}")
            return self.config_file
        except OSError as e:
            raise ConfigurationError(f"Failed to save configuration: {e}")

    def reset_to_defaults(self):
        """Reset configuration to defaults"""
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)
        logger.info("Configuration reset to defaults")

    def validate(self):
        """Validate configuration"""
        history_size = self.get("session.history_size")
        if not isinstance(history_size, int) or history_size < 1:
            raise ConfigurationError("session.history_size must be a positive integer",
                                     "session.history_size")

        timeout = self.get("session.async_timeout")
        if timeout is not None and (not isinstance(timeout, (int, float)) or timeout < 0):
            raise ConfigurationError("session.async_timeout must be 0 or greater",
                                     "session.async_timeout")

        if self.get("session.tick_rate_ms", 0) <= 0:
            raise ConfigurationError("session.tick_rate_ms must be greater than 0",
                                     "session.tick_rate_ms")

        if self.get("ui.scroll_page_size", 0) <= 0:
            raise ConfigurationError("ui.scroll_page_size must be greater than 0",
                                     "ui.scroll_page_size")

        logger.debug("Configuration validation passed")

    def to_dict(self) -> Dict[str, Any]:
        """Get entire configuration as dictionary"""
        return copy.deepcopy(self.config)

    def print_config(self, console=None):
        """Print configuration in readable format"""
        from rich.console import Console
        from rich.syntax import Syntax

        console = console or Console()
        config_str = json.dumps(self.config, indent=2)
        syntax = Syntax(config_str, "json", theme="monokai", line_numbers=False)
        console.print(syntax)


# Singleton instance
config = ConfigManager()
