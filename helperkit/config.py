"""
load the config from config.yaml and the environment
"""

from pathlib import Path
from typing import Any, Dict

import yaml

from .env import get_env


class Config:
    """Configuration loader that reads from config.yaml and environment variables."""

    # Environment variable -> nested config location
    ENV_MAPPINGS = {
        'HELPERKIT_LOG_LEVEL': ('logging', 'level'),
        'HELPERKIT_LOG_FORMAT': ('logging', 'format'),
        'HELPERKIT_USER_AGENT': ('http', 'user_agent'),
        'HELPERKIT_HTTP_TIMEOUT': ('http', 'timeout'),
        'HELPERKIT_FOLLOW_REDIRECTS': ('http', 'follow_redirects'),
        'HELPERKIT_MAX_REDIRECTS': ('http', 'max_redirects'),
    }

    def __init__(self, config_path: str = None):
        """Initialize configuration loader.

        Args:
            config_path: Path to a YAML file. If None, the config.yaml shipped
                        next to this module is used.
        """
        if config_path is None:
            config_path = Path(__file__).parent / "config.yaml"

        self.config_path = Path(config_path)
        self._config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        try:
            with open(self.config_path, 'r') as f:
                config = yaml.safe_load(f) or {}
        except FileNotFoundError:
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}")

        if not isinstance(config, dict):
            raise ValueError(f"Configuration file must contain a mapping: {self.config_path}")

        return self._apply_env_overrides(config)

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        for env_var, config_path in self.ENV_MAPPINGS.items():
            env_value = get_env(env_var, "")
            if not env_value:
                continue

            current = config
            for key in config_path[:-1]:
                if not isinstance(current.get(key), dict):
                    current[key] = {}
                current = current[key]

            current[config_path[-1]] = self._convert_env_value(env_value)

        return config

    def _convert_env_value(self, value: str):
        """Convert environment variable string to appropriate Python type."""
        lowered = value.lower()
        if lowered in ('true', 'false'):
            return lowered == 'true'

        if lowered in ('none', 'null'):
            return None

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value

    def get(self, *keys, default=None):
        """Get configuration value by nested keys.

        Args:
            *keys: Configuration keys (e.g., 'http', 'user_agent')
            default: Default value if key not found
        """
        current = self._config
        for key in keys:
            if isinstance(current, dict) and key in current:
                current = current[key]
            else:
                return default
        return current

    @property
    def logging(self) -> Dict[str, Any]:
        """Get logging configuration."""
        return self.get('logging', default={})

    @property
    def http(self) -> Dict[str, Any]:
        """Get HTTP requester configuration."""
        return self.get('http', default={})


# Global configuration instance
default_config = Config()
