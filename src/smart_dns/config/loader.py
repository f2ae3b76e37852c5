"""Configuration loader for the smart DNS resolver.

This module handles loading configuration from files and environment
variables, with validation.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .schema import LoggingConfig, ResolverConfig, SmartDnsConfig, create_default_config

ENV_PREFIX = "SMART_DNS_"


class ConfigLoader:
    """Configuration loader merging defaults, file and environment."""

    def __init__(self, config_file: Optional[str] = None):
        """Initialize configuration loader.

        Args:
            config_file: Path to configuration file (YAML or JSON)
        """
        self.config_file = config_file
        self._config: Optional[SmartDnsConfig] = None

    def load_config(self) -> SmartDnsConfig:
        """Load configuration from file and environment variables.

        Returns:
            Loaded and validated configuration

        Raises:
            FileNotFoundError: If config file is specified but not found
            ValueError: If configuration is invalid
            yaml.YAMLError: If YAML parsing fails
            json.JSONDecodeError: If JSON parsing fails
        """
        config_dict = self._config_to_dict(create_default_config())

        if self.config_file:
            file_config = self._load_from_file(self.config_file)
            config_dict = self._merge_configs(config_dict, file_config)

        config_dict = self._apply_env_overrides(config_dict)

        self._config = self._dict_to_config(config_dict)

        return self._config

    def get_config(self) -> Optional[SmartDnsConfig]:
        """Get current configuration."""
        return self._config

    def _load_from_file(self, file_path: str) -> Dict[str, Any]:
        """Load configuration from YAML or JSON file.

        Args:
            file_path: Path to configuration file

        Returns:
            Configuration dictionary
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        with open(path, "r", encoding="utf-8") as f:
            content = f.read()

        if path.suffix.lower() in [".yaml", ".yml"]:
            result = yaml.safe_load(content)
        elif path.suffix.lower() == ".json":
            result = json.loads(content)
        else:
            # Try YAML first, then JSON
            try:
                result = yaml.safe_load(content)
            except yaml.YAMLError:
                try:
                    result = json.loads(content)
                except json.JSONDecodeError:
                    raise ValueError(f"Unsupported file format: {file_path}")

        return result if isinstance(result, dict) else {}

    def _config_to_dict(self, config: SmartDnsConfig) -> Dict[str, Any]:
        """Convert configuration object to dictionary."""
        return {
            "resolver": {
                "provider": config.resolver.provider,
                "servers": config.resolver.servers,
                "result_order": config.resolver.result_order,
                "ttl_ms": config.resolver.ttl_ms,
                "max_entries": config.resolver.max_entries,
                "timeout": config.resolver.timeout,
            },
            "logging": {
                "level": config.logging.level,
                "format": config.logging.format,
                "file": config.logging.file,
                "max_size_mb": config.logging.max_size_mb,
                "backup_count": config.logging.backup_count,
            },
        }

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> SmartDnsConfig:
        """Convert dictionary to configuration object.

        Raises:
            ValueError: If configuration is invalid
        """
        try:
            resolver_config = ResolverConfig(**(config_dict.get("resolver") or {}))
            logging_config = LoggingConfig(**(config_dict.get("logging") or {}))
        except TypeError as e:
            raise ValueError(f"Invalid configuration: {e}") from e

        return SmartDnsConfig(resolver=resolver_config, logging=logging_config)

    def _merge_configs(
        self, base: Dict[str, Any], override: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Merge two configuration dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result

    def _apply_env_overrides(self, config_dict: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to configuration.

        Environment variables use the format SMART_DNS_<SECTION>_<KEY>
        For example: SMART_DNS_RESOLVER_TTL_MS=60000
        """
        for env_key, env_value in os.environ.items():
            if not env_key.startswith(ENV_PREFIX):
                continue

            key_parts = env_key[len(ENV_PREFIX) :].lower().split("_")
            if len(key_parts) < 2:
                continue

            section = key_parts[0]
            config_key = "_".join(key_parts[1:])

            if not isinstance(config_dict.get(section), dict):
                continue

            if config_key == "servers":
                # Comma-separated list
                value = [s.strip() for s in env_value.split(",") if s.strip()]
                # An explicit server list replaces any provider from the file
                config_dict[section]["provider"] = None
            elif config_key == "provider":
                value = env_value
                config_dict[section]["servers"] = None
            else:
                value = self._convert_env_value(env_value)

            config_dict[section][config_key] = value

        return config_dict

    def _convert_env_value(self, value: str) -> Any:
        """Convert environment variable value to appropriate Python type."""
        if value.lower() in ("true", "yes", "on"):
            return True
        elif value.lower() in ("false", "no", "off"):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value


def load_config_from_file(config_file: Optional[str] = None) -> SmartDnsConfig:
    """Convenience function to load configuration.

    Args:
        config_file: Path to configuration file

    Returns:
        Loaded configuration
    """
    return ConfigLoader(config_file).load_config()
