"""Configuration manager for loading and validating YAML configurations."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..core.exceptions import ValidationError
from .models import ClientSettings, LoggingConfig, ProxmoxConfig


logger = logging.getLogger(__name__)

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off"}


class ConfigurationError(Exception):
    """Configuration validation or loading error."""
    pass


class ConfigManager:
    """Manages configuration loading and validation."""

    DEFAULT_CONFIG_PATHS = [
        "/etc/pve-api-client/config.yaml",
        "~/.config/pve-api-client/config.yaml",
        "./config.yaml",
    ]

    def __init__(self, config_path: Optional[str] = None) -> None:
        """Initialize configuration manager.

        Args:
            config_path: Path to configuration file. If None, searches default paths.
        """
        self.config_path = self._find_config_file(config_path)
        self._config: Optional[ClientSettings] = None

    def _find_config_file(self, config_path: Optional[str] = None) -> Path:
        """Find configuration file path.

        An explicit path is authoritative: when it does not exist the default
        locations are not consulted.

        Args:
            config_path: Explicit path to use.

        Returns:
            Path to configuration file.

        Raises:
            ConfigurationError: If no configuration file is found.
        """
        paths_to_check = [config_path] if config_path else list(self.DEFAULT_CONFIG_PATHS)

        for path_str in paths_to_check:
            path = Path(path_str).expanduser()
            if path.exists() and path.is_file():
                logger.info(f"Found configuration file: {path}")
                return path

        raise ConfigurationError(
            f"No configuration file found. Searched paths: {paths_to_check}"
        )

    def load_config(self) -> ClientSettings:
        """Load and validate configuration from file.

        Returns:
            Validated configuration object.

        Raises:
            ConfigurationError: If configuration is invalid or cannot be loaded.
        """
        try:
            logger.info(f"Loading configuration from {self.config_path}")

            with open(self.config_path, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f)

            if not isinstance(config_data, dict):
                raise ConfigurationError("Configuration file must contain a YAML object")

            config_data = self._substitute_environment_variables(config_data)

            self._config = self._parse_config(config_data)

            logger.info("Configuration loaded successfully")
            return self._config

        except ConfigurationError:
            raise
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax: {e}")
        except FileNotFoundError:
            raise ConfigurationError(f"Configuration file not found: {self.config_path}")
        except OSError as e:
            raise ConfigurationError(f"Failed to load configuration: {e}")

    def _substitute_environment_variables(self, data: Any) -> Any:
        """Recursively substitute environment variables in configuration data.

        Args:
            data: Configuration data structure.

        Returns:
            Configuration data with environment variables substituted.
        """
        if isinstance(data, dict):
            return {key: self._substitute_environment_variables(value) for key, value in data.items()}
        elif isinstance(data, list):
            return [self._substitute_environment_variables(item) for item in data]
        elif isinstance(data, str) and data.startswith('${') and data.endswith('}'):
            env_var = data[2:-1]
            default_value = None

            # Handle ${VAR:default} syntax
            if ':' in env_var:
                env_var, default_value = env_var.split(':', 1)

            return os.getenv(env_var, default_value)
        else:
            return data

    def _parse_config(self, config_data: Dict[str, Any]) -> ClientSettings:
        """Parse configuration dictionary into typed objects.

        Args:
            config_data: Raw configuration dictionary.

        Returns:
            Validated configuration object.

        Raises:
            ConfigurationError: If configuration is invalid.
        """
        try:
            proxmox_data = config_data.get('proxmox') or {}
            if not proxmox_data:
                raise ConfigurationError("Proxmox configuration is required")

            proxmox_config = ProxmoxConfig(**self._coerce_proxmox_values(proxmox_data))

            logging_data = config_data.get('logging') or {}
            logging_config = LoggingConfig(**logging_data)

            return ClientSettings(proxmox=proxmox_config, logging=logging_config)

        except TypeError as e:
            raise ConfigurationError(f"Invalid configuration parameter: {e}")
        except (ValueError, ValidationError) as e:
            raise ConfigurationError(f"Invalid configuration value: {e}")

    @staticmethod
    def _coerce_proxmox_values(proxmox_data: Dict[str, Any]) -> Dict[str, Any]:
        """Convert environment-substituted strings for typed fields.

        Args:
            proxmox_data: Raw ``proxmox`` section.

        Returns:
            Copy of the section with ``port``/``timeout`` as ints and
            ``verify_ssl`` as a bool where they arrived as strings.
        """
        coerced = dict(proxmox_data)

        for key in ('port', 'timeout'):
            value = coerced.get(key)
            if isinstance(value, str) and value.strip().isdigit():
                coerced[key] = int(value)

        verify_ssl = coerced.get('verify_ssl')
        if isinstance(verify_ssl, str):
            lowered = verify_ssl.strip().lower()
            if lowered in _TRUE_STRINGS:
                coerced['verify_ssl'] = True
            elif lowered in _FALSE_STRINGS:
                coerced['verify_ssl'] = False

        return coerced

    def reload_config(self) -> ClientSettings:
        """Reload configuration from file.

        Returns:
            Reloaded configuration object.
        """
        logger.info("Reloading configuration")
        return self.load_config()

    def get_config(self) -> Optional[ClientSettings]:
        """Get current configuration.

        Returns:
            Current configuration or None if not loaded.
        """
        return self._config
