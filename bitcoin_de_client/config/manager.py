"""Configuration management for the Bitcoin.de client."""

import copy
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..api.client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from ..api.credentials import ApiCredentials, CredentialManager
from ..logging.logger import VALID_LEVELS

logger = logging.getLogger(__name__)

API_KEY_ENV_VAR = 'API_KEY'
API_SECRET_ENV_VAR = 'API_SECRET'

DEFAULT_CONFIG: Dict[str, Any] = {
    'api': {
        'base_url': DEFAULT_BASE_URL,
        'timeout': DEFAULT_TIMEOUT,
        'credentials_file': None,
    },
    'logging': {
        'level': 'INFO',
        'log_dir': 'logs',
        'structured': True,
        'console': False,
    },
}


@dataclass
class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    message: str
    config_path: Optional[str] = None
    field_path: Optional[str] = None
    expected_type: Optional[str] = None
    actual_value: Optional[Any] = None

    def __str__(self) -> str:
        return self.message


def _type_name(expected_type) -> str:
    if isinstance(expected_type, tuple):
        return ' or '.join(t.__name__ for t in expected_type)
    return expected_type.__name__


class ConfigManager:
    """Loads and validates YAML configuration and resolves API credentials."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize ConfigManager.

        Args:
            config_path: Path to a YAML config file. Built-in defaults are
                used when None.
        """
        self.config_path = config_path
        self._config: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)
        self._loaded = False

    def load_config(self, config_path: Optional[str] = None) -> Dict[str, Any]:
        """Load configuration from YAML file.

        Sections and fields missing from the file keep their default values.

        Args:
            config_path: Optional path to config file. Uses instance path if not provided.

        Returns:
            Dictionary containing the effective configuration

        Raises:
            ConfigValidationError: If config file is invalid or missing
        """
        path = config_path or self.config_path
        if path is None:
            self._config = copy.deepcopy(DEFAULT_CONFIG)
            self._loaded = True
            return copy.deepcopy(self._config)

        try:
            config_file = Path(path)
            if not config_file.exists():
                raise ConfigValidationError(
                    f"Configuration file not found: {path}",
                    config_path=str(path)
                )

            with open(config_file, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f)

            if config_data is None:
                raise ConfigValidationError(
                    f"Configuration file is empty: {path}",
                    config_path=str(path)
                )

            if not isinstance(config_data, dict):
                raise ConfigValidationError(
                    f"Configuration must be a dictionary, got {type(config_data).__name__}",
                    config_path=str(path),
                    expected_type="dict",
                    actual_value=type(config_data).__name__
                )

            merged = self._merge_with_defaults(config_data, str(path))
            self._validate_api_config(merged['api'], str(path))
            self._validate_logging_config(merged['logging'], str(path))

            self._config = merged
            self._loaded = True
            logger.info(f"Successfully loaded configuration from {path}")
            return copy.deepcopy(merged)

        except yaml.YAMLError as e:
            raise ConfigValidationError(
                f"Invalid YAML syntax in {path}: {str(e)}",
                config_path=str(path)
            )
        except OSError as e:
            raise ConfigValidationError(
                f"Failed to load configuration from {path}: {str(e)}",
                config_path=str(path)
            )

    def _merge_with_defaults(self, config_data: Dict[str, Any], path: str) -> Dict[str, Any]:
        merged = copy.deepcopy(DEFAULT_CONFIG)
        for section, values in config_data.items():
            if section not in merged:
                logger.warning(f"Ignoring unknown configuration section '{section}' in {path}")
                continue
            if values is None:
                continue
            if not isinstance(values, dict):
                raise ConfigValidationError(
                    f"Configuration section '{section}' must be a dictionary in {path}",
                    config_path=path,
                    field_path=section,
                    expected_type="dict",
                    actual_value=type(values).__name__
                )
            merged[section].update(values)
        return merged

    def _check_fields(self, section: str, values: Dict[str, Any], fields: Dict[str, Any], path: str) -> None:
        for field, expected_type in fields.items():
            value = values.get(field)
            if value is None:
                raise ConfigValidationError(
                    f"Missing required {section} config field '{field}' in {path}",
                    config_path=path,
                    field_path=f"{section}.{field}"
                )
            # bool is an int subclass; numeric fields must not accept it
            if not isinstance(value, expected_type) or (isinstance(value, bool) and bool not in
                                                       (expected_type if isinstance(expected_type, tuple)
                                                        else (expected_type,))):
                raise ConfigValidationError(
                    f"{section.capitalize()} config field '{field}' must be of type {_type_name(expected_type)} in {path}",
                    config_path=path,
                    field_path=f"{section}.{field}",
                    expected_type=_type_name(expected_type),
                    actual_value=type(value).__name__
                )

    def _validate_api_config(self, api_config: Dict[str, Any], path: str) -> None:
        """Validate API configuration section."""
        self._check_fields('api', api_config, {
            'base_url': str,
            'timeout': (int, float),
        }, path)

        if not api_config['base_url'].startswith(('https://', 'http://')):
            raise ConfigValidationError(
                f"API config 'base_url' must start with https:// or http:// in {path}",
                config_path=path,
                field_path="api.base_url",
                expected_type="http(s) URL",
                actual_value=api_config['base_url']
            )

        if api_config['timeout'] <= 0:
            raise ConfigValidationError(
                f"API config 'timeout' must be positive in {path}",
                config_path=path,
                field_path="api.timeout",
                expected_type="positive number",
                actual_value=api_config['timeout']
            )

        credentials_file = api_config.get('credentials_file')
        if credentials_file is not None and not isinstance(credentials_file, str):
            raise ConfigValidationError(
                f"API config field 'credentials_file' must be of type str in {path}",
                config_path=path,
                field_path="api.credentials_file",
                expected_type="str",
                actual_value=type(credentials_file).__name__
            )

    def _validate_logging_config(self, logging_config: Dict[str, Any], path: str) -> None:
        """Validate logging configuration section."""
        self._check_fields('logging', logging_config, {
            'level': str,
            'log_dir': str,
            'structured': bool,
            'console': bool,
        }, path)

        if logging_config['level'].upper() not in VALID_LEVELS:
            raise ConfigValidationError(
                f"Logging config 'level' must be one of {list(VALID_LEVELS)} in {path}",
                config_path=path,
                field_path="logging.level",
                expected_type=f"one of {list(VALID_LEVELS)}",
                actual_value=logging_config['level']
            )

    def get_config(self) -> Dict[str, Any]:
        """Get current configuration. Loads if not already loaded."""
        if not self._loaded:
            self.load_config()
        return copy.deepcopy(self._config)

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get specific configuration section."""
        config = self.get_config()
        if section not in config:
            raise ConfigValidationError(f"Configuration section '{section}' not found")
        return config[section]

    def get_credentials(self, api_key: Optional[str] = None, api_secret: Optional[str] = None,
                        password: Optional[str] = None) -> ApiCredentials:
        """Resolve API credentials.

        Explicit values win, then the API_KEY/API_SECRET environment
        variables, then the encrypted file named by api.credentials_file.

        Args:
            api_key: Explicit API key
            api_secret: Explicit API secret
            password: Password for the encrypted credentials file

        Returns:
            ApiCredentials: Resolved key/secret pair

        Raises:
            ConfigValidationError: If no complete key/secret pair is available
        """
        api_key = api_key or os.getenv(API_KEY_ENV_VAR)
        api_secret = api_secret or os.getenv(API_SECRET_ENV_VAR)
        if api_key and api_secret:
            return ApiCredentials(api_key=api_key, api_secret=api_secret)

        credentials_file = self.get_section('api').get('credentials_file')
        if credentials_file:
            logger.debug(f"Reading credentials from {credentials_file}")
            return CredentialManager(password).load(credentials_file)

        missing = [name for name, value in ((API_KEY_ENV_VAR, api_key), (API_SECRET_ENV_VAR, api_secret))
                   if not value]
        raise ConfigValidationError(
            f"Missing API credentials: set {' and '.join(missing)} or configure api.credentials_file",
            config_path=self.config_path,
            field_path="api.credentials_file"
        )
