"""
Configuration Loader

Loads and validates configuration from YAML files with environment variable substitution.
"""

import yaml
import os
from pathlib import Path
from typing import Dict, Any, Optional
import copy
import re
import logging


DEFAULT_CONFIG: Dict[str, Any] = {
    'ingestion': {
        'binance': {
            'network': 'mainnet',
            'timeout': 10,
            'limit': 1000
        }
    },
    'normalization': {
        'chain': 'BNB',
        'decimal': 8
    },
    'logging': {
        'level': 'INFO',
        'format': 'text',
        'output': 'stdout'
    }
}


def mergeConfig(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)

    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = mergeConfig(merged[key], value)
        else:
            merged[key] = value

    return merged


class ConfigLoader:
    """
    Loads configuration from YAML files with environment variable support.

    Supports:
    - Environment variable substitution ${VAR_NAME}
    - Merging over built-in defaults
    - Validation
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize config loader.

        Args:
            config_path: Path to configuration file, or None for defaults only
        """
        self.config_path = Path(config_path) if config_path else None
        self.logger = logging.getLogger(self.__class__.__name__)
        self.config: Dict[str, Any] = {}

    def load(self) -> Dict[str, Any]:
        """
        Load configuration from file and merge it over the defaults.

        Returns:
            Configuration dictionary
        """
        if self.config_path is None:
            self.config = copy.deepcopy(DEFAULT_CONFIG)
            return self.config

        if not self.config_path.exists():
            raise FileNotFoundError(f"Config file not found: {self.config_path}")

        try:
            with open(self.config_path, 'r') as f:
                content = f.read()

            content = self._substituteEnvVars(content)

            self.config = mergeConfig(DEFAULT_CONFIG, yaml.safe_load(content) or {})

            self.logger.info(f"Configuration loaded from {self.config_path}")
            return self.config

        except yaml.YAMLError as e:
            self.logger.error(f"Error loading configuration: {e}")
            raise

    def _substituteEnvVars(self, content: str) -> str:
        """
        Substitute environment variables in format ${VAR_NAME}.

        Unset variables are left as-is.
        """
        pattern = r'\$\{([^}]+)\}'

        def replacer(match):
            var_name = match.group(1)
            value = os.environ.get(var_name)
            if value is None:
                self.logger.warning(f"Environment variable not found: {var_name}")
                return match.group(0)
            return value

        return re.sub(pattern, replacer, content)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key.

        Args:
            key: Configuration key (supports dot notation)
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    def validate(self) -> bool:
        required_sections = ['ingestion', 'normalization', 'logging']

        for section in required_sections:
            if section not in self.config:
                self.logger.error(f"Missing required configuration section: {section}")
                return False

        decimal = self.get('normalization.decimal')
        if not isinstance(decimal, int) or decimal < 0:
            self.logger.error(f"Invalid normalization.decimal: {decimal!r}")
            return False

        return True
