"""
Configuration loading and validation for Schema Dumper.
"""

import logging
import os
import re
from typing import Any, Optional

import yaml

from .errors import ConfigError, ConfigErrorKind
from .models import DEFAULT_EXTRA_FLAGS, DEFAULT_ROW_FILTER, TableOverride


class ConfigLoader:
    """Loads and validates the per-table override configuration from YAML."""

    ENV_VAR_PATTERN = re.compile(r'\$\{([^}]+)\}')

    def __init__(self, config_path: str):
        self.config_path = config_path
        self.config = self._load_config()
        self.overrides = self._parse_overrides()

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from YAML file."""
        try:
            with open(self.config_path, 'r') as f:
                config = yaml.safe_load(f)
        except FileNotFoundError as e:
            raise ConfigError(
                ConfigErrorKind.NOT_FOUND,
                f"Configuration file '{self.config_path}' not found"
            ) from e
        except yaml.YAMLError as e:
            raise ConfigError(
                ConfigErrorKind.MALFORMED,
                f"Invalid YAML in configuration file '{self.config_path}': {e}"
            ) from e

        if config is None:
            return {}
        if not isinstance(config, dict):
            raise ConfigError(
                ConfigErrorKind.MALFORMED,
                f"Configuration file '{self.config_path}' must contain a mapping at the top level"
            )

        return self._resolve_env_vars(config)

    def _resolve_env_vars(self, obj: Any) -> Any:
        """Recursively resolve environment variables in config."""
        if isinstance(obj, str):
            matches = self.ENV_VAR_PATTERN.findall(obj)
            for match in matches:
                env_value = os.environ.get(match, '')
                obj = obj.replace(f'${{{match}}}', env_value)
            return obj
        elif isinstance(obj, dict):
            return {k: self._resolve_env_vars(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [self._resolve_env_vars(item) for item in obj]
        return obj

    def _parse_overrides(self) -> dict[str, TableOverride]:
        """Validate the `tables` section and index it by table name."""
        tables = self.config.get('tables')
        if tables is None:
            return {}
        if not isinstance(tables, list):
            raise ConfigError(ConfigErrorKind.MALFORMED, "'tables' must be a list of entries")

        overrides: dict[str, TableOverride] = {}
        for position, entry in enumerate(tables):
            override = self._parse_entry(entry, position)
            if override.table_name in overrides:
                logging.warning(
                    f"Table '{override.table_name}' is configured more than once; "
                    f"using the entry at position {position}"
                )
            overrides[override.table_name] = override
        return overrides

    def _parse_entry(self, entry: Any, position: int) -> TableOverride:
        if not isinstance(entry, dict):
            raise ConfigError(
                ConfigErrorKind.MALFORMED,
                f"Entry {position} in 'tables' must be a mapping"
            )

        table_name = _scalar_text(entry.get('table_name'))
        if not table_name:
            raise ConfigError(
                ConfigErrorKind.MALFORMED,
                f"Entry {position} in 'tables' needs a non-empty 'table_name'"
            )

        row_filter = self._optional_string(entry, 'where', DEFAULT_ROW_FILTER, table_name)
        extra_flags = self._optional_string(entry, 'flags', DEFAULT_EXTRA_FLAGS, table_name)
        return TableOverride(table_name=table_name, row_filter=row_filter, extra_flags=extra_flags)

    @staticmethod
    def _optional_string(entry: dict[str, Any], key: str, default: str, table_name: str) -> str:
        value = entry.get(key)
        if value is None:
            return default
        text = _scalar_text(value)
        if text is None:
            raise ConfigError(
                ConfigErrorKind.MALFORMED,
                f"'{key}' for table '{table_name}' must be a string"
            )
        return text

    def get_overrides(self) -> dict[str, TableOverride]:
        """Get table overrides keyed by table name."""
        return self.overrides

    def get_logging_settings(self) -> dict[str, Any]:
        """Get logging settings."""
        return self.config.get('logging') or {}


def _scalar_text(value: Any) -> Optional[str]:
    """Text form of a YAML scalar; unquoted numbers such as `2020` or `1` become strings."""
    if isinstance(value, str):
        return value
    # bool is an int subclass and stays rejected.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None
