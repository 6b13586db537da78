"""Exporter configuration loading and validation.

This module loads and saves the exporter configuration from YAML files. The
configuration makes the rule registry explicit: rules are listed by name in
precedence order and can be disabled individually.

Configuration file structure:
    rules:              # optional, defaults to the standard order
      - heading
      - list
      - image
    exclude_rules:
      - styled_span
    default_title: Untitled
    input_format: auto  # auto | json | html
"""

import logging
import os
from typing import Any, Dict, List, Optional

import yaml

from src.document_model.loader import INPUT_FORMATS
from src.markdown_export.registry import DEFAULT_RULE_ORDER

from .errors import ConfigError, ConfigFilesystemError, ConfigNotFoundError
from .models import ExportConfig

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Handles exporter configuration loading, validation, and saving."""

    DEFAULT_CONFIG_FILE = '.docmark.yaml'

    KNOWN_FIELDS = {'rules', 'exclude_rules', 'default_title', 'input_format'}

    DEFAULTS = {
        'default_title': 'Untitled',
        'input_format': 'auto',
    }

    @classmethod
    def load(cls, config_path: str) -> ExportConfig:
        """Load and parse configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            ExportConfig object with parsed configuration

        Raises:
            ConfigNotFoundError: If the file does not exist
            ConfigFilesystemError: If the file cannot be read
            ConfigError: If configuration is invalid or malformed
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise ConfigNotFoundError(config_path)
        except PermissionError:
            raise ConfigFilesystemError(
                config_path,
                'read',
                'Permission denied'
            )
        except Exception as e:
            raise ConfigFilesystemError(
                config_path,
                'read',
                str(e)
            )

        # Empty file means all defaults
        if not content.strip():
            return ExportConfig()

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Invalid YAML syntax: {str(e)}"
            )

        if config_dict is None:
            return ExportConfig()

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        return cls._parse_config(config_dict)

    @classmethod
    def load_or_default(cls, config_path: Optional[str] = None) -> ExportConfig:
        """Load an explicit config, the default file if present, or defaults.

        Args:
            config_path: Explicit configuration path; must exist when given

        Returns:
            ExportConfig object
        """
        if config_path:
            return cls.load(config_path)

        if os.path.exists(cls.DEFAULT_CONFIG_FILE):
            logger.info(f"Using configuration from {cls.DEFAULT_CONFIG_FILE}")
            return cls.load(cls.DEFAULT_CONFIG_FILE)

        return ExportConfig()

    @classmethod
    def save(cls, config_path: str, export_config: ExportConfig) -> None:
        """Save configuration to a YAML file.

        Args:
            config_path: Path to the YAML configuration file
            export_config: ExportConfig object to save

        Raises:
            ConfigFilesystemError: If file cannot be written
        """
        config_dict: Dict[str, Any] = {}
        # Only include rule fields when they differ from the defaults
        if export_config.rules is not None:
            config_dict['rules'] = list(export_config.rules)
        if export_config.exclude_rules:
            config_dict['exclude_rules'] = list(export_config.exclude_rules)
        config_dict['default_title'] = export_config.default_title
        config_dict['input_format'] = export_config.input_format

        yaml_str = yaml.safe_dump(
            config_dict,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )

        config_dir = os.path.dirname(config_path)
        if config_dir:
            try:
                os.makedirs(config_dir, exist_ok=True)
            except Exception as e:
                raise ConfigFilesystemError(
                    config_dir,
                    'create_directory',
                    str(e)
                )

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                f.write(yaml_str)
        except PermissionError:
            raise ConfigFilesystemError(
                config_path,
                'write',
                'Permission denied'
            )
        except Exception as e:
            raise ConfigFilesystemError(
                config_path,
                'write',
                str(e)
            )

    @classmethod
    def _parse_config(cls, config_dict: Dict[str, Any]) -> ExportConfig:
        """Parse and validate configuration dictionary.

        Args:
            config_dict: Raw configuration dictionary from YAML

        Returns:
            Validated ExportConfig object

        Raises:
            ConfigError: If configuration is invalid
        """
        unknown_fields = set(config_dict.keys()) - cls.KNOWN_FIELDS
        if unknown_fields:
            raise ConfigError(
                f"Unknown fields: {', '.join(sorted(str(f) for f in unknown_fields))}"
            )

        rules = None
        if config_dict.get('rules') is not None:
            rules = cls._parse_rule_names(config_dict['rules'], 'rules')
            if not rules:
                raise ConfigError(
                    "At least one rule is required when 'rules' is set",
                    'rules'
                )

        exclude_rules: List[str] = []
        if config_dict.get('exclude_rules') is not None:
            exclude_rules = cls._parse_rule_names(config_dict['exclude_rules'], 'exclude_rules')

        default_title = config_dict.get('default_title', cls.DEFAULTS['default_title'])
        input_format = config_dict.get('input_format', cls.DEFAULTS['input_format'])

        if not isinstance(default_title, str) or not default_title.strip():
            raise ConfigError(
                "Field 'default_title' must be a non-empty string",
                'default_title'
            )

        input_format = str(input_format).lower()
        if input_format not in INPUT_FORMATS:
            raise ConfigError(
                f"Field 'input_format' must be one of: {', '.join(INPUT_FORMATS)}, got '{input_format}'",
                'input_format'
            )

        return ExportConfig(
            rules=rules,
            exclude_rules=exclude_rules,
            default_title=default_title.strip(),
            input_format=input_format
        )

    @classmethod
    def _parse_rule_names(cls, raw: Any, config_field: str) -> List[str]:
        """Validate a list of rule names."""
        if not isinstance(raw, list):
            raise ConfigError(
                f"Field '{config_field}' must be a list",
                config_field
            )

        names = [str(name) for name in raw]
        for i, name in enumerate(names):
            if name not in DEFAULT_RULE_ORDER:
                raise ConfigError(
                    f"Unknown rule '{name}' at index {i} (known rules: {', '.join(DEFAULT_RULE_ORDER)})",
                    config_field
                )
        return names
