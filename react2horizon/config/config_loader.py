"""YAML configuration loading and validation.

This module handles loading converter options from a YAML file. Every key
is optional; a missing file is only an error when the caller named it
explicitly.
"""

import logging
import os
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError, FilesystemError
from .models import STATE_STYLES, ConverterConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = ".react2horizon.yaml"


class ConfigLoader:
    """Handles configuration file loading and validation.

    Configuration file structure:
        state_style: binding          # binding | field
        import_module: ../horizon_ui
        output_suffix: .horizon.ts
        effect_summary_length: 50
    """

    KNOWN_FIELDS = {'state_style', 'import_module', 'output_suffix', 'effect_summary_length'}

    DEFAULTS = {
        'state_style': 'binding',
        'import_module': '../horizon_ui',
        'output_suffix': '.horizon.ts',
        'effect_summary_length': 50,
    }

    @classmethod
    def load(cls, config_path: str) -> ConverterConfig:
        """Load and parse configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            ConverterConfig with parsed configuration

        Raises:
            FilesystemError: If file cannot be read
            ConfigError: If configuration is invalid or malformed
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise FilesystemError(config_path, 'read', 'File not found')
        except PermissionError:
            raise FilesystemError(config_path, 'read', 'Permission denied')
        except OSError as e:
            raise FilesystemError(config_path, 'read', e.strerror or str(e))

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax: {e}", config_path=config_path)

        # An empty file means "all defaults"
        if config_dict is None:
            return ConverterConfig()

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}",
                config_path=config_path,
            )

        try:
            return cls._parse_config(config_dict)
        except ConfigError as e:
            raise e.in_file(config_path) from e

    @classmethod
    def load_default(cls, config_path: Optional[str] = None) -> ConverterConfig:
        """Load an explicit config file, or the default one if it exists.

        Args:
            config_path: Explicit path given by the user (must exist), or None

        Returns:
            ConverterConfig (defaults when no file applies)
        """
        if config_path:
            return cls.load(config_path)
        if os.path.exists(DEFAULT_CONFIG_PATH):
            logger.debug(f"Using configuration from {DEFAULT_CONFIG_PATH}")
            return cls.load(DEFAULT_CONFIG_PATH)
        return ConverterConfig()

    @classmethod
    def _parse_config(cls, config_dict: Dict[str, Any]) -> ConverterConfig:
        """Parse and validate configuration dictionary.

        Args:
            config_dict: Raw configuration dictionary from YAML

        Returns:
            Validated ConverterConfig object

        Raises:
            ConfigError: If configuration is invalid
        """
        unknown = set(config_dict.keys()) - cls.KNOWN_FIELDS
        if unknown:
            logger.warning(f"Ignoring unknown configuration fields: {', '.join(sorted(map(str, unknown)))}")

        state_style = config_dict.get('state_style', cls.DEFAULTS['state_style'])
        import_module = config_dict.get('import_module', cls.DEFAULTS['import_module'])
        output_suffix = config_dict.get('output_suffix', cls.DEFAULTS['output_suffix'])
        effect_summary_length = config_dict.get(
            'effect_summary_length', cls.DEFAULTS['effect_summary_length']
        )

        if state_style not in STATE_STYLES:
            raise ConfigError(
                f"Field 'state_style' must be one of {', '.join(STATE_STYLES)}, got {state_style!r}",
                'state_style'
            )

        for name, value in (('import_module', import_module), ('output_suffix', output_suffix)):
            if not isinstance(value, str) or not value.strip():
                raise ConfigError(
                    f"Field '{name}' must be a non-empty string",
                    name
                )

        # bool is an int subclass; reject it explicitly
        if isinstance(effect_summary_length, bool) or not isinstance(effect_summary_length, int):
            raise ConfigError(
                f"Field 'effect_summary_length' must be an integer, got {type(effect_summary_length).__name__}",
                'effect_summary_length'
            )
        if effect_summary_length < 1:
            raise ConfigError(
                f"Field 'effect_summary_length' must be at least 1, got {effect_summary_length}",
                'effect_summary_length'
            )

        return ConverterConfig(
            state_style=state_style,
            import_module=import_module.strip(),
            output_suffix=output_suffix.strip(),
            effect_summary_length=effect_summary_length,
        )
