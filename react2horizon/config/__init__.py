"""Converter configuration loaded from YAML."""

from .config_loader import ConfigLoader, DEFAULT_CONFIG_PATH
from .errors import ConfigError, FilesystemError
from .models import ConverterConfig

__all__ = [
    'ConfigLoader',
    'DEFAULT_CONFIG_PATH',
    'ConfigError',
    'FilesystemError',
    'ConverterConfig',
]
