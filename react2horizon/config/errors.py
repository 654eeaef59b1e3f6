"""Errors raised while loading a react2horizon configuration file."""

from typing import Optional

from react2horizon.converter.errors import ConverterError


class ConfigError(ConverterError):
    """Raised when a configuration file is malformed or a field is invalid.

    ``str(error)`` is the message, prefixed with the file it came from
    once the loader knows it.
    """

    def __init__(self, message: str, config_field: Optional[str] = None,
                 config_path: Optional[str] = None):
        super().__init__(f"{config_path}: {message}" if config_path else message)
        self.message = message
        self.config_field = config_field
        self.config_path = config_path

    def in_file(self, config_path: str) -> "ConfigError":
        """Return the same error attributed to ``config_path``."""
        return ConfigError(self.message, self.config_field, config_path)


class FilesystemError(ConverterError):
    """Raised when the configuration file cannot be opened."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Cannot {operation} config file {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason
