"""Typed exception hierarchy for CLI-related errors.

All exceptions inherit from CLIError base class for easy catching and
include descriptive messages with context to help with debugging.
"""

from typing import Optional

from react2horizon.converter.errors import ConverterError


class CLIError(ConverterError):
    """Base exception for all CLI-related errors."""
    pass


class InputFileError(CLIError):
    """Raised when the React source cannot be read."""

    def __init__(self, file_path: str, reason: Optional[str] = None):
        message = f"Cannot read input {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.reason = reason


class OutputFileError(CLIError):
    """Raised when the converted source cannot be written."""

    def __init__(self, file_path: str, reason: Optional[str] = None):
        message = f"Cannot write output {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.reason = reason
