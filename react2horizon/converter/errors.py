"""Typed exception hierarchy for conversion errors.

This module defines all custom exceptions raised while converting React
source into Horizon UI source. All exceptions inherit from ConverterError
base class for easy catching and include descriptive messages with context
to help with debugging.

Only ConversionFailure ever reaches a ConversionResult: the pipeline catches
whatever escapes the component pass and wraps it once.
"""

from typing import Optional


class ConverterError(Exception):
    """Base exception for all react2horizon errors.

    Use this to catch any application-level error from the converter.
    """
    pass


class MarkupSyntaxError(ConverterError):
    """Raised when markup cannot be scanned at all (e.g. an unterminated tag)."""

    def __init__(self, message: str, position: Optional[int] = None):
        if position is not None:
            full_message = f"{message} (at offset {position})"
        else:
            full_message = message
        super().__init__(full_message)
        self.position = position
        self.original_message = message


class ConversionFailure(ConverterError):
    """Raised when an exception escapes the whole component conversion pass.

    Carries the underlying failure's message; the original exception is
    kept as ``cause`` for logging.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(f"Conversion failed: {message}")
        self.reason = message
        self.cause = cause
