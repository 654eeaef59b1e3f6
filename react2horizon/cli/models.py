"""Data models for CLI operations."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Conversion completed without errors (warnings allowed)
    - GENERAL_ERROR (1): Config, input or output problems
    - CONVERSION_FAILED (2): The converter reported an error

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    CONVERSION_FAILED = 2
