"""Data models for conversion results."""

from react2horizon.models.conversion_result import ComponentInfo, ConversionResult

__all__ = ['ComponentInfo', 'ConversionResult']
