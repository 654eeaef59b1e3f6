"""Pytest configuration and fixtures for integration tests."""

import pytest

from react2horizon.converter import ReactToHorizonConverter


@pytest.fixture
def converter() -> ReactToHorizonConverter:
    """A converter with default options."""
    return ReactToHorizonConverter()
