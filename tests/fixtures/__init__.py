"""Test fixtures for react2horizon tests.

This module provides sample React sources for:
- Functional components (arrow and function forms, hooks, lists)
- Class components with lifecycle methods
- Malformed markup for failure handling
"""

from .sample_components import (
    CLOCK_CLASS_COMPONENT,
    COUNTER_COMPONENT,
    MALFORMED_COMPONENT,
    MIXED_COMPONENTS,
    TODO_LIST_COMPONENT,
    WELCOME_COMPONENT,
)

__all__ = [
    'CLOCK_CLASS_COMPONENT',
    'COUNTER_COMPONENT',
    'MALFORMED_COMPONENT',
    'MIXED_COMPONENTS',
    'TODO_LIST_COMPONENT',
    'WELCOME_COMPONENT',
]
