"""Command-line interface for react2horizon."""
