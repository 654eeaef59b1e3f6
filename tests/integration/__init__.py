"""Integration tests for react2horizon.

These tests run whole React sources through ReactToHorizonConverter and
check the generated Horizon source and the conversion report together.
"""
