"""Utilities module for the Wargaming API client.

This module provides response decoding and console formatting helpers.
"""

from .formatters import OutputFormatter, decode_response

__all__ = ['OutputFormatter', 'decode_response']
