"""Wargaming API Client Package.

A small client for the Wargaming public API, covering player accounts,
clans and player ratings for World of Tanks and World of Warplanes.
"""

from .api import (
    WGAPIClient, ClientConfig, ApiFamily, API_WOT, API_WGN, API_WOWP,
    WGAPIError, InvalidConfiguration, MissingArgument, TransportError, ResponseError,
)

__version__ = "1.0.0"
__author__ = "WGAPI Development Team"
