"""API module for the Wargaming public API.

This module provides the client, its immutable configuration, the
endpoint table and the error types.
"""

from .config import ClientConfig, setup_logging
from .endpoints import ApiFamily, Endpoint, API_WOT, API_WGN, API_WOWP
from .exceptions import (
    WGAPIError, InvalidConfiguration, MissingArgument, TransportError, ResponseError
)
from .wg_api import WGAPIClient

__all__ = [
    'ClientConfig', 'setup_logging', 'ApiFamily', 'Endpoint', 'API_WOT', 'API_WGN',
    'API_WOWP', 'WGAPIError', 'InvalidConfiguration', 'MissingArgument',
    'TransportError', 'ResponseError', 'WGAPIClient',
]
