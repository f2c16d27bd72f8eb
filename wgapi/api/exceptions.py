"""Exception types raised by the Wargaming API client."""

from typing import Optional, Dict, Any


class WGAPIError(Exception):
    """Base class for all client errors."""


class InvalidConfiguration(WGAPIError, ValueError):
    """Raised when a configuration value (region, method, key...) is invalid."""


class MissingArgument(WGAPIError, ValueError):
    """Raised when a required endpoint argument is missing.

    Attributes:
        argument (str): Name of the missing argument
    """

    def __init__(self, argument: str) -> None:
        self.argument = argument
        super().__init__(f"{argument} parameter may not be null")


class TransportError(WGAPIError):
    """Raised when the HTTP round trip itself fails.

    Attributes:
        code (Optional[str]): Transport error code (exception name or HTTP status)
        message (str): Error message from the transport
    """

    def __init__(self, message: str, code: Optional[str] = None) -> None:
        self.code = code
        self.message = message
        super().__init__(f"Error querying API. Error: {message} - Code: {code}")


class ResponseError(WGAPIError):
    """Raised by the optional response decoder for error payloads.

    Attributes:
        code (Optional[int]): Remote error code
        field (Optional[str]): Request field the remote service rejected
        value (Any): Value the remote service rejected
        payload (Optional[Dict[str, Any]]): Decoded payload, if any
    """

    def __init__(self, message: str, code: Optional[int] = None,
                 field: Optional[str] = None, value: Any = None,
                 payload: Optional[Dict[str, Any]] = None) -> None:
        self.code = code
        self.field = field
        self.value = value
        self.payload = payload
        super().__init__(message)
