"""Configuration module for the Wargaming API client.

This module holds the immutable client configuration, the region to
top-level domain table, environment loading and logging setup.
"""

import os
import re
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional, Dict

from dotenv import load_dotenv

from .exceptions import InvalidConfiguration

# Load environment variables
load_dotenv()


# Region to top-level domain mapping
REGION_TLDS: Dict[str, str] = {
    'na': 'com',
    'ru': 'ru',
    'eu': 'eu',
    'sea': 'sea',
    'asia': 'sea',
}

HTTP_METHODS = ("GET", "POST")

DEFAULT_LANGUAGE = "en"
DEFAULT_METHOD = "GET"
DEFAULT_TIMEOUT = 30


def resolve_tld(region: str) -> str:
    """Map a region string to its top-level domain.

    Args:
        region: Region name (NA, RU, EU, SEA or ASIA, any case)

    Returns:
        The top-level domain for the region

    Raises:
        InvalidConfiguration: If the region is unknown
    """
    if not region or not isinstance(region, str):
        raise InvalidConfiguration("region parameter may not be null")

    tld = REGION_TLDS.get(region.strip().lower())
    if tld is None:
        raise InvalidConfiguration(f"invalid region specified: {region!r}")
    return tld


def normalize_method(method: str) -> str:
    """Validate an HTTP method, returning it upper-cased."""
    if not isinstance(method, str) or method.upper() not in HTTP_METHODS:
        raise InvalidConfiguration("invalid method specified - must be POST or GET")
    return method.upper()


@dataclass(frozen=True)
class ClientConfig:
    """Immutable settings for a Wargaming API client.

    A new instance is produced for every change (see ``with_*`` helpers),
    so a config value can be shared freely between clients.

    Attributes:
        api_key (str): Application id sent with every request
        region (str): Normalized region name
        language (str): Response language
        method (str): HTTP method, GET or POST
        use_https (bool): Whether requests use HTTPS
        access_token (Optional[str]): Token for private player data
        timeout (float): Request timeout in seconds
    """

    api_key: str
    region: str = "na"
    language: str = DEFAULT_LANGUAGE
    method: str = DEFAULT_METHOD
    use_https: bool = False
    access_token: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        if not self.api_key or not isinstance(self.api_key, str):
            raise InvalidConfiguration("apikey parameter may not be null, and must be a String")

        # Frozen dataclass, so normalized values go through object.__setattr__
        resolve_tld(self.region)
        object.__setattr__(self, 'region', self.region.strip().lower())
        object.__setattr__(self, 'method', normalize_method(self.method))

        if not self.language or not isinstance(self.language, str):
            raise InvalidConfiguration("language parameter may not be null")

    @property
    def tld(self) -> str:
        """Top-level domain derived from the region."""
        return REGION_TLDS[self.region]

    def with_language(self, language: str) -> "ClientConfig":
        return replace(self, language=language)

    def with_method(self, method: str) -> "ClientConfig":
        return replace(self, method=normalize_method(method))

    def with_https(self, use_https: bool) -> "ClientConfig":
        return replace(self, use_https=bool(use_https))

    def with_access_token(self, access_token: Optional[str]) -> "ClientConfig":
        return replace(self, access_token=access_token or None)

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Build a configuration from environment variables (.env supported).

        Raises:
            InvalidConfiguration: If WG_API_KEY is not set or a value is invalid
        """
        api_key = os.getenv('WG_API_KEY')
        if not api_key:
            raise InvalidConfiguration(
                "No API key found. Please set WG_API_KEY in your .env file"
            )

        config = cls(
            api_key=api_key,
            region=os.getenv('WG_REGION', 'na'),
            language=os.getenv('WG_LANGUAGE', DEFAULT_LANGUAGE),
            method=os.getenv('WG_METHOD', DEFAULT_METHOD),
            use_https=os.getenv('WG_USE_HTTPS', 'false').lower() == 'true',
            access_token=os.getenv('WG_ACCESS_TOKEN') or None,
            timeout=float(os.getenv('SESSION_TIMEOUT', str(DEFAULT_TIMEOUT))),
        )

        # Don't log the actual API key
        logging.getLogger(__name__).info(f"Configuration loaded for region: {config.region}")
        return config


# Logging configuration
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

_CREDENTIAL_PATTERN = re.compile(r'(application_id|access_token)=([^&\s]+)')


class SensitiveDataFilter(logging.Filter):
    """Filter masking application ids and access tokens in log messages."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = _CREDENTIAL_PATTERN.sub(r'\1=***', record.msg)
        return True


def setup_logging(level: str = LOG_LEVEL, log_file: Optional[Path] = None) -> logging.Logger:
    """Setup logging for the client.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Path of the log file (default: wgapi.log)

    Returns:
        Configured logger instance
    """
    valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
    if level.upper() not in valid_levels:
        level = 'INFO'

    log_file = log_file or Path('wgapi.log')

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(log_file, mode='a', encoding='utf-8')
        ]
    )

    logger = logging.getLogger()
    for handler in logger.handlers:
        if not any(isinstance(f, SensitiveDataFilter) for f in handler.filters):
            handler.addFilter(SensitiveDataFilter())

    return logging.getLogger(__name__)
