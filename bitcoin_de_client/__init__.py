"""
Bitcoin.de Trading API v4 client.

Signed REST client with typed responses, YAML configuration, encrypted
credential storage and a small command line interface.
"""

from .errors import (
    BitcoinDeAPIError,
    TransportError,
    UrlError,
    EncodingError,
    DecodingError,
    SigningError,
    ClockError,
    HeaderValueError,
    MethodNotFoundError,
    MissingPathParameterError,
    ApiError,
    UnclassifiedError,
    ApiErrorCode,
)
from .api import BitcoinDeClient, ApiCredentials

__version__ = '0.1.0'

__all__ = [
    'BitcoinDeClient', 'ApiCredentials',
    'BitcoinDeAPIError', 'TransportError', 'UrlError', 'EncodingError', 'DecodingError',
    'SigningError', 'ClockError', 'HeaderValueError', 'MethodNotFoundError',
    'MissingPathParameterError', 'ApiError', 'UnclassifiedError', 'ApiErrorCode',
]
