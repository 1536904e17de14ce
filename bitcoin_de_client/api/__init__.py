"""API client module for Bitcoin.de Trading API v4 integration."""

from .registry import MethodSetting, MethodRegistry, build_default_registry
from .signer import RequestSigner, NonceGenerator, EMPTY_BODY_MD5
from .credentials import ApiCredentials, CredentialManager, CredentialError
from .client import BitcoinDeClient, SignedRequest, DEFAULT_BASE_URL

__all__ = [
    'MethodSetting', 'MethodRegistry', 'build_default_registry',
    'RequestSigner', 'NonceGenerator', 'EMPTY_BODY_MD5',
    'ApiCredentials', 'CredentialManager', 'CredentialError',
    'BitcoinDeClient', 'SignedRequest', 'DEFAULT_BASE_URL',
]
