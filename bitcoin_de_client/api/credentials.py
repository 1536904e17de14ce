"""
Encrypted storage for Bitcoin.de API credentials.

The key/secret pair is encrypted with Fernet, using a key derived from a
password with PBKDF2-HMAC-SHA256, and stored as a small JSON document.
"""

import base64
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Union

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from ..errors import BitcoinDeAPIError


logger = logging.getLogger(__name__)

PASSWORD_ENV_VAR = 'CREDENTIAL_PASSWORD'
KDF_ITERATIONS = 100000
SALT_BYTES = 16


@dataclass(frozen=True)
class ApiCredentials:
    """API key/secret pair. Never mutated after construction."""
    api_key: str
    api_secret: str

    def __repr__(self) -> str:
        return f"ApiCredentials(api_key={self.api_key!r}, api_secret='***')"


class CredentialError(BitcoinDeAPIError):
    """Credentials could not be encrypted, decrypted or loaded."""

    def __init__(self, message: str):
        super().__init__(message, error_code='CREDENTIALS')


class CredentialManager:
    """Secure credential storage and encryption manager."""

    def __init__(self, password: Optional[str] = None):
        """
        Initialize credential manager.

        Args:
            password: Password for encryption. If None, CREDENTIAL_PASSWORD is used.

        Raises:
            CredentialError: If no password is available
        """
        self.password = password or os.getenv(PASSWORD_ENV_VAR)
        if not self.password:
            raise CredentialError(f"No credential password given and {PASSWORD_ENV_VAR} is not set")

    def _cipher(self, salt: bytes) -> Fernet:
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=32,
            salt=salt,
            iterations=KDF_ITERATIONS,
        )
        key = base64.urlsafe_b64encode(kdf.derive(self.password.encode()))
        return Fernet(key)

    def encrypt_credentials(self, credentials: ApiCredentials) -> Dict[str, str]:
        """
        Encrypt API credentials.

        Args:
            credentials: Key/secret pair

        Returns:
            Dict containing the salt and both encrypted values
        """
        salt = os.urandom(SALT_BYTES)
        cipher = self._cipher(salt)
        return {
            'salt': base64.b64encode(salt).decode(),
            'encrypted_api_key': cipher.encrypt(credentials.api_key.encode()).decode(),
            'encrypted_api_secret': cipher.encrypt(credentials.api_secret.encode()).decode(),
        }

    def decrypt_credentials(self, encrypted_data: Dict[str, str]) -> ApiCredentials:
        """
        Decrypt API credentials.

        Args:
            encrypted_data: Output of encrypt_credentials

        Returns:
            ApiCredentials: Decrypted key/secret pair

        Raises:
            CredentialError: On a wrong password or malformed data
        """
        try:
            cipher = self._cipher(base64.b64decode(encrypted_data['salt']))
            api_key = cipher.decrypt(encrypted_data['encrypted_api_key'].encode()).decode()
            api_secret = cipher.decrypt(encrypted_data['encrypted_api_secret'].encode()).decode()
        except (InvalidToken, KeyError, TypeError, ValueError) as e:
            logger.error(f"Failed to decrypt credentials: {type(e).__name__}")
            raise CredentialError("Failed to decrypt credentials") from e

        return ApiCredentials(api_key=api_key, api_secret=api_secret)

    def store(self, credentials: ApiCredentials, storage_path: Union[str, Path]) -> None:
        """Encrypt credentials and write them to a JSON file."""
        path = Path(storage_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.encrypt_credentials(credentials), f)
        try:
            path.chmod(0o600)
        except OSError as e:
            logger.warning(f"Could not restrict permissions of {path}: {e}")
        logger.info(f"Encrypted credentials stored to {path}")

    def load(self, storage_path: Union[str, Path]) -> ApiCredentials:
        """
        Read and decrypt a credentials file written by store().

        Raises:
            CredentialError: If the file is missing, unreadable or cannot be decrypted
        """
        path = Path(storage_path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                encrypted_data = json.load(f)
        except (OSError, ValueError) as e:
            raise CredentialError(f"Failed to read credentials file {path}: {e}") from e

        if not isinstance(encrypted_data, dict):
            raise CredentialError(f"Credentials file {path} is malformed")

        credentials = self.decrypt_credentials(encrypted_data)
        logger.info(f"Credentials loaded from {path}")
        return credentials
