"""Property-based tests for credential encryption round trips.

**Feature: bitcoin-de-client, Property 5: Credential Encryption Round Trip**
**Validates: Configuration (credential storage)**
"""

import tempfile
from pathlib import Path

import pytest
from hypothesis import assume, given, settings, strategies as st
from hypothesis.strategies import composite

from bitcoin_de_client.api.credentials import ApiCredentials, CredentialError, CredentialManager


@composite
def valid_api_credentials(draw):
    """Generate API key/secret pairs shaped like Bitcoin.de credentials."""
    api_key = draw(st.text(alphabet='0123456789abcdef', min_size=32, max_size=32))
    api_secret = draw(st.text(alphabet='0123456789abcdef', min_size=64, max_size=64))
    return ApiCredentials(api_key=api_key, api_secret=api_secret)


@composite
def valid_passwords(draw):
    """Generate passwords for the key derivation."""
    password = draw(st.text(
        alphabet=st.characters(whitelist_categories=('Lu', 'Ll', 'Nd'),
                               whitelist_characters='!@#$%^&*()_+-=[]{}|;:,.<>?'),
        min_size=8, max_size=50
    ))
    assume(len(password.strip()) >= 8)
    return password


@given(valid_api_credentials(), valid_passwords())
@settings(max_examples=20, deadline=None)
def test_encryption_round_trip(credentials, password):
    """
    **Feature: bitcoin-de-client, Property 5: Credential Encryption Round Trip**

    For any credentials and password, decrypting the encrypted form with the
    same password yields the original credentials.
    """
    manager = CredentialManager(password)
    encrypted = manager.encrypt_credentials(credentials)

    assert credentials.api_key not in encrypted.values()
    assert credentials.api_secret not in encrypted.values()
    assert CredentialManager(password).decrypt_credentials(encrypted) == credentials


@given(valid_api_credentials(), valid_passwords(), valid_passwords())
@settings(max_examples=10, deadline=None)
def test_wrong_password_rejected(credentials, password, other_password):
    """Decrypting with another password always fails."""
    assume(password != other_password)
    encrypted = CredentialManager(password).encrypt_credentials(credentials)

    with pytest.raises(CredentialError):
        CredentialManager(other_password).decrypt_credentials(encrypted)


@given(valid_api_credentials(), valid_passwords())
@settings(max_examples=5, deadline=None)
def test_file_storage_round_trip(credentials, password):
    """Stored credential files load back to the same pair."""
    with tempfile.TemporaryDirectory() as temp_dir:
        path = Path(temp_dir) / 'credentials.json'
        CredentialManager(password).store(credentials, path)
        assert CredentialManager(password).load(path) == credentials
