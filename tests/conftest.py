"""
Pytest configuration and fixtures for the Bitcoin.de client test suite.
"""

import json
import os
import tempfile
from pathlib import Path
from unittest.mock import Mock

import pytest

from bitcoin_de_client.api.client import BitcoinDeClient
from bitcoin_de_client.api.signer import NonceGenerator
from bitcoin_de_client.logging import get_logger_manager


TEST_API_KEY = "test_api_key"
TEST_API_SECRET = "test_api_secret"


def make_response(status_code=200, body=None, text=None):
    """Build a mock requests.Response with a JSON or raw text body."""
    response = Mock()
    response.status_code = status_code
    response.text = text if text is not None else json.dumps(body if body is not None else {})
    return response


class FixedClock:
    """Clock returning a fixed time, so nonces are predictable."""

    def __init__(self, now=1700000000.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def temp_config_dir():
    """Create a temporary directory for test configurations."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def mock_session():
    """Mock requests.Session answering every request with an empty JSON object."""
    session = Mock()
    session.headers = {}
    session.request.return_value = make_response(200, {})
    return session


@pytest.fixture
def client(mock_session):
    """Client with test credentials, a mock session and a fixed clock."""
    return BitcoinDeClient(
        TEST_API_KEY,
        TEST_API_SECRET,
        session=mock_session,
        nonce_generator=NonceGenerator(clock=FixedClock()),
    )


@pytest.fixture
def sample_rates_body():
    return {
        "trading_pair": "btceur",
        "rates": {
            "rate_weighted": "50000.00",
            "rate_weighted_3h": "49950.10",
            "rate_weighted_12h": "49800.55"
        },
        "errors": [],
        "credits": 20
    }


@pytest.fixture
def sample_account_info_body():
    return {
        "data": {
            "balances": {
                "btc": {
                    "total_amount": "1.50000000",
                    "available_amount": "1.00000000",
                    "reserved_amount": "0.50000000"
                },
                "eth": {
                    "total_amount": "10.0",
                    "available_amount": "10.0",
                    "reserved_amount": "0"
                }
            },
            "encrypted_information": {
                "uid": "abc123",
                "bic_short": "DEUTDEFF",
                "bic_full": "DEUTDEFFXXX"
            }
        },
        "errors": [],
        "credits": 18
    }


@pytest.fixture(autouse=True)
def setup_test_environment():
    """Set up test environment variables."""
    test_env = {
        "API_KEY": None,
        "API_SECRET": None,
        "CREDENTIAL_PASSWORD": None,
        "TESTING": "True"
    }

    # Store original values
    original_env = {}
    for key, value in test_env.items():
        original_env[key] = os.environ.get(key)
        if value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = value

    yield

    manager = get_logger_manager()
    if manager is not None:
        manager.shutdown()

    # Restore original values
    for key, value in original_env.items():
        if value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = value


@pytest.fixture
def response_factory():
    """Factory for mock responses: response_factory(status_code, body=None, text=None)."""
    return make_response
