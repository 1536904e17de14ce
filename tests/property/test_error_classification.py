"""Property-based tests for response classification.

**Feature: bitcoin-de-client, Property 7: Response Classification**
**Validates: Request Dispatcher, Error Model**
"""

import json
from unittest.mock import Mock

import pytest
from hypothesis import given, settings, strategies as st

from bitcoin_de_client.api.client import BitcoinDeClient
from bitcoin_de_client.data.models import BasicSuccessResponse
from bitcoin_de_client.errors import ApiError


def client_returning(status_code, text):
    session = Mock()
    session.headers = {}
    session.request.return_value = Mock(status_code=status_code, text=text)
    return BitcoinDeClient("key", "secret", session=session), session


error_bodies = st.fixed_dictionaries({
    'errors': st.lists(st.integers(min_value=1, max_value=49), min_size=1, max_size=3),
    'messages': st.lists(st.text(max_size=20), max_size=3),
})


@given(st.integers(min_value=300, max_value=599), error_bodies)
@settings(max_examples=100)
def test_non_2xx_raises_api_error(status_code, body):
    """
    **Feature: bitcoin-de-client, Property 7: Response Classification**

    For any non-2xx status, the call raises ApiError carrying that status,
    the raw body and the parsed error codes, after exactly one request.
    """
    text = json.dumps(body)
    client, session = client_returning(status_code, text)

    with pytest.raises(ApiError) as exc_info:
        client.delete_order('btceur', 'ABC')

    assert exc_info.value.status_code == status_code
    assert exc_info.value.body == text
    assert exc_info.value.codes == body['errors']
    assert session.request.call_count == 1


@given(st.integers(min_value=200, max_value=299), st.integers(min_value=0, max_value=60))
@settings(max_examples=50)
def test_2xx_decodes(status_code, credits):
    """Any 2xx status with a well-formed body decodes into the response type."""
    client, session = client_returning(status_code, json.dumps({'errors': [], 'credits': credits}))

    result = client.delete_order('btceur', 'ABC')

    assert result == BasicSuccessResponse(errors=[], credits=credits)
