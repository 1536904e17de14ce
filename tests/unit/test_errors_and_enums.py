"""
Unit tests for the error taxonomy and API enumerations.
"""

import pytest

from bitcoin_de_client.data.enums import Currency, OrderType, TradingPair
from bitcoin_de_client.data.models import ApiErrorBody
from bitcoin_de_client.errors import (
    ApiError,
    ApiErrorCode,
    BitcoinDeAPIError,
    ClockError,
    DecodingError,
    EncodingError,
    HeaderValueError,
    MethodNotFoundError,
    MissingPathParameterError,
    SigningError,
    TransportError,
    UnclassifiedError,
    UrlError,
    describe_error_code,
)


class TestErrors:

    @pytest.mark.parametrize("error,code", [
        (TransportError("x"), 'TRANSPORT'),
        (UrlError("x"), 'URL'),
        (EncodingError("x"), 'ENCODING'),
        (DecodingError("x"), 'DECODING'),
        (SigningError("x"), 'SIGNING'),
        (ClockError("x"), 'CLOCK'),
        (HeaderValueError("X-API-KEY", "x"), 'HEADER'),
        (MethodNotFoundError("m"), 'METHOD_NOT_FOUND'),
        (MissingPathParameterError("m", "p"), 'MISSING_PATH_PARAMETER'),
        (UnclassifiedError("x"), 'OTHER'),
    ])
    def test_error_codes(self, error, code):
        assert isinstance(error, BitcoinDeAPIError)
        assert error.error_code == code
        assert error.status_code is None

    def test_api_error_message_from_details(self):
        error = ApiError(400, '{}', ApiErrorBody(errors=[5, 6], messages=['first', 'second']))
        assert error.status_code == 400
        assert error.message == "API request failed with status 400: first; second"
        assert str(error) == error.message

    def test_api_error_message_from_body(self):
        body = 'x' * 500
        error = ApiError(503, body)
        assert error.message.endswith('x' * 200)
        assert len(error.message) < 300
        assert error.codes == []

    def test_decoding_error_keeps_body(self):
        assert DecodingError("bad", body="raw").body == "raw"

    def test_describe_error_code(self):
        assert describe_error_code(5) == "5 (MISSING_GET_PARAMETER)"
        assert describe_error_code(3) == "3 (WRONG_SIGNATURE)"
        assert describe_error_code(999) == "999"

    def test_error_code_enum(self):
        assert ApiErrorCode(13) is ApiErrorCode.ORDER_NOT_FOUND
        assert min(ApiErrorCode) == 1
        assert max(ApiErrorCode) == 49


class TestEnums:

    def test_trading_pair_forms(self):
        assert TradingPair.BTCEUR.as_str() == 'BTCEUR'
        assert TradingPair.BTCEUR.to_path() == 'btceur'
        assert str(TradingPair.ETHBTC) == 'ETHBTC'

    @pytest.mark.parametrize("text", ['btceur', 'BTCEUR', ' BtcEur '])
    def test_from_str_ignores_case(self, text):
        assert TradingPair.from_str(text) is TradingPair.BTCEUR

    def test_from_str_accepts_member(self):
        assert Currency.from_str(Currency.ETH) is Currency.ETH

    def test_from_str_unknown(self):
        with pytest.raises(UnclassifiedError):
            TradingPair.from_str('dogeeur')
        with pytest.raises(UnclassifiedError):
            OrderType.from_str('hold')

    def test_coerce_path(self):
        assert TradingPair.coerce_path('BTCEUR') == 'btceur'
        assert Currency.coerce_path(Currency.BTC) == 'btc'
        assert OrderType.coerce_path('BUY') == 'buy'

    def test_every_member_round_trips(self):
        for enum_type in (TradingPair, Currency, OrderType):
            for member in enum_type:
                assert enum_type.from_str(member.to_path()) is member
                assert enum_type.from_str(member.as_str()) is member
