"""
Integration tests for the typed API wrappers.

Each wrapper is driven through the full client (registry, builder, signer,
transport and decoder) against a mocked requests session, checking the verb,
URL and form body that reach the wire and the typed result that comes back.
"""

import hashlib
import hmac
import json
from decimal import Decimal
from unittest.mock import Mock

import pytest

from bitcoin_de_client.api.client import BitcoinDeClient
from bitcoin_de_client.api.signer import EMPTY_BODY_MD5, NonceGenerator
from bitcoin_de_client.data.enums import Currency, OrderType, TradingPair
from bitcoin_de_client.data.models import (
    BasicSuccessResponse,
    CreateOrderResponse,
    CreateWithdrawalResponse,
    RequestDepositAddressResponse,
    ShowAccountLedgerResponse,
    ShowDepositsResponse,
    ShowMyOrdersResponse,
    ShowMyTradesResponse,
    ShowOrderbookCompactResponse,
    ShowOrderbookResponse,
    ShowOutgoingAddressesResponse,
    ShowPermissionsResponse,
    ShowPublicTradeHistoryResponse,
    ShowWithdrawalMinNetworkFeeResponse,
    ShowWithdrawalsResponse,
)
from bitcoin_de_client.errors import ApiError, MissingPathParameterError, UnclassifiedError


BASE = 'https://api.bitcoin.de/v4'
SUCCESS = {'errors': [], 'credits': 10}
PAGE = {'page': {'current': 1, 'last': 1}}


def with_success(**fields):
    body = dict(SUCCESS)
    body.update(fields)
    return body


class TestWrappers:
    """Request shape and decoding for every wrapper."""

    @pytest.fixture
    def session(self):
        session = Mock()
        session.headers = {}
        return session

    @pytest.fixture
    def api(self, session):
        return BitcoinDeClient('integration-key', 'integration-secret', session=session,
                               nonce_generator=NonceGenerator(clock=lambda: 1700000000.0))

    def respond(self, session, body, status_code=200):
        session.request.return_value = Mock(status_code=status_code, text=json.dumps(body))

    def sent(self, session):
        args, kwargs = session.request.call_args
        return args[0], args[1], kwargs['data'], kwargs['headers']

    @pytest.mark.parametrize("call,verb,url,data,body,result_type", [
        (lambda c: c.show_orderbook(TradingPair.BTCEUR, OrderType.BUY, {'price': Decimal('30000')}),
         'GET', f'{BASE}/btceur/orderbook?price=30000&type=buy', None,
         with_success(orders=[]), ShowOrderbookResponse),
        (lambda c: c.create_order('BTCEUR', 'sell', Decimal('0.5'), Decimal('31000.00'),
                                  {'min_trust_level': 'gold'}),
         'POST', f'{BASE}/btceur/orders',
         'max_amount_currency_to_trade=0.5&min_trust_level=gold&price=31000.00&type=sell',
         with_success(order_id='ABC123'), CreateOrderResponse),
        (lambda c: c.delete_order(TradingPair.ETHEUR, 'ABC123'),
         'DELETE', f'{BASE}/etheur/orders/ABC123', None, SUCCESS, BasicSuccessResponse),
        (lambda c: c.show_my_orders(filters={'state': 0}),
         'GET', f'{BASE}/orders?state=0', None,
         with_success(orders=[], **PAGE), ShowMyOrdersResponse),
        (lambda c: c.show_my_orders(TradingPair.BTCEUR),
         'GET', f'{BASE}/btceur/orders', None,
         with_success(orders=[], **PAGE), ShowMyOrdersResponse),
        (lambda c: c.execute_trade(TradingPair.BTCEUR, 'ORD1', OrderType.BUY, Decimal('0.1')),
         'POST', f'{BASE}/btceur/trades/ORD1', 'amount_currency_to_trade=0.1&type=buy',
         SUCCESS, BasicSuccessResponse),
        (lambda c: c.show_my_trades(filters={'type': OrderType.SELL, 'page': 2}),
         'GET', f'{BASE}/trades?page=2&type=sell', None,
         with_success(trades=[], **PAGE), ShowMyTradesResponse),
        (lambda c: c.mark_trade_as_paid(TradingPair.BTCEUR, 'T1', Decimal('3000.00')),
         'POST', f'{BASE}/btceur/trades/T1/mark_trade_as_paid', 'volume_currency_to_pay_after_fee=3000.00',
         SUCCESS, BasicSuccessResponse),
        (lambda c: c.mark_trade_as_payment_received(TradingPair.BTCEUR, 'T1', Decimal('3000'), 'positive', True),
         'POST', f'{BASE}/btceur/trades/T1/mark_trade_as_payment_received',
         'is_paid_from_correct_bank_account=true&rating=positive&volume_currency_to_pay_after_fee=3000',
         SUCCESS, BasicSuccessResponse),
        (lambda c: c.add_trade_rating(TradingPair.BTCEUR, 'T1', 'neutral'),
         'POST', f'{BASE}/btceur/trades/T1/add_trade_rating', 'rating=neutral', SUCCESS, BasicSuccessResponse),
        (lambda c: c.mark_coins_as_transferred(TradingPair.BTCEUR, 'T1', Decimal('0.099')),
         'POST', f'{BASE}/btceur/trades/T1/mark_coins_as_transferred',
         'amount_currency_to_trade_after_fee=0.099', SUCCESS, BasicSuccessResponse),
        (lambda c: c.mark_coins_as_received(TradingPair.BTCEUR, 'T1', Decimal('0.099'), 'positive'),
         'POST', f'{BASE}/btceur/trades/T1/mark_coins_as_received',
         'amount_currency_to_trade_after_fee=0.099&rating=positive', SUCCESS, BasicSuccessResponse),
        (lambda c: c.show_account_ledger(Currency.BTC, {'type': 'buy'}),
         'GET', f'{BASE}/btc/account/ledger?type=buy', None,
         with_success(account_ledger=[], **PAGE), ShowAccountLedgerResponse),
        (lambda c: c.show_permissions(),
         'GET', f'{BASE}/permissions', None, with_success(permissions=['showRates']), ShowPermissionsResponse),
        (lambda c: c.create_withdrawal(Currency.BTC, Decimal('0.5'), 'bc1qaddress', Decimal('0.0001')),
         'POST', f'{BASE}/btc/withdrawals', 'address=bc1qaddress&amount=0.5&network_fee=0.0001',
         with_success(withdrawal_id=77), CreateWithdrawalResponse),
        (lambda c: c.delete_withdrawal('btc', '77'),
         'DELETE', f'{BASE}/btc/withdrawals/77', None, SUCCESS, BasicSuccessResponse),
        (lambda c: c.show_withdrawal_min_network_fee(Currency.BTC),
         'GET', f'{BASE}/btc/withdrawals/min_network_fee', None,
         with_success(min_network_fee='0.00005'), ShowWithdrawalMinNetworkFeeResponse),
        (lambda c: c.show_withdrawals(Currency.ETH),
         'GET', f'{BASE}/eth/withdrawals', None,
         with_success(withdrawals=[], **PAGE), ShowWithdrawalsResponse),
        (lambda c: c.show_outgoing_addresses(Currency.BTC, page=3),
         'GET', f'{BASE}/btc/outgoing_address?page=3', None,
         with_success(outgoing_address=[], **PAGE), ShowOutgoingAddressesResponse),
        (lambda c: c.request_deposit_address(Currency.BTC, comment='savings'),
         'POST', f'{BASE}/btc/deposits/new_address', 'comment=savings',
         with_success(address='bc1qdeposit'), RequestDepositAddressResponse),
        (lambda c: c.show_deposits(Currency.BTC),
         'GET', f'{BASE}/btc/deposits', None,
         with_success(deposits=[], **PAGE), ShowDepositsResponse),
        (lambda c: c.show_orderbook_compact(TradingPair.BTCEUR),
         'GET', f'{BASE}/btceur/orderbook/compact', None,
         with_success(trading_pair='btceur', orders={'bids': [], 'asks': []}), ShowOrderbookCompactResponse),
        (lambda c: c.show_public_trade_history(TradingPair.BTCEUR, since_tid=1234),
         'GET', f'{BASE}/btceur/trades/history?since_tid=1234', None,
         with_success(trading_pair='btceur', trades=[]), ShowPublicTradeHistoryResponse),
        (lambda c: c.add_to_address_pool(Currency.BTC, 'bc1qpool', {'amount_usages': 2}),
         'POST', f'{BASE}/btc/address_pool', 'address=bc1qpool&amount_usages=2',
         SUCCESS, BasicSuccessResponse),
        (lambda c: c.remove_from_address_pool(Currency.BTC, 'bc1qpool'),
         'DELETE', f'{BASE}/btc/address_pool/bc1qpool', None, SUCCESS, BasicSuccessResponse),
        (lambda c: c.list_address_pool(Currency.BTC),
         'GET', f'{BASE}/btc/address_pool', None,
         with_success(outgoing_address=[], **PAGE), ShowOutgoingAddressesResponse),
    ])
    def test_wrapper_request_and_result(self, api, session, call, verb, url, data, body, result_type):
        self.respond(session, body)

        result = call(api)

        sent_verb, sent_url, sent_data, headers = self.sent(session)
        assert (sent_verb, sent_url, sent_data) == (verb, url, data)
        assert isinstance(result, result_type)
        assert result.credits == 10

        digest = hashlib.md5(data.encode()).hexdigest() if data else EMPTY_BODY_MD5
        signed_url = url.split('?')[0] if verb == 'POST' else url
        message = f"{verb}#{signed_url}#integration-key#{headers['X-API-NONCE']}#{digest}"
        expected = hmac.new(b'integration-secret', message.encode(), hashlib.sha256).hexdigest()
        assert headers['X-API-SIGNATURE'] == expected
        assert headers['X-API-KEY'] == 'integration-key'
        assert ('Content-Type' in headers) == bool(data)

    def test_show_rates_end_to_end(self, api, session, sample_rates_body):
        self.respond(session, sample_rates_body)

        response = api.show_rates('BTCEUR')

        assert response.rates.rate_weighted == Decimal('50000.00')
        assert self.sent(session)[:2] == ('GET', f'{BASE}/btceur/rates')

    def test_account_info_end_to_end(self, api, session, sample_account_info_body):
        self.respond(session, sample_account_info_body)

        response = api.show_account_info()

        assert response.data.balances['eth'].total_amount == Decimal('10.0')
        assert self.sent(session)[:2] == ('GET', f'{BASE}/account')

    def test_wrapper_surfaces_api_error(self, api, session):
        self.respond(session, {'errors': [13], 'messages': ['Order not found']}, status_code=404)

        with pytest.raises(ApiError) as exc_info:
            api.show_my_order_details(TradingPair.BTCEUR, 'MISSING')

        assert exc_info.value.codes == [13]
        assert self.sent(session)[:2] == ('GET', f'{BASE}/btceur/orders/MISSING')

    def test_invalid_pair_rejected_before_sending(self, api, session):
        with pytest.raises(UnclassifiedError):
            api.show_rates('dogeeur')
        session.request.assert_not_called()

    def test_empty_identifier_rejected_before_sending(self, api, session):
        with pytest.raises(MissingPathParameterError):
            api.show_deposit(Currency.BTC, '')
        session.request.assert_not_called()

    def test_consecutive_calls_use_increasing_nonces(self, api, session):
        self.respond(session, with_success(permissions=[]))

        api.show_permissions()
        first = int(self.sent(session)[3]['X-API-NONCE'])
        api.show_permissions()
        second = int(self.sent(session)[3]['X-API-NONCE'])

        assert second > first
