"""
Bitcoin.de Trading API v4 client.

This module provides the signed-request dispatcher and one typed wrapper per
API method. Each call resolves the method in the registry, fills the path
placeholders, signs the canonical request, sends exactly one HTTP request and
decodes the body into a typed response (or raises an ApiError).
"""

import logging
import re
import time
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Type, TypeVar, Union
from urllib.parse import quote, urlencode, urlsplit

import requests

from ..errors import (
    ApiError,
    DecodingError,
    EncodingError,
    HeaderValueError,
    MissingPathParameterError,
    TransportError,
    UrlError,
)
from ..data.decoder import decode_response, parse_json
from ..data.enums import Currency, OrderType, TradingPair
from ..data.models import (
    BasicSuccessResponse,
    CreateOrderResponse,
    CreateWithdrawalResponse,
    RequestDepositAddressResponse,
    ShowAccountInfoResponse,
    ShowAccountLedgerResponse,
    ShowDepositResponse,
    ShowDepositsResponse,
    ShowMyOrdersResponse,
    ShowMyTradeDetailsResponse,
    ShowMyTradesResponse,
    ShowOrderbookCompactResponse,
    ShowOrderbookResponse,
    ShowOrderDetailsResponse,
    ShowOutgoingAddressesResponse,
    ShowPermissionsResponse,
    ShowPublicTradeHistoryResponse,
    ShowRatesResponse,
    ShowWithdrawalMinNetworkFeeResponse,
    ShowWithdrawalResponse,
    ShowWithdrawalsResponse,
    parse_error_body,
)
from . import registry as methods
from .registry import MethodRegistry, build_default_registry, POST
from .signer import NonceGenerator, RequestSigner, encode_form


logger = logging.getLogger(__name__)

T = TypeVar('T')

DEFAULT_BASE_URL = "https://api.bitcoin.de/v4"
DEFAULT_TIMEOUT = 30.0

HEADER_API_KEY = 'X-API-KEY'
HEADER_NONCE = 'X-API-NONCE'
HEADER_SIGNATURE = 'X-API-SIGNATURE'
FORM_CONTENT_TYPE = 'application/x-www-form-urlencoded'

# Same rule requests applies to header values
_VALID_HEADER_VALUE = re.compile(r'\S[^\r\n]*')

ParamValue = Union[str, int, Decimal, bool, datetime, Enum]
PairLike = Union[TradingPair, str]
CurrencyLike = Union[Currency, str]
OrderTypeLike = Union[OrderType, str]


@dataclass(frozen=True)
class SignedRequest:
    """A fully built request, ready for the transport."""
    http_verb: str
    url: str
    signature_url: str
    nonce: str
    signature: str
    headers: Mapping[str, str]
    body: Optional[Mapping[str, str]] = None

    @property
    def encoded_body(self) -> Optional[str]:
        return encode_form(self.body) if self.body else None


def stringify_parameter(name: str, value: Any) -> str:
    """
    Render one parameter value the way the exchange expects it.

    Raises:
        EncodingError: If the value has a type that cannot be sent
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, int):
        return str(value)
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise EncodingError(f"Parameter '{name}' is not a finite number: {value}")
        return format(value, 'f')
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        to_path = getattr(value, 'to_path', None)
        return to_path() if to_path else str(value.value)
    raise EncodingError(f"Parameter '{name}' has unsupported type {type(value).__name__}")


class BitcoinDeClient:
    """
    Bitcoin.de Trading API v4 client.

    Holds the credentials, the method registry and one pooled requests.Session.
    None of these change after construction, so a single client can serve
    concurrent calls from several threads.
    """

    def __init__(self, api_key: str, api_secret: str,
                 base_url: str = DEFAULT_BASE_URL,
                 timeout: float = DEFAULT_TIMEOUT,
                 registry: Optional[MethodRegistry] = None,
                 session: Optional[requests.Session] = None,
                 nonce_generator: Optional[NonceGenerator] = None):
        """
        Initialize Bitcoin.de API client.

        Args:
            api_key: Bitcoin.de API key
            api_secret: Bitcoin.de API secret
            base_url: API origin plus version prefix
            timeout: Transport timeout in seconds
            registry: Method registry (defaults to all v4 methods)
            session: Shared requests session (a new one is created if None)
            nonce_generator: Nonce source (defaults to microsecond clock)
        """
        parts = urlsplit(base_url or '')
        if parts.scheme not in ('http', 'https') or not parts.netloc:
            raise UrlError(f"Invalid API base URL: {base_url!r}")

        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.registry = registry or build_default_registry()
        self.signer = RequestSigner(api_key, api_secret)
        self.nonce_generator = nonce_generator or NonceGenerator()
        self.session = session or requests.Session()
        self.session.headers.update({'Accept': 'application/json'})

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> 'BitcoinDeClient':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    # --- Request construction -------------------------------------------

    def build_request(self, method_name: str,
                      parameters: Optional[Mapping[str, ParamValue]] = None) -> SignedRequest:
        """
        Build and sign a request without sending it.

        Args:
            method_name: Registered API method name, e.g. 'showRates'
            parameters: Path, query and body parameters by name

        Returns:
            SignedRequest: URL, headers and body for the transport

        Raises:
            MethodNotFoundError: If the method is not registered
            MissingPathParameterError: If a path placeholder has no value
            EncodingError: If a parameter value cannot be encoded
            SigningError, ClockError, HeaderValueError: On signing failures
        """
        setting = self.registry.lookup(method_name)

        params = {name: stringify_parameter(name, value)
                  for name, value in (parameters or {}).items()}

        path = []
        for segment in setting.path_segments:
            if not setting.is_placeholder(segment):
                path.append(segment)
                continue
            name = segment[1:]
            value = params.pop(name, None)
            if not value:
                if name in setting.optional_placeholders:
                    continue
                raise MissingPathParameterError(method_name, name)
            path.append(quote(value, safe=''))

        unknown = set(params) - setting.recognized_parameters
        if unknown:
            logger.debug(f"{method_name}: passing unrecognized parameters {sorted(unknown)}")

        base_url = f"{self.base_url}/{'/'.join(path)}"

        if setting.http_verb == POST:
            request_url = base_url
            signature_url = base_url
            body = params or None
        else:
            try:
                query = urlencode(sorted(params.items()))
            except (TypeError, UnicodeEncodeError) as e:
                raise EncodingError(f"Failed to encode query for {method_name}: {e}") from e
            request_url = f"{base_url}?{query}" if query else base_url
            signature_url = request_url
            body = None

        nonce = self.nonce_generator.next_nonce()
        signature = self.signer.sign(setting.http_verb, signature_url, nonce, body)

        headers = {
            HEADER_API_KEY: self.signer.api_key,
            HEADER_NONCE: nonce,
            HEADER_SIGNATURE: signature,
        }
        for header, value in headers.items():
            self._check_header_value(header, value)
        if body:
            headers['Content-Type'] = FORM_CONTENT_TYPE

        return SignedRequest(
            http_verb=setting.http_verb,
            url=request_url,
            signature_url=signature_url,
            nonce=nonce,
            signature=signature,
            headers=headers,
            body=body,
        )

    @staticmethod
    def _check_header_value(header: str, value: str) -> None:
        if not _VALID_HEADER_VALUE.fullmatch(value):
            raise HeaderValueError(header, f"Invalid value for header {header}")
        try:
            value.encode('latin-1')
        except UnicodeEncodeError:
            raise HeaderValueError(header, f"Header {header} contains non latin-1 characters") from None

    # --- Dispatch -------------------------------------------------------

    def execute(self, method_name: str,
                parameters: Optional[Mapping[str, ParamValue]] = None,
                response_type: Optional[Type[T]] = None) -> Any:
        """
        Send one signed request and decode the response.

        Args:
            method_name: Registered API method name
            parameters: Path, query and body parameters by name
            response_type: Response model to decode into; the parsed JSON
                object is returned when omitted

        Returns:
            Instance of response_type, or the parsed JSON body

        Raises:
            TransportError: On connection, TLS or timeout failures
            ApiError: On non-2xx responses
            DecodingError: If a success body does not match response_type
        """
        request = self.build_request(method_name, parameters)

        logger.debug(f"{method_name}: {request.http_verb} {request.url}")
        started = time.monotonic()
        try:
            response = self.session.request(
                request.http_verb,
                request.url,
                headers=dict(request.headers),
                data=request.encoded_body,
                timeout=self.timeout,
            )
            # Bodies carry no charset; the API sends UTF-8
            response.encoding = response.encoding or 'utf-8'
            text = response.text
        except requests.RequestException as e:
            logger.error(f"{method_name}: transport failure: {e}")
            raise TransportError(f"Request {method_name} failed: {e}") from e

        elapsed_ms = (time.monotonic() - started) * 1000
        logger.debug(f"{method_name}: HTTP {response.status_code} in {elapsed_ms:.0f}ms")

        if not 200 <= response.status_code < 300:
            details = parse_error_body(text)
            logger.warning(
                f"{method_name}: API error {response.status_code}"
                + (f" codes={details.errors}" if details else "")
            )
            raise ApiError(response.status_code, text, details)

        if response_type is None:
            try:
                return parse_json(text)
            except ValueError as e:
                raise DecodingError(f"Response body is not valid JSON: {e}", body=text) from e
        return decode_response(text, response_type)

    # --- Orders ---------------------------------------------------------

    def show_orderbook(self, trading_pair: PairLike, order_type: OrderTypeLike,
                       filters: Optional[Mapping[str, ParamValue]] = None) -> ShowOrderbookResponse:
        """
        Get the public orderbook of a trading pair.

        Args:
            trading_pair: Trading pair, e.g. TradingPair.BTCEUR or 'btceur'
            order_type: Side of the book to list
            filters: Further query filters (price, amount_currency_to_trade, ...)

        Returns:
            ShowOrderbookResponse: Matching orders
        """
        params = dict(filters or {})
        params['trading_pair'] = TradingPair.coerce_path(trading_pair)
        params['type'] = OrderType.coerce_path(order_type)
        return self.execute(methods.METHOD_SHOW_ORDERBOOK, params, ShowOrderbookResponse)

    def show_order_details(self, trading_pair: PairLike, order_id: str) -> ShowOrderDetailsResponse:
        """Get details of a public order."""
        params = {'trading_pair': TradingPair.coerce_path(trading_pair), 'order_id': order_id}
        return self.execute(methods.METHOD_SHOW_ORDER_DETAILS, params, ShowOrderDetailsResponse)

    def create_order(self, trading_pair: PairLike, order_type: OrderTypeLike,
                     max_amount_currency_to_trade: Union[Decimal, str],
                     price: Union[Decimal, str],
                     options: Optional[Mapping[str, ParamValue]] = None) -> CreateOrderResponse:
        """
        Create a new order.

        Args:
            trading_pair: Trading pair of the order
            order_type: buy or sell
            max_amount_currency_to_trade: Maximum amount of the traded currency
            price: Price per unit in the paying currency
            options: Optional order settings (min_amount_currency_to_trade,
                end_datetime, min_trust_level, ...)

        Returns:
            CreateOrderResponse: Contains the new order_id
        """
        params = dict(options or {})
        params.update({
            'trading_pair': TradingPair.coerce_path(trading_pair),
            'type': OrderType.coerce_path(order_type),
            'max_amount_currency_to_trade': max_amount_currency_to_trade,
            'price': price,
        })
        return self.execute(methods.METHOD_CREATE_ORDER, params, CreateOrderResponse)

    def delete_order(self, trading_pair: PairLike, order_id: str) -> BasicSuccessResponse:
        params = {'trading_pair': TradingPair.coerce_path(trading_pair), 'order_id': order_id}
        return self.execute(methods.METHOD_DELETE_ORDER, params, BasicSuccessResponse)

    def show_my_orders(self, trading_pair: Optional[PairLike] = None,
                       filters: Optional[Mapping[str, ParamValue]] = None) -> ShowMyOrdersResponse:
        """
        List own orders.

        Args:
            trading_pair: Restrict to one pair; all pairs if None
            filters: Query filters (type, state, date_start, date_end, page)
        """
        params = dict(filters or {})
        if trading_pair is not None:
            params['trading_pair'] = TradingPair.coerce_path(trading_pair)
        return self.execute(methods.METHOD_SHOW_MY_ORDERS, params, ShowMyOrdersResponse)

    def show_my_order_details(self, trading_pair: PairLike, order_id: str) -> ShowOrderDetailsResponse:
        params = {'trading_pair': TradingPair.coerce_path(trading_pair), 'order_id': order_id}
        return self.execute(methods.METHOD_SHOW_MY_ORDER_DETAILS, params, ShowOrderDetailsResponse)

    # --- Trades ---------------------------------------------------------

    def execute_trade(self, trading_pair: PairLike, order_id: str, order_type: OrderTypeLike,
                      amount_currency_to_trade: Union[Decimal, str],
                      options: Optional[Mapping[str, ParamValue]] = None) -> BasicSuccessResponse:
        """
        Execute a trade against an existing order.

        Args:
            trading_pair: Trading pair of the order
            order_id: Order to trade against
            order_type: Own side of the trade (buy takes a sell order)
            amount_currency_to_trade: Amount to trade
            options: Further body parameters (payment_option)
        """
        params = dict(options or {})
        params.update({
            'trading_pair': TradingPair.coerce_path(trading_pair),
            'order_id': order_id,
            'type': OrderType.coerce_path(order_type),
            'amount_currency_to_trade': amount_currency_to_trade,
        })
        return self.execute(methods.METHOD_EXECUTE_TRADE, params, BasicSuccessResponse)

    def show_my_trades(self, trading_pair: Optional[PairLike] = None,
                       filters: Optional[Mapping[str, ParamValue]] = None) -> ShowMyTradesResponse:
        params = dict(filters or {})
        if trading_pair is not None:
            params['trading_pair'] = TradingPair.coerce_path(trading_pair)
        return self.execute(methods.METHOD_SHOW_MY_TRADES, params, ShowMyTradesResponse)

    def show_my_trade_details(self, trading_pair: PairLike, trade_id: str) -> ShowMyTradeDetailsResponse:
        params = {'trading_pair': TradingPair.coerce_path(trading_pair), 'trade_id': trade_id}
        return self.execute(methods.METHOD_SHOW_MY_TRADE_DETAILS, params, ShowMyTradeDetailsResponse)

    def mark_trade_as_paid(self, trading_pair: PairLike, trade_id: str,
                           volume_currency_to_pay_after_fee: Union[Decimal, str]) -> BasicSuccessResponse:
        params = {
            'trading_pair': TradingPair.coerce_path(trading_pair),
            'trade_id': trade_id,
            'volume_currency_to_pay_after_fee': volume_currency_to_pay_after_fee,
        }
        return self.execute(methods.METHOD_MARK_TRADE_AS_PAID, params, BasicSuccessResponse)

    def mark_trade_as_payment_received(self, trading_pair: PairLike, trade_id: str,
                                       volume_currency_to_pay_after_fee: Union[Decimal, str],
                                       rating: str,
                                       is_paid_from_correct_bank_account: bool) -> BasicSuccessResponse:
        """
        Confirm receipt of the payment for a trade (seller side).

        Args:
            trading_pair: Trading pair of the trade
            trade_id: Trade to confirm
            volume_currency_to_pay_after_fee: Received volume
            rating: positive, neutral or negative
            is_paid_from_correct_bank_account: Whether the payer account matched
        """
        params = {
            'trading_pair': TradingPair.coerce_path(trading_pair),
            'trade_id': trade_id,
            'volume_currency_to_pay_after_fee': volume_currency_to_pay_after_fee,
            'rating': rating,
            'is_paid_from_correct_bank_account': is_paid_from_correct_bank_account,
        }
        return self.execute(methods.METHOD_MARK_TRADE_AS_PAYMENT_RECEIVED, params, BasicSuccessResponse)

    def add_trade_rating(self, trading_pair: PairLike, trade_id: str, rating: str) -> BasicSuccessResponse:
        params = {
            'trading_pair': TradingPair.coerce_path(trading_pair),
            'trade_id': trade_id,
            'rating': rating,
        }
        return self.execute(methods.METHOD_ADD_TRADE_RATING, params, BasicSuccessResponse)

    def mark_coins_as_transferred(self, trading_pair: PairLike, trade_id: str,
                                  amount_currency_to_trade_after_fee: Union[Decimal, str]) -> BasicSuccessResponse:
        params = {
            'trading_pair': TradingPair.coerce_path(trading_pair),
            'trade_id': trade_id,
            'amount_currency_to_trade_after_fee': amount_currency_to_trade_after_fee,
        }
        return self.execute(methods.METHOD_MARK_COINS_AS_TRANSFERRED, params, BasicSuccessResponse)

    def mark_coins_as_received(self, trading_pair: PairLike, trade_id: str,
                               amount_currency_to_trade_after_fee: Union[Decimal, str],
                               rating: str) -> BasicSuccessResponse:
        params = {
            'trading_pair': TradingPair.coerce_path(trading_pair),
            'trade_id': trade_id,
            'amount_currency_to_trade_after_fee': amount_currency_to_trade_after_fee,
            'rating': rating,
        }
        return self.execute(methods.METHOD_MARK_COINS_AS_RECEIVED, params, BasicSuccessResponse)

    # --- Account --------------------------------------------------------

    def show_account_info(self) -> ShowAccountInfoResponse:
        """Get balances and account information."""
        return self.execute(methods.METHOD_SHOW_ACCOUNT_INFO, None, ShowAccountInfoResponse)

    def show_account_ledger(self, currency: CurrencyLike,
                            filters: Optional[Mapping[str, ParamValue]] = None) -> ShowAccountLedgerResponse:
        """
        Get the account ledger of one currency.

        Args:
            currency: Ledger currency
            filters: Query filters (type, datetime_start, datetime_end, page)
        """
        params = dict(filters or {})
        params['currency'] = Currency.coerce_path(currency)
        return self.execute(methods.METHOD_SHOW_ACCOUNT_LEDGER, params, ShowAccountLedgerResponse)

    def show_permissions(self) -> ShowPermissionsResponse:
        """Get the permissions granted to the API key."""
        return self.execute(methods.METHOD_SHOW_PERMISSIONS, None, ShowPermissionsResponse)

    # --- Withdrawals ----------------------------------------------------

    def create_withdrawal(self, currency: CurrencyLike, amount: Union[Decimal, str], address: str,
                          network_fee: Union[Decimal, str],
                          options: Optional[Mapping[str, ParamValue]] = None) -> CreateWithdrawalResponse:
        """
        Withdraw coins to an external address.

        Args:
            currency: Currency to withdraw
            amount: Amount to withdraw
            address: Recipient address
            network_fee: Network fee to pay
            options: Further body parameters (comment, recipient_purpose)

        Returns:
            CreateWithdrawalResponse: Contains the new withdrawal_id
        """
        params = dict(options or {})
        params.update({
            'currency': Currency.coerce_path(currency),
            'amount': amount,
            'address': address,
            'network_fee': network_fee,
        })
        return self.execute(methods.METHOD_CREATE_WITHDRAWAL, params, CreateWithdrawalResponse)

    def delete_withdrawal(self, currency: CurrencyLike, withdrawal_id: str) -> BasicSuccessResponse:
        params = {'currency': Currency.coerce_path(currency), 'withdrawal_id': withdrawal_id}
        return self.execute(methods.METHOD_DELETE_WITHDRAWAL, params, BasicSuccessResponse)

    def show_withdrawal(self, currency: CurrencyLike, withdrawal_id: str) -> ShowWithdrawalResponse:
        params = {'currency': Currency.coerce_path(currency), 'withdrawal_id': withdrawal_id}
        return self.execute(methods.METHOD_SHOW_WITHDRAWAL, params, ShowWithdrawalResponse)

    def show_withdrawal_min_network_fee(self, currency: CurrencyLike) -> ShowWithdrawalMinNetworkFeeResponse:
        params = {'currency': Currency.coerce_path(currency)}
        return self.execute(methods.METHOD_SHOW_WITHDRAWAL_MIN_NETWORK_FEE, params,
                            ShowWithdrawalMinNetworkFeeResponse)

    def show_withdrawals(self, currency: CurrencyLike,
                         filters: Optional[Mapping[str, ParamValue]] = None) -> ShowWithdrawalsResponse:
        params = dict(filters or {})
        params['currency'] = Currency.coerce_path(currency)
        return self.execute(methods.METHOD_SHOW_WITHDRAWALS, params, ShowWithdrawalsResponse)

    def show_outgoing_addresses(self, currency: CurrencyLike,
                                page: Optional[int] = None) -> ShowOutgoingAddressesResponse:
        params: Dict[str, ParamValue] = {'currency': Currency.coerce_path(currency)}
        if page is not None:
            params['page'] = page
        return self.execute(methods.METHOD_SHOW_OUTGOING_ADDRESSES, params, ShowOutgoingAddressesResponse)

    # --- Deposits -------------------------------------------------------

    def request_deposit_address(self, currency: CurrencyLike,
                                comment: Optional[str] = None) -> RequestDepositAddressResponse:
        """Request a new deposit address, optionally labelled with a comment."""
        params = {'currency': Currency.coerce_path(currency)}
        if comment:
            params['comment'] = comment
        return self.execute(methods.METHOD_REQUEST_DEPOSIT_ADDRESS, params, RequestDepositAddressResponse)

    def show_deposit(self, currency: CurrencyLike, deposit_id: str) -> ShowDepositResponse:
        params = {'currency': Currency.coerce_path(currency), 'deposit_id': deposit_id}
        return self.execute(methods.METHOD_SHOW_DEPOSIT, params, ShowDepositResponse)

    def show_deposits(self, currency: CurrencyLike,
                      filters: Optional[Mapping[str, ParamValue]] = None) -> ShowDepositsResponse:
        params = dict(filters or {})
        params['currency'] = Currency.coerce_path(currency)
        return self.execute(methods.METHOD_SHOW_DEPOSITS, params, ShowDepositsResponse)

    # --- Public market data ---------------------------------------------

    def show_orderbook_compact(self, trading_pair: PairLike) -> ShowOrderbookCompactResponse:
        params = {'trading_pair': TradingPair.coerce_path(trading_pair)}
        return self.execute(methods.METHOD_SHOW_ORDERBOOK_COMPACT, params, ShowOrderbookCompactResponse)

    def show_public_trade_history(self, trading_pair: PairLike,
                                  since_tid: Optional[int] = None) -> ShowPublicTradeHistoryResponse:
        """
        Get recent public trades of a pair.

        Args:
            trading_pair: Trading pair
            since_tid: Only trades after this trade id
        """
        params: Dict[str, ParamValue] = {'trading_pair': TradingPair.coerce_path(trading_pair)}
        if since_tid is not None:
            params['since_tid'] = since_tid
        return self.execute(methods.METHOD_SHOW_PUBLIC_TRADE_HISTORY, params, ShowPublicTradeHistoryResponse)

    def show_rates(self, trading_pair: PairLike) -> ShowRatesResponse:
        """
        Get the weighted rates of a trading pair.

        Args:
            trading_pair: Trading pair, e.g. TradingPair.BTCEUR

        Returns:
            ShowRatesResponse: Weighted rate over 1h, 3h and 12h
        """
        params = {'trading_pair': TradingPair.coerce_path(trading_pair)}
        return self.execute(methods.METHOD_SHOW_RATES, params, ShowRatesResponse)

    # --- Address pool ---------------------------------------------------

    def add_to_address_pool(self, currency: CurrencyLike, address: str,
                            options: Optional[Mapping[str, ParamValue]] = None) -> BasicSuccessResponse:
        params = dict(options or {})
        params.update({'currency': Currency.coerce_path(currency), 'address': address})
        return self.execute(methods.METHOD_ADD_TO_ADDRESS_POOL, params, BasicSuccessResponse)

    def remove_from_address_pool(self, currency: CurrencyLike, address: str) -> BasicSuccessResponse:
        params = {'currency': Currency.coerce_path(currency), 'address': address}
        return self.execute(methods.METHOD_REMOVE_FROM_ADDRESS_POOL, params, BasicSuccessResponse)

    def list_address_pool(self, currency: CurrencyLike,
                          page: Optional[int] = None) -> ShowOutgoingAddressesResponse:
        params: Dict[str, ParamValue] = {'currency': Currency.coerce_path(currency)}
        if page is not None:
            params['page'] = page
        return self.execute(methods.METHOD_LIST_ADDRESS_POOL, params, ShowOutgoingAddressesResponse)
