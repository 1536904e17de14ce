"""
Method registry for the Bitcoin.de Trading API v4.

Maps each logical API method name to its HTTP verb, URL path template and the
query/body parameters it understands. A registry is built once and only read
afterwards, so one instance can be shared by any number of concurrent calls.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterator, List, Mapping, Optional, Tuple

from ..errors import MethodNotFoundError


GET = 'GET'
POST = 'POST'
DELETE = 'DELETE'

ROLE_TRADING_PAIR = 'trading_pair'
ROLE_CURRENCY = 'currency'
ROLE_IDENTIFIER = 'identifier'

METHOD_SHOW_ORDERBOOK = 'showOrderbook'
METHOD_SHOW_ORDER_DETAILS = 'showOrderDetails'
METHOD_CREATE_ORDER = 'createOrder'
METHOD_DELETE_ORDER = 'deleteOrder'
METHOD_SHOW_MY_ORDERS = 'showMyOrders'
METHOD_SHOW_MY_ORDER_DETAILS = 'showMyOrderDetails'
METHOD_EXECUTE_TRADE = 'executeTrade'
METHOD_SHOW_MY_TRADES = 'showMyTrades'
METHOD_SHOW_MY_TRADE_DETAILS = 'showMyTradeDetails'
METHOD_MARK_TRADE_AS_PAID = 'markTradeAsPaid'
METHOD_MARK_TRADE_AS_PAYMENT_RECEIVED = 'markTradeAsPaymentReceived'
METHOD_ADD_TRADE_RATING = 'addTradeRating'
METHOD_MARK_COINS_AS_TRANSFERRED = 'markCoinsAsTransferred'
METHOD_MARK_COINS_AS_RECEIVED = 'markCoinsAsReceived'
METHOD_SHOW_ACCOUNT_INFO = 'showAccountInfo'
METHOD_SHOW_ACCOUNT_LEDGER = 'showAccountLedger'
METHOD_SHOW_PERMISSIONS = 'showPermissions'
METHOD_CREATE_WITHDRAWAL = 'createWithdrawal'
METHOD_DELETE_WITHDRAWAL = 'deleteWithdrawal'
METHOD_SHOW_WITHDRAWAL = 'showWithdrawal'
METHOD_SHOW_WITHDRAWAL_MIN_NETWORK_FEE = 'showWithdrawalMinNetworkFee'
METHOD_SHOW_WITHDRAWALS = 'showWithdrawals'
METHOD_SHOW_OUTGOING_ADDRESSES = 'showOutgoingAddresses'
METHOD_REQUEST_DEPOSIT_ADDRESS = 'requestDepositAddress'
METHOD_SHOW_DEPOSIT = 'showDeposit'
METHOD_SHOW_DEPOSITS = 'showDeposits'
METHOD_SHOW_ORDERBOOK_COMPACT = 'showOrderbookCompact'
METHOD_SHOW_PUBLIC_TRADE_HISTORY = 'showPublicTradeHistory'
METHOD_SHOW_RATES = 'showRates'
METHOD_ADD_TO_ADDRESS_POOL = 'addToAddressPool'
METHOD_REMOVE_FROM_ADDRESS_POOL = 'removeFromAddressPool'
METHOD_LIST_ADDRESS_POOL = 'listAddressPool'


@dataclass(frozen=True)
class MethodSetting:
    """Static description of one API method."""
    http_verb: str
    path_segments: Tuple[str, ...]
    recognized_parameters: FrozenSet[str] = frozenset()
    placeholder_roles: Mapping[str, str] = field(default_factory=dict)
    optional_placeholders: FrozenSet[str] = frozenset()

    def __post_init__(self):
        if self.http_verb not in (GET, POST, DELETE):
            raise ValueError(f"Unsupported HTTP verb: {self.http_verb}")
        # Freeze the mutable inputs so the setting stays hashable and read-only
        object.__setattr__(self, 'path_segments', tuple(self.path_segments))
        object.__setattr__(self, 'recognized_parameters', frozenset(self.recognized_parameters))
        object.__setattr__(self, 'placeholder_roles', MappingProxyType(dict(self.placeholder_roles)))
        object.__setattr__(self, 'optional_placeholders', frozenset(self.optional_placeholders))

        unknown = set(self.optional_placeholders) - set(self.placeholders)
        if unknown:
            raise ValueError(f"Optional placeholders not in path: {sorted(unknown)}")

    def __hash__(self):
        return hash((self.http_verb, self.path_segments, self.recognized_parameters,
                     tuple(sorted(self.placeholder_roles.items())), self.optional_placeholders))

    @staticmethod
    def is_placeholder(segment: str) -> bool:
        return segment.startswith(':')

    @property
    def placeholders(self) -> List[str]:
        """Placeholder names in path order, without the leading colon."""
        return [segment[1:] for segment in self.path_segments if self.is_placeholder(segment)]

    def role_of(self, placeholder: str) -> Optional[str]:
        return self.placeholder_roles.get(placeholder)

    def render_template(self) -> str:
        """Path template as a string, e.g. ':trading_pair/rates'."""
        return '/'.join(self.path_segments)


class MethodRegistry:
    """
    Immutable lookup table from API method name to MethodSetting.

    Built once and then only read; safe to share between threads without
    locking.
    """

    def __init__(self, settings: Mapping[str, MethodSetting]):
        self._settings = MappingProxyType(dict(settings))

    def lookup(self, method_name: str) -> MethodSetting:
        """
        Resolve the setting for a method.

        Args:
            method_name: API method name, e.g. 'showRates'

        Returns:
            MethodSetting: Verb, path template and parameters of the method

        Raises:
            MethodNotFoundError: If the method is not registered
        """
        try:
            return self._settings[method_name]
        except KeyError:
            raise MethodNotFoundError(method_name) from None

    def names(self) -> List[str]:
        return sorted(self._settings)

    def __contains__(self, method_name: object) -> bool:
        return method_name in self._settings

    def __len__(self) -> int:
        return len(self._settings)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())


def _setting(verb: str, path: str, params: Tuple[str, ...] = (),
             roles: Optional[Dict[str, str]] = None,
             optional: Tuple[str, ...] = ()) -> MethodSetting:
    return MethodSetting(
        http_verb=verb,
        path_segments=tuple(path.split('/')),
        recognized_parameters=frozenset(params),
        placeholder_roles=roles or {},
        optional_placeholders=frozenset(optional),
    )


_PAIR = {'trading_pair': ROLE_TRADING_PAIR}
_CURRENCY = {'currency': ROLE_CURRENCY}


def _pair_with(identifier: str) -> Dict[str, str]:
    return {'trading_pair': ROLE_TRADING_PAIR, identifier: ROLE_IDENTIFIER}


def _currency_with(identifier: str) -> Dict[str, str]:
    return {'currency': ROLE_CURRENCY, identifier: ROLE_IDENTIFIER}


def build_default_registry() -> MethodRegistry:
    """Build the registry of all supported Trading API v4 methods."""
    settings = {
        # Orders
        METHOD_SHOW_ORDERBOOK: _setting(
            GET, ':trading_pair/orderbook',
            ('type', 'amount_currency_to_trade', 'price', 'order_requirements_fullfilled',
             'only_kyc_full', 'only_express_orders', 'payment_option', 'sepa_option',
             'only_same_bankgroup', 'only_same_bic', 'seat_of_bank', 'page_size'),
            _PAIR),
        METHOD_SHOW_ORDER_DETAILS: _setting(
            GET, ':trading_pair/orders/public/details/:order_id', (), _pair_with('order_id')),
        METHOD_CREATE_ORDER: _setting(
            POST, ':trading_pair/orders',
            ('type', 'max_amount_currency_to_trade', 'min_amount_currency_to_trade', 'price',
             'end_datetime', 'new_order_for_remaining_amount', 'min_trust_level',
             'only_kyc_full', 'payment_option', 'sepa_option', 'seat_of_bank'),
            _PAIR),
        METHOD_DELETE_ORDER: _setting(
            DELETE, ':trading_pair/orders/:order_id', (), _pair_with('order_id')),
        METHOD_SHOW_MY_ORDERS: _setting(
            GET, ':trading_pair/orders',
            ('type', 'state', 'date_start', 'date_end', 'page'),
            _PAIR, optional=('trading_pair',)),
        METHOD_SHOW_MY_ORDER_DETAILS: _setting(
            GET, ':trading_pair/orders/:order_id', (), _pair_with('order_id')),

        # Trades
        METHOD_EXECUTE_TRADE: _setting(
            POST, ':trading_pair/trades/:order_id',
            ('type', 'amount_currency_to_trade', 'payment_option'), _pair_with('order_id')),
        METHOD_SHOW_MY_TRADES: _setting(
            GET, ':trading_pair/trades',
            ('type', 'state', 'only_trades_with_action_for_payment_or_transfer_required',
             'payment_method', 'date_start', 'date_end', 'page'),
            _PAIR, optional=('trading_pair',)),
        METHOD_SHOW_MY_TRADE_DETAILS: _setting(
            GET, ':trading_pair/trades/:trade_id', (), _pair_with('trade_id')),
        METHOD_MARK_TRADE_AS_PAID: _setting(
            POST, ':trading_pair/trades/:trade_id/mark_trade_as_paid',
            ('volume_currency_to_pay_after_fee',), _pair_with('trade_id')),
        METHOD_MARK_TRADE_AS_PAYMENT_RECEIVED: _setting(
            POST, ':trading_pair/trades/:trade_id/mark_trade_as_payment_received',
            ('volume_currency_to_pay_after_fee', 'rating', 'is_paid_from_correct_bank_account'),
            _pair_with('trade_id')),
        METHOD_ADD_TRADE_RATING: _setting(
            POST, ':trading_pair/trades/:trade_id/add_trade_rating',
            ('rating',), _pair_with('trade_id')),
        METHOD_MARK_COINS_AS_TRANSFERRED: _setting(
            POST, ':trading_pair/trades/:trade_id/mark_coins_as_transferred',
            ('amount_currency_to_trade_after_fee',), _pair_with('trade_id')),
        METHOD_MARK_COINS_AS_RECEIVED: _setting(
            POST, ':trading_pair/trades/:trade_id/mark_coins_as_received',
            ('amount_currency_to_trade_after_fee', 'rating'), _pair_with('trade_id')),

        # Account
        METHOD_SHOW_ACCOUNT_INFO: _setting(GET, 'account'),
        METHOD_SHOW_ACCOUNT_LEDGER: _setting(
            GET, ':currency/account/ledger',
            ('type', 'datetime_start', 'datetime_end', 'page'), _CURRENCY),
        METHOD_SHOW_PERMISSIONS: _setting(GET, 'permissions'),

        # Withdrawals
        METHOD_CREATE_WITHDRAWAL: _setting(
            POST, ':currency/withdrawals',
            ('amount', 'address', 'network_fee', 'comment', 'recipient_purpose'), _CURRENCY),
        METHOD_DELETE_WITHDRAWAL: _setting(
            DELETE, ':currency/withdrawals/:withdrawal_id', (), _currency_with('withdrawal_id')),
        METHOD_SHOW_WITHDRAWAL: _setting(
            GET, ':currency/withdrawals/:withdrawal_id', (), _currency_with('withdrawal_id')),
        METHOD_SHOW_WITHDRAWAL_MIN_NETWORK_FEE: _setting(
            GET, ':currency/withdrawals/min_network_fee', (), _CURRENCY),
        METHOD_SHOW_WITHDRAWALS: _setting(
            GET, ':currency/withdrawals', ('address', 'page'), _CURRENCY),
        METHOD_SHOW_OUTGOING_ADDRESSES: _setting(
            GET, ':currency/outgoing_address', ('page',), _CURRENCY),

        # Deposits
        METHOD_REQUEST_DEPOSIT_ADDRESS: _setting(
            POST, ':currency/deposits/new_address', ('comment',), _CURRENCY),
        METHOD_SHOW_DEPOSIT: _setting(
            GET, ':currency/deposits/:deposit_id', (), _currency_with('deposit_id')),
        METHOD_SHOW_DEPOSITS: _setting(
            GET, ':currency/deposits', ('address', 'page'), _CURRENCY),

        # Public market data
        METHOD_SHOW_ORDERBOOK_COMPACT: _setting(
            GET, ':trading_pair/orderbook/compact', (), _PAIR),
        METHOD_SHOW_PUBLIC_TRADE_HISTORY: _setting(
            GET, ':trading_pair/trades/history', ('since_tid',), _PAIR),
        METHOD_SHOW_RATES: _setting(GET, ':trading_pair/rates', (), _PAIR),

        # Address pool
        METHOD_ADD_TO_ADDRESS_POOL: _setting(
            POST, ':currency/address_pool', ('address', 'amount_usages', 'comment'), _CURRENCY),
        METHOD_REMOVE_FROM_ADDRESS_POOL: _setting(
            DELETE, ':currency/address_pool/:address', (), _currency_with('address')),
        METHOD_LIST_ADDRESS_POOL: _setting(
            GET, ':currency/address_pool', ('usable', 'comment', 'page'), _CURRENCY),
    }
    return MethodRegistry(settings)
