"""
Typed response models for the Bitcoin.de Trading API v4.

Monetary amounts are Decimal, timestamps are timezone-aware datetimes. Every
model can be built from the decoded JSON with from_dict() and rendered back
with to_dict().
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Type, TypeVar

from .decoder import decode_dataclass, encode_dataclass, parse_json


M = TypeVar('M', bound='ApiModel')


class ApiModel:
    """Mixin adding dict conversion to response dataclasses."""

    @classmethod
    def from_dict(cls: Type[M], data: Dict[str, Any]) -> M:
        return decode_dataclass(cls, data, '')

    def to_dict(self) -> Dict[str, Any]:
        return encode_dataclass(self)


def _json(name: str) -> Any:
    return field(metadata={'json': name})


# --- Shared ---------------------------------------------------------------

@dataclass
class ApiErrorDetail(ApiModel):
    """Entry of the ``errors`` array in a response body."""
    message: str
    code: int
    field: Optional[str] = None


@dataclass
class ApiErrorBody(ApiModel):
    """Structured body of a failed request: parallel code and message lists."""
    errors: List[int]
    messages: List[str] = field(default_factory=list)


def parse_error_body(text: Optional[str]) -> Optional[ApiErrorBody]:
    """
    Best-effort parse of an error response body.

    Accepts both bare code lists and lists of ``{"code": ..., "message": ...}``
    objects. Never raises.

    Returns:
        ApiErrorBody or None if the body carries no recognizable structure
    """
    if not text:
        return None
    try:
        data = parse_json(text)
    except ValueError:
        return None
    if not isinstance(data, dict) or not isinstance(data.get('errors'), list):
        return None

    codes: List[int] = []
    messages: List[str] = []
    for entry in data['errors']:
        if isinstance(entry, int) and not isinstance(entry, bool):
            codes.append(entry)
        elif isinstance(entry, dict) and isinstance(entry.get('code'), int):
            codes.append(entry['code'])
            if isinstance(entry.get('message'), str):
                messages.append(entry['message'])
        else:
            return None

    raw_messages = data.get('messages')
    if isinstance(raw_messages, list):
        messages = [str(message) for message in raw_messages]

    return ApiErrorBody(errors=codes, messages=messages)


@dataclass
class PageDetails(ApiModel):
    current: int
    last: int


@dataclass
class CurrencyAmounts(ApiModel):
    currency: str
    before_fee: Decimal
    after_fee: Decimal


@dataclass
class TradingPartnerInformation(ApiModel):
    username: str
    is_kyc_full: bool
    trust_level: str
    bank_name: str
    bic: str
    amount_trades: int
    rating: int
    depositor: Optional[str] = None
    iban: Optional[str] = None
    seat_of_bank: Optional[str] = None


@dataclass
class OrderRequirements(ApiModel):
    min_trust_level: str
    only_kyc_full: Optional[bool] = None
    seat_of_bank: Optional[List[str]] = None
    payment_option: Optional[int] = None


@dataclass
class BasicSuccessResponse(ApiModel):
    """Response of calls that only report success (execute, mark, rate, delete)."""
    errors: List[ApiErrorDetail]
    credits: int


# --- Orders ---------------------------------------------------------------

@dataclass
class OrderbookEntry(ApiModel):
    order_id: str
    is_external_wallet_order: bool
    trading_pair: str
    order_type: str = _json('type')
    max_amount_currency_to_trade: Decimal
    min_amount_currency_to_trade: Decimal
    price: Decimal
    max_volume_currency_to_pay: Decimal
    min_volume_currency_to_pay: Decimal
    order_requirements_fullfilled: bool
    sepa_option: int
    trading_partner_information: TradingPartnerInformation
    order_requirements: OrderRequirements


@dataclass
class ShowOrderbookResponse(ApiModel):
    orders: List[OrderbookEntry]
    errors: List[ApiErrorDetail]
    credits: int


@dataclass
class MyOrderDetails(ApiModel):
    order_id: str
    trading_pair: str
    is_external_wallet_order: bool
    order_type: str = _json('type')
    max_amount_currency_to_trade: Decimal
    min_amount_currency_to_trade: Decimal
    price: Decimal
    max_volume_currency_to_pay: Decimal
    min_volume_currency_to_pay: Decimal
    new_order_for_remaining_amount: bool
    state: int
    order_requirements: OrderRequirements
    sepa_option: int
    created_at: datetime
    end_datetime: Optional[datetime] = None
    trading_partner_information: Optional[TradingPartnerInformation] = None


@dataclass
class ShowMyOrdersResponse(ApiModel):
    orders: List[MyOrderDetails]
    page: PageDetails
    errors: List[ApiErrorDetail]
    credits: int


@dataclass
class ShowOrderDetailsResponse(ApiModel):
    order: MyOrderDetails
    errors: List[ApiErrorDetail]
    credits: int


@dataclass
class CreateOrderResponse(ApiModel):
    order_id: str
    errors: List[ApiErrorDetail]
    credits: int


# --- Trades ---------------------------------------------------------------

@dataclass
class MyTradeDetails(ApiModel):
    trade_id: str
    is_external_wallet_trade: bool
    trading_pair: str
    trade_type: str = _json('type')
    amount_currency_to_trade: Decimal
    price: Decimal
    volume_currency_to_pay: Decimal
    amount_currency_to_trade_after_fee: Decimal
    volume_currency_to_pay_after_fee: Decimal
    fee_currency_to_pay: Decimal
    fee_currency_to_trade: Decimal
    state: int
    trading_partner_information: TradingPartnerInformation
    created_at: datetime
    payment_method: int
    new_order_id_for_remaining_amount: Optional[str] = None
    is_trade_marked_as_paid: Optional[bool] = None
    trade_marked_as_paid_at: Optional[datetime] = None
    my_rating_for_trading_partner: Optional[str] = None
    successfully_finished_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    primary_currency: Optional[Dict[str, CurrencyAmounts]] = None
    secondary_currency: Optional[Dict[str, CurrencyAmounts]] = None


@dataclass
class ShowMyTradesResponse(ApiModel):
    trades: List[MyTradeDetails]
    page: PageDetails
    errors: List[ApiErrorDetail]
    credits: int


@dataclass
class ShowMyTradeDetailsResponse(ApiModel):
    trade: MyTradeDetails
    errors: List[ApiErrorDetail]
    credits: int


# --- Account --------------------------------------------------------------

@dataclass
class BalanceAmounts(ApiModel):
    total_amount: Decimal
    available_amount: Decimal
    reserved_amount: Decimal


@dataclass
class EncryptedInformation(ApiModel):
    uid: str
    bic_short: Optional[str] = None
    bic_full: Optional[str] = None


@dataclass
class AccountInfoData(ApiModel):
    balances: Dict[str, BalanceAmounts]
    encrypted_information: EncryptedInformation


@dataclass
class ShowAccountInfoResponse(ApiModel):
    data: AccountInfoData
    errors: List[ApiErrorDetail]
    credits: int


@dataclass
class LedgerTradeDetails(ApiModel):
    trade_id: str
    trading_pair: str
    price: Decimal
    is_external_wallet_trade: bool
    primary_currency: Dict[str, CurrencyAmounts]
    secondary_currency: Dict[str, CurrencyAmounts]


@dataclass
class LedgerEntry(ApiModel):
    date: datetime
    entry_type: str = _json('type')
    reference: str
    cashflow: Decimal
    balance: Decimal
    trade: Optional[LedgerTradeDetails] = None


@dataclass
class ShowAccountLedgerResponse(ApiModel):
    account_ledger: List[LedgerEntry]
    page: PageDetails
    errors: List[ApiErrorDetail]
    credits: int


@dataclass
class ShowPermissionsResponse(ApiModel):
    permissions: List[str]
    errors: List[ApiErrorDetail]
    credits: int


# --- Deposits -------------------------------------------------------------

@dataclass
class Deposit(ApiModel):
    deposit_id: int
    address: str
    amount: Decimal
    state: int
    txid: str
    confirmations: int
    created_at: datetime
    recipient_purpose: Optional[str] = None


@dataclass
class ShowDepositResponse(ApiModel):
    deposit: Deposit
    errors: List[ApiErrorDetail]
    credits: int


@dataclass
class ShowDepositsResponse(ApiModel):
    deposits: List[Deposit]
    page: PageDetails
    errors: List[ApiErrorDetail]
    credits: int


@dataclass
class RequestDepositAddressResponse(ApiModel):
    address: str
    errors: List[ApiErrorDetail]
    credits: int
    recipient_purpose: Optional[str] = None


# --- Withdrawals ----------------------------------------------------------

@dataclass
class Withdrawal(ApiModel):
    withdrawal_id: str
    address: str
    amount: Decimal
    network_fee: Decimal
    created_at: datetime
    state: int
    recipient_purpose: Optional[str] = None
    comment: Optional[str] = None
    transferred_at: Optional[datetime] = None
    txid: Optional[str] = None


@dataclass
class ShowWithdrawalResponse(ApiModel):
    withdrawal: Withdrawal
    errors: List[ApiErrorDetail]
    credits: int


@dataclass
class ShowWithdrawalsResponse(ApiModel):
    withdrawals: List[Withdrawal]
    page: PageDetails
    errors: List[ApiErrorDetail]
    credits: int


@dataclass
class CreateWithdrawalResponse(ApiModel):
    withdrawal_id: int
    errors: List[ApiErrorDetail]
    credits: int


@dataclass
class ShowWithdrawalMinNetworkFeeResponse(ApiModel):
    min_network_fee: Decimal
    errors: List[ApiErrorDetail]
    credits: int


# --- Public market data ---------------------------------------------------

@dataclass
class CompactOrder(ApiModel):
    price: Decimal
    amount_currency_to_trade: Decimal


@dataclass
class CompactOrderbook(ApiModel):
    bids: List[CompactOrder]
    asks: List[CompactOrder]


@dataclass
class ShowOrderbookCompactResponse(ApiModel):
    trading_pair: str
    orders: CompactOrderbook
    errors: List[ApiErrorDetail]
    credits: int


@dataclass
class PublicTrade(ApiModel):
    date: datetime = field(metadata={'format': 'unix'})
    price: Decimal
    amount_currency_to_trade: Decimal
    tid: int


@dataclass
class ShowPublicTradeHistoryResponse(ApiModel):
    trading_pair: str
    trades: List[PublicTrade]
    errors: List[ApiErrorDetail]
    credits: int


@dataclass
class Rates(ApiModel):
    rate_weighted: Decimal
    rate_weighted_3h: Decimal
    rate_weighted_12h: Decimal


@dataclass
class ShowRatesResponse(ApiModel):
    trading_pair: str
    rates: Rates
    errors: List[ApiErrorDetail]
    credits: int


# --- Addresses ------------------------------------------------------------

@dataclass
class OutgoingAddress(ApiModel):
    address_id: int
    recipient_address: str
    recipient_purpose: Optional[str] = None
    comment: Optional[str] = None


@dataclass
class ShowOutgoingAddressesResponse(ApiModel):
    """Also returned by listAddressPool."""
    outgoing_address: List[OutgoingAddress]
    page: PageDetails
    errors: List[ApiErrorDetail]
    credits: int
