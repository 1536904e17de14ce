"""Enumerations, typed response models and the response decoder."""

from .enums import OrderType, TradingPair, Currency
from .decoder import decode_response, decode_dataclass, encode_dataclass, parse_json
from .models import (
    ApiModel,
    ApiErrorDetail,
    ApiErrorBody,
    parse_error_body,
    PageDetails,
    CurrencyAmounts,
    TradingPartnerInformation,
    OrderRequirements,
    BasicSuccessResponse,
    OrderbookEntry,
    ShowOrderbookResponse,
    MyOrderDetails,
    ShowMyOrdersResponse,
    ShowOrderDetailsResponse,
    CreateOrderResponse,
    MyTradeDetails,
    ShowMyTradesResponse,
    ShowMyTradeDetailsResponse,
    BalanceAmounts,
    EncryptedInformation,
    AccountInfoData,
    ShowAccountInfoResponse,
    LedgerTradeDetails,
    LedgerEntry,
    ShowAccountLedgerResponse,
    ShowPermissionsResponse,
    Deposit,
    ShowDepositResponse,
    ShowDepositsResponse,
    RequestDepositAddressResponse,
    Withdrawal,
    ShowWithdrawalResponse,
    ShowWithdrawalsResponse,
    CreateWithdrawalResponse,
    ShowWithdrawalMinNetworkFeeResponse,
    CompactOrder,
    CompactOrderbook,
    ShowOrderbookCompactResponse,
    PublicTrade,
    ShowPublicTradeHistoryResponse,
    Rates,
    ShowRatesResponse,
    OutgoingAddress,
    ShowOutgoingAddressesResponse,
)

__all__ = [
    'OrderType', 'TradingPair', 'Currency',
    'decode_response', 'decode_dataclass', 'encode_dataclass', 'parse_json',
    'ApiModel', 'ApiErrorDetail', 'ApiErrorBody', 'parse_error_body',
    'PageDetails', 'CurrencyAmounts', 'TradingPartnerInformation', 'OrderRequirements',
    'BasicSuccessResponse',
    'OrderbookEntry', 'ShowOrderbookResponse', 'MyOrderDetails', 'ShowMyOrdersResponse',
    'ShowOrderDetailsResponse', 'CreateOrderResponse',
    'MyTradeDetails', 'ShowMyTradesResponse', 'ShowMyTradeDetailsResponse',
    'BalanceAmounts', 'EncryptedInformation', 'AccountInfoData', 'ShowAccountInfoResponse',
    'LedgerTradeDetails', 'LedgerEntry', 'ShowAccountLedgerResponse', 'ShowPermissionsResponse',
    'Deposit', 'ShowDepositResponse', 'ShowDepositsResponse', 'RequestDepositAddressResponse',
    'Withdrawal', 'ShowWithdrawalResponse', 'ShowWithdrawalsResponse', 'CreateWithdrawalResponse',
    'ShowWithdrawalMinNetworkFeeResponse',
    'CompactOrder', 'CompactOrderbook', 'ShowOrderbookCompactResponse',
    'PublicTrade', 'ShowPublicTradeHistoryResponse', 'Rates', 'ShowRatesResponse',
    'OutgoingAddress', 'ShowOutgoingAddressesResponse',
]
