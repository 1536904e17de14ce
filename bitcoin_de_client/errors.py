"""
Error taxonomy for the Bitcoin.de Trading API client.

Every failure raised by the client derives from BitcoinDeAPIError, so callers
can catch the whole family at once or single out one kind (transport, API,
decoding, ...).
"""

from enum import IntEnum
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .data.models import ApiErrorBody


class BitcoinDeAPIError(Exception):
    """Base exception for all Bitcoin.de client errors."""

    def __init__(self, message: str, status_code: Optional[int] = None, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code


class TransportError(BitcoinDeAPIError):
    """Network, TLS or timeout failure while talking to the exchange."""

    def __init__(self, message: str):
        super().__init__(message, error_code='TRANSPORT')


class UrlError(BitcoinDeAPIError):
    """A request URL could not be assembled."""

    def __init__(self, message: str):
        super().__init__(message, error_code='URL')


class EncodingError(BitcoinDeAPIError):
    """A query string or form body could not be encoded."""

    def __init__(self, message: str):
        super().__init__(message, error_code='ENCODING')


class DecodingError(BitcoinDeAPIError):
    """A success body did not match the expected response shape."""

    def __init__(self, message: str, body: Optional[str] = None):
        super().__init__(message, error_code='DECODING')
        self.body = body


class SigningError(BitcoinDeAPIError):
    """The API secret cannot be used as an HMAC key."""

    def __init__(self, message: str):
        super().__init__(message, error_code='SIGNING')


class ClockError(BitcoinDeAPIError):
    """The system clock produced an unusable value for the nonce."""

    def __init__(self, message: str):
        super().__init__(message, error_code='CLOCK')


class HeaderValueError(BitcoinDeAPIError):
    """A computed header value is not legal in an HTTP header."""

    def __init__(self, header: str, message: str):
        super().__init__(message, error_code='HEADER')
        self.header = header


class MethodNotFoundError(BitcoinDeAPIError):
    """The requested API method is not in the method registry."""

    def __init__(self, method_name: str):
        super().__init__(f"API method not found in registry: {method_name}", error_code='METHOD_NOT_FOUND')
        self.method_name = method_name


class MissingPathParameterError(BitcoinDeAPIError):
    """A path placeholder has no value in the supplied parameters."""

    def __init__(self, method_name: str, parameter: str):
        super().__init__(
            f"Missing path parameter '{parameter}' for method {method_name}",
            error_code='MISSING_PATH_PARAMETER'
        )
        self.method_name = method_name
        self.parameter = parameter


class ApiError(BitcoinDeAPIError):
    """
    Non-2xx response from the exchange.

    Carries the HTTP status, the raw body and, when the body could be parsed,
    the structured error codes and messages.
    """

    def __init__(self, status_code: int, body: str, details: Optional['ApiErrorBody'] = None):
        if details is not None and details.messages:
            summary = '; '.join(details.messages)
        else:
            summary = body[:200] if body else 'no response body'
        super().__init__(f"API request failed with status {status_code}: {summary}", status_code, 'API')
        self.body = body
        self.details = details

    @property
    def codes(self) -> List[int]:
        return list(self.details.errors) if self.details is not None else []

    @property
    def messages(self) -> List[str]:
        return list(self.details.messages) if self.details is not None else []


class UnclassifiedError(BitcoinDeAPIError):
    """Any other failure, e.g. an unknown enum value supplied by the caller."""

    def __init__(self, message: str):
        super().__init__(message, error_code='OTHER')


class ApiErrorCode(IntEnum):
    """Error codes documented for the Trading API v4."""

    MISSING_HEADER = 1
    INACTIVE_API_KEY = 2
    WRONG_SIGNATURE = 3
    MISSING_POST_PARAMETER = 4
    MISSING_GET_PARAMETER = 5
    INVALID_NONCE = 6
    UNKNOWN_API_METHOD = 7
    PERMISSION_DENIED = 8
    TRADING_PAIR_NOT_TRADABLE = 9
    INVALID_ORDER_TYPE = 10
    INVALID_AMOUNT = 11
    INVALID_PRICE = 12
    ORDER_NOT_FOUND = 13
    TRADE_NOT_FOUND = 14
    WITHDRAWAL_NOT_FOUND = 15
    DEPOSIT_NOT_FOUND = 16
    ADDRESS_NOT_FOUND = 17
    AMOUNT_TOO_LOW = 18
    AMOUNT_TOO_HIGH = 19
    PRICE_TOO_LOW = 20
    PRICE_TOO_HIGH = 21
    INSUFFICIENT_CREDITS = 22
    INSUFFICIENT_VOLUME = 23
    INVALID_PAYMENT_OPTION = 24
    INVALID_RATING = 25
    INVALID_ORDER_ID = 26
    INVALID_TRADE_ID = 27
    INVALID_WITHDRAWAL_ID = 28
    INVALID_DEPOSIT_ID = 29
    INVALID_ADDRESS_ID = 30
    INVALID_CURRENCY = 31
    INVALID_TRADING_PAIR = 32
    INVALID_ORDER_PAYMENT_OPTIONS = 33
    INVALID_ACCOUNT_LEDGER_TYPE = 34
    INVALID_TRUST_LEVEL = 35
    INVALID_TRADE_STATE = 36
    INVALID_ORDER_STATE = 37
    INVALID_WITHDRAWAL_STATE = 38
    INVALID_DEPOSIT_STATE = 39
    INVALID_PAYMENT_METHOD = 40
    INVALID_WITHDRAWAL_REJECT_REASON = 41
    INVALID_DEPOSIT_REJECT_REASON = 42
    INVALID_ADDRESS_POOL_STATE = 43
    INVALID_OUTGOING_ADDRESS_STATE = 44
    ADDRESS_POOL_IS_EMPTY = 45
    NO_NEW_ADDRESS_CREATED = 46
    INVALID_RECIPIENT_ADDRESS = 47
    INVALID_RECIPIENT_PURPOSE = 48
    INVALID_COMMENT = 49


def describe_error_code(code: int) -> str:
    """
    Render a remote error code for humans.

    Args:
        code: Numeric code from an error response

    Returns:
        str: e.g. "5 (MISSING_GET_PARAMETER)", or just the number if unknown
    """
    try:
        return f"{code} ({ApiErrorCode(code).name})"
    except ValueError:
        return str(code)
