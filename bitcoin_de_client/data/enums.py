"""
Enumerations used in Trading API parameters and paths.

Each enum maps its members to the exchange's string form with an explicit
lookup table, so conversion in both directions is exhaustive.
"""

from enum import Enum
from typing import Union

from ..errors import UnclassifiedError


class _ApiEnum(Enum):
    """Enum whose value is the exchange's string representation."""

    def as_str(self) -> str:
        return self.value

    def to_path(self) -> str:
        """Lowercase form used in URL paths, e.g. 'btceur'."""
        return self.value.lower()

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_str(cls, value: str):
        """
        Parse a string, ignoring case.

        Raises:
            UnclassifiedError: If the value does not name a member
        """
        if isinstance(value, cls):
            return value
        lookup = {member.value.lower(): member for member in cls}
        try:
            return lookup[str(value).strip().lower()]
        except KeyError:
            raise UnclassifiedError(f"Invalid {cls.__name__} value: {value!r}") from None

    @classmethod
    def coerce_path(cls, value: Union['_ApiEnum', str]) -> str:
        """Accept a member or its string form and return the path form."""
        return cls.from_str(value).to_path()


class OrderType(_ApiEnum):
    BUY = 'buy'
    SELL = 'sell'

    def to_path(self) -> str:
        return self.value


class TradingPair(_ApiEnum):
    BTCEUR = 'BTCEUR'
    BCHEUR = 'BCHEUR'
    ETHBTC = 'ETHBTC'
    ETHEUR = 'ETHEUR'
    LTCEUR = 'LTCEUR'
    LTCBTC = 'LTCBTC'
    XRPEUR = 'XRPEUR'
    XRPBTC = 'XRPBTC'
    EOSEUR = 'EOSEUR'
    EOSBTC = 'EOSBTC'
    BNBEUR = 'BNBEUR'
    BNBBTC = 'BNBBTC'
    XMREUR = 'XMREUR'
    XMRBTC = 'XMRBTC'
    TRXEUR = 'TRXEUR'
    TRXBTC = 'TRXBTC'
    ETCBTC = 'ETCBTC'
    ETCEUR = 'ETCEUR'
    DASHEUR = 'DASHEUR'
    DASHBTC = 'DASHBTC'
    ZECEUR = 'ZECEUR'
    ZECBTC = 'ZECBTC'
    REPEUR = 'REPEUR'
    REPBTC = 'REPBTC'
    BATEUR = 'BATEUR'
    BATBTC = 'BATBTC'
    AIDUSDEUR = 'AIDUSDEUR'
    AIDUSDBTC = 'AIDUSDBTC'
    XLMEUR = 'XLMEUR'
    XLMBTC = 'XLMBTC'
    AVAXEUR = 'AVAXEUR'
    AVAXBTC = 'AVAXBTC'
    ADAEUR = 'ADAEUR'
    ADABTC = 'ADABTC'
    GRTEUR = 'GRTEUR'
    GRTBTC = 'GRTBTC'
    LINKEUR = 'LINKEUR'
    LINKBTC = 'LINKBTC'
    MATICBTC = 'MATICBTC'
    MATICEUR = 'MATICEUR'
    SOLEUR = 'SOLEUR'
    SOLBTC = 'SOLBTC'
    DOTEUR = 'DOTEUR'
    DOTBTC = 'DOTBTC'
    UNIEUR = 'UNIEUR'
    UNIBTC = 'UNIBTC'
    XMRETH = 'XMRETH'
    XRPETH = 'XRPETH'
    LTCETH = 'LTCETH'
    DASHETH = 'DASHETH'
    ZECETH = 'ZECETH'
    REPBCH = 'REPBCH'
    BATBCH = 'BATBCH'
    XLMBCH = 'XLMBCH'
    ADAETH = 'ADAETH'
    GRTETH = 'GRTETH'
    LINKETH = 'LINKETH'
    MATICETH = 'MATICETH'
    SOLETH = 'SOLETH'
    DOTETH = 'DOTETH'
    UNIBNB = 'UNIBNB'
    EURCHF = 'EURCHF'
    BTCCHF = 'BTCCHF'
    ETHCHF = 'ETHCHF'


class Currency(_ApiEnum):
    BTC = 'BTC'
    BCH = 'BCH'
    ETH = 'ETH'
    EUR = 'EUR'
    LTC = 'LTC'
    XRP = 'XRP'
    EOS = 'EOS'
    BNB = 'BNB'
    XMR = 'XMR'
    TRX = 'TRX'
    ETC = 'ETC'
    DASH = 'DASH'
    ZEC = 'ZEC'
    REP = 'REP'
    BAT = 'BAT'
    AIDUS = 'AIDUS'
    XLM = 'XLM'
    AVAX = 'AVAX'
    ADA = 'ADA'
    GRT = 'GRT'
    LINK = 'LINK'
    MATIC = 'MATIC'
    SOL = 'SOL'
    DOT = 'DOT'
    UNI = 'UNI'
    CHF = 'CHF'
    USD = 'USD'
