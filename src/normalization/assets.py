# Asset identifiers and fixed-point amounts

from decimal import Decimal, InvalidOperation, ROUND_DOWN
from typing import Optional, Union

from .schema import Asset, BaseAmount


BNB_CHAIN = 'BNB'
BNB_DECIMAL = 8

SUPPORTED_CHAINS = ('BNB', 'BTC', 'BCH', 'LTC', 'DOGE', 'ETH', 'THOR', 'GAIA', 'POLKA', 'BSC', 'AVAX')

NON_SYNTH_DELIMITER = '.'
SYNTH_DELIMITER = '/'

AssetBNB = Asset(chain=BNB_CHAIN, symbol='BNB', ticker='BNB')


def isChain(chain: str) -> bool:
    return chain in SUPPORTED_CHAINS


def assetFromString(value: str) -> Optional[Asset]:
    """
    Parse an asset identifier such as ``BNB.BUSD-BD1``.

    Returns None for anything that is not ``CHAIN<delimiter>SYMBOL`` with a
    known chain and a non-empty symbol. The ticker is the symbol up to the
    first ``-``.
    """
    if not isinstance(value, str):
        return None

    isSynth = SYNTH_DELIMITER in value
    delimiter = SYNTH_DELIMITER if isSynth else NON_SYNTH_DELIMITER
    parts = value.split(delimiter)

    if len(parts) <= 1 or not parts[1]:
        return None

    chain = parts[0]
    if not chain or not isChain(chain):
        return None

    symbol = parts[1]
    ticker = symbol.split('-')[0]

    return Asset(chain=chain, symbol=symbol, ticker=ticker, synth=isSynth)


def assetToBase(value: Union[str, int, float, Decimal], decimal: int = BNB_DECIMAL) -> BaseAmount:
    """Scale a decimal asset value to integer base units, rounding down."""
    try:
        # str() first so floats like 1.1 keep their printed value
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Invalid amount value: {value}") from e

    base = amount.scaleb(decimal).to_integral_value(rounding=ROUND_DOWN)
    return BaseAmount(amount=int(base), decimal=decimal)
