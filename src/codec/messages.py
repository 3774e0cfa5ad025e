"""
Binance Chain message types and their amino prefixes.

Each message is a dataclass whose ``FIELDS`` table lists the wire fields as
``(field number, attribute, kind)``. Kinds are ``bytes``, ``string``,
``int64``, ``bool``, ``(repeated, Class)`` for nested structs and
``interface`` for fields that hold prefixed messages.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Type


REPEATED = 'repeated'
INTERFACE = 'interface'


@dataclass
class Coin:
    denom: str = ''
    amount: int = 0

    FIELDS = (
        (1, 'denom', 'string'),
        (2, 'amount', 'int64'),
    )


@dataclass
class Input:
    address: bytes = b''
    coins: List[Coin] = field(default_factory=list)

    FIELDS = (
        (1, 'address', 'bytes'),
        (2, 'coins', (REPEATED, Coin)),
    )


@dataclass
class Output:
    address: bytes = b''
    coins: List[Coin] = field(default_factory=list)

    FIELDS = (
        (1, 'address', 'bytes'),
        (2, 'coins', (REPEATED, Coin)),
    )


class Msg:
    AMINO_PREFIX = ''
    FIELDS = ()

    @classmethod
    def defaultMsg(cls) -> 'Msg':
        return cls()


@dataclass
class SendMsg(Msg):
    inputs: List[Input] = field(default_factory=list)
    outputs: List[Output] = field(default_factory=list)

    AMINO_PREFIX = '2a2c87fa'
    FIELDS = (
        (1, 'inputs', (REPEATED, Input)),
        (2, 'outputs', (REPEATED, Output)),
    )


@dataclass
class NewOrderMsg(Msg):
    sender: bytes = b''
    id: str = ''
    symbol: str = ''
    ordertype: int = 0
    side: int = 0
    price: int = 0
    quantity: int = 0
    timeinforce: int = 0

    AMINO_PREFIX = 'ce6dc043'
    FIELDS = (
        (1, 'sender', 'bytes'),
        (2, 'id', 'string'),
        (3, 'symbol', 'string'),
        (4, 'ordertype', 'int64'),
        (5, 'side', 'int64'),
        (6, 'price', 'int64'),
        (7, 'quantity', 'int64'),
        (8, 'timeinforce', 'int64'),
    )


@dataclass
class CancelOrderMsg(Msg):
    sender: bytes = b''
    symbol: str = ''
    refid: str = ''

    AMINO_PREFIX = '166e681b'
    FIELDS = (
        (1, 'sender', 'bytes'),
        (2, 'symbol', 'string'),
        (3, 'refid', 'string'),
    )


@dataclass
class FreezeMsg(Msg):
    from_: bytes = b''
    symbol: str = ''
    amount: int = 0

    AMINO_PREFIX = 'e774b32d'
    FIELDS = (
        (1, 'from_', 'bytes'),
        (2, 'symbol', 'string'),
        (3, 'amount', 'int64'),
    )


@dataclass
class UnfreezeMsg(Msg):
    from_: bytes = b''
    symbol: str = ''
    amount: int = 0

    AMINO_PREFIX = '6515ff0d'
    FIELDS = (
        (1, 'from_', 'bytes'),
        (2, 'symbol', 'string'),
        (3, 'amount', 'int64'),
    )


@dataclass
class TokenIssueMsg(Msg):
    from_: bytes = b''
    name: str = ''
    symbol: str = ''
    total_supply: int = 0
    mintable: bool = False

    AMINO_PREFIX = '17efab80'
    FIELDS = (
        (1, 'from_', 'bytes'),
        (2, 'name', 'string'),
        (3, 'symbol', 'string'),
        (4, 'total_supply', 'int64'),
        (5, 'mintable', 'bool'),
    )


@dataclass
class MintMsg(Msg):
    from_: bytes = b''
    symbol: str = ''
    amount: int = 0

    AMINO_PREFIX = '467e0829'
    FIELDS = (
        (1, 'from_', 'bytes'),
        (2, 'symbol', 'string'),
        (3, 'amount', 'int64'),
    )


@dataclass
class BurnMsg(Msg):
    from_: bytes = b''
    symbol: str = ''
    amount: int = 0

    AMINO_PREFIX = '7ed2d2a0'
    FIELDS = (
        (1, 'from_', 'bytes'),
        (2, 'symbol', 'string'),
        (3, 'amount', 'int64'),
    )


@dataclass
class StdSignature:
    pub_key: bytes = b''
    signature: bytes = b''
    account_number: int = 0
    sequence: int = 0

    FIELDS = (
        (1, 'pub_key', 'bytes'),
        (2, 'signature', 'bytes'),
        (3, 'account_number', 'int64'),
        (4, 'sequence', 'int64'),
    )


@dataclass
class StdTx:
    msgs: List[Msg] = field(default_factory=list)
    signatures: List[StdSignature] = field(default_factory=list)
    memo: str = ''
    source: int = 0
    data: bytes = b''

    AMINO_PREFIX = 'f0625dee'
    FIELDS = (
        (1, 'msgs', INTERFACE),
        (2, 'signatures', (REPEATED, StdSignature)),
        (3, 'memo', 'string'),
        (4, 'source', 'int64'),
        (5, 'data', 'bytes'),
    )


MSG_TYPES: Dict[str, Type[Msg]] = {
    msgType.AMINO_PREFIX: msgType
    for msgType in (
        SendMsg,
        NewOrderMsg,
        CancelOrderMsg,
        FreezeMsg,
        UnfreezeMsg,
        TokenIssueMsg,
        MintMsg,
        BurnMsg,
    )
}


def getMsgByAminoPrefix(prefix: str) -> Optional[Type[Msg]]:
    return MSG_TYPES.get(prefix.lower())


def fieldsByNumber(cls: Any) -> Dict[int, tuple]:
    return {spec[0]: spec for spec in cls.FIELDS}
