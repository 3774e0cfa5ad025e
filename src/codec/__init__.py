"""
Amino Codec Module

Decodes Binance Chain amino-encoded transactions into message objects.
"""

from .amino import AminoDecodeError, AminoReader
from .messages import (
    Coin,
    Input,
    Output,
    Msg,
    SendMsg,
    NewOrderMsg,
    CancelOrderMsg,
    FreezeMsg,
    UnfreezeMsg,
    TokenIssueMsg,
    MintMsg,
    BurnMsg,
    StdSignature,
    StdTx,
    getMsgByAminoPrefix,
)
from .decoder import (
    decodeTxMessages,
    marshalBinaryLengthPrefixed,
    unmarshalBinaryLengthPrefixed,
)

__all__ = [
    'AminoDecodeError',
    'AminoReader',
    'BurnMsg',
    'CancelOrderMsg',
    'Coin',
    'FreezeMsg',
    'Input',
    'MintMsg',
    'Msg',
    'NewOrderMsg',
    'Output',
    'SendMsg',
    'StdSignature',
    'StdTx',
    'TokenIssueMsg',
    'UnfreezeMsg',
    'decodeTxMessages',
    'getMsgByAminoPrefix',
    'marshalBinaryLengthPrefixed',
    'unmarshalBinaryLengthPrefixed',
]
