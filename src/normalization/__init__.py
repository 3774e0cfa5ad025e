"""
Transaction Normalization Module

Adapts Binance Chain payloads to the chain-agnostic transaction model
shared by the multi-chain client.

Features:
- Hash extraction from WebSocket transfer events
- Fee schedule classification
- Transaction type mapping
- REST transaction record normalization
"""

from .schema import (
    Asset,
    BaseAmount,
    BinanceTxType,
    FeeKind,
    FeeSchedule,
    NormalizedTx,
    TxFrom,
    TxTo,
    TxType,
)
from .assets import AssetBNB, assetFromString, assetToBase
from .events import extractTransferHash, extractMemoTxHash
from .fees import isFee, isFreezeFee, isTransferFee, isDexFees, classifyFee, classifyFees, getFreezeFee
from .normalizer import TxNormalizer, mapTxType, normalizeTx, parseTimestamp
from .field_mapper import FieldMapper

__all__ = [
    'Asset',
    'AssetBNB',
    'BaseAmount',
    'BinanceTxType',
    'FeeKind',
    'FeeSchedule',
    'FieldMapper',
    'NormalizedTx',
    'TxFrom',
    'TxNormalizer',
    'TxTo',
    'TxType',
    'assetFromString',
    'assetToBase',
    'classifyFee',
    'classifyFees',
    'extractMemoTxHash',
    'extractTransferHash',
    'getFreezeFee',
    'isDexFees',
    'isFee',
    'isFreezeFee',
    'isTransferFee',
    'mapTxType',
    'normalizeTx',
    'parseTimestamp',
]
