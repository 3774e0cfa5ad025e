"""
Transaction Ingestion Module

Fetches raw transaction records and fee schedules from the Binance Chain
DEX REST API.
"""

from .base import BaseIngestion, IngestionError
from .binance_dex import BinanceDexIngestion

__all__ = [
    'BaseIngestion',
    'BinanceDexIngestion',
    'IngestionError',
]
