"""
WebSocket Event Extraction

Field helpers for events pushed on the Binance Chain ``transfers`` stream.
See https://docs.binance.org/api-reference/dex-api/ws-streams.html#3-transfer
"""

from typing import Dict, Any, Optional

from .field_mapper import FieldMapper


_mapper = FieldMapper()
_wsTransferMapping = _mapper.getMappingForSource('ws_transfer')

MEMO_DELIMITER = ':'


def extractTransferHash(event: Optional[Dict[str, Any]]) -> Optional[str]:
    """Get the transaction hash (``data.H``) of a transfer event, if any."""
    return _mapper.extractNestedField(event, _wsTransferMapping['hash'])


def extractMemoTxHash(event: Optional[Dict[str, Any]]) -> Optional[str]:
    """
    Get the originating transaction hash carried in the memo (``data.M``).

    Memos look like ``OUT:<hash>`` or ``REFUND:<hash>``; the hash is the
    second colon-delimited part. Returns None when the event has no memo or
    the memo has no second part.
    """
    memo = _mapper.extractNestedField(event, _wsTransferMapping['memo'])
    if not isinstance(memo, str):
        return None

    parts = memo.split(MEMO_DELIMITER)
    if len(parts) < 2:
        return None

    return parts[1]
