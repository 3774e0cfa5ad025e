from typing import Dict, Any, Iterable, List, Optional, Union
from datetime import datetime, timezone
import logging

from dateutil import parser as dateparser

from .schema import NormalizedTx, TxFrom, TxTo, TxType, BinanceTxType
from .assets import assetFromString, assetToBase, BNB_CHAIN, BNB_DECIMAL
from .field_mapper import FieldMapper


TX_TYPE_MAP = {
    BinanceTxType.TRANSFER.value: TxType.TRANSFER,
    BinanceTxType.DEPOSIT.value: TxType.TRANSFER,
    BinanceTxType.FREEZE_TOKEN.value: TxType.FREEZE,
    BinanceTxType.UN_FREEZE_TOKEN.value: TxType.UNFREEZE
}


def mapTxType(chainType: Union[BinanceTxType, str, None]) -> TxType:
    if isinstance(chainType, BinanceTxType):
        chainType = chainType.value
    return TX_TYPE_MAP.get(chainType, TxType.UNKNOWN)


def parseTimestamp(value: Union[int, float, str, datetime]) -> datetime:
    """
    Parse a chain timestamp.

    Numbers (and digit-only strings) are epoch milliseconds, other strings
    are ISO-8601 as returned by the DEX API; strings without an offset
    are taken as UTC. Raises ValueError when the value cannot be parsed.
    """
    if isinstance(value, datetime):
        return value

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)

    if isinstance(value, str):
        if value.isdigit():
            return datetime.fromtimestamp(int(value) / 1000, tz=timezone.utc)
        try:
            parsed = dateparser.isoparse(value)
        except (ValueError, OverflowError) as e:
            raise ValueError(f"Invalid timestamp: {value}") from e
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed

    raise ValueError(f"Invalid timestamp: {value!r}")


class TxNormalizer:

    def __init__(self, config: Optional[Dict[str, Any]] = None, metrics=None):
        self.config = config or {}
        self.logger = logging.getLogger(self.__class__.__name__)
        self.fieldMapper = FieldMapper()
        self.metrics = metrics
        self.chain = self.config.get('chain', BNB_CHAIN)
        self.decimal = int(self.config.get('decimal', BNB_DECIMAL))

    def normalize(self, record: Dict[str, Any]) -> Optional[NormalizedTx]:
        """
        Normalize a REST transaction record.

        Returns None when ``txAsset`` is not a recognizable symbol, which
        callers treat as "skip this record".
        An unparsable ``timeStamp`` leaves ``date`` as None.
        """
        txAsset = record.get('txAsset')
        asset = assetFromString(f"{self.chain}.{txAsset}") if isinstance(txAsset, str) else None

        if not asset:
            self.logger.debug(f"Skipping tx {record.get('txHash')}: unknown asset {txAsset!r}")
            return None

        amount = assetToBase(record.get('value'), self.decimal)

        return NormalizedTx(
            asset=asset,
            from_=[TxFrom(from_=record.get('fromAddr'), amount=amount)],
            to=[TxTo(to=record.get('toAddr'), amount=amount)],
            date=self._parseDate(record),
            type=mapTxType(record.get('txType')),
            hash=record.get('txHash')
        )

    def _parseDate(self, record: Dict[str, Any]) -> Optional[datetime]:
        try:
            return parseTimestamp(record.get('timeStamp'))
        except (ValueError, OverflowError, OSError) as e:
            self.logger.debug(f"Tx {record.get('txHash')} has no usable date: {e}")
            return None

    def normalizeMany(self, records: Iterable[Dict[str, Any]]) -> List[NormalizedTx]:
        normalized = []

        for rawRecord in records:
            record = self.fieldMapper.mapFields(
                rawRecord,
                self.fieldMapper.getMappingForSource('rest_transaction')
            )

            try:
                tx = self.normalize(record)
            except Exception as e:
                self.logger.error(f"Error normalizing tx {record.get('txHash')}: {e}", exc_info=True)
                if self.metrics:
                    self.metrics.recordError('normalization')
                continue

            if tx is None:
                if self.metrics:
                    self.metrics.recordTxSkipped()
                continue

            if self.metrics:
                self.metrics.recordTxNormalized()
            normalized.append(tx)

        self.logger.info(f"Normalized {len(normalized)} transaction(s)")
        return normalized


_defaultNormalizer = TxNormalizer()


def normalizeTx(record: Dict[str, Any]) -> Optional[NormalizedTx]:
    return _defaultNormalizer.normalize(record)
