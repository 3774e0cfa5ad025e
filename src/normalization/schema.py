from dataclasses import dataclass, field, asdict
from typing import Dict, Any, Optional, List
from datetime import datetime
from decimal import Decimal
from enum import Enum


class BinanceTxType(Enum):
    NEW_ORDER = "NEW_ORDER"
    ISSUE_TOKEN = "ISSUE_TOKEN"
    BURN_TOKEN = "BURN_TOKEN"
    LIST_TOKEN = "LIST_TOKEN"
    CANCEL_ORDER = "CANCEL_ORDER"
    FREEZE_TOKEN = "FREEZE_TOKEN"
    UN_FREEZE_TOKEN = "UN_FREEZE_TOKEN"
    TRANSFER = "TRANSFER"
    PROPOSAL = "PROPOSAL"
    VOTE = "VOTE"
    MINT = "MINT"
    DEPOSIT = "DEPOSIT"
    CREATE_VALIDATOR = "CREATE_VALIDATOR"
    REMOVE_VALIDATOR = "REMOVE_VALIDATOR"
    TIME_LOCK = "TIME_LOCK"
    TIME_UNLOCK = "TIME_UNLOCK"
    TIME_RELOCK = "TIME_RELOCK"
    SET_ACCOUNT_FLAG = "SET_ACCOUNT_FLAG"
    HTL_TRANSFER = "HTL_TRANSFER"
    CLAIM_HTL = "CLAIM_HTL"
    DEPOSIT_HTL = "DEPOSIT_HTL"
    REFUND_HTL = "REFUND_HTL"


class TxType(Enum):
    TRANSFER = "transfer"
    FREEZE = "freeze"
    UNFREEZE = "unfreeze"
    UNKNOWN = "unknown"


class FeeKind(Enum):
    FEE = "fee"
    TRANSFER_FEE = "transfer_fee"
    DEX_FEES = "dex_fees"


@dataclass(frozen=True)
class Asset:
    chain: str
    symbol: str
    ticker: str
    synth: bool = False

    def __str__(self) -> str:
        delimiter = '/' if self.synth else '.'
        return f"{self.chain}{delimiter}{self.symbol}"


@dataclass(frozen=True)
class BaseAmount:
    amount: int  # integer base units
    decimal: int = 8

    def toAssetAmount(self) -> Decimal:
        return Decimal(self.amount).scaleb(-self.decimal)


@dataclass
class TxFrom:
    from_: str
    amount: BaseAmount


@dataclass
class TxTo:
    to: str
    amount: BaseAmount


@dataclass
class NormalizedTx:
    asset: Asset
    from_: List[TxFrom]
    to: List[TxTo]
    date: Optional[datetime]
    type: TxType
    hash: str

    def toDict(self) -> Dict[str, Any]:
        return {
            'asset': str(self.asset),
            'from': [
                {'from': entry.from_, 'amount': str(entry.amount.amount)}
                for entry in self.from_
            ],
            'to': [
                {'to': entry.to, 'amount': str(entry.amount.amount)}
                for entry in self.to
            ],
            'date': self.date.isoformat() if self.date else None,
            'type': self.type.value,
            'hash': self.hash
        }


@dataclass
class FeeSchedule:
    """Fee schedule entry tagged with the shape it was classified as."""
    kind: FeeKind
    value: Dict[str, Any] = field(default_factory=dict)

    @property
    def msgType(self) -> Optional[str]:
        if self.kind == FeeKind.FEE:
            return self.value.get('msg_type')
        if self.kind == FeeKind.TRANSFER_FEE:
            return self.value.get('fixed_fee_params', {}).get('msg_type')
        return None

    def toDict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['kind'] = self.kind.value
        return data
