"""
Fee Schedule Classification

The ``/api/v1/fees`` endpoint returns a list mixing three shapes with no
discriminant field: a simple fee, a transfer fee and the dex fee fields.
The predicates below check one shape each; ``classifyFee`` applies them in
priority order and returns a tagged ``FeeSchedule``.
"""

from typing import Dict, Any, Iterable, List, Optional
import logging

from .schema import FeeKind, FeeSchedule


logger = logging.getLogger(__name__)

FREEZE_MSG_TYPE = 'tokensFreeze'


def _field(value: Any, name: str) -> Any:
    if isinstance(value, dict):
        return value.get(name)
    return None


def _has(value: Any, name: str) -> bool:
    # present keys count as defined, even when null
    return isinstance(value, dict) and name in value


def isFee(value: Any) -> bool:
    return (
        bool(_field(value, 'msg_type'))
        and _has(value, 'fee')
        and _has(value, 'fee_for')
    )


def isFreezeFee(value: Any) -> bool:
    # Only msg_type is checked, so a freeze fee also satisfies isFee
    return _field(value, 'msg_type') == FREEZE_MSG_TYPE


def isTransferFee(value: Any) -> bool:
    return (
        isFee(_field(value, 'fixed_fee_params'))
        and _has(value, 'multi_transfer_fee')
    )


def isDexFees(value: Any) -> bool:
    fields = _field(value, 'dex_fee_fields')
    return isinstance(fields, (list, tuple)) and len(fields) > 0


def classifyFee(value: Any) -> Optional[FeeSchedule]:
    """Tag a raw fee entry as Fee, TransferFee or DexFees (in that order)."""
    if isFee(value):
        return FeeSchedule(kind=FeeKind.FEE, value=value)
    if isTransferFee(value):
        return FeeSchedule(kind=FeeKind.TRANSFER_FEE, value=value)
    if isDexFees(value):
        return FeeSchedule(kind=FeeKind.DEX_FEES, value=value)

    logger.debug(f"Unclassifiable fee entry: {value}")
    return None


def classifyFees(values: Iterable[Dict[str, Any]]) -> List[FeeSchedule]:
    schedules = []

    for value in values or []:
        schedule = classifyFee(value)
        if schedule is not None:
            schedules.append(schedule)

    return schedules


def getFreezeFee(schedules: Iterable[FeeSchedule]) -> Optional[FeeSchedule]:
    for schedule in schedules:
        if schedule.kind == FeeKind.FEE and isFreezeFee(schedule.value):
            return schedule
    return None
