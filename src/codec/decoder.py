from typing import Any, List, Optional, Type
import logging

from .amino import (
    AminoDecodeError,
    AminoReader,
    PREFIX_LENGTH,
    TYP3_BYTELENGTH,
    TYP3_VARINT,
    encodeByteSlice,
    encodeKey,
    encodeUvarint,
)
from .messages import (
    INTERFACE,
    REPEATED,
    Msg,
    StdSignature,
    StdTx,
    fieldsByNumber,
    getMsgByAminoPrefix,
)


logger = logging.getLogger(__name__)

# StdTx layout: uvarint length (2 bytes for txs >= 128 bytes), StdTx prefix,
# msgs field key, msg length, then the first msg's prefix
MSG_PREFIX_OFFSET = 8


def _expectedTyp3(kind: Any) -> int:
    if kind in ('int64', 'bool'):
        return TYP3_VARINT
    return TYP3_BYTELENGTH


def _readPrefix(reader: AminoReader, expected: str) -> None:
    prefix = reader.readBytes(PREFIX_LENGTH).hex()
    if prefix != expected:
        raise AminoDecodeError(f"Amino prefix mismatch: expected {expected}, got {prefix}")


def _decodeStruct(cls: Type, data: bytes, template: Any = None, withPrefix: bool = False) -> Any:
    reader = AminoReader(data)
    if withPrefix:
        _readPrefix(reader, cls.AMINO_PREFIX)

    fields = fieldsByNumber(cls)
    values = {}

    while not reader.eof():
        fieldNum, typ3 = reader.readKey()
        spec = fields.get(fieldNum)

        if spec is None:
            reader.skip(typ3)
            continue

        _, name, kind = spec
        if typ3 != _expectedTyp3(kind):
            raise AminoDecodeError(f"Field {cls.__name__}.{name} has wrong wire type {typ3}")

        if kind == 'int64':
            values[name] = reader.readInt64()
        elif kind == 'bool':
            values[name] = reader.readUvarint() != 0
        elif kind == 'bytes':
            values[name] = reader.readByteSlice()
        elif kind == 'string':
            try:
                values[name] = reader.readByteSlice().decode('utf-8')
            except UnicodeDecodeError as e:
                raise AminoDecodeError(f"Field {cls.__name__}.{name} is not valid utf-8") from e
        elif kind == INTERFACE:
            values.setdefault(name, []).append(
                _decodeInterface(reader.readByteSlice(), getattr(template, name, None))
            )
        else:
            _, elementCls = kind
            values.setdefault(name, []).append(_decodeStruct(elementCls, reader.readByteSlice()))

    return cls(**values)


def _decodeInterface(data: bytes, templateValues: Optional[List[Any]]) -> Msg:
    if templateValues:
        msgType = type(templateValues[0])
    else:
        msgType = getMsgByAminoPrefix(data[:PREFIX_LENGTH].hex())
        if msgType is None:
            raise AminoDecodeError(f"Unknown msg amino prefix {data[:PREFIX_LENGTH].hex()}")

    return _decodeStruct(msgType, data, withPrefix=True)


def unmarshalBinaryBare(data: bytes, template: Any) -> Any:
    """Decode a prefixed amino struct into a new object shaped like ``template``."""
    return _decodeStruct(type(template), data, template=template, withPrefix=True)


def unmarshalBinaryLengthPrefixed(data: bytes, template: Any) -> Any:
    reader = AminoReader(data)
    length = reader.readUvarint()
    return unmarshalBinaryBare(reader.readBytes(length), template)


def _isZero(value: Any) -> bool:
    return value in (b'', '', 0, False, None) or value == []


def _encodeStruct(obj: Any, withPrefix: bool = False) -> bytes:
    out = bytearray()
    if withPrefix:
        out += bytes.fromhex(obj.AMINO_PREFIX)

    for fieldNum, name, kind in obj.FIELDS:
        value = getattr(obj, name)
        if _isZero(value):
            continue

        if kind in ('int64', 'bool'):
            out += encodeKey(fieldNum, TYP3_VARINT) + encodeUvarint(int(value))
        elif kind == 'bytes':
            out += encodeKey(fieldNum, TYP3_BYTELENGTH) + encodeByteSlice(value)
        elif kind == 'string':
            out += encodeKey(fieldNum, TYP3_BYTELENGTH) + encodeByteSlice(value.encode('utf-8'))
        else:
            for element in value:
                encoded = _encodeStruct(element, withPrefix=kind == INTERFACE)
                out += encodeKey(fieldNum, TYP3_BYTELENGTH) + encodeByteSlice(encoded)

    return bytes(out)


def marshalBinaryBare(obj: Any) -> bytes:
    return _encodeStruct(obj, withPrefix=True)


def marshalBinaryLengthPrefixed(obj: Any) -> bytes:
    return encodeByteSlice(marshalBinaryBare(obj))


def decodeTxMessages(txBytes: bytes) -> List[Msg]:
    """
    Parse raw StdTx bytes into their messages.

    The message type is taken from the amino prefix of the first message;
    decoding errors propagate to the caller as AminoDecodeError.
    """
    txBytes = bytes(txBytes)
    msgPrefix = txBytes[MSG_PREFIX_OFFSET:MSG_PREFIX_OFFSET + PREFIX_LENGTH].hex()
    msgType = getMsgByAminoPrefix(msgPrefix)

    if msgType is None:
        raise AminoDecodeError(f"Unknown msg amino prefix {msgPrefix!r}")

    template = StdTx(
        msgs=[msgType.defaultMsg()],
        signatures=[
            StdSignature(
                pub_key=b'',
                signature=b'',
                account_number=0,
                sequence=0
            )
        ],
        memo='',
        source=0,
        data=b''
    )

    logger.debug(f"Decoding {len(txBytes)} tx bytes as {msgType.__name__}")
    return unmarshalBinaryLengthPrefixed(txBytes, template).msgs
