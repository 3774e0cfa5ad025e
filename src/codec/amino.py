# Amino binary wire primitives (protobuf-compatible field encoding)

from typing import Tuple


TYP3_VARINT = 0
TYP3_8BYTE = 1
TYP3_BYTELENGTH = 2
TYP3_4BYTE = 5

PREFIX_LENGTH = 4


class AminoDecodeError(ValueError):
    pass


class AminoReader:

    def __init__(self, data: bytes):
        self.data = bytes(data)
        self.offset = 0

    def eof(self) -> bool:
        return self.offset >= len(self.data)

    def remaining(self) -> int:
        return len(self.data) - self.offset

    def readUvarint(self) -> int:
        result = 0
        shift = 0

        while True:
            if self.eof():
                raise AminoDecodeError("Unexpected end of data while reading varint")
            byte = self.data[self.offset]
            self.offset += 1
            result |= (byte & 0x7F) << shift
            if not byte & 0x80:
                return result
            shift += 7
            if shift >= 70:
                raise AminoDecodeError("Varint overflows 64 bits")

    def readInt64(self) -> int:
        value = self.readUvarint()
        if value >= 1 << 63:
            value -= 1 << 64
        return value

    def readBytes(self, length: int) -> bytes:
        if length < 0 or length > self.remaining():
            raise AminoDecodeError(
                f"Cannot read {length} bytes at offset {self.offset}, {self.remaining()} remaining"
            )
        chunk = self.data[self.offset:self.offset + length]
        self.offset += length
        return chunk

    def readByteSlice(self) -> bytes:
        return self.readBytes(self.readUvarint())

    def readKey(self) -> Tuple[int, int]:
        key = self.readUvarint()
        return key >> 3, key & 0x07

    def skip(self, typ3: int) -> None:
        if typ3 == TYP3_VARINT:
            self.readUvarint()
        elif typ3 == TYP3_8BYTE:
            self.readBytes(8)
        elif typ3 == TYP3_BYTELENGTH:
            self.readByteSlice()
        elif typ3 == TYP3_4BYTE:
            self.readBytes(4)
        else:
            raise AminoDecodeError(f"Unknown typ3 {typ3} at offset {self.offset}")


def encodeUvarint(value: int) -> bytes:
    if value < 0:
        # int64 values are written as their uint64 two's complement
        value += 1 << 64
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def encodeKey(fieldNum: int, typ3: int) -> bytes:
    return encodeUvarint((fieldNum << 3) | typ3)


def encodeByteSlice(value: bytes) -> bytes:
    return encodeUvarint(len(value)) + value
