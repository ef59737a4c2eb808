"""Byte-level primitives shared by every codec.

All integers are big-endian. Every read re-checks the number of bytes it
actually got; a short read raises ``Truncated`` naming the field.
"""
from __future__ import annotations

import io
import struct
from typing import BinaryIO

from .errors import FieldOutOfRange, FieldTooLong, Truncated
from .protocol import MAX_STRING_LEN

_U8 = struct.Struct(">B")
_U16 = struct.Struct(">H")
_U32 = struct.Struct(">I")


def as_stream(source) -> BinaryIO:
    if isinstance(source, (bytes, bytearray, memoryview)):
        return io.BytesIO(bytes(source))
    return source


def encoded_len(text: str) -> int:
    return len(text.strip().encode("utf-8"))


class BlockReader:
    def __init__(self, source):
        self._f = as_stream(source)
        self.consumed = 0

    def read_block(self, length: int, field: str) -> bytes:
        data = b""
        while len(data) < length:
            chunk = self._f.read(length - len(data))
            if not chunk:
                break
            data += chunk
        if len(data) != length:
            raise Truncated(field, length, len(data))
        self.consumed += length
        return data

    def read_blocks(self, length: int, count: int, field: str) -> tuple[bytes, ...]:
        return tuple(self.read_block(length, f"{field}[{i}]") for i in range(count))

    def read_u8(self, field: str) -> int:
        return _U8.unpack(self.read_block(1, field))[0]

    def read_u16(self, field: str) -> int:
        return _U16.unpack(self.read_block(2, field))[0]

    def read_u32(self, field: str) -> int:
        return _U32.unpack(self.read_block(4, field))[0]

    def read_string(self, length: int, field: str) -> str:
        return self.read_block(length, field).decode("utf-8", errors="replace")

    def read_len_string(self, field: str) -> str:
        length = self.read_u8(f"{field} length")
        return self.read_string(length, field)

    def at_eof(self) -> bool:
        return self._f.read(1) == b""


class BlockWriter:
    def __init__(self):
        self._buf = bytearray()

    def __len__(self) -> int:
        return len(self._buf)

    def write_block(self, data: bytes) -> None:
        self._buf.extend(data)

    def _write_int(self, fmt: struct.Struct, value: int, field: str) -> None:
        max_value = (1 << (fmt.size * 8)) - 1
        if not 0 <= value <= max_value:
            raise FieldOutOfRange(field, max_value, value)
        self._buf.extend(fmt.pack(value))

    def write_u8(self, value: int, field: str) -> None:
        self._write_int(_U8, value, field)

    def write_u16(self, value: int, field: str) -> None:
        self._write_int(_U16, value, field)

    def write_u32(self, value: int, field: str) -> None:
        self._write_int(_U32, value, field)

    def write_string(self, text: str, field: str) -> None:
        """Write trimmed UTF-8 bytes without a prefix; the length lives elsewhere."""
        data = text.strip().encode("utf-8")
        if len(data) > MAX_STRING_LEN:
            raise FieldTooLong(field, MAX_STRING_LEN, len(data))
        self._buf.extend(data)

    def write_len_string(self, text: str, field: str) -> None:
        data = text.strip().encode("utf-8")
        if len(data) > MAX_STRING_LEN:
            raise FieldTooLong(field, MAX_STRING_LEN, len(data))
        self._buf.append(len(data))
        self._buf.extend(data)

    def getvalue(self) -> bytes:
        return bytes(self._buf)
