"""Compact little-endian binary encoding shared by client and server datagrams.

Integers are fixed width, strings and sequences carry a u64 length prefix, and
enum variants are introduced by a u32 tag.
"""

from __future__ import annotations

import struct

_U32 = struct.Struct("<I")
_U64 = struct.Struct("<Q")
_I64 = struct.Struct("<q")
_F32 = struct.Struct("<f")


class DecodeError(ValueError):
    """Raised when a payload cannot be decoded."""


class Reader:
    """Sequential reader over an encoded payload."""

    def __init__(self, data: bytes) -> None:
        self._data = memoryview(bytes(data))
        self._offset = 0

    @property
    def remaining(self) -> int:
        """Number of bytes not read yet."""
        return len(self._data) - self._offset

    def _take(self, size: int) -> memoryview:
        if size > self.remaining:
            raise DecodeError(
                f"unexpected end of data: needed {size} bytes, {self.remaining} left"
            )
        chunk = self._data[self._offset : self._offset + size]
        self._offset += size
        return chunk

    def u32(self) -> int:
        return _U32.unpack(self._take(_U32.size))[0]

    def u64(self) -> int:
        return _U64.unpack(self._take(_U64.size))[0]

    def i64(self) -> int:
        return _I64.unpack(self._take(_I64.size))[0]

    def f32(self) -> float:
        return _F32.unpack(self._take(_F32.size))[0]

    def string(self) -> str:
        length = self.u64()
        raw = self._take(length)
        try:
            return bytes(raw).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"invalid utf-8 in string: {exc}") from exc

    def finish(self) -> None:
        """Raise DecodeError if any bytes are left unread."""
        if self.remaining:
            raise DecodeError(f"{self.remaining} trailing bytes after payload")


def _check_range(value: int, low: int, high: int, kind: str) -> None:
    if not low <= value <= high:
        raise ValueError(f"{value} is out of range for {kind}")


def pack_u32(value: int) -> bytes:
    _check_range(value, 0, 2**32 - 1, "u32")
    return _U32.pack(value)


def pack_u64(value: int) -> bytes:
    _check_range(value, 0, 2**64 - 1, "u64")
    return _U64.pack(value)


def pack_i64(value: int) -> bytes:
    _check_range(value, -(2**63), 2**63 - 1, "i64")
    return _I64.pack(value)


def pack_f32(value: float) -> bytes:
    try:
        return _F32.pack(value)
    except OverflowError as exc:
        raise ValueError(f"{value} does not fit in an f32") from exc


def pack_string(text: str) -> bytes:
    raw = text.encode("utf-8")
    return pack_u64(len(raw)) + raw