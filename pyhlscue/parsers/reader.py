"""Bounds-checked byte cursor and the fixed-layout SCTE-35 field readers."""

import logging
from typing import Optional, Tuple

import bitstring

from ..models.errors import TruncationError

logger = logging.getLogger(__name__)

# Both 33-bit time fields are carried in 5 bytes
TIME_FIELD_SIZE = 5


class TruncatedReadError(ValueError):
    """Raised by ByteReader when a field needs more bytes than are left.

    Decoders catch this at their boundary and turn it into a TruncationError
    value; it never escapes the public parse functions.
    """

    def __init__(self, field_name: str, needed: int, available: int):
        super().__init__(
            f"Not enough data to read {field_name}: {needed} > {available}"
        )
        self.field_name = field_name
        self.needed = needed
        self.available = available

    def to_error(self) -> TruncationError:
        return TruncationError(
            field_name=self.field_name, needed=self.needed, available=self.available
        )


def read_pts(data: bytes) -> Optional[int]:
    """Read a 33-bit PTS value from a 5-byte slice.

    The bit layout is the one observed in production streams and differs
    from the MPEG-TS PTS encoding in its treatment of the reserved bits of
    bytes 2 and 4. Do not change it without checking real fixtures.

    Args:
        data: At least 5 bytes, starting at the PTS field

    Returns:
        PTS in 90 kHz ticks, or None if fewer than 5 bytes were given
    """
    if len(data) < TIME_FIELD_SIZE:
        logger.warning(f"Not enough bytes for PTS: {len(data)} < {TIME_FIELD_SIZE}")
        return None

    return (
        ((data[0] & 0x0E) << 29)
        | (data[1] << 22)
        | ((data[2] & 0xFE) << 14)
        | (data[3] << 7)
        | ((data[4] & 0xFE) >> 1)
    )


def read_duration(data: bytes) -> Optional[Tuple[bool, int]]:
    """Read an auto_return flag and a 33-bit duration from a 5-byte slice.

    Layout: auto_return (1 bit), reserved (1 bit), duration (33 bits: the
    6 low bits of byte 0, bytes 1-3, the top 3 bits of byte 4), reserved
    (5 bits).

    Args:
        data: At least 5 bytes, starting at the duration field

    Returns:
        (auto_return, duration in 90 kHz ticks), or None if fewer than 5
        bytes were given
    """
    if len(data) < TIME_FIELD_SIZE:
        logger.warning(
            f"Not enough bytes for duration: {len(data)} < {TIME_FIELD_SIZE}"
        )
        return None

    stream = bitstring.ConstBitStream(bytes(data[:TIME_FIELD_SIZE]))
    auto_return, _reserved, duration = stream.readlist("bool, bool, uint:33")
    return auto_return, duration


def unpack_bits(data: bytes, fmt: str) -> list:
    """Split a few header bytes into bit fields, e.g. ``"bool, bool, uint:6"``."""
    return bitstring.Bits(bytes(data)).unpack(fmt)


class ByteReader:
    """Cursor over a byte buffer.

    Every read checks the remaining length first and advances the position
    only when it succeeds; a short read raises TruncatedReadError naming the
    field being read.
    """

    def __init__(self, data: bytes):
        self._data = bytes(data)
        self.position = 0

    def __len__(self) -> int:
        return len(self._data)

    @property
    def remaining(self) -> int:
        return len(self._data) - self.position

    def _require(self, count: int, field_name: str) -> None:
        if count > self.remaining:
            raise TruncatedReadError(field_name, count, max(self.remaining, 0))

    def read(self, count: int, field_name: str) -> bytes:
        """Read exactly ``count`` bytes."""
        self._require(count, field_name)
        chunk = self._data[self.position : self.position + count]
        self.position += count
        return chunk

    def read_uint(self, count: int, field_name: str) -> int:
        """Read a big-endian unsigned integer of ``count`` bytes."""
        return int.from_bytes(self.read(count, field_name), byteorder="big")

    def read_bits(self, count: int, fmt: str, field_name: str) -> list:
        """Read ``count`` bytes and unpack them as bit fields."""
        return unpack_bits(self.read(count, field_name), fmt)

    def read_pts(self, field_name: str) -> int:
        return read_pts(self.read(TIME_FIELD_SIZE, field_name))

    def read_duration(self, field_name: str) -> Tuple[bool, int]:
        return read_duration(self.read(TIME_FIELD_SIZE, field_name))

    def peek(self, count: int) -> bytes:
        """Return up to ``count`` bytes without moving the cursor."""
        return self._data[self.position : self.position + max(count, 0)]

    def read_rest(self) -> bytes:
        chunk = self._data[self.position :]
        self.position = len(self._data)
        return chunk

    def skip(self, count: int, field_name: str) -> None:
        self._require(count, field_name)
        self.position += count

    def seek(self, position: int) -> None:
        self.position = min(max(position, 0), len(self._data))
