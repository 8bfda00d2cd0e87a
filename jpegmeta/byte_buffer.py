# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Byte-order aware buffer

This module provides the bounds-checked, read-only view over raw bytes that
every decoder in jpegmeta is built on. Offsets are always relative to the
buffer itself; a slice starts counting at zero again.

Copyright 2025 DNAi inc.
"""

import struct
from enum import Enum
from typing import Optional

from jpegmeta.exceptions import EndOfDataError, OutOfBoundsError, UnknownByteOrderError


class ByteOrder(Enum):
    """Byte order of multi-byte values, valued by its struct prefix."""
    UNSET = ''
    LITTLE = '<'
    BIG = '>'


class ByteBuffer:
    """
    Read-only view over a byte sequence with a sequential read cursor.

    Multi-byte reads honour the byte order resolved from a TIFF header.
    Every read fails with OutOfBoundsError instead of returning data from
    outside the buffer.
    """

    def __init__(self, data: bytes, byte_order: ByteOrder = ByteOrder.UNSET):
        """
        Initialize the buffer.

        Args:
            data: Raw bytes to expose
            byte_order: Byte order inherited from a parent buffer, if any
        """
        self.data = bytes(data)
        self.byte_order = byte_order
        self.index = 0

    def __len__(self) -> int:
        return len(self.data)

    def __repr__(self) -> str:
        return f"ByteBuffer(length={len(self.data)}, byte_order={self.byte_order.name}, index={self.index})"

    @property
    def remaining(self) -> int:
        """Number of bytes between the cursor and the end of the buffer."""
        return len(self.data) - self.index

    def next_byte(self) -> int:
        """
        Consume the byte under the cursor.

        Returns:
            The byte value (0-255)

        Raises:
            EndOfDataError: If the cursor is already at the end of the buffer
        """
        if self.index >= len(self.data):
            raise EndOfDataError()
        value = self.data[self.index]
        self.index += 1
        return value

    def byte_at(self, offset: int) -> int:
        """Return the byte at ``offset`` without moving the cursor."""
        if offset < 0 or offset >= len(self.data):
            raise OutOfBoundsError(f"Data offset error: byte at {offset} outside buffer of {len(self.data)} bytes")
        return self.data[offset]

    def bytes_at(self, offset: int, length: int) -> bytes:
        """Return ``length`` raw bytes starting at ``offset``."""
        self._check_range(offset, length)
        return self.data[offset:offset + length]

    def resolve_byte_order(self) -> Optional[ByteOrder]:
        """
        Determine the byte order from the first two bytes of the buffer.

        'II' (Intel) selects little-endian, 'MM' (Motorola) big-endian.

        Returns:
            The resolved ByteOrder, or None when the marker is not recognised
        """
        marker = self.data[:2]
        if marker == b'II':
            self.byte_order = ByteOrder.LITTLE
        elif marker == b'MM':
            self.byte_order = ByteOrder.BIG
        else:
            self.byte_order = ByteOrder.UNSET
            return None
        return self.byte_order

    def verify_tiff_magic(self) -> bool:
        """Check that the TIFF magic number 42 follows the byte-order marker."""
        if self.byte_order is ByteOrder.UNSET or len(self.data) < 4:
            return False
        return self.short_at(2) == 0x002A

    def short_at(self, offset: int) -> int:
        """Return the unsigned 16-bit value at ``offset``."""
        self._check_range(offset, 2)
        return struct.unpack_from(f'{self._prefix()}H', self.data, offset)[0]

    def long_at(self, offset: int) -> int:
        """Return the unsigned 32-bit value at ``offset``."""
        self._check_range(offset, 4)
        return struct.unpack_from(f'{self._prefix()}I', self.data, offset)[0]

    def slice(self, start: int, end: int) -> 'ByteBuffer':
        """
        Create a new buffer over ``[start, end)`` of this buffer.

        The slice keeps this buffer's byte order, gets its own cursor and
        addresses its bytes from zero.

        Raises:
            OutOfBoundsError: If the range does not lie inside this buffer
        """
        if start < 0 or end < start or end > len(self.data):
            raise OutOfBoundsError(f"Data offset error: slice [{start}, {end}) outside buffer of {len(self.data)} bytes")
        return ByteBuffer(self.data[start:end], self.byte_order)

    def _prefix(self) -> str:
        if self.byte_order is ByteOrder.UNSET:
            raise UnknownByteOrderError("Byte order must be resolved before multi-byte reads")
        return self.byte_order.value

    def _check_range(self, offset: int, width: int) -> None:
        if offset < 0 or width < 0 or offset + width > len(self.data):
            raise OutOfBoundsError(
                f"Data offset error: {width} bytes at {offset} outside buffer of {len(self.data)} bytes"
            )
