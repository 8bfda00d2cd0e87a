# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
EXIF tag value decoding

This module decodes the value of a single 12-byte IFD entry according to
its data format code. Only the formats that carry the metadata we report
have a decoder: ASCII strings, unsigned shorts, unsigned longs and
unsigned rationals. Entries in any other format are dropped.

Copyright 2025 DNAi inc.
"""

from enum import IntEnum
from typing import Callable, Dict, NamedTuple, Optional, Tuple, Union

from jpegmeta.byte_buffer import ByteBuffer


class ExifTagType(IntEnum):
    """EXIF tag data formats, by their on-disk code"""
    UBYTE = 1
    STRING = 2
    USHORT = 3
    ULONG = 4
    URATIONAL = 5
    SBYTE = 6
    UNDEFINED = 7  # 8-bit, opaque
    SSHORT = 8
    SLONG = 9
    SRATIONAL = 10
    SFLOAT = 11
    DFLOAT = 12


# Decoded tag value: text, a single short, a pair of shorts, or a
# comma-joined rendering of longs ("1,2") / rationals ("72/1,1/3")
TagValue = Union[str, int, Tuple[int, int]]

# Size of one directory entry, and the position of its value field
ENTRY_SIZE = 12
VALUE_FIELD = 8


class DirectoryEntry(NamedTuple):
    """
    One 12-byte IFD entry.

    Bytes 0-1 hold the tag id, 2-3 the format code, 4-7 the component
    count and 8-11 either the value itself or an offset to it.
    """
    tag_id: int
    format_code: int
    component_count: int
    value_or_offset: bytes
    offset: int

    @classmethod
    def read(cls, buffer: ByteBuffer, offset: int) -> 'DirectoryEntry':
        """Read the entry starting at ``offset`` of a TIFF-relative buffer."""
        return cls(
            tag_id=buffer.short_at(offset),
            format_code=buffer.short_at(offset + 2),
            component_count=buffer.long_at(offset + 4),
            value_or_offset=buffer.bytes_at(offset + VALUE_FIELD, 4),
            offset=offset,
        )


def decode_text(raw: bytes) -> str:
    """
    Decode a text value, dropping every NUL byte in it.

    UTF-8 is tried for non-ASCII content; bytes that are not valid UTF-8
    map one-to-one onto ISO-8859-1 characters.
    """
    data = raw.replace(b'\x00', b'')
    if any(b > 127 for b in data):
        try:
            return data.decode('utf-8', errors='strict')
        except UnicodeDecodeError:
            return data.decode('latin-1')
    return data.decode('ascii')


def decode_string(buffer: ByteBuffer, entry: DirectoryEntry) -> Optional[str]:
    if entry.component_count <= 4:
        # Stored inline in the value field
        return decode_text(entry.value_or_offset)

    data_offset = buffer.long_at(entry.offset + VALUE_FIELD)
    if data_offset + entry.component_count > len(buffer):
        return None
    return decode_text(buffer.bytes_at(data_offset, entry.component_count))


def decode_ushort(buffer: ByteBuffer, entry: DirectoryEntry) -> Optional[Union[int, Tuple[int, int]]]:
    if entry.component_count == 1:
        return buffer.short_at(entry.offset + VALUE_FIELD)
    if entry.component_count == 2:
        return (
            buffer.short_at(entry.offset + VALUE_FIELD),
            buffer.short_at(entry.offset + VALUE_FIELD + 2),
        )
    return None


def decode_ulong(buffer: ByteBuffer, entry: DirectoryEntry) -> str:
    data_offset = buffer.long_at(entry.offset + VALUE_FIELD)
    if entry.component_count == 1:
        return str(data_offset)

    values = []
    for _ in range(entry.component_count):
        values.append(str(buffer.long_at(data_offset)))
        data_offset += 4
    return ','.join(values)


def decode_urational(buffer: ByteBuffer, entry: DirectoryEntry) -> str:
    data_offset = buffer.long_at(entry.offset + VALUE_FIELD)
    values = []
    for _ in range(entry.component_count):
        numerator = buffer.long_at(data_offset)
        denominator = buffer.long_at(data_offset + 4)
        values.append(f"{numerator}/{denominator}")
        data_offset += 8
    return ','.join(values)


TagDecoder = Callable[[ByteBuffer, DirectoryEntry], Optional[TagValue]]

DATA_FORMAT_DECODERS: Dict[ExifTagType, TagDecoder] = {
    ExifTagType.STRING: decode_string,
    ExifTagType.USHORT: decode_ushort,
    ExifTagType.ULONG: decode_ulong,
    ExifTagType.URATIONAL: decode_urational,
}


def decode_tag_value(buffer: ByteBuffer, entry: DirectoryEntry) -> Optional[TagValue]:
    """
    Decode an entry's value according to its format code.

    Args:
        buffer: TIFF-relative buffer with resolved byte order
        entry: Directory entry to decode

    Returns:
        The decoded value, or None when the format has no decoder or the
        value cannot be represented (the tag is then dropped)

    Raises:
        OutOfBoundsError: If a numeric value points outside the buffer
    """
    try:
        tag_type = ExifTagType(entry.format_code)
    except ValueError:
        return None

    decoder = DATA_FORMAT_DECODERS.get(tag_type)
    if decoder is None:
        return None
    return decoder(buffer, entry)


def as_offset(value: Optional[TagValue]) -> Optional[int]:
    """Interpret a decoded value as a single byte offset, if it is one."""
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return None
