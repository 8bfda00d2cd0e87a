# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
IFD (Image File Directory) walker

Decodes the entries of one IFD inside a TIFF-relative buffer and follows
the Exif SubIFD and GPS IFD pointers it contains. Decoded tags are written
into an accumulator supplied by the caller, one map per directory kind.

Copyright 2025 DNAi inc.
"""

import logging
from typing import Dict, Set

from jpegmeta.byte_buffer import ByteBuffer
from jpegmeta.exceptions import CyclicDirectoryError, EmptyDirectoryError
from jpegmeta.exif_tags import EXIF, EXIF_IFD_POINTER, GPS, GPS_IFD_POINTER, tag_name
from jpegmeta.tag_values import ENTRY_SIZE, DirectoryEntry, TagValue, as_offset, decode_tag_value

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 8
# Each nesting level costs two Python stack frames
MAX_DIRECTORY_DEPTH = 64

# Pointer tag -> kind of the directory it points to
SUB_IFD_POINTERS = {
    EXIF_IFD_POINTER: EXIF,
    GPS_IFD_POINTER: GPS,
}

Directories = Dict[str, Dict[str, TagValue]]


class IfdWalker:
    """
    Walker for the IFDs of one EXIF block.

    The walker remembers every IFD offset it has decoded, so a pointer that
    leads back to an already walked directory is reported instead of being
    followed forever.
    """

    def __init__(self, buffer: ByteBuffer, max_depth: int = DEFAULT_MAX_DEPTH):
        """
        Initialize the walker.

        Args:
            buffer: TIFF-relative buffer with resolved byte order
            max_depth: Maximum nesting of SubIFD/GPS pointers, capped at
                MAX_DIRECTORY_DEPTH
        """
        self.buffer = buffer
        self.max_depth = min(max_depth, MAX_DIRECTORY_DEPTH)
        self.visited: Set[int] = set()

    def walk(self, offset: int, directories: Directories, kind: str = EXIF, depth: int = 0) -> int:
        """
        Decode the IFD at ``offset`` into ``directories[kind]``.

        Entries that do not fit in the buffer are skipped. SubIFD and GPS
        pointers are followed immediately, into the same accumulator.

        Args:
            offset: TIFF-relative offset of the IFD
            directories: Accumulator of tag maps keyed by directory kind
            kind: Directory kind used to name this IFD's tags
            depth: Current pointer nesting

        Returns:
            Offset of the next IFD in the chain, 0 if there is none

        Raises:
            EmptyDirectoryError: If the IFD declares no entries
            CyclicDirectoryError: If the IFD was already walked or nests too deep
            OutOfBoundsError: If the entry count or a value lies outside the buffer
        """
        if offset in self.visited:
            raise CyclicDirectoryError(f"IFD at offset {offset} is referenced twice")
        if depth > self.max_depth:
            raise CyclicDirectoryError(f"IFD nesting exceeds {self.max_depth} levels")
        self.visited.add(offset)

        count = self.buffer.short_at(offset)
        if not count:
            raise EmptyDirectoryError()

        logger.debug("Walking %s IFD at %d with %d entries", kind, offset, count)
        directories.setdefault(kind, {})
        length = len(self.buffer)

        for i in range(count):
            entry_offset = offset + 2 + ENTRY_SIZE * i
            if entry_offset + ENTRY_SIZE <= length:
                self._decode_entry(entry_offset, directories, kind, depth)
            else:
                logger.debug("Skipping truncated IFD entry %d at %d", i, entry_offset)

        # The 4 bytes after the last entry slot hold the next IFD offset
        next_offset = offset + 2 + ENTRY_SIZE * count
        if next_offset + 4 > length:
            return 0
        return self.buffer.long_at(next_offset)

    def _decode_entry(self, entry_offset: int, directories: Directories, kind: str, depth: int) -> None:
        entry = DirectoryEntry.read(self.buffer, entry_offset)
        value = decode_tag_value(self.buffer, entry)
        if value is None:
            logger.debug("Dropping tag 0x%04X with format %d", entry.tag_id, entry.format_code)
            return

        sub_kind = SUB_IFD_POINTERS.get(entry.tag_id)
        if sub_kind is not None:
            sub_offset = as_offset(value)
            if sub_offset is None:
                logger.debug("Ignoring %s pointer with value %r", sub_kind, value)
                return
            self.walk(sub_offset, directories, sub_kind, depth + 1)
            return

        name = tag_name(kind, entry.tag_id)
        if name:
            directories[kind][name] = value
