# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
EXIF metadata parser

This module handles the payload of a JPEG APP1 segment: the "Exif\\0\\0"
identifier, the TIFF header that follows it, and the IFD0/IFD1 chain with
its Exif SubIFD and GPS IFD. EXIF (Exchangeable Image File Format) stores
its data in TIFF structure, so every offset is relative to the TIFF header.

Copyright 2025 DNAi inc.
"""

import logging
from typing import Optional

from jpegmeta.byte_buffer import ByteBuffer
from jpegmeta.exceptions import (
    BadTiffMagicError,
    DirectoryTooShortError,
    InvalidIfd0OffsetError,
    SegmentTooShortError,
    UnknownByteOrderError,
)
from jpegmeta.exif_tags import EXIF, GPS
from jpegmeta.ifd_walker import DEFAULT_MAX_DEPTH, Directories, IfdWalker
from jpegmeta.thumbnail_extractor import ThumbnailExtractor

logger = logging.getLogger(__name__)

EXIF_HEADER = b'Exif\x00\x00'

# 2 bytes of segment length plus the 6-byte identifier
MIN_APP1_LENGTH = 8
# Identifier plus the 8-byte TIFF header
MIN_EXIF_LENGTH = 12
# IFD0 must start inside a single APP1 segment
MAX_IFD0_OFFSET = 0xFFFF


class ExifParser:
    """
    Parser for the EXIF block of a JPEG APP1 segment.

    Structural problems raise immediately; no partial result is kept for
    the segment that failed.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH, extract_thumbnail: bool = True):
        """
        Initialize the EXIF parser.

        Args:
            max_depth: Maximum nesting of SubIFD/GPS pointers
            extract_thumbnail: Whether to capture the IFD1 JPEG thumbnail
        """
        self.max_depth = max_depth
        self.extract_thumbnail = extract_thumbnail

    def parse(self, payload: ByteBuffer, directories: Directories) -> Optional[bytes]:
        """
        Decode an APP1 payload into ``directories``.

        Tags from IFD0, IFD1 and the Exif SubIFD land in the 'exif' map,
        GPS IFD tags in the 'gps' map. APP1 payloads that are not EXIF
        (XMP for instance) are ignored.

        Args:
            payload: APP1 segment payload
            directories: Accumulator of tag maps keyed by directory kind

        Returns:
            The IFD1 JPEG thumbnail, or None

        Raises:
            MetadataReadError: Any of its EXIF subclasses on malformed data
        """
        length = len(payload)
        if length < MIN_APP1_LENGTH:
            raise SegmentTooShortError()

        if payload.bytes_at(0, len(EXIF_HEADER)) != EXIF_HEADER:
            logger.debug("APP1 segment is not EXIF, skipping")
            return None

        if length < MIN_EXIF_LENGTH:
            raise DirectoryTooShortError()

        tiff = payload.slice(len(EXIF_HEADER), length)
        return self.parse_tiff(tiff, directories)

    def parse_tiff(self, tiff: ByteBuffer, directories: Directories) -> Optional[bytes]:
        """
        Decode a TIFF structure embedded in an APP1 segment.

        Args:
            tiff: Buffer starting at the TIFF byte-order marker
            directories: Accumulator of tag maps keyed by directory kind

        Returns:
            The IFD1 JPEG thumbnail, or None
        """
        if tiff.resolve_byte_order() is None:
            raise UnknownByteOrderError()

        if not tiff.verify_tiff_magic():
            raise BadTiffMagicError()

        ifd0_offset = tiff.long_at(4)
        if ifd0_offset > MAX_IFD0_OFFSET:
            raise InvalidIfd0OffsetError()

        directories.setdefault(EXIF, {})
        directories.setdefault(GPS, {})

        walker = IfdWalker(tiff, self.max_depth)
        next_offset = walker.walk(ifd0_offset, directories, EXIF)
        if not next_offset:
            return None

        # Only IFD1 (the thumbnail directory) follows IFD0
        walker.walk(next_offset, directories, EXIF)
        if not self.extract_thumbnail:
            return None
        return ThumbnailExtractor(tiff).extract_thumbnail(directories[EXIF])
