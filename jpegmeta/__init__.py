# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
jpegmeta - A 100% Pure Python JPEG Metadata Reader

Extracts EXIF, GPS and IPTC metadata and the embedded EXIF thumbnail
from JPEG files. No external codec library is used: all metadata parsing
is done by directly reading the binary segment, TIFF and IPTC structures.

Copyright 2025 DNAi inc.
"""

__version__ = "0.1.0"
__author__ = "DNAi inc."

from jpegmeta.core import MetadataExtractor, parse
from jpegmeta.metadata import MetadataResult
from jpegmeta.reader import JPEGReader, LoadResponse, ReadyState, read_metadata
from jpegmeta.exceptions import (
    JPEGMetaError,
    MetadataReadError,
    UnsupportedFormatError,
    NotAJpegError,
    SegmentTooShortError,
    DirectoryTooShortError,
    UnknownByteOrderError,
    BadTiffMagicError,
    InvalidIfd0OffsetError,
    EmptyDirectoryError,
    OutOfBoundsError,
    EndOfDataError,
    CyclicDirectoryError,
)

__all__ = [
    "MetadataExtractor",
    "parse",
    "MetadataResult",
    "JPEGReader",
    "LoadResponse",
    "ReadyState",
    "read_metadata",
    "JPEGMetaError",
    "MetadataReadError",
    "UnsupportedFormatError",
    "NotAJpegError",
    "SegmentTooShortError",
    "DirectoryTooShortError",
    "UnknownByteOrderError",
    "BadTiffMagicError",
    "InvalidIfd0OffsetError",
    "EmptyDirectoryError",
    "OutOfBoundsError",
    "EndOfDataError",
    "CyclicDirectoryError",
]
