# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Thumbnail extractor for EXIF blocks

This module captures the JPEG thumbnail that IFD1 points to, and provides
the small helpers a preview renderer needs: data URLs and the rotation
implied by the EXIF Orientation tag.

Copyright 2025 DNAi inc.
"""

import base64
import logging
from typing import Any, Dict, Optional

from jpegmeta.byte_buffer import ByteBuffer
from jpegmeta.tag_values import as_offset

logger = logging.getLogger(__name__)

# Compression value of an IFD1 holding a JPEG thumbnail
JPEG_COMPRESSION = 6

# Degrees to rotate a preview, indexed by EXIF Orientation
PREVIEW_ROTATION = (0, 0, 0, 180, 0, 0, 90, 0, -90)


class ThumbnailExtractor:
    """
    Extracts the IFD1 JPEG thumbnail from a TIFF-relative buffer.

    The thumbnail bytes are copied verbatim; they are not checked to be a
    well-formed JPEG.
    """

    def __init__(self, buffer: ByteBuffer):
        """
        Initialize thumbnail extractor.

        Args:
            buffer: TIFF-relative buffer the thumbnail offset refers to
        """
        self.buffer = buffer

    def extract_thumbnail(self, exif: Dict[str, Any]) -> Optional[bytes]:
        """
        Extract the thumbnail described by decoded EXIF tags.

        Args:
            exif: Decoded EXIF map (needs Compression, ThumbnailOffset, ThumbnailSize)

        Returns:
            Thumbnail bytes, or None when there is no JPEG thumbnail
        """
        # ULONG-encoded tags arrive as decimal strings
        if as_offset(exif.get('Compression')) != JPEG_COMPRESSION:
            return None

        offset = as_offset(exif.get('ThumbnailOffset'))
        size = as_offset(exif.get('ThumbnailSize'))
        if offset is None or size is None:
            return None

        if offset + size > len(self.buffer):
            logger.warning(
                "Thumbnail at %d (%d bytes) runs past the EXIF block (%d bytes)",
                offset, size, len(self.buffer),
            )
            return None

        return self.buffer.bytes_at(offset, size)


def to_data_url(data: bytes, mime_type: str = 'image/jpeg') -> str:
    """Encode bytes as a base64 ``data:`` URL."""
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def orientation_rotation(orientation: Any) -> int:
    """
    Return the preview rotation in degrees for an EXIF Orientation value.

    Unknown or missing orientations do not rotate.
    """
    if isinstance(orientation, int) and 0 <= orientation < len(PREVIEW_ROTATION):
        return PREVIEW_ROTATION[orientation]
    return 0
