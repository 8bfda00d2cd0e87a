# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
JPEG APPn segment scanner

Walks the application segments that follow the Start-Of-Image marker and
hands each segment's payload to a handler chosen by marker id. The scan
stops at the first marker outside the APPn range, so image and scan data
are never inspected.

Copyright 2025 DNAi inc.
"""

import logging
from typing import Callable, Dict, Iterator, NamedTuple, Optional, Tuple

from jpegmeta.byte_buffer import ByteBuffer
from jpegmeta.exceptions import EndOfDataError, NotAJpegError, SegmentTooShortError

logger = logging.getLogger(__name__)

# JPEG markers
SOI_MARKER = (0xFF, 0xD8)
APP0 = 0xE0
APP1 = 0xE1    # EXIF
APP13 = 0xED   # IPTC / Photoshop
APPN_LAST = 0xFE

SegmentHandler = Callable[[ByteBuffer], None]


class Segment(NamedTuple):
    """One APPn segment: marker id, payload start in the file, payload view."""
    marker: int
    offset: int
    payload: ByteBuffer


class SegmentScanner:
    """
    Scanner for the APPn segments at the head of a JPEG file.

    Each segment header is four bytes: 0xFF, the marker id, and a
    big-endian length that counts the two length bytes themselves.
    """

    def __init__(self, file_data: bytes):
        """
        Initialize the scanner.

        Args:
            file_data: Complete raw JPEG file
        """
        self.buffer = ByteBuffer(file_data)

    def segments(self) -> Iterator[Segment]:
        """
        Yield the APPn segments in file order.

        Raises:
            NotAJpegError: If the data does not start with 0xFF 0xD8
            SegmentTooShortError: If a segment declares a length below 2
        """
        self._check_soi()

        while True:
            header = self._read_header()
            if header is None:
                break

            marker_hi, marker_lo, len_hi, len_lo = header
            if marker_hi != 0xFF or not APP0 <= marker_lo <= APPN_LAST:
                logger.debug("Stopping scan at marker 0x%02X%02X", marker_hi, marker_lo)
                break

            # Segment length includes the two length bytes
            length = len_lo + 256 * len_hi
            if length < 2:
                raise SegmentTooShortError(f"Segment 0xFF{marker_lo:02X} declares length {length}")

            start = self.buffer.index
            end = min(start + length - 2, len(self.buffer))
            if end < start + length - 2:
                logger.debug("Segment 0xFF%02X truncated to %d bytes", marker_lo, end - start)

            payload = self.buffer.slice(start, end)
            self.buffer.index = end
            logger.debug("Found APP%d segment at %d (%d bytes)", marker_lo - APP0, start, end - start)
            yield Segment(marker_lo, start, payload)

    def scan(self, handlers: Dict[int, SegmentHandler]) -> int:
        """
        Dispatch every APPn payload to the handler registered for its marker.

        Markers without a handler are skipped without decoding.

        Args:
            handlers: Mapping of marker id (e.g. APP1) to payload handler

        Returns:
            Number of APPn segments seen
        """
        count = 0
        for segment in self.segments():
            count += 1
            handler = handlers.get(segment.marker)
            if handler is not None:
                handler(segment.payload)
        return count

    def _check_soi(self) -> None:
        try:
            first = self.buffer.next_byte()
            second = self.buffer.next_byte()
        except EndOfDataError:
            raise NotAJpegError()
        if (first, second) != SOI_MARKER:
            raise NotAJpegError()

    def _read_header(self) -> Optional[Tuple[int, int, int, int]]:
        # A truncated trailing header ends the scan like any other marker
        if self.buffer.remaining < 4:
            return None
        return (
            self.buffer.next_byte(),
            self.buffer.next_byte(),
            self.buffer.next_byte(),
            self.buffer.next_byte(),
        )
