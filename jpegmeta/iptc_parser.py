# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
IPTC metadata parser

This module reads IPTC (International Press Telecommunications Council)
IIM records from the payload of a JPEG APP13 segment. The records are
usually wrapped in a Photoshop "8BIM" resource block; the parser skips
any such leading bytes by looking for the first plausible record marker.

Copyright 2025 DNAi inc.
"""

import logging
from typing import Any, Dict, List, Union

from jpegmeta.byte_buffer import ByteBuffer
from jpegmeta.exceptions import OutOfBoundsError
from jpegmeta.exif_tags import IPTC, tag_name
from jpegmeta.tag_values import decode_text

logger = logging.getLogger(__name__)

IPTC_MARKER = 0x1C
# Records past this number do not exist in IIM, used to reject false markers
MAX_RECORD = 0x0F
EXTENDED_LENGTH_FLAG = 0x80

IptcValue = Union[str, List[str]]


class IPTCParser:
    """
    Parser for IPTC-IIM records in an APP13 payload.

    IPTC data is stored as a series of records, each containing:
    - 1 byte: Record marker (0x1C)
    - 1 byte: Record number
    - 1 byte: Dataset number
    - 2 bytes: Data length (big-endian), or an extended length when the
      high bit is set: the remaining 15 bits give the number of bytes that
      hold the real length
    - N bytes: Data

    Malformed data never raises: decoding stops and the tags collected so
    far are kept.
    """

    def parse(self, payload: ByteBuffer, iptc: Dict[str, Any]) -> bool:
        """
        Decode the records of an APP13 payload into ``iptc``.

        The first occurrence of a tag name stores a string; repeated
        occurrences turn the value into a list in encounter order.

        Args:
            payload: APP13 segment payload
            iptc: Accumulator of IPTC values keyed by tag name

        Returns:
            True if the payload was decoded to its end, False if decoding
            stopped at a malformed record
        """
        try:
            return self._parse_records(payload, iptc)
        except OutOfBoundsError as e:
            logger.warning("IPTC decoding stopped: %s", e.message)
            return False

    def _parse_records(self, payload: ByteBuffer, iptc: Dict[str, Any]) -> bool:
        length = len(payload)
        offset = self._find_first_marker(payload)

        while offset < length:
            # Check for invalid starting byte or a truncated record header
            if payload.byte_at(offset) != IPTC_MARKER:
                logger.warning("IPTC decoding stopped: no record marker at %d", offset)
                return False
            offset += 1
            if offset + 4 > length:
                logger.warning("IPTC decoding stopped: truncated record header at %d", offset)
                return False

            record = payload.byte_at(offset)
            dataset = payload.byte_at(offset + 1)
            offset += 2

            indicator = payload.byte_at(offset)
            if indicator & EXTENDED_LENGTH_FLAG:
                # Extended tag: the next N bytes hold the length
                length_size = ((indicator & 0x7F) << 8) | payload.byte_at(offset + 1)
                offset += 2
                if offset + length_size > length:
                    logger.warning("IPTC decoding stopped: truncated extended length at %d", offset)
                    return False
                tag_length = int.from_bytes(payload.bytes_at(offset, length_size), 'big')
                offset += length_size
            else:
                # Standard tag
                tag_length = (indicator << 8) | payload.byte_at(offset + 1)
                offset += 2

            if offset + tag_length > length:
                logger.warning("IPTC decoding stopped: record %d:%d overruns the segment", record, dataset)
                return False

            name = tag_name(IPTC, (record, dataset))
            if name:
                value = decode_text(payload.bytes_at(offset, tag_length))
                self._store(iptc, name, value)
            else:
                logger.debug("Skipping unnamed IPTC dataset %d:%d", record, dataset)
            offset += tag_length

        return True

    @staticmethod
    def _find_first_marker(payload: ByteBuffer) -> int:
        length = len(payload)
        offset = 0
        while offset < length:
            if (payload.byte_at(offset) == IPTC_MARKER
                    and offset + 1 < length
                    and payload.byte_at(offset + 1) < MAX_RECORD):
                break
            offset += 1
        return offset

    @staticmethod
    def _store(iptc: Dict[str, Any], name: str, value: str) -> None:
        if name not in iptc:
            iptc[name] = value
        elif isinstance(iptc[name], list):
            iptc[name].append(value)
        else:
            iptc[name] = [iptc[name], value]
