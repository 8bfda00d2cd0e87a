# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Core metadata extractor

This module provides the main API for decoding metadata from JPEG bytes.
It combines the segment scanner with the EXIF and IPTC parsers into one
pass that produces a MetadataResult.

This is a 100% pure Python implementation - no external codec libraries.

Copyright 2025 DNAi inc.
"""

import logging
from typing import Any, Dict, Optional

from jpegmeta.byte_buffer import ByteBuffer
from jpegmeta.exif_parser import ExifParser
from jpegmeta.exif_tags import EXIF, GPS
from jpegmeta.ifd_walker import DEFAULT_MAX_DEPTH, MAX_DIRECTORY_DEPTH, Directories
from jpegmeta.iptc_parser import IPTCParser
from jpegmeta.metadata import MetadataResult
from jpegmeta.segment_scanner import APP1, APP13, SegmentScanner

logger = logging.getLogger(__name__)


class MetadataExtractor:
    """
    Decodes EXIF, GPS and IPTC metadata plus the EXIF thumbnail from JPEG bytes.

    The extractor holds configuration only; every call to parse() works on
    fresh state, so one extractor can be reused for many files.

    Example:
        >>> extractor = MetadataExtractor({'ExtractThumbnail': False})
        >>> result = extractor.parse(jpeg_bytes)
        >>> result.exif.get('Make')
        'Canon'
    """

    def __init__(self, options: Optional[Dict[str, Any]] = None):
        """
        Initialize the extractor.

        Args:
            options: Optional API options, see available_options()

        Raises:
            ValueError: If an option name is not recognized
        """
        self.options: Dict[str, Any] = {}
        self._initialize_default_options()
        for option_name, value in (options or {}).items():
            self.set_option(option_name, value)

    @staticmethod
    def available_options() -> Dict[str, Dict[str, Any]]:
        """
        Return a dictionary of available API options.

        Returns:
            Dictionary mapping option names to their description, type,
            default value and whether they are supported
        """
        return {
            'MaxDirectoryDepth': {
                'description': 'Maximum nesting of Exif SubIFD and GPS IFD pointers',
                'type': 'int',
                'default': DEFAULT_MAX_DEPTH,
                'min': 0,
                'max': MAX_DIRECTORY_DEPTH,
                'supported': True
            },
            'ExtractThumbnail': {
                'description': 'Capture the JPEG thumbnail stored in IFD1',
                'type': 'bool',
                'default': True,
                'supported': True
            },
            'ReadIPTC': {
                'description': 'Decode IPTC records from APP13 segments',
                'type': 'bool',
                'default': True,
                'supported': True
            },
        }

    def _initialize_default_options(self) -> None:
        for option_name, option_info in self.available_options().items():
            if 'default' in option_info:
                self.options[option_name] = option_info['default']

    def set_option(self, option_name: str, value: Any) -> None:
        """
        Set an API option value.

        Args:
            option_name: Name of the option (e.g., 'ExtractThumbnail')
            value: Value to set for the option

        Raises:
            ValueError: If option name is not recognized, or the value has the wrong
                type or lies outside the option's range
        """
        available = self.available_options()
        if option_name not in available:
            raise ValueError(f"Unknown option: {option_name}. Use available_options() to see valid options.")

        expected_type = available[option_name].get('type')
        if expected_type == 'bool' and not isinstance(value, bool):
            # Accept 'true'/'false' style strings
            if isinstance(value, str):
                value = value.lower() in ('true', '1', 'yes', 'on')
            else:
                value = bool(value)
        elif expected_type == 'int' and not isinstance(value, int):
            try:
                value = int(value)
            except (ValueError, TypeError):
                raise ValueError(f"Option {option_name} requires int value, got {type(value).__name__}")

        limits = available[option_name]
        if expected_type == 'int' and not limits.get('min', value) <= value <= limits.get('max', value):
            raise ValueError(
                f"Option {option_name} must be between {limits['min']} and {limits['max']}, got {value}"
            )

        self.options[option_name] = value

    def get_option(self, option_name: str, default: Any = None) -> Any:
        """Get an API option value, or ``default`` if it is not set."""
        return self.options.get(option_name, default)

    def parse(self, file_data: bytes) -> MetadataResult:
        """
        Decode the metadata of a complete JPEG file.

        Args:
            file_data: Raw bytes of the JPEG file

        Returns:
            MetadataResult with the exif, gps and iptc maps and the thumbnail

        Raises:
            NotAJpegError: If the data does not start with the SOI marker
            MetadataReadError: On any structural EXIF error; nothing is returned
        """
        session = _ParseSession(
            ExifParser(
                max_depth=self.get_option('MaxDirectoryDepth', DEFAULT_MAX_DEPTH),
                extract_thumbnail=self.get_option('ExtractThumbnail', True),
            ),
            IPTCParser() if self.get_option('ReadIPTC', True) else None,
        )
        SegmentScanner(file_data).scan(session.handlers())
        return session.result()


class _ParseSession:
    """Mutable state of a single parse() call."""

    def __init__(self, exif_parser: ExifParser, iptc_parser: Optional[IPTCParser]):
        self.exif_parser = exif_parser
        self.iptc_parser = iptc_parser
        self.directories: Directories = {EXIF: {}, GPS: {}}
        self.iptc: Dict[str, Any] = {}
        self.thumbnail: Optional[bytes] = None

    def handlers(self) -> Dict[int, Any]:
        handlers = {APP1: self.on_app1}
        if self.iptc_parser is not None:
            handlers[APP13] = self.on_app13
        return handlers

    def on_app1(self, payload: ByteBuffer) -> None:
        thumbnail = self.exif_parser.parse(payload, self.directories)
        if thumbnail is not None:
            self.thumbnail = thumbnail

    def on_app13(self, payload: ByteBuffer) -> None:
        if not self.iptc_parser.parse(payload, self.iptc):
            logger.debug("APP13 segment decoded partially (%d IPTC tags so far)", len(self.iptc))

    def result(self) -> MetadataResult:
        return MetadataResult(
            exif=self.directories[EXIF],
            gps=self.directories[GPS],
            iptc=self.iptc,
            thumbnail=self.thumbnail,
        )


def parse(file_data: bytes, options: Optional[Dict[str, Any]] = None) -> MetadataResult:
    """Decode JPEG metadata with a one-off MetadataExtractor."""
    return MetadataExtractor(options).parse(file_data)
