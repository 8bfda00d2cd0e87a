# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Exception classes for jpegmeta

This module defines the error kinds raised while decoding JPEG metadata.
EXIF/TIFF structural errors abort the whole parse; IPTC problems never
surface as exceptions (the IPTC decoder stops quietly instead).

Copyright 2025 DNAi inc.
"""


class JPEGMetaError(Exception):
    """
    Base exception for all jpegmeta errors.

    All jpegmeta exceptions inherit from this class, allowing
    catch-all error handling for any decoding-related errors.
    """
    def __init__(self, message: str = ""):
        """
        Initialize the exception with an optional error message.

        Args:
            message: Descriptive error message explaining what went wrong
        """
        self.message = message
        super().__init__(message)


class MetadataReadError(JPEGMetaError):
    """
    Raised when metadata cannot be read from a byte stream.

    Every structural decoding failure derives from this class, so callers
    that only care whether a parse succeeded can catch it alone.
    """
    pass


class UnsupportedFormatError(JPEGMetaError):
    """
    Raised when a file handed to the reader is not a JPEG.

    Detection is based on the file's MIME type, before any bytes are read.
    """
    pass


class NotAJpegError(MetadataReadError):
    """Raised when the input does not start with the SOI marker 0xFF 0xD8."""

    def __init__(self, message: str = "File is not a valid JPEG"):
        super().__init__(message)


class SegmentTooShortError(MetadataReadError):
    """Raised when an APPn segment is too short to hold its own header."""

    def __init__(self, message: str = "EXIF data too short"):
        super().__init__(message)


class DirectoryTooShortError(MetadataReadError):
    """Raised when an EXIF payload is too short to hold a TIFF header and IFD."""

    def __init__(self, message: str = "IFD data too short"):
        super().__init__(message)


class UnknownByteOrderError(MetadataReadError):
    """Raised when the TIFF header starts with neither 'II' nor 'MM'."""

    def __init__(self, message: str = "Invalid byte order"):
        super().__init__(message)


class BadTiffMagicError(MetadataReadError):
    """Raised when the TIFF magic number 42 is missing from the header."""

    def __init__(self, message: str = "Invalid byte order marker"):
        super().__init__(message)


class InvalidIfd0OffsetError(MetadataReadError):
    """Raised when the offset to IFD0 cannot lie inside an APP1 segment."""

    def __init__(self, message: str = "Invalid IFD0 offset"):
        super().__init__(message)


class EmptyDirectoryError(MetadataReadError):
    """Raised when an IFD declares zero directory entries."""

    def __init__(self, message: str = "Couldn't find subdirectories in IFD"):
        super().__init__(message)


class OutOfBoundsError(MetadataReadError):
    """
    Raised when a read would run past the end of a byte buffer.

    Buffers never clamp or pad; any offset/width combination that does not
    fit raises this error.
    """

    def __init__(self, message: str = "Data offset error"):
        super().__init__(message)


class EndOfDataError(OutOfBoundsError):
    """Raised when the sequential read cursor has reached the end of a buffer."""

    def __init__(self, message: str = "Unexpected end of data"):
        super().__init__(message)


class CyclicDirectoryError(MetadataReadError):
    """
    Raised when IFD pointers loop back on themselves.

    This covers both an offset that was already walked in the same EXIF
    block and SubIFD nesting deeper than the MaxDirectoryDepth option.
    """

    def __init__(self, message: str = "IFD offsets form a cycle"):
        super().__init__(message)
