# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
JPEG file reader

This module acquires the bytes of a JPEG file, optionally on a background
worker thread, and runs the metadata extractor over them once they arrive.
It also exposes the inputs a preview renderer needs (data URLs, thumbnail
and orientation); rendering itself is left to the caller.

Copyright 2025 DNAi inc.
"""

import logging
import mimetypes
import re
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Any, Callable, Dict, NamedTuple, Optional, Union

from jpegmeta.core import MetadataExtractor
from jpegmeta.exceptions import JPEGMetaError, MetadataReadError, UnsupportedFormatError
from jpegmeta.metadata import MetadataResult
from jpegmeta.thumbnail_extractor import orientation_rotation, to_data_url

logger = logging.getLogger(__name__)

JPEG_MIME_PATTERN = re.compile(r'^image/p?jpe?g$')


class ReadyState(IntEnum):
    """Loading state of a JPEGReader"""
    EMPTY = 0
    LOADING = 1
    DONE = 2


@dataclass
class LoadResponse:
    """Message returned by a byte source: the bytes, or an error description."""
    result: Optional[bytes] = None
    error: Optional[str] = None


class PreviewSource(NamedTuple):
    """Image a preview should be rendered from, with its EXIF orientation."""
    data: bytes
    orientation: int
    rotation: int


def read_file_bytes(file_path: Union[str, Path]) -> bytes:
    """
    Read a whole file.

    Raises:
        OSError: If the file cannot be read
    """
    with open(file_path, 'rb') as f:
        return f.read()


def read_file(file_path: Union[str, Path]) -> LoadResponse:
    """Read a whole file, reporting failures in the response instead of raising."""
    try:
        return LoadResponse(result=read_file_bytes(file_path))
    except OSError as e:
        return LoadResponse(error=str(e))


def is_jpeg_file(file_path: Union[str, Path]) -> bool:
    """True if the file name maps to a JPEG MIME type."""
    mime_type, _ = mimetypes.guess_type(str(file_path))
    return bool(mime_type and JPEG_MIME_PATTERN.match(mime_type))


def read_metadata(file_path: Union[str, Path], options: Optional[Dict[str, Any]] = None) -> MetadataResult:
    """
    Read a JPEG file and decode its metadata.

    Raises:
        OSError: If the file cannot be read
        MetadataReadError: If the metadata cannot be decoded
    """
    return MetadataExtractor(options).parse(read_file_bytes(file_path))


class JPEGReader:
    """
    Loads a JPEG file and decodes its metadata.

    Bytes are read synchronously, or on a worker thread when use_worker is
    set. Results are delivered through the onload/onerror callbacks; a
    failed load leaves no partial metadata behind.

    Example:
        >>> reader = JPEGReader(use_worker=True)
        >>> reader.onload = lambda r: print(r.metadata.exif)
        >>> reader.load('photo.jpg').result()
    """

    def __init__(
        self,
        use_worker: bool = False,
        options: Optional[Dict[str, Any]] = None,
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        """
        Initialize the reader.

        Args:
            use_worker: Read file bytes on a background thread
            options: Options for the MetadataExtractor
            executor: Executor to run reads on; one is created on demand if omitted
        """
        self.use_worker = use_worker
        self.extractor = MetadataExtractor(options)
        self._executor = executor
        self._owns_executor = executor is None

        self.onload: Optional[Callable[['JPEGReader'], None]] = None
        self.onerror: Optional[Callable[[JPEGMetaError], None]] = None

        self.binary: Optional[bytes] = None
        self.metadata = MetadataResult()
        self.error: Optional[JPEGMetaError] = None
        self.ready_state = ReadyState.EMPTY

    def __enter__(self) -> 'JPEGReader':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Shut down the worker executor if this reader created it."""
        if self._executor is not None and self._owns_executor:
            self._executor.shutdown(wait=True)
            self._executor = None

    def load(self, file_path: Union[str, Path]) -> Union[bool, 'Future[MetadataResult]']:
        """
        Start loading a JPEG file.

        Args:
            file_path: Path to a .jpg/.jpeg file

        Returns:
            False if the file is not a JPEG or a load already happened;
            True once a synchronous load finished; a Future resolving to the
            metadata when reading on a worker
        """
        if self.ready_state != ReadyState.EMPTY:
            return False

        if not is_jpeg_file(file_path):
            self._handle_error(UnsupportedFormatError('File is not a JPEG'))
            return False
        self.ready_state = ReadyState.LOADING

        if not self.use_worker:
            self._on_load_end(read_file(file_path))
            return True

        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix='jpegmeta')
        source = self._executor.submit(read_file, file_path)
        done: 'Future[MetadataResult]' = Future()

        def deliver(response_future: Future) -> None:
            try:
                self._on_load_end(response_future.result())
                done.set_result(self.metadata)
            except BaseException as e:
                done.set_exception(e)

        source.add_done_callback(deliver)
        return done

    def _on_load_end(self, response: LoadResponse) -> None:
        self.ready_state = ReadyState.DONE
        self.binary = response.result
        if response.error:
            self._handle_error(MetadataReadError(response.error))
            return

        try:
            self.metadata = self.extractor.parse(self.binary)
        except MetadataReadError as e:
            self._handle_error(e)
            return

        if self.onload:
            self.onload(self)

    def _handle_error(self, error: JPEGMetaError) -> None:
        self.error = error
        if self.onerror:
            self.onerror(error)
        else:
            logger.error("Failed to load JPEG: %s", error.message)

    def data_url(self) -> Optional[str]:
        """The loaded file as a ``data:image/jpeg`` URL."""
        if self.binary is None:
            return None
        return to_data_url(self.binary)

    def thumbnail_data_url(self) -> Optional[str]:
        """The EXIF thumbnail as a ``data:image/jpeg`` URL, if there is one."""
        if self.metadata.thumbnail is None:
            return None
        return to_data_url(self.metadata.thumbnail)

    def preview_source(self) -> Optional[PreviewSource]:
        """
        Choose the image a preview should be rendered from.

        The thumbnail is used as-is when present. Otherwise the full image
        is used together with its EXIF Orientation.
        """
        if self.metadata.thumbnail is not None:
            return PreviewSource(self.metadata.thumbnail, 1, 0)
        if self.binary is None:
            return None
        orientation = self.metadata.exif.get('Orientation') or 1
        if not isinstance(orientation, int):
            orientation = 1
        return PreviewSource(self.binary, orientation, orientation_rotation(orientation))
