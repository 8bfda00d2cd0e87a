"""Builders for synthetic JPEG, TIFF and IPTC byte streams used by the tests."""

import struct

SOI = b'\xff\xd8'
# Start of a quantisation table segment: first non-APPn marker in most files
DQT = b'\xff\xdb\x00\x04\x00\x00'

STRING, USHORT, ULONG, URATIONAL, SRATIONAL = 2, 3, 4, 5, 10

THUMBNAIL = b'\xff\xd8thumbnail-bytes\xff\xd9'


def segment(marker: int, payload: bytes) -> bytes:
    return bytes([0xFF, marker]) + struct.pack('>H', len(payload) + 2) + payload


def jpeg(*segments: bytes, tail: bytes = DQT) -> bytes:
    return SOI + b''.join(segments) + tail


def app1(tiff: bytes) -> bytes:
    return segment(0xE1, b'Exif\x00\x00' + tiff)


def app13(payload: bytes) -> bytes:
    return segment(0xED, payload)


def tiff_header(order: str = '<', ifd0_offset: int = 8) -> bytes:
    marker = b'II' if order == '<' else b'MM'
    return marker + struct.pack(f'{order}HI', 42, ifd0_offset)


def short_value(order: str, *values: int) -> bytes:
    return struct.pack(f'{order}{len(values)}H', *values).ljust(4, b'\x00')


def entry(order: str, tag: int, fmt: int, count: int, value) -> bytes:
    if isinstance(value, int):
        value = struct.pack(f'{order}I', value)
    return struct.pack(f'{order}HHI', tag, fmt, count) + value.ljust(4, b'\x00')


def ifd(order: str, entries, next_offset: int = 0) -> bytes:
    return struct.pack(f'{order}H', len(entries)) + b''.join(entries) + struct.pack(f'{order}I', next_offset)


def ifd_size(count: int) -> int:
    return 2 + 12 * count + 4


def rationals(order: str, pairs) -> bytes:
    return b''.join(struct.pack(f'{order}II', n, d) for n, d in pairs)


def build_sample_tiff(order: str = '<', thumbnail: bytes = THUMBNAIL) -> bytes:
    """
    TIFF block with IFD0 -> Exif SubIFD, GPS IFD and IFD1 with a JPEG thumbnail.

    See SAMPLE_EXIF / SAMPLE_GPS for the tags it decodes to.
    """
    ifd0_at = 8
    make_at = ifd0_at + ifd_size(4)
    exif_at = make_at + 6
    exposure_at = exif_at + ifd_size(2)
    gps_at = exposure_at + 8
    latitude_at = gps_at + ifd_size(2)
    ifd1_at = latitude_at + 24
    thumb_at = ifd1_at + ifd_size(3)

    data = b''.join([
        tiff_header(order, ifd0_at),
        ifd(order, [
            entry(order, 0x010F, STRING, 6, make_at),
            entry(order, 0x0112, USHORT, 1, short_value(order, 6)),
            entry(order, 0x8769, ULONG, 1, exif_at),
            entry(order, 0x8825, ULONG, 1, gps_at),
        ], ifd1_at),
        b'Canon\x00',
        ifd(order, [
            entry(order, 0x829A, URATIONAL, 1, exposure_at),
            entry(order, 0x8827, USHORT, 1, short_value(order, 200)),
        ]),
        rationals(order, [(1, 250)]),
        ifd(order, [
            entry(order, 0x0001, STRING, 2, b'N\x00'),
            entry(order, 0x0002, URATIONAL, 3, latitude_at),
        ]),
        rationals(order, [(35, 1), (41, 1), (5000, 100)]),
        ifd(order, [
            entry(order, 0x0103, USHORT, 1, short_value(order, 6)),
            entry(order, 0x0201, ULONG, 1, thumb_at),
            entry(order, 0x0202, ULONG, 1, len(thumbnail)),
        ]),
        thumbnail,
    ])
    assert data[thumb_at:] == thumbnail
    return data


SAMPLE_THUMB_OFFSET = 8 + ifd_size(4) + 6 + ifd_size(2) + 8 + ifd_size(2) + 24 + ifd_size(3)

SAMPLE_EXIF = {
    'Make': 'Canon',
    'Orientation': 6,
    'ExposureTime': '1/250',
    'ISO': 200,
    'Compression': 6,
    'ThumbnailOffset': str(SAMPLE_THUMB_OFFSET),
    'ThumbnailSize': str(len(THUMBNAIL)),
}

SAMPLE_GPS = {
    'GPSLatitudeRef': 'N',
    'GPSLatitude': '35/1,41/1,5000/100',
}


def iptc_record(record: int, dataset: int, value: bytes) -> bytes:
    return bytes([0x1C, record, dataset]) + struct.pack('>H', len(value)) + value


def iptc_extended_record(record: int, dataset: int, value: bytes, length_size: int = 1) -> bytes:
    length_bytes = len(value).to_bytes(length_size, 'big')
    indicator = struct.pack('>H', 0x8000 | length_size)
    return bytes([0x1C, record, dataset]) + indicator + length_bytes + value


def photoshop_wrapper(iptc: bytes) -> bytes:
    """Wrap IPTC records in a Photoshop 3.0 / 8BIM 0x0404 resource block."""
    block = b'8BIM' + struct.pack('>H', 0x0404) + b'\x00\x00' + struct.pack('>I', len(iptc)) + iptc
    if len(iptc) % 2:
        block += b'\x00'
    return b'Photoshop 3.0\x00' + block
