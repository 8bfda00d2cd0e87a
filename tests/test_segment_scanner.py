import pytest

from jpegmeta.exceptions import NotAJpegError, SegmentTooShortError
from jpegmeta.segment_scanner import APP1, APP13, SegmentScanner

from helpers import DQT, SOI, jpeg, segment


def test_rejects_missing_soi() -> None:
    with pytest.raises(NotAJpegError):
        list(SegmentScanner(b'\x89PNG\r\n\x1a\n').segments())


def test_rejects_empty_input() -> None:
    with pytest.raises(NotAJpegError):
        list(SegmentScanner(b'\xff').segments())


def test_yields_appn_payloads_in_order() -> None:
    data = jpeg(segment(0xE0, b'JFIF\x00'), segment(APP1, b'abc'), segment(APP13, b'xyz'))
    segments = list(SegmentScanner(data).segments())

    assert [s.marker for s in segments] == [0xE0, APP1, APP13]
    assert segments[1].payload.data == b'abc'
    assert segments[1].offset == 2 + 4 + 5 + 4
    assert segments[2].payload.data == b'xyz'


def test_stops_at_first_non_appn_marker() -> None:
    trailing = segment(APP1, b'never reached')
    data = jpeg(segment(APP1, b'first'), tail=DQT + trailing)
    assert [s.payload.data for s in SegmentScanner(data).segments()] == [b'first']


def test_soi_only_yields_nothing() -> None:
    assert list(SegmentScanner(SOI).segments()) == []


def test_truncated_header_ends_scan() -> None:
    data = SOI + segment(APP1, b'ok') + b'\xff\xe1\x00'
    assert len(list(SegmentScanner(data).segments())) == 1


def test_truncated_payload_is_clamped() -> None:
    data = SOI + b'\xff\xe1\x00\x10abc'
    segments = list(SegmentScanner(data).segments())
    assert segments[0].payload.data == b'abc'


def test_length_below_two_is_an_error() -> None:
    data = SOI + b'\xff\xe1\x00\x01'
    with pytest.raises(SegmentTooShortError):
        list(SegmentScanner(data).segments())


def test_scan_dispatches_by_marker() -> None:
    seen = []
    data = jpeg(segment(0xE0, b'JFIF\x00'), segment(APP1, b'exif'), segment(0xE2, b'icc'), segment(APP13, b'iptc'))

    count = SegmentScanner(data).scan({
        APP1: lambda payload: seen.append(('app1', payload.data)),
        APP13: lambda payload: seen.append(('app13', payload.data)),
    })

    assert count == 4
    assert seen == [('app1', b'exif'), ('app13', b'iptc')]
