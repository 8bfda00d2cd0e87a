from jpegmeta.byte_buffer import ByteBuffer
from jpegmeta.iptc_parser import IPTCParser

from helpers import iptc_extended_record, iptc_record, photoshop_wrapper


def _parse(payload: bytes):
    iptc = {}
    complete = IPTCParser().parse(ByteBuffer(payload), iptc)
    return complete, iptc


def test_standard_records() -> None:
    complete, iptc = _parse(iptc_record(2, 105, b'Big news') + iptc_record(2, 120, b'A caption'))
    assert complete
    assert iptc == {'Headline': 'Big news', 'Description': 'A caption'}


def test_repeated_tag_becomes_list() -> None:
    payload = iptc_record(2, 25, b'sunset') + iptc_record(2, 25, b'beach') + iptc_record(2, 25, b'sea')
    _, iptc = _parse(payload)
    assert iptc['Keywords'] == ['sunset', 'beach', 'sea']


def test_extended_length_record() -> None:
    payload = iptc_extended_record(2, 105, b'Hello') + b'trailing'
    # The extended value is exactly 5 bytes; decoding then stops at the junk
    complete, iptc = _parse(payload)
    assert iptc == {'Headline': 'Hello'}
    assert not complete


def test_extended_length_with_wider_length_field() -> None:
    value = b'x' * 300
    complete, iptc = _parse(iptc_extended_record(2, 120, value, length_size=4))
    assert complete
    assert iptc['Description'] == 'x' * 300


def test_leading_photoshop_wrapper_is_skipped() -> None:
    payload = photoshop_wrapper(iptc_record(1, 90, b'\x1b%G') + iptc_record(2, 25, b'caf\xc3\xa9'))
    _, iptc = _parse(payload)
    assert iptc['Keywords'] == 'café'
    assert iptc['CodedCharacterSet'] == '\x1b%G'


def test_nul_bytes_are_dropped() -> None:
    _, iptc = _parse(iptc_record(2, 105, b'a\x00b\x00'))
    assert iptc['Headline'] == 'ab'


def test_unnamed_records_are_skipped() -> None:
    complete, iptc = _parse(iptc_record(2, 200, b'\x00\x01') + iptc_record(2, 105, b'kept'))
    assert complete
    assert iptc == {'Headline': 'kept'}


def test_overrunning_record_keeps_earlier_tags() -> None:
    truncated = iptc_record(2, 120, b'cut off')[:-3]
    complete, iptc = _parse(iptc_record(2, 105, b'first') + truncated)
    assert not complete
    assert iptc == {'Headline': 'first'}


def test_truncated_header_stops() -> None:
    complete, iptc = _parse(iptc_record(2, 105, b'first') + b'\x1c\x02')
    assert not complete
    assert iptc == {'Headline': 'first'}


def test_truncated_extended_length_stops() -> None:
    complete, iptc = _parse(b'\x1c\x02\x69\x80\x04\x00\x01')
    assert not complete
    assert iptc == {}


def test_no_marker_means_no_tags() -> None:
    complete, iptc = _parse(b'Photoshop 3.0\x00 nothing here')
    assert complete
    assert iptc == {}


def test_accumulates_across_payloads() -> None:
    iptc = {}
    parser = IPTCParser()
    parser.parse(ByteBuffer(iptc_record(2, 25, b'one')), iptc)
    parser.parse(ByteBuffer(iptc_record(2, 25, b'two')), iptc)
    assert iptc == {'Keywords': ['one', 'two']}
