import pytest

from jpegmeta.byte_buffer import ByteBuffer, ByteOrder
from jpegmeta.exceptions import EndOfDataError, OutOfBoundsError, UnknownByteOrderError


def test_next_byte_advances_until_end() -> None:
    buffer = ByteBuffer(b'\x01\x02')
    assert buffer.next_byte() == 1
    assert buffer.next_byte() == 2
    assert buffer.remaining == 0
    with pytest.raises(EndOfDataError):
        buffer.next_byte()


def test_byte_at_is_bounds_checked() -> None:
    buffer = ByteBuffer(b'\xaa\xbb')
    assert buffer.byte_at(1) == 0xBB
    with pytest.raises(OutOfBoundsError):
        buffer.byte_at(2)
    with pytest.raises(OutOfBoundsError):
        buffer.byte_at(-1)


def test_resolve_little_endian() -> None:
    buffer = ByteBuffer(b'II\x2a\x00\x08\x00\x00\x00')
    assert buffer.resolve_byte_order() is ByteOrder.LITTLE
    assert buffer.verify_tiff_magic()
    assert buffer.short_at(2) == 42
    assert buffer.long_at(4) == 8


def test_resolve_big_endian() -> None:
    buffer = ByteBuffer(b'MM\x00\x2a\x00\x00\x01\x02')
    assert buffer.resolve_byte_order() is ByteOrder.BIG
    assert buffer.verify_tiff_magic()
    assert buffer.short_at(2) == 0x002A
    assert buffer.long_at(4) == 0x0102


def test_unknown_byte_order() -> None:
    buffer = ByteBuffer(b'XX\x2a\x00')
    assert buffer.resolve_byte_order() is None
    assert buffer.byte_order is ByteOrder.UNSET
    assert not buffer.verify_tiff_magic()
    with pytest.raises(UnknownByteOrderError):
        buffer.short_at(0)


def test_magic_checked_in_resolved_order() -> None:
    # Big-endian magic under an Intel marker
    buffer = ByteBuffer(b'II\x00\x2a')
    buffer.resolve_byte_order()
    assert not buffer.verify_tiff_magic()


def test_multi_byte_reads_fail_past_end() -> None:
    buffer = ByteBuffer(b'II\x2a\x00\x08\x00')
    buffer.resolve_byte_order()
    with pytest.raises(OutOfBoundsError):
        buffer.long_at(4)
    with pytest.raises(OutOfBoundsError):
        buffer.short_at(5)
    assert buffer.short_at(4) == 8


def test_slice_is_relative_and_keeps_byte_order() -> None:
    buffer = ByteBuffer(b'MM\x00\x2a\x12\x34\x56\x78')
    buffer.resolve_byte_order()
    buffer.next_byte()

    view = buffer.slice(4, 8)
    assert len(view) == 4
    assert view.index == 0
    assert view.byte_order is ByteOrder.BIG
    assert view.short_at(0) == 0x1234
    assert view.long_at(0) == 0x12345678
    with pytest.raises(OutOfBoundsError):
        view.byte_at(4)


def test_slice_outside_buffer_fails() -> None:
    buffer = ByteBuffer(b'abc')
    with pytest.raises(OutOfBoundsError):
        buffer.slice(1, 4)
    with pytest.raises(OutOfBoundsError):
        buffer.slice(2, 1)
