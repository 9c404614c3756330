import pytest

from qrview.bitstream import BitWriter, pack
from qrview.modes import EncodingMode

HELLO_WORLD_1Q = bytes([32, 91, 11, 120, 209, 114, 220, 77, 67, 64, 236, 17, 236])


def test_write_across_byte_boundaries() -> None:
    writer = BitWriter(3)
    writer.write(0b101, 3)
    writer.write(0b11111111111, 11)
    assert bytes(writer.buffer) == bytes([0xBF, 0xFC, 0x00])
    assert writer.offset == 14


def test_write_spanning_three_bytes() -> None:
    writer = BitWriter(3)
    writer.write(0b1, 7)
    writer.write(0b1000000001, 10)
    assert bytes(writer.buffer) == bytes([0b00000011, 0b00000000, 0b10000000])


def test_write_masks_extra_high_bits() -> None:
    writer = BitWriter(1)
    writer.write(0xFFF, 4)
    assert bytes(writer.buffer) == bytes([0xF0])


def test_write_overflow() -> None:
    writer = BitWriter(1)
    writer.write(0, 6)
    with pytest.raises(ValueError):
        writer.write(0, 3)


def test_pad_after_aligned_data_skips_one_byte() -> None:
    writer = BitWriter(5)
    writer.write(0xAB, 8)
    writer.pad()
    assert bytes(writer.buffer) == bytes([0xAB, 0x00, 0xEC, 0x11, 0xEC])


def test_pad_with_short_remainder_skips_two_bytes() -> None:
    writer = BitWriter(5)
    writer.write(0, 14)
    writer.pad()
    assert bytes(writer.buffer) == bytes([0, 0, 0, 0xEC, 0x11])


def test_pad_full_buffer() -> None:
    writer = BitWriter(2)
    writer.write(0xFFFF, 16)
    writer.pad()
    assert bytes(writer.buffer) == b"\xff\xff"


def test_pack_hello_world() -> None:
    assert pack("HELLO WORLD", EncodingMode.ALPHANUMERIC, 9, 13) == HELLO_WORLD_1Q


def test_pack_empty_numeric() -> None:
    data = pack("", EncodingMode.NUMERIC, 10, 9)
    assert data == bytes([0x10, 0x00, 0x00, 0xEC, 0x11, 0xEC, 0x11, 0xEC, 0x11])


def test_pack_numeric() -> None:
    # 0001 0000001000 0000001100 0101011001 1000011 + terminator and padding
    data = pack("01234567", EncodingMode.NUMERIC, 10, 16)
    assert data[:6] == bytes([0x10, 0x20, 0x0C, 0x56, 0x61, 0x80])
    assert data[6:] == bytes([0xEC, 0x11] * 5)


def test_pack_byte_mode() -> None:
    data = pack("é", EncodingMode.BYTE, 8, 4)
    assert data == bytes([0x40, 0x1E, 0x90, 0xEC])
