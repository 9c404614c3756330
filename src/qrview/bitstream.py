"""Data codeword packing."""

from __future__ import annotations

from typing import Iterable, Tuple

from .modes import EncodingMode

PAD_BYTES = (0xEC, 0x11)


class BitWriter:
    """Writes values MSB-first into a fixed size, zero-initialized buffer."""

    def __init__(self, size: int) -> None:
        self.buffer = bytearray(size)
        self.offset = 0

    def write(self, value: int, bit_length: int) -> None:
        if self.offset + bit_length > len(self.buffer) * 8:
            raise ValueError("bit buffer overflow")
        value &= (1 << bit_length) - 1
        remaining = bit_length
        while remaining > 0:
            free = 8 - (self.offset & 7)
            taken = min(free, remaining)
            chunk = (value >> (remaining - taken)) & ((1 << taken) - 1)
            self.buffer[self.offset >> 3] |= chunk << (free - taken)
            remaining -= taken
            self.offset += taken

    def write_all(self, values: Iterable[Tuple[int, int]]) -> None:
        for value, bit_length in values:
            self.write(value, bit_length)

    def pad(self) -> None:
        """Leave room for the terminator and fill the rest with pad bytes."""
        remainder_bits = 8 - (self.offset & 7)
        filler_start = (self.offset >> 3) + (2 if remainder_bits < 4 else 1)
        for index in range(len(self.buffer) - filler_start):
            self.buffer[filler_start + index] = PAD_BYTES[index & 1]


def pack(content: str, mode: EncodingMode, length_bits: int, data_codewords: int) -> bytes:
    writer = BitWriter(data_codewords)
    writer.write(int(mode), 4)
    writer.write(len(content), length_bits)
    writer.write_all(mode.values(content))
    writer.pad()
    return bytes(writer.buffer)
