"""Block splitting and codeword interleaving."""

from __future__ import annotations

from typing import List, Sequence

from .reedsolomon import ec_codewords
from .tables import EcBlocks


def split_blocks(data: Sequence[int], blocks: int) -> List[bytes]:
    """Split ``data`` into short blocks followed by blocks one codeword longer."""
    short_length, long_blocks = divmod(len(data), blocks)
    short_blocks = blocks - long_blocks
    result = []
    start = 0
    for index in range(blocks):
        length = short_length + (0 if index < short_blocks else 1)
        result.append(bytes(data[start:start + length]))
        start += length
    return result


def interleave(data: Sequence[int], layout: EcBlocks) -> bytes:
    """Final codeword sequence: interleaved data, then interleaved EC codewords."""
    chunks = split_blocks(data, layout.blocks)
    corrections = [ec_codewords(chunk, layout.ec_codewords_per_block) for chunk in chunks]
    result = bytearray()
    for index in range(max(len(chunk) for chunk in chunks)):
        for chunk in chunks:
            if index < len(chunk):
                result.append(chunk[index])
    for index in range(layout.ec_codewords_per_block):
        for correction in corrections:
            result.append(correction[index])
    return bytes(result)
