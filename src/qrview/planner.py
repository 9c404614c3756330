"""Version and error level selection."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from .exceptions import ContentTooLarge
from .matrix import total_codewords
from .modes import EncodingMode
from .tables import MAX_VERSION, MIN_VERSION, ErrorLevel, ec_blocks

logger = logging.getLogger(__name__)

_STRONGEST_FIRST = "HQML"


@dataclass(frozen=True)
class Plan:
    version: int
    error_level: ErrorLevel
    length_bits: int
    data_codewords: int


def candidate_levels(requested: ErrorLevel) -> List[ErrorLevel]:
    """Levels to try, strongest first, ending at ``requested``."""
    stop = _STRONGEST_FIRST.index(requested.value) + 1
    return [ErrorLevel(level) for level in _STRONGEST_FIRST[:stop]]


def data_codewords(version: int, level: ErrorLevel) -> int:
    return total_codewords(version) - ec_blocks(version, level).ec_codewords


def plan(mode: EncodingMode, length: int, requested: ErrorLevel = ErrorLevel.M) -> Plan:
    """Find the smallest version, then the strongest level, that holds ``length`` characters.

    The requested level acts as a floor: at the first version with enough room,
    any stronger level that still fits is preferred.
    """
    levels = candidate_levels(requested)
    for version in range(MIN_VERSION, MAX_VERSION + 1):
        length_bits = mode.length_bits(version)
        for level in levels:
            codewords = data_codewords(version, level)
            available_bits = codewords * 8 - length_bits - 4
            if mode.capacity(available_bits) >= length:
                logger.debug(
                    "%s content of length %d fits version %d level %s", mode.name, length, version, level.value
                )
                return Plan(version, level, length_bits, codewords)
    raise ContentTooLarge(
        f"{length} characters in {mode.name.lower()} mode exceed the capacity of "
        f"version {MAX_VERSION} at level {requested.value}"
    )
