"""Mask penalty rules from ISO/IEC 18004 section 7.8.3."""

from __future__ import annotations

import math
from typing import List, Sequence

Grid = Sequence[Sequence[int]]

FINDER_LIKE = (1, 0, 1, 1, 1, 0, 1, 0, 0, 0, 0)
FINDER_LIKE_REVERSED = FINDER_LIKE[::-1]


def _columns(grid: Grid) -> List[Sequence[int]]:
    return [tuple(column) for column in zip(*grid)]


def _line_runs(line: Sequence[int]) -> int:
    score = 0
    run_color = None
    run_length = 0
    for color in line:
        if color == run_color:
            run_length += 1
            if run_length == 5:
                score += 3
            elif run_length > 5:
                score += 1
        else:
            run_color = color
            run_length = 1
    return score


def _line_patterns(line: Sequence[int]) -> int:
    line = tuple(line)
    width = len(FINDER_LIKE)
    count = 0
    for start in range(len(line) - width + 1):
        window = line[start:start + width]
        if window == FINDER_LIKE or window == FINDER_LIKE_REVERSED:
            count += 1
    return count * 40


def run_penalty(grid: Grid) -> int:
    """Rule 1: runs of five or more same-coloured modules in a row or column."""
    return sum(_line_runs(row) for row in grid) + sum(_line_runs(column) for column in _columns(grid))


def block_penalty(grid: Grid) -> int:
    """Rule 2: 2x2 blocks of one colour."""
    size = len(grid)
    blocks = 0
    for row in range(size - 1):
        upper = grid[row]
        lower = grid[row + 1]
        for column in range(size - 1):
            module = upper[column]
            if upper[column + 1] == module and lower[column] == module and lower[column + 1] == module:
                blocks += 1
    return blocks * 3


def finder_penalty(grid: Grid) -> int:
    """Rule 3: 1:1:3:1:1 finder-like patterns with a light run of four."""
    return sum(_line_patterns(row) for row in grid) + sum(_line_patterns(column) for column in _columns(grid))


def balance_penalty(grid: Grid) -> int:
    """Rule 4: deviation of the dark module ratio from 50%."""
    size = len(grid)
    dark = sum(sum(row) for row in grid)
    percentage = dark * 100 / (size * size)
    return abs(math.floor(percentage / 5 - 10)) * 10


def penalty_score(grid: Grid) -> int:
    if not grid:
        return 0
    return run_penalty(grid) + block_penalty(grid) + finder_penalty(grid) + balance_penalty(grid)
