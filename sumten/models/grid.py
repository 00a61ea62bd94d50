"""
Grid Data Model

The numeric playing field. Cells hold 1-9 when generated and 0 once cleared.
"""

import random
from collections import Counter
from typing import List, Tuple

from ..config.game_settings import MIN_CELL_VALUE, MAX_CELL_VALUE, CLEARED_CELL


def normalize_rect(r1: int, c1: int, r2: int, c2: int) -> Tuple[int, int, int, int]:
    """Return the rectangle as (top, left, bottom, right)."""
    return min(r1, r2), min(c1, c2), max(r1, r2), max(c1, c2)


class Grid:
    """
    Rectangular matrix of integers in [0, 9].

    All rectangle operations take inclusive corners in any order and
    normalize them first. Callers are expected to check ``in_bounds``
    before summing or clearing.
    """

    def __init__(self, cells: List[List[int]]):
        self.cells = cells

    @classmethod
    def generate(cls, rows: int, cols: int, rng=random) -> "Grid":
        """Create a grid with every cell drawn uniformly from 1-9."""
        return cls([[rng.randint(MIN_CELL_VALUE, MAX_CELL_VALUE) for _ in range(cols)]
                    for _ in range(rows)])

    @classmethod
    def from_list(cls, cells: List[List[int]]) -> "Grid":
        return cls([list(row) for row in cells])

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    def in_bounds(self, r1: int, c1: int, r2: int, c2: int) -> bool:
        return all(0 <= r < self.rows for r in (r1, r2)) and all(0 <= c < self.cols for c in (c1, c2))

    def range_sum(self, r1: int, c1: int, r2: int, c2: int) -> int:
        top, left, bottom, right = normalize_rect(r1, c1, r2, c2)
        return sum(sum(row[left:right + 1]) for row in self.cells[top:bottom + 1])

    def clear_range(self, r1: int, c1: int, r2: int, c2: int) -> int:
        """
        Clears every non-zero cell of the rectangle.

        Returns:
            int: Number of cells that changed. 0 means nothing was mutated.
        """
        top, left, bottom, right = normalize_rect(r1, c1, r2, c2)
        cleared = 0
        for r in range(top, bottom + 1):
            row = self.cells[r]
            for c in range(left, right + 1):
                if row[c] != CLEARED_CELL:
                    row[c] = CLEARED_CELL
                    cleared += 1
        return cleared

    def prefix_sums(self) -> List[List[int]]:
        """
        Builds the 2D prefix-sum table.

        ``table[r][c]`` is the sum of all cells above and left of (r, c),
        exclusive, so the table has one extra row and column of zeros.
        """
        table = [[0] * (self.cols + 1) for _ in range(self.rows + 1)]
        for r in range(self.rows):
            running = 0
            for c in range(self.cols):
                running += self.cells[r][c]
                table[r + 1][c + 1] = table[r][c + 1] + running
        return table

    def count_rectangles_summing_to(self, target: int) -> int:
        """
        Counts the axis-aligned rectangles whose cells add up to ``target``.

        For each pair of boundary rows the column sums come from the prefix
        table in O(1); equal prefix differences are then matched with a
        counter, the same trick used for 1D subarray sums.
        """
        table = self.prefix_sums()
        total = 0
        for top in range(self.rows):
            for bottom in range(top + 1, self.rows + 1):
                seen = Counter({0: 1})
                for c in range(1, self.cols + 1):
                    strip = table[bottom][c] - table[top][c]
                    total += seen[strip - target]
                    seen[strip] += 1
        return total

    def remaining(self) -> int:
        """Number of cells not yet cleared."""
        return sum(1 for row in self.cells for value in row if value != CLEARED_CELL)

    def copy(self) -> "Grid":
        return Grid.from_list(self.cells)

    def to_list(self) -> List[List[int]]:
        return [list(row) for row in self.cells]

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return NotImplemented
        return self.cells == other.cells

    def __repr__(self):
        return f"Grid({self.rows}x{self.cols}, remaining={self.remaining()})"
