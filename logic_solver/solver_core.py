"""Core Sudoku model used by every technique: index math, cells with candidate lists, and the grid of 27 constraint regions."""

# solver_core.py
# - index math (0-based internally, "r1c1" keys for humans)
# - Cell: one of the 81 positions, owns its candidate list
# - Grid: owns the cells and the row / column / square views onto them
# A region is a plain tuple of 9 Cell references; no region owns its cells.

from __future__ import annotations

from enum import Enum
from typing import Iterable, Iterator, Sequence

import numpy as np

from types_sudoku import Candidates, Givens
from types_sudoku import Grid as Rows

from .errors import Contradiction, RegionError

DIGITS = tuple(range(1, 10))


class RegionType(str, Enum):
    ROW = "row"
    COLUMN = "column"
    SQUARE = "square"
    GRID = "grid"

    def __str__(self) -> str:
        return self.value


# The three physical families, in the order chain searches visit them.
LINE_AND_SQUARE = (RegionType.ROW, RegionType.COLUMN, RegionType.SQUARE)


def rc_to_key(r: int, c: int) -> str:
    """0-based (row, column) to the 1-based "r{row}c{col}" key used in explanations."""
    return f"r{r + 1}c{c + 1}"


def key_to_rc(key: str) -> tuple[int, int]:
    r = int(key.split("c")[0][1:])
    c = int(key.split("c")[1])
    return (r - 1, c - 1)


def which_square(r: int, c: int) -> int:
    return 3 * (r // 3) + c // 3


def row_cell_indexes(r: int) -> list[int]:
    return [r * 9 + c for c in range(9)]


def column_cell_indexes(c: int) -> list[int]:
    return [r * 9 + c for r in range(9)]


def square_cell_indexes(s: int) -> list[int]:
    # Square 0 starts at cell 0, square 1 at cell 3, square 3 at cell 27 ...
    start = (s // 3) * 27 + (s % 3) * 3
    return [start + (i // 3) * 9 + (i % 3) for i in range(9)]


class Cell:
    """One of the 81 positions; candidates only ever shrink."""

    def __init__(self, index: int):
        if not 0 <= index < 81:
            raise ValueError(f"cell index out of range: {index}")
        self.index = index
        self.row = index // 9
        self.column = index % 9
        self.square = which_square(self.row, self.column)
        self.given = False
        self._candidates: list[int] = list(DIGITS)

    @property
    def candidates(self) -> tuple[int, ...]:
        return tuple(self._candidates)

    @property
    def key(self) -> str:
        return rc_to_key(self.row, self.column)

    @property
    def resolved(self) -> bool:
        return len(self._candidates) == 1

    @property
    def value(self) -> int:
        """The resolved value, or 0 while more than one candidate remains."""
        if len(self._candidates) == 1:
            return self._candidates[0]
        return 0

    def index_of(self, region_type: RegionType) -> int:
        if region_type is RegionType.ROW:
            return self.row
        if region_type is RegionType.COLUMN:
            return self.column
        if region_type is RegionType.SQUARE:
            return self.square
        if region_type is RegionType.GRID:
            return self.index
        raise RegionError(f"unknown region type: {region_type!r}")

    def has(self, value: int) -> bool:
        return value in self._candidates

    def set_given(self, value: int) -> None:
        if value not in DIGITS:
            raise ValueError(f"given value must be 1..9, got {value!r}")
        self.given = True
        self._candidates = [value]

    def discard(self, value: int) -> bool:
        """Remove one candidate. Returns True if it was present."""
        if value not in self._candidates:
            return False
        if len(self._candidates) == 1:
            raise Contradiction(
                f"removing {value} from {self.key} (cell {self.index}) leaves no candidates",
                cell=self,
                value=value,
            )
        self._candidates.remove(value)
        return True

    def restrict(self, values: Iterable[int]) -> bool:
        """Keep only the candidates in `values`. Returns True if anything was removed."""
        keep = set(values)
        remaining = [v for v in self._candidates if v in keep]
        if not remaining:
            raise Contradiction(
                f"restricting {self.key} (cell {self.index}) to {sorted(keep)} leaves no candidates",
                cell=self,
            )
        if len(remaining) == len(self._candidates):
            return False
        self._candidates = remaining
        return True

    def describe(self) -> str:
        return f"{self.key} {{{' '.join(str(v) for v in self._candidates)}}}"

    def __lt__(self, other: "Cell") -> bool:
        return self.index < other.index

    def __repr__(self) -> str:
        return f"Cell({self.key}, {self._candidates})"


Region = tuple  # tuple[Cell, ...] of length 9


class Grid:
    """Owns the 81 cells plus 9 rows, 9 columns and 9 squares of references into them."""

    def __init__(self, givens: Givens | Rows | None = None):
        self.cells: list[Cell] = [Cell(i) for i in range(81)]
        self.rows: list[Region] = [
            tuple(self.cells[i] for i in row_cell_indexes(k)) for k in range(9)
        ]
        self.columns: list[Region] = [
            tuple(self.cells[i] for i in column_cell_indexes(k)) for k in range(9)
        ]
        self.squares: list[Region] = [
            tuple(self.cells[i] for i in square_cell_indexes(k)) for k in range(9)
        ]
        if givens is not None:
            self.set_givens(givens)

    @classmethod
    def from_givens(cls, givens: Givens | Rows) -> "Grid":
        return cls(givens)

    def set_givens(self, givens: Givens | Rows) -> None:
        """Accepts 81 values or 9 rows of 9. 0 or None means unknown."""
        flat = _flatten_givens(givens)
        for cell, v in zip(self.cells, flat):
            if v is None or v == 0:
                continue
            cell.set_given(int(v))

    def get(self, region_type: RegionType) -> list[Region]:
        if region_type is RegionType.ROW:
            return self.rows
        if region_type is RegionType.COLUMN:
            return self.columns
        if region_type is RegionType.SQUARE:
            return self.squares
        raise RegionError(f"the grid has no {region_type} regions")

    def region_of(self, cell: Cell, region_type: RegionType) -> Region:
        return self.get(region_type)[cell.index_of(region_type)]

    def cell(self, r: int, c: int) -> Cell:
        return self.rows[r][c]

    def regions(self) -> Iterator[tuple[RegionType, Region]]:
        for region_type in LINE_AND_SQUARE:
            for region in self.get(region_type):
                yield region_type, region

    def values(self) -> np.ndarray:
        """9x9 array of resolved values, 0 where a cell is still undetermined."""
        return np.array([c.value for c in self.cells], dtype=np.int64).reshape(9, 9)

    def candidates_map(self) -> Candidates:
        return {c.key: list(c.candidates) for c in self.cells}

    def unresolved(self) -> list[Cell]:
        return [c for c in self.cells if not c.resolved]

    def solved(self) -> bool:
        return not self.unresolved() and self.is_consistent()

    def candidate_count(self) -> int:
        return sum(len(c.candidates) for c in self.cells)

    def is_consistent(self, strict: bool = False) -> bool:
        """False if some region holds a resolved duplicate (or, when strict, an undetermined cell)."""
        for _, region in self.regions():
            counts = np.bincount([c.value for c in region], minlength=10)
            if (counts[1:] > 1).any():
                return False
            if strict and counts[0] > 0:
                return False
        return True

    def __str__(self) -> str:
        from .puzzle_io import render_grid

        return render_grid(self)


def _flatten_givens(givens: Sequence) -> list:
    rows = list(givens)
    if len(rows) == 9 and all(isinstance(r, (list, tuple, np.ndarray)) for r in rows):
        flat = [v for r in rows for v in r]
    else:
        flat = rows
    if len(flat) != 81:
        raise ValueError(f"expected 81 cell values, got {len(flat)}")
    return [None if v is None else int(v) for v in flat]
