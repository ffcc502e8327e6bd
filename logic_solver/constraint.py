"""Pure helpers over a single constraint region: type inference, frequency tables, candidate search and checked elimination."""

# constraint.py
# Everything here reads a region (a tuple of 9 cells). Only the eliminate_*
# functions mutate, and they go through Cell.discard, which raises
# Contradiction instead of emptying a cell.

from __future__ import annotations

from typing import Iterable

import numpy as np

from .errors import RegionError
from .solver_core import Cell, Region, RegionType


def classify_type(region: Region) -> RegionType:
    """Is the region a row, a column or a square?"""
    first, middle, last = region[0], region[4], region[8]
    if first.row == middle.row:
        if first.row != last.row:
            raise RegionError(f"malformed row starting at {first.key}")
        return RegionType.ROW
    if first.column == middle.column:
        if first.column != last.column:
            raise RegionError(f"malformed column starting at {first.key}")
        return RegionType.COLUMN
    if first.square == middle.square:
        if first.square != last.square:
            raise RegionError(f"malformed square starting at {first.key}")
        return RegionType.SQUARE
    raise RegionError(f"cells {first.key}, {middle.key} share no region")


def opposite_type(region_type: RegionType) -> RegionType:
    if region_type is RegionType.ROW:
        return RegionType.COLUMN
    if region_type is RegionType.COLUMN:
        return RegionType.ROW
    raise RegionError(f"{region_type} has no opposite line type")


def constant_index(region: Region) -> int:
    return region[0].index_of(classify_type(region))


def describe_region(region: Region) -> str:
    """e.g. "row 3". Numbered from 1 like the r1c1 cell keys."""
    return f"{classify_type(region)} {constant_index(region) + 1}"


def candidate_frequency(region: Region) -> np.ndarray:
    """freq[v] = number of cells still holding candidate v. freq[0] is unused."""
    counts = [v for cell in region for v in cell.candidates]
    return np.bincount(counts, minlength=10)


def value_frequency(region: Region) -> np.ndarray:
    """freq[v] = number of cells resolved to v; freq[0] counts undetermined cells."""
    return np.bincount([cell.value for cell in region], minlength=10)


def find_cells_with_candidate(region: Region, value: int) -> list[Cell]:
    return [cell for cell in region if cell.has(value)]


def find_candidate_indexes(region: Region, value: int, index_type: RegionType) -> set[int]:
    """Coordinates (under index_type) of the cells holding `value`."""
    return {cell.index_of(index_type) for cell in region if cell.has(value)}


def eliminate(
    region: Region,
    value: int,
    changed: set[Cell],
    preserve: Iterable = (),
    preserve_type: RegionType | None = None,
) -> bool:
    """
    Remove `value` from every cell of `region` that is not preserved.

    `preserve` holds cells, or, when `preserve_type` is given, coordinates
    under that region type (e.g. the row numbers of a gridlock). Modified
    cells are added to `changed`. Returns True if anything was removed.
    """
    preserve = set(preserve)
    did_work = False
    for cell in region:
        if preserve_type is None:
            if cell in preserve:
                continue
        elif cell.index_of(preserve_type) in preserve:
            continue
        if cell.discard(value):
            changed.add(cell)
            did_work = True
    return did_work


def eliminate_in_line_of_sight(
    pivot: Cell,
    square: Region,
    value: int,
    reason: str,
    changed: set[Cell],
    cited: set[Cell],
    preserve: Iterable[Cell] = (),
) -> tuple[bool, str]:
    """
    Remove `value` from the cells of `square` that share a row or a column
    with `pivot`, skipping `preserve`. Each removal gets one explanation line
    ending with `reason`.
    """
    preserve = set(preserve)
    did_work = False
    lines = []
    for cell in square:
        if cell in preserve:
            continue
        if cell.row != pivot.row and cell.column != pivot.column:
            continue
        if cell.discard(value):
            changed.add(cell)
            cited.update(preserve)
            cited.add(pivot)
            lines.append(
                f"Eliminating candidate value {value} from cell {cell.key} due to {reason}"
            )
            did_work = True
    return did_work, "".join(line if line.endswith("\n") else line + "\n" for line in lines)
