# types_sudoku.py
from __future__ import annotations

from typing import TypedDict

Grid = list[list[int]]
"""A 9x9 Sudoku grid as rows of integers (0 = empty / undetermined)."""

Givens = list[int | None]
"""81 cell values in row-major order; 0 or None for cells that are not given."""

Candidates = dict[str, list[int]]
"""Map from cell key (e.g., 'r1c1') to the ascending list of remaining candidates (1..9)."""


class Step(TypedDict, total=False):
    """One productive application of a technique to a family of regions."""

    index: int  # 1-based order in the solve
    technique: str  # e.g., 'only_spot', 'locked_tuples', 'multi_value_chains'
    region_type: str  # 'row', 'column' or 'square'
    changed: list[str]  # cells whose candidates were narrowed
    cited: list[str]  # cells used as evidence
    explanation: str  # human-readable justification, one line per deduction


class Issue(TypedDict, total=False):
    """A consistency problem found in one region."""

    type: str  # 'duplicate' or 'undetermined'
    unit: str  # e.g., 'row 4'
    digits: list[int]
    cells: list[str]
