"""Logical (no-guessing) 9x9 Sudoku solver."""

from .config import load_config
from .errors import Contradiction, InconsistentGrid, PuzzleFormatError, RegionError, SudokuError
from .puzzle_io import load_puzzle, parse_csv, parse_sdk, render_grid, write_csv
from .solver_core import Cell, Grid, RegionType
from .sudoku_tools import (
    TECHNIQUES,
    SolveResult,
    apply_rule,
    apply_to_family,
    consistency_report,
    solve,
    solve_givens,
)

__all__ = [
    "Cell",
    "Contradiction",
    "Grid",
    "InconsistentGrid",
    "PuzzleFormatError",
    "RegionError",
    "RegionType",
    "SolveResult",
    "SudokuError",
    "TECHNIQUES",
    "apply_rule",
    "apply_to_family",
    "consistency_report",
    "load_config",
    "load_puzzle",
    "parse_csv",
    "parse_sdk",
    "render_grid",
    "solve",
    "solve_givens",
    "write_csv",
]
