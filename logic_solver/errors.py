"""Exception types raised by the deduction engine and the puzzle readers."""

# errors.py
# A contradiction is fatal: the puzzle as given cannot be satisfied.
# An incomplete solve is not an error and never raises.

from __future__ import annotations


class SudokuError(Exception):
    """Base class for every error raised by logic_solver."""


class Contradiction(SudokuError):
    """An elimination would leave a cell without candidates."""

    def __init__(self, message: str, cell=None, value: int | None = None):
        super().__init__(message)
        self.cell = cell
        self.value = value


class InconsistentGrid(Contradiction):
    """Resolved cells share a value inside a row, column or square."""

    def __init__(self, message: str, cells=None):
        super().__init__(message)
        self.cells = sorted(cells or [])


class RegionError(SudokuError):
    """A constraint region (or a rule's view of one) is malformed."""


class PuzzleFormatError(SudokuError):
    """Puzzle text or file could not be read."""
