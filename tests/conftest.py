# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so "logic_solver", "apps" and "types_sudoku" can be imported in tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from logic_solver.solver_core import Grid  # noqa: E402

# Wikipedia's example puzzle and its unique solution.
PUZZLE = "530070000600195000098000060800060003400803001700020006060000280000419005000080079"
SOLUTION = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)

# Needs intersections or gridlocks on top of singles.
HARD_PUZZLE = "000900002050123400030000160908000000070000090000000205091000050007439020400007000"

PUZZLE_SDK = """# Wikipedia example
[Puzzle]
53..7....
6..195...
.98....6.
8...6...3
4..8.3..1
7...2...6
.6....28.
...419..5
....8..79
"""


def digits(text):
    return [int(ch) for ch in text]


def rows_of(text):
    values = digits(text)
    return [values[r * 9:(r + 1) * 9] for r in range(9)]


@pytest.fixture
def empty_grid():
    return Grid()


@pytest.fixture
def puzzle_grid():
    return Grid.from_givens(digits(PUZZLE))


@pytest.fixture
def solved_grid():
    return Grid.from_givens(digits(SOLUTION))


def make_bivalue_chain(grid):
    """r1c1 {1 2} -row- r1c7 {2 3} -square- r3c8 {1 3}"""
    a, b, c = grid.cell(0, 0), grid.cell(0, 6), grid.cell(2, 7)
    a.restrict([1, 2])
    b.restrict([2, 3])
    c.restrict([1, 3])
    return a, b, c


def make_parity_links(grid):
    """5 is strong in row 1 (r1c1, r1c5), square 2 (r1c5, r3c6) and row 3 (r3c6, r3c2)."""
    for cell in grid.rows[0]:
        if cell.column not in (0, 4):
            cell.discard(5)
    for cell in grid.squares[1]:
        if cell.key not in ("r1c5", "r3c6"):
            cell.discard(5)
    for cell in grid.rows[2]:
        if cell.column not in (1, 5):
            cell.discard(5)


def double_spot_givens():
    """No 3 and no 4 outside row 1 and column 1, so r1c1 would have to hold both."""
    givens = [0] * 81
    for r, c in [(1, 3), (2, 6), (3, 1), (4, 4), (5, 7), (6, 2), (7, 5), (8, 8)]:
        givens[r * 9 + c] = 3
    for r, c in [(1, 6), (2, 3), (3, 4), (4, 7), (5, 1), (6, 5), (7, 8), (8, 2)]:
        givens[r * 9 + c] = 4
    return givens
