# tests/test_techniques.py
import pytest

from conftest import PUZZLE, digits, double_spot_givens, make_bivalue_chain, make_parity_links
from logic_solver.errors import Contradiction, RegionError
from logic_solver.solver_core import Grid
from logic_solver.sudoku_tools import TECHNIQUES
from logic_solver.techniques import (
    RuleResult,
    gridlock,
    hidden_tuples,
    inconsistency,
    intersect_reject,
    locked_tuples,
    only_spot,
    strict_inconsistency,
    unique_per_region,
    xyz_wing,
)


def test_rule_result_merge():
    a = RuleResult(progressed=True, changed={1}, explanation="a\n")
    b = RuleResult(changed={2}, cited={3}, explanation="b\n")
    a.merge(b)
    assert a.progressed and a.changed == {1, 2} and a.cited == {3}
    assert a.explanation == "a\nb\n"


def test_unique_per_region_clears_the_row(empty_grid):
    row = empty_grid.rows[0]
    row[3].restrict([5])
    result = unique_per_region(row, empty_grid)
    assert result.progressed
    assert result.changed == set(row) - {row[3]}
    assert len(result.changed) == 8
    assert all(not c.has(5) for c in row if c is not row[3])
    assert result.cited == {row[3]}
    assert "Since cell r1c4 has the value 5" in result.explanation


def test_unique_per_region_leaves_no_duplicates(puzzle_grid):
    for row in puzzle_grid.rows:
        while unique_per_region(row, puzzle_grid).progressed:
            pass
        values = [c.value for c in row if c.resolved]
        assert len(values) == len(set(values))


def test_unique_per_region_contradiction(empty_grid):
    row = empty_grid.rows[2]
    row[0].set_given(5)
    row[6].set_given(5)
    with pytest.raises(Contradiction):
        unique_per_region(row, empty_grid)


def test_only_spot_in_square(empty_grid):
    square = empty_grid.squares[4]
    target = empty_grid.cell(4, 5)
    for cell in square:
        if cell is not target:
            cell.discard(4)
    result = only_spot(square, empty_grid)
    assert target.candidates == (4,)
    assert result.changed == {target}
    assert "only cell in square 5" in result.explanation


def test_locked_pair_in_column(empty_grid):
    column = empty_grid.columns[2]
    pair = {column[1], column[6]}
    for cell in pair:
        cell.restrict([2, 7])
    result = locked_tuples(column, empty_grid)
    assert result.changed == set(column) - pair
    for cell in column:
        if cell not in pair:
            assert not cell.has(2) and not cell.has(7)
    assert "locked candidates { 2 7 }" in result.explanation


def test_locked_triple_needs_three_cells(empty_grid):
    row = empty_grid.rows[5]
    row[0].restrict([1, 2, 3])
    row[4].restrict([1, 2, 3])
    assert not locked_tuples(row, empty_grid).progressed
    row[8].restrict([1, 2, 3])
    result = locked_tuples(row, empty_grid)
    assert len(result.changed) == 6


def test_hidden_pair(empty_grid):
    row = empty_grid.rows[7]
    for cell in row[2:]:
        cell.discard(1)
        cell.discard(2)
    result = hidden_tuples(row, empty_grid)
    assert row[0].candidates == (1, 2) and row[1].candidates == (1, 2)
    assert result.changed == {row[0], row[1]}
    assert "hidden tuple" in result.explanation


def test_intersect_reject_from_row_into_square(empty_grid):
    g = empty_grid
    for cell in g.rows[0][2:]:
        cell.discard(3)
    result = intersect_reject(g.rows[0], g)
    assert result.progressed
    for r in (1, 2):
        for c in range(3):
            assert not g.cell(r, c).has(3)
    assert g.cell(0, 0).has(3) and g.cell(0, 1).has(3)
    assert g.cell(1, 3).has(3)


def test_intersect_reject_from_square_into_column(empty_grid):
    g = empty_grid
    for cell in g.squares[8]:
        if cell.column != 7:
            cell.discard(6)
    intersect_reject(g.squares[8], g)
    assert [r for r in range(9) if g.cell(r, 7).has(6)] == [6, 7, 8]


def test_gridlock_x_wing(empty_grid):
    g = empty_grid
    for r in (0, 4):
        for cell in g.rows[r]:
            if cell.column not in (1, 6):
                cell.discard(5)
    result = gridlock(g.rows[0], g)
    assert result.progressed
    for c in (1, 6):
        assert [r for r in range(9) if g.cell(r, c).has(5)] == [0, 4]
    assert g.cell(2, 2).has(5)
    assert "2x2 gridlock on candidate value = 5" in result.explanation


def test_gridlock_rejects_squares(empty_grid):
    with pytest.raises(RegionError):
        gridlock(empty_grid.squares[0], empty_grid)


def test_xyz_wing(empty_grid):
    g = empty_grid
    hinge, xz, yz = g.cell(0, 0), g.cell(1, 1), g.cell(0, 5)
    hinge.restrict([1, 2, 3])
    xz.restrict([1, 3])
    yz.restrict([2, 3])
    result = xyz_wing(g.squares[0], g)
    assert result.progressed
    assert not g.cell(0, 1).has(3) and not g.cell(0, 2).has(3)
    assert hinge.has(3) and xz.has(3) and g.cell(1, 0).has(3)
    assert "XYZ wing composed of XYZ r1c1 {1 2 3} XZ r2c2 {1 3} YZ r1c6 {2 3}" in result.explanation


def test_xyz_wing_only_from_squares(empty_grid):
    with pytest.raises(RegionError):
        xyz_wing(empty_grid.rows[0], empty_grid)


def test_inconsistency_on_solved_grid(solved_grid):
    for _, region in solved_grid.regions():
        assert not inconsistency(region, solved_grid).progressed
        assert not strict_inconsistency(region, solved_grid).progressed


def test_inconsistency_reports_duplicate_sixes():
    givens = [0] * 81
    givens[1] = 6
    givens[7] = 6
    g = Grid.from_givens(givens)
    result = inconsistency(g.rows[0], g)
    assert result.progressed
    assert {c.key for c in result.cited} == {"r1c2", "r1c8"}
    assert "Since cells r1c2 r1c8 have the same value (6)" in result.explanation
    assert g.cell(0, 0).has(6)  # nothing was mutated


def test_strict_inconsistency_flags_undetermined(puzzle_grid):
    result = strict_inconsistency(puzzle_grid.rows[0], puzzle_grid)
    assert result.progressed
    assert len(result.cited) == 9 - 3


def test_only_spot_twice_in_one_cell_is_a_contradiction():
    g = Grid.from_givens(double_spot_givens())
    for _, region in g.regions():
        unique_per_region(region, g)
    assert [c.key for c in g.squares[0] if c.has(3) or c.has(4)] == ["r1c1"]
    with pytest.raises(Contradiction) as exc:
        only_spot(g.squares[0], g)
    assert exc.value.cell is g.cell(0, 0)
    assert exc.value.value == 4


def test_only_spot_value_without_a_home(empty_grid):
    row = empty_grid.rows[3]
    for cell in row:
        cell.discard(9)
    with pytest.raises(Contradiction) as exc:
        only_spot(row, empty_grid)
    assert exc.value.value == 9


# Each builder leaves a grid on which its rule has something to do.

def _puzzle():
    return Grid.from_givens(digits(PUZZLE))


def _lone_four():
    g = Grid()
    for cell in g.squares[4]:
        if cell.key != "r5c6":
            cell.discard(4)
    return g


def _locked_pair():
    g = Grid()
    for r in (1, 6):
        g.cell(r, 2).restrict([2, 7])
    return g


def _hidden_pair():
    g = Grid()
    for cell in g.rows[7][2:]:
        cell.discard(1)
        cell.discard(2)
    return g


def _confined_three():
    g = Grid()
    for cell in g.rows[0][2:]:
        cell.discard(3)
    return g


def _x_wing():
    g = Grid()
    for r in (0, 4):
        for cell in g.rows[r]:
            if cell.column not in (1, 6):
                cell.discard(5)
    return g


def _xyz():
    g = Grid()
    g.cell(0, 0).restrict([1, 2, 3])
    g.cell(1, 1).restrict([1, 3])
    g.cell(0, 5).restrict([2, 3])
    return g


def _parity_links():
    g = Grid()
    make_parity_links(g)
    return g


def _bivalue_chain():
    g = Grid()
    make_bivalue_chain(g)
    return g


def _sweep(name, grid):
    technique = TECHNIQUES[name]
    progressed = False
    for family in technique.families:
        for region in grid.get(family):
            progressed |= technique.func(region, grid).progressed
    return progressed


@pytest.mark.parametrize(
    "name, build, fires",
    [
        ("inconsistency", _puzzle, False),
        ("unique_per_region", _puzzle, True),
        ("only_spot", _lone_four, True),
        ("locked_tuples", _locked_pair, True),
        ("hidden_tuples", _hidden_pair, True),
        ("intersect_reject", _confined_three, True),
        ("gridlock", _x_wing, True),
        ("xyz_wing", _xyz, True),
        ("single_value_chains", _parity_links, True),
        ("multi_value_chains", _bivalue_chain, True),
    ],
)
def test_rules_are_idempotent(name, build, fires):
    g = build()
    start = g.candidates_map()
    while True:
        before = g.candidates_map()
        _sweep(name, g)
        if g.candidates_map() == before:
            break
    assert (g.candidates_map() != start) == fires

    settled = g.candidates_map()
    assert not _sweep(name, g)
    assert g.candidates_map() == settled
