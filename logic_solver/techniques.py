"""Region-level deduction techniques: consistency, singles, locked and hidden tuples, intersections, gridlocks and XYZ wings."""

# techniques.py
# Every technique has the same call shape:
#     technique(region, grid) -> RuleResult
# Techniques that only look at the region ignore `grid`. None of them ever
# adds a candidate back.

from __future__ import annotations

from dataclasses import dataclass, field

from .combinator import Combinator
from .constraint import (
    candidate_frequency,
    classify_type,
    constant_index,
    describe_region,
    eliminate,
    eliminate_in_line_of_sight,
    find_candidate_indexes,
    find_cells_with_candidate,
    opposite_type,
    value_frequency,
)
from .errors import Contradiction, RegionError
from .solver_core import DIGITS, Cell, Grid, Region, RegionType

MAX_TUPLE = 4


@dataclass
class RuleResult:
    progressed: bool = False
    changed: set = field(default_factory=set)
    cited: set = field(default_factory=set)
    explanation: str = ""

    def note(self, text: str) -> None:
        self.explanation += text if text.endswith("\n") else text + "\n"

    def merge(self, other: "RuleResult") -> "RuleResult":
        self.progressed = self.progressed or other.progressed
        self.changed |= other.changed
        self.cited |= other.cited
        self.explanation += other.explanation
        return self


def _keys(cells) -> str:
    return " ".join(c.key for c in sorted(cells))


def _values(values) -> str:
    return "{ " + " ".join(str(v) for v in values) + " }"


def inconsistency(region: Region, grid: Grid | None = None, strict: bool = False) -> RuleResult:
    """
    Flag resolved values that appear twice in the region. With `strict`,
    undetermined cells are flagged as well (used once solving has stopped).
    Nothing is mutated; the flagged cells are reported in `cited`.
    """
    result = RuleResult()
    freq = value_frequency(region)
    where = describe_region(region)
    for value in range(0 if strict else 1, 10):
        if value == 0 and freq[0] > 0:
            cells = [c for c in region if c.value == 0]
            result.cited.update(cells)
            result.note(f"Cells {_keys(cells)} are still undetermined in {where}")
        elif value > 0 and freq[value] > 1:
            cells = [c for c in region if c.value == value]
            result.cited.update(cells)
            result.note(
                f"Since cells {_keys(cells)} have the same value ({value}) "
                f"there is an inconsistency in {where}"
            )
    result.progressed = bool(result.cited)
    return result


def strict_inconsistency(region: Region, grid: Grid | None = None) -> RuleResult:
    return inconsistency(region, grid, strict=True)


def unique_per_region(region: Region, grid: Grid | None = None) -> RuleResult:
    """A resolved cell removes its value from every other cell of the region."""
    result = RuleResult()
    for cell in region:
        if not cell.resolved:
            continue
        if eliminate(region, cell.value, result.changed, preserve={cell}):
            result.cited.add(cell)
            result.note(
                f"Since cell {cell.key} has the value {cell.value} we can remove that value "
                f"from all other candidates in {describe_region(region)}"
            )
    result.progressed = bool(result.changed)
    return result


def only_spot(region: Region, grid: Grid | None = None) -> RuleResult:
    """
    A candidate held by exactly one cell of the region is that cell's value.
    A value no cell can hold, or two values forced into the same cell, is a
    contradiction.
    """
    result = RuleResult()
    freq = candidate_frequency(region)
    sole = {v: find_cells_with_candidate(region, v)[0] for v in DIGITS if freq[v] == 1}
    for value in DIGITS:
        if freq[value] == 0:
            raise Contradiction(
                f"no cell in {describe_region(region)} can hold {value}", value=value
            )
        if freq[value] != 1:
            continue
        cell = sole[value]
        if not cell.has(value):
            raise Contradiction(
                f"{cell.key} is the only spot for both {cell.value} and {value} "
                f"in {describe_region(region)}",
                cell=cell,
                value=value,
            )
        if len(cell.candidates) > 1:
            cell.restrict([value])
            result.changed.add(cell)
            result.cited.add(cell)
            result.note(
                f"Cell {cell.key} is the only cell in {describe_region(region)} "
                f"with a candidate value of {value}. Removing other candidate values from this cell."
            )
    result.progressed = bool(result.changed)
    return result


def locked_tuples(region: Region, grid: Grid | None = None) -> RuleResult:
    """
    n cells (2 <= n <= 4) with the same n candidates lock those values:
    e.g. two cells holding exactly {3, 8} remove 3 and 8 from the rest of
    the region.
    """
    result = RuleResult()
    for i, cell in enumerate(region):
        size = len(cell.candidates)
        if not 2 <= size <= MAX_TUPLE:
            continue
        locked = cell.candidates
        partners = [cell] + [other for other in region[i + 1:] if other.candidates == locked]
        if len(partners) != size:
            continue
        did_work = False
        for value in locked:
            did_work |= eliminate(region, value, result.changed, preserve=partners)
        if did_work:
            result.cited.update(partners)
            result.note(
                f"Cells {_keys(partners)} contain the locked candidates {_values(locked)}. "
                f"We can remove those locked candidates from all other candidates in "
                f"{describe_region(region)}"
            )
    result.progressed = bool(result.changed)
    return result


def hidden_tuples(region: Region, grid: Grid | None = None) -> RuleResult:
    """
    If n candidate values (2 <= n <= 4) only occur in n cells of the region,
    those cells can hold nothing else. For example, a square with

        1,2,3,4,5  4,5,6,7,8  4,5,8,9
        1,2,3,8,9  6,7,8,9    4,5,6,7
        6,7,8,9    4,5,6,8,9  1,2,3,6,7,8

    has the hidden triple {1,2,3}; the three cells holding them are cut
    down to {1,2,3}. Stopping at 4 is enough: a hidden 5-tuple leaves a
    naked 4-tuple (or smaller) in the remaining cells.
    """
    result = RuleResult()
    freq = candidate_frequency(region)
    for nn in range(2, MAX_TUPLE + 1):
        pool = [v for v in DIGITS if 1 <= freq[v] <= nn]
        if len(pool) < nn:
            continue
        for proposed in Combinator(pool, nn):
            holders = [c for c in region if any(c.has(v) for v in proposed)]
            if len(holders) != nn:
                continue
            # Every value must still be present, otherwise n values share fewer than n cells.
            if not all(any(c.has(v) for c in holders) for v in proposed):
                continue
            did_work = False
            for cell in holders:
                if cell.restrict(proposed):
                    result.changed.add(cell)
                    did_work = True
            if did_work:
                result.cited.update(holders)
                result.note(
                    f"For {describe_region(region)} the candidate values {_values(proposed)} "
                    f"are a hidden tuple in cells {_keys(holders)}. Removing other candidates from these cells."
                )
    result.progressed = bool(result.changed)
    return result


def _intersection_type(cells: list[Cell], region_type: RegionType) -> RegionType | None:
    if region_type is RegionType.SQUARE:
        if len({c.row for c in cells}) == 1:
            return RegionType.ROW
        if len({c.column for c in cells}) == 1:
            return RegionType.COLUMN
        return None
    if len({c.square for c in cells}) == 1:
        return RegionType.SQUARE
    return None


def intersect_reject(region: Region, grid: Grid) -> RuleResult:
    """
    A candidate confined to the intersection of this region with another
    region must be placed there, so it is rejected from the rest of that
    other region. From a square: the value sits on one row (or column) of
    the square, so the rest of that line loses it. From a line: the value
    sits inside one square, so the rest of that square loses it.

    Frequencies of 2 or 3 only; a single occurrence is an only spot.
    """
    result = RuleResult()
    region_type = classify_type(region)
    keep = constant_index(region)
    freq = candidate_frequency(region)
    for value in DIGITS:
        if not 1 < freq[value] <= 3:
            continue
        cells = find_cells_with_candidate(region, value)
        if len(cells) != freq[value]:
            # An earlier value of this pass already narrowed the region.
            continue
        target_type = _intersection_type(cells, region_type)
        if target_type is None:
            continue
        target = grid.region_of(cells[0], target_type)
        if eliminate(target, value, result.changed, preserve={keep}, preserve_type=region_type):
            result.cited.update(cells)
            result.note(
                f"Cells {_keys(cells)} are the cells which must contain the candidate value {value} "
                f"for {describe_region(target)} due to a {target_type} intersection with "
                f"{describe_region(region)}. Removing {value} from other cells in {describe_region(target)}"
            )
    result.progressed = bool(result.changed)
    return result


def gridlock(region: Region, grid: Grid) -> RuleResult:
    """
    If a value is confined, across n parallel lines, to the same n
    perpendicular lines, those perpendicular lines lose the value everywhere
    outside the locked cells (X-wing for n = 2, swordfish for 3, jellyfish
    for 4). The value need not occur in every intersection. Rows and columns
    only.
    """
    region_type = classify_type(region)
    if region_type is RegionType.SQUARE:
        raise RegionError("gridlock only applies to rows and columns")
    result = RuleResult()
    freq = candidate_frequency(region)
    for nn in range(2, MAX_TUPLE + 1):
        for value in DIGITS:
            if 1 < freq[value] <= nn:
                _gridlock_for_value(nn, value, region_type, grid, result)
    result.progressed = bool(result.changed)
    return result


def _gridlock_for_value(nn: int, value: int, region_type: RegionType, grid: Grid, result: RuleResult) -> None:
    across = opposite_type(region_type)
    candidates = [
        line for line in grid.get(region_type) if 1 < candidate_frequency(line)[value] <= nn
    ]
    if len(candidates) < nn:
        return

    locked_lines: list = []
    crossing: set[int] = set()
    for combo in Combinator(candidates, nn):
        crossing = set()
        for line in combo:
            crossing |= find_candidate_indexes(line, value, across)
        if len(crossing) == nn:
            locked_lines = combo
            break
    if not locked_lines:
        return

    keep = {constant_index(line) for line in locked_lines}
    did_work = False
    for idx in sorted(crossing):
        did_work |= eliminate(
            grid.get(across)[idx], value, result.changed, preserve=keep, preserve_type=region_type
        )
    if did_work:
        for line in locked_lines:
            result.cited.update(find_cells_with_candidate(line, value))
        result.note(
            f"{nn}x{nn} gridlock on candidate value = {value} for {region_type}s "
            f"{' '.join(str(i + 1) for i in sorted(keep))}. Removing candidate value from "
            f"{across}s {' '.join(str(i + 1) for i in sorted(crossing))}"
        )


def xyz_wing(region: Region, grid: Grid) -> RuleResult:
    """
    Hinge {x,y,z} with a wing {x,z} in its own square and a wing {y,z} on
    its row or column but outside its square: one of the three is z, so z
    goes from the hinge's square wherever a cell also sees the {y,z} wing.
    Squares only.
    """
    if classify_type(region) is not RegionType.SQUARE:
        raise RegionError("XYZ wings are searched from squares only")
    result = RuleResult()
    square = grid.squares[region[0].square]
    for hinge in region:
        if len(hinge.candidates) != 3:
            continue
        for xz in region:
            if len(xz.candidates) != 2 or not set(xz.candidates) <= set(hinge.candidates):
                continue
            (y,) = set(hinge.candidates) - set(xz.candidates)
            for yz in _find_yz(grid, hinge, xz, y):
                shared = set(xz.candidates) & set(yz.candidates)
                if len(shared) != 1:
                    raise RegionError(
                        f"XYZ wing {hinge.key}/{xz.key}/{yz.key} does not share exactly one value"
                    )
                (z,) = shared
                reason = (
                    f"XYZ wing composed of XYZ {hinge.describe()} XZ {xz.describe()} YZ {yz.describe()}"
                )
                _, text = eliminate_in_line_of_sight(
                    yz, square, z, reason, result.changed, result.cited, preserve={hinge, xz}
                )
                result.explanation += text
    result.progressed = bool(result.changed)
    return result


def _find_yz(grid: Grid, hinge: Cell, xz: Cell, y: int):
    for line_type in (RegionType.ROW, RegionType.COLUMN):
        for cell in grid.region_of(hinge, line_type):
            if cell.square == hinge.square or len(cell.candidates) != 2:
                continue
            if cell.has(y) and any(cell.has(v) for v in xz.candidates):
                yield cell
