"""Chain techniques: single-value (parity) chains and multi-value chains over bi-value cells."""

# chain_techniques.py
# Both searches are depth-first from a start cell, visiting the cell's row,
# column and square in turn and recursing on a copy of the path. A cell is
# never visited twice on the same path. Region scans are cached for the
# length of one search; nothing is mutated while a search runs, so the cache
# cannot go stale.

from __future__ import annotations

from .chain import Chain, extend, format_chain, identical_chain
from .constraint import eliminate, eliminate_in_line_of_sight, find_cells_with_candidate
from .errors import RegionError
from .solver_core import DIGITS, LINE_AND_SQUARE, Cell, Grid, Region, RegionType
from .techniques import RuleResult


class _RegionScan:
    """Per-search cache of "which cells of this region hold value v"."""

    def __init__(self, grid: Grid):
        self.grid = grid
        self._holders: dict[tuple[RegionType, int, int], list[Cell]] = {}

    def holders(self, cell: Cell, region_type: RegionType, value: int) -> list[Cell]:
        key = (region_type, cell.index_of(region_type), value)
        if key not in self._holders:
            region = self.grid.region_of(cell, region_type)
            self._holders[key] = find_cells_with_candidate(region, value)
        return self._holders[key]


# ----------------------------------------------------------------------------
# Single-value chains
# ----------------------------------------------------------------------------


def single_value_chains(region: Region, grid: Grid) -> RuleResult:
    """
    For one value, follow strong links (the value occurs exactly twice in a
    region) away from a start cell, finishing each chain with a weak link
    (the value occurs three or more times). Along strong links the cells
    alternate between "is the value" and "is not the value". If two
    different chains end on the same cell and their last strong-linked cells
    have opposite parity, one of those two cells holds the value, so the end
    cell cannot.
    """
    result = RuleResult()
    for start in region:
        for value in DIGITS:
            _single_value_chain_for_value(value, start, grid, result)
    result.progressed = bool(result.changed)
    return result


def _single_value_chain_for_value(value: int, start: Cell, grid: Grid, result: RuleResult) -> None:
    chains = find_single_value_chains(value, start, grid)
    if len(chains) < 2:
        return
    for i, chain0 in enumerate(chains):
        for chain1 in chains[i + 1:]:
            end = chain0[-1]
            if end is not chain1[-1] or identical_chain(chain0, chain1):
                continue
            if (len(chain0) - 1) % 2 == (len(chain1) - 1) % 2:
                continue
            if len(end.candidates) > 1 and end.has(value):
                end.discard(value)
                result.changed.add(end)
                result.cited.update(chain0)
                result.cited.update(chain1)
                result.note(
                    f"Removing {value} from cell {end.key} because of the single value chains "
                    f"{{ {format_chain(chain0)} }} {{ {format_chain(chain1)} }}"
                )


def find_single_value_chains(value: int, start: Cell, grid: Grid) -> list[Chain]:
    """Chains from `start` that end in a weak link and cannot be extended."""
    chains: list[Chain] = []
    scan = _RegionScan(grid)
    for region_type in LINE_AND_SQUARE:
        _explore_single(value, scan, region_type, [start], chains)
    return chains


def _explore_single(value: int, scan: _RegionScan, region_type: RegionType, chain: Chain, chains: list) -> None:
    last = chain[-1]
    if not last.has(value):
        return
    holders = scan.holders(last, region_type, value)
    if len(holders) < 2:
        return
    strong = len(holders) == 2
    for cell in holders:
        if cell in chain:
            continue
        branch = extend(chain, cell)
        if strong:
            for next_type in LINE_AND_SQUARE:
                _explore_single(value, scan, next_type, branch, chains)
        else:
            chains.append(branch)


# ----------------------------------------------------------------------------
# Multi-value chains
# ----------------------------------------------------------------------------


def multi_value_chains(region: Region, grid: Grid) -> RuleResult:
    """
    Start at a bi-value cell {a z}. If it is not z it is a; a neighbour {a b}
    is then b, a neighbour of that {b c} is c, and so on. When the chain
    reaches a cell {d z} that would then be z, either the start or the end is
    z, so z can be removed from every cell that sees both:

        1,3  .    .   |  .  3,7  .   |  X    X    X
        .    .    .   |  .  .    6,7 |  .    6,8  .
        X    X    X   |  .  .    .   |  .    .    1,8

    A one-link chain is a locked pair, so only chains of three or more cells
    are used.
    """
    result = RuleResult()
    for start in region:
        if len(start.candidates) != 2:
            continue
        for value in start.candidates:
            search = _other(start, value)
            for chain in find_multi_value_chains(search, start, grid):
                if any(len(c.candidates) != 2 for c in chain):
                    # Narrowed by an elimination earlier in this pass.
                    continue
                if follow_chain(value, chain) != value:
                    continue
                _eliminate_from_chain_ends(value, chain, grid, result)
    result.progressed = bool(result.changed)
    return result


def _other(cell: Cell, value: int) -> int:
    first, second = cell.candidates
    return second if first == value else first


def follow_chain(value: int, chain: Chain) -> int:
    """Value the last cell is forced to when the first cell is not `value`."""
    for cell in chain:
        value = _other(cell, value)
    return value


def _eliminate_from_chain_ends(value: int, chain: Chain, grid: Grid, result: RuleResult) -> None:
    start, end = chain[0], chain[-1]
    shares_region = False
    for region_type in LINE_AND_SQUARE:
        if start.index_of(region_type) != end.index_of(region_type):
            continue
        shares_region = True
        target = grid.region_of(start, region_type)
        if eliminate(target, value, result.changed, preserve={start, end}):
            result.cited.update(chain)
            result.note(
                f"Eliminating candidate value {value} from {region_type} "
                f"{start.index_of(region_type) + 1} due to multivalue chain: "
                f"{format_chain(chain, with_values=True)}"
            )

    if shares_region:
        return
    # No shared region: the cells seeing both ends sit where each end's
    # square crosses the other end's row or column.
    reason = f"multivalue chain: {format_chain(chain, with_values=True)}"
    for pivot, other in ((start, end), (end, start)):
        did_work, text = eliminate_in_line_of_sight(
            pivot, grid.squares[other.square], value, reason,
            result.changed, result.cited, preserve={start, end},
        )
        if did_work:
            result.cited.update(chain)
            result.explanation += text


def find_multi_value_chains(search: int, start: Cell, grid: Grid) -> list[Chain]:
    """
    Every chain of bi-value cells leaving `start` through `search`, including
    chains that could be extended further (the extensions are listed too).
    """
    if len(start.candidates) != 2:
        raise RegionError(f"multi-value chains start from bi-value cells, {start.key} is not one")
    chains: list[Chain] = []
    seen: set[tuple[int, ...]] = set()
    _explore_multi(search, _RegionScan(grid), [start], chains, seen)
    return chains


def _linked_cells(scan: _RegionScan, cell: Cell, value: int) -> list[Cell]:
    """Cells sharing a row, column or square with `cell` and holding `value`, each listed once."""
    linked: list[Cell] = []
    for region_type in LINE_AND_SQUARE:
        for other in scan.holders(cell, region_type, value):
            if other is not cell and other not in linked:
                linked.append(other)
    return linked


def _explore_multi(search: int, scan: _RegionScan, chain: Chain, chains: list, seen: set) -> None:
    for cell in _linked_cells(scan, chain[-1], search):
        if cell in chain or len(cell.candidates) != 2:
            continue
        branch = extend(chain, cell)
        _explore_multi(_other(cell, search), scan, branch, chains, seen)
        ident = tuple(c.index for c in branch)
        if len(branch) > 2 and ident not in seen:
            seen.add(ident)
            chains.append(branch)
