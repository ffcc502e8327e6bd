"""Technique dispatcher and solve loop: applies techniques to region families in cost tiers until nothing changes, plus a tool-friendly consistency report."""

# sudoku_tools.py
# Tiers, cheapest first:
#   0  unique_per_region                     drained after every other success
#   1  only_spot, locked_tuples, hidden_tuples, xyz_wing (squares)
#   2  intersect_reject (rows, columns, squares), gridlock (rows, columns)
#   3  single_value_chains, multi_value_chains (rows)
# A tier is only retried after everything cheaper has settled again. The loop
# ends after a full pass without a single change.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from types_sudoku import Givens, Issue, Step
from types_sudoku import Grid as Rows

from .chain_techniques import multi_value_chains, single_value_chains
from .config import SolverConfig, load_config, rule_enabled
from .constraint import candidate_frequency, describe_region, value_frequency
from .errors import Contradiction, InconsistentGrid
from .logging_utils import get_logger
from .solver_core import DIGITS, Grid, Region, RegionType
from .techniques import (
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

logger = get_logger()

ROW, COLUMN, SQUARE = RegionType.ROW, RegionType.COLUMN, RegionType.SQUARE
ALL_FAMILIES = (SQUARE, ROW, COLUMN)


@dataclass(frozen=True)
class Technique:
    name: str
    label: str
    func: Callable[[Region, Grid], RuleResult]
    families: tuple


TECHNIQUES: dict[str, Technique] = {
    t.name: t
    for t in (
        Technique("inconsistency", "Inconsistency", inconsistency, ALL_FAMILIES),
        Technique("strict_inconsistency", "Inconsistency (strict)", strict_inconsistency, ALL_FAMILIES),
        Technique("unique_per_region", "Unique Per Constraint Region", unique_per_region, ALL_FAMILIES),
        Technique("only_spot", "Only Spot", only_spot, ALL_FAMILIES),
        Technique("locked_tuples", "Locked Tuples", locked_tuples, ALL_FAMILIES),
        Technique("hidden_tuples", "Hidden Tuples", hidden_tuples, ALL_FAMILIES),
        Technique("xyz_wing", "XYZ Wing", xyz_wing, (SQUARE,)),
        Technique("intersect_reject", "Intersect Reject", intersect_reject, (ROW, COLUMN, SQUARE)),
        Technique("gridlock", "Gridlock", gridlock, (ROW, COLUMN)),
        Technique("single_value_chains", "Single-value chains", single_value_chains, (ROW,)),
        Technique("multi_value_chains", "Multi-value chains", multi_value_chains, (ROW,)),
    )
}


def get_technique(rule: str | Technique) -> Technique:
    if isinstance(rule, Technique):
        return rule
    try:
        return TECHNIQUES[rule]
    except KeyError:
        raise KeyError(f"Unknown technique {rule!r}; known: {sorted(TECHNIQUES)}") from None


def apply_rule(rule: str | Technique | Callable, grid: Grid, region: Region) -> RuleResult:
    """Run one technique (by name, table entry or plain rule function) on one region."""
    if callable(rule):
        return rule(region, grid)
    return get_technique(rule).func(region, grid)


def apply_to_family(rule: str | Technique, grid: Grid, region_type: RegionType) -> RuleResult:
    """Run one technique on all 9 regions of a family and merge the results."""
    technique = get_technique(rule)
    if region_type not in technique.families:
        raise ValueError(f"{technique.label} does not apply to {region_type}s")
    total = RuleResult()
    for region in grid.get(region_type):
        total.merge(technique.func(region, grid))
    return total


@dataclass
class SolveResult:
    status: str  # 'solved' or 'incomplete'
    rules_applied: int
    values: list[list[int]]
    unresolved: list[str] = field(default_factory=list)
    steps: list[Step] = field(default_factory=list)

    @property
    def solved(self) -> bool:
        return self.status == "solved"

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "rules_applied": self.rules_applied,
            "values": self.values,
            "unresolved": self.unresolved,
            "steps": self.steps,
        }


class _SolveRun:
    """Book-keeping for one call to solve(): logging, step records, counters."""

    def __init__(self, grid: Grid, config: SolverConfig):
        self.grid = grid
        self.config = config
        self.steps: list[Step] = []
        self.rules_applied = 0

    def family(self, technique: Technique, region_type: RegionType) -> bool:
        result = apply_to_family(technique, self.grid, region_type)
        if not result.changed:
            return False
        logger.info("Apply %s rule to %ss.", technique.label, region_type)
        logger.debug("%s", result.explanation.rstrip())
        if self.config.get("log_grid"):
            logger.debug("\n%s", self.grid)
        if self.config.get("record_steps", True):
            self.steps.append(
                Step(
                    index=len(self.steps) + 1,
                    technique=technique.name,
                    region_type=str(region_type),
                    changed=[c.key for c in sorted(result.changed)],
                    cited=[c.key for c in sorted(result.cited)],
                    explanation=result.explanation,
                )
            )
        return True

    def run(self, name: str) -> bool:
        """Apply a technique to each of its families. True if any candidate went."""
        if not rule_enabled(self.config, name):
            return False
        technique = TECHNIQUES[name]
        did_work = False
        for region_type in technique.families:
            did_work |= self.family(technique, region_type)
        if did_work:
            self.rules_applied += 1
        return did_work

    def drain(self) -> bool:
        did_work = False
        while self.run("unique_per_region"):
            did_work = True
        return did_work

    def step(self, name: str) -> bool:
        """A technique followed by draining tier 0."""
        did_work = self.run(name)
        did_work |= self.drain()
        return did_work


def _check_consistency(grid: Grid, strict: bool) -> RuleResult:
    technique = TECHNIQUES["strict_inconsistency" if strict else "inconsistency"]
    total = RuleResult()
    for region_type in technique.families:
        total.merge(apply_to_family(technique, grid, region_type))
    return total


def _check_coverage(grid: Grid) -> None:
    """Every region must still have a home for each value."""
    for _, region in grid.regions():
        freq = candidate_frequency(region)
        for value in DIGITS:
            if freq[value] == 0:
                raise Contradiction(f"no cell in {describe_region(region)} can hold {value}", value=value)


def solve(grid: Grid, config: SolverConfig | None = None) -> SolveResult:
    """
    Reduce `grid` in place to a fixpoint of the enabled techniques.

    Raises InconsistentGrid if the givens already clash and Contradiction if
    a deduction ever empties a cell or leaves a region without a place for
    some value. Running out of techniques is not an
    error: the result then has status 'incomplete'.
    """
    config = config if config is not None else load_config()
    logger.info("=== solve() START: %d candidates ===", grid.candidate_count())

    precheck = _check_consistency(grid, strict=False)
    if precheck.progressed:
        logger.error("Initial grid is inconsistent:\n%s", precheck.explanation.rstrip())
        raise InconsistentGrid(precheck.explanation.strip(), cells=precheck.cited)

    run = _SolveRun(grid, config)
    run.drain()

    # The first pass always runs, even if the givens allowed no single.
    keep_searching = True
    while keep_searching:
        while keep_searching:
            while keep_searching:
                while keep_searching:
                    keep_searching = run.step("only_spot")
                keep_searching |= run.step("locked_tuples")
                keep_searching |= run.step("hidden_tuples")
                keep_searching |= run.step("xyz_wing")
            keep_searching |= run.step("intersect_reject")
            keep_searching |= run.step("gridlock")
        keep_searching |= run.step("single_value_chains")
        keep_searching |= run.step("multi_value_chains")

    if not grid.is_consistent():
        clash = _check_consistency(grid, strict=False)
        raise InconsistentGrid(clash.explanation.strip(), cells=clash.cited)
    _check_coverage(grid)

    final = _check_consistency(grid, strict=True)
    status = "incomplete" if final.progressed else "solved"
    unresolved = [c.key for c in grid.unresolved()]
    logger.info("Number of rules applied = %d", run.rules_applied)
    if unresolved:
        logger.info("Stopped with %d undetermined cells.", len(unresolved))
        logger.debug("%s", final.explanation.rstrip())
    logger.info("=== solve() END: %s ===", status)

    return SolveResult(
        status=status,
        rules_applied=run.rules_applied,
        values=grid.values().tolist(),
        unresolved=unresolved,
        steps=run.steps,
    )


def solve_givens(givens: Givens | Rows, config: SolverConfig | None = None) -> tuple[Grid, SolveResult]:
    grid = Grid.from_givens(givens)
    return grid, solve(grid, config)


def consistency_report(grid: Grid, strict: bool = False) -> dict[str, Any]:
    """Per-region duplicate (and, when strict, undetermined) cells, e.g. for the API."""
    issues: list[Issue] = []
    for _, region in grid.regions():
        freq = value_frequency(region)
        unit = describe_region(region)
        dups = [v for v in range(1, 10) if freq[v] > 1]
        if dups:
            cells = [c.key for c in region if c.value in dups]
            issues.append(Issue(type="duplicate", unit=unit, digits=dups, cells=cells))
        if strict and freq[0] > 0:
            cells = [c.key for c in region if c.value == 0]
            issues.append(Issue(type="undetermined", unit=unit, digits=[], cells=cells))
    return {"ok": len(issues) == 0, "issues": issues}
