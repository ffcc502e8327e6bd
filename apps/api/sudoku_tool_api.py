# sudoku_tool_api.py
# Optional FastAPI wrapper for the solver functions.
# Run with: uvicorn apps.api.sudoku_tool_api:app --reload
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from typing import List, Dict, Any

from logic_solver.errors import Contradiction, RegionError
from logic_solver.solver_core import Grid, RegionType
from logic_solver.sudoku_tools import TECHNIQUES, apply_to_family, consistency_report, solve

app = FastAPI(title="Logic Sudoku Solver API")


class GridModel(BaseModel):
    grid: List[List[int]]


class ConsistencyRequest(BaseModel):
    grid: List[List[int]]
    strict: bool = False


class ApplyRuleRequest(BaseModel):
    grid: List[List[int]]
    rule: str
    region_type: str = "row"


class SolveResponse(BaseModel):
    status: str
    rules_applied: int
    values: List[List[int]]
    unresolved: List[str]
    steps: List[Dict[str, Any]]


class ApplyRuleResponse(BaseModel):
    changed: List[str]
    explanation: str
    candidates: Dict[str, List[int]]


def _grid_from(rows: List[List[int]]) -> Grid:
    try:
        return Grid.from_givens(rows)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/solve", response_model=SolveResponse)
def api_solve(payload: GridModel):
    grid = _grid_from(payload.grid)
    try:
        result = solve(grid)
    except Contradiction as e:
        raise HTTPException(status_code=422, detail=str(e))
    return result.to_dict()


@app.post("/consistency")
def api_consistency(req: ConsistencyRequest):
    return consistency_report(_grid_from(req.grid), strict=req.strict)


@app.post("/apply_rule", response_model=ApplyRuleResponse)
def api_apply_rule(req: ApplyRuleRequest):
    if req.rule not in TECHNIQUES:
        raise HTTPException(status_code=400, detail=f"unknown rule {req.rule!r}")
    try:
        region_type = RegionType(req.region_type)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"unknown region type {req.region_type!r}")
    grid = _grid_from(req.grid)
    try:
        # Resolved givens must first clear their peers for the rule to see real candidates.
        for family in (RegionType.SQUARE, RegionType.ROW, RegionType.COLUMN):
            apply_to_family("unique_per_region", grid, family)
        result = apply_to_family(req.rule, grid, region_type)
    except (ValueError, RegionError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Contradiction as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {
        "changed": [c.key for c in sorted(result.changed)],
        "explanation": result.explanation,
        "candidates": grid.candidates_map(),
    }
