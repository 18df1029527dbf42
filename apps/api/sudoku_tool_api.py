# sudoku_tool_api.py
# Optional FastAPI wrapper for the tool functions.
# Run with: uvicorn apps.api.sudoku_tool_api:app --reload
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from typing import List

from solver.solver_core import Grid, SetupError
from solver.sudoku_tools import sanity_check, compute_candidates_tool, solve_tool

app = FastAPI(title="Sudoku Backtracking Solver API")

class PuzzleModel(BaseModel):
    width: int
    height: int
    rows: List[str]

class SolveRequest(PuzzleModel):
    strategy: str = "stack"

def _grid(payload: PuzzleModel) -> Grid:
    try:
        return Grid(payload.width, payload.height, payload.rows)
    except SetupError as e:
        raise HTTPException(status_code=422, detail=str(e))

@app.post("/sanity_check")
def api_sanity(payload: PuzzleModel):
    return sanity_check(_grid(payload))

@app.post("/compute_candidates")
def api_cands(payload: PuzzleModel):
    return compute_candidates_tool(_grid(payload))

@app.post("/solve")
def api_solve(req: SolveRequest):
    grid = _grid(req)
    try:
        return solve_tool(grid, req.strategy)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
