from __future__ import annotations
from typing import List, Dict, Optional, Union
from types_sudoku import SymbolGrid, Candidates, Issue, SolvePayload
"""Tool-friendly helpers around the engine: reading and writing the puzzle text format, console rendering, sanity checks, candidate listing, and a solve call that returns a JSON-ready payload for the CLI and API layers."""


# sudoku_tools.py
# Puzzle text format:
#   line 1: box width
#   line 2: box height
#   N lines of N symbols ('x' = empty), N = width * height
import logging
import time
from pathlib import Path

from .solver_core import EMPTY, Grid, SetupError

logger = logging.getLogger(__name__)


class PuzzleFormatError(SetupError):
    """Puzzle text does not follow the width/height/rows layout."""


def parse_puzzle(text: str):
    """Decode puzzle text into (width, height, rows). Symbols are not checked here; Grid does that."""
    lines = [ln.rstrip() for ln in text.splitlines()]
    while lines and not lines[-1]:
        lines.pop()
    if len(lines) < 2:
        raise PuzzleFormatError("puzzle must start with a box width line and a box height line")
    try:
        width = int(lines[0])
        height = int(lines[1])
    except ValueError:
        raise PuzzleFormatError(
            f"box width/height must be integers, got {lines[0]!r} and {lines[1]!r}"
        ) from None
    if width < 1 or height < 1:
        raise PuzzleFormatError(f"box dimensions must be positive, got {width}x{height}")
    size = width * height
    rows = lines[2:]
    if len(rows) != size:
        raise PuzzleFormatError(f"expected {size} grid lines for {width}x{height} boxes, got {len(rows)}")
    for i, row in enumerate(rows, 1):
        if len(row) != size:
            raise PuzzleFormatError(f"grid line {i}: expected {size} symbols, got {len(row)}")
    return width, height, rows


def grid_from_text(text: str) -> Grid:
    width, height, rows = parse_puzzle(text)
    return Grid(width, height, rows)


def load_puzzle(path: Union[str, Path]) -> Grid:
    text = Path(path).read_text(encoding="utf-8")
    logger.debug("Loaded puzzle from %s", path)
    return grid_from_text(text)


def format_puzzle(grid: Grid) -> str:
    """Encode a grid back into puzzle text (trailing newline included)."""
    lines = [str(grid.width), str(grid.height)]
    lines.extend("".join(row) for row in grid.values())
    return "\n".join(lines) + "\n"


def render_text(values: SymbolGrid, width: int, height: int) -> str:
    """Console view: a space between symbols, two between boxes, a blank line between box bands."""
    out = []
    size = len(values)
    for r, row in enumerate(values):
        groups = [" ".join(row[c:c + width]) for c in range(0, size, width)]
        out.append("  ".join(groups))
        if (r + 1) % height == 0 and r + 1 < size:
            out.append("")
    return "\n".join(out)


def render_grid(grid: Grid) -> str:
    return render_text(grid.values(), grid.width, grid.height)


def sanity_check(grid: Grid) -> Dict:
    """List every row/column/box that repeats a symbol. {'ok': bool, 'issues': [...]}"""
    issues: List[Issue] = []
    for seq, dups in grid.conflicts():
        cells = [grid.cells[i].key for i in seq.members if grid.cells[i].value in dups]
        issues.append({"type": "duplicate", "unit": seq.label, "digits": dups, "cells": cells})
    return {"ok": len(issues) == 0, "issues": issues}


def compute_candidates_tool(grid: Grid) -> Dict:
    """Candidate symbols for each empty cell. Returns a dict like {'candidates': {'r1c2': ['1','2','5'], ...}}."""
    cand: Candidates = {}
    for cell in grid.cells:
        if cell.is_empty:
            cand[cell.key] = cell.candidate_values(grid)
    return {"candidates": cand}


def _rows(grid: Grid) -> List[str]:
    return ["".join(row) for row in grid.values()]


def solve_tool(grid: Grid, strategy: str = "stack") -> SolvePayload:
    """Check the grid, then solve it in place. Inconsistent or unsolvable input is reported in 'status', never raised."""
    start = time.time()
    original = _rows(grid)
    check = sanity_check(grid)
    solution: Optional[List[str]] = None
    if not check["ok"]:
        status = "invalid"
        message = "Puzzle is invalid: " + ", ".join(i["unit"] for i in check["issues"]) + " repeat symbols."
    elif grid.solve(strategy):
        status = "solved"
        solution = _rows(grid)
        message = "Solved successfully."
    else:
        status = "unsolvable"
        message = "No assignment satisfies every row, column and box."
    duration_ms = int((time.time() - start) * 1000)
    logger.info("%s in %d ms (%s)", status, duration_ms, strategy)
    return {
        "status": status,
        "width": grid.width,
        "height": grid.height,
        "original": original,
        "solution": solution,
        "issues": check["issues"],
        "duration_ms": duration_ms,
        "stats": dict(grid.stats),
        "message": message,
    }


def count_empty(grid: Grid) -> int:
    return sum(1 for row in grid.values() for v in row if v == EMPTY)
