# types_sudoku.py
from __future__ import annotations

from typing import Optional, TypedDict

SymbolGrid = list[list[str]]
"""An N x N grid as rows of single-character symbols ('x' = empty)."""

Candidates = dict[str, list[str]]
"""Map from cell key (e.g., 'r1c1') to the candidate symbols in alphabet order."""


class Issue(TypedDict):
    """A consistency problem found in one row, column or box."""

    type: str  # currently always 'duplicate'
    unit: str  # 'r3', 'c7' or 'b2' (1-based)
    digits: list[str]  # symbols seen more than once in the unit
    cells: list[str]  # keys of the offending cells


class SearchStats(TypedDict):
    assignments: int  # candidate values written into mutable cells
    backtracks: int  # cells restored to empty after exhausting candidates


class SolvePayload(TypedDict):
    """Result of a full check-then-solve run, shaped for JSON output."""

    status: str  # 'solved', 'unsolvable' or 'invalid'
    width: int
    height: int
    original: list[str]  # rows as strings, wire-format symbols
    solution: Optional[list[str]]
    issues: list[Issue]
    duration_ms: int
    stats: SearchStats
    message: str
