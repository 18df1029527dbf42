"""Core engine for generalized Sudoku boards: the symbol alphabet, row/column/box sequences, cells and the backtracking search over the cells that start out empty."""

# solver_core.py
# Exhaustive backtracking solver for N x N boards made of width x height boxes.
# - alphabet: digits 1-9 then letters, sized to N
# - rows/columns/boxes are Sequences holding indices into a flat cell list
# - mutable cells are visited in row-major order, candidates in alphabet order
# Grid values are single-character strings. 'x' = blank.
from __future__ import annotations

import logging
import sys
import threading
import time
from contextlib import contextmanager
from typing import Iterable, Optional, Sequence as Seq

logger = logging.getLogger(__name__)

ALL_SYMBOLS = "123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
EMPTY = "x"
MAX_SIDE = len(ALL_SYMBOLS)
STRATEGIES = ("stack", "recursive")

# shared by every recursive solve in the process
_limit_lock = threading.Lock()
_limit_users = 0
_base_limit = 0

Coord = tuple[int, int]  # (row, col) 1-based


class SetupError(ValueError):
    """The initial grid cannot be turned into a board (bad size, bad symbol)."""


class ConsistencyViolation(SetupError):
    """The initial grid already repeats a symbol in some row, column or box."""

    def __init__(self, message: str, issues: Optional[list] = None) -> None:
        super().__init__(message)
        self.issues = issues or []


def make_alphabet(size: int) -> str:
    if size < 1:
        raise SetupError(f"board side must be at least 1, got {size}")
    if size > MAX_SIDE:
        raise SetupError(
            f"board side {size} exceeds the {MAX_SIDE} available symbols (1-9, A-Z); 6x6 boxes are not supported"
        )
    return ALL_SYMBOLS[:size]


def box_index(row: int, col: int, width: int, height: int) -> int:
    """0-based box number for a 0-based (row, col); boxes count left->right, top->bottom."""
    size = width * height
    return (row // height) * (size // width) + (col // width)


@contextmanager
def recursion_headroom(depth: int):
    """Allow `depth` extra Python frames while the block runs.

    The interpreter limit is process-wide, so overlapping callers (threads of an
    API server) share one counted raise: the limit only grows while any caller
    is inside, and the original value comes back when the last one leaves.
    """
    global _limit_users, _base_limit
    with _limit_lock:
        if _limit_users == 0:
            _base_limit = sys.getrecursionlimit()
        _limit_users += 1
        needed = _base_limit + depth
        if needed > sys.getrecursionlimit():
            sys.setrecursionlimit(needed)
    try:
        yield
    finally:
        with _limit_lock:
            _limit_users -= 1
            if _limit_users == 0:
                sys.setrecursionlimit(_base_limit)


def rc_to_key(r: int, c: int) -> str:
    return f"r{r}c{c}"


def key_to_rc(key: str) -> Coord:
    r = int(key.split("c")[0][1:])
    c = int(key.split("c")[1])
    return (r, c)


class Sequence:
    """One row, column or box: a fixed list of member cell indices."""

    KINDS = ("row", "column", "box")

    def __init__(self, kind: str, position: int, cells: list["Cell"]) -> None:
        if kind not in self.KINDS:
            raise ValueError(f"unknown sequence kind: {kind}")
        self.kind = kind
        self.position = position
        self.members: list[int] = []
        self._cells = cells

    def __repr__(self) -> str:
        return f"Sequence({self.label}, members={len(self.members)})"

    @property
    def label(self) -> str:
        return f"{self.kind[0]}{self.position + 1}"

    def add(self, index: int) -> None:
        self.members.append(index)

    def claimed_values(self) -> list[str]:
        return [self._cells[i].value for i in self.members if self._cells[i].value != EMPTY]

    def claimed_values_excluding(self, index: int) -> list[str]:
        return [
            self._cells[i].value
            for i in self.members
            if i != index and self._cells[i].value != EMPTY
        ]

    def duplicates(self, alphabet: str) -> list[str]:
        """Symbols held by more than one member, in alphabet order."""
        values = self.claimed_values()
        return [s for s in alphabet if values.count(s) > 1]


class Cell:
    def __init__(
        self,
        index: int,
        row_pos: int,
        col_pos: int,
        value: str,
        row: int,
        column: int,
        box: int,
    ) -> None:
        self.index = index
        self.row_pos = row_pos
        self.col_pos = col_pos
        self.value = value
        # positions into Grid.rows / Grid.columns / Grid.boxes
        self.row = row
        self.column = column
        self.box = box
        self.fixed = value != EMPTY

    def __repr__(self) -> str:
        return f"Cell({self.key}={self.value!r})"

    @property
    def key(self) -> str:
        return rc_to_key(self.row_pos + 1, self.col_pos + 1)

    @property
    def is_empty(self) -> bool:
        return self.value == EMPTY

    def assign(self, value: str) -> None:
        self.value = value

    def clear(self) -> None:
        self.value = EMPTY

    def candidate_values(self, grid: "Grid") -> list[str]:
        """Alphabet symbols not claimed by this cell's row, column or box (own value ignored)."""
        taken = set(grid.rows[self.row].claimed_values_excluding(self.index))
        taken.update(grid.columns[self.column].claimed_values_excluding(self.index))
        taken.update(grid.boxes[self.box].claimed_values_excluding(self.index))
        return [s for s in grid.alphabet if s not in taken]


class Grid:
    """An N x N board split into width x height boxes.

    The grid owns a flat list of cells plus one list of Sequences per grouping.
    Cells refer to their sequences by position and sequences refer to their
    members by cell index, so no object references cross between them.

    `initial_values` is N rows of N symbols (strings or lists of characters);
    `EMPTY` marks a blank. Raises SetupError for any size mismatch, a side
    longer than the alphabet, or a symbol outside the alphabet.
    """

    def __init__(self, width: int, height: int, initial_values: Iterable[Seq[str]]) -> None:
        if width < 1 or height < 1:
            raise SetupError(f"box dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.size = width * height
        self.alphabet = make_alphabet(self.size)
        logger.debug("Valid values: %s", self.alphabet)

        rows = [list(r) for r in initial_values]
        if len(rows) != self.size:
            raise SetupError(f"expected {self.size} rows, got {len(rows)}")
        for r, row in enumerate(rows):
            if len(row) != self.size:
                raise SetupError(f"row {r + 1}: expected {self.size} symbols, got {len(row)}")
            for c, value in enumerate(row):
                if value != EMPTY and value not in self.alphabet:
                    raise SetupError(
                        f"{rc_to_key(r + 1, c + 1)}: symbol {value!r} is not one of {EMPTY!r} or {self.alphabet!r}"
                    )

        self.cells: list[Cell] = []
        self.rows = [Sequence("row", i, self.cells) for i in range(self.size)]
        self.columns = [Sequence("column", i, self.cells) for i in range(self.size)]
        self.boxes = [Sequence("box", i, self.cells) for i in range(self.size)]

        for r in range(self.size):
            for c in range(self.size):
                index = r * self.size + c
                b = box_index(r, c, width, height)
                self.cells.append(Cell(index, r, c, rows[r][c], r, c, b))
                self.rows[r].add(index)
                self.columns[c].add(index)

        # boxes sweep box-row-major, then row-major inside each box
        boxes_across = self.size // width
        for b in range(self.size):
            r0 = (b // boxes_across) * height
            c0 = (b % boxes_across) * width
            for r in range(r0, r0 + height):
                for c in range(c0, c0 + width):
                    self.boxes[b].add(r * self.size + c)

        self.mutable: list[int] = [cell.index for cell in self.cells if cell.is_empty]
        self.stats = {"assignments": 0, "backtracks": 0}
        logger.debug(
            "Board %dx%d (boxes %dx%d): %d givens, %d empty",
            self.size,
            self.size,
            width,
            height,
            len(self.cells) - len(self.mutable),
            len(self.mutable),
        )

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height}, empty={sum(c.is_empty for c in self.cells)})"

    def cell(self, r: int, c: int) -> Cell:
        """Cell at 0-based (row, col)."""
        return self.cells[r * self.size + c]

    def sequences(self) -> list[Sequence]:
        return self.rows + self.columns + self.boxes

    def successor(self, position: int) -> Optional[int]:
        """Position in `mutable` after `position`, or None past the last mutable cell."""
        nxt = position + 1
        return nxt if nxt < len(self.mutable) else None

    def values(self) -> list[list[str]]:
        return [[self.cell(r, c).value for c in range(self.size)] for r in range(self.size)]

    def givens(self) -> list[list[bool]]:
        return [[self.cell(r, c).fixed for c in range(self.size)] for r in range(self.size)]

    def is_complete(self) -> bool:
        return all(not cell.is_empty for cell in self.cells)

    # --- consistency -------------------------------------------------------

    def conflicts(self) -> list[tuple[Sequence, list[str]]]:
        """(sequence, duplicated symbols) for every sequence holding a repeat."""
        found = []
        for seq in self.sequences():
            dups = seq.duplicates(self.alphabet)
            if dups:
                found.append((seq, dups))
        return found

    def is_consistent(self) -> bool:
        for i in range(self.size):
            if self.rows[i].duplicates(self.alphabet):
                return False
            if self.columns[i].duplicates(self.alphabet):
                return False
            if self.boxes[i].duplicates(self.alphabet):
                return False
        return True

    def require_consistent(self) -> None:
        conflicts = self.conflicts()
        if conflicts:
            units = ", ".join(f"{seq.label}:{''.join(dups)}" for seq, dups in conflicts)
            raise ConsistencyViolation(
                f"puzzle repeats symbols in {units}",
                [(seq.label, dups) for seq, dups in conflicts],
            )

    # --- search ------------------------------------------------------------

    def solve(self, strategy: str = "stack") -> bool:
        """Fill every empty cell. True when solved; False leaves the grid as it was."""
        if strategy not in STRATEGIES:
            raise ValueError(f"unknown strategy {strategy!r}, expected one of {STRATEGIES}")
        self.stats = {"assignments": 0, "backtracks": 0}
        if not self.mutable:
            return True

        t0 = time.time()
        logger.debug("solve start: %d mutable cells, strategy=%s", len(self.mutable), strategy)
        if strategy == "stack":
            solved = self._search_stack()
        else:
            # one Python frame per mutable cell on top of the caller's stack
            with recursion_headroom(len(self.mutable)):
                solved = self.search(0)
        logger.debug(
            "solve end in %d ms: solved=%s assignments=%d backtracks=%d",
            int((time.time() - t0) * 1000),
            solved,
            self.stats["assignments"],
            self.stats["backtracks"],
        )
        return solved

    def search(self, position: int) -> bool:
        """Recursive step for the mutable cell at `position` in the traversal order."""
        cell = self.cells[self.mutable[position]]
        nxt = self.successor(position)
        for value in cell.candidate_values(self):
            cell.assign(value)
            self.stats["assignments"] += 1
            if nxt is None or self.search(nxt):
                return True
        cell.clear()
        self.stats["backtracks"] += 1
        return False

    def _search_stack(self) -> bool:
        # one frame per visited mutable cell: [candidates, index of next candidate to try]
        chain = self.mutable
        frames = [[self.cells[chain[0]].candidate_values(self), 0]]
        while frames:
            depth = len(frames) - 1
            cell = self.cells[chain[depth]]
            frame = frames[-1]
            candidates, i = frame
            if i >= len(candidates):
                cell.clear()
                self.stats["backtracks"] += 1
                frames.pop()
                continue
            frame[1] = i + 1
            cell.assign(candidates[i])
            self.stats["assignments"] += 1
            if self.successor(depth) is None:
                return True
            frames.append([self.cells[chain[depth + 1]].candidate_values(self), 0])
        return False
