"""CLI front end: reads a puzzle file, prints the starting board, refuses to search a puzzle that already repeats a symbol, solves, and prints the solution. Optionally writes the JSON payload and a PNG of the final board."""

# solve_cli.py
# Usage:
#   python -m apps.cli.solve_cli puzzles/wikipedia_9x9.txt
#   python -m apps.cli.solve_cli puzzles/small_6x6.txt --strategy recursive --json out.json --image out.png
#
# Exit codes: 0 solved, 1 invalid or unsolvable, 2 unreadable file / malformed puzzle / bad config.
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from apps.cli.board_renderer import render_board
from solver.config import load_config
from solver.solver_core import STRATEGIES, SetupError
from solver.sudoku_tools import count_empty, load_puzzle, render_grid, render_text, solve_tool

logger = logging.getLogger("apps.cli.solve_cli")


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="[%(asctime)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Solve a Sudoku puzzle of any box size by backtracking."
    )
    ap.add_argument("puzzle", help="Puzzle file: box width line, box height line, then N rows ('x' = empty).")
    ap.add_argument("--config", type=str, default=None, help="YAML config (see configs/solver.yaml).")
    ap.add_argument("--strategy", type=str, default=None, choices=list(STRATEGIES))
    ap.add_argument("--json", type=str, default=None, help="Write the solve payload to this path.")
    ap.add_argument("--image", type=str, default=None, help="Render the final board to this PNG path.")
    ap.add_argument("--quiet", action="store_true", help="Only warnings and errors in the log.")
    ap.add_argument("--verbose", action="store_true", help="Debug logging, including search statistics.")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        cfg = load_config(
            args.config,
            solver__strategy=args.strategy,
            output__json=args.json,
            output__image=args.image,
        )
    except (OSError, ValueError, KeyError, yaml.YAMLError) as e:
        print(f"[error] config: {e}", file=sys.stderr)
        return 2

    level = cfg.logging.level
    if args.quiet:
        level = "WARNING"
    if args.verbose:
        level = "DEBUG"
    setup_logging(level)

    try:
        grid = load_puzzle(args.puzzle)
    except OSError as e:
        print(f"[error] could not read {args.puzzle}: {e}", file=sys.stderr)
        return 2
    except SetupError as e:
        print(f"[error] {args.puzzle}: {e}", file=sys.stderr)
        return 2

    logger.info("Loaded %s: %dx%d board, %d empty cells", args.puzzle, grid.size, grid.size, count_empty(grid))
    print("Trying to solve following board:")
    print(render_grid(grid))

    givens = grid.givens()
    payload = solve_tool(grid, cfg.solver.strategy)

    if payload["status"] == "invalid":
        print("\nError: puzzle is invalid/corrupt.", file=sys.stderr)
        for issue in payload["issues"]:
            print(
                f"  {issue['unit']}: {', '.join(issue['digits'])} repeated in {' '.join(issue['cells'])}",
                file=sys.stderr,
            )
    elif payload["status"] == "unsolvable":
        print("\nError: puzzle is not solvable.", file=sys.stderr)
    else:
        print("\nSolution:")
        print(render_text([list(row) for row in payload["solution"]], grid.width, grid.height))

    try:
        if cfg.output.json:
            Path(cfg.output.json).write_text(json.dumps(payload, indent=2), encoding="utf-8")
            logger.info("Wrote payload to %s", cfg.output.json)
        if cfg.output.image:
            render_board(grid.values(), grid.width, grid.height, cfg.output.image, givens, cfg.render.cell_px)
            logger.info("Wrote board image to %s", cfg.output.image)
    except OSError as e:
        print(f"[error] could not write output: {e}", file=sys.stderr)
        return 2

    return 0 if payload["status"] == "solved" else 1


def run() -> None:
    raise SystemExit(main(sys.argv[1:]))


if __name__ == "__main__":
    run()
