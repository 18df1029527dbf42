from __future__ import annotations

from types_sudoku import SymbolGrid

"""Rendering utilities to draw a board as a PNG: thin cell lines, heavy box lines, givens in black and solver-filled symbols in green."""


# board_renderer.py
# Render any N x N board (width x height boxes) to an image of N*cell_px pixels square.
from typing import Optional

from PIL import Image, ImageDraw, ImageFont

from solver.solver_core import EMPTY

MARGIN = 8
GIVEN_COLOR = (0, 0, 0)
FILLED_COLOR = (0, 128, 0)


def load_font(size):
    try:
        return ImageFont.truetype("/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf", size)
    except OSError:
        return ImageFont.load_default()


def cell_rect(r, c, cell_px, pad=0):
    # r, c are 0-based
    x0 = MARGIN + c * cell_px + pad
    y0 = MARGIN + r * cell_px + pad
    return (x0, y0, x0 + cell_px - 2 * pad, y0 + cell_px - 2 * pad)


def draw_board_lines(draw, size, width, height, cell_px, color=(0, 0, 0), thin_th=1, heavy_th=4):
    x1 = y1 = MARGIN
    x2 = y2 = MARGIN + size * cell_px
    draw.rectangle((x1, y1, x2, y2), outline=color, width=heavy_th)
    for i in range(1, size):
        x = x1 + i * cell_px
        th = heavy_th if (i % width == 0) else thin_th
        draw.line([(x, y1), (x, y2)], fill=color, width=th)
        y = y1 + i * cell_px
        th = heavy_th if (i % height == 0) else thin_th
        draw.line([(x1, y), (x2, y)], fill=color, width=th)


def render_board(
    values: SymbolGrid,
    width: int,
    height: int,
    out_path: str,
    givens: Optional[list[list[bool]]] = None,
    cell_px: int = 64,
) -> str:
    """Draw `values` to `out_path` (PNG). Cells marked in `givens` use the given color; other
    non-empty cells use the filled color. Without `givens`, every symbol is drawn as a given."""
    size = len(values)
    side = size * cell_px + 2 * MARGIN
    im = Image.new("RGB", (side, side), "white")
    d = ImageDraw.Draw(im)
    draw_board_lines(d, size, width, height, cell_px)

    f = load_font(int(cell_px * 0.6))
    for r in range(size):
        for c in range(size):
            v = values[r][c]
            if v == EMPTY:
                continue
            given = givens[r][c] if givens is not None else True
            x0, y0, x1, y1 = cell_rect(r, c, cell_px)
            bx0, by0, bx1, by1 = d.textbbox((0, 0), v, font=f)
            tx = (x0 + x1 - (bx1 - bx0)) // 2 - bx0
            ty = (y0 + y1 - (by1 - by0)) // 2 - by0
            d.text((tx, ty), v, fill=GIVEN_COLOR if given else FILLED_COLOR, font=f)

    im.save(out_path)
    return out_path
