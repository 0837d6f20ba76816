"""Recursive H-tree fractal scene, growing one level every 500 ms."""

import math


STEP_MS = 500.0
MAX_DEPTH = 6
MIN_LENGTH = 2.0
BASE_FRACTION = 0.55
STROKE_COLOR = "#e9e1ff"
LINE_WIDTH = 2.0


def h_tree_depth(elapsed_ms: float) -> int:
    return min(max(math.floor(elapsed_ms / STEP_MS), 0), MAX_DEPTH)


def draw_h_tree_scene(ctx, cx: float, cy: float, width: float, height: float, elapsed_ms: float) -> int:
    base = BASE_FRACTION * min(width, height)
    ctx.stroke_style = STROKE_COLOR
    ctx.line_width = LINE_WIDTH
    return draw_h_tree(ctx, cx, cy, base, h_tree_depth(elapsed_ms))


def draw_h_tree(ctx, x: float, y: float, length: float, depth: int) -> int:
    """Draw an H centred at (x, y) and recurse into its four tips.

    Returns the number of H shapes drawn.
    """
    if depth < 0 or length < MIN_LENGTH:
        return 0

    half = length / 2.0
    x0, x1 = x - half, x + half
    y0, y1 = y - half, y + half

    ctx.begin_path()
    ctx.move_to(x0, y0)
    ctx.line_to(x0, y1)
    ctx.move_to(x1, y0)
    ctx.line_to(x1, y1)
    ctx.move_to(x0, y)
    ctx.line_to(x1, y)
    ctx.stroke()

    if depth == 0:
        return 1

    count = 1
    for nx, ny in ((x0, y0), (x0, y1), (x1, y0), (x1, y1)):
        count += draw_h_tree(ctx, nx, ny, half, depth - 1)
    return count
