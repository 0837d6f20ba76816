"""Animated spiral scene.

The spiral r(t) = A + B*t is traced over t in [0, MAX_T]; the traced range grows
linearly with elapsed time and is complete after DURATION_MS.
"""

import math


A = 2.2
B = 4.2
MAX_T = 80.0 * math.pi
DURATION_MS = 4200.0
DT = 0.08
LINE_WIDTH = 2.2


def spiral_t_end(elapsed_ms: float) -> float:
    """Parameter value reached after elapsed_ms."""
    progress = min(max(elapsed_ms, 0.0) / DURATION_MS, 1.0)
    return MAX_T * progress


def spiral_scale(width: float, height: float) -> float:
    """Fit the complete spiral within 45% of the smaller surface dimension."""
    max_r = max(A + B * MAX_T, 1.0)
    return 0.45 * min(width, height) / max_r


def spiral_hue(t: float) -> float:
    return (t / MAX_T) * 360.0


def spiral_segments(cx: float, cy: float, width: float, height: float, elapsed_ms: float):
    """Yield (t, x1, y1, x2, y2) for each stroked segment."""
    t_end = spiral_t_end(elapsed_ms)
    scale = spiral_scale(width, height)

    t = 0.0
    while t < t_end:
        t2 = min(t + DT, t_end)
        r1 = A + B * t
        r2 = A + B * t2
        yield (
            t,
            cx + scale * r1 * math.cos(t),
            cy + scale * r1 * math.sin(t),
            cx + scale * r2 * math.cos(t2),
            cy + scale * r2 * math.sin(t2),
        )
        t = t2


def draw_spiral(ctx, cx: float, cy: float, width: float, height: float, elapsed_ms: float) -> int:
    """Stroke the spiral up to its current progress. Returns the segment count."""
    count = 0
    for t, x1, y1, x2, y2 in spiral_segments(cx, cy, width, height, elapsed_ms):
        ctx.stroke_style = f"hsl({spiral_hue(t):.0f}, 100%, 60%)"
        ctx.line_width = LINE_WIDTH
        ctx.begin_path()
        ctx.move_to(x1, y1)
        ctx.line_to(x2, y2)
        ctx.stroke()
        count += 1
    return count
