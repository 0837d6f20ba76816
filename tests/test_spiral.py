from __future__ import annotations

import math

import pytest

from pyspiral.spiral import (
    DT,
    DURATION_MS,
    MAX_T,
    draw_spiral,
    spiral_scale,
    spiral_segments,
    spiral_t_end,
)


def test_t_end_grows_linearly_then_saturates() -> None:
    assert spiral_t_end(0.0) == 0.0
    assert spiral_t_end(DURATION_MS / 2) == pytest.approx(MAX_T / 2)
    assert spiral_t_end(DURATION_MS) == pytest.approx(MAX_T)
    assert spiral_t_end(DURATION_MS * 10) == pytest.approx(MAX_T)
    assert spiral_t_end(-50.0) == 0.0


def test_nothing_drawn_at_time_zero(recorder) -> None:
    assert draw_spiral(recorder, 50, 50, 100, 100, 0.0) == 0
    assert recorder.count("stroke") == 0


@pytest.mark.parametrize("elapsed", [4200.0, 5000.0, 1e6])
def test_full_range_after_duration(elapsed: float) -> None:
    segments = list(spiral_segments(0.0, 0.0, 200.0, 100.0, elapsed))
    assert segments[0][0] == 0.0
    assert abs(len(segments) - MAX_T / DT) <= 1.0
    # last segment ends exactly on the outermost point
    scale = spiral_scale(200.0, 100.0)
    r_end = (2.2 + 4.2 * MAX_T) * scale
    assert segments[-1][3] == pytest.approx(r_end * math.cos(MAX_T))
    assert segments[-1][4] == pytest.approx(r_end * math.sin(MAX_T), abs=1e-9)


def test_redraw_is_idempotent(recorder) -> None:
    other = type(recorder)()
    draw_spiral(recorder, 40, 30, 80, 60, 1234.0)
    draw_spiral(other, 40, 30, 80, 60, 1234.0)
    assert recorder.calls == other.calls


def test_full_spiral_fits_in_45_percent() -> None:
    width, height = 300.0, 200.0
    limit = 0.45 * min(width, height) + 1e-9
    for _, x1, y1, x2, y2 in spiral_segments(150.0, 100.0, width, height, DURATION_MS):
        assert math.hypot(x2 - 150.0, y2 - 100.0) <= limit


def test_segments_sweep_hue(recorder) -> None:
    draw_spiral(recorder, 50, 50, 100, 100, DURATION_MS)
    assert recorder.stroke_style.startswith("hsl(")
    assert recorder.stroke_style.endswith(", 100%, 60%)")
    assert recorder.line_width == 2.2
    hue = float(recorder.stroke_style[4:].split(",")[0])
    assert 355.0 <= hue <= 360.0
