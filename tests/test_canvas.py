from __future__ import annotations

import numpy as np
import pytest

from pyspiral.canvas import Canvas2D, parse_color


def test_parse_hex_and_hsl() -> None:
    assert parse_color("#0b0b0f") == (11, 11, 15)
    assert parse_color("#e9e1ff") == (233, 225, 255)
    assert parse_color("hsl(0, 100%, 50%)") == (255, 0, 0)
    assert parse_color("hsl(120, 100%, 50%)") == (0, 255, 0)


def test_invalid_colour_is_rejected(canvas: Canvas2D) -> None:
    with pytest.raises(ValueError):
        canvas.fill_style = "not-a-colour"
    assert canvas.fill_style == "#000000"


def test_save_restore_round_trip(canvas: Canvas2D) -> None:
    canvas.stroke_style = "#ff0000"
    canvas.line_width = 3.0
    canvas.save()
    canvas.translate(5.0, 6.0)
    canvas.scale(2.0, 2.0)
    canvas.stroke_style = "#00ff00"
    canvas.line_width = 1.0
    assert canvas.to_device(1.0, 1.0) == (7.0, 8.0)
    canvas.restore()
    assert canvas.transform == (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)
    assert canvas.stroke_style == "#ff0000"
    assert canvas.line_width == 3.0


def test_restore_without_save_is_noop(canvas: Canvas2D) -> None:
    canvas.translate(1.0, 2.0)
    canvas.restore()
    assert canvas.to_device(0.0, 0.0) == (1.0, 2.0)


def test_fill_rect_respects_transform(canvas: Canvas2D) -> None:
    canvas.fill_style = "#000000"
    canvas.fill_rect(0, 0, 64, 48)
    canvas.scale(2.0, 2.0)
    canvas.fill_style = "#ffffff"
    canvas.fill_rect(1, 1, 4, 4)
    assert tuple(canvas.surface.get_at((2, 2)))[:3] == (255, 255, 255)
    assert tuple(canvas.surface.get_at((9, 9)))[:3] == (255, 255, 255)
    assert tuple(canvas.surface.get_at((10, 10)))[:3] == (0, 0, 0)
    assert tuple(canvas.surface.get_at((1, 1)))[:3] == (0, 0, 0)


def test_fill_rect_under_shear_fills_parallelogram(canvas: Canvas2D) -> None:
    canvas.fill_style = "#000000"
    canvas.fill_rect(0, 0, 64, 48)
    # x' = x + y: the square becomes (0,0) (20,0) (40,20) (20,20)
    canvas.set_transform(1.0, 0.0, 1.0, 1.0, 0.0, 0.0)
    canvas.fill_style = "#ffffff"
    canvas.fill_rect(0, 0, 20, 20)
    assert tuple(canvas.surface.get_at((25, 10)))[:3] == (255, 255, 255)
    # inside the bounding box but left of the slanted edge
    assert tuple(canvas.surface.get_at((5, 15)))[:3] == (0, 0, 0)
    assert tuple(canvas.surface.get_at((35, 5)))[:3] == (0, 0, 0)


def test_stroke_draws_each_subpath(canvas: Canvas2D) -> None:
    canvas.stroke_style = "#ff0000"
    canvas.begin_path()
    canvas.move_to(10, 10)
    canvas.line_to(10, 30)
    canvas.move_to(40, 10)
    canvas.line_to(40, 30)
    canvas.stroke()
    assert tuple(canvas.surface.get_at((10, 20)))[:3] == (255, 0, 0)
    assert tuple(canvas.surface.get_at((40, 20)))[:3] == (255, 0, 0)
    assert tuple(canvas.surface.get_at((25, 20)))[:3] == (0, 0, 0)


def test_begin_path_discards_previous_points(canvas: Canvas2D) -> None:
    canvas.stroke_style = "#ffffff"
    canvas.begin_path()
    canvas.move_to(5, 5)
    canvas.line_to(5, 40)
    canvas.begin_path()
    canvas.stroke()
    assert tuple(canvas.surface.get_at((5, 20)))[:3] == (0, 0, 0)


def test_put_image_data_ignores_transform(canvas: Canvas2D) -> None:
    canvas.scale(3.0, 3.0)
    rgba = np.zeros(2 * 2 * 4, dtype=np.uint8)
    rgba.reshape(-1, 4)[:] = (10, 20, 30, 255)
    canvas.put_image_data(rgba, 2, 2, 4, 5)
    assert tuple(canvas.surface.get_at((4, 5)))[:3] == (10, 20, 30)
    assert tuple(canvas.surface.get_at((5, 6)))[:3] == (10, 20, 30)
    assert tuple(canvas.surface.get_at((6, 7)))[:3] == (0, 0, 0)


def test_put_image_data_rejects_wrong_size(canvas: Canvas2D) -> None:
    with pytest.raises(ValueError):
        canvas.put_image_data(np.zeros(10, dtype=np.uint8), 2, 2)


def test_resize_resets_state(canvas: Canvas2D) -> None:
    canvas.translate(3.0, 3.0)
    canvas.save()
    canvas.resize(100, 80)
    assert canvas.size == (100, 80)
    assert canvas.transform == (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)
    canvas.resize(0, -5)
    assert canvas.size == (1, 1)
