"""Shared fixtures: headless pygame and a call-recording drawing context."""

from __future__ import annotations

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest

from pyspiral.canvas import Canvas2D


class RecordingContext:
    """Drawing context fake that records calls and tracks the transform depth."""

    def __init__(self):
        self.calls = []
        self.depth = 0
        self.fill_style = "#000000"
        self.stroke_style = "#000000"
        self.line_width = 1.0
        self.images = []
        self.fail_images = False

    def __getattr__(self, name):
        def record(*args):
            self.calls.append((name, args))
        return record

    def save(self):
        self.depth += 1
        self.calls.append(("save", ()))

    def restore(self):
        self.depth -= 1
        self.calls.append(("restore", ()))

    def put_image_data(self, rgba, width, height, dx=0, dy=0):
        if self.fail_images:
            raise ValueError("no image for this frame")
        self.images.append((rgba, width, height, dx, dy))

    def names(self):
        return [name for name, _ in self.calls]

    def count(self, name):
        return sum(1 for n, _ in self.calls if n == name)


@pytest.fixture()
def recorder() -> RecordingContext:
    return RecordingContext()


@pytest.fixture()
def canvas() -> Canvas2D:
    return Canvas2D(64, 48)
