"""pygame-backed 2D drawing context.

Implements the small subset of an HTML-canvas style 2D context that the scenes
need: an affine transform stack, string colours, rectangle fills, stroked
polylines and raw RGBA blits.
"""

from dataclasses import dataclass, replace
from functools import lru_cache
import math

import pygame
from PIL import ImageColor


# Affine matrix (a, b, c, d, e, f): (x, y) -> (a*x + c*y + e, b*x + d*y + f)
IDENTITY = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)


@lru_cache(maxsize=1024)
def parse_color(color: str) -> tuple:
    """Parse a CSS-style colour string ("#rrggbb", "hsl(h, s%, l%)", names)."""
    return ImageColor.getrgb(color)[:3]


def _multiply(m, n):
    """Return m * n (n applied first)."""
    a, b, c, d, e, f = m
    a2, b2, c2, d2, e2, f2 = n
    return (
        a * a2 + c * b2,
        b * a2 + d * b2,
        a * c2 + c * d2,
        b * c2 + d * d2,
        a * e2 + c * f2 + e,
        b * e2 + d * f2 + f,
    )


@dataclass(frozen=True)
class DrawState:
    """Per-save() drawing state."""
    transform: tuple = IDENTITY
    fill_style: str = "#000000"
    stroke_style: str = "#000000"
    line_width: float = 1.0


class Canvas2D:
    """Drawing context over a pygame surface of physical pixel size."""

    def __init__(self, width: int = 1, height: int = 1):
        self.surface = pygame.Surface((max(int(width), 1), max(int(height), 1)))
        self._state = DrawState()
        self._stack = []
        self._subpaths = []

    # =========================================================================
    # Surface
    # =========================================================================

    @property
    def size(self) -> tuple:
        return self.surface.get_size()

    def resize(self, width: int, height: int):
        """Resize the backing surface; like a canvas, this resets all state."""
        size = (max(int(width), 1), max(int(height), 1))
        if size != self.surface.get_size():
            self.surface = pygame.Surface(size)
        self._state = DrawState()
        self._stack.clear()
        self._subpaths = []

    # =========================================================================
    # State
    # =========================================================================

    def save(self):
        self._stack.append(self._state)

    def restore(self):
        if self._stack:
            self._state = self._stack.pop()

    @property
    def transform(self) -> tuple:
        return self._state.transform

    def set_transform(self, a, b, c, d, e, f):
        self._state = replace(
            self._state, transform=(float(a), float(b), float(c), float(d), float(e), float(f))
        )

    def translate(self, x: float, y: float):
        self._state = replace(
            self._state, transform=_multiply(self._state.transform, (1.0, 0.0, 0.0, 1.0, x, y))
        )

    def scale(self, sx: float, sy: float):
        self._state = replace(
            self._state, transform=_multiply(self._state.transform, (sx, 0.0, 0.0, sy, 0.0, 0.0))
        )

    @property
    def fill_style(self) -> str:
        return self._state.fill_style

    @fill_style.setter
    def fill_style(self, color: str):
        parse_color(color)
        self._state = replace(self._state, fill_style=color)

    @property
    def stroke_style(self) -> str:
        return self._state.stroke_style

    @stroke_style.setter
    def stroke_style(self, color: str):
        parse_color(color)
        self._state = replace(self._state, stroke_style=color)

    @property
    def line_width(self) -> float:
        return self._state.line_width

    @line_width.setter
    def line_width(self, width: float):
        if width > 0 and math.isfinite(width):
            self._state = replace(self._state, line_width=float(width))

    def to_device(self, x: float, y: float) -> tuple:
        """Map user-space coordinates through the current transform."""
        a, b, c, d, e, f = self._state.transform
        return (a * x + c * y + e, b * x + d * y + f)

    # =========================================================================
    # Drawing
    # =========================================================================

    def fill_rect(self, x: float, y: float, w: float, h: float):
        color = parse_color(self._state.fill_style)
        a, b, c, d, _, _ = self._state.transform
        if b == 0.0 and c == 0.0:
            x0, y0 = self.to_device(x, y)
            x1, y1 = self.to_device(x + w, y + h)
            left, right = sorted((x0, x1))
            top, bottom = sorted((y0, y1))
            rect = pygame.Rect(
                math.floor(left), math.floor(top),
                math.ceil(right) - math.floor(left), math.ceil(bottom) - math.floor(top),
            )
            self.surface.fill(color, rect)
        else:
            corners = [
                self.to_device(x, y), self.to_device(x + w, y),
                self.to_device(x + w, y + h), self.to_device(x, y + h),
            ]
            pygame.draw.polygon(self.surface, color, corners)

    def begin_path(self):
        self._subpaths = []

    def move_to(self, x: float, y: float):
        self._subpaths.append([self.to_device(x, y)])

    def line_to(self, x: float, y: float):
        if not self._subpaths:
            self._subpaths.append([])
        self._subpaths[-1].append(self.to_device(x, y))

    def stroke(self):
        color = parse_color(self._state.stroke_style)
        width = max(1, int(round(self._state.line_width * self._device_scale())))
        for points in self._subpaths:
            if len(points) >= 2:
                pygame.draw.lines(self.surface, color, False, points, width)

    def put_image_data(self, rgba, width: int, height: int, dx: int = 0, dy: int = 0):
        """Blit a flat RGBA byte buffer at a device offset, ignoring the transform."""
        width, height = int(width), int(height)
        if len(rgba) != width * height * 4:
            raise ValueError(
                f"pixel buffer holds {len(rgba)} bytes, expected {width * height * 4}"
            )
        image = pygame.image.frombuffer(rgba, (width, height), "RGBA")
        self.surface.blit(image, (int(dx), int(dy)))

    def _device_scale(self) -> float:
        a, b, c, d, _, _ = self._state.transform
        return math.sqrt(abs(a * d - b * c))
