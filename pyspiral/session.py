"""Animation loop and mode state machine.

A Session owns all mutable state (view, animation clock, drag) together with
the canvas. The host drives it through `on_frame` and the interaction
controller; nothing else touches the canvas.
"""

from dataclasses import InitVar, dataclass, field
from enum import Enum
from typing import Callable, Optional, Union
import logging

from .canvas import Canvas2D
from .h_tree import draw_h_tree_scene
from .mandelbrot import draw_mandelbrot_scene
from .spiral import draw_spiral
from .viewport import ViewState, viewport_transform


logger = logging.getLogger(__name__)

BACKGROUND = "#0b0b0f"
FALLBACK_SIZE = (800.0, 600.0)


class Mode(Enum):
    SPIRAL = "spiral"
    HTREE = "htree"
    MANDELBROT = "mandelbrot"

    @classmethod
    def parse(cls, name: str) -> "Mode":
        key = name.strip().lower().replace("-", "").replace("_", "")
        for mode in cls:
            if mode.value == key:
                return mode
        raise ValueError(f"Unknown mode: {name}")


@dataclass
class AnimationState:
    """Active mode and its clock. mode_start_time is None until the next frame."""
    mode: Mode = Mode.SPIRAL
    mode_start_time: Optional[float] = None
    paused: bool = False


@dataclass
class DragState:
    """Pointer drag state for panning."""
    active: bool = False
    last_x: float = 0.0
    last_y: float = 0.0
    pointer_id: Optional[int] = None


@dataclass
class Session:
    """The single mutable state object of a running visualization."""
    canvas: Canvas2D
    logical_size: Callable[[], tuple] = lambda: FALLBACK_SIZE
    device_pixel_ratio: Union[float, Callable[[], float]] = 1.0
    view: ViewState = field(default_factory=ViewState)
    animation: AnimationState = field(default_factory=AnimationState)
    drag: DragState = field(default_factory=DragState)
    last_elapsed_ms: float = 0.0
    start_mode: InitVar[Mode] = Mode.SPIRAL

    def __post_init__(self, start_mode):
        self.animation.mode = start_mode
        self._scheduler = None
        self._pixels = None  # RGBA buffer reused across Mandelbrot frames

    # =========================================================================
    # Mode State Machine
    # =========================================================================

    @property
    def mode(self) -> Mode:
        return self.animation.mode

    @property
    def paused(self) -> bool:
        return self.animation.paused

    def select_mode(self, mode: Mode):
        """Switch scenes and replay from the start."""
        self.animation.mode = mode
        self.animation.mode_start_time = None
        self.animation.paused = False
        if mode is Mode.MANDELBROT:
            # Mandelbrot reads pan/zoom as complex-plane offsets
            self.view.reset()
        logger.debug("Entering %s mode", mode.value)

    def restart(self):
        self.animation.mode_start_time = None
        self.animation.paused = False

    def clear(self):
        self.animation.paused = True

    def reset_view(self):
        self.view.reset()

    # =========================================================================
    # Frame Loop
    # =========================================================================

    def start(self, scheduler):
        """Begin animating on the given frame scheduler."""
        self._scheduler = scheduler
        scheduler.request_frame(self.on_frame)

    def on_frame(self, timestamp_ms: float):
        self.frame(timestamp_ms)
        if self._scheduler is not None:
            self._scheduler.request_frame(self.on_frame)

    def frame(self, timestamp_ms: float) -> float:
        """Advance the clock to timestamp_ms and draw. Returns elapsed ms."""
        if self.animation.mode_start_time is None:
            self.animation.mode_start_time = timestamp_ms
        elapsed_ms = timestamp_ms - self.animation.mode_start_time
        self.draw(elapsed_ms)
        return elapsed_ms

    def surface_size(self) -> tuple:
        """Logical (width, height), falling back when the host reports nothing."""
        width, height = self.logical_size()
        if width > 0 and height > 0:
            return float(width), float(height)
        return FALLBACK_SIZE

    def pixel_ratio(self) -> float:
        dpr = self.device_pixel_ratio
        if callable(dpr):
            dpr = dpr()
        return dpr if dpr > 0 else 1.0

    def draw(self, elapsed_ms: float):
        width, height = self.surface_size()
        dpr = self.pixel_ratio()
        ctx = self.canvas

        ctx.resize(int(width * dpr), int(height * dpr))
        ctx.set_transform(1.0, 0.0, 0.0, 1.0, 0.0, 0.0)
        ctx.scale(dpr, dpr)

        ctx.fill_style = BACKGROUND
        ctx.fill_rect(0.0, 0.0, width, height)
        if self.animation.paused:
            return
        self.last_elapsed_ms = elapsed_ms

        cx = width / 2.0
        cy = height / 2.0
        mode = self.animation.mode
        if mode is Mode.SPIRAL:
            with viewport_transform(ctx, self.view, cx, cy):
                draw_spiral(ctx, cx, cy, width, height, elapsed_ms)
        elif mode is Mode.HTREE:
            with viewport_transform(ctx, self.view, cx, cy):
                draw_h_tree_scene(ctx, cx, cy, width, height, elapsed_ms)
        elif mode is Mode.MANDELBROT:
            rgba = draw_mandelbrot_scene(
                ctx, width, height,
                self.view.pan_x, self.view.pan_y, self.view.zoom,
                elapsed_ms, out=self._pixels,
            )
            if rgba is not None:
                self._pixels = rgba
        else:
            raise ValueError(f"Unknown mode: {mode}")
