"""Pan/zoom view state and the transform applied before vector scenes."""

from contextlib import contextmanager
from dataclasses import dataclass


MIN_ZOOM = 0.2
MAX_ZOOM = 20.0


def clamp_zoom(zoom: float) -> float:
    return min(max(zoom, MIN_ZOOM), MAX_ZOOM)


@dataclass
class ViewState:
    """Pan (screen pixels) and zoom shared by all scenes."""
    pan_x: float = 0.0
    pan_y: float = 0.0
    zoom: float = 1.0

    def reset(self):
        self.pan_x, self.pan_y, self.zoom = 0.0, 0.0, 1.0


def apply_viewport(ctx, view: ViewState, cx: float, cy: float):
    """Pan in screen pixels, then zoom about the surface centre (cx, cy)."""
    ctx.translate(view.pan_x, view.pan_y)
    ctx.translate(cx, cy)
    ctx.scale(view.zoom, view.zoom)
    ctx.translate(-cx, -cy)


@contextmanager
def viewport_transform(ctx, view: ViewState, cx: float, cy: float):
    """Apply the viewport for the duration of the block, then restore the context."""
    ctx.save()
    try:
        apply_viewport(ctx, view, cx, cy)
        yield ctx
    finally:
        ctx.restore()
