"""Animated spiral, H-tree and Mandelbrot scenes under interactive pan and zoom."""

from .canvas import Canvas2D
from .controller import InteractionController
from .host import EventRouter, FrameScheduler, PointerCapture, SetupError
from .session import AnimationState, DragState, Mode, Session
from .viewport import ViewState

__version__ = "0.1.0"

__all__ = [
    "AnimationState",
    "Canvas2D",
    "DragState",
    "EventRouter",
    "FrameScheduler",
    "InteractionController",
    "Mode",
    "PointerCapture",
    "Session",
    "SetupError",
    "ViewState",
]
