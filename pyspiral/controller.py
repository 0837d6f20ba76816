"""Translates pointer, wheel and button events into session state updates."""

import math

from .host import PointerCapture
from .session import Mode, Session
from .viewport import clamp_zoom


WHEEL_SENSITIVITY = 0.001


class InteractionController:
    """Input handlers for one session.

    Handlers are bound to an EventRouter with `attach`; the router keeps only
    weak references, so the controller must be owned by whoever owns the
    session.
    """

    def __init__(self, session: Session, capture: PointerCapture = None):
        self.session = session
        self.capture = capture if capture is not None else PointerCapture()

    def attach(self, router):
        router.bind("spiral", self.select_spiral)
        router.bind("htree", self.select_h_tree)
        router.bind("mandelbrot", self.select_mandelbrot)
        router.bind("restart", self.restart)
        router.bind("clear", self.clear)
        router.bind("pointerdown", self.pointer_down)
        router.bind("pointermove", self.pointer_move)
        router.bind("pointerup", self.pointer_up)
        router.bind("pointercancel", self.pointer_cancel)
        router.bind("wheel", self.wheel)

    # =========================================================================
    # Buttons
    # =========================================================================

    def select_spiral(self):
        self.session.select_mode(Mode.SPIRAL)

    def select_h_tree(self):
        self.session.select_mode(Mode.HTREE)

    def select_mandelbrot(self):
        self.session.select_mode(Mode.MANDELBROT)

    def restart(self):
        self.session.restart()

    def clear(self):
        self.session.clear()

    # =========================================================================
    # Pointer / Wheel
    # =========================================================================

    def pointer_down(self, x: float, y: float, pointer_id: int = 1):
        drag = self.session.drag
        drag.active = True
        drag.last_x, drag.last_y = x, y
        drag.pointer_id = pointer_id
        self.capture.set_pointer_capture(pointer_id)

    def pointer_move(self, x: float, y: float, pointer_id: int = 1):
        drag = self.session.drag
        if not drag.active:
            return
        view = self.session.view
        view.pan_x += x - drag.last_x
        view.pan_y += y - drag.last_y
        drag.last_x, drag.last_y = x, y

    def pointer_up(self, x: float = 0.0, y: float = 0.0, pointer_id: int = 1):
        drag = self.session.drag
        drag.active = False
        drag.pointer_id = None
        self.capture.release_pointer_capture(pointer_id)

    pointer_cancel = pointer_up

    def wheel(self, delta_y: float):
        """Exponential zoom: negative delta_y (scroll up) zooms in."""
        view = self.session.view
        view.zoom = clamp_zoom(view.zoom * math.exp(-delta_y * WHEEL_SENSITIVITY))
