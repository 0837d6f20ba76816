"""Host-side plumbing: frame scheduling, event routing and pointer capture.

Callbacks are held weakly, so a torn-down session is never kept alive by the
host and its pending frame or event handlers simply stop firing.
"""

import logging
import weakref
from typing import Callable, Optional


logger = logging.getLogger(__name__)


class SetupError(RuntimeError):
    """The host could not provide a surface, context or required UI element."""


def weak_callback(fn: Callable) -> Callable[[], Optional[Callable]]:
    """Return a resolver giving back `fn`, or None once its owner is gone.

    Bound methods are referenced weakly; plain functions and other callables
    are held strongly.
    """
    if hasattr(fn, "__self__") and hasattr(fn, "__func__"):
        return weakref.WeakMethod(fn)
    return lambda: fn


class FrameScheduler:
    """Request-next-frame primitive: each request runs once on the next dispatch."""

    def __init__(self):
        self._pending = []

    @property
    def pending(self) -> int:
        return len(self._pending)

    def request_frame(self, callback: Callable[[float], None]):
        self._pending.append(weak_callback(callback))

    def dispatch(self, timestamp_ms: float) -> int:
        """Run the callbacks requested before this call. Returns how many ran."""
        pending, self._pending = self._pending, []
        ran = 0
        for resolve in pending:
            callback = resolve()
            if callback is None:
                logger.debug("Dropping frame callback of a released session")
                continue
            callback(timestamp_ms)
            ran += 1
        return ran


class EventRouter:
    """Named event sources with one weakly held handler each."""

    def __init__(self):
        self._handlers = {}

    def bind(self, name: str, handler: Callable):
        self._handlers[name] = weak_callback(handler)

    def unbind(self, name: str):
        self._handlers.pop(name, None)

    def emit(self, name: str, *args) -> bool:
        """Deliver an event. Returns False if nothing live handled it."""
        resolve = self._handlers.get(name)
        if resolve is None:
            return False
        handler = resolve()
        if handler is None:
            del self._handlers[name]
            return False
        handler(*args)
        return True


class PointerCapture:
    """Tracks which pointers have been captured by the surface."""

    def __init__(self):
        self._captured = set()

    def set_pointer_capture(self, pointer_id: int):
        self._captured.add(pointer_id)

    def release_pointer_capture(self, pointer_id: int):
        self._captured.discard(pointer_id)

    def has_pointer_capture(self, pointer_id: int) -> bool:
        return pointer_id in self._captured
