#!/usr/bin/env python3
"""Interactive scene viewer - pygame window hosting a Session.

Controls:
    Drag            Pan
    Scroll          Zoom
    Toolbar         Spiral / H-Tree / Mandelbrot / Restart / Clear
    S / T / M       Spiral / H-Tree / Mandelbrot
    R               Restart animation
    C               Clear (pause)
    0               Reset view
    F               Toggle status line
    H/?             Toggle help
    Q/ESC           Quit
"""

import os
import time

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame

from .canvas import Canvas2D
from .controller import InteractionController
from .host import EventRouter, FrameScheduler, PointerCapture, SetupError
from .session import Mode, Session


# =============================================================================
# Constants
# =============================================================================

FONT_SIZE = 18
PADDING = 8
HELP_OVERLAY_ALPHA = 200
WHEEL_LINE_DELTA = 100.0  # deltaY of one wheel notch
MOUSE_POINTER_ID = 1

TOOLBAR_BUTTONS = [
    ("Spiral", "spiral"),
    ("H-Tree", "htree"),
    ("Mandelbrot", "mandelbrot"),
    ("Restart", "restart"),
    ("Clear", "clear"),
]
BUTTON_COLOR = (40, 38, 52)
BUTTON_ACTIVE_COLOR = (92, 80, 140)
BUTTON_TEXT_COLOR = (233, 225, 255)

MODE_EVENTS = {
    "spiral": Mode.SPIRAL,
    "htree": Mode.HTREE,
    "mandelbrot": Mode.MANDELBROT,
}

HELP_LINES = [
    "Keybindings:",
    "",
    "  Drag           Pan",
    "  Scroll         Zoom",
    "",
    "  S              Spiral",
    "  T              H-tree fractal",
    "  M              Mandelbrot set",
    "  R              Restart animation",
    "  C              Clear",
    "  0              Reset view",
    "",
    "  F              Toggle status line",
    "  H / ?          This help",
    "  Q / ESC        Quit",
]


# =============================================================================
# Main Viewer Class
# =============================================================================

class SceneViewer:
    """pygame host for a Session: window, event pump, toolbar and overlays."""

    def __init__(self, width: int = 1200, height: int = 800,
                 mode: Mode = Mode.SPIRAL, dpr: float = 1.0, fps: int = 60):
        self.width = width
        self.height = height
        self.dpr = dpr if dpr > 0 else 1.0
        self.fps = fps

        self.canvas = Canvas2D(int(width * self.dpr), int(height * self.dpr))
        self.session = Session(
            self.canvas,
            logical_size=self._logical_size,
            device_pixel_ratio=self.dpr,
            start_mode=mode,
        )

        # Host wiring
        self.scheduler = FrameScheduler()
        self.router = EventRouter()
        self.capture = PointerCapture()
        self.controller = InteractionController(self.session, self.capture)
        self.controller.attach(self.router)

        # UI state
        self.show_status = True
        self.show_help = False
        self.running = True
        self.button_rects = {}

        # Timing
        self.frame_times = []
        self.last_fps = 0
        self.last_render_ms = 0

        # Pygame objects (initialized in setup())
        self.screen = None
        self.clock = None
        self.font = None

    def setup(self):
        """Open the window and start the frame loop. Raises SetupError."""
        try:
            pygame.init()
            self.screen = pygame.display.set_mode(
                (int(self.width * self.dpr), int(self.height * self.dpr)),
                pygame.RESIZABLE,
            )
            pygame.display.set_caption("pyspiral")
            self.clock = pygame.time.Clock()
            self.font = pygame.font.SysFont("monospace", int(FONT_SIZE * self.dpr))
        except pygame.error as exc:
            pygame.quit()
            raise SetupError(f"Could not initialise display: {exc}") from exc

        self._layout_toolbar()
        self.session.start(self.scheduler)

    def run(self):
        """Main entry point - set up pygame and run the event loop."""
        if self.screen is None:
            self.setup()
        try:
            while self.running:
                self.step()
            self._print_stats()
        finally:
            pygame.quit()

    def step(self):
        """One loop iteration: events, pending frames, present."""
        self._handle_events()

        t0 = time.perf_counter()
        ran = self.scheduler.dispatch(t0 * 1000.0)
        if ran:
            render_ms = (time.perf_counter() - t0) * 1000
            self.last_render_ms = render_ms
            self.frame_times.append(render_ms)

        self._present()
        self.clock.tick(self.fps)
        self.last_fps = self.clock.get_fps()

    def _logical_size(self) -> tuple:
        if self.screen is None:
            return float(self.width), float(self.height)
        width, height = self.screen.get_size()
        return width / self.dpr, height / self.dpr

    def _to_logical(self, pos) -> tuple:
        return pos[0] / self.dpr, pos[1] / self.dpr

    def _print_stats(self):
        """Print rendering statistics on exit."""
        if self.frame_times:
            avg_ms = sum(self.frame_times) / len(self.frame_times)
            print(f"\nRendered {len(self.frame_times)} frames")
            if avg_ms > 0:
                print(f"Average frame time: {avg_ms:.1f}ms ({1000/avg_ms:.0f} FPS)")

    # =========================================================================
    # Event Handling
    # =========================================================================

    def _handle_events(self):
        """Process all pygame events."""
        for event in pygame.event.get():
            handler = self._event_handlers.get(event.type)
            if handler:
                handler(self, event)

    @property
    def _event_handlers(self) -> dict:
        """Map event types to handler methods."""
        return {
            pygame.QUIT: lambda self, e: setattr(self, 'running', False),
            pygame.KEYDOWN: SceneViewer._on_keydown,
            pygame.VIDEORESIZE: lambda self, e: self._layout_toolbar(),
            pygame.WINDOWRESIZED: lambda self, e: self._layout_toolbar(),
            pygame.WINDOWFOCUSLOST: SceneViewer._on_focus_lost,
            pygame.MOUSEBUTTONDOWN: SceneViewer._on_mouse_down,
            pygame.MOUSEBUTTONUP: SceneViewer._on_mouse_up,
            pygame.MOUSEMOTION: SceneViewer._on_mouse_motion,
            pygame.MOUSEWHEEL: SceneViewer._on_mouse_wheel,
        }

    def _on_keydown(self, event):
        handler = self._key_handlers.get(event.key)
        if handler:
            handler(self, event)

    @property
    def _key_handlers(self) -> dict:
        """Map keys to handler methods."""
        return {
            pygame.K_ESCAPE: lambda s, e: setattr(s, 'running', False),
            pygame.K_q: lambda s, e: setattr(s, 'running', False),
            pygame.K_f: SceneViewer._toggle_status,
            pygame.K_h: SceneViewer._toggle_help,
            pygame.K_QUESTION: SceneViewer._toggle_help,
            pygame.K_SLASH: SceneViewer._toggle_help,
            pygame.K_0: lambda s, e: s.session.reset_view(),
            pygame.K_s: lambda s, e: s._press("spiral"),
            pygame.K_t: lambda s, e: s._press("htree"),
            pygame.K_m: lambda s, e: s._press("mandelbrot"),
            pygame.K_r: lambda s, e: s._press("restart"),
            pygame.K_c: lambda s, e: s._press("clear"),
        }

    def _toggle_status(self, event):
        self.show_status = not self.show_status

    def _toggle_help(self, event):
        self.show_help = not self.show_help

    def _press(self, name: str):
        """Trigger a toolbar action."""
        self.router.emit(name)
        if name in MODE_EVENTS:
            print(f"Mode: {MODE_EVENTS[name].value}")

    def _button_at(self, pos):
        for name, rect in self.button_rects.items():
            if rect.collidepoint(pos):
                return name
        return None

    def _on_mouse_down(self, event):
        """Handle mouse button press."""
        if event.button != 1:  # Left click only
            return

        name = self._button_at(event.pos)
        if name is not None:
            self._press(name)
            return

        x, y = self._to_logical(event.pos)
        self.router.emit("pointerdown", x, y, MOUSE_POINTER_ID)

    def _on_mouse_up(self, event):
        """Handle mouse button release."""
        if event.button == 1:
            x, y = self._to_logical(event.pos)
            self.router.emit("pointerup", x, y, MOUSE_POINTER_ID)

    def _on_mouse_motion(self, event):
        """Handle mouse movement; the toolbar only passes captured drags."""
        if (self._button_at(event.pos) is not None
                and not self.capture.has_pointer_capture(MOUSE_POINTER_ID)):
            return
        x, y = self._to_logical(event.pos)
        self.router.emit("pointermove", x, y, MOUSE_POINTER_ID)

    def _on_focus_lost(self, event):
        if self.capture.has_pointer_capture(MOUSE_POINTER_ID):
            self.router.emit("pointercancel", 0.0, 0.0, MOUSE_POINTER_ID)

    def _on_mouse_wheel(self, event):
        """Handle mouse wheel scrolling; one notch up is deltaY = -100."""
        notches = getattr(event, "precise_y", event.y)
        self.router.emit("wheel", -notches * WHEEL_LINE_DELTA)

    # =========================================================================
    # Rendering
    # =========================================================================

    def _present(self):
        """Blit the session canvas and draw host overlays."""
        self.screen = pygame.display.get_surface()
        self.screen.blit(self.canvas.surface, (0, 0))

        self._draw_toolbar()
        if self.show_status:
            self._draw_status_line()
        if self.show_help:
            self._draw_help_overlay()

        pygame.display.flip()

    def _layout_toolbar(self):
        """Compute button rectangles along the top edge."""
        self.button_rects.clear()
        if self.font is None:
            return
        x_pos = PADDING
        for label, name in TOOLBAR_BUTTONS:
            w, h = self.font.size(label)
            self.button_rects[name] = pygame.Rect(x_pos, PADDING, w + PADDING * 2, h + PADDING)
            x_pos += w + PADDING * 3

    def _draw_toolbar(self):
        labels = dict((name, label) for label, name in TOOLBAR_BUTTONS)
        for name, rect in self.button_rects.items():
            active = MODE_EVENTS.get(name) is self.session.mode
            if name == "clear":
                active = self.session.paused
            pygame.draw.rect(self.screen, BUTTON_ACTIVE_COLOR if active else BUTTON_COLOR, rect)
            surf = self.font.render(labels[name], True, BUTTON_TEXT_COLOR)
            self.screen.blit(surf, (rect.x + PADDING, rect.y + PADDING // 2))

    def _draw_status_line(self):
        view = self.session.view
        state = "paused" if self.session.paused else f"t={self.session.last_elapsed_ms / 1000:.1f}s"
        text = (f"{self.session.mode.value} | {state} | zoom: {view.zoom:.2f} | "
                f"pan: ({view.pan_x:.0f}, {view.pan_y:.0f}) | "
                f"{self.last_render_ms:.1f}ms | {self.last_fps:.0f} FPS")
        surf = self.font.render(text, True, (255, 255, 255), (0, 0, 0))
        height = self.screen.get_height()
        self.screen.blit(surf, (PADDING, height - surf.get_height() - PADDING // 2))

    def _draw_help_overlay(self):
        """Draw help text overlay."""
        line_height = self.font.get_linesize()
        help_width = max(self.font.size(line)[0] for line in HELP_LINES) + PADDING * 2
        help_height = len(HELP_LINES) * line_height + PADDING * 2

        # Semi-transparent background
        help_bg = pygame.Surface((help_width, help_height))
        help_bg.set_alpha(HELP_OVERLAY_ALPHA)
        help_bg.fill((0, 0, 0))
        help_y = line_height * 2 + PADDING * 2
        self.screen.blit(help_bg, (PADDING, help_y))

        for i, line in enumerate(HELP_LINES):
            text_surface = self.font.render(line, True, (255, 255, 255))
            self.screen.blit(text_surface, (PADDING * 2, help_y + PADDING + i * line_height))
