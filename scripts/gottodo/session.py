"""
Toolkit-independent event loop core.

A Session owns the task store and the interaction state for one run and
threads them through ``dispatch``. Whatever polls for input (the Textual
app, a test) feeds key presses to ``handle`` one at a time.
"""

from __future__ import annotations

from gottodo.logging_setup import RingBufferHandler
from gottodo.machine import InteractionState, Outcome, dispatch
from gottodo.models import KeyPress, Renderer, Snapshot
from gottodo.store import TaskStore

# Lines of diagnostic history shown in the debug panel
DEBUG_PANEL_LINES = 6


class Session:
    """One interactive run: store + state + renderer."""

    def __init__(
        self,
        store: TaskStore,
        renderer: Renderer,
        *,
        debug: bool = False,
        ring: RingBufferHandler | None = None,
    ) -> None:
        self.store = store
        self.state = InteractionState(debug_enabled=debug)
        self._renderer = renderer
        self._ring = ring

    def start(self) -> None:
        """Load persisted tasks and draw the first frame."""
        self.store.load()
        self.state.clamp_selection(len(self.store))
        self.redraw()

    def snapshot(self) -> Snapshot:
        lines = self._ring.tail(DEBUG_PANEL_LINES) if self._ring else ()
        return self.state.snapshot(
            self.store, debug_lines=lines, status=self.store.last_error
        )

    def handle(self, key: KeyPress) -> bool:
        """Process one key press. Returns False once the session should end."""
        was_hidden = self.state.ui_hidden
        if dispatch(self.state, self.store, key) is Outcome.QUIT:
            return False
        if self.state.ui_hidden and not was_hidden:
            self._renderer.clear()
        self.redraw()
        return True

    def redraw(self) -> None:
        """Draw the latest snapshot unless the UI is hidden."""
        if self.state.ui_hidden:
            return
        self._renderer.draw(self.snapshot())

    def tick(self) -> None:
        """Idle refresh from the periodic timer."""
        self.redraw()
