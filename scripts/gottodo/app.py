"""
gottodo TUI application.

Drives the session: Textual delivers key events one at a time, each is
converted to a KeyPress and handed to the session, and a periodic tick
keeps the display fresh.
"""

from __future__ import annotations

from textual import events
from textual.app import App

from gottodo.config import Settings
from gottodo.logging_setup import RingBufferHandler
from gottodo.models import KeyPress
from gottodo.session import Session
from gottodo.store import TaskStore
from gottodo.views.todo_screen import TodoScreen

# Terminals report Ctrl+Space under either name.
CTRL_SPACE_KEYS = frozenset({"ctrl+space", "ctrl+@"})


def key_from_event(event: events.Key) -> KeyPress:
    """Translate a Textual key event to a KeyPress."""
    key = event.key
    if key in CTRL_SPACE_KEYS:
        return KeyPress(key="space", character=" ", ctrl=True)
    if key.startswith("ctrl+"):
        return KeyPress(key=key[len("ctrl+"):], character=None, ctrl=True)
    character = event.character if event.is_printable else None
    return KeyPress(key=key, character=character)


class TodoApp(App):
    """Main gottodo application."""

    TITLE = "gottodo"
    ENABLE_COMMAND_PALETTE = False

    CSS = """
    Screen {
        background: $surface;
    }
    """

    def __init__(
        self,
        settings: Settings | None = None,
        ring: RingBufferHandler | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._todo_settings = settings or Settings()
        self._ring = ring
        self.store = TaskStore(self._todo_settings.data_file)
        self.session: Session | None = None
        self._tick_timer = None

    async def on_mount(self) -> None:
        """Called when app is mounted."""
        screen = TodoScreen()
        await self.push_screen(screen)
        self.session = Session(
            self.store,
            screen,
            debug=self._todo_settings.debug,
            ring=self._ring,
        )
        self.session.start()
        self._tick_timer = self.set_interval(
            self._todo_settings.tick_interval,
            self.session.tick,
        )

    def handle_key(self, event: events.Key) -> None:
        """Feed one key event to the session; exit on quit."""
        if self.session is None:
            return
        if not self.session.handle(key_from_event(event)):
            self.exit(return_code=0)


def run(settings: Settings | None = None, ring: RingBufferHandler | None = None) -> int:
    """Run the TUI application and return its exit status."""
    app = TodoApp(settings=settings, ring=ring)
    app.run()
    return app.return_code or 0
