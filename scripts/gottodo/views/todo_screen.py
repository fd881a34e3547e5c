"""Main screen: lays out the panels and acts as the session's Renderer."""

from textual import events
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.screen import Screen

from gottodo.models import Snapshot
from gottodo.views.widgets import (
    DebugPanel,
    HelpPanel,
    PromptPanel,
    StatusLine,
    TaskListPanel,
)


class TodoScreen(Screen):
    """Single full-screen view of the task list."""

    DEFAULT_CSS = """
    TodoScreen {
        layout: vertical;
    }

    #body {
        height: 1fr;
    }
    """

    def compose(self) -> ComposeResult:
        with Vertical(id="body"):
            yield TaskListPanel(id="tasks")
            yield HelpPanel(id="help")
        yield PromptPanel(id="prompt")
        yield StatusLine(id="status")
        yield DebugPanel(id="debug")

    def _panels(self):
        return (
            self.query_one(TaskListPanel),
            self.query_one(HelpPanel),
            self.query_one(PromptPanel),
            self.query_one(StatusLine),
            self.query_one(DebugPanel),
        )

    def draw(self, snapshot: Snapshot) -> None:
        """Redraw every panel from ``snapshot``."""
        self.query_one("#body").display = True
        for panel in self._panels():
            panel.show(snapshot)

    def clear(self) -> None:
        """Hide everything so the screen is blank."""
        self.query_one("#body").display = False
        for panel in self._panels():
            panel.display = False

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        self.app.handle_key(event)
