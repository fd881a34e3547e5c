"""Panels for the todo screen. Each one redraws itself from a Snapshot."""

from rich.text import Text
from textual.widgets import Static

from gottodo.models import Snapshot

HELP_TEXT = """\
GOTTODO - Keyboard Shortcuts

Navigation:
  Up/Down      Navigate tasks
  Space        Toggle task completion
  q            Quit application

Task Management:
  a            Add new task
  d            Delete selected task

Interface:
  Ctrl+Space   Hide/show todo list
  h            Show this help
  Esc          Cancel action

Press any key to close this help..."""


def task_line(text: str, done: bool) -> str:
    """Plain-text row for one task."""
    prefix = "[x]" if done else "[ ]"
    return f"{prefix} {text}"


def scroll_top(selected: int, height: int, top: int, count: int) -> int:
    """First visible row so that ``selected`` stays inside a ``height``-row window.

    A non-positive height means the size is not known yet; everything shows.
    """
    if height <= 0 or count <= height:
        return 0
    if selected < top:
        top = selected
    elif selected >= top + height:
        top = selected - height + 1
    return max(0, min(top, count - height))


class TaskListPanel(Static):
    """The task list with the selected row highlighted."""

    DEFAULT_CSS = """
    TaskListPanel {
        height: 1fr;
        border: solid $primary;
        padding: 0 1;
    }
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._top = 0

    def show(self, snapshot: Snapshot) -> None:
        self.display = snapshot.mode != "HelpOverlay"
        self.border_title = "TODO (h=help)" if snapshot.mode == "Normal" else "TODO"

        count = len(snapshot.tasks)
        if not count:
            self._top = 0
            self.border_subtitle = ""
            self.update(Text("No tasks yet. Press 'a' to add one.", style="dim"))
            return

        height = self.content_size.height
        self._top = scroll_top(snapshot.selected_index, height, self._top, count)
        end = count if height <= 0 else self._top + height
        if end - self._top < count:
            self.border_subtitle = f"{snapshot.selected_index + 1}/{count}"
        else:
            self.border_subtitle = ""

        body = Text(no_wrap=True, overflow="ellipsis")
        for i in range(self._top, min(end, count)):
            text, done = snapshot.tasks[i]
            if i > self._top:
                body.append("\n")
            style = "on blue" if i == snapshot.selected_index else ""
            if done:
                style = f"{style} dim".strip()
            body.append(task_line(text, done), style=style)
        self.update(body)


class PromptPanel(Static):
    """Input line for Adding, question line for Confirming."""

    DEFAULT_CSS = """
    PromptPanel {
        height: 3;
        border: solid $accent;
        padding: 0 1;
    }
    """

    def show(self, snapshot: Snapshot) -> None:
        if snapshot.mode == "Adding":
            self.update(Text(f"Add task: {snapshot.input_buffer}"))
        elif snapshot.mode == "Confirming":
            target = snapshot.pending_delete_text
            if target is None:
                self.update(Text("No task to delete"))
            else:
                self.update(Text(f"Delete '{target}' ? (y/n)"))
        else:
            self.display = False
            return
        self.border_title = "Prompt"
        self.display = True


class HelpPanel(Static):
    """Key binding reference, shown in HelpOverlay."""

    DEFAULT_CSS = """
    HelpPanel {
        height: 1fr;
        border: solid $primary;
        padding: 1 2;
    }
    """

    def on_mount(self) -> None:
        self.border_title = "Help"
        self.update(Text(HELP_TEXT))

    def show(self, snapshot: Snapshot) -> None:
        self.display = snapshot.mode == "HelpOverlay"


class DebugPanel(Static):
    """Most recent diagnostic lines, only when diagnostics are on."""

    DEFAULT_CSS = """
    DebugPanel {
        height: 8;
        border: solid $warning;
        padding: 0 1;
    }
    """

    def show(self, snapshot: Snapshot) -> None:
        self.display = snapshot.debug_enabled
        if not snapshot.debug_enabled:
            return
        self.border_title = "Debug Log"
        self.update(Text("\n".join(snapshot.debug_lines)))


class StatusLine(Static):
    """Transient status, e.g. a failed save."""

    DEFAULT_CSS = """
    StatusLine {
        height: 1;
        color: $error;
    }
    """

    def show(self, snapshot: Snapshot) -> None:
        self.display = snapshot.status is not None
        self.update(Text(snapshot.status or ""))
