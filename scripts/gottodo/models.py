"""
Data model for the task list and the interaction state machine.

Modes are a closed set of frozen dataclasses; payload lives only on the
variant that needs it, so an index while in Normal cannot be represented.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, Union


@dataclass
class Task:
    """A single task. Identity is its position in the list."""

    text: str
    done: bool = False

    def as_pair(self) -> tuple[str, bool]:
        return (self.text, self.done)


@dataclass(frozen=True)
class Normal:
    """Browsing the list."""

    name = "Normal"


@dataclass(frozen=True)
class Adding:
    """Typing the text of a new task."""

    buffer: str = ""
    name = "Adding"


@dataclass(frozen=True)
class Confirming:
    """Waiting for y/n before deleting the task at ``index``."""

    index: int
    name = "Confirming"


@dataclass(frozen=True)
class HelpOverlay:
    """Help shown over the list; any key returns to ``previous``."""

    previous: Normal = field(default_factory=Normal)
    name = "HelpOverlay"


Mode = Union[Normal, Adding, Confirming, HelpOverlay]


@dataclass(frozen=True)
class KeyPress:
    """Toolkit-neutral key event.

    ``key`` is a lowercase key name ("a", "space", "enter", "up", ...),
    ``character`` the printable character if any.
    """

    key: str
    character: str | None = None
    ctrl: bool = False

    @classmethod
    def char(cls, ch: str) -> KeyPress:
        """Build a plain printable key."""
        return cls(key="space" if ch == " " else ch, character=ch)

    @property
    def is_printable(self) -> bool:
        return (
            not self.ctrl
            and self.character is not None
            and len(self.character) == 1
            and self.character.isprintable()
        )


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of everything a renderer needs after one event."""

    mode: str
    tasks: tuple[tuple[str, bool], ...]
    selected_index: int
    input_buffer: str | None = None
    pending_delete_index: int | None = None
    ui_hidden: bool = False
    debug_enabled: bool = False
    debug_lines: tuple[str, ...] = ()
    status: str | None = None

    @property
    def pending_delete_text(self) -> str | None:
        """Text of the task awaiting delete confirmation, if any."""
        i = self.pending_delete_index
        if i is None or not 0 <= i < len(self.tasks):
            return None
        return self.tasks[i][0]


class Renderer(Protocol):
    """Protocol for anything that can display a Snapshot."""

    def draw(self, snapshot: Snapshot) -> None:
        """Draw the given snapshot."""
        ...

    def clear(self) -> None:
        """Blank the display so the surrounding terminal shows through."""
        ...
