"""
Interaction state machine.

``dispatch`` maps one key press to at most one store mutation and one mode
transition. State is passed in explicitly and owned by the caller.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Sequence, cast

from gottodo.models import (
    Adding,
    Confirming,
    HelpOverlay,
    KeyPress,
    Mode,
    Normal,
    Snapshot,
)
from gottodo.store import TaskStore

logger = logging.getLogger(__name__)


class Outcome(enum.Enum):
    CONTINUE = "continue"
    QUIT = "quit"


@dataclass
class InteractionState:
    """Mutable per-session UI state. Never persisted."""

    mode: Mode = field(default_factory=Normal)
    selected_index: int = 0
    ui_hidden: bool = False
    debug_enabled: bool = False

    def clamp_selection(self, length: int) -> None:
        if length == 0:
            self.selected_index = 0
        else:
            self.selected_index = min(max(self.selected_index, 0), length - 1)

    def snapshot(
        self,
        store: TaskStore,
        debug_lines: Sequence[str] = (),
        status: str | None = None,
    ) -> Snapshot:
        mode = self.mode
        return Snapshot(
            mode=mode.name,
            tasks=tuple(t.as_pair() for t in store.tasks),
            selected_index=self.selected_index,
            input_buffer=mode.buffer if isinstance(mode, Adding) else None,
            pending_delete_index=mode.index if isinstance(mode, Confirming) else None,
            ui_hidden=self.ui_hidden,
            debug_enabled=self.debug_enabled,
            debug_lines=tuple(debug_lines) if self.debug_enabled else (),
            status=status,
        )


def _is_ctrl_space(key: KeyPress) -> bool:
    return key.ctrl and key.key == "space"


def _handle_normal(state: InteractionState, store: TaskStore, key: KeyPress) -> Outcome:
    if key.key == "q" and not key.ctrl:
        logger.debug("quit requested")
        return Outcome.QUIT

    if _is_ctrl_space(key):
        state.ui_hidden = not state.ui_hidden
        logger.debug("ui_hidden=%s", state.ui_hidden)
        return Outcome.CONTINUE

    # Hidden list: keys are consumed but nothing can be edited blind.
    if state.ui_hidden or key.ctrl:
        logger.debug("unhandled key %r in Normal", key.key)
        return Outcome.CONTINUE

    if key.key == "space":
        store.toggle(state.selected_index)
    elif key.key == "a":
        state.mode = Adding()
    elif key.key == "d":
        if store.in_bounds(state.selected_index):
            state.mode = Confirming(state.selected_index)
    elif key.key == "h":
        state.mode = HelpOverlay(previous=Normal())
    elif key.key == "down":
        state.selected_index += 1
        state.clamp_selection(len(store))
    elif key.key == "up":
        state.selected_index -= 1
        state.clamp_selection(len(store))
    else:
        logger.debug("unhandled key %r in Normal", key.key)
    return Outcome.CONTINUE


def _handle_adding(state: InteractionState, store: TaskStore, key: KeyPress) -> Outcome:
    mode = cast(Adding, state.mode)

    if key.key == "enter":
        if store.add(mode.buffer) is not None:
            state.selected_index = len(store) - 1
        state.mode = Normal()
    elif key.key == "escape":
        state.mode = Normal()
    elif key.key == "backspace":
        state.mode = Adding(mode.buffer[:-1])
    elif key.is_printable:
        state.mode = Adding(mode.buffer + key.character)
    else:
        logger.debug("unhandled key %r in Adding", key.key)
    return Outcome.CONTINUE


def _handle_confirming(state: InteractionState, store: TaskStore, key: KeyPress) -> Outcome:
    mode = cast(Confirming, state.mode)

    if key.character in ("y", "Y"):
        store.delete(mode.index)
        state.clamp_selection(len(store))
        state.mode = Normal()
    elif key.character in ("n", "N") or key.key == "escape":
        state.mode = Normal()
    else:
        logger.debug("unhandled key %r in Confirming", key.key)
    return Outcome.CONTINUE


def _handle_help(state: InteractionState, store: TaskStore, key: KeyPress) -> Outcome:
    mode = cast(HelpOverlay, state.mode)
    state.mode = mode.previous
    return Outcome.CONTINUE


_HANDLERS = {
    Normal: _handle_normal,
    Adding: _handle_adding,
    Confirming: _handle_confirming,
    HelpOverlay: _handle_help,
}


def dispatch(state: InteractionState, store: TaskStore, key: KeyPress) -> Outcome:
    """Apply one key press to ``state`` and ``store``."""
    logger.debug("key=%s char=%r ctrl=%s", key.key, key.character, key.ctrl)
    before = state.mode
    outcome = _HANDLERS[type(before)](state, store, key)
    if state.mode.name != before.name:
        logger.debug("mode %s -> %s", before.name, state.mode.name)
    return outcome
