"""Tests for machine.py - key dispatch and mode transitions."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from gottodo.machine import InteractionState, Outcome, dispatch
from gottodo.models import (
    Adding,
    Confirming,
    HelpOverlay,
    KeyPress,
    Normal,
    Task,
)
from gottodo.store import TaskStore

UP = KeyPress("up")
DOWN = KeyPress("down")
ENTER = KeyPress("enter", "\r")
ESC = KeyPress("escape", "\x1b")
BACKSPACE = KeyPress("backspace", "\x08")
SPACE = KeyPress.char(" ")
CTRL_SPACE = KeyPress("space", " ", ctrl=True)


def press(state: InteractionState, store: TaskStore, *keys) -> Outcome:
    """Dispatch keys (KeyPress or plain strings typed char by char)."""
    outcome = Outcome.CONTINUE
    for key in keys:
        if isinstance(key, str):
            for ch in key:
                outcome = dispatch(state, store, KeyPress.char(ch))
        else:
            outcome = dispatch(state, store, key)
    return outcome


@pytest.fixture
def store(tmp_path: Path) -> TaskStore:
    s = TaskStore(tmp_path / "todos.json")
    s.load()
    return s


@pytest.fixture
def filled(store: TaskStore) -> TaskStore:
    for text in ("first", "second", "third"):
        store.add(text)
    return store


@pytest.fixture
def state() -> InteractionState:
    return InteractionState()


class TestInitialState:
    """Tests for a fresh InteractionState."""

    def test_starts_normal_at_zero(self, state: InteractionState) -> None:
        assert state.mode == Normal()
        assert state.selected_index == 0
        assert state.ui_hidden is False


class TestNormalMode:
    """Tests for key handling in Normal mode."""

    def test_q_quits(self, state: InteractionState, store: TaskStore) -> None:
        assert press(state, store, "q") is Outcome.QUIT

    def test_h_opens_help(self, state: InteractionState, store: TaskStore) -> None:
        press(state, store, "h")

        assert state.mode == HelpOverlay(previous=Normal())

    def test_a_starts_adding_with_empty_buffer(
        self, state: InteractionState, store: TaskStore
    ) -> None:
        press(state, store, "a")

        assert state.mode == Adding("")

    def test_d_with_selection_confirms(
        self, state: InteractionState, filled: TaskStore
    ) -> None:
        press(state, filled, DOWN, "d")

        assert state.mode == Confirming(1)

    def test_d_without_tasks_is_noop(
        self, state: InteractionState, store: TaskStore
    ) -> None:
        press(state, store, "d")

        assert state.mode == Normal()

    def test_space_toggles_selected(
        self, state: InteractionState, filled: TaskStore
    ) -> None:
        press(state, filled, DOWN, SPACE)

        assert [t.done for t in filled.tasks] == [False, True, False]

    def test_space_on_empty_list_is_noop(
        self, state: InteractionState, store: TaskStore
    ) -> None:
        assert press(state, store, SPACE) is Outcome.CONTINUE
        assert len(store) == 0

    def test_down_clamps_at_end(
        self, state: InteractionState, filled: TaskStore
    ) -> None:
        press(state, filled, DOWN, DOWN, DOWN, DOWN)

        assert state.selected_index == 2

    def test_up_clamps_at_zero(
        self, state: InteractionState, filled: TaskStore
    ) -> None:
        press(state, filled, DOWN, UP, UP)

        assert state.selected_index == 0

    def test_navigation_on_empty_list_stays_zero(
        self, state: InteractionState, store: TaskStore
    ) -> None:
        press(state, store, DOWN, UP)

        assert state.selected_index == 0

    @pytest.mark.parametrize(
        "key", [KeyPress.char("z"), KeyPress("f5"), KeyPress("tab", "\t"), ENTER, ESC]
    )
    def test_unhandled_keys_are_noops(
        self, state: InteractionState, filled: TaskStore, key: KeyPress
    ) -> None:
        assert press(state, filled, key) is Outcome.CONTINUE
        assert state.mode == Normal()
        assert len(filled) == 3


class TestVisibilityToggle:
    """Tests for Ctrl+Space hiding the interface."""

    def test_ctrl_space_toggles_flag(
        self, state: InteractionState, store: TaskStore
    ) -> None:
        press(state, store, CTRL_SPACE)
        assert state.ui_hidden is True

        press(state, store, CTRL_SPACE)
        assert state.ui_hidden is False

    def test_ctrl_space_does_not_toggle_task(
        self, state: InteractionState, filled: TaskStore
    ) -> None:
        press(state, filled, CTRL_SPACE)

        assert state.mode == Normal()
        assert not any(t.done for t in filled.tasks)

    def test_hidden_consumes_editing_keys(
        self, state: InteractionState, filled: TaskStore
    ) -> None:
        press(state, filled, CTRL_SPACE, SPACE, "a", "d", "h", DOWN)

        assert state.mode == Normal()
        assert state.selected_index == 0
        assert not any(t.done for t in filled.tasks)

    def test_hidden_still_quits(
        self, state: InteractionState, store: TaskStore
    ) -> None:
        assert press(state, store, CTRL_SPACE, "q") is Outcome.QUIT


class TestAddingMode:
    """Tests for key handling in Adding mode."""

    def test_type_and_enter_adds_task(
        self, state: InteractionState, store: TaskStore
    ) -> None:
        press(state, store, "a", "X", ENTER)

        assert state.mode == Normal()
        assert store.tasks == (Task("X", False),)
        assert state.selected_index == 0

    def test_new_task_becomes_selected(
        self, state: InteractionState, filled: TaskStore
    ) -> None:
        press(state, filled, "a", "fourth", ENTER)

        assert filled.tasks[-1] == Task("fourth")
        assert state.selected_index == 3

    def test_escape_discards(
        self, state: InteractionState, filled: TaskStore
    ) -> None:
        press(state, filled, "a", "nope", ESC)

        assert state.mode == Normal()
        assert len(filled) == 3

    def test_escape_then_add_starts_fresh(
        self, state: InteractionState, store: TaskStore
    ) -> None:
        press(state, store, "a", "old", ESC, "a")

        assert state.mode == Adding("")

    def test_q_is_typed_not_quit(
        self, state: InteractionState, store: TaskStore
    ) -> None:
        outcome = press(state, store, "a", "q")

        assert outcome is Outcome.CONTINUE
        assert state.mode == Adding("q")

    def test_bindings_are_plain_text(
        self, state: InteractionState, store: TaskStore
    ) -> None:
        press(state, store, "a", "hd a", ENTER)

        assert store.tasks == (Task("hd a"),)

    def test_backspace_removes_last_char(
        self, state: InteractionState, store: TaskStore
    ) -> None:
        press(state, store, "a", "abc", BACKSPACE)

        assert state.mode == Adding("ab")

    def test_backspace_on_empty_buffer(
        self, state: InteractionState, store: TaskStore
    ) -> None:
        press(state, store, "a", BACKSPACE)

        assert state.mode == Adding("")

    def test_blank_enter_adds_nothing(
        self, state: InteractionState, store: TaskStore
    ) -> None:
        press(state, store, "a", "   ", ENTER)

        assert state.mode == Normal()
        assert len(store) == 0

    def test_entered_text_is_trimmed(
        self, state: InteractionState, store: TaskStore
    ) -> None:
        press(state, store, "a", "  pad  ", ENTER)

        assert store.tasks == (Task("pad"),)

    def test_navigation_keys_ignored(
        self, state: InteractionState, store: TaskStore
    ) -> None:
        press(state, store, "a", "x", UP, DOWN, CTRL_SPACE)

        assert state.mode == Adding("x")
        assert state.ui_hidden is False


class TestConfirmingMode:
    """Tests for key handling in Confirming mode."""

    def test_d_then_n_keeps_list(
        self, state: InteractionState, filled: TaskStore
    ) -> None:
        press(state, filled, "d", "n")

        assert state.mode == Normal()
        assert len(filled) == 3

    def test_d_then_escape_keeps_list(
        self, state: InteractionState, filled: TaskStore
    ) -> None:
        press(state, filled, "d", ESC)

        assert state.mode == Normal()
        assert len(filled) == 3

    @pytest.mark.parametrize("answer", ["y", "Y"])
    def test_d_then_y_deletes_selected(
        self, state: InteractionState, filled: TaskStore, answer: str
    ) -> None:
        press(state, filled, DOWN, "d", answer)

        assert state.mode == Normal()
        assert [t.text for t in filled.tasks] == ["first", "third"]
        assert state.selected_index == 1

    def test_deleting_last_row_clamps_selection(
        self, state: InteractionState, filled: TaskStore
    ) -> None:
        press(state, filled, DOWN, DOWN, "d", "y")

        assert [t.text for t in filled.tasks] == ["first", "second"]
        assert state.selected_index == 1

    def test_deleting_only_task_resets_selection(
        self, state: InteractionState, store: TaskStore
    ) -> None:
        store.add("only")

        press(state, store, "d", "y")

        assert len(store) == 0
        assert state.selected_index == 0

    def test_other_keys_keep_waiting(
        self, state: InteractionState, filled: TaskStore
    ) -> None:
        outcome = press(state, filled, "d", "q", "x", ENTER)

        assert outcome is Outcome.CONTINUE
        assert state.mode == Confirming(0)
        assert len(filled) == 3


class TestHelpOverlay:
    """Tests for the help overlay."""

    @pytest.mark.parametrize("key", [KeyPress.char("x"), ESC, ENTER, KeyPress.char("q")])
    def test_any_key_returns_to_normal(
        self, state: InteractionState, store: TaskStore, key: KeyPress
    ) -> None:
        press(state, store, "h")

        assert press(state, store, key) is Outcome.CONTINUE
        assert state.mode == Normal()


class TestSnapshot:
    """Tests for InteractionState.snapshot."""

    def test_normal_snapshot(self, state: InteractionState, filled: TaskStore) -> None:
        press(state, filled, SPACE)

        snap = state.snapshot(filled)

        assert snap.mode == "Normal"
        assert snap.tasks == (("first", True), ("second", False), ("third", False))
        assert snap.input_buffer is None
        assert snap.pending_delete_index is None

    def test_adding_snapshot_carries_buffer(
        self, state: InteractionState, store: TaskStore
    ) -> None:
        press(state, store, "a", "hi")

        assert state.snapshot(store).input_buffer == "hi"

    def test_confirming_snapshot_carries_index(
        self, state: InteractionState, filled: TaskStore
    ) -> None:
        press(state, filled, DOWN, "d")

        snap = state.snapshot(filled)

        assert snap.pending_delete_index == 1
        assert snap.pending_delete_text == "second"

    def test_debug_lines_only_when_enabled(self, store: TaskStore) -> None:
        quiet = InteractionState().snapshot(store, debug_lines=["x"])
        loud = InteractionState(debug_enabled=True).snapshot(store, debug_lines=["x"])

        assert quiet.debug_lines == ()
        assert loud.debug_lines == ("x",)
