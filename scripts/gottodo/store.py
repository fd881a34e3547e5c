"""
Write-through task store backed by a JSON file.

Every successful mutation is followed by a full atomic rewrite of the file.
Load and save failures are logged and recovered; they never propagate to the
interactive loop.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from gottodo.codec import decode, encode
from gottodo.errors import LoadError, SaveError
from gottodo.models import Task

logger = logging.getLogger(__name__)

DEFAULT_DATA_FILE = Path("todos.json")


def _write_atomic(path: Path, content: str) -> None:
    """Replace ``path`` with ``content`` via a temp file in the same dir."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=".tmp_", suffix=".json")
    except OSError as e:
        raise SaveError(f"could not write {path}: {e}") from e
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)
    except (OSError, ValueError) as e:
        raise SaveError(f"could not write {path}: {e}") from e
    finally:
        if os.path.exists(tmp):
            os.unlink(tmp)


class TaskStore:
    """Ordered task list persisted to ``path``."""

    def __init__(self, path: Path | None = None):
        self._path = Path(path) if path is not None else DEFAULT_DATA_FILE
        self._tasks: list[Task] = []
        self.last_error: str | None = None

    @property
    def path(self) -> Path:
        return self._path

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def in_bounds(self, index: int) -> bool:
        return 0 <= index < len(self._tasks)

    def load(self) -> list[Task]:
        """Load tasks from disk, replacing the in-memory list.

        Missing, unreadable or malformed files all yield an empty list.
        """
        self._tasks = self._read()
        return list(self._tasks)

    def _read(self) -> list[Task]:
        if not self._path.exists():
            logger.debug("no task file at %s, starting empty", self._path)
            return []
        try:
            text = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("could not read %s: %s", self._path, e)
            return []
        try:
            tasks = decode(text)
        except LoadError as e:
            logger.warning("ignoring %s: %s", self._path, e)
            return []
        logger.debug("loaded %d task(s) from %s", len(tasks), self._path)
        return tasks

    def save(self, tasks: list[Task] | None = None) -> bool:
        """Overwrite the file with ``tasks`` (default: the current list).

        Returns False if the write failed; in-memory state is kept either way.
        """
        if tasks is not None:
            self._tasks = list(tasks)
        try:
            _write_atomic(self._path, encode(self._tasks))
        except SaveError as e:
            logger.error("%s", e)
            self.last_error = str(e)
            return False
        self.last_error = None
        return True

    def add(self, text: str) -> Task | None:
        """Append a new open task. Blank text is ignored."""
        stripped = text.strip()
        if not stripped:
            logger.debug("add(%r) ignored: blank text", text)
            return None
        task = Task(text=stripped)
        self._tasks.append(task)
        logger.debug("add(%r) -> index %d", text, len(self._tasks) - 1)
        self.save()
        return task

    def delete(self, index: int) -> Task | None:
        """Remove the task at ``index``. Out-of-range indices are ignored."""
        if not self.in_bounds(index):
            logger.debug("delete(%d) ignored: out of range", index)
            return None
        task = self._tasks.pop(index)
        logger.debug("delete(%d) removed %r", index, task.text)
        self.save()
        return task

    def toggle(self, index: int) -> Task | None:
        """Flip ``done`` on the task at ``index``. Out-of-range is ignored."""
        if not self.in_bounds(index):
            logger.debug("toggle(%d) ignored: out of range", index)
            return None
        task = self._tasks[index]
        task.done = not task.done
        logger.debug("toggle(%d) -> done=%s", index, task.done)
        self.save()
        return task
