"""
JSON codec for the persisted task list.

The file is a pretty-printed array of ``{"text": ..., "done": ...}``
objects. Decoding is tolerant per entry and strict only about the overall
structure.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable

from gottodo.errors import LoadError
from gottodo.models import Task

logger = logging.getLogger(__name__)

INDENT = 2


def encode(tasks: Iterable[Task]) -> str:
    """Serialize tasks to the on-disk JSON text."""
    data = [{"text": t.text, "done": t.done} for t in tasks]
    return json.dumps(data, indent=INDENT, ensure_ascii=False) + "\n"


def _task_from_dict(position: int, raw: Any) -> Task | None:
    """Convert one decoded entry to a Task, or None if it must be skipped."""
    if not isinstance(raw, dict):
        logger.debug("skipping entry %d: not an object", position)
        return None
    text = raw.get("text")
    if not isinstance(text, str) or not text.strip():
        logger.debug("skipping entry %d: missing or invalid text", position)
        return None
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        logger.debug("skipping entry %d: text is not valid UTF-8", position)
        return None
    done = raw.get("done", False)
    return Task(text=text, done=done if isinstance(done, bool) else False)


def decode(text: str) -> list[Task]:
    """Parse the on-disk JSON text.

    Raises LoadError if the text is not valid JSON or not an array.
    Blank text decodes to an empty list.
    """
    if not text.strip():
        return []
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise LoadError(f"invalid JSON: {e}") from e
    except RecursionError as e:
        raise LoadError("invalid JSON: nested too deeply") from e
    if not isinstance(data, list):
        raise LoadError(f"expected a JSON array, got {type(data).__name__}")

    tasks = []
    for position, raw in enumerate(data):
        task = _task_from_dict(position, raw)
        if task is not None:
            tasks.append(task)
    return tasks
