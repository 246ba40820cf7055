"""
Task list persistence.

prd.json is re-read on every load so edits made between iterations are
honored. Writes go through a temporary file and os.replace so that a crash
mid-write leaves the previous file intact.
"""

import json
import logging
from pathlib import Path

from ralph.lib.errors import MalformedStateError, PersistenceError
from ralph.lib.fileio import atomic_write_text
from ralph.lib.validate import ValidationError, validate
from ralph.prd.models import TaskList

logger = logging.getLogger(__name__)


def load_prd(path: Path) -> TaskList:
    """Load and validate the task list.

    Raises:
        MalformedStateError: if the file is missing, not JSON, or the wrong shape
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise MalformedStateError(path, "task list not found") from None
    except OSError as e:
        raise MalformedStateError(path, f"cannot read task list: {e}") from None

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedStateError(path, f"invalid JSON: {e}") from None

    try:
        validate(data, "prd")
    except ValidationError as e:
        raise MalformedStateError(path, str(e)) from None

    task_list = TaskList.from_dict(data)
    logger.debug(f"Loaded {len(task_list.stories)} stories from {path}")
    return task_list


def dump_prd(task_list: TaskList) -> str:
    """Serialize with two-space indentation and a trailing newline."""
    return json.dumps(task_list.to_dict(), indent=2, ensure_ascii=False) + "\n"


def save_prd(path: Path, task_list: TaskList) -> None:
    """Validate and atomically write the task list.

    Raises:
        PersistenceError: if the data is invalid or the write fails
    """
    data = task_list.to_dict()
    try:
        validate(data, "prd")
    except ValidationError as e:
        raise PersistenceError(path, f"refusing to write invalid task list: {e}") from None

    atomic_write_text(path, dump_prd(task_list))
    logger.debug(f"Saved task list to {path}")
