"""Create detail files for tasks and link them from the board."""

import logging
import posixpath
import re
import time
from typing import Callable

from markboard.board import Column, Task
from markboard.edit import set_task_link
from markboard.storage import FileStorage

logger = logging.getLogger(__name__)

TASKS_DIR = ".tasks"

_NON_SLUG_RE = re.compile(r"[^\w\s-]|_")
_WHITESPACE_RE = re.compile(r"\s+")
_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def slugify_task_file_name(text: str) -> str:
    """Slug for a task file name, keeping letters and digits in any script."""
    slug = _NON_SLUG_RE.sub("", text.lower()).strip()
    slug = _WHITESPACE_RE.sub("-", slug)
    return slug or "task"


def to_base36(number: int) -> str:
    """Lowercase base-36 representation of a non-negative integer."""
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36_DIGITS[rem])
    return "".join(reversed(digits))


def tasks_dir_for(board_path: str, tasks_dir: str = TASKS_DIR) -> str:
    """The detail-file folder that sits next to board_path."""
    parent = posixpath.dirname(board_path)
    return f"{parent}/{tasks_dir}" if parent else tasks_dir


def task_file_template(task: Task, column: Column, board_path: str) -> str:
    """Initial markdown for a task detail file."""
    return "\n".join(
        [
            f"# {task.text}",
            "",
            f"- TODO file: {board_path}",
            f"- Column: {column.title}",
            f"- Origin line: {task.line_number}",
            "",
            "## Notes",
            "",
            "## Progress",
            "",
            "## Next Steps",
            "",
        ]
    )


def ensure_task_file(
    text: str,
    task: Task,
    column: Column,
    board_path: str,
    storage: FileStorage,
    tasks_dir: str = TASKS_DIR,
    clock: Callable[[], float] = time.time,
) -> tuple[str, str]:
    """Make sure task has a detail file. Returns (file_path, board_text).

    An already-linked task is returned as-is with no writes. Otherwise the
    detail file is written, then the board with the stamped task line. The
    two writes aren't atomic: if the second fails the detail file is left
    behind unlinked, and a retry creates another one.
    """
    if task.linked_file_path and task.linked_file_path.strip():
        return task.linked_file_path.strip(), text

    folder = tasks_dir_for(board_path, tasks_dir)
    try:
        storage.create_folder(folder)
    except FileExistsError:
        logger.debug("%s already exists", folder)

    stamp = to_base36(int(clock() * 1000))
    path = f"{folder}/{slugify_task_file_name(task.text)}-{stamp}.md"
    storage.write_file(path, task_file_template(task, column, board_path))
    logger.info("created task file %s for line %d of %s", path, task.line_number, board_path)

    new_text = set_task_link(text, task, path)
    storage.write_file(board_path, new_text)
    return path, new_text
