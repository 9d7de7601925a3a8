"""Task mutations that rewrite board text line by line.

Every operation takes the full document text and returns the full new text.
Lines that aren't touched come back byte-identical, and a document without a
trailing newline stays without one.
"""

import logging
from dataclasses import replace
from typing import Callable

from markboard.board import TASK_LINE_RE, Column, Task, match_heading

logger = logging.getLogger(__name__)


def document_lines(text: str) -> list[str]:
    """Lines of text as the mutations see them.

    The empty string after a trailing newline is dropped, so "end of file"
    means after the last real line.
    """
    normalized = text.replace("\r\n", "\n")
    lines = normalized.split("\n") if normalized else []
    if normalized.endswith("\n"):
        lines.pop()
    return lines


def with_lines(text: str, mutate: Callable[[list[str]], None]) -> str:
    """Split text into lines, let mutate edit them in place, rejoin."""
    had_trailing_newline = text.endswith("\n")
    lines = document_lines(text)
    mutate(lines)
    result = "\n".join(lines)
    if had_trailing_newline and lines:
        result += "\n"
    return result


def serialize_task_line(text: str, linked_file_path: str = "", indent: str = "", checked: bool = False) -> str:
    """Build a task line, with a task-file comment when a path is given."""
    mark = "x" if checked else " "
    line = f"{indent}- [{mark}] {text.strip()}"
    if not linked_file_path or not linked_file_path.strip():
        return line
    return f"{line} <!-- task-file: {linked_file_path.strip()} -->"


def find_heading_line_index(lines: list[str], title: str) -> int | None:
    """Index of the first heading titled title, or None."""
    for index, line in enumerate(lines):
        if match_heading(line) == title.strip():
            return index
    return None


def region_end(lines: list[str], heading_line_index: int) -> int:
    """Index of the next heading after heading_line_index, or len(lines)."""
    for index in range(heading_line_index + 1, len(lines)):
        if match_heading(lines[index]) is not None:
            return index
    return len(lines)


def find_insertion_index(lines: list[str], column: Column) -> int:
    """Where a new task goes in column.

    After the last task in the column's region, right after its heading if
    the region has none, or end of file for the implicit column.
    """
    if column.heading_line_index is None:
        return len(lines)

    start = column.heading_line_index + 1
    last_task = None
    for index in range(start, region_end(lines, column.heading_line_index)):
        if TASK_LINE_RE.match(lines[index]):
            last_task = index
    return last_task + 1 if last_task is not None else start


def _in_range(lines: list[str], index: int) -> bool:
    if 0 <= index < len(lines):
        return True
    logger.debug("line %d is out of range (%d lines), ignoring", index, len(lines))
    return False


def add_task(text: str, column: Column, task_text: str) -> str:
    """Append an unchecked task to column."""

    def mutate(lines: list[str]) -> None:
        lines.insert(find_insertion_index(lines, column), serialize_task_line(task_text))

    return with_lines(text, mutate)


def delete_task(text: str, task: Task) -> str:
    """Remove the task's line. Stale indexes are ignored."""

    def mutate(lines: list[str]) -> None:
        if _in_range(lines, task.line_index):
            del lines[task.line_index]

    return with_lines(text, mutate)


def move_task(text: str, task: Task, target: Column) -> str:
    """Move the task's line after the last task of target.

    The target heading is looked up by title once the line is removed, so
    its cached index is never trusted. The full original line is carried
    over, keeping indent, check state and link. A target whose heading has
    gone missing receives the line at end of file.
    """

    def mutate(lines: list[str]) -> None:
        if not _in_range(lines, task.line_index):
            return
        line = lines.pop(task.line_index)
        heading = None
        if target.heading_line_index is not None:
            heading = find_heading_line_index(lines, target.title)
        lines.insert(find_insertion_index(lines, replace(target, heading_line_index=heading)), line)

    return with_lines(text, mutate)


def set_task_link(text: str, task: Task, linked_file_path: str) -> str:
    """Rewrite the task's line with a task-file link.

    The line is re-parsed so indent and check state come from the text
    rather than from a possibly stale task.
    """

    def mutate(lines: list[str]) -> None:
        if not _in_range(lines, task.line_index):
            return
        match = TASK_LINE_RE.match(lines[task.line_index])
        if not match:
            logger.debug("line %d is not a task, not linking", task.line_index)
            return
        lines[task.line_index] = serialize_task_line(
            match.group(3) or "",
            linked_file_path,
            indent=match.group(1) or "",
            checked=match.group(2).lower() == "x",
        )

    return with_lines(text, mutate)
