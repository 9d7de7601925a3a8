"""Shared helpers for CLI command handlers."""

import json
import logging
import sys

from markboard.board import Column, Task, TodoBoard
from markboard.document import Document
from markboard.document import open_document as _open_document

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
        level=logging.DEBUG if verbose else logging.WARNING,
    )


def open_document(file: str, json_mode: bool) -> Document:
    """Open a markdown file. Exit 1 with message if it can't be read."""
    try:
        return _open_document(file)
    except OSError as e:
        error(f"cannot read {file}: {e.strerror or e}", json_mode)


def find_column(board: TodoBoard, title: str, json_mode: bool) -> Column:
    """Lookup column by title. Exit 1 listing available columns if not found."""
    column = board.find_column(title)
    if column is not None:
        return column
    available = [f"  {c.title}" for c in board.columns]
    error(f"Column '{title}' not found. Available:\n" + "\n".join(available), json_mode)


def find_task(board: TodoBoard, line: int, json_mode: bool) -> tuple[Column, Task]:
    """Lookup task by 1-based line number. Exit 1 if there's none."""
    found = board.find_task(line - 1)
    if found is not None:
        return found
    error(f"No task on line {line}.", json_mode)


def maybe_commit(doc: Document, args, files: list[str], message: str) -> str | None:
    """Commit files when asked to (flag or auto-commit config)."""
    if not (getattr(args, "commit", False) or doc.config.get("auto_commit")):
        return None
    try:
        return doc.commit(files, message)
    except Exception as e:
        logger.warning("commit failed: %s", e)
        return None


def output_json(data: dict | list) -> None:
    """Write JSON to stdout."""
    print(json.dumps(data, indent=2))


def output_result(data: dict, text: str, json_mode: bool) -> None:
    """Output mutation result as JSON or plain text."""
    if json_mode:
        output_json(data)
    else:
        print(text)


def error(message: str, json_mode: bool) -> None:
    """Print error to stderr and exit 1."""
    if json_mode:
        print(json.dumps({"error": message}), file=sys.stderr)
    else:
        print(f"error: {message}", file=sys.stderr)
    sys.exit(1)


def task_to_dict(task: Task) -> dict:
    return {
        "line": task.line_number,
        "text": task.text,
        "checked": task.checked,
        "indent": task.indent,
        "task_file": task.linked_file_path,
    }


def board_to_dict(board: TodoBoard) -> dict:
    """JSON-ready board, with 1-based line numbers."""
    return {
        "columns": [
            {
                "id": column.id,
                "title": column.title,
                "heading_line": None if column.heading_line_index is None else column.heading_line_index + 1,
                "tasks": [task_to_dict(task) for task in column.tasks],
            }
            for column in board.columns
        ]
    }
