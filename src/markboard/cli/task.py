"""Handlers for 'markboard task' commands."""

from markboard.cli._common import (
    error,
    find_column,
    find_task,
    maybe_commit,
    open_document,
    output_json,
    output_result,
    task_to_dict,
)
from markboard.edit import add_task, delete_task, document_lines, find_insertion_index, move_task
from markboard.taskfile import ensure_task_file


def task_list(args) -> int:
    """List tasks grouped by column."""
    doc = open_document(args.file, args.json)
    board = doc.board

    columns = [c for c in board.columns if not args.column or c.title == args.column.strip()]

    if args.json:
        items = [{**task_to_dict(task), "column": column.title} for column in columns for task in column.tasks]
        output_json(items)
    else:
        for column in columns:
            print(column.title)
            for task in column.tasks:
                mark = "x" if task.checked else " "
                print(f"  {task.line_number:>4}  [{mark}] {task.text}")

    return 0


def task_add(args) -> int:
    """Add a task to a column (default: the first one)."""
    text = args.text.strip()
    doc = open_document(args.file, args.json)
    board = doc.board
    if not text:
        error("Task text is empty.", args.json)

    column = find_column(board, args.column, args.json) if args.column else board.columns[0]
    line = find_insertion_index(document_lines(doc.text), column) + 1
    doc.save(add_task(doc.text, column, text))
    commit = maybe_commit(doc, args, [doc.path], f"Add task: {text}")

    output_result(
        {"file": doc.path, "column": column.title, "text": text, "line": line, "commit": commit},
        f"Added task to {column.title} on line {line}",
        args.json,
    )
    return 0


def task_delete(args) -> int:
    """Delete the task on a line."""
    doc = open_document(args.file, args.json)
    column, task = find_task(doc.board, args.line, args.json)

    doc.save(delete_task(doc.text, task))
    commit = maybe_commit(doc, args, [doc.path], f"Delete task: {task.text}")

    output_result(
        {"file": doc.path, "column": column.title, "text": task.text, "commit": commit},
        f"Deleted task '{task.text}' from {column.title}",
        args.json,
    )
    return 0


def task_move(args) -> int:
    """Move the task on a line to another column."""
    doc = open_document(args.file, args.json)
    board = doc.board
    source, task = find_task(board, args.line, args.json)
    target = find_column(board, args.column, args.json)

    doc.save(move_task(doc.text, task, target))
    commit = maybe_commit(doc, args, [doc.path], f"Move task to {target.title}: {task.text}")

    output_result(
        {"file": doc.path, "from": source.title, "to": target.title, "text": task.text, "commit": commit},
        f"Moved task '{task.text}' from {source.title} to {target.title}",
        args.json,
    )
    return 0


def task_link(args) -> int:
    """Create (or show) the detail file for the task on a line."""
    doc = open_document(args.file, args.json)
    column, task = find_task(doc.board, args.line, args.json)

    already_linked = task.linked_file_path is not None
    path, text = ensure_task_file(
        doc.text,
        task,
        column,
        doc.path,
        doc.storage,
        tasks_dir=doc.config["tasks_dir"],
    )
    doc.text = text

    commit = None
    if not already_linked:
        commit = maybe_commit(doc, args, [path, doc.path], f"Add task file: {task.text}")

    output_result(
        {"file": doc.path, "task_file": path, "created": not already_linked, "commit": commit},
        path,
        args.json,
    )
    return 0
