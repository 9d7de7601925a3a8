"""Handler for 'markboard board'."""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from markboard.board import TodoBoard
from markboard.cli._common import board_to_dict, open_document, output_json
from markboard.ui.constants import ICON_CHECKED, ICON_LINKED, ICON_UNCHECKED


def build_board_table(board: TodoBoard, title: str = "") -> Table:
    """Lay the board out as a rich table, one table column per board column."""
    table = Table(title=title or None, show_lines=False)
    for column in board.columns:
        table.add_column(f"{column.title} ({len(column.tasks)})")

    depth = max((len(c.tasks) for c in board.columns), default=0)
    for row in range(depth):
        cells = []
        for column in board.columns:
            if row >= len(column.tasks):
                cells.append("")
                continue
            task = column.tasks[row]
            icon = ICON_CHECKED if task.checked else ICON_UNCHECKED
            linked = f" {ICON_LINKED}" if task.linked_file_path else ""
            cells.append(f"{icon} {escape(task.text)}{linked} [dim]:{task.line_number}[/dim]")
        table.add_row(*cells)
    return table


def board_show(args) -> int:
    """Show columns and tasks."""
    doc = open_document(args.file, args.json)
    board = doc.board

    if args.json:
        output_json({"file": doc.path, **board_to_dict(board)})
    else:
        Console().print(build_board_table(board, title=doc.path))

    return 0
