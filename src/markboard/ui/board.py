"""Board screen showing one column per heading and one card per task."""

import logging

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Footer, Rule, Static

from markboard.board import Column, Task
from markboard.document import Document
from markboard.edit import add_task, delete_task, document_lines, find_insertion_index, move_task
from markboard.taskfile import TASKS_DIR, ensure_task_file
from markboard.ui.constants import ICON_CHECKED, ICON_LINKED, ICON_UNCHECKED
from markboard.ui.preview import PreviewScreen
from markboard.ui.prompt import PromptScreen

logger = logging.getLogger(__name__)


def task_label(task: Task) -> Text:
    """Card text: checkbox, task text, link marker and line number."""
    return Text.assemble(
        ICON_CHECKED if task.checked else ICON_UNCHECKED,
        " ",
        task.text,
        f" {ICON_LINKED}" if task.linked_file_path else "",
        "\n",
        (f"Line {task.line_number}", "dim"),
    )


class TaskWidget(Static, can_focus=True):
    """A single task card."""

    DEFAULT_CSS = """
    TaskWidget {
        width: 100%;
        height: auto;
        padding: 0 1;
        margin-bottom: 1;
        background: $surface;
    }
    TaskWidget:focus {
        background: $primary;
    }
    TaskWidget.checked {
        color: $text-muted;
    }
    """

    def __init__(self, task: Task, column: Column) -> None:
        super().__init__(task_label(task))
        self.task_item = task
        self.column_model = column
        if task.checked:
            self.add_class("checked")


class ColumnWidget(Vertical):
    """A single column on the board."""

    DEFAULT_CSS = """
    ColumnWidget {
        width: 1fr;
        height: 100%;
        min-width: 25;
        padding: 0 1;
        border-right: tall $surface-lighten-1;
    }
    ColumnWidget > .column-title {
        width: 100%;
        text-align: center;
        text-style: bold;
    }
    ColumnWidget > Rule.-horizontal {
        margin: 0;
    }
    ColumnWidget > .empty {
        color: $text-muted;
    }
    """

    def __init__(self, column: Column, index: int) -> None:
        super().__init__()
        self.column_model = column
        self.column_index = index

    def compose(self) -> ComposeResult:
        yield Static(self.column_model.title, classes="column-title", markup=False)
        yield Rule()
        if not self.column_model.tasks:
            yield Static("No tasks", classes="empty")
        for task in self.column_model.tasks:
            yield TaskWidget(task, self.column_model)


class BoardScreen(Screen):
    """Kanban view of a document. Every action rewrites the file and recomposes."""

    BINDINGS = [
        ("a", "add_task", "Add"),
        Binding("left_square_bracket", "move_task(-1)", "Move left", key_display="["),
        Binding("right_square_bracket", "move_task(1)", "Move right", key_display="]"),
        ("delete", "delete_task", "Delete"),
        ("t", "link_task", "Task file"),
        ("o", "open_task_file", "Open"),
        ("p", "preview", "Preview"),
        ("r", "reload", "Reload"),
        Binding("left", "focus_column(-1)", show=False),
        Binding("right", "focus_column(1)", show=False),
        Binding("up", "app.focus_previous", show=False),
        Binding("down", "app.focus_next", show=False),
    ]

    def __init__(self, document: Document) -> None:
        super().__init__()
        self.document = document

    def compose(self) -> ComposeResult:
        board = self.document.board
        with Horizontal(id="columns"):
            for index, column in enumerate(board.columns):
                yield ColumnWidget(column, index)
        yield Footer()

    def on_mount(self) -> None:
        self.sub_title = self.document.path
        self.call_after_refresh(self.focus_task, 0)

    # -- focus --

    def focused_task(self) -> TaskWidget | None:
        return self.focused if isinstance(self.focused, TaskWidget) else None

    def focused_column_index(self) -> int:
        """Index of the column holding focus, or 0."""
        widget = self.focused
        while widget is not None:
            if isinstance(widget, ColumnWidget):
                return widget.column_index
            widget = widget.parent
        return 0

    def focus_task(self, column_index: int, line_index: int | None = None, last: bool = False) -> None:
        """Focus a task card: by line, else the column's last/first, else anything."""
        columns = list(self.query(ColumnWidget))
        if not columns:
            return
        column = columns[max(0, min(column_index, len(columns) - 1))]
        cards = list(column.query(TaskWidget))
        for card in cards:
            if card.task_item.line_index == line_index:
                card.focus()
                return
        if cards:
            (cards[-1] if last else cards[0]).focus()
            return
        everything = list(self.query(TaskWidget))
        if everything:
            everything[0].focus()

    def action_focus_column(self, delta: int) -> None:
        self.focus_task(self.focused_column_index() + delta)

    # -- persistence --

    async def refresh_board(self, column_index: int, line_index: int | None = None, last: bool = False) -> None:
        await self.recompose()
        self.focus_task(column_index, line_index, last)

    def commit(self, paths: list[str], message: str) -> None:
        if not self.document.config.get("auto_commit"):
            return
        try:
            self.document.commit(paths, message)
        except Exception as e:
            logger.warning("commit failed: %s", e)
            self.notify(f"Commit failed: {e}", severity="warning")

    def save(self, text: str, message: str) -> bool:
        """Write new board text. False (and a notification) on failure."""
        try:
            self.document.save(text)
        except OSError as e:
            self.notify(f"Save failed: {e}", severity="error")
            return False
        self.commit([self.document.path], message)
        return True

    # -- actions --

    def action_add_task(self) -> None:
        columns = self.document.board.columns
        column_index = min(self.focused_column_index(), len(columns) - 1)
        column = columns[column_index]

        async def add(text: str | None) -> None:
            if not text:
                return
            line_index = find_insertion_index(document_lines(self.document.text), column)
            if self.save(add_task(self.document.text, column, text), f"Add task: {text}"):
                await self.refresh_board(column_index, line_index)

        self.app.push_screen(PromptScreen(f'New task for "{column.title}":', placeholder="task"), add)

    async def action_move_task(self, delta: int) -> None:
        card = self.focused_task()
        if card is None:
            return
        columns = self.document.board.columns
        target_index = self.focused_column_index() + delta
        if not 0 <= target_index < len(columns):
            return
        task, target = card.task_item, columns[target_index]
        if self.save(move_task(self.document.text, task, target), f"Move task to {target.title}: {task.text}"):
            await self.refresh_board(target_index, last=True)

    async def action_delete_task(self) -> None:
        card = self.focused_task()
        if card is None:
            return
        task = card.task_item
        if self.save(delete_task(self.document.text, task), f"Delete task: {task.text}"):
            await self.refresh_board(self.focused_column_index(), task.line_index)

    async def action_link_task(self) -> None:
        card = self.focused_task()
        if card is None:
            return
        task, column = card.task_item, card.column_model
        column_index = self.focused_column_index()
        doc = self.document
        try:
            path, text = ensure_task_file(
                doc.text,
                task,
                column,
                doc.path,
                doc.storage,
                tasks_dir=doc.config.get("tasks_dir", TASKS_DIR),
            )
        except OSError as e:
            self.notify(f"Could not create task file: {e}", severity="error")
            return
        if text != doc.text:
            doc.text = text
            self.commit([path, doc.path], f"Add task file: {task.text}")
            await self.refresh_board(column_index, task.line_index)
        self.notify(path, title="Task file")

    def action_open_task_file(self) -> None:
        card = self.focused_task()
        if card is None:
            return
        path = card.task_item.linked_file_path
        if not path:
            self.notify("Task has no task file (press t to create one)", severity="warning")
            return
        try:
            text = self.document.storage.read_file(path)
        except OSError as e:
            self.notify(f"Could not open {path}: {e}", severity="error")
            return
        self.app.push_screen(PreviewScreen(text, title=path))

    def action_preview(self) -> None:
        self.app.push_screen(PreviewScreen(self.document.text, title=self.document.path))

    async def action_reload(self) -> None:
        try:
            self.document.reload()
        except OSError as e:
            self.notify(f"Reload failed: {e}", severity="error")
            return
        await self.refresh_board(self.focused_column_index())
