"""Tests for task detail files."""

import pytest

from markboard.board import parse_board
from markboard.storage import LocalStorage
from markboard.taskfile import (
    ensure_task_file,
    slugify_task_file_name,
    task_file_template,
    tasks_dir_for,
    to_base36,
)


class MemoryStorage:
    """In-memory FileStorage that records every write."""

    def __init__(self, files=None, folders=()):
        self.files = dict(files or {})
        self.folders = set(folders)
        self.writes = []
        self.fail_on = set()

    def read_file(self, path):
        return self.files[path]

    def write_file(self, path, text):
        if path in self.fail_on:
            raise OSError(f"disk full: {path}")
        self.writes.append(path)
        self.files[path] = text

    def create_folder(self, path):
        if path in self.folders:
            raise FileExistsError(path)
        self.folders.add(path)


BOARD = "## Doing\n- [ ] Write docs\n"


def doing_task(text=BOARD):
    board = parse_board(text)
    column = board.find_column("Doing")
    return column, column.tasks[0]


@pytest.fixture
def storage():
    return MemoryStorage(files={"notes/todo.md": BOARD})


# --- naming ---


def test_slugify_task_file_name():
    assert slugify_task_file_name("Fix the Login Bug!") == "fix-the-login-bug"
    assert slugify_task_file_name("snake_case here") == "snakecase-here"
    assert slugify_task_file_name("  spaced   out  ") == "spaced-out"


def test_slugify_task_file_name_keeps_unicode_letters():
    assert slugify_task_file_name("Café Ünïcode") == "café-ünïcode"


def test_slugify_task_file_name_fallback():
    assert slugify_task_file_name("!!!") == "task"
    assert slugify_task_file_name("") == "task"


def test_to_base36():
    assert to_base36(0) == "0"
    assert to_base36(35) == "z"
    assert to_base36(36) == "10"
    assert to_base36(1000) == "rs"


def test_tasks_dir_for():
    assert tasks_dir_for("todo.md") == ".tasks"
    assert tasks_dir_for("projects/a/TODO.md") == "projects/a/.tasks"
    assert tasks_dir_for("todo.md", "details") == "details"


def test_task_file_template():
    column, task = doing_task()
    assert task_file_template(task, column, "notes/todo.md") == (
        "# Write docs\n"
        "\n"
        "- TODO file: notes/todo.md\n"
        "- Column: Doing\n"
        "- Origin line: 2\n"
        "\n"
        "## Notes\n"
        "\n"
        "## Progress\n"
        "\n"
        "## Next Steps\n"
    )


# --- ensure_task_file ---


def test_creates_file_and_links_task(storage):
    column, task = doing_task()
    path, text = ensure_task_file(BOARD, task, column, "notes/todo.md", storage, clock=lambda: 1.0)

    assert path == "notes/.tasks/write-docs-rs.md"
    assert text == "## Doing\n- [ ] Write docs <!-- task-file: notes/.tasks/write-docs-rs.md -->\n"
    assert storage.folders == {"notes/.tasks"}
    assert storage.writes == [path, "notes/todo.md"]
    assert storage.files[path].startswith("# Write docs\n")
    assert storage.files["notes/todo.md"] == text


def test_linked_task_parses_back(storage):
    column, task = doing_task()
    path, text = ensure_task_file(BOARD, task, column, "notes/todo.md", storage, clock=lambda: 1.0)
    assert parse_board(text).columns[0].tasks[0].linked_file_path == path


def test_existing_folder_is_fine():
    storage = MemoryStorage(folders={".tasks"})
    column, task = doing_task()
    path, _ = ensure_task_file(BOARD, task, column, "todo.md", storage, clock=lambda: 1.0)
    assert path == ".tasks/write-docs-rs.md"


def test_custom_tasks_dir(storage):
    column, task = doing_task()
    path, _ = ensure_task_file(BOARD, task, column, "notes/todo.md", storage, tasks_dir="details", clock=lambda: 1.0)
    assert path == "notes/details/write-docs-rs.md"


def test_already_linked_task_writes_nothing():
    text = "## Doing\n- [ ] Write docs <!-- task-file: .tasks/old.md -->\n"
    storage = MemoryStorage()
    column, task = doing_task(text)

    assert ensure_task_file(text, task, column, "todo.md", storage) == (".tasks/old.md", text)
    assert storage.writes == []
    assert storage.folders == set()


def test_other_folder_errors_propagate(storage):
    def refuse(path):
        raise PermissionError(path)

    storage.create_folder = refuse
    column, task = doing_task()
    with pytest.raises(PermissionError):
        ensure_task_file(BOARD, task, column, "notes/todo.md", storage)
    assert storage.writes == []


def test_board_write_failure_leaves_orphan(storage):
    """The detail file stays behind unlinked, and a retry makes another."""
    storage.fail_on.add("notes/todo.md")
    column, task = doing_task()

    with pytest.raises(OSError):
        ensure_task_file(BOARD, task, column, "notes/todo.md", storage, clock=lambda: 1.0)
    assert storage.files["notes/todo.md"] == BOARD
    assert "notes/.tasks/write-docs-rs.md" in storage.files

    storage.fail_on.clear()
    path, _ = ensure_task_file(BOARD, task, column, "notes/todo.md", storage, clock=lambda: 2.0)
    assert path == "notes/.tasks/write-docs-1jk.md"
    assert "notes/.tasks/write-docs-rs.md" in storage.files


def test_ensure_task_file_on_disk(tmp_path):
    (tmp_path / "todo.md").write_text(BOARD)
    storage = LocalStorage(tmp_path)
    column, task = doing_task()

    path, text = ensure_task_file(BOARD, task, column, "todo.md", storage, clock=lambda: 1.0)

    assert (tmp_path / path).read_text().startswith("# Write docs")
    assert (tmp_path / "todo.md").read_text() == text
