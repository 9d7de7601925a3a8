"""Project a markdown document onto a kanban board.

Headings are columns, checkbox lines are tasks. Line indexes are only valid
for the text they were parsed from; re-parse after every edit.
"""

import re
from dataclasses import dataclass, field

from markboard.markdown import split_lines

HEADING_RE = re.compile(r"^(#{1,6})\s+(.+?)\s*$")

# Groups: (1) indent, (2) checkbox char, (3) task text, (4) linked file path
TASK_LINE_RE = re.compile(r"^(\s*)-\s+\[( |x|X)\]\s+(.*?)(?:\s+<!--\s*task-file:\s*([^\s][^>]*)\s*-->)?\s*$")

DEFAULT_COLUMN_ID = "default"
DEFAULT_COLUMN_TITLE = "Tasks"


@dataclass
class Task:
    """A checkbox line."""

    line_index: int
    indent: str = ""
    checked: bool = False
    text: str = ""
    linked_file_path: str | None = None

    @property
    def id(self) -> str:
        return f"t:{self.line_index}"

    @property
    def line_number(self) -> int:
        """1-based line number, as shown to users."""
        return self.line_index + 1


@dataclass
class Column:
    """Tasks grouped under a heading, or the implicit leading group."""

    id: str
    title: str
    heading_line_index: int | None = None
    tasks: list[Task] = field(default_factory=list)


@dataclass
class TodoBoard:
    """All visible columns, in document order."""

    columns: list[Column] = field(default_factory=list)

    def find_column(self, title: str) -> Column | None:
        """First column whose title matches, ignoring surrounding whitespace."""
        for column in self.columns:
            if column.title == title.strip():
                return column
        return None

    def find_task(self, line_index: int) -> tuple[Column, Task] | None:
        """The column and task on line_index, if any."""
        for column in self.columns:
            for task in column.tasks:
                if task.line_index == line_index:
                    return column, task
        return None


def is_board_file(path: str, names) -> bool:
    """True if path's file name is one of names (case-insensitive)."""
    base = [part for part in str(path).replace("\\", "/").split("/") if part]
    return bool(base) and base[-1].lower() in {name.lower() for name in names}


def match_heading(line: str) -> str | None:
    """Heading title of a line, or None if it isn't a heading."""
    match = HEADING_RE.match(line.strip())
    return match.group(2).strip() if match else None


def parse_task_line(line: str, line_index: int = 0) -> Task | None:
    """Parse a single task line, or None if it isn't one."""
    match = TASK_LINE_RE.match(line)
    if not match:
        return None
    linked = (match.group(4) or "").strip()
    return Task(
        line_index=line_index,
        indent=match.group(1) or "",
        checked=match.group(2).lower() == "x",
        text=(match.group(3) or "").strip(),
        linked_file_path=linked or None,
    )


def parse_board(text: str) -> TodoBoard:
    """Group task lines into columns keyed by the heading above them."""
    current = Column(id=DEFAULT_COLUMN_ID, title=DEFAULT_COLUMN_TITLE)
    columns = [current]

    for index, line in enumerate(split_lines(text)):
        title = match_heading(line)
        if title is not None:
            current = Column(id=f"h:{index}", title=title, heading_line_index=index)
            columns.append(current)
            continue

        task = parse_task_line(line, index)
        if task is not None:
            current.tasks.append(task)

    if any(column.heading_line_index is not None for column in columns):
        columns = [c for c in columns if c.heading_line_index is not None or c.tasks]

    return TodoBoard(columns=columns)
