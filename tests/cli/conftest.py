"""Shared fixtures for CLI tests."""

import pytest
from git import Repo

BOARD = (
    "# Board\n"
    "\n"
    "## Todo\n"
    "- [ ] one\n"
    "- [ ] two\n"
    "\n"
    "## Done\n"
    "- [x] shipped\n"
)


@pytest.fixture
def board_file(tmp_path):
    """A todo.md outside any git repo (3 columns, 3 tasks)."""
    path = tmp_path / "todo.md"
    path.write_text(BOARD)
    return path


@pytest.fixture
def repo_board(tmp_path):
    """A git repo with the same board committed under notes/."""
    repo = Repo.init(tmp_path)
    notes = tmp_path / "notes"
    notes.mkdir()
    (notes / "todo.md").write_text(BOARD)
    repo.index.add(["notes/todo.md"])
    repo.index.commit("Initial commit")
    return notes / "todo.md"
