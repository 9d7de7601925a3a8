"""Tests for opening and saving documents."""

import pytest
from git import Repo

from markboard.document import open_document


@pytest.fixture
def repo_with_board(tmp_path):
    repo = Repo.init(tmp_path)
    notes = tmp_path / "notes"
    notes.mkdir()
    (notes / "todo.md").write_text("## Todo\n- [ ] a\n")
    repo.index.add(["notes/todo.md"])
    repo.index.commit("Initial commit")
    return tmp_path


def test_open_outside_repo_roots_at_folder(tmp_path):
    (tmp_path / "todo.md").write_text("- [ ] a\n")
    doc = open_document(tmp_path / "todo.md")
    assert doc.path == "todo.md"
    assert doc.storage.root == tmp_path.resolve()
    assert doc.text == "- [ ] a\n"
    assert doc.is_board


def test_open_in_repo_roots_at_working_tree(repo_with_board):
    doc = open_document(repo_with_board / "notes" / "todo.md")
    assert doc.path == "notes/todo.md"
    assert doc.storage.root == repo_with_board.resolve()
    assert [c.title for c in doc.board.columns] == ["Todo"]


def test_other_names_are_not_boards(tmp_path):
    (tmp_path / "README.md").write_text("# Hi\n")
    assert not open_document(tmp_path / "README.md").is_board


def test_board_names_from_config(repo_with_board):
    repo = Repo(repo_with_board)
    writer = repo.config_writer("repository")
    writer.set_value("markboard", "board-names", "readme.md")
    writer.release()
    (repo_with_board / "README.md").write_text("# Hi\n")

    assert open_document(repo_with_board / "README.md").is_board
    assert not open_document(repo_with_board / "notes" / "todo.md").is_board


def test_open_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        open_document(tmp_path / "missing.md")


def test_save_and_reload(tmp_path):
    (tmp_path / "todo.md").write_text("- [ ] a\n")
    doc = open_document(tmp_path / "todo.md")

    doc.save("- [ ] b\n")
    assert (tmp_path / "todo.md").read_text() == "- [ ] b\n"
    assert doc.text == "- [ ] b\n"

    (tmp_path / "todo.md").write_text("- [ ] c\n")
    assert doc.reload() == "- [ ] c\n"
    assert doc.board.columns[0].tasks[0].text == "c"


def test_commit(repo_with_board):
    doc = open_document(repo_with_board / "notes" / "todo.md")
    doc.save("## Todo\n- [ ] b\n")
    sha = doc.commit([doc.path], "Edit board")
    assert Repo(repo_with_board).head.commit.hexsha == sha
