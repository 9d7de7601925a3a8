"""Tests for 'markboard config' commands."""

import json
from argparse import Namespace

import pytest
from git import Repo

from markboard.cli.config import config_set, config_show
from markboard.git import read_config


@pytest.fixture
def repo_path(repo_board):
    return repo_board.parent.parent


def test_config_show_defaults(repo_path, capsys):
    assert config_show(Namespace(repo=str(repo_path), json=False)) == 0

    out = capsys.readouterr().out
    assert "board-names = todo.md,to-do.md" in out
    assert "tasks-dir = .tasks" in out
    assert "auto-commit = false" in out


def test_config_show_json_outside_repo(tmp_path, capsys):
    assert config_show(Namespace(repo=str(tmp_path), json=True)) == 0

    data = json.loads(capsys.readouterr().out)
    assert data == {"board_names": ["todo.md", "to-do.md"], "tasks_dir": ".tasks", "auto_commit": False}


def test_config_set_writes_git_config(repo_path, capsys):
    assert config_set(Namespace(repo=str(repo_path), key="tasks-dir", value="details", json=False)) == 0

    assert capsys.readouterr().out.strip() == "tasks-dir = details"
    reader = Repo(repo_path).config_reader("repository")
    assert reader.get_value("markboard", "tasks-dir") == "details"


def test_config_set_accepts_python_style_key(repo_path, capsys):
    assert config_set(Namespace(repo=str(repo_path), key="auto_commit", value="yes", json=True)) == 0

    assert json.loads(capsys.readouterr().out) == {"key": "auto-commit", "value": True}
    assert read_config(repo_path)["auto_commit"] is True


def test_config_set_board_names(repo_path):
    config_set(Namespace(repo=str(repo_path), key="board-names", value="Board.md,todo.md", json=False))
    assert read_config(repo_path)["board_names"] == ["board.md", "todo.md"]


def test_config_set_unknown_key(repo_path, capsys):
    with pytest.raises(SystemExit) as exc:
        config_set(Namespace(repo=str(repo_path), key="colour", value="red", json=False))
    assert exc.value.code == 1
    assert "Unknown key 'colour'" in capsys.readouterr().err


def test_config_set_bad_bool(repo_path, capsys):
    with pytest.raises(SystemExit):
        config_set(Namespace(repo=str(repo_path), key="auto-commit", value="sometimes", json=False))
    assert "takes true or false" in capsys.readouterr().err


def test_config_set_outside_repo(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        config_set(Namespace(repo=str(tmp_path), key="tasks-dir", value="x", json=True))
    assert exc.value.code == 1
    assert "not inside a git repository" in json.loads(capsys.readouterr().err)["error"]
