"""Tests for 'markboard board' and 'markboard render'."""

import json
from argparse import Namespace

import pytest

from markboard.board import parse_board
from markboard.cli.board import board_show, build_board_table
from markboard.cli.render import render


def test_board_show(board_file, capsys):
    assert board_show(Namespace(file=str(board_file), json=False)) == 0

    out = capsys.readouterr().out
    assert "Todo (2)" in out
    assert "Done (1)" in out
    assert "one" in out


def test_board_show_json(board_file, capsys):
    assert board_show(Namespace(file=str(board_file), json=True)) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["file"] == "todo.md"
    assert [c["title"] for c in data["columns"]] == ["Board", "Todo", "Done"]
    assert data["columns"][1]["heading_line"] == 3
    assert [t["line"] for t in data["columns"][1]["tasks"]] == [4, 5]


def test_board_show_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        board_show(Namespace(file=str(tmp_path / "missing.md"), json=False))
    assert exc.value.code == 1
    assert "cannot read" in capsys.readouterr().err


def test_build_board_table_columns():
    table = build_board_table(parse_board("## A\n- [ ] x\n- [ ] y\n## B\n"))
    assert [c.header for c in table.columns] == ["A (2)", "B (0)"]
    assert table.row_count == 2


def test_render_to_stdout(board_file, capsys):
    assert render(Namespace(file=str(board_file), output=None, json=False)) == 0

    out = capsys.readouterr().out
    assert out.startswith('<h1 id="board">Board</h1>\n<h2 id="todo">Todo</h2>\n<ul>\n<li>[ ] one</li>')


def test_render_to_file(board_file, tmp_path, capsys):
    target = tmp_path / "out.html"
    assert render(Namespace(file=str(board_file), output=str(target), json=False)) == 0

    assert capsys.readouterr().out == ""
    assert '<h2 id="done">Done</h2>' in target.read_text()


def test_render_json(board_file, capsys):
    assert render(Namespace(file=str(board_file), output=None, json=True)) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["html"].startswith('<h1 id="board">')
