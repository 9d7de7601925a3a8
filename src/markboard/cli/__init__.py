"""CLI argument parser and dispatch for markboard."""

import argparse

from markboard.cli.board import board_show
from markboard.cli.config import config_set, config_show
from markboard.cli.render import render
from markboard.cli.task import task_add, task_delete, task_link, task_list, task_move


def _common_parser(default) -> argparse.ArgumentParser:
    """Options accepted before or after the noun.

    Subcommand copies use SUPPRESS so they don't reset a flag that was
    given before the noun.
    """
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--json", action="store_true", default=default, help="Machine-readable JSON output")
    common.add_argument("-v", "--verbose", action="store_true", default=default, help="Debug logging on stderr")
    return common


def build_parser() -> argparse.ArgumentParser:
    """Build the full CLI argument parser."""
    common = _common_parser(argparse.SUPPRESS)

    committing = argparse.ArgumentParser(add_help=False)
    committing.add_argument("--commit", action="store_true", help="Commit changed files to git")

    parser = argparse.ArgumentParser(
        prog="markboard",
        description="Markdown documents as HTML and kanban boards",
        parents=[_common_parser(False)],
    )

    nouns = parser.add_subparsers(dest="noun")

    # --- render ---
    render_p = nouns.add_parser("render", help="Render markdown to HTML", parents=[common])
    render_p.add_argument("file", help="Markdown file")
    render_p.add_argument("-o", "--output", help="Write HTML to this file instead of stdout")
    render_p.set_defaults(func=render)

    # --- board ---
    board_p = nouns.add_parser("board", help="Show a file as a task board", parents=[common])
    board_p.add_argument("file", help="Markdown file")
    board_p.set_defaults(func=board_show)

    # --- task ---
    task_p = nouns.add_parser("task", help="Task operations", parents=[common])
    task_verbs = task_p.add_subparsers(dest="verb")

    task_list_p = task_verbs.add_parser("list", help="List tasks", parents=[common])
    task_list_p.add_argument("file", help="Markdown file")
    task_list_p.add_argument("--column", dest="column", help="Filter by column title")
    task_list_p.set_defaults(func=task_list)

    task_add_p = task_verbs.add_parser("add", help="Add a task", parents=[common, committing])
    task_add_p.add_argument("file", help="Markdown file")
    task_add_p.add_argument("text", help="Task text")
    task_add_p.add_argument("--column", dest="column", help="Target column title (default: first)")
    task_add_p.set_defaults(func=task_add)

    task_delete_p = task_verbs.add_parser("delete", help="Delete a task", parents=[common, committing])
    task_delete_p.add_argument("file", help="Markdown file")
    task_delete_p.add_argument("line", type=int, help="Line number of the task")
    task_delete_p.set_defaults(func=task_delete)

    task_move_p = task_verbs.add_parser("move", help="Move a task", parents=[common, committing])
    task_move_p.add_argument("file", help="Markdown file")
    task_move_p.add_argument("line", type=int, help="Line number of the task")
    task_move_p.add_argument("--column", dest="column", required=True, help="Target column title")
    task_move_p.set_defaults(func=task_move)

    task_link_p = task_verbs.add_parser("link", help="Create the task's detail file", parents=[common, committing])
    task_link_p.add_argument("file", help="Markdown file")
    task_link_p.add_argument("line", type=int, help="Line number of the task")
    task_link_p.set_defaults(func=task_link)

    # --- config ---
    config_p = nouns.add_parser("config", help="Repository settings", parents=[common])
    config_verbs = config_p.add_subparsers(dest="verb")

    config_show_p = config_verbs.add_parser("show", help="Show effective settings", parents=[common])
    config_show_p.add_argument("--repo", default=".", help="Path to git repository (default: .)")
    config_show_p.set_defaults(func=config_show)

    config_set_p = config_verbs.add_parser("set", help="Set a setting in git config", parents=[common])
    config_set_p.add_argument("key", help="board-names, tasks-dir or auto-commit")
    config_set_p.add_argument("value", help="New value")
    config_set_p.add_argument("--repo", default=".", help="Path to git repository (default: .)")
    config_set_p.set_defaults(func=config_set)

    return parser
