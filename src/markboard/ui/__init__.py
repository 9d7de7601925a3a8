"""Textual UI for markboard."""

from markboard.ui.app import BoardApp
from markboard.ui.board import BoardScreen, ColumnWidget, TaskWidget
from markboard.ui.preview import PreviewScreen
from markboard.ui.prompt import PromptScreen

__all__ = [
    "BoardApp",
    "BoardScreen",
    "ColumnWidget",
    "PreviewScreen",
    "PromptScreen",
    "TaskWidget",
]
