"""Main Textual application for markboard."""

from pathlib import Path

from textual.app import App

from markboard.document import Document, open_document
from markboard.ui.board import BoardScreen
from markboard.ui.preview import PreviewScreen


class BoardApp(App):
    """Markdown file as a kanban board, with a rendered preview."""

    CSS = """
    Tooltip {
        padding: 0 1;
        margin: 0;
    }
    """

    TITLE = "markboard"
    BINDINGS = [("ctrl+q", "quit", "Quit")]

    def __init__(self, path: Path):
        super().__init__()
        self.path = path
        self.document: Document | None = None

    def on_mount(self) -> None:
        try:
            self.document = open_document(self.path)
        except OSError as e:
            self.exit(return_code=1, message=f"error: cannot read {self.path}: {e.strerror or e}")
            return

        self.push_screen(BoardScreen(self.document))
        if not self.document.is_board:
            self.push_screen(PreviewScreen(self.document.text, title=self.document.path))
