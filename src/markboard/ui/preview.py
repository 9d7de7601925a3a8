"""Rendered document view."""

from rich.console import RenderableType
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.screen import Screen
from textual.widgets import Footer, Static

from markboard.markdown import Block, Blockquote, BulletList, CodeBlock, Heading, Paragraph, parse_blocks

HEADING_STYLES = {1: "bold underline", 2: "bold", 3: "bold italic"}


def block_to_renderable(block: Block) -> RenderableType:
    """Rich renderable for one parsed block."""
    if isinstance(block, Heading):
        return Text(block.text, style=HEADING_STYLES.get(block.level, "italic"))
    if isinstance(block, Paragraph):
        return Text(block.text)
    if isinstance(block, Blockquote):
        return Text.assemble(("▌ ", "dim"), (block.text, "italic"))
    if isinstance(block, BulletList):
        return Text("\n".join(f"• {item}" for item in block.items))
    if isinstance(block, CodeBlock):
        return Syntax(block.code, block.language or "text", word_wrap=True)
    table = Table(*block.header_cells)
    for row in block.rows:
        table.add_row(*row)
    return table


class PreviewScreen(Screen):
    """Read-only rendering of a markdown document."""

    DEFAULT_CSS = """
    PreviewScreen VerticalScroll {
        padding: 1 2;
    }
    PreviewScreen .block {
        margin-bottom: 1;
    }
    """

    BINDINGS = [
        Binding("escape", "close", "Close"),
        Binding("p", "close", "Board", show=False),
    ]

    def __init__(self, text: str, title: str = "") -> None:
        super().__init__()
        self.text = text
        self.sub_title = title

    def compose(self) -> ComposeResult:
        with VerticalScroll(id="preview"):
            for block in parse_blocks(self.text):
                yield Static(block_to_renderable(block), classes="block")
        yield Footer()

    def action_close(self) -> None:
        self.dismiss()
