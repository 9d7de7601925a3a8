"""Render markdown documents to HTML in a single forward pass.

Deliberately small: headings, paragraphs, bullet lists, pipe tables, fenced
code and single-line blockquotes. Anything that doesn't match degrades to a
paragraph, so parsing never fails.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

from markboard.highlight import highlight_code

_FENCE_LANG_RE = re.compile(r"^```\s*([a-zA-Z0-9_+-]+)?\s*$")
_HEADING_RE = re.compile(r"^(#{1,6})\s+(.+)$")
_QUOTE_RE = re.compile(r"^>\s?(.+)$")
_LIST_RE = re.compile(r"^[-*]\s+(.+)$")
_SEPARATOR_CELL_RE = re.compile(r"^:?-{3,}:?$")

_CODE_SPAN_RE = re.compile(r"`([^`]+)`")
_BOLD_RE = re.compile(r"\*\*([^*]+)\*\*")
_ITALIC_RE = re.compile(r"\*([^*]+)\*")
_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")

_TAG_RE = re.compile(r"<[^>]*>")
_SLUG_STRIP_RE = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE_RE = re.compile(r"\s+")

FENCE = "```"


def escape_html(value: str) -> str:
    """Escape the five HTML-significant characters."""
    return (
        value.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )


def render_inline(value: str) -> str:
    """Render inline spans: escape, then code, bold, italic and links.

    Substitutions run in that fixed order over the whole string, so spans
    that overlap (an asterisk inside a link label, say) combine however the
    order dictates.
    """
    text = escape_html(value)
    text = _CODE_SPAN_RE.sub(r"<code>\1</code>", text)
    text = _BOLD_RE.sub(r"<strong>\1</strong>", text)
    text = _ITALIC_RE.sub(r"<em>\1</em>", text)
    text = _LINK_RE.sub(r'<a href="\2" rel="noreferrer noopener" target="_blank">\1</a>', text)
    return text


def slugify_heading(html: str) -> str:
    """Base anchor slug for rendered heading html (may be empty)."""
    text = _TAG_RE.sub("", html.lower())
    text = _SLUG_STRIP_RE.sub("", text).strip()
    return _WHITESPACE_RE.sub("-", text)


class SlugAllocator:
    """Mint unique heading ids for one document.

    "intro", "intro", "intro" -> "intro", "intro-2", "intro-3"
    """

    def __init__(self) -> None:
        self._counts: dict[str, int] = {}

    def allocate(self, heading_html: str) -> str:
        base = slugify_heading(heading_html) or "section"
        count = self._counts.get(base, 0)
        self._counts[base] = count + 1
        return base if count == 0 else f"{base}-{count + 1}"


@dataclass(frozen=True)
class Heading:
    level: int
    text: str
    id: str


@dataclass(frozen=True)
class Paragraph:
    text: str


@dataclass(frozen=True)
class Blockquote:
    text: str


@dataclass(frozen=True)
class BulletList:
    items: tuple[str, ...]


@dataclass(frozen=True)
class Table:
    header_cells: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]


@dataclass(frozen=True)
class CodeBlock:
    language: str
    lines: tuple[str, ...]

    @property
    def code(self) -> str:
        return "\n".join(self.lines)


Block = Heading | Paragraph | Blockquote | BulletList | Table | CodeBlock


class Mode(Enum):
    """What kind of multi-line block the parser is inside."""

    NONE = "none"
    CODE = "code"
    LIST = "list"
    TABLE = "table"


def parse_table_cells(line: str) -> list[str] | None:
    """Split a pipe-delimited line into trimmed cells, or None without pipes."""
    if "|" not in line:
        return None
    value = line.strip()
    if value.startswith("|"):
        value = value[1:]
    if value.endswith("|"):
        value = value[:-1]
    return [cell.strip() for cell in value.split("|")]


def is_table_separator(line: str, expected_cells: int) -> bool:
    """True if line is a separator row with exactly expected_cells cells."""
    cells = parse_table_cells(line)
    if cells is None or len(cells) != expected_cells:
        return False
    return all(_SEPARATOR_CELL_RE.match(cell) for cell in cells)


@dataclass
class _Open:
    """The block currently being accumulated, tagged by mode."""

    mode: Mode = Mode.NONE
    language: str = ""
    items: list = field(default_factory=list)
    header: list[str] = field(default_factory=list)


def split_lines(text: str) -> list[str]:
    """Normalize CRLF and split into lines."""
    return text.replace("\r\n", "\n").split("\n")


def parse_blocks(text: str) -> list[Block]:
    """Parse markdown text into a flat list of blocks."""
    lines = split_lines(text)
    blocks: list[Block] = []
    slugs = SlugAllocator()
    current = _Open()

    def close() -> None:
        nonlocal current
        if current.mode is Mode.LIST:
            blocks.append(BulletList(tuple(current.items)))
        elif current.mode is Mode.TABLE:
            blocks.append(Table(tuple(current.header), tuple(current.items)))
        elif current.mode is Mode.CODE:
            blocks.append(CodeBlock(current.language, tuple(current.items)))
        current = _Open()

    index = 0
    while index < len(lines):
        line = lines[index]
        index += 1

        if line.startswith(FENCE):
            if current.mode is Mode.CODE:
                close()
            else:
                close()
                match = _FENCE_LANG_RE.match(line)
                language = (match.group(1) or "").lower() if match else ""
                current = _Open(mode=Mode.CODE, language=language)
            continue

        if current.mode is Mode.CODE:
            current.items.append(line)
            continue

        trimmed = line.strip()
        if not trimmed:
            close()
            continue

        if current.mode is not Mode.TABLE:
            header = parse_table_cells(trimmed)
            if header is not None and index < len(lines) and is_table_separator(lines[index].strip(), len(header)):
                close()
                current = _Open(mode=Mode.TABLE, header=header)
                index += 1
                continue

        if current.mode is Mode.TABLE:
            cells = parse_table_cells(trimmed)
            if cells is not None:
                width = len(current.header)
                current.items.append(tuple((cells + [""] * width)[:width]))
                continue
            close()

        match = _HEADING_RE.match(trimmed)
        if match:
            close()
            heading = match.group(2)
            blocks.append(Heading(len(match.group(1)), heading, slugs.allocate(render_inline(heading))))
            continue

        match = _QUOTE_RE.match(trimmed)
        if match:
            close()
            blocks.append(Blockquote(match.group(1)))
            continue

        match = _LIST_RE.match(trimmed)
        if match:
            if current.mode is not Mode.LIST:
                close()
                current = _Open(mode=Mode.LIST)
            current.items.append(match.group(1))
            continue

        close()
        blocks.append(Paragraph(trimmed))

    close()
    return blocks


def block_to_html(block: Block) -> list[str]:
    """Render one block to its html fragments."""
    if isinstance(block, Heading):
        return [f'<h{block.level} id="{block.id}">{render_inline(block.text)}</h{block.level}>']
    if isinstance(block, Paragraph):
        return [f"<p>{render_inline(block.text)}</p>"]
    if isinstance(block, Blockquote):
        return [f"<blockquote>{render_inline(block.text)}</blockquote>"]
    if isinstance(block, BulletList):
        return ["<ul>", *(f"<li>{render_inline(item)}</li>" for item in block.items), "</ul>"]
    if isinstance(block, Table):
        parts = ['<table class="md-table"><thead><tr>']
        parts.extend(f"<th>{render_inline(cell)}</th>" for cell in block.header_cells)
        parts.append("</tr></thead><tbody>")
        for row in block.rows:
            parts.append("<tr>")
            parts.extend(f"<td>{render_inline(cell)}</td>" for cell in row)
            parts.append("</tr>")
        parts.append("</tbody></table>")
        return parts
    lang_class = f"language-{escape_html(block.language)}" if block.language else ""
    code = highlight_code(block.code, block.language)
    return [f'<pre class="md-code-block"><code class="{lang_class}">{code}</code></pre>']


def render_html(text: str) -> str:
    """Render a markdown document to an HTML fragment."""
    parts: list[str] = []
    for block in parse_blocks(text):
        parts.extend(block_to_html(block))
    return "\n".join(parts)
