"""Syntax highlighting for fenced code blocks."""

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

TOKEN_CLASS_PREFIX = "tok-"

# Fences without a language, or with one pygments doesn't know
DEFAULT_LANGUAGE = "javascript"

_FORMATTER = HtmlFormatter(nowrap=True, classprefix=TOKEN_CLASS_PREFIX)


def highlight_code(code: str, language: str) -> str:
    """Return escaped, highlighted html for code.

    Spans carry tok- prefixed pygments classes.
    """
    try:
        lexer = get_lexer_by_name(language or DEFAULT_LANGUAGE, stripnl=False, ensurenl=False)
    except ClassNotFound:
        lexer = get_lexer_by_name(DEFAULT_LANGUAGE, stripnl=False, ensurenl=False)
    return highlight(code, lexer, _FORMATTER)
