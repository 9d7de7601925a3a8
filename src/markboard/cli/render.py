"""Handler for 'markboard render'."""

import sys
from pathlib import Path

from markboard.cli._common import open_document, output_json
from markboard.markdown import render_html


def render(args) -> int:
    """Render a markdown file to HTML."""
    doc = open_document(args.file, args.json)
    html = render_html(doc.text)

    if args.output:
        Path(args.output).write_text(html + "\n", encoding="utf-8")
        if args.json:
            output_json({"file": doc.path, "output": args.output})
        return 0

    if args.json:
        output_json({"file": doc.path, "html": html})
    else:
        sys.stdout.write(html + "\n")

    return 0
