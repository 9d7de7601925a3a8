"""Entry point for markboard CLI."""

import sys
from pathlib import Path

NOUNS = {"render", "board", "task", "config"}


def main():
    # A file argument with no noun = TUI mode
    if len(sys.argv) >= 2 and sys.argv[1] not in NOUNS and not sys.argv[1].startswith("-"):
        from markboard.ui import BoardApp

        app = BoardApp(Path(sys.argv[1]).resolve())
        app.run()
        return

    from markboard.cli import build_parser
    from markboard.cli._common import configure_logging

    parser = build_parser()
    args = parser.parse_args()

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    configure_logging(args.verbose)
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
