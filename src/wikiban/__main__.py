"""Entry point for wikiban CLI."""

import argparse
import sys

NOUNS = {"board", "task", "column", "config", "web"}


def _tui_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="wikiban", description="Kanban boards in wiki pages")
    parser.add_argument("doc", help="Wiki page path")
    parser.add_argument("--url", help="Wiki base URL (default: git config wikiban.url)")
    parser.add_argument("--session", help="Session token (default: git config wikiban.session)")
    return parser.parse_args(argv)


def _first_positional(argv: list[str]) -> str | None:
    """First argument that is neither an option nor an option value."""
    skip = False
    for arg in argv:
        if skip:
            skip = False
        elif arg in ("--url", "--session"):
            skip = True
        elif not arg.startswith("-"):
            return arg
    return None


def main():
    # First positional not a noun = TUI mode
    first = _first_positional(sys.argv[1:])
    if first is not None and first not in NOUNS:
        from wikiban.cli._common import build_client
        from wikiban.ui import WikibanApp

        args = _tui_args(sys.argv[1:])
        app = WikibanApp(build_client(args), args.doc)
        app.run()
        return

    from wikiban.cli import build_parser
    from wikiban.cli._common import setup_logging

    parser = build_parser()
    args = parser.parse_args()

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    setup_logging(args.verbose)
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
