"""Handlers for 'wikiban web' command."""

import os
import shlex
import shutil
import sys

from textual_serve.server import Server

from wikiban.config import SESSION_ENV


def serve_command(args) -> str:
    """Command line the served app runs.

    The session token is not part of it: it reaches the app through
    the environment, which the served process inherits.
    """
    parts = [shutil.which("wikiban") or "wikiban"]
    if args.url:
        parts += ["--url", args.url]
    parts.append(args.doc)
    return shlex.join(parts)


def web(args) -> int:
    """Serve the board UI in a browser."""
    if shutil.which("wikiban") is None:
        print("error: wikiban not found on PATH", file=sys.stderr)
        return 1

    if args.session:
        os.environ[SESSION_ENV] = args.session
    server = Server(serve_command(args), host=args.host, port=args.port, title=f"wikiban: {args.doc}")

    print(f"serving {args.doc} at http://{args.host}:{args.port}")
    server.serve()
    return 0
