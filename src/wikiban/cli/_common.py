"""Shared helpers for CLI command handlers."""

import asyncio
import json
import logging
import os
import sys

from wikiban.client import WikiClient, WikiError
from wikiban.config import SESSION_ENV, read_config
from wikiban.model.board import Board, Column, TaskNode, find_column, find_task, find_task_column
from wikiban.model.writer import TaskLineNotFound
from wikiban.sync import KanbanSession


def setup_logging(verbose: bool) -> None:
    """Log to stderr; debug level with --verbose."""
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
        level=logging.DEBUG if verbose else logging.WARNING,
    )


def build_client(args) -> WikiClient:
    """Create a wiki client from config, overridden by --url and --session.

    A token in the WIKIBAN_SESSION environment variable beats the
    configured one but not --session.
    """
    config = read_config()
    url = getattr(args, "url", None) or config["url"]
    token = getattr(args, "session", None) or os.environ.get(SESSION_ENV) or config["session"]
    return WikiClient(url, session_token=token or None, cookie_name=config["cookie_name"])


def run(args, action) -> int:
    """Open a session on args.doc, run action(session) and return its exit code.

    Wiki failures exit 1 with a message.
    """

    async def _main() -> int:
        client = build_client(args)
        try:
            session = KanbanSession(client, args.doc)
            await session.load()
            return await action(session)
        finally:
            await client.aclose()

    try:
        return asyncio.run(_main())
    except (WikiError, TaskLineNotFound, ValueError) as e:
        error(str(e), args.json)


def find_column_or_die(board: Board, title: str, json_mode: bool) -> Column:
    """Lookup column by title. Exit 1 listing available columns if not found."""
    column = find_column(board, title)
    if column is not None:
        return column
    available = [f"  {c.title}" for c in board.columns]
    msg = f"Column '{title}' not found. Available:\n" + "\n".join(available)
    error(msg, json_mode)


def find_task_or_die(board: Board, task_id: str, json_mode: bool) -> TaskNode:
    """Lookup task by ID. Exit 1 if not found."""
    node = find_task(board, task_id)
    if node is not None:
        return node
    error(f"Task '{task_id}' not found.", json_mode)


def confirm(prompt: str, assume_yes: bool):
    """Async confirm callable: asks on stdin unless --yes was given."""

    async def _confirm() -> bool:
        if assume_yes:
            return True
        answer = input(f"{prompt} [y/N] ")
        return answer.strip().lower() in ("y", "yes")

    return _confirm


def task_dict(board: Board, node: TaskNode) -> dict:
    """Describe a task for JSON output."""
    column = find_task_column(board, node)
    return {
        "id": node.task_id,
        "text": node.text,
        "markdown": node.original_markdown,
        "checked": node.checked,
        "level": node.indent_level,
        "column": column.title if column else None,
    }


def output_json(data: dict | list) -> None:
    """Write JSON to stdout."""
    print(json.dumps(data, indent=2))


def output_result(data: dict, text: str, json_mode: bool) -> None:
    """Output mutation result as JSON or plain text."""
    if json_mode:
        output_json(data)
    else:
        print(text)


def error(message: str, json_mode: bool) -> None:
    """Print error to stderr and exit 1."""
    if json_mode:
        print(json.dumps({"error": message}), file=sys.stderr)
    else:
        print(f"error: {message}", file=sys.stderr)
    sys.exit(1)
