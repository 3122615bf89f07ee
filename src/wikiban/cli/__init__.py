"""CLI argument parser and dispatch for wikiban."""

import argparse

from wikiban.cli.board import board_get, board_stamp, board_summary
from wikiban.cli.column import column_add, column_delete, column_list, column_move, column_rename
from wikiban.cli.config import config_get, config_set
from wikiban.cli.task import task_add, task_delete, task_list, task_move, task_rename, task_toggle
from wikiban.cli.web import web as web_cmd


def build_parser() -> argparse.ArgumentParser:
    """Build the full CLI argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--url", help="Wiki base URL (default: git config wikiban.url)")
    common.add_argument("--session", help="Session token (default: git config wikiban.session)")
    common.add_argument("--json", action="store_true", help="Machine-readable JSON output")
    common.add_argument("-v", "--verbose", action="store_true", help="Log requests to stderr")

    parser = argparse.ArgumentParser(
        prog="wikiban",
        description="Kanban boards in wiki pages",
        parents=[common],
    )

    nouns = parser.add_subparsers(dest="noun")

    # --- board ---
    board_p = nouns.add_parser("board", help="Board operations", parents=[common])
    board_verbs = board_p.add_subparsers(dest="verb")

    board_summary_p = board_verbs.add_parser("summary", help="Show columns and task counts", parents=[common])
    board_summary_p.add_argument("doc", help="Wiki page path")
    board_summary_p.set_defaults(func=board_summary)

    board_get_p = board_verbs.add_parser("get", help="Dump page markdown", parents=[common])
    board_get_p.add_argument("doc", help="Wiki page path")
    board_get_p.set_defaults(func=board_get)

    board_stamp_p = board_verbs.add_parser("stamp", help="Write task-id comments for every task", parents=[common])
    board_stamp_p.add_argument("doc", help="Wiki page path")
    board_stamp_p.set_defaults(func=board_stamp)

    # --- task ---
    task_p = nouns.add_parser("task", help="Task operations", parents=[common])
    task_verbs = task_p.add_subparsers(dest="verb")

    task_list_p = task_verbs.add_parser("list", help="List tasks", parents=[common])
    task_list_p.add_argument("doc", help="Wiki page path")
    task_list_p.add_argument("--column", help="Only this column")
    task_list_p.set_defaults(func=task_list)

    task_add_p = task_verbs.add_parser("add", help="Add a task at the top of a column", parents=[common])
    task_add_p.add_argument("doc", help="Wiki page path")
    task_add_p.add_argument("text", help="Task text (markdown)")
    task_add_p.add_argument("--column", help="Target column (default: first)")
    task_add_p.set_defaults(func=task_add)

    task_toggle_p = task_verbs.add_parser("toggle", help="Check or uncheck a task", parents=[common])
    task_toggle_p.add_argument("doc", help="Wiki page path")
    task_toggle_p.add_argument("id", help="Task ID")
    task_toggle_p.set_defaults(func=task_toggle)

    task_rename_p = task_verbs.add_parser("rename", help="Replace a task's text", parents=[common])
    task_rename_p.add_argument("doc", help="Wiki page path")
    task_rename_p.add_argument("id", help="Task ID")
    task_rename_p.add_argument("text", help="New text (markdown)")
    task_rename_p.set_defaults(func=task_rename)

    task_move_p = task_verbs.add_parser("move", help="Move a task with its subtasks", parents=[common])
    task_move_p.add_argument("doc", help="Wiki page path")
    task_move_p.add_argument("id", help="Task ID")
    task_move_p.add_argument("--column", help="Target column (end of it unless anchored)")
    anchor = task_move_p.add_mutually_exclusive_group()
    anchor.add_argument("--before", help="Place before this task")
    anchor.add_argument("--after", help="Place after this task")
    anchor.add_argument("--under", help="Nest under this task")
    task_move_p.add_argument("--level", type=int, help="New indent level (0 = top)")
    task_move_p.set_defaults(func=task_move)

    task_delete_p = task_verbs.add_parser("delete", help="Delete a task and its subtasks", parents=[common])
    task_delete_p.add_argument("doc", help="Wiki page path")
    task_delete_p.add_argument("id", help="Task ID")
    task_delete_p.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")
    task_delete_p.set_defaults(func=task_delete)

    # --- column ---
    col_p = nouns.add_parser("column", help="Column operations", parents=[common])
    col_verbs = col_p.add_subparsers(dest="verb")

    col_list_p = col_verbs.add_parser("list", help="List columns", parents=[common])
    col_list_p.add_argument("doc", help="Wiki page path")
    col_list_p.set_defaults(func=column_list)

    col_add_p = col_verbs.add_parser("add", help="Create a column", parents=[common])
    col_add_p.add_argument("doc", help="Wiki page path")
    col_add_p.add_argument("name", help="Column name")
    col_add_p.add_argument("--board", help="Page board (level-1 heading) to add the column to")
    col_add_p.set_defaults(func=column_add)

    col_rename_p = col_verbs.add_parser("rename", help="Rename a column", parents=[common])
    col_rename_p.add_argument("doc", help="Wiki page path")
    col_rename_p.add_argument("name", help="Column name")
    col_rename_p.add_argument("new_name", help="New column name")
    col_rename_p.set_defaults(func=column_rename)

    col_move_p = col_verbs.add_parser("move", help="Move a column", parents=[common])
    col_move_p.add_argument("doc", help="Wiki page path")
    col_move_p.add_argument("name", help="Column name")
    col_move_p.add_argument("--position", type=int, required=True, help="New position (1-indexed)")
    col_move_p.set_defaults(func=column_move)

    col_delete_p = col_verbs.add_parser("delete", help="Delete a column and its tasks", parents=[common])
    col_delete_p.add_argument("doc", help="Wiki page path")
    col_delete_p.add_argument("name", help="Column name")
    col_delete_p.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")
    col_delete_p.set_defaults(func=column_delete)

    # --- config ---
    config_p = nouns.add_parser("config", help="Read or write settings", parents=[common])
    config_verbs = config_p.add_subparsers(dest="verb")

    config_get_p = config_verbs.add_parser("get", help="Show settings", parents=[common])
    config_get_p.add_argument("key", nargs="?", help="Setting name (default: all)")
    config_get_p.add_argument("--repo", help="Read this repository's config too")
    config_get_p.set_defaults(func=config_get)

    config_set_p = config_verbs.add_parser("set", help="Write a setting", parents=[common])
    config_set_p.add_argument("key", help="Setting name")
    config_set_p.add_argument("value", help="New value")
    config_set_p.add_argument("--repo", help="Write to this repository instead of the global config")
    config_set_p.set_defaults(func=config_set)

    # --- web ---
    web_p = nouns.add_parser("web", help="Serve board in browser", parents=[common])
    web_p.add_argument("doc", help="Wiki page path")
    web_p.add_argument("--host", default="localhost", help="Bind address (default: localhost)")
    web_p.add_argument("--port", type=int, default=8617, help="Port (default: 8617)")
    web_p.set_defaults(func=web_cmd)

    return parser
