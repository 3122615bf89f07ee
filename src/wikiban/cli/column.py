"""Handlers for 'wikiban column' commands."""

from wikiban.cli._common import confirm, find_column_or_die, output_json, output_result, run
from wikiban.model.column import is_duplicate, storage_headers


def column_list(args) -> int:
    """List columns with task counts."""

    async def action(session) -> int:
        board = session.board
        headers = storage_headers(board.columns)
        items = [
            {
                "position": i + 1,
                "name": column.title,
                "header": header,
                "board": column.group,
                "tasks": len(column.tasks),
                "duplicate": is_duplicate(board, column),
            }
            for i, (column, header) in enumerate(zip(board.columns, headers))
        ]
        if args.json:
            output_json(items)
        else:
            for c in items:
                tasks = "task" if c["tasks"] == 1 else "tasks"
                duplicate = "  (duplicate)" if c["duplicate"] else ""
                print(f"{c['position']}  {c['name']:<16} {c['tasks']} {tasks}{duplicate}")
        return 0

    return run(args, action)


def column_add(args) -> int:
    """Add a column at the end of the board, or of the page board given by --board."""

    async def action(session) -> int:
        column = await session.add_column(args.name, group=args.board)
        position = session.board.columns.index(column) + 1
        output_result(
            {"position": position, "name": column.title},
            f"Created column {column.title} at position {position}",
            args.json,
        )
        return 0

    return run(args, action)


def column_rename(args) -> int:
    """Rename a column."""

    async def action(session) -> int:
        column = find_column_or_die(session.board, args.name, args.json)
        old = column.title
        await session.rename_column(column, args.new_name)
        output_result(
            {"old_name": old, "name": column.title},
            f"Renamed column {old} to {column.title}",
            args.json,
        )
        return 0

    return run(args, action)


def column_move(args) -> int:
    """Move a column to a new position (1-indexed)."""

    async def action(session) -> int:
        column = find_column_or_die(session.board, args.name, args.json)
        await session.move_column(column, args.position - 1)
        position = session.board.columns.index(column) + 1
        output_result(
            {"name": column.title, "position": position},
            f"Moved column {column.title} to position {position}",
            args.json,
        )
        return 0

    return run(args, action)


def column_delete(args) -> int:
    """Delete a column and all its tasks."""

    async def action(session) -> int:
        column = find_column_or_die(session.board, args.name, args.json)
        count = len(column.tasks)
        prompt = f"Delete column '{column.title}' and its {count} task(s)?"
        deleted = await session.delete_column(column, confirm(prompt, args.yes))
        if not deleted:
            output_result({"name": column.title, "deleted": False}, "Cancelled", args.json)
            return 1
        output_result({"name": column.title, "deleted": True}, f"Deleted column {column.title}", args.json)
        return 0

    return run(args, action)
