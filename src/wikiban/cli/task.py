"""Handlers for 'wikiban task' commands."""

from wikiban.cli._common import (
    confirm,
    error,
    find_column_or_die,
    find_task_or_die,
    output_json,
    output_result,
    run,
    task_dict,
)
from wikiban.model.board import find_task_column
from wikiban.parser import extract_tasks


def task_list(args) -> int:
    """List tasks grouped by column. Unsaved IDs are marked with *."""

    async def action(session) -> int:
        board = session.board
        stamped = {r.id for r in extract_tasks(session.source, columns_only=True) if r.has_id}
        columns = board.columns
        if args.column:
            columns = [find_column_or_die(board, args.column, args.json)]

        if args.json:
            items = []
            for column in columns:
                for node in column.tasks:
                    data = task_dict(board, node)
                    data["stamped"] = node.task_id in stamped
                    items.append(data)
            output_json(items)
            return 0

        for column in columns:
            print(column.title)
            for node in column.tasks:
                mark = "x" if node.checked else " "
                star = " " if node.task_id in stamped else "*"
                print(f"  {'  ' * node.indent_level}[{mark}] {node.text}  {star}{node.task_id}")
        return 0

    return run(args, action)


def task_add(args) -> int:
    """Add a task at the top of a column."""

    async def action(session) -> int:
        board = session.board
        if args.column:
            column = find_column_or_die(board, args.column, args.json)
        elif board.columns:
            column = board.columns[0]
        else:
            error("Board has no columns. Add one with 'wikiban column add'.", args.json)
        node = await session.add_task(column, args.text)
        output_result(task_dict(board, node), f"Added {node.task_id} to {column.title}", args.json)
        return 0

    return run(args, action)


def task_toggle(args) -> int:
    """Check or uncheck a task."""

    async def action(session) -> int:
        node = find_task_or_die(session.board, args.id, args.json)
        await session.toggle(node)
        state = "checked" if node.checked else "unchecked"
        output_result(task_dict(session.board, node), f"Task {args.id} {state}", args.json)
        return 0

    return run(args, action)


def task_rename(args) -> int:
    """Replace a task's text."""

    async def action(session) -> int:
        node = find_task_or_die(session.board, args.id, args.json)
        await session.rename_task(node, args.text)
        output_result(task_dict(session.board, node), f"Renamed {args.id}", args.json)
        return 0

    return run(args, action)


def task_move(args) -> int:
    """Move a task (with its subtasks) to a column, next to or under another task."""

    async def action(session) -> int:
        board = session.board
        node = find_task_or_die(board, args.id, args.json)

        if args.under:
            target = find_task_or_die(board, args.under, args.json)
            moved = await session.nest_task(node, target)
        else:
            column = find_column_or_die(board, args.column, args.json) if args.column else None
            before = find_task_or_die(board, args.before, args.json) if args.before else None
            after = find_task_or_die(board, args.after, args.json) if args.after else None
            anchor = before or after
            if anchor is not None:
                anchor_column = find_task_column(board, anchor)
                if column is not None and column is not anchor_column:
                    error(f"Task '{anchor.task_id}' is not in column '{column.title}'.", args.json)
                column = anchor_column
            moved = await session.move_task(node, column, before=before, after=after, indent_level=args.level)

        text = f"Moved {args.id}" if moved else f"Task {args.id} is already there"
        output_result({**task_dict(board, node), "moved": moved}, text, args.json)
        return 0

    return run(args, action)


def task_delete(args) -> int:
    """Delete a task and its subtasks."""

    async def action(session) -> int:
        node = find_task_or_die(session.board, args.id, args.json)
        deleted = await session.delete_task(node, confirm(f"Delete '{node.text}' and its subtasks?", args.yes))
        if not deleted:
            output_result({"id": args.id, "deleted": False}, "Cancelled", args.json)
            return 1
        output_result({"id": args.id, "deleted": True}, f"Deleted {args.id}", args.json)
        return 0

    return run(args, action)
