"""Handlers for 'wikiban board' commands."""

import sys

from wikiban.cli._common import output_json, output_result, run
from wikiban.parser import extract_tasks


def board_summary(args) -> int:
    """Show board summary: columns and task counts."""

    async def action(session) -> int:
        board = session.board
        columns = []
        for column in board.columns:
            done = sum(1 for node in column.tasks if node.checked)
            columns.append({"name": column.title, "tasks": len(column.tasks), "done": done})

        if args.json:
            output_json({"doc": args.doc, "meta": board.meta, "columns": columns})
        else:
            print(args.doc)
            for c in columns:
                tasks = "task" if c["tasks"] == 1 else "tasks"
                print(f"  {c['name']:<16} {c['tasks']} {tasks}, {c['done']} done")
        return 0

    return run(args, action)


def board_get(args) -> int:
    """Dump the page markdown."""

    async def action(session) -> int:
        if args.json:
            output_json({"doc": args.doc, "meta": session.board.meta, "markdown": session.source})
        else:
            sys.stdout.write(session.source)
        return 0

    return run(args, action)


def board_stamp(args) -> int:
    """Save the board once so every task line carries its task-id comment."""

    async def action(session) -> int:
        stamped = {r.id for r in extract_tasks(session.source, columns_only=True) if r.has_id}
        missing = [node for node in session.board.iter_tasks() if node.task_id not in stamped]
        if missing:
            await session.save()
        output_result(
            {"doc": args.doc, "stamped": len(missing)},
            f"Stamped {len(missing)} task(s) in {args.doc}",
            args.json,
        )
        return 0

    return run(args, action)
