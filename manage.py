#!/usr/bin/env python3
"""
Market history management CLI.

Usage:
    python manage.py init-db                      Apply pending schema migrations
    python manage.py status                       Show applied/pending migrations
    python manage.py history WORLD ITEM [--count N]
                                                  Print one item's history as JSON
"""

import argparse
import asyncio
import json
import sys

from src.application import get_history_db_access
from src.config import configure_logging
from src.core.entities import HistoryQuery
from src.core.exceptions import MarketHistoryError
from src.infrastructure.storage.sqlite import close_pool
from src.infrastructure.storage.sqlite.migrations import (
    get_migration_status,
    initialize_database,
)


async def _init_db() -> int:
    results = await initialize_database()
    for r in results:
        state = "ok" if r.success else f"FAILED: {r.error}"
        print(f"  v{r.version} {r.name} ({r.execution_time_ms} ms) {state}")
    if not results:
        print("  Schema is up to date.")
    return 0 if all(r.success for r in results) else 1


async def _status() -> int:
    status = await get_migration_status()
    print(f"  Database:        {status['db_path']}")
    print(f"  Current version: {status['current_version'] or '-'}")
    print(f"  Pending:         {', '.join(status['pending']) or '-'}")
    return 0


async def _history(world_id: int, item_id: int, count: int | None) -> int:
    try:
        access = await get_history_db_access()
        history = await access.retrieve(
            HistoryQuery(world_id=world_id, item_id=item_id, count=count)
        )
    finally:
        await close_pool()

    if history is None:
        print(f"  No history for world {world_id}, item {item_id}.", file=sys.stderr)
        return 1
    print(json.dumps(history.model_dump(mode="json"), indent=2))
    return 0


def non_negative_int(value: str) -> int:
    count = int(value)
    if count < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {count}")
    return count


def cmd_init_db(args: argparse.Namespace) -> int:
    return asyncio.run(_init_db())


def cmd_status(args: argparse.Namespace) -> int:
    return asyncio.run(_status())


def cmd_history(args: argparse.Namespace) -> int:
    return asyncio.run(_history(args.world_id, args.item_id, args.count))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Market history management CLI")
    sub = parser.add_subparsers(dest="command")

    p_init = sub.add_parser("init-db", help="Apply pending schema migrations")
    p_init.set_defaults(func=cmd_init_db)

    p_status = sub.add_parser("status", help="Show migration status")
    p_status.set_defaults(func=cmd_status)

    p_history = sub.add_parser("history", help="Print the history of one world/item pair")
    p_history.add_argument("world_id", type=int)
    p_history.add_argument("item_id", type=int)
    p_history.add_argument(
        "--count",
        type=non_negative_int,
        default=None,
        help="Number of sales (default from settings)",
    )
    p_history.set_defaults(func=cmd_history)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    configure_logging()
    try:
        return args.func(args)
    except MarketHistoryError as e:
        print(json.dumps(e.to_dict()), file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
