"""
Command-line front end for the Users store.

Mirrors the user-management form: name, age and id arrive as text, are
checked (age and id must parse as integers, name must not be empty), then
the matching store operation runs and the user list is shown again.

Usage:
    usersdb add "Alice" 30
    usersdb list
    usersdb update 1 "Alicia" 31
    usersdb delete 2
"""

import argparse
import logging
import re
import sys
from typing import List, Optional, Sequence

from usersdb.config import normalize_log_level, settings
from usersdb.core.constants import StoreStatus
from usersdb.core.results import StoreResult, UserRecord
from usersdb.services.record_store import RecordStore

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INVALID_INPUT = 2

INTEGER_FIELD = re.compile(r"[+-]?[0-9]+")


class InvalidInput(ValueError):
    """A form field did not pass its check."""


def parse_int(text: str, field: str) -> int:
    """
    Parse a form field as an integer.

    Only an optional sign followed by ASCII digits is accepted: no
    surrounding spaces, no underscores, no other scripts' digits.
    """
    if not isinstance(text, str) or not INTEGER_FIELD.fullmatch(text):
        raise InvalidInput(f"{field} must be a whole number, got {text!r}")
    return int(text)


def log_level_arg(value: str) -> str:
    try:
        return normalize_log_level(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc))


def require_name(text: str) -> str:
    if not text:
        raise InvalidInput("name must not be empty")
    return text


def render_users(records: Sequence[UserRecord]) -> str:
    """Format the user list the way the form's list sheet shows it."""
    if not records:
        return "No users found"
    blocks = [
        f"ID: {record.id}\nName: {record.name}\nAge: {record.age}"
        for record in records
    ]
    return "\n\n".join(blocks)


def report(result: StoreResult) -> int:
    """Print the outcome of a store call and return the exit status."""
    if result.status is StoreStatus.SUCCESS:
        if result.operation == "insert":
            print(f"User added with id {result.record_id}")
        elif result.operation == "update":
            print(f"User {result.record_id} updated")
        elif result.operation == "delete":
            print(f"User {result.record_id} deleted")
        return EXIT_OK
    if result.status is StoreStatus.NOT_FOUND:
        print(f"{result.operation}: no user with that id", file=sys.stderr)
        return EXIT_FAILED
    print(f"{result.operation} failed ({result.status.value}): {result.message}",
          file=sys.stderr)
    return EXIT_FAILED


def show_users(store: RecordStore) -> int:
    result = store.fetch_all()
    if not result.ok:
        return report(result)
    print("Users List")
    print(render_users(result.records))
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="usersdb",
        description="Add, list, update and delete users in the local Users database",
    )
    parser.add_argument(
        "--database-url",
        default=None,
        help="Database URL (default: DATABASE_URL setting)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        type=log_level_arg,
        help="Logging level (default: LOG_LEVEL setting)",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    add = commands.add_parser("add", help="Add a user")
    add.add_argument("name")
    add.add_argument("age")

    commands.add_parser("list", help="Show all users")

    update = commands.add_parser("update", help="Replace a user's name and age")
    update.add_argument("id")
    update.add_argument("name")
    update.add_argument("age")

    delete = commands.add_parser("delete", help="Delete a user")
    delete.add_argument("id")

    return parser


def run(args: argparse.Namespace, store: RecordStore) -> int:
    """Run one command against an open store."""
    try:
        if args.command == "list":
            return show_users(store)
        if args.command == "add":
            age = parse_int(args.age, "age")
            result = store.insert(require_name(args.name), age)
        elif args.command == "update":
            user_id = parse_int(args.id, "id")
            age = parse_int(args.age, "age")
            result = store.update(user_id, require_name(args.name), age)
        else:
            result = store.delete(parse_int(args.id, "id"))
    except InvalidInput as exc:
        print(f"Invalid input: {exc}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    status = report(result)
    if result.ok:
        # Refresh the list after every write
        show_users(store)
    return status


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level or settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    store = RecordStore.from_settings()
    if args.database_url:
        store.database_url = args.database_url

    with store:
        if not store.is_open:
            return report(store.open_result)
        return run(args, store)


if __name__ == "__main__":
    sys.exit(main())
