"""
Database initialization and seeding.

This script:
- Creates the Users table
- Optionally adds sample users for development/testing
- Can reset the database (drop and recreate)

Usage:
    # Ensure the table exists
    python -m usersdb.database.init_db

    # Reset database (drops all tables and recreates)
    python -m usersdb.database.init_db --reset

    # Add sample users for testing
    python -m usersdb.database.init_db --sample-data
"""

import argparse
from typing import List, Optional, Tuple

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from usersdb.config import settings
from usersdb.database.session import (
    create_db_engine,
    create_session_factory,
    ensure_schema,
    reset_schema,
    session_scope,
)
from usersdb.repositories.user_repository import UserRepository


SAMPLE_USERS: List[Tuple[str, int]] = [
    ("Alice", 30),
    ("Bob", 25),
    ("Carol", 41),
]


def create_tables(engine: Engine, reset: bool = False) -> None:
    """
    Create the Users table.

    Args:
        engine: Engine to create the table on
        reset: If True, drop existing tables first
    """
    if reset:
        print("🗑️  Dropping and recreating tables...")
        reset_schema(engine)
    else:
        print("📊 Creating database tables...")
        ensure_schema(engine)
    print("✅ Tables ready")


def seed_sample_data(session_factory: sessionmaker) -> int:
    """
    Seed sample users for development and testing.

    Users already present (same name and age) are skipped.

    Returns:
        Number of users added
    """
    print("\n🌱 Seeding sample users...")
    added = 0

    with session_factory() as db:
        repo = UserRepository(db)
        existing = {(user.name, user.age) for user in repo.fetch_all()}

    with session_scope(session_factory) as db:
        repo = UserRepository(db)
        for name, age in SAMPLE_USERS:
            if (name, age) in existing:
                print(f"  ⏭️  {name} ({age}) already exists (skipping)")
                continue
            new_id = repo.insert(name, age)
            added += 1
            print(f"  ✅ #{new_id} {name} ({age})")

    print("✅ Sample users seeded")
    return added


def print_database_status(session_factory: sessionmaker) -> None:
    """Print current database status and the stored users."""
    print("\n" + "=" * 60)
    print("📊 Database Status")
    print("=" * 60)

    with session_factory() as db:
        repo = UserRepository(db)
        print(f"  Users: {repo.count()}")
        for user in repo.fetch_all():
            print(f"    • {user}")

    print("=" * 60)


def initialize_database(reset: bool = False, sample_data: bool = False,
                        database_url: Optional[str] = None) -> None:
    """
    Initialize the database.

    Args:
        reset: Drop existing tables before creating
        sample_data: Add sample users for testing
        database_url: Database to initialize (default from settings)
    """
    database_url = database_url or settings.database_url

    print("=" * 60)
    print("🗄️  Database Initialization")
    print(f"   {database_url}")
    print("=" * 60)

    engine = create_db_engine(database_url)
    try:
        session_factory = create_session_factory(engine)

        create_tables(engine, reset=reset)

        if sample_data:
            seed_sample_data(session_factory)

        print_database_status(session_factory)
    finally:
        engine.dispose()

    print("\n✅ Database initialization complete!")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point with CLI argument parsing."""
    parser = argparse.ArgumentParser(
        description="Initialize and seed the Users database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Ensure the Users table exists
  python -m usersdb.database.init_db

  # Reset database (drop all tables and recreate)
  python -m usersdb.database.init_db --reset

  # Full reset with sample users, no prompt
  python -m usersdb.database.init_db --reset --yes --sample-data
        """
    )

    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop existing tables before creating (WARNING: deletes all data!)"
    )

    parser.add_argument(
        "--yes",
        action="store_true",
        help="Do not ask for confirmation before --reset"
    )

    parser.add_argument(
        "--sample-data",
        action="store_true",
        help="Add sample users for development/testing"
    )

    parser.add_argument(
        "--database-url",
        default=None,
        help="Database URL (default: DATABASE_URL setting)"
    )

    args = parser.parse_args(argv)

    # Confirm reset if requested
    if args.reset and not args.yes:
        print("⚠️  WARNING: This will DELETE ALL DATA in the database!")
        response = input("Are you sure? Type 'yes' to continue: ")
        if response.lower() != 'yes':
            print("❌ Aborted")
            return 1

    initialize_database(
        reset=args.reset,
        sample_data=args.sample_data,
        database_url=args.database_url,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
