"""Orderboard database management CLI.

Creates and drops the database schema and seeds the menu.

Usage:
    python src/manage.py setup-db            # Create all tables
    python src/manage.py drop-db             # Drop all tables
    python src/manage.py seed-menu data/menu.json
"""

import argparse
import sys


def setup_database():
    """Create the database schema for the ordering domain."""
    from ordering.domain import ordering
    from ordering.utils.db import setup_db

    print("Initializing ordering domain...")
    ordering.init()
    print("Creating ordering database schema...")
    setup_db(ordering)
    print("Done.")


def drop_database():
    """Drop the database schema for the ordering domain."""
    from ordering.domain import ordering
    from ordering.utils.db import drop_db

    print("Initializing ordering domain...")
    ordering.init()
    print("Dropping ordering database schema...")
    drop_db(ordering)
    print("Done.")


def seed_menu(path):
    """Register every product in the JSON menu file."""
    from ordering.domain import ordering
    from ordering.menu.loader import seed_menu_file

    ordering.init()
    with ordering.domain_context():
        product_ids = seed_menu_file(path)
    print(f"Seeded {len(product_ids)} product(s) from {path}.")


def main():
    parser = argparse.ArgumentParser(description="Orderboard database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    seed_parser = subparsers.add_parser("seed-menu", help="Load products from a JSON menu file")
    seed_parser.add_argument("path", help="Path to the menu JSON file")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed-menu":
        seed_menu(args.path)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
