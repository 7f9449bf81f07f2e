#!/usr/bin/env python3
"""
Database setup script for the product translation pipeline.

Creates the flat product table and the attribute-value table on a
development database, with the uniqueness constraints the pipeline relies
on, and shows row counts per table. Production catalogs are provisioned by
the catalog application; this script is for local work and testing.

Usage:
    python setup_database.py              # Create missing tables
    python setup_database.py --check      # Show table status only
    python setup_database.py --drop       # Drop both tables (asks first)

License: MIT
"""

import sys
from pathlib import Path

# Add parent directories to path for imports
_script_dir = Path(__file__).parent.resolve()
_project_root = _script_dir.parent
sys.path.insert(0, str(_project_root / "src"))

import argparse

import psycopg2
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm
from rich.table import Table

from product_translation.config.pipeline_config import AttributeIds
from product_translation.config.settings import (
    DATABASE_HOST,
    DATABASE_NAME,
    DATABASE_PORT,
    SOURCE_LOCALE,
    TARGET_LOCALES,
)
from product_translation.core.connections import postgres_connection
from product_translation.core.errors import DataAccessError
from product_translation.storage.product_repository import ProductRepository
from product_translation.storage.schema import create_schema, drop_all_tables


console = Console()


def show_status(conn) -> None:
    """Print row counts of both tables per configured locale."""
    repository = ProductRepository(conn, AttributeIds())

    table = Table(title="Catalog tables")
    table.add_column("Locale")
    table.add_column(repository.flat_table, justify="right")
    table.add_column(repository.attribute_table, justify="right")

    for locale in [SOURCE_LOCALE] + list(TARGET_LOCALES):
        try:
            counts = repository.count_rows(locale)
        except DataAccessError as e:
            console.print(f"[red]Could not read tables:[/red] {e}")
            return
        table.add_row(
            locale,
            f"{counts[repository.flat_table]:,}",
            f"{counts[repository.attribute_table]:,}",
        )

    console.print(table)


def main() -> int:
    parser = argparse.ArgumentParser(description="Set up the catalog tables")
    parser.add_argument("--check", action="store_true", help="Show table status only")
    parser.add_argument("--drop", action="store_true", help="Drop both tables")
    parser.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")
    args = parser.parse_args()

    console.print(Panel(
        f"Database [bold]{DATABASE_NAME}[/bold] on {DATABASE_HOST}:{DATABASE_PORT}",
        title="Product translation setup",
    ))

    try:
        with postgres_connection() as conn:
            if args.check:
                show_status(conn)
                return 0

            if args.drop:
                if not (args.yes or Confirm.ask("Drop both catalog tables?", default=False)):
                    console.print("Aborted.")
                    return 0
                results = drop_all_tables(conn, confirm=True)
                for name in results["dropped"]:
                    console.print(f"[yellow]Dropped[/yellow] {name}")
            else:
                results = create_schema(conn)
                for name in results["created"]:
                    console.print(f"[green]Ready[/green] {name}")

            for name, error in results["errors"]:
                console.print(f"[red]Failed[/red] {name}: {error}")

            if not args.drop:
                show_status(conn)

            return 1 if results["errors"] else 0

    except psycopg2.OperationalError as e:
        console.print(f"[red]Could not connect to database:[/red] {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
