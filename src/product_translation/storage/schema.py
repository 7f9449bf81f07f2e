"""
PostgreSQL schema definitions for the catalog tables.

The translation pipeline does not manage the production schema; the catalog
application owns it. These definitions describe the columns and uniqueness
constraints the pipeline relies on, and are used to provision development
and test databases through scripts/setup_database.py.

Tables:
- product_flat: one row per (sku, locale)
- product_attribute_values: one row per (product_id, attribute_id, locale)

License: MIT
"""

from typing import Any, List, Tuple

import psycopg2

from ..config.settings import ATTRIBUTE_VALUES_TABLE, PRODUCT_FLAT_TABLE
from .postgres_utils import validate_identifier


def get_schema_statements(
    flat_table: str = PRODUCT_FLAT_TABLE,
    attribute_table: str = ATTRIBUTE_VALUES_TABLE
) -> List[Tuple[str, str]]:
    """
    Get the CREATE statements for both tables, in creation order.

    The unique constraint on the attribute-value table is the conflict
    target of the repository's INSERT ... ON CONFLICT upsert.

    Returns:
        list: (table_name, sql) pairs.
    """
    flat_table = validate_identifier(flat_table)
    attribute_table = validate_identifier(attribute_table)

    flat_sql = f"""
    CREATE TABLE IF NOT EXISTS {flat_table} (
        id SERIAL PRIMARY KEY,
        sku CHARACTER VARYING(255) NOT NULL,
        product_id INTEGER NOT NULL,
        locale CHARACTER VARYING(16) NOT NULL,
        channel CHARACTER VARYING(64),
        name TEXT,
        description TEXT,
        short_description TEXT,
        UNIQUE (sku, locale)
    );
    """

    attribute_sql = f"""
    CREATE TABLE IF NOT EXISTS {attribute_table} (
        id SERIAL PRIMARY KEY,
        product_id INTEGER NOT NULL,
        attribute_id INTEGER NOT NULL,
        locale CHARACTER VARYING(16) NOT NULL,
        channel CHARACTER VARYING(64),
        text_value TEXT,
        UNIQUE (product_id, attribute_id, locale)
    );
    """

    return [(flat_table, flat_sql), (attribute_table, attribute_sql)]


def create_schema(conn: Any, **table_names) -> dict:
    """
    Create both tables if they do not exist.

    Args:
        conn: psycopg2 connection object.
        **table_names: Optional flat_table / attribute_table overrides.

    Returns:
        dict: Results with 'created' and 'errors' lists.
    """
    results = {
        "created": [],
        "errors": [],
    }

    cursor = conn.cursor()

    for table_name, sql in get_schema_statements(**table_names):
        try:
            cursor.execute(sql)
            conn.commit()
            results["created"].append(table_name)
        except psycopg2.Error as e:
            conn.rollback()
            results["errors"].append((table_name, str(e)))

    cursor.close()
    return results


def drop_all_tables(conn: Any, confirm: bool = False, **table_names) -> dict:
    """
    Drop both tables (use with caution!).

    Args:
        conn: psycopg2 connection object.
        confirm: Must be True to actually drop tables.

    Returns:
        dict: Results with 'dropped' and 'errors' lists.
    """
    if not confirm:
        return {"error": "Must set confirm=True to drop tables"}

    results = {
        "dropped": [],
        "errors": [],
    }

    cursor = conn.cursor()

    for table_name, _ in reversed(get_schema_statements(**table_names)):
        try:
            cursor.execute(f"DROP TABLE IF EXISTS {table_name}")
            conn.commit()
            results["dropped"].append(table_name)
        except psycopg2.Error as e:
            conn.rollback()
            results["errors"].append((table_name, str(e)))

    cursor.close()
    return results


def get_table_list(**table_names) -> list:
    """Get the table names in creation order."""
    return [name for name, _ in get_schema_statements(**table_names)]
