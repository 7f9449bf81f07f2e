"""
PostgreSQL utility functions for the product repository.

Every statement the pipeline issues runs as its own unit of work: it is
executed, committed, and rolled back if it fails. These helpers implement
that pattern once for reads and writes.

License: MIT
"""

import re
from typing import Any, List, Optional, Sequence, Tuple

from ..config.logging_config import get_logger

logger = get_logger(__name__)

# Plain, unquoted SQL identifiers, optionally schema-qualified.
_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")


def validate_identifier(name: str) -> str:
    """
    Check that a table name can be interpolated into SQL safely.

    Table names come from configuration and cannot be passed as query
    parameters, so they are restricted to plain identifiers.

    Raises:
        ValueError: If the name is not a plain identifier.

    Example:
        >>> validate_identifier("shop.product_flat")
        'shop.product_flat'
    """
    if not isinstance(name, str) or not _IDENTIFIER_PATTERN.match(name):
        raise ValueError(f"Invalid SQL identifier: {name!r}")
    return name


def execute_query_silent(
    conn: Any,
    query: str,
    params: Optional[Sequence] = None
) -> Optional[List[Tuple]]:
    """
    Execute a query and commit, without logging the query text.

    Args:
        conn: An open DB-API connection (psycopg2).
        query: SQL with %s placeholders.
        params: Values for the placeholders, escaped by the driver.

    Returns:
        All result rows if the statement produces rows (cursor.description
        is set), otherwise None.

    Raises:
        psycopg2.Error: Propagated after the transaction is rolled back.
    """
    cursor = conn.cursor()

    try:
        cursor.execute(query, params)
        conn.commit()

        if cursor.description:
            return cursor.fetchall()
        return None

    except Exception:
        conn.rollback()
        raise

    finally:
        cursor.close()


def execute_write(
    conn: Any,
    query: str,
    params: Optional[Sequence] = None
) -> int:
    """
    Execute an INSERT/UPDATE statement and commit.

    Returns:
        The number of rows affected by the statement.

    Raises:
        psycopg2.Error: Propagated after the transaction is rolled back.
    """
    cursor = conn.cursor()

    try:
        cursor.execute(query, params)
        affected = cursor.rowcount
        conn.commit()
        return affected

    except Exception:
        conn.rollback()
        raise

    finally:
        cursor.close()
