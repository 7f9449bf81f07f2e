"""
Product repository: all reads and writes of the translation pipeline.

The repository owns both catalog tables:

- the flat product table, holding name, description and short description
  per (sku, locale). Translated rows are only ever UPDATEd here; the rows of
  each locale are provisioned by the catalog application.
- the attribute-value table, holding one text value per
  (product_id, attribute_id, locale). Translated values are upserted, so
  running the pipeline twice never duplicates a row.

Each method is its own unit of work and commits before returning. A failed
write is rolled back and reported as DataAccessError; nothing done by
earlier calls is undone.

License: MIT
"""

from typing import Any, List, Optional

import psycopg2

from ..config.logging_config import get_logger
from ..config.pipeline_config import (
    UPSERT_CHECK_THEN_UPDATE,
    UPSERT_ON_CONFLICT,
    VALID_UPSERT_STRATEGIES,
    AttributeIds,
)
from ..config.settings import ATTRIBUTE_VALUES_TABLE, PRODUCT_FLAT_TABLE
from ..core.errors import ConfigurationError, DataAccessError, FetchError
from ..core.models import Product
from .postgres_utils import execute_query_silent, execute_write, validate_identifier

logger = get_logger(__name__)


class ProductRepository:
    """
    Reads source products and persists their translations.

    Args:
        conn: An open psycopg2 connection.
        attribute_ids: Ids of the translatable attributes.
        upsert_strategy: "on_conflict" (atomic INSERT ... ON CONFLICT, the
            default) or "check_then_update" (UPDATE existing rows only;
            has a race window and is only safe for single-threaded runs).
        flat_table: Name of the flat product table.
        attribute_table: Name of the attribute-value table.
    """

    def __init__(
        self,
        conn: Any,
        attribute_ids: AttributeIds,
        upsert_strategy: str = UPSERT_ON_CONFLICT,
        flat_table: str = PRODUCT_FLAT_TABLE,
        attribute_table: str = ATTRIBUTE_VALUES_TABLE,
    ):
        if upsert_strategy not in VALID_UPSERT_STRATEGIES:
            raise ConfigurationError(
                f"upsert_strategy must be one of {list(VALID_UPSERT_STRATEGIES)}, "
                f"got '{upsert_strategy}'"
            )

        self.conn = conn
        self.attribute_ids = attribute_ids
        self.upsert_strategy = upsert_strategy
        self.flat_table = validate_identifier(flat_table)
        self.attribute_table = validate_identifier(attribute_table)

        self._select_products_sql = f"""
            SELECT sku, product_id, name, description, short_description, channel, locale
            FROM {self.flat_table}
            WHERE locale = %s
            ORDER BY product_id, sku
        """
        self._update_flat_sql = f"""
            UPDATE {self.flat_table}
            SET name = %s, description = %s, short_description = %s
            WHERE sku = %s AND locale = %s
        """
        self._upsert_attribute_sql = f"""
            INSERT INTO {self.attribute_table}
                (product_id, attribute_id, locale, channel, text_value)
            VALUES (%s, %s, %s, %s, %s)
            ON CONFLICT (product_id, attribute_id, locale)
            DO UPDATE SET text_value = EXCLUDED.text_value, channel = EXCLUDED.channel
        """
        self._exists_attribute_sql = f"""
            SELECT 1 FROM {self.attribute_table}
            WHERE product_id = %s AND attribute_id = %s AND locale = %s
            LIMIT 1
        """
        self._update_attribute_sql = f"""
            UPDATE {self.attribute_table}
            SET text_value = %s, channel = %s
            WHERE product_id = %s AND attribute_id = %s AND locale = %s
        """

    # =========================================================================
    # READS
    # =========================================================================

    def fetch_source_products(
        self,
        source_locale: str,
        limit: Optional[int] = None
    ) -> List[Product]:
        """
        Fetch every product row of the source locale.

        Rows are returned eagerly, ordered by product id. A partial result is
        never returned: any database error aborts the fetch.

        Args:
            source_locale: Locale of the rows to read.
            limit: Optional maximum number of rows, for trial runs.

        Returns:
            List of Product snapshots.

        Raises:
            FetchError: If the query fails.
        """
        query = self._select_products_sql
        params = [source_locale]
        if limit is not None:
            query += " LIMIT %s"
            params.append(int(limit))

        try:
            rows = execute_query_silent(self.conn, query, tuple(params)) or []
        except psycopg2.Error as e:
            raise FetchError(
                f"Could not fetch products for locale '{source_locale}': {e}",
                locale=source_locale
            ) from e

        products = [Product.from_row(row) for row in rows]
        logger.info(f"Fetched {len(products)} products in locale '{source_locale}'")
        return products

    def count_rows(self, locale: Optional[str] = None) -> dict:
        """
        Count the rows of both tables, optionally for a single locale.

        Returns:
            dict: Mapping of table name to row count.

        Raises:
            DataAccessError: If a count query fails.
        """
        counts = {}
        for table in (self.flat_table, self.attribute_table):
            query = f"SELECT COUNT(*) FROM {table}"
            params = None
            if locale is not None:
                query += " WHERE locale = %s"
                params = (locale,)
            try:
                result = execute_query_silent(self.conn, query, params)
            except psycopg2.Error as e:
                raise DataAccessError(f"Could not count rows of {table}: {e}", locale=locale) from e
            counts[table] = result[0][0] if result else 0
        return counts

    # =========================================================================
    # WRITES
    # =========================================================================

    def update_flat_translation(
        self,
        sku: str,
        target_locale: str,
        name: Optional[str],
        description: str,
        short_description: str
    ) -> int:
        """
        Write translated texts to the flat table row of (sku, target_locale).

        A missing row is not an error: the update then affects zero rows.

        Returns:
            The number of rows updated (0 or 1).

        Raises:
            DataAccessError: If the update fails.
        """
        try:
            updated = execute_write(
                self.conn,
                self._update_flat_sql,
                (name, description, short_description, sku, target_locale)
            )
        except psycopg2.Error as e:
            raise DataAccessError(
                f"Flat table update failed for sku '{sku}' locale '{target_locale}': {e}",
                sku=sku, locale=target_locale
            ) from e

        if updated == 0:
            logger.debug(f"No flat table row for sku '{sku}' in locale '{target_locale}'")
        return updated

    def upsert_attribute_value(
        self,
        product_id: int,
        attribute_id: int,
        target_locale: str,
        channel: Optional[str],
        text_value: str
    ) -> bool:
        """
        Write one translated attribute value.

        With the "on_conflict" strategy the row is inserted, or overwritten
        when a row for (product_id, attribute_id, target_locale) exists, in a
        single statement. With "check_then_update" an existing row is updated
        and a missing row is logged and skipped.

        Returns:
            True if a row was written, False if it was skipped.

        Raises:
            DataAccessError: If a statement fails.
        """
        try:
            if self.upsert_strategy == UPSERT_CHECK_THEN_UPDATE:
                return self._check_then_update(
                    product_id, attribute_id, target_locale, channel, text_value
                )

            execute_write(
                self.conn,
                self._upsert_attribute_sql,
                (product_id, attribute_id, target_locale, channel, text_value)
            )
            return True

        except psycopg2.Error as e:
            raise DataAccessError(
                f"Attribute upsert failed for product {product_id} attribute "
                f"{attribute_id} locale '{target_locale}': {e}",
                product_id=product_id, attribute_id=attribute_id, locale=target_locale
            ) from e

    def _check_then_update(
        self,
        product_id: int,
        attribute_id: int,
        target_locale: str,
        channel: Optional[str],
        text_value: str
    ) -> bool:
        exists = execute_query_silent(
            self.conn,
            self._exists_attribute_sql,
            (product_id, attribute_id, target_locale)
        )
        if not exists:
            logger.warning(
                f"No attribute row for product {product_id} attribute {attribute_id} "
                f"locale '{target_locale}', skipping"
            )
            return False

        execute_write(
            self.conn,
            self._update_attribute_sql,
            (text_value, channel, product_id, attribute_id, target_locale)
        )
        return True
