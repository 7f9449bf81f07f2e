"""Shared pytest fixtures and fakes for the product translation tests."""

import psycopg2
import pytest

from product_translation.config.pipeline_config import AttributeIds, PipelineConfig
from product_translation.core.errors import DataAccessError, TranslationError
from product_translation.core.models import Product


# =============================================================================
# DB-API FAKES
# =============================================================================

class FakeCursor:
    """Records executed statements; results come from the connection's responder."""

    def __init__(self, connection):
        self.connection = connection
        self.description = None
        self.rowcount = -1
        self._rows = []
        self.closed = False

    def execute(self, query, params=None):
        self.connection.executed.append((" ".join(query.split()), params))
        outcome = self.connection.responder(query, params)
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, int):
            self.description = None
            self.rowcount = outcome
            self._rows = []
        else:
            self._rows = list(outcome or [])
            self.description = [("column",)] if outcome is not None else None
            self.rowcount = len(self._rows)

    def fetchall(self):
        return self._rows

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class FakeConnection:
    """
    Minimal psycopg2-like connection.

    responder(query, params) returns a list of rows for queries, an int
    rowcount for writes, or an exception instance to raise.
    """

    def __init__(self, responder=None):
        self.responder = responder or (lambda query, params: 1)
        self.executed = []
        self.commits = 0
        self.rollbacks = 0
        self.closed = False

    def cursor(self):
        return FakeCursor(self)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        self.closed = True


@pytest.fixture
def fake_connection():
    return FakeConnection()


# =============================================================================
# TRANSLATION FAKES
# =============================================================================

class FakeTranslationClient:
    """Translates text to "[locale]text" and fails for chosen inputs."""

    def __init__(self, fail_when=None, result=None):
        self.fail_when = fail_when or (lambda text, source, target: False)
        self.result = result
        self.calls = []

    def translate(self, text, source_locale, target_locale):
        self.calls.append((text, source_locale, target_locale))
        if self.fail_when(text, source_locale, target_locale):
            raise TranslationError("service unavailable", source_locale, target_locale)
        if self.result is not None:
            return self.result
        return f"[{target_locale}]{text}"


# =============================================================================
# IN-MEMORY REPOSITORY
# =============================================================================

class InMemoryRepository:
    """
    Models both catalog tables in memory.

    flat_rows maps (sku, locale) to a dict of name/description/short_description;
    only provisioned keys can be updated. attribute_rows maps
    (product_id, attribute_id, locale) to (text_value, channel).
    """

    def __init__(self, flat_keys=(), fail_flat=None, fail_attribute=None):
        self.flat_rows = {key: {} for key in flat_keys}
        self.attribute_rows = {}
        self.fail_flat = fail_flat or (lambda sku, locale: False)
        self.fail_attribute = fail_attribute or (lambda product_id, attribute_id, locale: False)
        self.flat_updates = []
        self.attribute_upserts = []

    def update_flat_translation(self, sku, target_locale, name, description, short_description):
        if self.fail_flat(sku, target_locale):
            raise DataAccessError("flat write failed", sku=sku, locale=target_locale)
        self.flat_updates.append((sku, target_locale, name, description, short_description))
        if (sku, target_locale) not in self.flat_rows:
            return 0
        self.flat_rows[(sku, target_locale)] = {
            "name": name,
            "description": description,
            "short_description": short_description,
        }
        return 1

    def upsert_attribute_value(self, product_id, attribute_id, target_locale, channel, text_value):
        if self.fail_attribute(product_id, attribute_id, target_locale):
            raise DataAccessError(
                "attribute write failed",
                product_id=product_id, attribute_id=attribute_id, locale=target_locale
            )
        self.attribute_upserts.append((product_id, attribute_id, target_locale, channel, text_value))
        self.attribute_rows[(product_id, attribute_id, target_locale)] = (text_value, channel)
        return True


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def attribute_ids():
    return AttributeIds(name=2, description=10, short_description=9)


@pytest.fixture
def config(attribute_ids):
    return PipelineConfig(
        source_locale="nl",
        target_locales=("en", "fr", "de"),
        attribute_ids=attribute_ids,
        upsert_strategy="on_conflict",
        show_progress=False,
    )


@pytest.fixture
def chair():
    return Product(
        sku="ABC1",
        product_id=42,
        name="Stoel",
        description="Een stoel.",
        short_description="Stoel.",
        channel="web",
        locale="nl",
    )


@pytest.fixture
def table():
    return Product(
        sku="TBL7",
        product_id=43,
        name="Tafel",
        description="Een houten tafel.",
        short_description="Tafel.",
        channel=None,
        locale="nl",
    )


def db_error(message="connection lost"):
    return psycopg2.OperationalError(message)
