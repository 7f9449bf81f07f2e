"""
Batch runner wiring the pipeline together.

run_translation_batch() performs one complete run: it opens the database
connection, builds the translation client (optionally cached), fetches the
source products once and hands them to the orchestrator.

License: MIT
"""

import time
from typing import Optional

from ..config.logging_config import get_logger
from ..config.pipeline_config import PipelineConfig
from ..config.settings import LANGUAGE_CHECK_ENABLED, TRANSLATION_CACHE_DIR
from ..core.connections import postgres_connection
from ..core.models import TranslationRunStats
from ..storage.product_repository import ProductRepository
from ..translation.cache import initialize_translation_cache
from ..translation.client import CachedTranslationClient, LibreTranslateClient, TranslationClient
from ..translation.language_check import SourceLanguageChecker
from .orchestrator import TranslationOrchestrator

logger = get_logger(__name__)


def build_translation_client(
    use_cache: bool = True,
    cache_dir: Optional[str] = TRANSLATION_CACHE_DIR,
) -> TranslationClient:
    """
    Build the LibreTranslate client, wrapped in the SQLite cache if enabled.
    """
    client = LibreTranslateClient()
    if use_cache and cache_dir:
        cache_path = initialize_translation_cache(cache_dir)
        return CachedTranslationClient(client, cache_path)
    return client


def run_translation_batch(
    config: PipelineConfig,
    limit: Optional[int] = None,
    debug_sql: bool = False,
    use_cache: bool = True,
    check_language: Optional[bool] = None,
    client: Optional[TranslationClient] = None,
    connection_params: Optional[dict] = None,
) -> TranslationRunStats:
    """
    Run the translation pipeline once.

    Args:
        config: The run configuration.
        limit: Optional maximum number of source products.
        debug_sql: Log every SQL statement.
        use_cache: Use the SQLite translation cache.
        check_language: Warn about source texts not in the source locale.
            Defaults to the LANGUAGE_CHECK_ENABLED setting.
        client: Translation client to use instead of LibreTranslate.
        connection_params: psycopg2 connection parameters overriding settings.

    Returns:
        TranslationRunStats of the run.

    Raises:
        FetchError: If the source products cannot be read.
        psycopg2.OperationalError: If the database cannot be reached.
    """
    start_time = time.time()
    client = client or build_translation_client(use_cache=use_cache)

    if check_language is None:
        check_language = LANGUAGE_CHECK_ENABLED

    checker = None
    if check_language:
        checker = SourceLanguageChecker((config.source_locale,) + config.target_locales)

    with postgres_connection(connection_params, debug=debug_sql) as conn:
        repository = ProductRepository(
            conn, config.attribute_ids, upsert_strategy=config.upsert_strategy
        )
        products = repository.fetch_source_products(config.source_locale, limit=limit)

        orchestrator = TranslationOrchestrator(client, repository, config, checker)
        stats = orchestrator.run(products)

    if isinstance(client, CachedTranslationClient):
        logger.info(f"Translation cache: {client.hits} hits, {client.misses} misses")

    logger.info(f"Translation batch completed in {time.time() - start_time:.2f} seconds")
    return stats
