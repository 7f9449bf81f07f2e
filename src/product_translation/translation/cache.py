"""
SQLite-based translation cache.

Product descriptions are often shared between products (variants of the same
item, boilerplate short descriptions). Caching translations per
(source text, source locale, target locale) avoids paying the translation
service twice for the same text, across products and across runs.

The cache is best effort: a failing lookup or save is logged and treated as
a cache miss, never as a translation failure.

License: MIT
"""

import os
import sqlite3
from contextlib import closing
from typing import Optional

from ..config.logging_config import get_logger

logger = get_logger(__name__)

CACHE_FILE_NAME = "product_translation_cache.db"


def initialize_translation_cache(base_path: Optional[str] = None) -> str:
    """
    Create and initialize the SQLite database used for translation caching.

    Reuses an existing database: table creation uses IF NOT EXISTS.

    Args:
        base_path: Directory for the cache file. Created if missing.
            Defaults to the current working directory.

    Returns:
        The full path to the cache database file.

    Table structure:
        - source_text (TEXT): The text that was translated
        - source_lang (TEXT): Source locale code (e.g. "nl")
        - target_lang (TEXT): Target locale code (e.g. "en")
        - translated_text (TEXT): The translation
        - timestamp (TIMESTAMP): When the translation was cached
        Primary key: (source_text, source_lang, target_lang)
    """
    cache_dir = base_path or os.getcwd()
    os.makedirs(cache_dir, exist_ok=True)
    db_path = os.path.join(cache_dir, CACHE_FILE_NAME)

    with closing(sqlite3.connect(db_path)) as conn:
        # The same text is translated into several locales, so the
        # language pair is part of the key.
        conn.execute('''
        CREATE TABLE IF NOT EXISTS translation_cache (
            source_text TEXT NOT NULL,
            source_lang TEXT NOT NULL,
            target_lang TEXT NOT NULL,
            translated_text TEXT NOT NULL,
            timestamp TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            PRIMARY KEY (source_text, source_lang, target_lang)
        )
        ''')
        conn.commit()

    logger.info(f"Translation cache initialized at {db_path}")
    return db_path


def get_from_cache(
    text: str,
    source_lang: str,
    target_lang: str,
    cache_path: Optional[str] = None
) -> Optional[str]:
    """
    Retrieve a cached translation.

    Returns:
        The cached translated text, or None on a miss, when no cache path
        is given, or when the lookup fails.
    """
    if not cache_path:
        return None

    try:
        with closing(sqlite3.connect(cache_path)) as conn:
            row = conn.execute(
                """
                SELECT translated_text
                FROM translation_cache
                WHERE source_text=? AND source_lang=? AND target_lang=?
                """,
                (text, source_lang, target_lang)
            ).fetchone()
    except sqlite3.Error as e:
        logger.error(f"Error retrieving from translation cache: {e}")
        return None

    return row[0] if row else None


def save_to_cache(
    text: str,
    translated_text: str,
    source_lang: str,
    target_lang: str,
    cache_path: Optional[str] = None
) -> None:
    """
    Save a translation to the cache, replacing any previous entry.
    """
    if not cache_path:
        return

    try:
        with closing(sqlite3.connect(cache_path)) as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO translation_cache
                (source_text, source_lang, target_lang, translated_text)
                VALUES (?, ?, ?, ?)
                """,
                (text, source_lang, target_lang, translated_text)
            )
            conn.commit()
    except sqlite3.Error as e:
        logger.error(f"Error saving to translation cache: {e}")


def get_cache_stats(cache_path: str) -> dict:
    """
    Get statistics about the translation cache.

    Returns:
        A dictionary with:
        - total_entries: Total number of cached translations
        - by_language_pair: Dict mapping (source, target) to count
    """
    try:
        with closing(sqlite3.connect(cache_path)) as conn:
            total_entries = conn.execute(
                "SELECT COUNT(*) FROM translation_cache"
            ).fetchone()[0]
            by_language_pair = {
                (row[0], row[1]): row[2]
                for row in conn.execute(
                    """
                    SELECT source_lang, target_lang, COUNT(*)
                    FROM translation_cache
                    GROUP BY source_lang, target_lang
                    """
                )
            }
    except sqlite3.Error as e:
        logger.error(f"Error getting cache statistics: {e}")
        return {'total_entries': 0, 'by_language_pair': {}}

    return {
        'total_entries': total_entries,
        'by_language_pair': by_language_pair
    }
