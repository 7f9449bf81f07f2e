"""
Translation submodule of the product translation pipeline.

Provides machine translation of product texts through LibreTranslate, with:
- a SQLite cache keyed on text and language pair
- bounded retries of failed requests
- an optional check that source texts are in the declared source locale

License: MIT
"""

from .cache import (
    initialize_translation_cache,
    get_from_cache,
    save_to_cache,
    get_cache_stats,
)
from .client import (
    TranslationClient,
    LibreTranslateClient,
    CachedTranslationClient,
)
from .language_check import SourceLanguageChecker, language_for_locale

__all__ = [
    # Cache functions
    "initialize_translation_cache",
    "get_from_cache",
    "save_to_cache",
    "get_cache_stats",
    # Clients
    "TranslationClient",
    "LibreTranslateClient",
    "CachedTranslationClient",
    # Language check
    "SourceLanguageChecker",
    "language_for_locale",
]
