"""
Translation clients.

The orchestrator only depends on the TranslationClient interface: given a
text and a source and target locale, return the translated text or raise
TranslationError. This module provides the LibreTranslate implementation
used in production and a caching wrapper around any client.

License: MIT
"""

import time
from typing import Optional

import requests

from ..config.logging_config import get_logger
from ..config.settings import (
    LIBRETRANSLATE_API_KEY,
    LIBRETRANSLATE_URL,
    TRANSLATION_MAX_RETRIES,
    TRANSLATION_RETRY_DELAY,
    TRANSLATION_TIMEOUT_SECONDS,
)
from ..core.errors import TranslationError
from .cache import get_from_cache, save_to_cache

logger = get_logger(__name__)


class TranslationClient:
    """Interface of a machine translation backend."""

    def translate(self, text: str, source_locale: str, target_locale: str) -> str:
        """
        Translate text from source_locale into target_locale.

        Raises:
            TranslationError: On any upstream failure, including an empty result.
        """
        raise NotImplementedError


class LibreTranslateClient(TranslationClient):
    """
    Client for the LibreTranslate HTTP API.

    Each call sends one text. Failed attempts (HTTP errors, network errors,
    malformed or empty responses) are retried up to max_retries times in
    total, with retry_delay seconds between attempts. Once the attempts are
    exhausted a TranslationError is raised.
    """

    def __init__(
        self,
        url: str = LIBRETRANSLATE_URL,
        api_key: Optional[str] = LIBRETRANSLATE_API_KEY,
        timeout: float = TRANSLATION_TIMEOUT_SECONDS,
        max_retries: int = TRANSLATION_MAX_RETRIES,
        retry_delay: float = TRANSLATION_RETRY_DELAY,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.api_key = api_key
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay
        self.session = session or requests.Session()

    def _request(self, text: str, source_locale: str, target_locale: str) -> str:
        payload = {
            "q": text,
            "source": source_locale,
            "target": target_locale,
            "format": "text",
        }
        if self.api_key:
            payload["api_key"] = self.api_key

        try:
            response = self.session.post(self.url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise TranslationError(
                f"Request to {self.url} failed: {e}", source_locale, target_locale
            ) from e

        if response.status_code != 200:
            raise TranslationError(
                f"Translation service returned status {response.status_code}: "
                f"{response.text[:200]}",
                source_locale, target_locale
            )

        try:
            translated = response.json().get("translatedText")
        except ValueError as e:
            raise TranslationError(
                f"Malformed response from translation service: {e}",
                source_locale, target_locale
            ) from e

        # Batch-style responses carry a list; a single text yields one entry.
        if isinstance(translated, list):
            translated = translated[0] if translated else None

        if not isinstance(translated, str) or not translated.strip():
            raise TranslationError(
                "Translation service returned an empty result",
                source_locale, target_locale
            )

        return translated

    def translate(self, text: str, source_locale: str, target_locale: str) -> str:
        last_error = None

        for attempt in range(self.max_retries):
            try:
                return self._request(text, source_locale, target_locale)
            except TranslationError as e:
                last_error = e
                logger.warning(
                    f"Translation attempt {attempt + 1}/{self.max_retries} "
                    f"({source_locale}->{target_locale}) failed: {e}"
                )
                if attempt < self.max_retries - 1:
                    time.sleep(self.retry_delay)

        raise last_error


class CachedTranslationClient(TranslationClient):
    """
    Wraps a client with the SQLite translation cache.

    Only successful translations are cached, so a failure is retried on the
    next run.
    """

    def __init__(self, client: TranslationClient, cache_path: Optional[str]):
        self.client = client
        self.cache_path = cache_path
        self.hits = 0
        self.misses = 0

    def translate(self, text: str, source_locale: str, target_locale: str) -> str:
        cached = get_from_cache(text, source_locale, target_locale, self.cache_path)
        # Blank entries count as misses so they get overwritten.
        if cached and cached.strip():
            self.hits += 1
            return cached

        self.misses += 1
        translated = self.client.translate(text, source_locale, target_locale)
        if translated and translated.strip():
            save_to_cache(text, translated, source_locale, target_locale, self.cache_path)
        return translated
