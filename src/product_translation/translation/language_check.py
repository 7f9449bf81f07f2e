"""
Source language sanity check.

Catalog editors sometimes paste text in the wrong language into the source
locale (an English description on a Dutch row, for example). Translating
such text still works, but usually produces odd results. This module uses
lingua to detect the language of a source text among the configured locales
and reports mismatches. It only ever logs; the text is translated anyway.

License: MIT
"""

from typing import Iterable, Optional

from lingua import Language, LanguageDetectorBuilder

from ..config.logging_config import get_logger

logger = get_logger(__name__)

# Texts shorter than this are too short for a reliable detection.
MIN_DETECTION_LENGTH = 20


def language_for_locale(locale: str) -> Optional[Language]:
    """
    Map a locale code such as "nl" or "fr_BE" to a lingua Language.

    Returns:
        The matching Language, or None if lingua does not know the code.
    """
    code = locale.split("_")[0].split("-")[0].upper()
    for language in Language.all():
        if language.iso_code_639_1.name == code:
            return language
    return None


class SourceLanguageChecker:
    """
    Detects whether a source text is written in the declared source locale.

    The detector is restricted to the languages of the run's locales, which
    keeps it fast and avoids confusing closely related languages that the
    catalog never contains.
    """

    def __init__(self, locales: Iterable[str]):
        self.languages = {}
        for locale in locales:
            language = language_for_locale(locale)
            if language is None:
                logger.warning(f"No language detection available for locale '{locale}'")
                continue
            self.languages[locale] = language

        distinct = set(self.languages.values())
        self._detector = (
            LanguageDetectorBuilder.from_languages(*distinct).build()
            if len(distinct) >= 2 else None
        )

    def matches(self, text: str, locale: str) -> bool:
        """
        Return False only when the text is confidently in another language.

        Short texts, unknown locales and undecided detections count as a match.
        """
        expected = self.languages.get(locale)
        if self._detector is None or expected is None:
            return True
        if len(text.strip()) < MIN_DETECTION_LENGTH:
            return True

        detected = self._detector.detect_language_of(text)
        return detected is None or detected == expected

    def check(self, text: str, locale: str, context: str = "") -> bool:
        """Log a warning when the text does not look like the given locale."""
        if self.matches(text, locale):
            return True
        logger.warning(
            f"Source text{' for ' + context if context else ''} does not look like "
            f"locale '{locale}'; translating anyway"
        )
        return False
