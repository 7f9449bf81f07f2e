"""
Tests for the lingua-based source language check.
"""

from lingua import Language

from product_translation.translation.language_check import SourceLanguageChecker, language_for_locale


class TestLanguageForLocale:

    def test_plain_code(self):
        assert language_for_locale("nl") == Language.DUTCH

    def test_region_suffix(self):
        assert language_for_locale("fr_BE") == Language.FRENCH
        assert language_for_locale("de-AT") == Language.GERMAN

    def test_unknown_code(self):
        assert language_for_locale("xx") is None


class TestSourceLanguageChecker:

    checker = SourceLanguageChecker(["nl", "en", "fr", "de"])

    def test_dutch_text_matches(self):
        text = "Een comfortabele houten stoel voor in de woonkamer of de keuken."

        assert self.checker.matches(text, "nl")

    def test_english_text_on_dutch_row(self):
        text = "A comfortable wooden chair for the living room or the kitchen."

        assert not self.checker.matches(text, "nl")
        assert self.checker.check(text, "nl", context="sku 'ABC1' description") is False

    def test_short_text_always_matches(self):
        assert self.checker.matches("Chair.", "nl")

    def test_single_language_disables_detection(self):
        checker = SourceLanguageChecker(["nl"])

        assert checker.matches("A comfortable wooden chair for the living room.", "nl")
