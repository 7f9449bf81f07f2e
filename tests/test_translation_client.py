"""
Tests for the LibreTranslate client and the cached client wrapper.
"""

import pytest
import requests

from product_translation.core.errors import TranslationError
from product_translation.translation.cache import (
    get_cache_stats,
    initialize_translation_cache,
    save_to_cache,
)
from product_translation.translation.client import CachedTranslationClient, LibreTranslateClient

from conftest import FakeTranslationClient


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    """Returns the queued responses in order and records the payloads."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def post(self, url, json=None, timeout=None):
        self.requests.append((url, json, timeout))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def make_client(*responses, **kwargs):
    session = FakeSession(*responses)
    kwargs.setdefault("retry_delay", 0)
    kwargs.setdefault("max_retries", 3)
    client = LibreTranslateClient(url="http://translate.test/translate", session=session, **kwargs)
    return client, session


class TestLibreTranslateClient:

    def test_success(self):
        client, session = make_client(FakeResponse(payload={"translatedText": "A chair."}))

        assert client.translate("Een stoel.", "nl", "en") == "A chair."
        url, payload, timeout = session.requests[0]
        assert url == "http://translate.test/translate"
        assert payload == {"q": "Een stoel.", "source": "nl", "target": "en", "format": "text"}

    def test_api_key_is_sent(self):
        client, session = make_client(
            FakeResponse(payload={"translatedText": "Une chaise."}), api_key="secret"
        )

        client.translate("Een stoel.", "nl", "fr")

        assert session.requests[0][1]["api_key"] == "secret"

    def test_list_result(self):
        client, _ = make_client(FakeResponse(payload={"translatedText": ["Ein Stuhl."]}))

        assert client.translate("Een stoel.", "nl", "de") == "Ein Stuhl."

    def test_retries_then_succeeds(self):
        client, session = make_client(
            FakeResponse(status_code=503, text="busy"),
            FakeResponse(payload={"translatedText": "A chair."}),
        )

        assert client.translate("Een stoel.", "nl", "en") == "A chair."
        assert len(session.requests) == 2

    def test_http_error_after_retries(self):
        client, session = make_client(
            *[FakeResponse(status_code=429, text="quota exceeded")] * 3
        )

        with pytest.raises(TranslationError) as excinfo:
            client.translate("Een stoel.", "nl", "en")

        assert "429" in str(excinfo.value)
        assert excinfo.value.target_locale == "en"
        assert len(session.requests) == 3

    def test_network_error(self):
        client, _ = make_client(requests.ConnectionError("refused"), max_retries=1)

        with pytest.raises(TranslationError):
            client.translate("Een stoel.", "nl", "en")

    @pytest.mark.parametrize("payload", [
        {"translatedText": ""},
        {"translatedText": "   "},
        {"translatedText": []},
        {},
    ])
    def test_empty_result(self, payload):
        client, _ = make_client(FakeResponse(payload=payload), max_retries=1)

        with pytest.raises(TranslationError, match="empty result"):
            client.translate("Een stoel.", "nl", "en")

    def test_malformed_json(self):
        client, _ = make_client(FakeResponse(payload=ValueError("not json")), max_retries=1)

        with pytest.raises(TranslationError, match="Malformed"):
            client.translate("Een stoel.", "nl", "en")

    def test_max_retries_has_a_floor_of_one(self):
        client, _ = make_client(max_retries=0)

        assert client.max_retries == 1


class TestCachedTranslationClient:

    def test_translates_each_key_once(self, tmp_path):
        cache_path = initialize_translation_cache(str(tmp_path))
        inner = FakeTranslationClient()
        client = CachedTranslationClient(inner, cache_path)

        first = client.translate("Stoel.", "nl", "en")
        second = client.translate("Stoel.", "nl", "en")
        other_locale = client.translate("Stoel.", "nl", "fr")

        assert first == second == "[en]Stoel."
        assert other_locale == "[fr]Stoel."
        assert len(inner.calls) == 2
        assert (client.hits, client.misses) == (1, 2)
        assert get_cache_stats(cache_path)["by_language_pair"] == {("nl", "en"): 1, ("nl", "fr"): 1}

    def test_failures_are_not_cached(self, tmp_path):
        cache_path = initialize_translation_cache(str(tmp_path))
        failing = CachedTranslationClient(
            FakeTranslationClient(fail_when=lambda *args: True), cache_path
        )

        with pytest.raises(TranslationError):
            failing.translate("Stoel.", "nl", "en")

        assert get_cache_stats(cache_path)["total_entries"] == 0

    def test_blank_results_are_not_cached(self, tmp_path):
        cache_path = initialize_translation_cache(str(tmp_path))
        CachedTranslationClient(FakeTranslationClient(result="  "), cache_path).translate(
            "Stoel.", "nl", "en"
        )

        inner = FakeTranslationClient()
        result = CachedTranslationClient(inner, cache_path).translate("Stoel.", "nl", "en")

        assert result == "[en]Stoel."
        assert len(inner.calls) == 1

    def test_blank_cache_entry_is_a_miss(self, tmp_path):
        cache_path = initialize_translation_cache(str(tmp_path))
        save_to_cache("Stoel.", "  ", "nl", "en", cache_path)
        inner = FakeTranslationClient()
        client = CachedTranslationClient(inner, cache_path)

        assert client.translate("Stoel.", "nl", "en") == "[en]Stoel."
        assert (client.hits, client.misses) == (0, 1)
        assert len(inner.calls) == 1

    def test_cache_survives_new_client(self, tmp_path):
        cache_path = initialize_translation_cache(str(tmp_path))
        CachedTranslationClient(FakeTranslationClient(), cache_path).translate("Stoel.", "nl", "en")

        inner = FakeTranslationClient()
        result = CachedTranslationClient(inner, cache_path).translate("Stoel.", "nl", "en")

        assert result == "[en]Stoel."
        assert inner.calls == []

    def test_without_cache_path(self):
        inner = FakeTranslationClient()
        client = CachedTranslationClient(inner, None)

        client.translate("Stoel.", "nl", "en")
        client.translate("Stoel.", "nl", "en")

        assert len(inner.calls) == 2
