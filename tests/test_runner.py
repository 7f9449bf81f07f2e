"""
Tests for the batch runner and the run_translation CLI.
"""

from contextlib import contextmanager

import pytest

import run_translation
from product_translation.core import connections
from product_translation.core.errors import FetchError
from product_translation.pipeline import runner

from conftest import FakeConnection, FakeTranslationClient, db_error

SOURCE_ROWS = [("ABC1", 42, "Stoel", "Een stoel.", "Stoel.", "web", "nl")]


def patch_connection(monkeypatch, conn):
    @contextmanager
    def fake_connection(params=None, debug=False):
        yield conn

    monkeypatch.setattr(runner, "postgres_connection", fake_connection)


class TestRunTranslationBatch:

    def test_end_to_end(self, monkeypatch, config):
        def responder(query, params):
            if query.strip().startswith("SELECT"):
                return SOURCE_ROWS
            return 1

        conn = FakeConnection(responder)
        patch_connection(monkeypatch, conn)

        stats = runner.run_translation_batch(config, client=FakeTranslationClient())

        assert stats.pairs_translated == 3
        assert stats.flat_rows_updated == 3
        assert stats.attribute_rows_upserted == 6
        statements = [query.split()[0] for query, _ in conn.executed]
        assert statements == ["SELECT"] + ["UPDATE", "INSERT", "INSERT"] * 3

    def test_fetch_failure_is_fatal(self, monkeypatch, config):
        patch_connection(monkeypatch, FakeConnection(lambda query, params: db_error()))
        client = FakeTranslationClient()

        with pytest.raises(FetchError):
            runner.run_translation_batch(config, client=client)

        assert client.calls == []

    def test_build_client_without_cache(self):
        client = runner.build_translation_client(use_cache=False)

        assert type(client).__name__ == "LibreTranslateClient"


class TestCli:

    def test_fetch_error_exit_code(self, monkeypatch):
        def failing_run(*args, **kwargs):
            raise FetchError("no database", locale="nl")

        monkeypatch.setattr(runner, "run_translation_batch", failing_run)

        assert run_translation.main(["--no-progress"]) == 1

    def test_invalid_configuration_exit_code(self):
        assert run_translation.main(["--source-locale", "nl", "--target-locales", "en,nl"]) == 2

    def test_successful_run(self, monkeypatch):
        received = {}

        def fake_run(config, **kwargs):
            received["config"] = config
            received.update(kwargs)

        monkeypatch.setattr(runner, "run_translation_batch", fake_run)

        exit_code = run_translation.main(
            ["--source-locale", "nl", "--target-locales", "fr,de", "--limit", "5", "--no-cache"]
        )

        assert exit_code == 0
        assert received["config"].target_locales == ("fr", "de")
        assert received["limit"] == 5
        assert received["use_cache"] is False
        assert received["check_language"] is None

    @pytest.mark.parametrize("value", ["0", "-3"])
    def test_limit_below_one_is_rejected(self, value):
        with pytest.raises(SystemExit) as excinfo:
            run_translation.parse_arguments(["--limit", value])

        assert excinfo.value.code == 2

    def test_dry_run_database_error_exit_code(self, monkeypatch):
        def responder(query, params):
            if "COUNT(*)" in query:
                return db_error()
            return SOURCE_ROWS

        @contextmanager
        def fake_connection(params=None, debug=False):
            yield FakeConnection(responder)

        monkeypatch.setattr(connections, "postgres_connection", fake_connection)

        assert run_translation.main(["--dry-run", "--no-progress"]) == 1

    def test_dry_run_reports_counts(self, monkeypatch):
        def responder(query, params):
            if "COUNT(*)" in query:
                return [(7,)]
            return SOURCE_ROWS

        @contextmanager
        def fake_connection(params=None, debug=False):
            yield FakeConnection(responder)

        monkeypatch.setattr(connections, "postgres_connection", fake_connection)

        assert run_translation.main(["--dry-run", "--limit", "1"]) == 0
