"""
Command-line surface tests: argument handling and exit statuses.
"""
import pytest

import main
from core import constants
from models.run import RunMode, RunResult
from services.components.hash_calculator import HashCalculator
from services.watch_service import WatchService

DOCS = "https://ex.com/docs"


@pytest.fixture
def patched_service(monkeypatch, fake_fetcher, token_generator):
    """Routes main's WatchService through the in-memory fetcher."""
    created = []

    def _factory(store_path, mode=RunMode.CHECK, notifier=None):
        service = WatchService(
            store_path,
            mode=mode,
            notifier=notifier,
            fetcher=fake_fetcher,
            token_generator=token_generator,
        )
        created.append(service)
        return service

    monkeypatch.setattr(main, "WatchService", _factory)
    return created


class TestExitCodes:
    def test_changed_check_exits_one(self, patched_service, store_file, fake_fetcher, docs_html, make_key):
        path = store_file({make_key(DOCS, ".content"): ""})
        fake_fetcher.pages[DOCS] = docs_html("Hello")

        assert main.main(["check", "--path", str(path)]) == constants.EXIT_CHANGED

    def test_unchanged_check_exits_zero(self, patched_service, store_file, fake_fetcher, docs_html, make_key):
        path = store_file({make_key(DOCS, ".content"): HashCalculator.calculate_hash("Hello")})
        fake_fetcher.pages[DOCS] = docs_html("Hello")

        assert main.main(["check", "--path", str(path)]) == constants.EXIT_OK

    def test_per_target_failure_exits_zero(self, patched_service, store_file, make_key):
        path = store_file({make_key(DOCS, ".content"): "abc", "malformed": ""})

        assert main.main(["check", "--path", str(path)]) == constants.EXIT_OK

    def test_init_exits_zero_even_when_content_differs(
        self, patched_service, store_file, read_store, fake_fetcher, docs_html, make_key
    ):
        key = make_key(DOCS, ".content")
        path = store_file({key: ""})
        fake_fetcher.pages[DOCS] = docs_html("Hello")

        assert main.main(["init", "--path", str(path)]) == constants.EXIT_OK
        assert read_store(path) == {key: ""}
        assert patched_service[0].mode == RunMode.INIT

    def test_missing_store_is_fatal(self, patched_service, tmp_path):
        assert main.main(["check", "--path", str(tmp_path / "missing.json")]) == constants.EXIT_FATAL

    def test_malformed_telegram_aborts_before_fetching(
        self, patched_service, store_file, fake_fetcher, make_key
    ):
        path = store_file({make_key(DOCS, ".content"): ""})

        code = main.main(["check", "--path", str(path), "--telegram", "token-without-chat"])

        assert code == constants.EXIT_FATAL
        assert patched_service == []
        assert fake_fetcher.requested == []

    def test_empty_telegram_disables_notifications(self, patched_service, store_file, fake_fetcher, docs_html, make_key):
        path = store_file({make_key(DOCS, ".content"): ""})
        fake_fetcher.pages[DOCS] = docs_html("Hello")

        assert main.main(["check", "--path", str(path), "--telegram", ""]) == constants.EXIT_CHANGED
        assert patched_service[0].detector.notifier.is_enabled() is False


class TestParser:
    def test_init_has_no_telegram_flag(self):
        with pytest.raises(SystemExit):
            main.build_parser().parse_args(["init", "--telegram", "a,1"])

    def test_command_required(self):
        with pytest.raises(SystemExit):
            main.build_parser().parse_args([])

    def test_exit_code_mapping(self):
        assert main.exit_code_for(RunResult(mode=RunMode.CHECK, changed=True)) == 1
        assert main.exit_code_for(RunResult(mode=RunMode.CHECK, changed=False)) == 0
        assert main.exit_code_for(RunResult(mode=RunMode.INIT, changed=True)) == 0
