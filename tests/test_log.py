"""Tests for barrelrails.log."""

import json
import logging
import sys

import pytest

from barrelrails.log import ROOT_LOGGER, _JSONFormatter, configure


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("BARRELRAILS_LOG_LEVEL", "BARRELRAILS_LOG_FORMAT", "BARRELRAILS_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)


class TestConfigure:

    def test_default_level(self):
        assert configure().level == logging.WARNING

    def test_verbose(self):
        assert configure(verbose=True).level == logging.DEBUG

    def test_env_level_wins(self, monkeypatch):
        monkeypatch.setenv("BARRELRAILS_LOG_LEVEL", "error")
        assert configure(verbose=True).level == logging.ERROR

    def test_unknown_level_falls_back(self, monkeypatch):
        monkeypatch.setenv("BARRELRAILS_LOG_LEVEL", "LOUD")
        assert configure().level == logging.WARNING

    def test_idempotent(self):
        configure()
        root = configure()
        assert len(root.handlers) == 1
        assert root.propagate is False

    def test_plain_to_stderr(self, capsys):
        configure()
        logging.getLogger(f"{ROOT_LOGGER}.graph").warning("Skipping %s", "x.dart")
        assert capsys.readouterr().err == "Skipping x.dart\n"

    def test_json_format(self, monkeypatch, capsys):
        monkeypatch.setenv("BARRELRAILS_LOG_FORMAT", "json")
        configure()
        logging.getLogger(f"{ROOT_LOGGER}.config").error("bad config")
        entry = json.loads(capsys.readouterr().err)
        assert entry["level"] == "ERROR"
        assert entry["logger"] == "barrelrails.config"
        assert entry["event"] == "bad config"

    def test_log_file(self, monkeypatch, tmp_path):
        log_file = tmp_path / "barrelrails.log"
        monkeypatch.setenv("BARRELRAILS_LOG_FILE", str(log_file))
        root = configure()
        logging.getLogger(ROOT_LOGGER).warning("to file")
        for handler in root.handlers:
            handler.flush()
        assert json.loads(log_file.read_text())["event"] == "to file"
        configure()


def test_json_formatter_exception():
    try:
        raise ValueError("boom")
    except ValueError:
        record = logging.LogRecord("barrelrails", logging.ERROR, __file__, 1, "failed", None, None)
        record.exc_info = sys.exc_info()
    entry = json.loads(_JSONFormatter().format(record))
    assert "ValueError: boom" in entry["exc"]
