"""Shared test fixtures for barrelrails tests."""

import logging
import sys

import pytest

from barrelrails.config import Config
from barrelrails.diagnostics import SiteContext, SiteKind
from barrelrails.rules import RuleSet


class _StdoutHandler(logging.Handler):
    """A handler that always writes to the *current* sys.stdout.

    Unlike StreamHandler(sys.stdout), this resolves sys.stdout at emit-time
    so it works with pytest's capsys fixture.
    """

    def emit(self, record):
        try:
            msg = self.format(record)
            sys.stdout.write(msg + "\n")
            sys.stdout.flush()
        except Exception:
            self.handleError(record)


@pytest.fixture(autouse=True)
def _setup_logging():
    """Route all barrelrails loggers to stdout so capsys can capture them."""
    handler = _StdoutHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.setLevel(logging.DEBUG)

    root_logger = logging.getLogger("barrelrails")
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.DEBUG)
    root_logger.propagate = False

    yield

    root_logger.removeHandler(handler)


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def layered_config():
    """Project that ships layer-specific barrels."""
    return Config(prefer_layer_barrels=True)


@pytest.fixture
def lint(config):
    """Evaluate one import site: ``lint(current_path, uri)``."""
    def _lint(current, uri, kind=SiteKind.IMPORT, cfg=None):
        site = SiteContext(uri, current, kind, uri_span=(0, len(uri)), directive_span=(0, 0))
        return RuleSet(cfg or config).evaluate(site)
    return _lint


@pytest.fixture
def write_tree(tmp_path):
    """Write ``{relative_path: text}`` under tmp_path and return the root."""
    def _write(files: dict, root=None):
        base = root or tmp_path
        for rel, text in files.items():
            path = base / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text)
        return base
    return _write
