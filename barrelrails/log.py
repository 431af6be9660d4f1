"""Logging setup for the barrelrails command-line tools.

Run diagnostics go to stderr; lint and cycle results are printed to stdout.

Configuration via environment variables:
  BARRELRAILS_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: WARNING, DEBUG with --verbose)
  BARRELRAILS_LOG_FORMAT: "json" for one JSON object per line (default: plain text)
  BARRELRAILS_LOG_FILE: optional path to also write logs to a file
"""

from __future__ import annotations

import json
import logging
import os
import sys

ROOT_LOGGER = "barrelrails"


class _JSONFormatter(logging.Formatter):
    """Formats log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str, ensure_ascii=False)


def _formatter() -> logging.Formatter:
    if os.environ.get("BARRELRAILS_LOG_FORMAT", "").lower() == "json":
        return _JSONFormatter()
    return logging.Formatter("%(message)s")


def configure(verbose: bool = False) -> logging.Logger:
    """Install the barrelrails handlers (idempotent: replaces earlier ones)."""
    root = logging.getLogger(ROOT_LOGGER)

    default = "DEBUG" if verbose else "WARNING"
    level_name = os.environ.get("BARRELRAILS_LOG_LEVEL", default).upper()
    root.setLevel(getattr(logging, level_name, logging.WARNING))

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(_formatter())
    root.addHandler(stderr_handler)

    log_file = os.environ.get("BARRELRAILS_LOG_FILE")
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(_JSONFormatter())
        root.addHandler(file_handler)

    root.propagate = False
    return root
