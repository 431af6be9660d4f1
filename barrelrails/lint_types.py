"""Type definitions and constants for the barrelrails linter."""

from typing import NamedTuple

from .diagnostics import Correction

# Colors for terminal output
RED = "\033[0;31m"
YELLOW = "\033[1;33m"
GREEN = "\033[0;32m"
BLUE = "\033[0;34m"
NC = "\033[0m"  # No Color


class Finding(NamedTuple):
    """One diagnostic placed in a file on disk."""

    file: str
    line: int
    rule_id: str
    message: str
    level: str  # "BLOCK" or "WARN"
    suggestion: str = ""
    correction: Correction | None = None
