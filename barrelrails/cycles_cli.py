#!/usr/bin/env python3
"""
barrelrails-cycles - Batch detector for barrel export cycles.

Exit codes: 0 no cycles, 1 cycles found, 2 configuration or I/O error.
"""

import argparse
import logging
import sys

from .config import load_config
from .errors import ConfigError
from .graph import build_graph, find_cycles
from .log import configure

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CYCLES = 1
EXIT_ERROR = 2


def format_cycles(cycles) -> list[str]:
    """Report lines for found cycles, each closing back to its first barrel."""
    noun = "dependency" if len(cycles) == 1 else "dependencies"
    lines = [f"❌ Found {len(cycles)} circular {noun}:", ""]
    for i, cycle in enumerate(cycles, 1):
        lines.append(f"Cycle {i}:")
        members = cycle.members
        for j, member in enumerate(members):
            lines.append(f"  {member}")
            if j < len(members) - 1:
                lines.append("    ↓ exports")
            else:
                lines.append(f"    ↓ exports back to {members[0]}")
        lines.append("")
    return lines


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="barrelrails-cycles",
        description="Detects circular dependencies between barrel files.",
    )
    parser.add_argument("--root", "-r", help="Source directory to analyze (default: source_root, lib)")
    parser.add_argument("--config", "-c", help="Path to barrelrails.yaml")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show verbose output")
    args = parser.parse_args(argv)
    configure(verbose=args.verbose)

    try:
        config = load_config(args.config)
        root = args.root or config.source_root
        logger.info("Analyzing barrel files in: %s", root)
        graph = build_graph(root, config)
    except ConfigError as e:
        logger.error("Error: %s", e)
        return EXIT_ERROR

    cycles = find_cycles(graph)
    if not cycles:
        print("✅ No circular dependencies found!")
        return EXIT_OK

    for line in format_cycles(cycles):
        print(line)
    return EXIT_CYCLES


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
