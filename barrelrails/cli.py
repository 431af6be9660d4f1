#!/usr/bin/env python3
"""
barrelrails CLI - Architecture lint for feature/barrel/layer codebases.

Handles config discovery, initialization, and delegates to the lint runner.
"""

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .config import (
    CONFIG_NAME,
    build_config,
    init_config,
    load_raw_config,
    validate_config,
)
from .diagnostics import DiagnosticKind, RuleKind
from .errors import ConfigError
from .layers import allowed_targets
from .lint_runner import lint_paths, report_findings
from .lint_types import BLUE, GREEN, NC, RED, YELLOW
from .log import configure
from .models import ArchitecturalLayer

logger = logging.getLogger(__name__)


def show_rules(config) -> None:
    """Display the rules with their enabled state and severity."""
    print(f"{BLUE}=== barrelrails rules ==={NC}")
    for rule in RuleKind:
        settings = config.rule_settings(rule.rule_id)
        state = f"{GREEN}on{NC}" if settings.enabled else f"{YELLOW}off{NC}"
        print(f"  [{rule.rule_id}] {state}")
        for kind in DiagnosticKind:
            if kind.rule is rule:
                severity = settings.severity or kind.default_severity
                print(f"    {severity.upper():5} {kind.name.lower()}")

    print(f"\n{BLUE}LAYERS (first match wins):{NC}")
    for layer, tokens in config.classifier.settings.layer_priority:
        print(f"  {layer.display_name}: {', '.join(sorted(tokens))}")
        targets = [t.display_name for t in allowed_targets(layer)
                   if t is not ArchitecturalLayer.UNKNOWN]
        print(f"    may import: {', '.join(targets)}")


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="barrelrails - Keep feature barrels and layers honest",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  barrelrails                 Lint the source root (same as --all)
  barrelrails lib/feature_a   Lint selected files or directories
  barrelrails --show          Show rules and layers
  barrelrails --init          Create barrelrails.yaml
  barrelrails --fix           Apply suggested corrections
  barrelrails --watch         Live linting on file save
  barrelrails-cycles          Detect barrel export cycles
        """,
    )
    parser.add_argument("paths", nargs="*", help="Files or directories to lint")
    parser.add_argument("--version", action="version", version=f"barrelrails {__version__}")
    parser.add_argument("--init", action="store_true", help=f"Initialize {CONFIG_NAME}")
    parser.add_argument("--validate", action="store_true", help="Validate YAML config")
    parser.add_argument("--show", action="store_true", help="Show rules and layers")
    parser.add_argument("--all", action="store_true", help="Lint the whole source root")
    parser.add_argument("--file", "-f", help="Lint a specific file")
    parser.add_argument("--config", "-c", help=f"Path to {CONFIG_NAME}")
    parser.add_argument("--watch", action="store_true", help="Live linting on file save")
    parser.add_argument("--fix", action="store_true", help="Apply suggested corrections")
    parser.add_argument("--dry-run", action="store_true", help="Show what --fix would change")
    parser.add_argument("--no-backup", action="store_true", help="Don't create .bak files with --fix")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log run details to stderr")
    return parser


def _determine_paths(args, config) -> list[str]:
    """Determine which files to lint based on CLI args."""
    if args.file:
        return [args.file] if Path(args.file).exists() else []
    if args.paths and not args.all:
        return list(args.paths)
    return [config.source_root]


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = _parser().parse_args(argv)
    configure(verbose=args.verbose)

    if args.init:
        sys.exit(0 if init_config() else 1)

    try:
        data = load_raw_config(args.config)
    except ConfigError as e:
        logger.error("%sERROR: %s%s", RED, e, NC)
        sys.exit(1)

    if args.validate:
        errors = validate_config(data)
        if errors:
            print("Validation errors:")
            for error in errors:
                print(f"  - {error}")
            sys.exit(1)
        print(f"{GREEN}{CONFIG_NAME} is valid{NC}")
        sys.exit(0)

    try:
        config = build_config(data)
    except ConfigError as e:
        logger.error("%sERROR: %s%s", RED, e, NC)
        print("\nRun: barrelrails --validate")
        sys.exit(1)

    if args.show:
        show_rules(config)
        sys.exit(0)

    if args.watch:
        try:
            from .watch import run_watch_mode
        except ImportError:
            print(f"{RED}ERROR: watchdog package not installed{NC}")
            print("Install with: pip install barrelrails[watch]")
            sys.exit(1)
        sys.exit(0 if run_watch_mode(config, args.paths[0] if args.paths else ".") else 1)

    paths = _determine_paths(args, config)

    if args.fix or args.dry_run:
        from .autofix import run_autofix
        run_autofix(config, paths, dry_run=args.dry_run, backup=not args.no_backup)
        if args.dry_run:
            sys.exit(0)

    print(f"{BLUE}barrelrails - Architecture Lint{NC}")
    print("=" * 30)
    findings = lint_paths(paths, config)
    sys.exit(report_findings(findings))


if __name__ == "__main__":
    main()
