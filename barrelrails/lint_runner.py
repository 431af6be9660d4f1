"""Host side of the rule set: files in, findings out."""

import dataclasses
import logging
from pathlib import Path

from .config import Config, read_package_name
from .directives import extract_directives
from .graph import SKIP_DIRECTORIES
from .lint_types import GREEN, NC, RED, YELLOW, Finding
from .rules import RuleSet

logger = logging.getLogger(__name__)


def virtual_path(filepath: Path | str, config: Config) -> str:
    """Uniform "/"-separated path handed to the rules.

    Files under the source root are named relative to its parent
    (``lib/feature_auth/auth.dart``); anything else relative to the
    working directory when possible.
    """
    path = Path(filepath).resolve()
    # Under the source root the first segment is always config.source_dir
    root = Path(config.source_root).resolve()
    for base in (root.parent, Path.cwd()):
        try:
            return path.relative_to(base).as_posix()
        except ValueError:
            continue
    return path.as_posix()


def collect_files(paths: list[str], config: Config) -> list[Path]:
    """Source files named by ``paths``; directories are walked in sorted order."""
    classifier = config.classifier
    files = []
    for raw in paths:
        path = Path(raw)
        if path.is_file():
            files.append(path)
            continue
        if not path.is_dir():
            logger.warning("SKIP %s (not found)", raw)
            continue
        for candidate in sorted(path.rglob("*")):
            rel = candidate.relative_to(path)
            if any(part in SKIP_DIRECTORIES for part in rel.parts[:-1]):
                continue
            if not candidate.is_file() or not candidate.name.endswith(config.extensions):
                continue
            if classifier.is_excluded(candidate.as_posix()):
                continue
            files.append(candidate)
    return files


def with_package_name(config: Config) -> Config:
    """Fill ``package_name`` from pubspec.yaml beside the source root when unset."""
    if config.package_name:
        return config
    name = read_package_name(Path(config.source_root).resolve().parent)
    if not name:
        return config
    logger.debug("Using package name %s from pubspec.yaml", name)
    return dataclasses.replace(config, package_name=name)


def lint_text(text: str, current_file_path: str, config: Config,
              rule_set: RuleSet | None = None, display: str | None = None) -> list[Finding]:
    """Evaluate every directive of one source text."""
    rule_set = rule_set or RuleSet(config)
    findings = []
    for directive in extract_directives(text, config):
        site = directive.site(current_file_path)
        for diagnostic in rule_set.evaluate(site):
            findings.append(Finding(
                file=display or current_file_path,
                line=directive.line,
                rule_id=diagnostic.rule.rule_id,
                message=diagnostic.message,
                level="BLOCK" if diagnostic.blocking else "WARN",
                suggestion=diagnostic.suggestion,
                correction=diagnostic.correction,
            ))
    return findings


def lint_file(filepath: Path | str, config: Config,
              rule_set: RuleSet | None = None) -> list[Finding]:
    """Lint a single file; unreadable files are logged and yield nothing."""
    try:
        text = Path(filepath).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("SKIP %s (read error: %s)", filepath, e)
        return []
    return lint_text(text, virtual_path(filepath, config), config, rule_set, str(filepath))


def lint_paths(paths: list[str], config: Config) -> list[Finding]:
    config = with_package_name(config)
    rule_set = RuleSet(config)
    findings = []
    for filepath in collect_files(paths, config):
        findings.extend(lint_file(filepath, config, rule_set))
    return findings


def report_findings(findings: list[Finding]) -> int:
    """Print findings and return exit code."""
    blocking = [f for f in findings if f.level == "BLOCK"]
    warnings = [f for f in findings if f.level == "WARN"]

    for f in blocking:
        print(f"{RED}BLOCK{NC} {f.file}:{f.line}")
        print(f"  [{f.rule_id}] {f.message}")
        if f.suggestion:
            print(f"  -> {f.suggestion}")
    for f in warnings:
        print(f"{YELLOW}WARN{NC} {f.file}:{f.line}")
        print(f"  [{f.rule_id}] {f.message}")
        if f.suggestion:
            print(f"  -> {f.suggestion}")

    print("=" * 30)
    print(f"BLOCKING: {len(blocking)} | WARNINGS: {len(warnings)}")

    if blocking:
        print(f"\n{RED}Fix blocking issues or run: barrelrails --fix{NC}")
        return 1
    print(f"\n{GREEN}barrelrails: PASSED{NC}")
    return 0
