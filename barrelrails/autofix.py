"""
barrelrails auto-fix - Apply the corrections attached to findings.

Edits are applied per file from the end of the file backwards so earlier
offsets stay valid; an edit overlapping one already applied is skipped.
"""

import shutil
from pathlib import Path

from .config import Config
from .diagnostics import Correction
from .lint_runner import collect_files, lint_file, with_package_name
from .lint_types import BLUE, GREEN, NC, YELLOW, Finding
from .rules import RuleSet


def select_corrections(findings: list[Finding]) -> list[Finding]:
    """Fixable findings in descending span order, without overlaps."""
    fixable = [f for f in findings if f.correction is not None]
    fixable.sort(key=lambda f: f.correction.target_range, reverse=True)
    selected = []
    floor = None
    for finding in fixable:
        start, end = finding.correction.target_range
        if floor is not None and end > floor:
            continue
        selected.append(finding)
        floor = start
    return selected


def apply_corrections(text: str, corrections: list[Correction]) -> str:
    """Apply non-overlapping corrections given in descending span order."""
    for correction in corrections:
        start, end = correction.target_range
        text = text[:start] + correction.replacement_text + text[end:]
    return text


def fix_file(filepath: Path, config: Config, rule_set: RuleSet,
             dry_run: bool = False, backup: bool = True) -> int:
    """Fix one file. Returns the number of corrections applied (or that would be)."""
    findings = select_corrections(lint_file(filepath, config, rule_set))
    if not findings:
        return 0

    original = filepath.read_text(encoding="utf-8")
    for f in reversed(findings):
        start, end = f.correction.target_range
        old = original[start:end].strip()
        new = f.correction.replacement_text.strip()
        if dry_run:
            print(f"{YELLOW}WOULD FIX{NC} {filepath}:{f.line} [{f.rule_id}]")
        else:
            print(f"{GREEN}FIXED{NC} {filepath}:{f.line} [{f.rule_id}]")
        print(f"  - {old}")
        if new:
            print(f"  + {new}")

    if not dry_run:
        if backup:
            shutil.copy(filepath, filepath.with_name(filepath.name + ".bak"))
        filepath.write_text(
            apply_corrections(original, [f.correction for f in findings]),
            encoding="utf-8",
        )
    return len(findings)


def run_autofix(config: Config, paths: list[str], dry_run: bool = False,
                backup: bool = True) -> int:
    """Run auto-fix on files.

    Returns number of files modified.
    """
    print(f"{BLUE}barrelrails --fix{' (dry run)' if dry_run else ''}{NC}")
    print("=" * 40)

    config = with_package_name(config)
    rule_set = RuleSet(config)
    total_fixes = 0
    files_modified = 0

    for filepath in collect_files(paths, config):
        fixes = fix_file(filepath, config, rule_set, dry_run=dry_run, backup=backup)
        if fixes:
            total_fixes += fixes
            if not dry_run:
                files_modified += 1

    print("=" * 40)
    if dry_run:
        print(f"Would fix {total_fixes} issue(s)")
    else:
        print(f"Fixed {total_fixes} issue(s) in {files_modified} file(s)")
    return files_modified
