"""
barrelrails watch mode - Live linting during coding.

Re-runs the per-site rules on every saved source file. The cycle detector
reads the whole tree and is never run from here.
"""

import time
from pathlib import Path

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from .config import Config
from .graph import SKIP_DIRECTORIES
from .lint_runner import lint_file, with_package_name
from .lint_types import BLUE, GREEN, NC, RED, YELLOW
from .rules import RuleSet

DEBOUNCE_SECONDS = 1


class BarrelRailsHandler(FileSystemEventHandler):
    """Handle file system events for source files."""

    def __init__(self, config: Config):
        self.config = config
        self.rule_set = RuleSet(config)
        self.last_scan: dict[str, float] = {}

    def on_modified(self, event):
        if event.is_directory:
            return
        filepath = str(event.src_path)
        if not filepath.endswith(self.config.extensions):
            return
        if any(part in SKIP_DIRECTORIES for part in Path(filepath).parts):
            return
        if self.config.classifier.is_excluded(Path(filepath).as_posix()):
            return

        now = time.time()
        if filepath in self.last_scan and now - self.last_scan[filepath] < DEBOUNCE_SECONDS:
            return
        self.last_scan[filepath] = now

        self.lint_file(filepath)

    on_created = on_modified

    def lint_file(self, filepath: str):
        """Lint a single file and report results."""
        try:
            rel_path = Path(filepath).relative_to(Path.cwd())
        except ValueError:
            rel_path = filepath

        findings = lint_file(filepath, self.config, self.rule_set)
        if not findings:
            print(f"{GREEN}✓{NC} {rel_path}")
            return

        blocking = [f for f in findings if f.level == "BLOCK"]
        warnings = [f for f in findings if f.level == "WARN"]
        if blocking:
            print(f"\n{RED}✗ {rel_path}{NC}")
            for f in blocking:
                print(f"  {RED}BLOCK{NC} :{f.line} [{f.rule_id}] {f.message}")
        else:
            print(f"\n{YELLOW}! {rel_path}{NC}")
        for f in warnings:
            print(f"  {YELLOW}WARN{NC} :{f.line} [{f.rule_id}] {f.message}")


def run_watch_mode(config: Config, path: str = ".") -> bool:
    """Watch ``path`` and lint files on save until interrupted."""
    print(f"\n{BLUE}barrelrails --watch{NC}")
    print("=" * 40)
    print("Live linting mode\n")

    handler = BarrelRailsHandler(with_package_name(config))
    observer = Observer()
    observer.schedule(handler, path, recursive=True)
    observer.start()
    print(f"{GREEN}Watching {path} for changes...{NC}")
    print("Press Ctrl+C to stop\n")

    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        print(f"\n{YELLOW}Stopping watch mode...{NC}")
        observer.stop()

    observer.join()
    print(f"{GREEN}Watch mode stopped{NC}")
    return True
