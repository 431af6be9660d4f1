"""Import/export directive extraction from source text."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING

from .diagnostics import SiteContext, SiteKind

if TYPE_CHECKING:
    from .config import Config


@dataclass(frozen=True)
class Directive:
    kind: SiteKind
    uri: str
    line: int
    uri_span: tuple[int, int]
    directive_span: tuple[int, int]

    def site(self, current_file_path: str) -> SiteContext:
        return SiteContext(
            site_uri=self.uri,
            current_file_path=current_file_path,
            kind=self.kind,
            uri_span=self.uri_span,
            directive_span=self.directive_span,
            line=self.line,
        )


@lru_cache(maxsize=32)
def compile_directive_pattern(pattern: str) -> re.Pattern:
    """Compile a directive pattern; it must define a named group ``uri``."""
    compiled = re.compile(pattern, re.MULTILINE)
    if "uri" not in compiled.groupindex:
        raise ValueError(f"Directive pattern has no 'uri' group: {pattern}")
    return compiled


def _line_end(text: str, end: int) -> int:
    """Extend a directive span over the rest of its line when only whitespace follows."""
    newline = text.find("\n", end)
    stop = len(text) if newline == -1 else newline + 1
    if text[end:stop].strip():
        return end
    return stop


def _scan(text: str, pattern: str, kind: SiteKind) -> list[Directive]:
    directives = []
    for match in compile_directive_pattern(pattern).finditer(text):
        start = match.start()
        directives.append(Directive(
            kind=kind,
            uri=match.group("uri"),
            line=text.count("\n", 0, match.start("uri")) + 1,
            uri_span=match.span("uri"),
            directive_span=(start, _line_end(text, match.end())),
        ))
    return directives


def extract_directives(text: str, config: Config) -> list[Directive]:
    """All import and export directives in ``text``, in source order."""
    found = _scan(text, config.import_pattern, SiteKind.IMPORT)
    found += _scan(text, config.export_pattern, SiteKind.EXPORT)
    return sorted(found, key=lambda d: d.directive_span[0])
