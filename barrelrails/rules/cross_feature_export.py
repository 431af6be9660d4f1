"""Barrels may only re-export files of their own feature."""

from ..classifier import depth_within_feature, is_relative, segments
from ..corrections import remove_directive
from ..diagnostics import DiagnosticKind


def escapes_feature(uri: str, depth: int) -> bool:
    """True if walking ``uri`` from ``depth`` below the root ever leaves the feature."""
    level = depth
    for part in segments(uri)[:-1]:
        if part in ("", "."):
            continue
        if part == "..":
            level -= 1
            if level < 0:
                return True
        else:
            level += 1
    return False


def check(site, config, report) -> None:
    if not site.is_export:
        return
    classifier = config.classifier
    path = site.current_file_path
    uri = site.site_uri

    current = classifier.classify(path)
    if current is None or not classifier.role_of(path, current).is_barrel:
        return

    if is_relative(uri):
        outside = escapes_feature(uri, depth_within_feature(path, current) or 0)
    else:
        exported = classifier.classify(uri)
        outside = exported is None or exported.feature_directory != current.feature_directory

    if outside:
        report(
            DiagnosticKind.CROSS_FEATURE_EXPORT,
            (uri, current.feature_directory),
            remove_directive(site),
        )
