"""Shared core code must not depend on features."""

from ..classifier import directory_segments
from ..corrections import remove_directive
from ..diagnostics import DiagnosticKind


def check(site, config, report) -> None:
    if not site.is_import:
        return
    classifier = config.classifier
    path = site.current_file_path
    if classifier.classify(path) is not None:
        return
    if not set(directory_segments(path)) & config.core_directories:
        return
    imported = classifier.classify(site.site_uri)
    if imported is None:
        return
    report(
        DiagnosticKind.CORE_IMPORTING_FEATURES,
        (site.site_uri, imported.feature_directory),
        remove_directive(site),
    )
