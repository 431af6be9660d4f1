"""Another feature's barrel is imported by package path, not by ``../``."""

from ..classifier import is_dot_relative
from ..corrections import current_package, package_import, replace_uri
from ..diagnostics import DiagnosticKind


def check(site, config, report) -> None:
    uri = site.site_uri
    if not site.is_import or not is_dot_relative(uri):
        return
    classifier = config.classifier
    path = site.current_file_path

    imported = classifier.classify(uri)
    if imported is None:
        return
    current = classifier.classify(path)
    if current is not None and current.feature_directory == imported.feature_directory:
        return
    if not classifier.role_of(uri, imported).is_barrel:
        return

    package = current_package(path) or config.package_name
    suggestion = package_import(path, uri, package, config.source_dir)
    # Without a package name there is nothing better to offer
    if suggestion is None:
        return
    report(DiagnosticKind.RELATIVE_BARREL_IMPORT, (uri, suggestion), replace_uri(site, suggestion))
