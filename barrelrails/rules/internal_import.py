"""Cross-feature imports must go through the feature barrel."""

from ..corrections import barrel_reference, replace_uri
from ..diagnostics import DiagnosticKind
from ..models import ArchitecturalLayer


def check(site, config, report) -> None:
    if not site.is_import:
        return
    classifier = config.classifier
    uri = site.site_uri

    imported = classifier.classify(uri)
    if imported is None:
        return
    current = classifier.classify(site.current_file_path)
    if current is not None and current.feature_directory == imported.feature_directory:
        return
    # Monolithic and layer-specific barrels are the public surface
    if classifier.role_of(uri, imported).is_barrel:
        return
    if not classifier.is_internal(uri):
        return

    layer = ArchitecturalLayer.UNKNOWN
    if config.prefer_layer_barrels:
        layer = classifier.layer_of(uri)
    suggestion = barrel_reference(classifier, uri, imported, layer)
    report(
        DiagnosticKind.INTERNAL_IMPORT,
        (uri, imported.feature_directory, suggestion),
        replace_uri(site, suggestion),
    )
