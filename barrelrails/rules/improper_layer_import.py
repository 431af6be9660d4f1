"""
Layer direction for barrel imports.

Layer-specific barrels are checked against the permission table. A
monolithic barrel of another feature hides its layer mix, so Data and
Domain files only get an advisory pointing at the layer barrel, and only
when the project uses layer barrels (``prefer_layer_barrels``).
"""

from ..corrections import replace_uri, swap_barrel_layer
from ..diagnostics import DiagnosticKind
from ..layers import is_import_allowed
from ..models import ArchitecturalLayer

_LOGIC_LAYERS = (ArchitecturalLayer.DATA, ArchitecturalLayer.DOMAIN)


def check(site, config, report) -> None:
    if not site.is_import:
        return
    classifier = config.classifier
    path = site.current_file_path
    uri = site.site_uri

    current_layer = classifier.layer_of(path)
    if current_layer is ArchitecturalLayer.UNKNOWN:
        return
    current = classifier.classify(path)
    imported = classifier.classify(uri)
    if imported is not None:
        role = classifier.role_of(uri, imported)
    elif current is not None:
        # ../auth_data.dart names a barrel of the importer's own feature
        imported = current
        role = classifier.relative_barrel_role(uri, path, current)
    else:
        return

    if role.is_layer_specific:
        if is_import_allowed(current_layer, role.layer):
            return
        replacement = swap_barrel_layer(classifier, uri, imported, current_layer)
        report(
            DiagnosticKind.IMPROPER_LAYER_IMPORT,
            (current_layer.display_name, uri, role.layer.display_name),
            replace_uri(site, replacement),
        )
        return

    if not (role.is_monolithic and config.prefer_layer_barrels):
        return
    if current_layer not in _LOGIC_LAYERS:
        return
    if current is not None and current.feature_directory == imported.feature_directory:
        return
    suggestion = swap_barrel_layer(classifier, uri, imported, current_layer)
    if suggestion is None:
        return
    report(
        DiagnosticKind.MONOLITHIC_BARREL_IN_LAYER,
        (current_layer.display_name, uri, suggestion),
        replace_uri(site, suggestion),
    )
