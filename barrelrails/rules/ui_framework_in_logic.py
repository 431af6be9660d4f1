"""Data and Domain files stay independent of the UI framework."""

from ..corrections import remove_directive
from ..diagnostics import DiagnosticKind
from ..models import ArchitecturalLayer


def check(site, config, report) -> None:
    uri = site.site_uri
    if not site.is_import or not uri.startswith(config.ui_forbidden_prefixes):
        return
    if uri in config.ui_allowed:
        return
    layer = config.classifier.layer_of(site.current_file_path)
    if layer not in (ArchitecturalLayer.DATA, ArchitecturalLayer.DOMAIN):
        return
    report(DiagnosticKind.UI_FRAMEWORK_IN_LOGIC, (layer.display_name, uri), remove_directive(site))
