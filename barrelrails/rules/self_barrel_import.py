"""
Files inside a feature must not import their own barrel.

A layer-specific barrel only counts when it belongs to the importer's own
layer: a Data file may use its feature's Domain barrel. Relative paths that
climb out of the feature and come back in are reported as well.
"""

from ..classifier import is_relative, up_levels
from ..corrections import remove_directive, replace_uri, simplified_relative_path
from ..diagnostics import DiagnosticKind
from ..models import NOT_A_BARREL


def check(site, config, report) -> None:
    if not site.is_import:
        return
    classifier = config.classifier
    path = site.current_file_path
    uri = site.site_uri

    current = classifier.classify(path)
    if current is None:
        return
    named = classifier.classify(uri)
    same_feature = named is not None and named.feature_directory == current.feature_directory

    if same_feature:
        role = classifier.role_of(uri, named)
    elif named is None:
        role = classifier.relative_barrel_role(uri, path, current)
    else:
        role = NOT_A_BARREL

    if role.is_barrel and (role.is_monolithic or role.layer is classifier.layer_of(path)):
        report(
            DiagnosticKind.SELF_BARREL_IMPORT,
            (uri, current.feature_directory),
            remove_directive(site),
        )
        return

    if same_feature and is_relative(uri) and up_levels(uri) > 0:
        simplified = simplified_relative_path(path, uri)
        report(
            DiagnosticKind.REDUNDANT_RELATIVE_PATH,
            (uri, current.feature_directory, simplified or uri),
            replace_uri(site, simplified),
        )
