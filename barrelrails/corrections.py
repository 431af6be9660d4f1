"""Replacement strings and edits offered alongside diagnostics."""

import posixpath

from .classifier import PathClassifier, resolve_relative, split_at_feature, strip_package
from .diagnostics import Correction, SiteContext
from .models import ArchitecturalLayer, FeatureIdentity


def barrel_reference(
    classifier: PathClassifier,
    uri: str,
    feature: FeatureIdentity,
    layer: ArchitecturalLayer = ArchitecturalLayer.UNKNOWN,
) -> str:
    """Rewrite ``uri`` to point at the feature's barrel, keeping its prefix.

    ``package:app/feature_x/data/a.dart`` -> ``package:app/feature_x/x.dart``
    """
    name = classifier.barrel_file_name(feature.feature_name, layer, classifier.extension_of(uri))
    split = split_at_feature(uri, feature)
    prefix = split[0] if split else ""
    return f"{prefix}{feature.feature_directory}/{name}"


def swap_barrel_layer(
    classifier: PathClassifier,
    uri: str,
    feature: FeatureIdentity,
    layer: ArchitecturalLayer,
) -> str | None:
    """Replace the barrel file name in ``uri`` with the ``layer`` barrel."""
    if classifier.suffix_for(layer) is None:
        return None
    head, _, _ = uri.rpartition("/")
    name = classifier.barrel_file_name(feature.feature_name, layer, classifier.extension_of(uri))
    return f"{head}/{name}" if head else name


def simplified_relative_path(current_file_path: str, uri: str) -> str | None:
    """Shortest relative path from the importing file to the target of ``uri``."""
    target = resolve_relative(current_file_path, uri)
    base = posixpath.dirname(current_file_path) or "."
    if target.startswith("..") or base.startswith(".."):
        return None
    simplified = posixpath.relpath(target, base)
    return None if simplified == uri else simplified


def package_import(current_file_path: str, uri: str, package_name: str | None,
                   source_dir: str) -> str | None:
    """``package:`` form of a relative reference, or None without a package name.

    ``source_dir`` is the leading segment of paths under the source root
    (``lib`` for a source root of ``lib``, ``app/lib`` or ``./lib``).
    """
    target = resolve_relative(current_file_path, uri)
    if target.startswith("package:"):
        return target if strip_package(target) else None
    if not package_name:
        return None
    if source_dir and target.startswith(source_dir + "/"):
        target = target[len(source_dir) + 1:]
    if target.startswith(".."):
        return None
    return f"package:{package_name}/{target}"


def current_package(current_file_path: str) -> str | None:
    split = strip_package(current_file_path)
    return split[0] if split else None


def replace_uri(site: SiteContext, replacement: str | None) -> Correction | None:
    """Edit that replaces the reference text of ``site``."""
    if site.uri_span is None or replacement is None:
        return None
    return Correction(site.uri_span, replacement)


def remove_directive(site: SiteContext) -> Correction | None:
    """Edit that deletes the whole directive of ``site``."""
    if site.directive_span is None:
        return None
    return Correction(site.directive_span, "")
