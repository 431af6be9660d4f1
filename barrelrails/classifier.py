"""Path classifier: feature identity, architectural layer and barrel role.

Every function here is a pure function of the path string. Unmatched or
degenerate input (empty names, doubled separators, bare file names) yields
``None`` / ``UNKNOWN`` / ``NOT_A_BARREL``; nothing in this module raises
for a string argument.
"""

import posixpath
import re
from dataclasses import dataclass, field

from .models import (
    MONOLITHIC,
    NOT_A_BARREL,
    ArchitecturalLayer,
    BarrelRole,
    FeatureIdentity,
    NamingStyle,
    layer_specific,
)

# feature_<name>/ as one whole segment, tried before features/<name>/
_PREFIXED_RE = re.compile(r"(?:^|/)feature_([^/]+)/")
_NESTED_RE = re.compile(r"(?:^|/)features/([^/]+)/")
_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")

DEFAULT_EXTENSIONS: tuple[str, ...] = (".dart",)

DEFAULT_INTERNAL_DIRECTORIES: frozenset[str] = frozenset({
    "data", "ui", "domain", "presentation", "application",
    "infrastructure", "services", "repositories", "providers",
    "bloc", "cubit", "notifiers", "widgets", "utils", "config",
    "helpers", "exceptions", "extensions", "models",
})

# Check order is the tie-break when one path carries tokens of several layers.
DEFAULT_LAYER_PRIORITY: tuple[tuple[ArchitecturalLayer, frozenset[str]], ...] = (
    (ArchitecturalLayer.DATA, frozenset({
        "data", "repositories", "infrastructure", "datasources",
    })),
    (ArchitecturalLayer.DOMAIN, frozenset({
        "domain", "entities", "use_cases", "usecases", "use-cases",
    })),
    (ArchitecturalLayer.PRESENTATION, frozenset({
        "ui", "presentation", "widgets", "screens", "pages",
        "bloc", "cubit", "notifiers", "providers",
    })),
)

DEFAULT_LAYER_SUFFIXES: tuple[tuple[str, ArchitecturalLayer], ...] = (
    ("data", ArchitecturalLayer.DATA),
    ("domain", ArchitecturalLayer.DOMAIN),
    ("ui", ArchitecturalLayer.PRESENTATION),
    ("presentation", ArchitecturalLayer.PRESENTATION),
)

DEFAULT_EXCLUDED_DIRECTORIES: frozenset[str] = frozenset({
    "test", "tests", "test_driver", "integration_test",
})

DEFAULT_EXCLUDED_SUFFIXES: tuple[str, ...] = ("_test",)


def segments(path: str) -> list[str]:
    return (path or "").split("/")


def directory_segments(path: str) -> list[str]:
    """Directory segments of a path, without the trailing file name."""
    return [s for s in segments(path)[:-1] if s]


def has_scheme(uri: str) -> bool:
    """True for ``package:app/x``, ``dart:async`` and similar references."""
    return bool(_SCHEME_RE.match(uri or ""))


def is_relative(uri: str) -> bool:
    """True when ``uri`` resolves against the referencing file's directory."""
    return bool(uri) and not has_scheme(uri) and not uri.startswith("/")


def is_dot_relative(uri: str) -> bool:
    return (uri or "").startswith(("./", "../"))


def up_levels(uri: str) -> int:
    """Number of ``..`` segments in a reference."""
    return sum(1 for s in segments(uri) if s == "..")


def strip_package(uri: str) -> tuple[str, str] | None:
    """Split ``package:<name>/<rest>`` into ``(name, rest)``."""
    if not (uri or "").startswith("package:"):
        return None
    name, sep, rest = uri[len("package:"):].partition("/")
    if not name or not sep or not rest:
        return None
    return name, rest


def resolve_relative(from_path: str, uri: str) -> str:
    """Resolve a relative reference against the directory of ``from_path``."""
    base = posixpath.dirname(from_path or "")
    return posixpath.normpath(posixpath.join(base, uri))


def classify(path: str) -> FeatureIdentity | None:
    """Return the feature a path belongs to, or None."""
    path = path or ""
    match = _PREFIXED_RE.search(path)
    if match:
        name = match.group(1)
        return FeatureIdentity(f"feature_{name}", name, NamingStyle.PREFIXED)
    match = _NESTED_RE.search(path)
    if match:
        name = match.group(1)
        return FeatureIdentity(f"features/{name}", name, NamingStyle.NESTED)
    return None


def _feature_offset(path_segments: list[str], feature: FeatureIdentity) -> int | None:
    """Index of the first segment after the feature directory, or None."""
    feature_segments = feature.feature_directory.split("/")
    width = len(feature_segments)
    for i in range(len(path_segments) - width + 1):
        if path_segments[i:i + width] == feature_segments:
            return i + width
    return None


def depth_within_feature(path: str, feature: FeatureIdentity) -> int | None:
    """Directories between the feature root and the file.

    ``feature_auth/ui/login.dart`` has depth 1, ``feature_auth/auth.dart``
    depth 0. None when the path does not contain the feature directory.
    """
    parts = segments(path)
    offset = _feature_offset(parts, feature)
    if offset is None or offset >= len(parts):
        return None
    return len(parts) - offset - 1


def split_at_feature(path: str, feature: FeatureIdentity) -> tuple[str, list[str]] | None:
    """Split a path around its feature directory.

    Returns the text before the feature directory (``package:app/``,
    ``../``, ``lib/`` or empty) and the segments below the feature root.
    """
    parts = segments(path)
    offset = _feature_offset(parts, feature)
    if offset is None or offset >= len(parts):
        return None
    width = len(feature.feature_directory.split("/"))
    prefix = "/".join(parts[:offset - width])
    return (prefix + "/" if prefix else ""), parts[offset:]


@dataclass(frozen=True)
class ClassifierSettings:
    """Pattern sets the classifier is built from."""

    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    internal_directories: frozenset[str] = DEFAULT_INTERNAL_DIRECTORIES
    layer_priority: tuple[tuple[ArchitecturalLayer, frozenset[str]], ...] = (
        DEFAULT_LAYER_PRIORITY
    )
    layer_suffixes: tuple[tuple[str, ArchitecturalLayer], ...] = DEFAULT_LAYER_SUFFIXES
    excluded_directories: frozenset[str] = DEFAULT_EXCLUDED_DIRECTORIES
    excluded_suffixes: tuple[str, ...] = DEFAULT_EXCLUDED_SUFFIXES


@dataclass(frozen=True)
class PathClassifier:
    """Classifies paths and import strings against one settings object."""

    settings: ClassifierSettings = field(default_factory=ClassifierSettings)

    def classify(self, path: str) -> FeatureIdentity | None:
        return classify(path)

    def layer_of(self, path: str) -> ArchitecturalLayer:
        """Layer of the first priority entry whose token is a directory segment."""
        dirs = set(directory_segments(path))
        for layer, tokens in self.settings.layer_priority:
            if dirs & tokens:
                return layer
        return ArchitecturalLayer.UNKNOWN

    def split_extension(self, file_name: str) -> tuple[str, str] | None:
        for ext in self.settings.extensions:
            if file_name.endswith(ext) and len(file_name) > len(ext):
                return file_name[:-len(ext)], ext
        return None

    def role_of(self, path: str, feature: FeatureIdentity | None) -> BarrelRole:
        """Barrel role of ``path`` relative to ``feature``.

        Only a file directly inside the feature root can be a barrel.
        """
        if feature is None:
            return NOT_A_BARREL
        parts = segments(path)
        if len(parts) < 2:
            return NOT_A_BARREL
        directory = "/".join(parts[:-1])
        root = feature.feature_directory
        if directory != root and not directory.endswith("/" + root):
            return NOT_A_BARREL
        split = self.split_extension(parts[-1])
        if split is None:
            return NOT_A_BARREL
        stem = split[0]
        if stem == feature.feature_name:
            return MONOLITHIC
        for suffix, layer in self.settings.layer_suffixes:
            if stem == f"{feature.feature_name}_{suffix}":
                return layer_specific(layer)
        return NOT_A_BARREL

    def role_of_path(self, path: str) -> BarrelRole:
        return self.role_of(path, classify(path))

    def barrel_name_role(self, file_name: str, feature: FeatureIdentity) -> BarrelRole:
        """Role implied by a bare file name, ignoring where the file sits."""
        return self.role_of(f"{feature.feature_directory}/{file_name}", feature)

    def relative_barrel_role(self, uri: str, current_file_path: str,
                             current: FeatureIdentity) -> BarrelRole:
        """Role of a ``../``-only reference that climbs exactly to the feature root.

        ``../auth_data.dart`` from ``feature_auth/domain/user.dart`` names the
        Data barrel of feature_auth; from one level deeper it names some other file.
        """
        if not is_relative(uri):
            return NOT_A_BARREL
        if any(s not in (".", "..") for s in directory_segments(uri)):
            return NOT_A_BARREL
        depth = depth_within_feature(current_file_path, current)
        if depth is None or up_levels(uri) != depth:
            return NOT_A_BARREL
        return self.barrel_name_role(segments(uri)[-1], current)

    def is_internal(self, uri: str) -> bool:
        """True when a directory segment of ``uri`` is an internal token."""
        internal = self.settings.internal_directories
        return any(s in internal for s in directory_segments(uri))

    def is_excluded(self, path: str) -> bool:
        """Test locations and test-suffixed files never enter rule evaluation."""
        if set(directory_segments(path)) & self.settings.excluded_directories:
            return True
        file_name = segments(path)[-1]
        split = self.split_extension(file_name)
        stem = split[0] if split else posixpath.splitext(file_name)[0]
        return any(stem.endswith(s) for s in self.settings.excluded_suffixes)

    def suffix_for(self, layer: ArchitecturalLayer) -> str | None:
        for suffix, suffix_layer in self.settings.layer_suffixes:
            if suffix_layer is layer:
                return suffix
        return None

    def extension_of(self, path: str) -> str:
        file_name = segments(path)[-1]
        split = self.split_extension(file_name)
        return split[1] if split else self.settings.extensions[0]

    def barrel_file_name(
        self,
        feature_name: str,
        layer: ArchitecturalLayer = ArchitecturalLayer.UNKNOWN,
        extension: str | None = None,
    ) -> str:
        ext = extension or self.settings.extensions[0]
        suffix = self.suffix_for(layer) if layer is not ArchitecturalLayer.UNKNOWN else None
        if suffix:
            return f"{feature_name}_{suffix}{ext}"
        return f"{feature_name}{ext}"

    def barrel_path(
        self,
        feature: FeatureIdentity,
        layer: ArchitecturalLayer = ArchitecturalLayer.UNKNOWN,
        extension: str | None = None,
    ) -> str:
        name = self.barrel_file_name(feature.feature_name, layer, extension)
        return f"{feature.feature_directory}/{name}"
