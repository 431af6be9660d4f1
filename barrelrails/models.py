"""Core value types for the feature/layer architecture model."""

from dataclasses import dataclass
from enum import Enum


class NamingStyle(Enum):
    """Which directory convention a feature follows."""

    PREFIXED = "prefixed"  # feature_<name>/
    NESTED = "nested"  # features/<name>/


class ArchitecturalLayer(Enum):
    """Architectural layer derived from directory tokens."""

    DATA = "data"
    DOMAIN = "domain"
    PRESENTATION = "presentation"
    UNKNOWN = "unknown"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @classmethod
    def from_name(cls, name: str) -> "ArchitecturalLayer":
        """Resolve a configured layer name ("data", "ui", ...) to a layer."""
        key = name.strip().lower()
        if key == "ui":
            return cls.PRESENTATION
        for layer in cls:
            if layer.value == key:
                return layer
        raise ValueError(f"Unknown layer name: {name!r}")


class BarrelKind(Enum):
    MONOLITHIC = "monolithic"
    LAYER_SPECIFIC = "layer_specific"
    NOT_A_BARREL = "not_a_barrel"


@dataclass(frozen=True)
class FeatureIdentity:
    """A feature as seen from one path.

    Two paths that share ``feature_directory`` belong to the same feature.
    """

    feature_directory: str
    feature_name: str
    naming_style: NamingStyle


@dataclass(frozen=True)
class BarrelRole:
    """Barrel role of a file; ``layer`` is only meaningful for layer-specific barrels."""

    kind: BarrelKind
    layer: ArchitecturalLayer = ArchitecturalLayer.UNKNOWN

    @property
    def is_barrel(self) -> bool:
        return self.kind is not BarrelKind.NOT_A_BARREL

    @property
    def is_monolithic(self) -> bool:
        return self.kind is BarrelKind.MONOLITHIC

    @property
    def is_layer_specific(self) -> bool:
        return self.kind is BarrelKind.LAYER_SPECIFIC


MONOLITHIC = BarrelRole(BarrelKind.MONOLITHIC)
NOT_A_BARREL = BarrelRole(BarrelKind.NOT_A_BARREL)


def layer_specific(layer: ArchitecturalLayer) -> BarrelRole:
    return BarrelRole(BarrelKind.LAYER_SPECIFIC, layer)
