"""Layer permission model.

Dependencies point inward: Presentation -> Data -> Domain. Unknown on
either side never restricts.
"""

from .models import ArchitecturalLayer

_DATA = ArchitecturalLayer.DATA
_DOMAIN = ArchitecturalLayer.DOMAIN
_PRESENTATION = ArchitecturalLayer.PRESENTATION
_UNKNOWN = ArchitecturalLayer.UNKNOWN

# (from_layer, to_layer) -> allowed
_PERMISSIONS: dict[tuple[ArchitecturalLayer, ArchitecturalLayer], bool] = {
    (_DOMAIN, _DOMAIN): True,
    (_DOMAIN, _DATA): False,
    (_DOMAIN, _PRESENTATION): False,
    (_DOMAIN, _UNKNOWN): True,
    (_DATA, _DOMAIN): True,
    (_DATA, _DATA): True,
    (_DATA, _PRESENTATION): False,
    (_DATA, _UNKNOWN): True,
    (_PRESENTATION, _DOMAIN): True,
    (_PRESENTATION, _DATA): True,
    (_PRESENTATION, _PRESENTATION): True,
    (_PRESENTATION, _UNKNOWN): True,
    (_UNKNOWN, _DOMAIN): True,
    (_UNKNOWN, _DATA): True,
    (_UNKNOWN, _PRESENTATION): True,
    (_UNKNOWN, _UNKNOWN): True,
}


def is_import_allowed(from_layer: ArchitecturalLayer, to_layer: ArchitecturalLayer) -> bool:
    """Return True if a file in ``from_layer`` may depend on ``to_layer``."""
    return _PERMISSIONS[(from_layer, to_layer)]


def allowed_targets(from_layer: ArchitecturalLayer) -> list[ArchitecturalLayer]:
    """Layers ``from_layer`` may depend on, in declaration order."""
    return [to for (frm, to), ok in _PERMISSIONS.items() if frm is from_layer and ok]
