"""
barrelrails - Architecture conformance for feature/barrel/layer codebases.

Classifies paths into features, layers and barrel roles, lints import and
export directives, and detects cycles between feature barrels.
"""

__version__ = "1.0.0"

from .classifier import ClassifierSettings, PathClassifier, classify
from .config import Config, load_config
from .diagnostics import Correction, Diagnostic, DiagnosticKind, RuleKind, SiteContext, SiteKind
from .errors import BarrelrailsError, ConfigError
from .graph import BarrelGraph, Cycle, build_graph, find_cycles
from .layers import is_import_allowed
from .lint_runner import lint_paths
from .models import ArchitecturalLayer, BarrelKind, BarrelRole, FeatureIdentity, NamingStyle
from .rules import RuleSet, evaluate_site

__all__ = [
    "ArchitecturalLayer",
    "BarrelGraph",
    "BarrelKind",
    "BarrelRole",
    "BarrelrailsError",
    "ClassifierSettings",
    "Config",
    "ConfigError",
    "Correction",
    "Cycle",
    "Diagnostic",
    "DiagnosticKind",
    "FeatureIdentity",
    "NamingStyle",
    "PathClassifier",
    "RuleKind",
    "RuleSet",
    "SiteContext",
    "SiteKind",
    "build_graph",
    "classify",
    "evaluate_site",
    "find_cycles",
    "is_import_allowed",
    "lint_paths",
    "load_config",
    "__version__",
]
