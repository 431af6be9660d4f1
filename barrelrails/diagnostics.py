"""Site context and diagnostic values shared by the rule set and its hosts."""

from dataclasses import dataclass
from enum import Enum

BLOCK = "block"
WARN = "warn"
SEVERITIES = (BLOCK, WARN)


class RuleKind(Enum):
    """Closed set of conformance rules, keyed by their configuration id."""

    INTERNAL_IMPORT = "internal-import"
    SELF_BARREL_IMPORT = "self-barrel-import"
    CROSS_FEATURE_EXPORT = "cross-feature-export"
    IMPROPER_LAYER_IMPORT = "improper-layer-import"
    CORE_IMPORTING_FEATURES = "core-importing-features"
    RELATIVE_BARREL_IMPORTS = "relative-barrel-imports"
    UI_FRAMEWORK_IN_LOGIC = "ui-framework-in-logic"

    @property
    def rule_id(self) -> str:
        return self.value


RULE_IDS = tuple(kind.value for kind in RuleKind)


class DiagnosticKind(Enum):
    """Every diagnostic a rule can emit.

    Each member carries its owning rule, default severity, a message
    template and a correction-message template; both templates are
    formatted with the diagnostic's positional arguments.
    """

    INTERNAL_IMPORT = (
        RuleKind.INTERNAL_IMPORT, BLOCK,
        "Import '{0}' reaches into the internals of {1}.",
        "Import the feature barrel '{2}' instead.",
    )
    SELF_BARREL_IMPORT = (
        RuleKind.SELF_BARREL_IMPORT, BLOCK,
        "File imports the barrel of its own feature {1} through '{0}'.",
        "Import the file you need directly instead of the barrel.",
    )
    REDUNDANT_RELATIVE_PATH = (
        RuleKind.SELF_BARREL_IMPORT, BLOCK,
        "Import '{0}' leaves {1} and re-enters it.",
        "Use the in-feature path '{2}'.",
    )
    CROSS_FEATURE_EXPORT = (
        RuleKind.CROSS_FEATURE_EXPORT, BLOCK,
        "Barrel of {1} exports '{0}' from outside the feature.",
        "Remove the export; a barrel only exposes its own feature.",
    )
    IMPROPER_LAYER_IMPORT = (
        RuleKind.IMPROPER_LAYER_IMPORT, BLOCK,
        "{0} layer file imports '{1}', a {2} layer barrel.",
        "Depend on the {0} layer barrel or move the dependency inward.",
    )
    MONOLITHIC_BARREL_IN_LAYER = (
        RuleKind.IMPROPER_LAYER_IMPORT, WARN,
        "{0} layer file imports the monolithic barrel '{1}'.",
        "Prefer the layer-specific barrel '{2}'.",
    )
    CORE_IMPORTING_FEATURES = (
        RuleKind.CORE_IMPORTING_FEATURES, BLOCK,
        "Core file imports '{0}' from {1}.",
        "Move the shared code into core or invert the dependency.",
    )
    RELATIVE_BARREL_IMPORT = (
        RuleKind.RELATIVE_BARREL_IMPORTS, BLOCK,
        "Relative import '{0}' reaches the barrel of another feature.",
        "Use the package import '{1}'.",
    )
    UI_FRAMEWORK_IN_LOGIC = (
        RuleKind.UI_FRAMEWORK_IN_LOGIC, BLOCK,
        "{0} layer file imports the UI framework '{1}'.",
        "Keep UI framework imports in the Presentation layer.",
    )

    def __init__(self, rule: RuleKind, severity: str, template: str, correction_template: str):
        self.rule = rule
        self.default_severity = severity
        self.template = template
        self.correction_template = correction_template


@dataclass(frozen=True)
class Correction:
    """Replace ``target_range`` (start, end offsets) of the file with ``replacement_text``."""

    target_range: tuple[int, int]
    replacement_text: str


@dataclass(frozen=True)
class Diagnostic:
    kind: DiagnosticKind
    args: tuple[str, ...]
    severity: str
    correction: Correction | None = None

    @property
    def rule(self) -> RuleKind:
        return self.kind.rule

    @property
    def message(self) -> str:
        return self.kind.template.format(*self.args)

    @property
    def suggestion(self) -> str:
        return self.kind.correction_template.format(*self.args)

    @property
    def blocking(self) -> bool:
        return self.severity == BLOCK


class SiteKind(Enum):
    IMPORT = "import"
    EXPORT = "export"


@dataclass(frozen=True)
class SiteContext:
    """One import or export site as supplied by the host.

    ``uri_span`` covers the reference text between the quotes and
    ``directive_span`` the whole statement; without spans no correction
    can be offered.
    """

    site_uri: str
    current_file_path: str
    kind: SiteKind = SiteKind.IMPORT
    uri_span: tuple[int, int] | None = None
    directive_span: tuple[int, int] | None = None
    line: int = 0

    @property
    def is_import(self) -> bool:
        return self.kind is SiteKind.IMPORT

    @property
    def is_export(self) -> bool:
        return self.kind is SiteKind.EXPORT
