"""
Conformance rule set.

Each rule is a plain function ``check(site, config, report)`` over one
import/export site. Rules keep no state and may run in any order; every
enabled rule reports at most one diagnostic per site.
"""

import logging
from collections.abc import Callable

from ..config import Config
from ..diagnostics import Correction, Diagnostic, DiagnosticKind, RuleKind, SiteContext
from . import (
    core_importing_features,
    cross_feature_export,
    improper_layer_import,
    internal_import,
    relative_barrel_imports,
    self_barrel_import,
    ui_framework_in_logic,
)

logger = logging.getLogger(__name__)

RuleCheck = Callable[[SiteContext, Config, Callable], None]

ALL_RULES: dict[RuleKind, RuleCheck] = {
    RuleKind.INTERNAL_IMPORT: internal_import.check,
    RuleKind.SELF_BARREL_IMPORT: self_barrel_import.check,
    RuleKind.CROSS_FEATURE_EXPORT: cross_feature_export.check,
    RuleKind.IMPROPER_LAYER_IMPORT: improper_layer_import.check,
    RuleKind.CORE_IMPORTING_FEATURES: core_importing_features.check,
    RuleKind.RELATIVE_BARREL_IMPORTS: relative_barrel_imports.check,
    RuleKind.UI_FRAMEWORK_IN_LOGIC: ui_framework_in_logic.check,
}


class _Reporter:
    """``report`` callback handed to one rule for one site."""

    def __init__(self, rule: RuleKind, config: Config):
        self.rule = rule
        self.config = config
        self.diagnostic: Diagnostic | None = None

    def __call__(self, kind: DiagnosticKind, args, correction: Correction | None = None) -> None:
        if self.diagnostic is not None:
            return
        severity = self.config.rule_settings(self.rule.rule_id).severity or kind.default_severity
        self.diagnostic = Diagnostic(kind, tuple(str(a) for a in args), severity, correction)


class RuleSet:
    """The enabled rules of one configuration."""

    def __init__(self, config: Config):
        self.config = config
        self.rules = [
            (kind, check) for kind, check in ALL_RULES.items()
            if config.rule_enabled(kind.rule_id)
        ]

    def evaluate(self, site: SiteContext) -> list[Diagnostic]:
        """Diagnostics for one site, in rule order.

        Excluded (test) files yield nothing. A rule that trips over odd
        input counts as silent rather than failing the host.
        """
        if self.config.classifier.is_excluded(site.current_file_path):
            return []
        diagnostics = []
        for kind, check in self.rules:
            reporter = _Reporter(kind, self.config)
            try:
                check(site, self.config, reporter)
            except (ValueError, IndexError, KeyError) as e:
                logger.debug("Rule %s skipped %s: %s", kind.rule_id, site.site_uri, e)
                continue
            if reporter.diagnostic is not None:
                diagnostics.append(reporter.diagnostic)
        return diagnostics


def evaluate_site(site: SiteContext, config: Config | None = None) -> list[Diagnostic]:
    return RuleSet(config or Config()).evaluate(site)
