"""Tests for core-importing-features, relative-barrel-imports and ui-framework-in-logic."""

import pytest

from barrelrails.config import Config
from barrelrails.diagnostics import Correction, DiagnosticKind, SiteContext
from barrelrails.rules import core_importing_features, relative_barrel_imports, ui_framework_in_logic


def _run(rule, current, uri, config=None):
    found = []
    site = SiteContext(uri, current, uri_span=(8, 8 + len(uri)), directive_span=(0, 10 + len(uri)))
    rule.check(site, config or Config(), lambda *a: found.append(a))
    return found


class TestCoreImportingFeatures:

    def test_core_imports_feature(self):
        found = _run(core_importing_features, "lib/core/network/client.dart",
                     "package:app/feature_auth/auth.dart")
        assert found[0][0] is DiagnosticKind.CORE_IMPORTING_FEATURES
        assert found[0][1] == ("package:app/feature_auth/auth.dart", "feature_auth")
        assert found[0][2].replacement_text == ""

    def test_core_imports_core(self):
        assert _run(core_importing_features, "lib/core/a.dart", "package:app/core/b.dart") == []

    def test_feature_files_are_not_core(self):
        assert _run(core_importing_features, "lib/feature_a/core/a.dart", "package:app/feature_b/b.dart") == []

    def test_core_directories_are_configurable(self):
        config = Config(core_directories=frozenset({"shared"}))
        assert _run(core_importing_features, "lib/shared/a.dart", "../feature_b/b.dart", config)
        assert _run(core_importing_features, "lib/core/a.dart", "../feature_b/b.dart", config) == []


class TestRelativeBarrelImports:

    def test_suggests_package_import(self):
        found = _run(relative_barrel_imports, "package:shop/feature_cart/ui/page.dart",
                     "../../feature_auth/auth.dart")
        assert found[0][0] is DiagnosticKind.RELATIVE_BARREL_IMPORT
        assert found[0][1] == ("../../feature_auth/auth.dart", "package:shop/feature_auth/auth.dart")
        assert found[0][2] == Correction((8, 8 + 28), "package:shop/feature_auth/auth.dart")

    def test_configured_package_name(self):
        config = Config(package_name="shop")
        found = _run(relative_barrel_imports, "lib/feature_cart/ui/page.dart",
                     "../../feature_auth/auth_domain.dart", config)
        assert found[0][1][1] == "package:shop/feature_auth/auth_domain.dart"

    def test_no_package_name_no_diagnostic(self):
        assert _run(relative_barrel_imports, "lib/feature_cart/ui/page.dart", "../../feature_auth/auth.dart") == []

    @pytest.mark.parametrize("uri", [
        "../../feature_auth/data/repo.dart",
        "../../feature_cart/cart.dart",
        "package:shop/feature_auth/auth.dart",
        "feature_auth/auth.dart",
    ])
    def test_not_flagged(self, uri):
        assert _run(relative_barrel_imports, "package:shop/feature_cart/ui/page.dart", uri) == []


class TestUiFrameworkInLogic:

    @pytest.mark.parametrize("current, layer", [
        ("lib/feature_a/data/repo.dart", "Data"),
        ("lib/feature_a/domain/user.dart", "Domain"),
    ])
    def test_flutter_in_logic(self, current, layer):
        found = _run(ui_framework_in_logic, current, "package:flutter/material.dart")
        assert found[0][1] == (layer, "package:flutter/material.dart")

    def test_foundation_is_allowed(self):
        assert _run(ui_framework_in_logic, "lib/feature_a/domain/user.dart",
                    "package:flutter/foundation.dart") == []

    def test_presentation_may_use_flutter(self):
        assert _run(ui_framework_in_logic, "lib/feature_a/ui/page.dart", "package:flutter/material.dart") == []

    def test_flutter_test_is_not_flutter(self):
        assert _run(ui_framework_in_logic, "lib/feature_a/data/repo.dart", "package:flutter_test/flutter_test.dart") == []
