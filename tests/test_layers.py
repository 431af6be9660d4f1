"""Tests for the layer permission model."""

import itertools

import pytest

from barrelrails.layers import allowed_targets, is_import_allowed
from barrelrails.models import ArchitecturalLayer

DATA = ArchitecturalLayer.DATA
DOMAIN = ArchitecturalLayer.DOMAIN
PRESENTATION = ArchitecturalLayer.PRESENTATION
UNKNOWN = ArchitecturalLayer.UNKNOWN


def test_domain_depends_only_on_domain():
    assert is_import_allowed(DOMAIN, DOMAIN)
    assert not is_import_allowed(DOMAIN, DATA)
    assert not is_import_allowed(DOMAIN, PRESENTATION)


def test_data_never_depends_on_presentation():
    assert is_import_allowed(DATA, DOMAIN)
    assert is_import_allowed(DATA, DATA)
    assert not is_import_allowed(DATA, PRESENTATION)


@pytest.mark.parametrize("target", list(ArchitecturalLayer))
def test_presentation_may_depend_on_anything(target):
    assert is_import_allowed(PRESENTATION, target)


@pytest.mark.parametrize("layer", list(ArchitecturalLayer))
def test_unknown_never_restricts(layer):
    assert is_import_allowed(UNKNOWN, layer)
    assert is_import_allowed(layer, UNKNOWN)


def test_table_is_total():
    for a, b in itertools.product(ArchitecturalLayer, repeat=2):
        assert isinstance(is_import_allowed(a, b), bool)


def test_allowed_targets():
    assert set(allowed_targets(DOMAIN)) == {DOMAIN, UNKNOWN}
    assert set(allowed_targets(DATA)) == {DATA, DOMAIN, UNKNOWN}
    assert set(allowed_targets(PRESENTATION)) == set(ArchitecturalLayer)


def test_layer_names():
    assert ArchitecturalLayer.from_name("ui") is PRESENTATION
    assert ArchitecturalLayer.from_name(" Data ") is DATA
    assert PRESENTATION.display_name == "Presentation"
    with pytest.raises(ValueError):
        ArchitecturalLayer.from_name("infra")
