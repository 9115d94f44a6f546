"""Tests for load_catalog: bundled sample and file error handling."""

import json

import pytest

from well_of_power.core.domain_types import Language
from well_of_power.core.errors import CatalogError
from well_of_power.infrastructure.catalog_loader import BUNDLED_CATALOG, load_catalog


def test_bundled_catalog_loads():
    catalog = load_catalog()
    assert BUNDLED_CATALOG.exists()
    assert len(catalog) == 10
    assert [d.id for d in catalog] == list(range(1, 11))


def test_bundled_catalog_has_a_correct_option_everywhere():
    for dilemma in load_catalog():
        assert any(option.is_correct for option in dilemma.options)


def test_bundled_catalog_mixes_legacy_and_plain_text():
    catalog = load_catalog()
    assert catalog.at(2).character == "laura.png"
    plain = catalog.at(7).situation
    assert plain.resolve(Language.ES) == plain.resolve(Language.EN)


def test_custom_path(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps([{
        "id": 1, "situation": "S",
        "options": [{"text": "A", "is_correct": True, "narrative_response": "R"}],
    }]), encoding="utf-8")
    assert len(load_catalog(path)) == 1
    assert len(load_catalog(str(path))) == 1


def test_missing_file_raises(tmp_path):
    with pytest.raises(CatalogError, match="cannot read"):
        load_catalog(tmp_path / "absent.json")


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("[{", encoding="utf-8")
    with pytest.raises(CatalogError, match="not valid JSON"):
        load_catalog(path)
