"""
Tests for configuration loading, lookup tables and run settings.
"""

import importlib
import json
from unittest.mock import patch

import pytest
import yaml
from dataclasses import FrozenInstanceError

from overlap_merge.core.settings import DEFAULT_CUTOFF, MergeSettings, parse_delete_types
from overlap_merge.core.tables import (
    CutoffTable,
    TypeCategoryTable,
    load_category_table,
    load_cutoff_table,
)
from overlap_merge.utils.config_utils import (
    get_config_path,
    load_config,
    load_json_table,
    parse_json_object,
    read_user_json,
)
from overlap_merge.utils.exceptions import ConfigurationError, InvalidInputError


class TestConfigUtils:
    """Test YAML and JSON configuration helpers."""

    def test_load_default_config(self):
        config = load_config()
        assert get_config_path().name == "system_config.yaml"
        assert config['merging']['default_cutoff'] == DEFAULT_CUTOFF
        assert 'mcl' in config

    def test_load_missing_config(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_load_custom_config(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("merging:\n  default_cutoff: 0.8\n")
        assert load_config(path) == {'merging': {'default_cutoff': 0.8}}

    def test_parse_json_object(self):
        assert parse_json_object('{"C.3": 0.9}') == {"C.3": 0.9}
        assert parse_json_object('{"C.3": ') == {}
        assert parse_json_object('[1, 2]') == {}

    def test_read_user_json(self, tmp_path):
        path = tmp_path / "cutoffs.json"
        path.write_text(json.dumps({"N.3": 0.7}))
        assert read_user_json(str(path)) == {"N.3": 0.7}
        assert read_user_json('{"O.3": 0.6}') == {"O.3": 0.6}
        assert read_user_json(None) == {}

    def test_load_json_table_overlay(self):
        table = load_json_table("atomtypes.json", '{"Du": 11}')
        assert table["Du"] == 11
        assert table["C.3"] == 1

    def test_load_json_table_replace(self):
        assert load_json_table("atomtypes.json", '{"Du": 11}', replace_defaults=True) == {"Du": 11}


class TestTables:
    """Test the category and cutoff tables."""

    def test_category_table(self):
        table = TypeCategoryTable({"C.3": 1, "C.ar": 1, "N.3": 2})
        assert table.category("C.ar") == 1
        assert table.category("Du") == 0
        assert "N.3" in table
        assert "Du" not in table
        assert table.types_by_category() == {1: ["C.3", "C.ar"], 2: ["N.3"]}

    def test_tables_copy_input(self):
        data = {"C.3": 1}
        table = TypeCategoryTable(data)
        data["C.3"] = 5
        assert table.category("C.3") == 1
        table.as_dict()["C.3"] = 7
        assert table.category("C.3") == 1

    def test_packaged_categories(self):
        table = load_category_table()
        assert table.category("C.ar") == table.category("C.3")
        assert table.category("N.3") != table.category("C.3")

    def test_user_categories_replace_defaults(self):
        table = load_category_table('{"Du": 3}')
        assert len(table) == 1
        assert "C.3" not in table

    def test_malformed_user_categories_keep_defaults(self):
        assert len(load_category_table('{"Du": ')) == len(load_category_table())

    def test_user_cutoffs(self):
        table = load_cutoff_table('{"*": 1.3, "C.3": 0.9}')
        assert table.wildcard == 1.3
        assert table.get("C.3") == 0.9
        assert table.get("N.3") is None

    def test_non_numeric_cutoffs_dropped(self, caplog):
        table = load_cutoff_table('{"C.3": "abc", "N.3": 0.7}')
        assert "C.3" not in table
        assert table.get("N.3") == 0.7
        assert "JSON state" in caplog.text

    def test_null_cutoff_dropped(self):
        table = load_cutoff_table('{"C.3": null}')
        assert len(table) == 0

    def test_non_numeric_categories_dropped(self):
        table = load_category_table('{"C.3": "one", "Du": 2}')
        assert table.as_dict() == {"Du": 2}

    def test_table_constructors_reject_bad_values(self):
        with pytest.raises(ConfigurationError):
            CutoffTable({"C.3": "near"})
        with pytest.raises(ConfigurationError):
            TypeCategoryTable({"C.3": None})

    def test_loaders_use_given_file(self):
        with patch('overlap_merge.core.tables.load_json_table', return_value={"Du": 0.5}) as mock_load:
            table = load_cutoff_table(None, "site_cutoffs.json")
        assert mock_load.call_args[0][0] == "site_cutoffs.json"
        assert table.get("Du") == 0.5


class TestMergeSettings:
    """Test run settings."""

    def test_defaults(self):
        settings = MergeSettings()
        assert settings.cutoff == DEFAULT_CUTOFF
        assert settings.default_cutoff == DEFAULT_CUTOFF
        assert settings.min_charged == settings.cluster_min

    def test_frozen(self):
        settings = MergeSettings()
        with pytest.raises(FrozenInstanceError):
            settings.cutoff = 2.0

    def test_with_options(self):
        settings = MergeSettings(cutoffs=CutoffTable({"*": 0.8}))
        changed = settings.with_options(cluster_min=2, cluster_min_charged=3)
        assert changed.min_charged == 3
        assert changed.default_cutoff == 0.8
        assert settings.cluster_min == MergeSettings().cluster_min

    def test_parse_delete_types(self):
        assert parse_delete_types("H, Du,,") == frozenset({"H", "Du"})
        assert parse_delete_types(None) == frozenset()

    def test_invalid_values(self):
        with pytest.raises(InvalidInputError):
            MergeSettings(cutoff=0.0)
        with pytest.raises(InvalidInputError):
            MergeSettings(charge_difference=-0.1)


def test_broken_system_config_falls_back():
    """A YAML file that does not parse leaves the built-in defaults in place."""
    from overlap_merge.core import settings as settings_module
    try:
        with patch('overlap_merge.utils.config_utils.load_config', side_effect=yaml.YAMLError("bad")):
            importlib.reload(settings_module)
            assert settings_module.DEFAULT_CUTOFF == 1.1
            assert settings_module.ATOMTYPES_FILE == "atomtypes.json"
    finally:
        importlib.reload(settings_module)
