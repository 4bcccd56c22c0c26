"""
Tests for config_manager: defaults, merging and saving.
"""

import json
from pathlib import Path

import pytest

from CalcCore import config_manager


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    monkeypatch.setattr(config_manager, "config_json", path)
    return path


class TestLoadSettingValue:
    """Reading config.json"""

    def test_missing_file_gives_defaults(self, config_file) -> None:
        assert config_manager.load_setting_value("all") == config_manager.DEFAULT_SETTINGS
        assert config_manager.load_setting_value("max_nesting_depth") == 100

    def test_file_overrides_defaults(self, config_file) -> None:
        config_file.write_text(json.dumps({"precision": 4}), encoding="utf-8")
        settings = config_manager.load_setting_value("all")
        assert settings["precision"] == 4
        assert settings["degree_mode"] is True

    def test_broken_file_gives_defaults(self, config_file) -> None:
        config_file.write_text("{not json", encoding="utf-8")
        assert config_manager.load_setting_value("precision") == 10

    def test_unknown_key(self, config_file) -> None:
        assert config_manager.load_setting_value("no_such_key") == 0

    def test_defaults_are_not_mutated(self, config_file) -> None:
        config_file.write_text(json.dumps({"debug": True}), encoding="utf-8")
        config_manager.load_setting_value("all")
        assert config_manager.DEFAULT_SETTINGS["debug"] is False


class TestSaveSetting:
    """Writing config.json"""

    def test_round_trip(self, config_file) -> None:
        settings = dict(config_manager.DEFAULT_SETTINGS, darkmode=True, precision=6)
        assert config_manager.save_setting(settings) == settings
        assert config_manager.load_setting_value("all") == settings

    def test_unwritable_location(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setattr(config_manager, "config_json", tmp_path / "missing" / "config.json")
        assert config_manager.save_setting({"debug": True}) == {}


class TestLoadSettingDescription:
    """Reading ui_strings.json"""

    def test_missing_file(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setattr(config_manager, "ui_strings", tmp_path / "ui_strings.json")
        assert config_manager.load_setting_description("all") == {}

    def test_shipped_descriptions_cover_settings(self) -> None:
        descriptions = config_manager.load_setting_description("all")
        for key in config_manager.DEFAULT_SETTINGS:
            assert config_manager.load_setting_description(key) == descriptions[key]
            assert descriptions[key]


class TestPackagedFiles:
    """config.json and ui_strings.json ship inside the package"""

    def test_paths_resolve_inside_package(self) -> None:
        package_dir = Path(config_manager.__file__).resolve().parent
        assert config_manager.config_json.parent == package_dir
        assert config_manager.ui_strings.parent == package_dir

    def test_shipped_config_matches_defaults(self) -> None:
        shipped = json.loads(config_manager.config_json.read_text(encoding="utf-8"))
        assert shipped == config_manager.DEFAULT_SETTINGS
