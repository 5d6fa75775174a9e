import json
import os

from clearview.config import ConfigManager
from clearview.constants import (
    MODE_CONSERVATIVE,
    MODE_PERMISSIVE,
    SCHEDULE_INTERVAL,
    SCHEDULE_ON_STARTUP,
    UNIT_DAYS,
    UNIT_HOURS,
)


def test_defaults(tmp_path):
    cfg = ConfigManager(tmp_path)
    assert cfg.get_search_scope() == [os.path.normpath(os.path.expanduser("~"))]
    assert cfg.get_search_mode() == MODE_CONSERVATIVE
    assert cfg.get_indexing_settings()["schedule"] == SCHEDULE_ON_STARTUP
    assert cfg.get_max_recent_files() == 5
    assert cfg.get_max_recent_searches() == 5
    assert cfg.get_search_debounce_ms() == 200
    assert cfg.get_release_catalog_during_rebuild() is False


def test_round_trip(tmp_path):
    cfg = ConfigManager(tmp_path)
    cfg.set_search_scope([str(tmp_path / "a"), str(tmp_path / "a"), ""])
    cfg.set_exclusions(excluded_folders=["tmp"], excluded_extensions=[".iso"])
    cfg.set_search_mode(MODE_PERMISSIVE)
    cfg.set_indexing_settings({"schedule": SCHEDULE_INTERVAL, "interval_value": 2, "interval_unit": UNIT_DAYS})

    again = ConfigManager(tmp_path)
    assert again.get_search_scope() == [str(tmp_path / "a")]
    assert again.get_exclusions()["excluded_folders"] == ["tmp"]
    assert again.get_search_mode() == MODE_PERMISSIVE
    indexing = again.get_indexing_settings()
    assert indexing["schedule"] == SCHEDULE_INTERVAL
    assert indexing["interval_value"] == 2
    assert indexing["interval_unit"] == UNIT_DAYS


def test_invalid_values_fall_back(tmp_path):
    cfg = ConfigManager(tmp_path)
    cfg.set_indexing_settings({"schedule": "Sometimes", "interval_value": "x", "interval_unit": "Years"})
    indexing = cfg.get_indexing_settings()
    assert indexing["schedule"] == SCHEDULE_ON_STARTUP
    assert indexing["interval_value"] == 24
    assert indexing["interval_unit"] == UNIT_HOURS

    cfg.set_search_mode("reckless")
    assert cfg.get_search_mode() == MODE_CONSERVATIVE

    cfg.set_general("max_recent_files", -3)
    assert cfg.get_max_recent_files() == 5


def test_stored_values_merge_over_defaults(tmp_path):
    (tmp_path / "config.json").write_text(
        json.dumps({"general": {"search_debounce_ms": 50}}), encoding="utf-8"
    )
    cfg = ConfigManager(tmp_path)
    assert cfg.get_search_debounce_ms() == 50
    assert cfg.get_max_recent_files() == 5


def test_corrupt_config_uses_defaults(tmp_path):
    (tmp_path / "config.json").write_text("{oops", encoding="utf-8")
    assert ConfigManager(tmp_path).get_search_mode() == MODE_CONSERVATIVE


def test_getters_return_copies(tmp_path):
    cfg = ConfigManager(tmp_path)
    cfg.get_exclusions()["excluded_folders"].append("x")
    assert cfg.get_exclusions()["excluded_folders"] == []
