import json

import pytest

from clearview.constants import (
    EXIT_COMMAND,
    GROUP_COMMANDS,
    GROUP_RECENT_SEARCHES,
    GROUP_RECENTLY_OPENED,
    SCHEDULE_MANUAL,
    SETTINGS_COMMAND,
    TYPE_RECENT_WEB_SEARCH,
    TYPE_URL,
)
from clearview.core.fast_paths import web_search_entry
from clearview.core.index_cache import IndexCache
from clearview.core.index_manager import IndexManager
from clearview.tests.conftest import make_tree

pytestmark = pytest.mark.usefixtures("qapp")


def _manager(config, tmp_path, tree=("docs/report.txt", "docs/notes.md", "apps/tool.exe")):
    root = tmp_path / "root"
    make_tree(root, list(tree))
    config.set_search_scope([str(root)])
    return IndexManager(config, extra_roots=[]), root


def _names(mgr):
    return {e["name"] for e in mgr.catalog}


def test_ensure_index_builds_without_cache(config, tmp_path):
    mgr, root = _manager(config, tmp_path)
    started, finished = [], []
    mgr.build_started_signal.connect(lambda: started.append(True))
    mgr.build_finished_signal.connect(finished.append)

    assert mgr.ensure_index()
    assert {"report.txt", "notes.md", "tool.exe", "docs", "apps"} <= _names(mgr)
    assert isinstance(mgr.catalog, tuple)
    assert mgr.cache.exists()
    assert config.get_indexing_settings()["last_indexed_utc"]
    assert started == [True]
    assert finished == [mgr.file_count]


def test_manual_schedule_uses_cache(config, tmp_path):
    mgr, root = _manager(config, tmp_path)
    mgr.ensure_index()
    config.set_indexing_settings({"schedule": SCHEDULE_MANUAL})
    make_tree(root, ["docs/later.txt"])

    fresh = IndexManager(config, extra_roots=[])
    assert fresh.ensure_index()
    assert "later.txt" not in _names(fresh)
    assert "report.txt" in _names(fresh)

    assert fresh.ensure_index(force=True)
    assert "later.txt" in _names(fresh)


def test_corrupt_cache_forces_rebuild(config, tmp_path):
    mgr, root = _manager(config, tmp_path)
    config.set_indexing_settings({"schedule": SCHEDULE_MANUAL})
    (config.config_dir / IndexCache.FILE_NAME).write_text("garbage", encoding="utf-8")
    assert mgr.ensure_index()
    assert "report.txt" in _names(mgr)


def test_failed_build_keeps_previous_catalog(config, tmp_path, monkeypatch):
    mgr, root = _manager(config, tmp_path)
    mgr.ensure_index()
    before = mgr.catalog

    def broken_builder():
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(mgr, "make_builder", broken_builder)
    assert mgr.build_index() is False
    assert mgr.catalog is before
    assert not mgr.is_building


def test_release_catalog_during_rebuild(config, tmp_path, monkeypatch):
    mgr, root = _manager(config, tmp_path)
    mgr.ensure_index()
    config.set_general("release_catalog_during_rebuild", True)
    seen = []
    real_make_builder = mgr.make_builder

    def spying_builder():
        seen.append(len(mgr.catalog))
        return real_make_builder()

    monkeypatch.setattr(mgr, "make_builder", spying_builder)
    assert mgr.build_index()
    assert seen == [0]
    assert mgr.file_count > 0


def test_background_rebuild(config, tmp_path):
    mgr, root = _manager(config, tmp_path)
    thread = mgr.start_rebuild()
    assert thread is not None
    mgr.wait_for_build(timeout=10)
    assert "report.txt" in _names(mgr)


def test_record_launch_feeds_catalog_and_recents(config, tmp_path):
    mgr, root = _manager(config, tmp_path)
    mgr.ensure_index()
    report = next(e for e in mgr.catalog if e["name"] == "report.txt")

    assert mgr.record_launch(report) == 1
    assert mgr.record_launch(report) == 2
    assert mgr.usage_snapshot() == {report["fullpath"]: 2}
    assert mgr.recent_files.items()[0]["fullpath"] == report["fullpath"]

    mgr.load_from_cache()
    reloaded = next(e for e in mgr.catalog if e["name"] == "report.txt")
    assert reloaded["launch_count"] == 2

    stored = json.loads((config.config_dir / "usage_analytics.json").read_text(encoding="utf-8"))
    assert stored == {report["fullpath"]: 2}


def test_default_view(config, tmp_path):
    mgr, root = _manager(config, tmp_path)
    view = mgr.default_view()
    assert [v["fullpath"] for v in view] == [SETTINGS_COMMAND, EXIT_COMMAND]
    assert all(v["group"] == GROUP_COMMANDS and v["is_special_command"] for v in view)

    mgr.ensure_index()
    report = next(e for e in mgr.catalog if e["name"] == "report.txt")
    mgr.record_launch(report)
    mgr.record_search(web_search_entry("weather"))

    view = mgr.default_view()
    assert [v["group"] for v in view] == [
        GROUP_RECENTLY_OPENED,
        GROUP_RECENT_SEARCHES,
        GROUP_COMMANDS,
        GROUP_COMMANDS,
    ]
    assert view[0]["name"] == "report.txt"
    assert view[1]["name"] == 'Search for "weather"'
    assert view[1]["type"] == TYPE_RECENT_WEB_SEARCH


def test_record_search_url_uses_address_as_name(config, tmp_path):
    mgr, root = _manager(config, tmp_path)
    mgr.record_search({"name": "Open github.com", "fullpath": "github.com", "type": TYPE_URL})
    item = mgr.recent_searches.items()[0]
    assert item["name"] == "github.com"
    assert item["type"] == TYPE_RECENT_WEB_SEARCH


def test_remove_recent(config, tmp_path):
    mgr, root = _manager(config, tmp_path)
    mgr.ensure_index()
    report = next(e for e in mgr.catalog if e["name"] == "report.txt")
    mgr.record_launch(report)
    mgr.record_search(web_search_entry("weather"))

    view = mgr.default_view()
    assert mgr.remove_recent(view[1])
    assert mgr.remove_recent(view[0])
    assert not mgr.remove_recent(view[-1])
    assert [v["group"] for v in mgr.default_view()] == [GROUP_COMMANDS, GROUP_COMMANDS]
