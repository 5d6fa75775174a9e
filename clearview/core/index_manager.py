"""
Index manager - owns the installed catalog, its cache, usage counters and
recency lists. Constructed once at startup and handed to the query controller.
"""

import logging
import threading
import time
from pathlib import Path

from PySide6.QtCore import QObject, Signal

from ..constants import (
    EXIT_COMMAND,
    GROUP_COMMANDS,
    GROUP_RECENT_SEARCHES,
    GROUP_RECENTLY_OPENED,
    SETTINGS_COMMAND,
    TYPE_COMMAND,
    TYPE_RECENT_WEB_SEARCH,
    TYPE_URL,
)
from .index_cache import IndexCache
from .indexer import IndexBuilder
from .policy import ExclusionPolicy
from .recents import RecencyList
from .schedule import mark_indexed, should_rebuild
from .usage import UsageCounters

logger = logging.getLogger(__name__)


class IndexManager(QObject):
    """索引管理器 - 管理目录的构建、缓存与安装"""

    progress_signal = Signal(int)
    build_started_signal = Signal()
    build_finished_signal = Signal(int)

    def __init__(self, config_mgr, data_dir=None, extra_roots=None):
        super().__init__()
        self.config_mgr = config_mgr
        self.data_dir = Path(data_dir) if data_dir else Path(config_mgr.config_dir)
        # None -> platform application shortcut folders
        self.extra_roots = extra_roots

        self.cache = IndexCache(self.data_dir / IndexCache.FILE_NAME)
        self.usage = UsageCounters(self.data_dir / UsageCounters.FILE_NAME)
        self.recent_files = RecencyList(
            self.data_dir / "recent.json", config_mgr.get_max_recent_files()
        )
        self.recent_searches = RecencyList(
            self.data_dir / "recentSearches.json", config_mgr.get_max_recent_searches()
        )

        self._catalog = ()
        self._build_lock = threading.Lock()
        self.is_building = False
        self.last_build_duration = None
        self._build_thread = None

    # ---------- catalog ----------
    @property
    def catalog(self):
        """当前目录快照（不可变 tuple，整体替换）"""
        return self._catalog

    @property
    def file_count(self):
        return len(self._catalog)

    def _install(self, entries):
        counts = self.usage.snapshot()
        for entry in entries:
            entry["launch_count"] = counts.get(entry["fullpath"], 0)
        # single reference swap, readers see either the old or the new tuple
        self._catalog = tuple(entries)

    def load_from_cache(self):
        entries = self.cache.load()
        self._install(entries)
        logger.info(f"📂 从缓存加载 {len(entries):,} 条")
        return len(entries)

    def needs_rebuild(self, now=None):
        return should_rebuild(
            self.config_mgr.get_indexing_settings(),
            cache_available=bool(self._catalog),
            now=now,
        )

    def ensure_index(self, force=False, now=None):
        """启动检查：加载缓存，按计划或缓存缺失时重建"""
        self.load_from_cache()
        if force or self.needs_rebuild(now=now):
            return self.build_index()
        return True

    def make_builder(self):
        return IndexBuilder(
            ExclusionPolicy.from_config(self.config_mgr),
            mode=self.config_mgr.get_search_mode(),
            extra_roots=self.extra_roots,
        )

    def build_index(self, stop_fn=None):
        """完整重建：构建 -> 保存缓存 -> 安装 -> 记录时间。返回是否成功"""
        with self._build_lock:
            if self.is_building:
                logger.warning("索引正在构建中，忽略重复请求")
                return False
            self.is_building = True

        build_start = time.time()
        try:
            self.build_started_signal.emit()
            if self.config_mgr.get_release_catalog_during_rebuild():
                self._catalog = ()

            roots = self.config_mgr.get_search_scope()
            entries = self.make_builder().build(
                roots, on_progress=self.progress_signal.emit, stop_fn=stop_fn
            )
            if entries is None:
                return False

            self.cache.save(entries)
            self._install(entries)

            settings = self.config_mgr.get_indexing_settings()
            mark_indexed(settings)
            self.config_mgr.set_indexing_settings(settings)

            self.last_build_duration = time.time() - build_start
            logger.info(f"✅ 索引已安装: {self.file_count:,} 条, 总耗时 {self.last_build_duration:.2f}s")
            return True
        except Exception as e:
            # the previous catalog stays installed
            logger.exception(f"❌ 构建错误: {e}")
            return False
        finally:
            self.is_building = False
            self.build_finished_signal.emit(self.file_count)

    def start_rebuild(self, stop_fn=None):
        """后台线程重建，查询继续使用旧目录直到替换"""
        if self.is_building:
            return None
        self._build_thread = threading.Thread(
            target=self.build_index, kwargs={"stop_fn": stop_fn}, daemon=True
        )
        self._build_thread.start()
        return self._build_thread

    def wait_for_build(self, timeout=None):
        if self._build_thread is not None:
            self._build_thread.join(timeout)

    # ---------- usage / recents ----------
    def usage_snapshot(self):
        return self.usage.snapshot()

    def record_launch(self, entry):
        """启动成功后：计数 +1，加入最近打开"""
        count = self.usage.increment(entry.get("fullpath"))
        item = dict(entry)
        item["launch_count"] = count
        self.recent_files.add(item)
        return count

    def record_search(self, entry):
        """执行网页搜索/打开网址后加入最近搜索"""
        item = dict(entry)
        item["type"] = TYPE_RECENT_WEB_SEARCH
        if entry.get("type") == TYPE_URL:
            item["name"] = item["fullpath"]
        self.recent_searches.add(item)

    def remove_recent(self, entry):
        if entry.get("is_special_command"):
            return False
        if entry.get("type") == TYPE_RECENT_WEB_SEARCH:
            return self.recent_searches.remove(entry)
        return self.recent_files.remove(entry)

    def default_view(self):
        """空查询时显示：最近打开 + 最近搜索 + 命令"""
        display = []
        for item in self.recent_files.items():
            item["group"] = GROUP_RECENTLY_OPENED
            display.append(item)
        for item in self.recent_searches.items():
            item["group"] = GROUP_RECENT_SEARCHES
            display.append(item)
        display.append(
            {
                "name": "Settings",
                "fullpath": SETTINGS_COMMAND,
                "type": TYPE_COMMAND,
                "is_special_command": True,
                "group": GROUP_COMMANDS,
            }
        )
        display.append(
            {
                "name": "Exit",
                "fullpath": EXIT_COMMAND,
                "type": TYPE_COMMAND,
                "is_special_command": True,
                "group": GROUP_COMMANDS,
            }
        )
        return display


__all__ = ["IndexManager"]
