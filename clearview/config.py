"""
Configuration manager - search scope, exclusions, indexing schedule and general settings.
"""

import copy
import json
import logging
from pathlib import Path

from .constants import (
    DATA_DIR,
    MAX_RECENT_FILES,
    MAX_RECENT_SEARCHES,
    MODE_CONSERVATIVE,
    MODE_PERMISSIVE,
    SCHEDULE_INTERVAL,
    SCHEDULE_MANUAL,
    SCHEDULE_ON_STARTUP,
    SEARCH_DEBOUNCE_MS,
    UNIT_DAYS,
    UNIT_HOURS,
    UNIT_WEEKS,
)
from .utils import atomic_write_json, normalize_path

logger = logging.getLogger(__name__)


class ConfigManager:
    """配置管理器 - 处理应用程序配置的保存和加载"""

    def __init__(self, config_dir=None):
        self.config_dir = Path(config_dir) if config_dir else DATA_DIR
        self.config_file = self.config_dir / "config.json"
        self.config = self._load()

    def _load(self):
        """加载配置文件，缺失的键用默认值补齐"""
        config = self._get_default_config()
        try:
            if self.config_file.exists():
                with open(self.config_file, "r", encoding="utf-8") as f:
                    stored = json.load(f)
                if isinstance(stored, dict):
                    for key, value in stored.items():
                        if isinstance(config.get(key), dict) and isinstance(value, dict):
                            config[key].update(value)
                        else:
                            config[key] = value
        except (json.JSONDecodeError, IOError) as e:
            logger.error(f"配置加载失败: {e}")
        return config

    def _get_default_config(self):
        """获取默认配置"""
        return {
            "search_scope": [],
            "indexing": {
                "schedule": SCHEDULE_ON_STARTUP,
                "interval_value": 24,
                "interval_unit": UNIT_HOURS,
                "last_indexed_utc": None,
            },
            "exclusions": {
                "excluded_folders": [],
                "excluded_extensions": [],
                "excluded_file_types": [],
            },
            "general": {
                "search_mode": MODE_CONSERVATIVE,
                "max_recent_files": MAX_RECENT_FILES,
                "max_recent_searches": MAX_RECENT_SEARCHES,
                "search_debounce_ms": SEARCH_DEBOUNCE_MS,
                # 重建前释放旧目录（降低峰值内存，重建期间查询为空）
                "release_catalog_during_rebuild": False,
            },
        }

    def save(self):
        """保存配置到文件"""
        try:
            atomic_write_json(self.config_file, self.config)
        except OSError as e:
            logger.error(f"配置保存失败: {e}")

    # ---------- search scope ----------
    def get_search_scope(self):
        scope = [p for p in self.config.get("search_scope", []) if p]
        if not scope:
            return [normalize_path(Path.home())]
        return scope

    def set_search_scope(self, roots):
        seen = []
        for r in roots or []:
            if not r:
                continue
            r = normalize_path(r)
            if r not in seen:
                seen.append(r)
        self.config["search_scope"] = seen
        self.save()

    # ---------- exclusions ----------
    def get_exclusions(self):
        return copy.deepcopy(self.config["exclusions"])

    def set_exclusions(self, excluded_folders=None, excluded_extensions=None, excluded_file_types=None):
        exclusions = self.config["exclusions"]
        if excluded_folders is not None:
            exclusions["excluded_folders"] = list(excluded_folders)
        if excluded_extensions is not None:
            exclusions["excluded_extensions"] = list(excluded_extensions)
        if excluded_file_types is not None:
            exclusions["excluded_file_types"] = list(excluded_file_types)
        self.save()

    # ---------- indexing schedule ----------
    def get_indexing_settings(self):
        return copy.deepcopy(self.config["indexing"])

    def set_indexing_settings(self, settings):
        indexing = self.config["indexing"]
        schedule = settings.get("schedule", indexing["schedule"])
        if schedule not in (SCHEDULE_MANUAL, SCHEDULE_ON_STARTUP, SCHEDULE_INTERVAL):
            logger.warning(f"未知的索引计划: {schedule}")
            schedule = SCHEDULE_ON_STARTUP
        unit = settings.get("interval_unit", indexing["interval_unit"])
        if unit not in (UNIT_HOURS, UNIT_DAYS, UNIT_WEEKS):
            unit = UNIT_HOURS
        try:
            value = int(settings.get("interval_value", indexing["interval_value"]))
        except (TypeError, ValueError):
            value = indexing["interval_value"]
        indexing.update(
            {
                "schedule": schedule,
                "interval_value": max(value, 1),
                "interval_unit": unit,
                "last_indexed_utc": settings.get("last_indexed_utc", indexing["last_indexed_utc"]),
            }
        )
        self.save()

    # ---------- general ----------
    def get_search_mode(self):
        mode = self.config["general"].get("search_mode", MODE_CONSERVATIVE)
        return mode if mode in (MODE_CONSERVATIVE, MODE_PERMISSIVE) else MODE_CONSERVATIVE

    def set_search_mode(self, mode):
        if mode not in (MODE_CONSERVATIVE, MODE_PERMISSIVE):
            return
        self.config["general"]["search_mode"] = mode
        self.save()

    def _get_positive_int(self, key, default):
        try:
            v = int(self.config["general"].get(key, default))
            return v if v > 0 else default
        except (TypeError, ValueError):
            return default

    def get_max_recent_files(self) -> int:
        return self._get_positive_int("max_recent_files", MAX_RECENT_FILES)

    def get_max_recent_searches(self) -> int:
        return self._get_positive_int("max_recent_searches", MAX_RECENT_SEARCHES)

    def get_search_debounce_ms(self) -> int:
        return self._get_positive_int("search_debounce_ms", SEARCH_DEBOUNCE_MS)

    def get_release_catalog_during_rebuild(self) -> bool:
        return bool(self.config["general"].get("release_catalog_during_rebuild", False))

    def set_general(self, key, value):
        self.config["general"][key] = value
        self.save()


__all__ = ["ConfigManager"]
