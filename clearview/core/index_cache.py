"""
Index cache - persists the last built catalog as a JSON list.
"""

import json
import logging
import os
from pathlib import Path

from ..constants import CATALOG_TYPES
from ..utils import atomic_write_json

logger = logging.getLogger(__name__)


class IndexCache:
    """目录缓存：整文件原子替换，读取失败视为无缓存"""

    FILE_NAME = "fileSystemIndex.json"

    def __init__(self, cache_path):
        self.cache_path = Path(cache_path)

    def exists(self):
        return self.cache_path.is_file()

    def save(self, catalog):
        records = [
            {"name": e["name"], "fullpath": e["fullpath"], "type": e["type"]}
            for e in catalog
        ]
        try:
            atomic_write_json(self.cache_path, records)
            logger.info(f"💾 索引缓存已保存: {len(records):,} 条")
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"索引缓存保存失败: {e}")
            return False

    def load(self):
        if not self.exists():
            return []
        try:
            with open(self.cache_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"⚠️ 索引缓存损坏，将重建: {e}")
            return []

        if not isinstance(data, list):
            logger.warning("⚠️ 索引缓存格式错误，将重建")
            return []

        catalog = []
        for rec in data:
            if (
                not isinstance(rec, dict)
                or not isinstance(rec.get("fullpath"), str)
                or not isinstance(rec.get("name"), str)
                or rec.get("type") not in CATALOG_TYPES
            ):
                logger.warning("⚠️ 索引缓存包含无效记录，将重建")
                return []
            catalog.append(
                {
                    "name": rec["name"],
                    "fullpath": rec["fullpath"],
                    "type": rec["type"],
                    "launch_count": 0,
                }
            )
        return catalog

    def clear(self):
        try:
            os.remove(self.cache_path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"删除索引缓存失败: {e}")


__all__ = ["IndexCache"]
