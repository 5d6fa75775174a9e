"""
排除策略 - 决定路径是否进入索引
"""

import logging
import os

from ..constants import (
    MODE_CONSERVATIVE,
    PROTECTED_FOLDER_NAMES,
    WHITELIST_EXTS,
)
from ..utils import get_extension, is_hidden_or_system

logger = logging.getLogger(__name__)


def _normalize_ext(ext):
    ext = (ext or "").strip().lower()
    if not ext:
        return ""
    return ext if ext.startswith(".") else "." + ext


def _final_segment(path):
    return os.path.basename(path.rstrip("\\/"))


class ExclusionPolicy:
    """排除规则集

    Rules are evaluated top-down, any match excludes:
      1. protected folder names (final path segment)
      2. excluded folders - absolute entries match as a path prefix on a
         segment boundary, bare names match the start of the final segment
      3. excluded extensions / file types
    """

    def __init__(self, excluded_folders=None, excluded_extensions=None,
                 excluded_file_types=None, whitelist_exts=None):
        self.folder_prefixes = []
        self.folder_names = []
        for folder in excluded_folders or []:
            folder = (folder or "").strip()
            if not folder:
                continue
            if os.path.isabs(folder) or "/" in folder or "\\" in folder:
                self.folder_prefixes.append(os.path.normpath(folder).lower().rstrip("\\/"))
            else:
                self.folder_names.append(folder.lower())

        self.excluded_exts = {
            e for e in (_normalize_ext(x) for x in (excluded_extensions or [])) if e
        }
        self.excluded_exts |= {
            e for e in (_normalize_ext(x) for x in (excluded_file_types or [])) if e
        }
        self.whitelist_exts = {
            e for e in (_normalize_ext(x) for x in (whitelist_exts or WHITELIST_EXTS)) if e
        }

    @classmethod
    def from_config(cls, config_mgr):
        ex = config_mgr.get_exclusions()
        return cls(
            excluded_folders=ex.get("excluded_folders"),
            excluded_extensions=ex.get("excluded_extensions"),
            excluded_file_types=ex.get("excluded_file_types"),
        )

    def _under_excluded_folder(self, path_lower):
        for prefix in self.folder_prefixes:
            if path_lower == prefix:
                return True
            if path_lower.startswith(prefix) and path_lower[len(prefix)] in "\\/":
                return True
        return False

    def is_excluded(self, path):
        name_lower = _final_segment(path).lower()
        if name_lower in PROTECTED_FOLDER_NAMES:
            return True

        if self.folder_prefixes and self._under_excluded_folder(os.path.normpath(path).lower()):
            return True

        for name in self.folder_names:
            if name_lower.startswith(name):
                return True

        ext = get_extension(name_lower)
        if ext and ext in self.excluded_exts:
            return True

        return False

    def is_admissible(self, path, mode, is_dir=False):
        """在 is_excluded 基础上，保守模式额外过滤隐藏/系统条目和非白名单扩展名"""
        if self.is_excluded(path):
            return False
        if mode != MODE_CONSERVATIVE:
            return True

        try:
            if is_hidden_or_system(path):
                return False
        except OSError as e:
            # conservative mode excludes anything it cannot inspect
            logger.debug(f"读取属性失败，排除: {path} ({e})")
            return False

        if is_dir:
            return True
        ext = get_extension(path)
        return bool(ext) and ext in self.whitelist_exts


__all__ = ["ExclusionPolicy"]
