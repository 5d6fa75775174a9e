"""
Index builder - concurrent filesystem walk producing the flat catalog.
"""

import concurrent.futures
import logging
import os
import threading
import time
from collections import deque

from ..constants import (
    APP_EXTS,
    MODE_CONSERVATIVE,
    PROGRESS_STEP,
    TYPE_APPLICATION,
    TYPE_FILE,
    TYPE_FOLDER,
)
from ..utils import get_app_shortcut_dirs, get_extension, normalize_path, path_key

logger = logging.getLogger(__name__)


def classify(path, is_dir):
    """目录 -> Folder；可执行/快捷方式 -> Application；其他 -> File"""
    if is_dir:
        return TYPE_FOLDER
    if get_extension(path) in APP_EXTS:
        return TYPE_APPLICATION
    return TYPE_FILE


def make_entry(path, is_dir):
    return {
        "name": os.path.basename(path) or path,
        "fullpath": path,
        "type": classify(path, is_dir),
        "launch_count": 0,
    }


class _ProgressCounter:
    """Monotonic counter shared by the root walkers."""

    def __init__(self, callback=None, step=PROGRESS_STEP):
        self.callback = callback
        self.step = step
        self.value = 0
        self.lock = threading.Lock()

    def add(self, n=1):
        # reported under the lock so concurrent walkers never go backwards
        with self.lock:
            before = self.value
            self.value += n
            if self.callback and self.value // self.step > before // self.step:
                self._report(self.value)

    def _report(self, value):
        try:
            self.callback(value)
        except Exception as e:
            logger.warning(f"进度回调失败: {e}")

    def finish(self):
        with self.lock:
            if self.callback:
                self._report(self.value)


class IndexBuilder:
    """索引构建器 - 每个根目录一个任务，目录内用显式栈下降"""

    def __init__(self, policy, mode=MODE_CONSERVATIVE, extra_roots=None, progress_step=PROGRESS_STEP):
        self.policy = policy
        self.mode = mode
        # None -> platform application shortcut locations
        self.extra_roots = extra_roots
        self.progress_step = progress_step

    def collect_roots(self, roots):
        extra = get_app_shortcut_dirs() if self.extra_roots is None else list(self.extra_roots)
        out = []
        seen = set()
        for r in list(roots or []) + extra:
            if not r:
                continue
            norm = normalize_path(r)
            key = os.path.normcase(norm)
            if key in seen:
                continue
            seen.add(key)
            out.append(norm)
        return out

    def build(self, roots, on_progress=None, stop_fn=None):
        """Walk all roots and return a list of catalog entries.

        Returns None when cancelled through ``stop_fn``.
        """
        start = time.time()
        all_roots = [r for r in self.collect_roots(roots) if os.path.isdir(r)]
        if not all_roots:
            logger.warning("⚠️ 没有可索引的目录")
            return []

        logger.info(f"🚀 开始构建索引: {len(all_roots)} 个根目录, 模式={self.mode}")
        counter = _ProgressCounter(on_progress, self.progress_step)
        per_root = {}

        with concurrent.futures.ThreadPoolExecutor(max_workers=len(all_roots)) as ex:
            futures = {ex.submit(self._walk_root, r, counter, stop_fn): r for r in all_roots}
            for future in concurrent.futures.as_completed(futures):
                root = futures[future]
                try:
                    per_root[root] = future.result()
                except Exception as e:
                    logger.error(f"扫描目录 {root} 失败: {e}")
                    per_root[root] = []

        if stop_fn and stop_fn():
            logger.info("⏹️ 索引构建已取消")
            return None

        merged = {}
        for root in all_roots:
            for entry in per_root.pop(root, []):
                merged.setdefault(path_key(entry["fullpath"]), entry)

        counter.finish()
        logger.info(f"✅ 索引构建完成: {len(merged):,} 条, 耗时 {time.time() - start:.2f}s")
        return list(merged.values())

    def _walk_root(self, root, counter, stop_fn=None):
        if self.policy.is_excluded(root):
            logger.info(f"跳过被排除的根目录: {root}")
            return []

        entries = []
        stack = deque([root])
        while stack:
            if stop_fn and stop_fn():
                break
            cur = stack.pop()
            try:
                with os.scandir(cur) as it:
                    for e in it:
                        try:
                            is_dir = e.is_dir(follow_symlinks=False)
                        except OSError:
                            continue
                        if not self.policy.is_admissible(e.path, self.mode, is_dir=is_dir):
                            continue
                        entries.append(make_entry(e.path, is_dir))
                        counter.add()
                        if is_dir:
                            stack.append(e.path)
            except (PermissionError, FileNotFoundError, OSError) as e:
                # only this subtree is lost
                logger.debug(f"无法访问目录: {cur} ({e})")
                continue
        return entries


__all__ = ["IndexBuilder", "classify", "make_entry"]
