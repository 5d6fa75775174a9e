"""
Search worker thread - one search pass (fast paths, then ranking) off the
interactive thread.
"""

import logging
import time

from PySide6.QtCore import QThread, Signal

from ..constants import MAX_RESULTS
from .fast_paths import web_search_entry
from .ranking import rank

logger = logging.getLogger(__name__)


def run_search(query, catalog, usage, fast_paths=None, limit=MAX_RESULTS):
    """快速路径 -> 排序 -> 无结果时网页搜索"""
    if fast_paths is not None:
        results = fast_paths.evaluate(query)
        if results:
            return results

    results = rank(catalog, query, usage, limit=limit)
    if not results:
        return [web_search_entry(query)]
    return results


class SearchWorker(QThread):
    """搜索工作线程"""

    results_ready = Signal(int, str, list)

    def __init__(self, generation, query, catalog, usage, fast_paths=None, parent=None):
        super().__init__(parent)
        self.generation = generation
        self.query = query
        self.catalog = catalog
        self.usage = usage
        self.fast_paths = fast_paths
        self.stopped = False

    def stop(self):
        self.stopped = True

    def run(self):
        start_time = time.time()
        try:
            results = run_search(self.query, self.catalog, self.usage, self.fast_paths)
        except Exception as e:
            logger.error(f"搜索线程错误: {e}")
            results = [web_search_entry(self.query)]
        if self.stopped:
            return
        logger.debug(
            f"🔍 搜索 '{self.query}' (#{self.generation}): {len(results)} 条, {time.time() - start_time:.3f}s"
        )
        self.results_ready.emit(self.generation, self.query, results)


__all__ = ["SearchWorker", "run_search"]
