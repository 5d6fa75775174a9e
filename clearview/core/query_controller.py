"""
QueryController: debounces keystrokes and supersedes stale search passes.

Every edit restarts a single-shot QTimer. When it fires the generation token
is bumped and a SearchWorker runs against the current catalog snapshot. A
worker result is presented only if its generation is still the latest one;
anything older is dropped. Clearing the query shows the default view at once
without waiting for the timer.
"""

import logging

from PySide6.QtCore import QObject, QTimer, Signal

from ..constants import SEARCH_DEBOUNCE_MS
from .search_workers import SearchWorker

logger = logging.getLogger(__name__)

STATE_IDLE = "idle"
STATE_DEBOUNCING = "debouncing"
STATE_SEARCHING = "searching"
STATE_PRESENTING = "presenting"


class QueryController(QObject):
    results_changed = Signal(str, list)
    state_changed = Signal(str)
    search_started = Signal(int, str)

    def __init__(self, index_mgr, fast_paths=None, debounce_ms=SEARCH_DEBOUNCE_MS,
                 create_worker_func=None, parent=None):
        super().__init__(parent)
        self.index_mgr = index_mgr
        self.fast_paths = fast_paths
        self._create_worker = create_worker_func or SearchWorker

        self.query = ""
        self.generation = 0
        self.state = STATE_IDLE
        self.results = []
        self._workers = []

        self.timer = QTimer(self)
        self.timer.setSingleShot(True)
        self.timer.setInterval(debounce_ms)
        self.timer.timeout.connect(self._on_debounce_timeout)

    def _set_state(self, state):
        if state != self.state:
            self.state = state
            self.state_changed.emit(state)

    def _present(self, query, results):
        self.results = results
        self.results_changed.emit(query, results)

    def set_query(self, text):
        self.query = text or ""
        if not self.query.strip():
            # invalidate anything in flight before showing the default view
            self.timer.stop()
            self.generation += 1
            self._stop_workers()
            self._present("", self.index_mgr.default_view())
            self._set_state(STATE_IDLE)
            return
        # a new keystroke supersedes any pass already running
        self.generation += 1
        self._stop_workers()
        self.timer.start()
        self._set_state(STATE_DEBOUNCING)

    def _on_debounce_timeout(self):
        if not self.query.strip():
            return
        self._start_search(self.query)

    def _start_search(self, query):
        self.generation += 1
        generation = self.generation

        worker = self._create_worker(
            generation,
            query,
            self.index_mgr.catalog,
            self.index_mgr.usage_snapshot(),
            self.fast_paths,
        )
        worker.results_ready.connect(self._on_results_ready)
        # keep a reference until the thread is done
        self._workers.append(worker)
        worker.finished.connect(self._on_worker_finished)

        self._set_state(STATE_SEARCHING)
        self.search_started.emit(generation, query)
        worker.start()

    def _on_results_ready(self, generation, query, results):
        if generation != self.generation:
            logger.debug(f"丢弃过期结果 #{generation} '{query}' (当前 #{self.generation})")
            return
        self._present(query, results)
        self._set_state(STATE_PRESENTING)

    def _on_worker_finished(self):
        worker = self.sender()
        if worker is None:
            return
        if worker in self._workers:
            self._workers.remove(worker)
        worker.deleteLater()

    def refresh(self):
        """重新执行当前查询（例如索引重建之后）"""
        if self.query.strip():
            self.timer.stop()
            self._start_search(self.query)
        else:
            self.set_query("")

    def _stop_workers(self):
        for worker in self._workers:
            worker.stop()

    def shutdown(self, timeout_ms=2000):
        self.timer.stop()
        self.generation += 1
        self._stop_workers()
        for worker in list(self._workers):
            # a thread still running keeps its reference
            if worker.wait(timeout_ms):
                self._workers.remove(worker)
        if self._workers:
            logger.warning(f"⚠️ {len(self._workers)} 个搜索线程未在超时内结束")


__all__ = [
    "QueryController",
    "STATE_IDLE",
    "STATE_DEBOUNCING",
    "STATE_SEARCHING",
    "STATE_PRESENTING",
]
