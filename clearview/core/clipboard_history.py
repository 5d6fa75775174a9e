"""
剪贴板历史管理器
"""
import logging
import threading
from pathlib import Path

from PySide6.QtCore import QCoreApplication, QObject, QTimer, Signal
from PySide6.QtGui import QGuiApplication

from ..constants import MAX_CLIPBOARD_ITEMS
from ..utils import atomic_write_json, read_json

logger = logging.getLogger(__name__)


class ClipboardHistory(QObject):
	"""剪贴板历史记录管理器"""

	clipboard_changed = Signal(str)  # 剪贴板内容变化信号

	FILE_NAME = "clipboard_history.json"

	def __init__(self, save_file, max_items=MAX_CLIPBOARD_ITEMS, parent=None):
		super().__init__(parent)
		self.max_items = max_items
		self.save_file = Path(save_file)
		self.lock = threading.Lock()
		self.history = []  # 最新的在前
		self.last_text = ""
		self.timer = None

		self.load_history()

	def start_monitor(self, interval_ms=1000):
		"""轮询系统剪贴板；没有 QGuiApplication 时不启动"""
		if not isinstance(QCoreApplication.instance(), QGuiApplication):
			logger.info("没有 GUI 应用实例，剪贴板监控未启动")
			return False
		if self.timer is None:
			self.timer = QTimer(self)
			self.timer.timeout.connect(self._check_clipboard)
		self.last_text = QGuiApplication.clipboard().text()
		self.add_item(self.last_text)
		self.timer.start(interval_ms)
		return True

	def _check_clipboard(self):
		"""检查剪贴板是否有新内容"""
		current_text = QGuiApplication.clipboard().text()
		if current_text and current_text != self.last_text:
			self.last_text = current_text
			if self.add_item(current_text):
				self.clipboard_changed.emit(current_text)

	def add_item(self, text):
		"""添加新条目到历史记录"""
		if not text or not text.strip():
			return False
		normalized = text.replace("\r\n", "\n").strip()

		with self.lock:
			# 移除重复项（如果存在）
			self.history = [t for t in self.history if t != normalized]
			# 添加新项到开头
			self.history.insert(0, normalized)
			# 限制历史记录数量
			del self.history[self.max_items:]

		self.save_history()
		return True

	def get_history(self, limit=None):
		"""获取历史记录"""
		with self.lock:
			if limit:
				return self.history[:limit]
			return list(self.history)

	def search_history(self, keyword):
		"""搜索历史记录"""
		keyword_lower = (keyword or "").lower()
		return [t for t in self.get_history() if keyword_lower in t.lower()]

	def clear_history(self):
		"""清空历史记录"""
		with self.lock:
			self.history = []
		self.save_history()

	def save_history(self):
		"""保存历史记录到文件"""
		with self.lock:
			data = list(self.history)
		try:
			atomic_write_json(self.save_file, data)
		except OSError as e:
			logger.warning(f"保存剪贴板历史失败: {e}")

	def load_history(self):
		"""从文件加载历史记录"""
		data = read_json(self.save_file, default=[])
		items = [t for t in data if isinstance(t, str) and t] if isinstance(data, list) else []
		with self.lock:
			self.history = items[:self.max_items]

	def stop(self):
		"""停止监控剪贴板"""
		if self.timer:
			self.timer.stop()
