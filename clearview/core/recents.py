"""
最近使用列表 - 最近打开的项目 / 最近的搜索
"""
import logging
import threading
from pathlib import Path

from ..utils import atomic_write_json, read_json

logger = logging.getLogger(__name__)


class RecencyList:
	"""有界 MRU 列表，按 fullpath 去重，最新的在前"""

	def __init__(self, save_file, capacity=5):
		self.save_file = Path(save_file)
		self.capacity = max(int(capacity), 1)
		self.lock = threading.Lock()
		self.history = []
		self.load()

	def load(self):
		data = read_json(self.save_file, default=[])
		items = []
		if isinstance(data, list):
			for item in data:
				if isinstance(item, dict) and item.get("fullpath"):
					items.append(item)
		with self.lock:
			self.history = items[:self.capacity]

	def save(self):
		with self.lock:
			data = list(self.history)
		try:
			atomic_write_json(self.save_file, data)
		except OSError as e:
			logger.warning(f"保存最近列表失败 {self.save_file.name}: {e}")

	def add(self, entry):
		"""移到最前或插入，超出容量时丢弃最旧的"""
		if not entry or not entry.get("fullpath"):
			return
		item = dict(entry)
		item.pop("group", None)
		with self.lock:
			self.history = [h for h in self.history if h.get("fullpath") != item["fullpath"]]
			self.history.insert(0, item)
			if len(self.history) > self.capacity:
				self.history = self.history[:self.capacity]
		self.save()

	def remove(self, entry):
		fullpath = entry.get("fullpath") if isinstance(entry, dict) else entry
		with self.lock:
			before = len(self.history)
			self.history = [h for h in self.history if h.get("fullpath") != fullpath]
			changed = len(self.history) != before
		if changed:
			self.save()
		return changed

	def items(self):
		with self.lock:
			return [dict(h) for h in self.history]

	def clear(self):
		with self.lock:
			self.history = []
		self.save()

	def __len__(self):
		with self.lock:
			return len(self.history)


__all__ = ["RecencyList"]
