"""
使用统计 - 记录每个路径的启动次数
"""
import logging
import threading
from pathlib import Path

from ..utils import atomic_write_json, read_json

logger = logging.getLogger(__name__)


class UsageCounters:
	"""启动次数计数器，每次递增后立即持久化"""

	FILE_NAME = "usage_analytics.json"

	def __init__(self, save_file):
		self.save_file = Path(save_file)
		self.lock = threading.Lock()
		self.counts = {}
		self.load()

	def load(self):
		data = read_json(self.save_file, default={})
		counts = {}
		if isinstance(data, dict):
			for path, count in data.items():
				if isinstance(path, str) and isinstance(count, int) and count > 0:
					counts[path] = count
		with self.lock:
			self.counts = counts

	def save(self):
		with self.lock:
			data = dict(self.counts)
		try:
			atomic_write_json(self.save_file, data)
		except OSError as e:
			logger.warning(f"保存使用统计失败: {e}")

	def increment(self, path):
		"""启动成功后调用，返回新的计数"""
		if not path:
			return 0
		with self.lock:
			count = self.counts.get(path, 0) + 1
			self.counts[path] = count
		self.save()
		return count

	def get(self, path):
		with self.lock:
			return self.counts.get(path, 0)

	def snapshot(self):
		with self.lock:
			return dict(self.counts)


__all__ = ["UsageCounters"]
