"""
ClearView 命令行入口 - 加载/重建索引并执行一次查询
"""

import argparse
import logging
import sys

from PySide6.QtCore import QCoreApplication, QTimer

from .config import ConfigManager
from .core.clipboard_history import ClipboardHistory
from .core.fast_paths import FastPathChain
from .core.index_manager import IndexManager
from .core.query_controller import QueryController
from .utils import setup_logging

logger = logging.getLogger(__name__)


def parse_args(argv=None):
	parser = argparse.ArgumentParser(prog="clearview", description="Local desktop search index")
	parser.add_argument("query", nargs="*", help="text to search for; omit to show the default view")
	parser.add_argument("--rebuild", action="store_true", help="force a full index rebuild")
	parser.add_argument("--data-dir", default=None, help="data directory (default: ~/.clearview)")
	parser.add_argument("--verbose", "-v", action="store_true", help="debug logging")
	return parser.parse_args(argv)


def print_results(results, out=None):
	out = out or sys.stdout
	current_group = None
	for item in results:
		group = item.get("group", "")
		if group != current_group:
			current_group = group
			print(f"[{group}]", file=out)
		fullpath = item.get("fullpath", "")
		if fullpath and fullpath != item.get("name"):
			print(f"  {item.get('name')}    {fullpath}", file=out)
		else:
			print(f"  {item.get('name')}", file=out)


def main(argv=None):
	args = parse_args(argv)
	setup_logging(args.data_dir, level=logging.DEBUG if args.verbose else logging.INFO)
	logger.info("🚀 ClearView 启动")

	app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
	app.setApplicationName("ClearView")

	config = ConfigManager(args.data_dir)
	index_mgr = IndexManager(config, data_dir=args.data_dir)
	index_mgr.progress_signal.connect(lambda n: logger.info(f"📊 已索引 {n:,} 项"))
	if not index_mgr.ensure_index(force=args.rebuild):
		logger.warning("⚠️ 索引构建失败，使用缓存目录")

	query = " ".join(args.query).strip()
	if not query:
		print_results(index_mgr.default_view())
		return 0

	clipboard = ClipboardHistory(config.config_dir / ClipboardHistory.FILE_NAME)
	fast_paths = FastPathChain(clipboard_history=clipboard)
	controller = QueryController(index_mgr, fast_paths, debounce_ms=config.get_search_debounce_ms())

	def on_results(text, results):
		print_results(results)
		app.quit()

	controller.results_changed.connect(on_results)
	QTimer.singleShot(0, lambda: controller.set_query(query))
	app.exec()
	controller.shutdown()
	return 0


if __name__ == "__main__":
	sys.exit(main())
