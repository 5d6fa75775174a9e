"""
ClearView - 核心模块
"""

from .policy import ExclusionPolicy
from .indexer import IndexBuilder, classify, make_entry
from .index_cache import IndexCache
from .ranking import compute_score, normalize_query, rank
from .recents import RecencyList
from .usage import UsageCounters
from .schedule import mark_indexed, should_rebuild
from .index_manager import IndexManager
from .calculator import Calculator
from .unit_converter import UnitConverter
from .web_search import is_likely_url, web_search_url
from .clipboard_history import ClipboardHistory
from .fast_paths import FastPathChain, web_search_entry
from .search_workers import SearchWorker
from .query_controller import QueryController

__all__ = [
    'ExclusionPolicy',
    'IndexBuilder',
    'classify',
    'make_entry',
    'IndexCache',
    'compute_score',
    'normalize_query',
    'rank',
    'RecencyList',
    'UsageCounters',
    'mark_indexed',
    'should_rebuild',
    'IndexManager',
    'Calculator',
    'UnitConverter',
    'is_likely_url',
    'web_search_url',
    'ClipboardHistory',
    'FastPathChain',
    'web_search_entry',
    'SearchWorker',
    'QueryController',
]
