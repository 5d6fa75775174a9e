"""
ClearView - 本地桌面搜索索引
"""

__version__ = "1.0.0"
