"""
Shared constants for the launcher core.
"""

import os
import platform
from pathlib import Path

DATA_DIR = Path(os.environ.get("CLEARVIEW_HOME", Path.home() / ".clearview"))

IS_WINDOWS = platform.system() == "Windows"

# ==================== 结果类型 ====================
TYPE_FILE = "File"
TYPE_FOLDER = "Folder"
TYPE_APPLICATION = "Application"
TYPE_CALCULATOR = "Calculator"
TYPE_WEB_SEARCH = "WebSearch"
TYPE_RECENT_WEB_SEARCH = "RecentWebSearch"
TYPE_URL = "Url"
TYPE_CLIPBOARD = "Clipboard"
TYPE_COMMAND = "Command"

CATALOG_TYPES = (TYPE_FILE, TYPE_FOLDER, TYPE_APPLICATION)

# ==================== 分组标签 ====================
GROUP_APPS = "Apps"
GROUP_FOLDERS = "Folders"
GROUP_FILES = "Files"
GROUP_OTHER = "Other"
GROUP_RECENTLY_OPENED = "Recently Opened"
GROUP_RECENT_SEARCHES = "Recent Searches"
GROUP_WEB_SEARCH = "Web Search"
GROUP_ADDRESS = "Go to Address"
GROUP_CALCULATOR = "Calculator"
GROUP_CONVERTER = "Converter"
GROUP_CLIPBOARD = "Clipboard History"
GROUP_COMMANDS = "ClearView Commands"

SETTINGS_COMMAND = "SETTINGS_COMMAND"
EXIT_COMMAND = "EXIT_COMMAND"

# ==================== 索引模式 ====================
MODE_CONSERVATIVE = "conservative"
MODE_PERMISSIVE = "permissive"

# ==================== 索引计划 ====================
SCHEDULE_MANUAL = "Manual"
SCHEDULE_ON_STARTUP = "OnStartup"
SCHEDULE_INTERVAL = "Interval"

UNIT_HOURS = "Hours"
UNIT_DAYS = "Days"
UNIT_WEEKS = "Weeks"

# ==================== 调优参数 ====================
MAX_RESULTS = 100
MAX_RECENT_FILES = 5
MAX_RECENT_SEARCHES = 5
MAX_CLIPBOARD_ITEMS = 50
PROGRESS_STEP = 1000
SEARCH_DEBOUNCE_MS = 200

USAGE_WEIGHT = 5000
SCORE_EXACT = 1000
SCORE_PREFIX = 500
SCORE_CONTAINS = 100
SCORE_APPLICATION = 200
SCORE_FOLDER = 50

# 应用程序扩展名（可执行文件 / 快捷方式）
APP_EXTS = {".exe", ".lnk", ".desktop"}

PROTECTED_FOLDER_NAMES = {"personal vault"}

# 保守模式下允许的扩展名
WHITELIST_EXTS = {
    # documents
    ".txt", ".md", ".rtf", ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx",
    # images
    ".png", ".jpg", ".jpeg", ".gif", ".bmp", ".svg", ".webp",
    # audio / video
    ".mp3", ".wav", ".ogg", ".m4a", ".mp4", ".mkv", ".mov", ".avi",
    # source
    ".cs", ".js", ".ts", ".java", ".py", ".cpp", ".c", ".h", ".css", ".html", ".json", ".xml",
    # archives
    ".zip", ".tar", ".gz", ".7z", ".rar",
    # applications
    ".exe", ".lnk", ".desktop",
}

__all__ = [
    "DATA_DIR",
    "IS_WINDOWS",
    "TYPE_FILE",
    "TYPE_FOLDER",
    "TYPE_APPLICATION",
    "CATALOG_TYPES",
    "MODE_CONSERVATIVE",
    "MODE_PERMISSIVE",
    "APP_EXTS",
    "PROTECTED_FOLDER_NAMES",
    "WHITELIST_EXTS",
]
