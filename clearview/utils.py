"""
Utility helpers shared by the index, cache and stores.
"""

import json
import logging
import os
import stat
import tempfile
from pathlib import Path

from .constants import DATA_DIR, IS_WINDOWS

logger = logging.getLogger(__name__)

_HIDDEN_OR_SYSTEM = getattr(stat, "FILE_ATTRIBUTE_HIDDEN", 0x2) | getattr(
    stat, "FILE_ATTRIBUTE_SYSTEM", 0x4
)


def setup_logging(log_dir=None, level=logging.INFO):
    """配置日志：文件 + 控制台"""
    log_dir = Path(log_dir) if log_dir else DATA_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[
            logging.FileHandler(log_dir / "app.log", encoding="utf-8"),
            logging.StreamHandler(),
        ],
    )


def normalize_path(path):
    """Absolute, platform-normalized path without a trailing separator."""
    return os.path.normpath(os.path.abspath(os.path.expanduser(str(path))))


def path_key(path):
    """Identity key used for de-duplication (case-insensitive on Windows)."""
    return os.path.normcase(normalize_path(path))


def separator_count(path):
    return path.count(os.sep)


def get_extension(path):
    return os.path.splitext(path)[1].lower()


def is_hidden_or_system(path):
    """Return True for hidden/system entries.

    Raises OSError when the attributes cannot be read.
    """
    st = os.lstat(path)
    attrs = getattr(st, "st_file_attributes", None)
    if attrs is not None:
        return bool(attrs & _HIDDEN_OR_SYSTEM)
    return os.path.basename(path).startswith(".")


def get_app_shortcut_dirs():
    """Platform-standard application shortcut locations."""
    if IS_WINDOWS:
        candidates = [
            os.path.expandvars(r"%APPDATA%\Microsoft\Windows\Start Menu"),
            os.path.expandvars(r"%PROGRAMDATA%\Microsoft\Windows\Start Menu"),
        ]
    else:
        candidates = [
            os.path.expanduser("~/.local/share/applications"),
            "/usr/share/applications",
        ]
    dirs = []
    for p in candidates:
        if p and "%" not in p and os.path.isdir(p):
            p = normalize_path(p)
            if p not in dirs:
                dirs.append(p)
    return dirs


def read_json(path, default=None):
    """读取 JSON 文件，失败时返回 default"""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        return default
    except (OSError, ValueError) as e:
        logger.warning(f"⚠️ 读取 {path} 失败: {e}")
        return default


def atomic_write_json(path, data):
    """Write JSON to a temp file next to ``path`` and swap it in with os.replace."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=path.name + ".", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False)
        os.replace(tmp, path)
    except BaseException:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


__all__ = [
    "setup_logging",
    "normalize_path",
    "path_key",
    "separator_count",
    "get_extension",
    "is_hidden_or_system",
    "get_app_shortcut_dirs",
    "read_json",
    "atomic_write_json",
]
