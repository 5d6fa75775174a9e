"""
Fast-path evaluators tried before ranked search.

Each evaluator takes the raw query and returns a list of result entries, or
None when it does not apply. The first evaluator with a non-empty answer
short-circuits the ranked search for that query.
"""

import logging
import re

from ..constants import (
    GROUP_ADDRESS,
    GROUP_CALCULATOR,
    GROUP_CLIPBOARD,
    GROUP_CONVERTER,
    GROUP_WEB_SEARCH,
    TYPE_CALCULATOR,
    TYPE_CLIPBOARD,
    TYPE_URL,
    TYPE_WEB_SEARCH,
)
from .calculator import Calculator
from .unit_converter import UnitConverter
from .web_search import is_likely_url

logger = logging.getLogger(__name__)

CLIP_COMMAND = re.compile(r"^clip(?:\s+(.*))?$", re.IGNORECASE)


def web_search_entry(query):
    """零结果时的替代条目"""
    query = (query or "").strip()
    return {
        "name": f'Search for "{query}"',
        "fullpath": query,
        "type": TYPE_WEB_SEARCH,
        "group": GROUP_WEB_SEARCH,
    }


def url_evaluator(query):
    query = query.strip()
    if not is_likely_url(query):
        return None
    return [{"name": f"Open {query}", "fullpath": query, "type": TYPE_URL, "group": GROUP_ADDRESS}]


def calculator_evaluator(query):
    result = Calculator.evaluate(query)
    if result is None:
        return None
    return [{"name": result, "fullpath": "", "type": TYPE_CALCULATOR, "group": GROUP_CALCULATOR}]


def make_converter_evaluator(converter):
    def converter_evaluator(query):
        result = converter.convert(query.strip().lower())
        if result is None:
            return None
        return [{"name": result, "fullpath": "", "type": TYPE_CALCULATOR, "group": GROUP_CONVERTER}]

    return converter_evaluator


def make_clipboard_evaluator(clipboard_history):
    def clipboard_evaluator(query):
        match = CLIP_COMMAND.match(query.strip())
        if not match:
            return None
        texts = clipboard_history.search_history(match.group(1) or "")
        if not texts:
            return None
        results = []
        for text in texts:
            first_line = text.splitlines()[0] if text else ""
            if len(first_line) > 80:
                first_line = first_line[:77] + "..."
            results.append(
                {
                    "name": first_line,
                    "fullpath": "",
                    "type": TYPE_CLIPBOARD,
                    "group": GROUP_CLIPBOARD,
                    "clipboard_text": text,
                }
            )
        return results

    return clipboard_evaluator


class FastPathChain:
    """按固定优先级尝试：网址 -> 计算器 -> 单位/货币 -> 剪贴板历史"""

    def __init__(self, unit_converter=None, clipboard_history=None):
        self.evaluators = [
            ("url", url_evaluator),
            ("calculator", calculator_evaluator),
            ("converter", make_converter_evaluator(unit_converter or UnitConverter())),
        ]
        if clipboard_history is not None:
            self.evaluators.append(("clipboard", make_clipboard_evaluator(clipboard_history)))

    def evaluate(self, query):
        for name, evaluator in self.evaluators:
            try:
                results = evaluator(query)
            except Exception as e:
                # a broken evaluator falls through to the next one
                logger.warning(f"快速路径 {name} 失败: {e}")
                continue
            if results:
                return results
        return None


__all__ = [
    "FastPathChain",
    "web_search_entry",
    "url_evaluator",
    "calculator_evaluator",
    "make_converter_evaluator",
    "make_clipboard_evaluator",
]
